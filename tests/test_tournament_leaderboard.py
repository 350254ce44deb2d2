import asyncio

import pytest

from golfbot.data_models.leaderboard import PlayerInfo, TournamentContext
from golfbot.services.tournament_leaderboard import (
    TournamentLeaderboardCalculator, compute_tournament_leaderboard, partition_by_cut,
    resolve_context, two_day_cut_score
)
from golfbot.utils.leaderboard_exceptions import InvalidTournamentContextError
from helpers import StaticSource, make_round, round_worth


MOSLEY = TournamentContext.MOSLEY_OPEN
TWISTED = TournamentContext.TWISTED_CREEK


@pytest.fixture
def field(build_snapshot):
    """Four players over two days with cut scores 8, 4, 16 and -2."""
    players = [
        PlayerInfo(id=1, name="Ann", handicap=10),
        PlayerInfo(id=2, name="Bob", handicap=20),
        PlayerInfo(id=3, name="Cat", handicap=16),
        PlayerInfo(id=4, name="Dan", handicap=30),
    ]
    scores = (
        make_round(1, 1, round_worth(20)) + make_round(1, 2, round_worth(20))    # (20-16)*2 = 8
        + make_round(2, 1, round_worth(22)) + make_round(2, 2, round_worth(22))  # (22-20)*2 = 4
        + make_round(3, 1, round_worth(24)) + make_round(3, 2, round_worth(24))  # (24-16)*2 = 16
        + make_round(4, 1, round_worth(28)) + make_round(4, 2, round_worth(30))  # -2 + 0 = -2
    )
    return build_snapshot(players, scores)


def test_handicap_rule_per_context(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=10)]
    snapshot = build_snapshot(players, make_round(1, 1, round_worth(20)))

    twisted = compute_tournament_leaderboard(TWISTED, 0, False, snapshot)[0]
    mosley = compute_tournament_leaderboard(MOSLEY, 0, False, snapshot)[0]

    assert twisted.daily_gross_points == {1: 20}
    assert twisted.daily_net_points == {1: 10}
    assert twisted.total_net_points == 10
    assert mosley.daily_net_points == {1: 4}
    assert mosley.total_net_points == 4


def test_high_handicap_uses_own_handicap_in_mosley(build_snapshot):
    players = [PlayerInfo(id=1, name="Bob", handicap=20)]
    snapshot = build_snapshot(players, make_round(1, 1, round_worth(22)))

    assert compute_tournament_leaderboard(MOSLEY, 0, False, snapshot)[0].total_net_points == 2


def test_cut_score_only_uses_first_two_days(build_snapshot):
    player = PlayerInfo(id=1, name="Ann", handicap=10)
    scores = (
        make_round(1, 1, round_worth(20))
        + make_round(1, 2, round_worth(18))
        + make_round(1, 3, round_worth(36))
    )
    snapshot = build_snapshot([player], scores)

    assert two_day_cut_score(player, snapshot) == (20 - 16) + (18 - 16)
    row = compute_tournament_leaderboard(TWISTED, 0, False, snapshot)[0]
    assert row.two_day_cut_score == 6
    assert row.total_net_points == (20 - 10) + (18 - 10) + (36 - 10)


def test_cut_score_skips_days_not_played(build_snapshot):
    player = PlayerInfo(id=1, name="Ann", handicap=10)
    snapshot = build_snapshot([player], make_round(1, 2, round_worth(20)))

    assert two_day_cut_score(player, snapshot) == 4


def test_no_cut_shows_full_field_in_both_contexts(field):
    for context in TournamentContext:
        rows = compute_tournament_leaderboard(context, 100, False, field)
        assert sorted(row.player_id for row in rows) == [1, 2, 3, 4]
        assert not any(row.made_cut for row in rows)


def test_applied_cut_partitions_field(field):
    brackets = partition_by_cut(8, True, field)

    mosley_ids = {row.player_id for row in brackets[MOSLEY]}
    twisted_ids = {row.player_id for row in brackets[TWISTED]}

    # the line itself makes the cut
    assert mosley_ids == {1, 3}
    assert twisted_ids == {2, 4}
    assert mosley_ids.isdisjoint(twisted_ids)
    assert mosley_ids | twisted_ids == set(field.players)
    assert all(row.made_cut for row in brackets[MOSLEY])
    assert not any(row.made_cut for row in brackets[TWISTED])


@pytest.mark.parametrize("cut_line", [-50, -2, 0, 4, 5, 16, 17, 200])
def test_cut_exclusivity_for_any_line(field, cut_line):
    brackets = partition_by_cut(cut_line, True, field)
    mosley_ids = [row.player_id for row in brackets[MOSLEY]]
    twisted_ids = [row.player_id for row in brackets[TWISTED]]

    assert sorted(mosley_ids + twisted_ids) == [1, 2, 3, 4]


def test_mosley_bracket_ranked_by_mosley_totals(field):
    rows = compute_tournament_leaderboard(MOSLEY, 8, True, field)

    assert [(row.rank, row.player_name, row.total_net_points) for row in rows] == [
        (1, "Cat", 16),
        (2, "Ann", 8),
    ]


def test_twisted_bracket_ranked_by_real_handicap(field):
    rows = compute_tournament_leaderboard(TWISTED, 8, True, field)

    # Bob: (22-20)*2 = 4, Dan: (28-30) + (30-30) = -2
    assert [(row.rank, row.player_name, row.total_net_points) for row in rows] == [
        (1, "Bob", 4),
        (2, "Dan", -2),
    ]


def test_player_without_scores_listed_with_empty_days(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=10), PlayerInfo(id=2, name="Eve", handicap=8)]
    snapshot = build_snapshot(players, make_round(1, 1, round_worth(20)))

    rows = compute_tournament_leaderboard(TWISTED, 0, False, snapshot)
    eve = next(row for row in rows if row.player_name == "Eve")

    assert eve.daily_net_points == {}
    assert eve.total_net_points == 0
    assert eve.two_day_cut_score == 0


def test_ties_share_rank(build_snapshot):
    players = [
        PlayerInfo(id=1, name="Ann", handicap=10),
        PlayerInfo(id=2, name="Bob", handicap=12),
        PlayerInfo(id=3, name="Cat", handicap=4),
    ]
    scores = (
        make_round(1, 1, round_worth(20))
        + make_round(2, 1, round_worth(22))
        + make_round(3, 1, round_worth(12))
    )
    rows = compute_tournament_leaderboard(TWISTED, 0, False, build_snapshot(players, scores))

    assert [row.rank for row in rows] == [1, 1, 3]


def test_context_names_resolve():
    assert resolve_context("Mosley Open") is MOSLEY
    assert resolve_context("twisted_creek") is TWISTED
    assert resolve_context("TWISTED-CREEK") is TWISTED
    with pytest.raises(InvalidTournamentContextError):
        resolve_context("augusta")


def test_setters_apply_on_next_refresh(field):
    calculator = TournamentLeaderboardCalculator(StaticSource(field))
    asyncio.run(calculator.refresh())
    assert len(calculator.rows()) == 4

    calculator.set_cut_line_score(8)
    calculator.set_is_cut_applied(True)
    calculator.set_tournament_context(TWISTED)
    # nothing recomputed yet
    assert len(calculator.rows()) == 4

    rows = asyncio.run(calculator.refresh())
    assert [row.player_name for row in rows] == ["Bob", "Dan"]
    assert calculator.days_with_scores() == frozenset({1, 2})


def test_empty_field(build_snapshot):
    assert compute_tournament_leaderboard(MOSLEY, 0, True, build_snapshot([], [])) == []


def test_returned_rows_cannot_change_stored_results(field):
    calculator = TournamentLeaderboardCalculator(StaticSource(field), context=TWISTED)
    rows = asyncio.run(calculator.refresh())

    with pytest.raises(TypeError):
        rows[0].daily_net_points[1] = 999
    with pytest.raises(TypeError):
        calculator.rows()[0].daily_gross_points[3] = 50
    rows.clear()

    stored = calculator.rows()
    assert len(stored) == 4
    assert 999 not in stored[0].daily_net_points.values()
    assert 3 not in stored[0].daily_gross_points
