import asyncio

import pytest

from golfbot.data_models.leaderboard import PlayerInfo, ScoreEntry
from golfbot.services.daily_leaderboard import DailyLeaderboardCalculator, compute_daily_leaderboard
from golfbot.utils.leaderboard_exceptions import InvalidDayError
from helpers import StaticSource, make_round, round_worth


def test_net_is_gross_minus_full_handicap(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=10)]
    snapshot = build_snapshot(players, make_round(1, 1, round_worth(20)))

    rows = compute_daily_leaderboard(1, snapshot)

    assert len(rows) == 1
    assert rows[0].gross_points == 20
    assert rows[0].net_points == 10
    assert rows[0].holes_played == 18
    assert rows[0].rank == 1


def test_competition_ranking_on_net_points(build_snapshot):
    players = [
        PlayerInfo(id=1, name="Ann", handicap=10),
        PlayerInfo(id=2, name="Bob", handicap=12),
        PlayerInfo(id=3, name="Cat", handicap=4),
    ]
    scores = (
        make_round(1, 1, round_worth(20))      # net 10
        + make_round(2, 1, round_worth(22))    # net 10
        + make_round(3, 1, round_worth(12))    # net 8
    )
    rows = compute_daily_leaderboard(1, build_snapshot(players, scores))

    assert [row.net_points for row in rows] == [10, 10, 8]
    assert [row.rank for row in rows] == [1, 1, 3]
    # ties stay in player id order
    assert [row.player_name for row in rows] == ["Ann", "Bob", "Cat"]


def test_player_without_scores_that_day_is_absent(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=10), PlayerInfo(id=2, name="Bob", handicap=5)]
    scores = make_round(1, 1, round_worth(20)) + make_round(2, 2, round_worth(20))

    rows = compute_daily_leaderboard(1, build_snapshot(players, scores))

    assert [row.player_id for row in rows] == [1]


def test_unplayed_holes_do_not_count_as_zero(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=3)]
    # nine pars on the front nine, back nine not entered
    scores = make_round(1, 1, [4] * 9)
    scores.append(ScoreEntry(player_id=1, day_num=1, hole_number=10, course_id=1, gross_score=None))

    row = compute_daily_leaderboard(1, build_snapshot(players, scores))[0]

    assert row.gross_points == 18
    assert row.holes_played == 9
    assert row.net_points == 15


def test_invalid_differential_is_skipped_not_zeroed(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=0)]
    # a birdie and a ten on a par four
    scores = make_round(1, 1, [3, 10])

    row = compute_daily_leaderboard(1, build_snapshot(players, scores))[0]

    assert row.gross_points == 4
    assert row.holes_played == 1


def test_inactive_players_are_ignored(build_snapshot):
    players = [PlayerInfo(id=1, name="Ann", handicap=0, active=False), PlayerInfo(id=2, name="Bob", handicap=0)]
    scores = make_round(1, 1, [4] * 18) + make_round(2, 1, [4] * 18)

    rows = compute_daily_leaderboard(1, build_snapshot(players, scores))

    assert [row.player_name for row in rows] == ["Bob"]


def test_no_players_yields_empty_leaderboard(build_snapshot):
    assert compute_daily_leaderboard(2, build_snapshot([], [])) == []


def test_day_outside_tournament_rejected(build_snapshot):
    with pytest.raises(InvalidDayError):
        compute_daily_leaderboard(4, build_snapshot([], []))
    with pytest.raises(InvalidDayError):
        DailyLeaderboardCalculator(StaticSource(None), 0)


def test_refresh_is_idempotent(build_snapshot):
    players = [PlayerInfo(id=i, name=f"P{i}", handicap=i) for i in range(1, 6)]
    scores = []
    for player in players:
        scores += make_round(player.id, 1, round_worth(2 * (10 + player.id % 3)))
    source = StaticSource(build_snapshot(players, scores))
    calculator = DailyLeaderboardCalculator(source, 1)

    first = asyncio.run(calculator.refresh())
    second = asyncio.run(calculator.refresh())

    assert first == second
    assert calculator.rows() == second
    assert calculator.days_with_scores() == frozenset({1})
    assert source.loads == 2
