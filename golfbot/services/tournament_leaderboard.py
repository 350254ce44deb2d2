"""
Three-day individual leaderboard with the cut.

After two rounds the field can be split: players whose two-day score under
Mosley Open rules reaches the cut line stay in the Mosley Open, everyone else
plays on in the Twisted Creek. Until a cut is applied both brackets show the
whole field.

Two handicap rules are in play:
- Mosley Open subtracts max(16, handicap) from each day's gross points.
- Twisted Creek subtracts the player's own handicap.
The cut score always uses the Mosley Open rule, whichever bracket is shown.
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Union

from golfbot.constants import TournamentConstants
from golfbot.data_models.leaderboard import (
    PlayerInfo, TournamentContext, TournamentLeaderboardRow, TournamentSnapshot
)
from golfbot.services.base import LeaderboardCalculator, SnapshotSource
from golfbot.utils.leaderboard_exceptions import InvalidTournamentContextError
from golfbot.utils.ranking import RankingUtility
from golfbot.utils.stableford import ScoringEngine

logger = logging.getLogger(__name__)


def resolve_context(context: Union[TournamentContext, str]) -> TournamentContext:
    """Accept an enum member, its value or its display name."""
    if isinstance(context, TournamentContext):
        return context
    normalized = str(context).strip().lower().replace(" ", "_").replace("-", "_")
    for member in TournamentContext:
        if normalized in (member.value, member.name.lower()):
            return member
    raise InvalidTournamentContextError(str(context))


def handicap_for_context(player: PlayerInfo, context: TournamentContext) -> int:
    if context is TournamentContext.MOSLEY_OPEN:
        return ScoringEngine.mosley_handicap(player.handicap)
    return player.handicap


def two_day_cut_score(player: PlayerInfo, snapshot: TournamentSnapshot) -> int:
    """Net points over the cut days, always under Mosley Open rules."""
    total = 0
    for day_num in TournamentConstants.CUT_DAYS:
        if not snapshot.has_scores(player.id, day_num):
            continue
        gross_points, _ = ScoringEngine.gross_stableford_for_day(player, day_num, snapshot)
        total += gross_points - ScoringEngine.mosley_handicap(player.handicap)
    return total


def made_cut(cut_score: int, cut_line_score: int, is_cut_applied: bool) -> bool:
    return is_cut_applied and cut_score >= cut_line_score


def include_in_context(context: TournamentContext, player_made_cut: bool, is_cut_applied: bool) -> bool:
    """Whole field without a cut; otherwise the made-cut group goes to Mosley Open only."""
    if not is_cut_applied:
        return True
    if context is TournamentContext.MOSLEY_OPEN:
        return player_made_cut
    return not player_made_cut


def _build_row(player: PlayerInfo, context: TournamentContext, cut_score: int,
               player_made_cut: bool, snapshot: TournamentSnapshot) -> TournamentLeaderboardRow:
    daily_gross: Dict[int, int] = {}
    daily_net: Dict[int, int] = {}
    subtract = handicap_for_context(player, context)
    for day_num in TournamentConstants.DAYS:
        if not snapshot.has_scores(player.id, day_num):
            continue
        gross_points, _ = ScoringEngine.gross_stableford_for_day(player, day_num, snapshot)
        daily_gross[day_num] = gross_points
        daily_net[day_num] = gross_points - subtract

    return TournamentLeaderboardRow(
        rank=0,
        player_id=player.id,
        player_name=player.name,
        handicap=player.handicap,
        daily_gross_points=MappingProxyType(daily_gross),
        daily_net_points=MappingProxyType(daily_net),
        total_net_points=sum(daily_net.values()),
        two_day_cut_score=cut_score,
        made_cut=player_made_cut,
    )


def compute_tournament_leaderboard(
    context: Union[TournamentContext, str],
    cut_line_score: int,
    is_cut_applied: bool,
    snapshot: TournamentSnapshot
) -> List[TournamentLeaderboardRow]:
    """
    Rank the players who belong to ``context``.

    Args:
        context: Which bracket to compute
        cut_line_score: Minimum two-day Mosley Open score to make the cut
        is_cut_applied: Whether the field has been split
        snapshot: Players, holes and scores for this refresh

    Returns:
        Ranked rows, highest total net points first
    """
    context = resolve_context(context)
    if not snapshot.players:
        logger.info(f"{context.display_name}: no active players, leaderboard is empty")
        return []

    unranked = []
    for player in snapshot.players.values():
        cut_score = two_day_cut_score(player, snapshot)
        player_made_cut = made_cut(cut_score, cut_line_score, is_cut_applied)
        if not include_in_context(context, player_made_cut, is_cut_applied):
            continue
        unranked.append(_build_row(player, context, cut_score, player_made_cut, snapshot))

    if is_cut_applied:
        logger.info(
            f"{context.display_name}: {len(unranked)} of {len(snapshot.players)} players "
            f"after cut at {cut_line_score}"
        )

    ranked = RankingUtility.competition_rank(unranked, key=lambda row: row.total_net_points)
    return [replace(row, rank=rank) for rank, row in ranked]


def partition_by_cut(
    cut_line_score: int,
    is_cut_applied: bool,
    snapshot: TournamentSnapshot
) -> Dict[TournamentContext, List[TournamentLeaderboardRow]]:
    """Both brackets from the same snapshot."""
    return {
        context: compute_tournament_leaderboard(context, cut_line_score, is_cut_applied, snapshot)
        for context in TournamentContext
    }


class TournamentLeaderboardCalculator(LeaderboardCalculator[TournamentLeaderboardRow]):
    """
    Stateful wrapper around compute_tournament_leaderboard.

    Context and cut settings changed through the setters are picked up by the
    next refresh; rows already computed are left alone.
    """

    def __init__(self, source: SnapshotSource,
                 context: Union[TournamentContext, str] = TournamentContext.MOSLEY_OPEN,
                 cut_line_score: int = 0, is_cut_applied: bool = False):
        super().__init__(source)
        self.context = resolve_context(context)
        self.cut_line_score = cut_line_score
        self.is_cut_applied = is_cut_applied

    def set_tournament_context(self, context: Union[TournamentContext, str]):
        self.context = resolve_context(context)

    def set_cut_line_score(self, score: int):
        self.cut_line_score = score

    def set_is_cut_applied(self, applied: bool):
        self.is_cut_applied = applied

    def calculate(self, snapshot: TournamentSnapshot) -> List[TournamentLeaderboardRow]:
        return compute_tournament_leaderboard(
            self.context, self.cut_line_score, self.is_cut_applied, snapshot
        )
