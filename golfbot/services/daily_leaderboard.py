"""
Daily individual leaderboard.

Net points for a day are the player's gross Stableford points minus their
full handicap, subtracted once for the round rather than hole by hole.
"""

import logging
from dataclasses import replace
from typing import List

from golfbot.constants import TournamentConstants
from golfbot.data_models.leaderboard import DailyLeaderboardRow, TournamentSnapshot
from golfbot.services.base import LeaderboardCalculator, SnapshotSource
from golfbot.utils.leaderboard_exceptions import InvalidDayError
from golfbot.utils.ranking import RankingUtility
from golfbot.utils.stableford import ScoringEngine

logger = logging.getLogger(__name__)


def compute_daily_leaderboard(day_num: int, snapshot: TournamentSnapshot) -> List[DailyLeaderboardRow]:
    """Rank every active player who has at least one score on ``day_num``."""
    if day_num not in TournamentConstants.DAYS:
        raise InvalidDayError(day_num)

    if not snapshot.players:
        logger.info(f"Day {day_num}: no active players, leaderboard is empty")
        return []

    unranked = []
    for player in snapshot.players.values():
        if not snapshot.has_scores(player.id, day_num):
            continue
        gross_points, holes_counted = ScoringEngine.gross_stableford_for_day(player, day_num, snapshot)
        unranked.append(DailyLeaderboardRow(
            rank=0,
            player_id=player.id,
            player_name=player.name,
            handicap=player.handicap,
            gross_points=gross_points,
            net_points=gross_points - player.handicap,
            holes_played=holes_counted,
        ))

    ranked = RankingUtility.competition_rank(unranked, key=lambda row: row.net_points)
    return [replace(row, rank=rank) for rank, row in ranked]


class DailyLeaderboardCalculator(LeaderboardCalculator[DailyLeaderboardRow]):
    """Leaderboard for a single tournament day."""

    def __init__(self, source: SnapshotSource, day_num: int):
        if day_num not in TournamentConstants.DAYS:
            raise InvalidDayError(day_num)
        super().__init__(source)
        self.day_num = day_num

    def calculate(self, snapshot: TournamentSnapshot) -> List[DailyLeaderboardRow]:
        return compute_daily_leaderboard(self.day_num, snapshot)
