"""
Team leaderboard.

Each hole counts the best K member scores, where K is one less than the size
of the largest team (never below 1). K is fixed once for the whole field, so
a team smaller than the largest may count every member. Member scores here
use per-hole stroke allocation, not the once-per-day handicap subtraction of
the individual leaderboards.
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import List, Sequence

from golfbot.constants import TournamentConstants
from golfbot.data_models.leaderboard import TeamInfo, TeamLeaderboardRow, TournamentSnapshot
from golfbot.services.base import LeaderboardCalculator
from golfbot.utils.ranking import RankingUtility
from golfbot.utils.stableford import ScoringEngine

logger = logging.getLogger(__name__)


def scores_to_take(teams: Sequence[TeamInfo]) -> int:
    """K for the whole field: largest team size minus one, at least 1."""
    largest = max((len(team.members) for team in teams), default=0)
    return largest - 1 if largest > 1 else 1


def best_scores_sum(scores: Sequence[int], take: int) -> int:
    return sum(sorted(scores, reverse=True)[:take])


def team_score_for_hole(team: TeamInfo, day_num: int, hole_number: int,
                        take: int, snapshot: TournamentSnapshot) -> int:
    member_points = []
    for member in team.members:
        points = ScoringEngine.net_stableford_for_hole(member, day_num, hole_number, snapshot)
        if points is not None:
            member_points.append(points)
    return best_scores_sum(member_points, take)


def compute_team_leaderboard(snapshot: TournamentSnapshot) -> List[TeamLeaderboardRow]:
    """Rank every team by total points across all three days."""
    if not snapshot.players or not snapshot.holes:
        logger.warning("Team leaderboard: not enough data to calculate (players or hole details missing)")
        return []
    if not snapshot.teams:
        return []

    take = scores_to_take(snapshot.teams)
    logger.debug(f"Team leaderboard counting best {take} scores per hole")

    unranked = []
    for team in snapshot.teams:
        daily_points = {}
        for day_num in TournamentConstants.DAYS:
            daily_points[day_num] = sum(
                team_score_for_hole(team, day_num, hole_number, take, snapshot)
                for hole_number in TournamentConstants.HOLES
            )
        unranked.append(TeamLeaderboardRow(
            rank=0,
            team_id=team.id,
            team_name=team.name,
            daily_points=MappingProxyType(daily_points),
            overall_points=sum(daily_points.values()),
            members=tuple(member.name for member in team.members),
        ))

    ranked = RankingUtility.competition_rank(unranked, key=lambda row: row.overall_points)
    return [replace(row, rank=rank) for rank, row in ranked]


class TeamLeaderboardCalculator(LeaderboardCalculator[TeamLeaderboardRow]):
    """Team best-ball leaderboard."""

    def calculate(self, snapshot: TournamentSnapshot) -> List[TeamLeaderboardRow]:
        return compute_team_leaderboard(snapshot)
