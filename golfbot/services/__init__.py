"""
Services package for the golf tournament bot.

Leaderboard calculators and persisted tournament settings.
"""

from .base import BaseService, LeaderboardCalculator
from .daily_leaderboard import DailyLeaderboardCalculator, compute_daily_leaderboard
from .tournament_leaderboard import TournamentLeaderboardCalculator, compute_tournament_leaderboard
from .team_leaderboard import TeamLeaderboardCalculator, compute_team_leaderboard
from .tournament_settings import TournamentSettingsService, CutSettings

__all__ = [
    'BaseService',
    'LeaderboardCalculator',
    'DailyLeaderboardCalculator',
    'compute_daily_leaderboard',
    'TournamentLeaderboardCalculator',
    'compute_tournament_leaderboard',
    'TeamLeaderboardCalculator',
    'compute_team_leaderboard',
    'TournamentSettingsService',
    'CutSettings',
]
