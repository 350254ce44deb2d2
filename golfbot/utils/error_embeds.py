"""
Centralized error embeds for consistent error handling across the golf bot.
"""

import discord

from golfbot.utils.leaderboard_exceptions import LeaderboardException


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""
    
    @staticmethod
    def command_error(error: str) -> discord.Embed:
        """Create embed for general command errors."""
        return discord.Embed(
            title="Command Error",
            description=f"An error occurred: {error}\n\nPlease try again or contact an administrator.",
            color=discord.Color.red()
        )
    
    @staticmethod
    def invalid_input(message: str) -> discord.Embed:
        """Create embed for invalid user input."""
        return discord.Embed(
            title="Invalid Input",
            description=message,
            color=discord.Color.red()
        )
    
    @staticmethod
    def from_exception(error: LeaderboardException) -> discord.Embed:
        """Create embed from a leaderboard exception's user-facing message."""
        return ErrorEmbeds.invalid_input(error.user_message)
    
    @staticmethod
    def no_scores() -> discord.Embed:
        """Create embed for a leaderboard with nothing to show."""
        return discord.Embed(
            title="No Scores Yet",
            description="Nobody has posted a score for this leaderboard yet.",
            color=discord.Color.orange()
        )
    
    @staticmethod
    def database_error() -> discord.Embed:
        """Create embed for database-related errors."""
        return discord.Embed(
            title="Database Error",
            description="A database error occurred. Please try again later or contact an administrator.",
            color=discord.Color.red()
        )
