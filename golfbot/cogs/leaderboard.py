import io
import discord
from discord import app_commands
from discord.ext import commands
from typing import Literal
from golfbot.data_models.leaderboard import TournamentContext
from golfbot.services.daily_leaderboard import DailyLeaderboardCalculator
from golfbot.services.team_leaderboard import TeamLeaderboardCalculator
from golfbot.services.tournament_leaderboard import TournamentLeaderboardCalculator
from golfbot.utils.embeds import build_leaderboard_embed
from golfbot.utils.error_embeds import ErrorEmbeds
from golfbot.utils.leaderboard_exceptions import LeaderboardException
from golfbot.utils.leaderboard_table import daily_columns, tournament_columns, team_columns, export_csv
from golfbot.utils.logger import setup_logger

logger = setup_logger(__name__)

CONTEXT_CHOICES = {
    "mosley": TournamentContext.MOSLEY_OPEN,
    "twisted": TournamentContext.TWISTED_CREEK,
}

class LeaderboardCog(commands.Cog):
    """Daily, tournament and team leaderboards. Every command recomputes from the database."""

    def __init__(self, bot):
        self.bot = bot

    async def _tournament_calculator(self, context: TournamentContext) -> TournamentLeaderboardCalculator:
        settings = await self.bot.settings_service.load()
        return TournamentLeaderboardCalculator(
            self.bot.db,
            context=context,
            cut_line_score=settings.cut_line_score,
            is_cut_applied=settings.is_cut_applied
        )

    @app_commands.command(name="leaderboard-daily", description="View the individual leaderboard for one day")
    @app_commands.describe(day="Tournament day (1-3)")
    async def leaderboard_daily(self, interaction: discord.Interaction, day: app_commands.Range[int, 1, 3]):
        """Display one day's net Stableford leaderboard."""
        await interaction.response.defer()

        try:
            calculator = DailyLeaderboardCalculator(self.bot.db, day)
            rows = await calculator.refresh()
            if not rows:
                await interaction.followup.send(embed=ErrorEmbeds.no_scores())
                return

            embed = build_leaderboard_embed(
                f"Day {day} Leaderboard", rows, daily_columns(day), calculator.days_with_scores(),
                footer=f"{len(rows)} players | Net = gross points - handicap"
            )
            await interaction.followup.send(embed=embed)

        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.from_exception(e))
        except Exception as e:
            logger.error(f"Error in daily leaderboard command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("Could not calculate the daily leaderboard."))

    @app_commands.command(name="leaderboard-tournament", description="View the overall tournament leaderboard")
    @app_commands.describe(bracket="Mosley Open (made the cut) or Twisted Creek")
    async def leaderboard_tournament(self, interaction: discord.Interaction,
                                     bracket: Literal["mosley", "twisted"] = "mosley"):
        """Display the three-day leaderboard for one bracket."""
        await interaction.response.defer()

        try:
            context = CONTEXT_CHOICES[bracket]
            calculator = await self._tournament_calculator(context)
            rows = await calculator.refresh()
            if not rows:
                await interaction.followup.send(embed=ErrorEmbeds.no_scores())
                return

            if calculator.is_cut_applied:
                footer = f"Cut applied at {calculator.cut_line_score} (2-day Mosley net)"
            else:
                footer = "No cut applied"
            embed = build_leaderboard_embed(
                f"{context.display_name} Leaderboard", rows, tournament_columns(),
                calculator.days_with_scores(), footer=footer
            )
            await interaction.followup.send(embed=embed)

        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.from_exception(e))
        except Exception as e:
            logger.error(f"Error in tournament leaderboard command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("Could not calculate the tournament leaderboard."))

    @app_commands.command(name="leaderboard-teams", description="View the team leaderboard")
    async def leaderboard_teams(self, interaction: discord.Interaction):
        """Display the best-scores team leaderboard."""
        await interaction.response.defer()

        try:
            calculator = TeamLeaderboardCalculator(self.bot.db)
            rows = await calculator.refresh()
            if not rows:
                await interaction.followup.send(embed=ErrorEmbeds.no_scores())
                return

            embed = build_leaderboard_embed(
                "Team Leaderboard", rows, team_columns(), calculator.days_with_scores(),
                footer=f"{len(rows)} teams"
            )
            await interaction.followup.send(embed=embed)

        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.from_exception(e))
        except Exception as e:
            logger.error(f"Error in team leaderboard command: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("Could not calculate the team leaderboard."))

    @app_commands.command(name="leaderboard-export", description="Download a leaderboard as CSV")
    @app_commands.describe(board="Which leaderboard to export", day="Day for the daily leaderboard")
    async def leaderboard_export(self, interaction: discord.Interaction,
                                 board: Literal["daily", "mosley", "twisted", "teams"],
                                 day: app_commands.Range[int, 1, 3] = 1):
        """Send a leaderboard as a CSV attachment."""
        await interaction.response.defer()

        try:
            if board == "daily":
                calculator = DailyLeaderboardCalculator(self.bot.db, day)
                columns = daily_columns(day)
                filename = f"day_{day}_leaderboard.csv"
            elif board == "teams":
                calculator = TeamLeaderboardCalculator(self.bot.db)
                columns = team_columns()
                filename = "team_leaderboard.csv"
            else:
                context = CONTEXT_CHOICES[board]
                calculator = await self._tournament_calculator(context)
                columns = tournament_columns()
                filename = f"{context.value}_leaderboard.csv"

            rows = await calculator.refresh()
            content = export_csv(rows, columns, calculator.days_with_scores())
            file = discord.File(io.BytesIO(content.encode("utf-8")), filename=filename)
            await interaction.followup.send(content=f"📄 {len(rows)} rows exported.", file=file)

        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.from_exception(e))
        except Exception as e:
            logger.error(f"Error exporting {board} leaderboard: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.command_error("Could not export the leaderboard."))

async def setup(bot):
    await bot.add_cog(LeaderboardCog(bot))
