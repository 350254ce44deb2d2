import discord
from discord.ext import commands
from discord import app_commands
from typing import Optional
from golfbot.config import Config
from golfbot.constants import UIConstants
from golfbot.utils.error_embeds import ErrorEmbeds
from golfbot.utils.course_layout import parse_course_layout
from golfbot.utils.leaderboard_exceptions import (
    LeaderboardException, PlayerNotFoundError, CourseValidationError, TeamNotFoundError
)
from golfbot.utils.logger import setup_logger

logger = setup_logger(__name__)

class AdminCog(commands.Cog):
    """Owner-only commands for running the tournament"""

    def __init__(self, bot):
        self.bot = bot

    def cog_check(self, ctx):
        """Check if user is the bot owner"""
        return ctx.author.id == Config.OWNER_DISCORD_ID

    @commands.command(name='shutdown')
    async def shutdown_bot(self, ctx):
        """Shutdown the bot (Owner only)"""
        await ctx.send("🔴 Shutting down Golf Tournament Bot...")
        await self.bot.close()

    @app_commands.command(name="admin-apply-cut", description="[Owner] Split the field at a two-day Mosley net score")
    @app_commands.describe(score="Minimum two-day Mosley Open net score to make the cut")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def apply_cut(self, interaction: discord.Interaction, score: int):
        try:
            settings = await self.bot.settings_service.apply_cut(score)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        logger.info(f"Cut applied at {settings.cut_line_score} by {interaction.user}")
        embed = discord.Embed(
            title=f"{UIConstants.SCISSORS_EMOJI} Cut Applied",
            description=(
                f"Players on **{settings.cut_line_score}** or better stay in the Mosley Open.\n"
                "Everyone else moves to the Twisted Creek."
            ),
            color=UIConstants.SUCCESS_COLOR
        )
        await interaction.response.send_message(embed=embed)

    @app_commands.command(name="admin-clear-cut", description="[Owner] Remove the cut so both brackets show the full field")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def clear_cut(self, interaction: discord.Interaction):
        settings = await self.bot.settings_service.clear_cut()
        logger.info(f"Cut cleared by {interaction.user}")
        embed = discord.Embed(
            title="Cut Cleared",
            description=f"Both brackets show the full field. Cut line kept at {settings.cut_line_score}.",
            color=UIConstants.SUCCESS_COLOR
        )
        await interaction.response.send_message(embed=embed)

    async def _resolve_player(self, name: str):
        player = await self.bot.db.get_player_by_name(name)
        if player is None:
            raise PlayerNotFoundError(name)
        return player

    async def _resolve_course(self, name: str):
        course = await self.bot.db.get_course_by_name(name)
        if course is None:
            raise CourseValidationError(name, "no course with that name")
        return course

    async def _resolve_team(self, name: str):
        team = await self.bot.db.get_team_by_name(name)
        if team is None:
            raise TeamNotFoundError(name)
        return team

    @app_commands.command(name="admin-add-player", description="[Owner] Register a player")
    @app_commands.describe(name="Player name", handicap="Playing handicap")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def add_player(self, interaction: discord.Interaction, name: str, handicap: int = 0):
        if await self.bot.db.get_player_by_name(name) is not None:
            await interaction.response.send_message(
                embed=ErrorEmbeds.invalid_input(f"A player named **{name}** already exists."), ephemeral=True
            )
            return

        player = await self.bot.db.create_player(name, handicap=handicap)
        logger.info(f"Player {player.name} (handicap {player.handicap}) added by {interaction.user}")
        await interaction.response.send_message(
            f"✅ Added {player.name} with handicap {player.handicap}.", ephemeral=True
        )

    @app_commands.command(name="admin-set-active", description="[Owner] Include or exclude a player from the leaderboards")
    @app_commands.describe(player="Player name", active="Whether the player counts on the leaderboards")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def set_active(self, interaction: discord.Interaction, player: str, active: bool):
        try:
            db_player = await self._resolve_player(player)
            await self.bot.db.set_player_active(db_player.id, active)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        state = "active" if active else "inactive"
        logger.info(f"Player {db_player.name} set {state} by {interaction.user}")
        await interaction.response.send_message(f"✅ {db_player.name} is now {state}.", ephemeral=True)

    @app_commands.command(name="admin-add-course", description="[Owner] Create a course with its 18 holes")
    @app_commands.describe(
        name="Course name",
        pars="18 pars in hole order, separated by spaces or commas",
        indexes="18 handicap indexes (1 = hardest) in hole order"
    )
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def add_course(self, interaction: discord.Interaction, name: str, pars: str, indexes: str):
        try:
            if await self.bot.db.get_course_by_name(name) is not None:
                raise CourseValidationError(name, "a course with that name already exists")
            layout = parse_course_layout(name, pars, indexes)
            course = await self.bot.db.create_course(name, layout)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        total_par = sum(par for par, _ in layout)
        logger.info(f"Course {course.name} added by {interaction.user}")
        await interaction.response.send_message(f"✅ Added {course.name} (par {total_par}).", ephemeral=True)

    @app_commands.command(name="admin-add-team", description="[Owner] Create a team")
    @app_commands.describe(name="Team name")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def add_team(self, interaction: discord.Interaction, name: str):
        if await self.bot.db.get_team_by_name(name) is not None:
            await interaction.response.send_message(
                embed=ErrorEmbeds.invalid_input(f"A team named **{name}** already exists."), ephemeral=True
            )
            return

        team = await self.bot.db.create_team(name)
        logger.info(f"Team {team.name} added by {interaction.user}")
        await interaction.response.send_message(f"✅ Added team {team.name}.", ephemeral=True)

    @app_commands.command(name="admin-assign-team", description="[Owner] Put a player on a team")
    @app_commands.describe(player="Player name", team="Team name, leave empty to remove the player from their team")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def assign_team(self, interaction: discord.Interaction, player: str, team: Optional[str] = None):
        try:
            db_player = await self._resolve_player(player)
            db_team = await self._resolve_team(team) if team else None
            await self.bot.db.assign_player_to_team(db_player.id, db_team.id if db_team else None)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        destination = db_team.name if db_team else "no team"
        logger.info(f"Player {db_player.name} moved to {destination} by {interaction.user}")
        await interaction.response.send_message(f"✅ {db_player.name} is now on {destination}.", ephemeral=True)

    @app_commands.command(name="admin-clear-scores", description="[Owner] Delete every score for one day on one course")
    @app_commands.describe(course="Course name", day="Tournament day (1-3)")
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def clear_scores(self, interaction: discord.Interaction, course: str, day: app_commands.Range[int, 1, 3]):
        try:
            db_course = await self._resolve_course(course)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        removed = await self.bot.db.clear_scores(day, db_course.id)
        logger.info(f"{removed} scores cleared for day {day} at {db_course.name} by {interaction.user}")
        await interaction.response.send_message(
            f"🗑️ Removed {removed} scores for day {day} at {db_course.name}.", ephemeral=True
        )

    @app_commands.command(name="admin-record-score", description="[Owner] Record a player's strokes on a hole")
    @app_commands.describe(
        player="Player name",
        course="Course name",
        day="Tournament day (1-3)",
        hole="Hole number (1-18)",
        strokes="Gross strokes, leave empty to clear the hole"
    )
    @app_commands.check(lambda interaction: interaction.user.id == Config.OWNER_DISCORD_ID)
    async def record_score(self, interaction: discord.Interaction, player: str, course: str,
                           day: app_commands.Range[int, 1, 3], hole: app_commands.Range[int, 1, 18],
                           strokes: Optional[int] = None):
        try:
            db_player = await self._resolve_player(player)
            db_course = await self._resolve_course(course)

            await self.bot.db.record_score(db_player.id, db_course.id, day, hole, strokes)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return
        except Exception as e:
            logger.error(f"Failed to record score: {e}", exc_info=True)
            await interaction.response.send_message(embed=ErrorEmbeds.database_error(), ephemeral=True)
            return

        shown = strokes if strokes is not None else "cleared"
        await interaction.response.send_message(
            f"✅ {db_player.name}: day {day}, hole {hole} at {db_course.name} -> {shown}",
            ephemeral=True
        )

async def setup(bot):
    await bot.add_cog(AdminCog(bot))
