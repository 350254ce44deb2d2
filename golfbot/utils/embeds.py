"""
Shared embed builders for the leaderboard cogs.
"""

from typing import Any, Iterable, Optional, Sequence

import discord

from golfbot.constants import UIConstants
from golfbot.utils.leaderboard_table import Column, render_text_table


def build_leaderboard_embed(title: str, rows: Sequence[Any], columns: Sequence[Column],
                            days_with_scores: Iterable[int], footer: Optional[str] = None) -> discord.Embed:
    """Build a leaderboard embed with the table in a code block."""
    color = UIConstants.GOLD_RANK_COLOR if rows else UIConstants.DEFAULT_EMBED_COLOR
    embed = discord.Embed(
        title=f"{UIConstants.TROPHY_EMOJI} {title}",
        color=color
    )
    table = render_text_table(rows, columns, days_with_scores)
    embed.description = f"```\n{table}\n```"
    
    leaders = [row for row in rows if row.rank == 1]
    if leaders:
        names = ", ".join(getattr(row, "player_name", None) or getattr(row, "team_name") for row in leaders)
        embed.add_field(name=f"{UIConstants.FLAG_EMOJI} Leading", value=names, inline=False)
    
    if footer:
        embed.set_footer(text=footer)
    return embed
