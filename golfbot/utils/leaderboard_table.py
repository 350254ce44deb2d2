"""
Column schemas for rendering leaderboard rows as tables.

Each leaderboard declares its columns once (header plus accessor); the same
schema drives the Discord text table and the CSV export. Columns tied to a
tournament day are hidden when nobody has scores for that day.
"""

import csv
import io
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence

from golfbot.constants import TournamentConstants, UIConstants


@dataclass(frozen=True)
class Column:
    header: str
    accessor: Callable[[Any], Any]
    day: Optional[int] = None
    width: int = 6


def daily_columns(day_num: int) -> List[Column]:
    return [
        Column("Rank", lambda row: row.rank, width=4),
        Column("Player", lambda row: row.player_name, width=UIConstants.MAX_NAME_WIDTH),
        Column("Hcp", lambda row: row.handicap, width=4),
        Column(f"Day {day_num} Total", lambda row: row.gross_points),
        Column(f"Day {day_num} Net", lambda row: row.net_points),
    ]


def tournament_columns() -> List[Column]:
    columns = [
        Column("Rank", lambda row: row.rank, width=4),
        Column("Player", lambda row: row.player_name, width=UIConstants.MAX_NAME_WIDTH),
        Column("Point Target", lambda row: row.handicap, width=4),
    ]
    for day in TournamentConstants.DAYS:
        columns.append(Column(f"Day {day} Gross", lambda row, d=day: row.daily_gross_points.get(d), day=day))
        columns.append(Column(f"Day {day} Net", lambda row, d=day: row.daily_net_points.get(d), day=day))
    columns.append(Column("Overall Net", lambda row: row.total_net_points))
    return columns


def team_columns() -> List[Column]:
    columns = [
        Column("Rank", lambda row: row.rank, width=4),
        Column("Team", lambda row: row.team_name, width=UIConstants.MAX_NAME_WIDTH),
    ]
    for day in TournamentConstants.DAYS:
        columns.append(Column(f"Day {day}", lambda row, d=day: row.daily_points.get(d), day=day))
    columns.append(Column("Overall", lambda row: row.overall_points))
    columns.append(Column("Members", lambda row: ", ".join(row.members), width=24))
    return columns


def visible_columns(columns: Sequence[Column], days_with_scores: Iterable[int]) -> List[Column]:
    days = set(days_with_scores)
    return [column for column in columns if column.day is None or column.day in days]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def render_table(rows: Sequence[Any], columns: Sequence[Column],
                 days_with_scores: Iterable[int]) -> List[List[str]]:
    """Header line followed by one line of cells per row."""
    shown = visible_columns(columns, days_with_scores)
    table = [[column.header for column in shown]]
    for row in rows:
        table.append([_cell(column.accessor(row)) for column in shown])
    return table


def render_text_table(rows: Sequence[Any], columns: Sequence[Column],
                      days_with_scores: Iterable[int], max_rows: int = UIConstants.MAX_TABLE_ROWS) -> str:
    """Fixed-width table for a Discord code block."""
    shown = visible_columns(columns, days_with_scores)
    widths = [max(column.width, len(column.header)) for column in shown]
    lines = []
    header = " ".join(f"{column.header:<{width}}" for column, width in zip(shown, widths))
    lines.append(header)
    lines.append("-" * len(header))
    for row in rows[:max_rows]:
        lines.append(" ".join(
            f"{_cell(column.accessor(row))[:width]:<{width}}" for column, width in zip(shown, widths)
        ).rstrip())
    if len(rows) > max_rows:
        lines.append(f"... {len(rows) - max_rows} more")
    return "\n".join(lines)


def export_csv(rows: Sequence[Any], columns: Sequence[Column], days_with_scores: Iterable[int]) -> str:
    """CSV text with a header row; fields are quoted only when needed."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(render_table(rows, columns, days_with_scores))
    return buffer.getvalue()
