import logging
from typing import Optional, Tuple

from golfbot.constants import HandicapConstants, StablefordConstants
from golfbot.data_models.leaderboard import PlayerInfo, TournamentSnapshot

logger = logging.getLogger(__name__)

class StablefordTable:
    """Converts strokes relative to par into Stableford points"""

    @staticmethod
    def points_for(differential: int) -> Optional[int]:
        """
        Look up the Stableford points for a hole

        Args:
            differential: Strokes minus par for the hole

        Returns:
            Points for the hole, or None when the differential is outside
            the table (more than 5 under or 3 over par)
        """
        return StablefordConstants.POINTS_BY_DIFFERENTIAL.get(differential)

    @staticmethod
    def is_valid(differential: int) -> bool:
        return differential in StablefordConstants.POINTS_BY_DIFFERENTIAL

class HandicapAllocator:
    """Works out the strokes a player receives on a single hole"""

    @staticmethod
    def giveback_strokes(handicap: int) -> int:
        """Number of holes a handicap above the allocation base gives back"""
        if handicap <= HandicapConstants.ALLOCATION_BASE:
            return 0
        return (handicap - HandicapConstants.ALLOCATION_BASE) // 2

    @staticmethod
    def strokes_received(handicap: int, hole_handicap_index: int) -> int:
        """
        Calculate strokes received on a hole

        Args:
            handicap: Player's handicap
            hole_handicap_index: Hole's handicap index (1 = hardest, 18 = easiest)

        Returns:
            0 to 3 strokes, or GIVEBACK_SENTINEL (-1) when this hole is given
            back and must not count toward the player's net score
        """
        base = HandicapConstants.ALLOCATION_BASE
        holes = HandicapConstants.HOLES_PER_ROUND

        if handicap <= base:
            effective = base - handicap
            strokes = 0
            if effective >= hole_handicap_index:
                strokes += 1
            if effective >= holes + hole_handicap_index:
                strokes += 1
            if effective >= 2 * holes + hole_handicap_index:
                strokes += 1
            return strokes

        giveback = HandicapAllocator.giveback_strokes(handicap)
        if hole_handicap_index > holes - giveback:
            return HandicapConstants.GIVEBACK_SENTINEL
        return 0

class ScoringEngine:
    """Per-hole and per-day Stableford scoring over a tournament snapshot"""

    @staticmethod
    def net_stableford_for_hole(player: PlayerInfo, day_num: int, hole_number: int,
                                snapshot: TournamentSnapshot) -> Optional[int]:
        """
        Net Stableford points for one player on one hole, using per-hole stroke allocation

        Args:
            player: The player being scored
            day_num: Tournament day (1-3)
            hole_number: Hole (1-18)
            snapshot: Snapshot holding the scores and hole details

        Returns:
            Points for the hole, or None when the hole has no score, has no
            hole details, is given back, or yields an invalid differential
        """
        entry = snapshot.score_for(player.id, day_num, hole_number)
        if entry is None:
            return None

        hole = snapshot.hole_for(entry.course_id, hole_number)
        if hole is None:
            logger.warning(
                f"Hole details not found for course {entry.course_id} hole {hole_number} "
                f"(player {player.name}, day {day_num})"
            )
            return None

        strokes = HandicapAllocator.strokes_received(player.handicap, hole.handicap_index)
        if strokes == HandicapConstants.GIVEBACK_SENTINEL:
            logger.debug(f"Hole {hole_number} given back by {player.name} (handicap {player.handicap})")
            return None

        net_score = entry.gross_score - strokes
        points = StablefordTable.points_for(net_score - hole.par)
        if points is None:
            logger.warning(
                f"Invalid net score {net_score} on par {hole.par} for {player.name} "
                f"(day {day_num}, hole {hole_number})"
            )
        return points

    @staticmethod
    def gross_stableford_for_day(player: PlayerInfo, day_num: int,
                                 snapshot: TournamentSnapshot) -> Tuple[int, int]:
        """
        Gross Stableford points for one player on one day

        Holes with an invalid differential or missing hole details are logged
        and left out of the total.

        Returns:
            Tuple of (gross_points, holes_counted)
        """
        gross_points = 0
        holes_counted = 0
        for entry in snapshot.scores_for(player.id, day_num):
            hole = snapshot.hole_for(entry.course_id, entry.hole_number)
            if hole is None:
                logger.warning(
                    f"Day {day_num}: hole details not found for course {entry.course_id} "
                    f"hole {entry.hole_number}"
                )
                continue

            points = StablefordTable.points_for(entry.gross_score - hole.par)
            if points is None:
                logger.warning(
                    f"Invalid score {entry.gross_score} on par {hole.par} for {player.name} "
                    f"(day {day_num}, hole {entry.hole_number})"
                )
                continue

            gross_points += points
            holes_counted += 1
        return gross_points, holes_counted

    @staticmethod
    def mosley_handicap(handicap: int) -> int:
        """Handicap subtracted under Mosley Open rules"""
        return max(HandicapConstants.MOSLEY_HANDICAP_FLOOR, handicap)
