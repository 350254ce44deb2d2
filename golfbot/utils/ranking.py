"""
Shared ranking utilities for the daily, tournament and team leaderboards.

All three leaderboards rank the same way: highest points first, tied entries
share a rank, and the next distinct score resumes at its 1-based position
(standard competition ranking, 1-1-3).
"""

from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


class RankingUtility:
    """Shared ranking logic for consistent leaderboard ordering."""

    @staticmethod
    def competition_rank(items: Sequence[T], key: Callable[[T], int]) -> List[Tuple[int, T]]:
        """
        Rank items by descending key.

        Python's sort is stable, so tied items keep the order they were given
        in. Callers pass players and teams in ascending id order.

        Args:
            items: Items to rank
            key: Points accessor

        Returns:
            List of (rank, item) in leaderboard order
        """
        ordered = sorted(items, key=key, reverse=True)
        ranked: List[Tuple[int, T]] = []
        for position, item in enumerate(ordered, start=1):
            if ranked and key(item) == key(ranked[-1][1]):
                rank = ranked[-1][0]
            else:
                rank = position
            ranked.append((rank, item))
        return ranked
