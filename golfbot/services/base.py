"""
Base classes for the golf tournament service layer.

BaseService provides async database session management for services that
write to the store. LeaderboardCalculator is the refresh/rows surface shared
by the daily, tournament and team leaderboards.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncGenerator, FrozenSet, Generic, List, Protocol, TypeVar
from sqlalchemy.ext.asyncio import AsyncSession

from golfbot.data_models.leaderboard import TournamentSnapshot

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")

class BaseService:
    """Base class for all services with async database session management."""
    
    def __init__(self, session_factory):
        """
        Initialize base service with session factory.
        
        Args:
            session_factory: Async session factory from Database class
        """
        self.session_factory = session_factory
    
    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for async database operations."""
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

class SnapshotSource(Protocol):
    """Anything that can read a consistent snapshot of the tournament."""
    
    async def load_snapshot(self) -> TournamentSnapshot:
        ...

class LeaderboardCalculator(ABC, Generic[RowT]):
    """
    Recomputes a leaderboard from scratch on every refresh.
    
    Results are built into a fresh list and swapped in at the end, so a
    reader never sees a half-computed leaderboard.
    """
    
    def __init__(self, source: SnapshotSource):
        self.source = source
        self._rows: List[RowT] = []
        self._days_with_scores: FrozenSet[int] = frozenset()
    
    async def refresh(self) -> List[RowT]:
        """Read a new snapshot and recompute the leaderboard."""
        snapshot = await self.source.load_snapshot()
        return self.refresh_from(snapshot)
    
    def refresh_from(self, snapshot: TournamentSnapshot) -> List[RowT]:
        """Recompute the leaderboard from an already loaded snapshot."""
        rows = self.calculate(snapshot)
        self._rows = rows
        self._days_with_scores = snapshot.days_with_scores
        logger.debug(f"{type(self).__name__} refreshed: {len(rows)} rows")
        return self.rows()
    
    @abstractmethod
    def calculate(self, snapshot: TournamentSnapshot) -> List[RowT]:
        """Build ranked rows from ``snapshot``."""
    
    def rows(self) -> List[RowT]:
        return list(self._rows)
    
    def days_with_scores(self) -> FrozenSet[int]:
        return self._days_with_scores
