from typing import Optional, List, Sequence, Tuple, Dict
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager

from golfbot.config import Config
from golfbot.constants import TournamentConstants
from golfbot.data_models.leaderboard import (
    PlayerInfo, HoleDetails, ScoreEntry, TeamInfo, TournamentSnapshot
)
from golfbot.database.models import Base, Player, Course, Hole, Team, Score
from golfbot.utils.leaderboard_exceptions import (
    ScoreValidationError, CourseValidationError, PlayerNotFoundError, TeamNotFoundError, DatabaseError
)
from golfbot.utils.logger import setup_logger

class Database:
    def __init__(self, database_url: Optional[str] = None):
        self.logger = setup_logger(__name__)
        self.database_url = database_url or Config.DATABASE_URL
        self.engine = None
        self.async_session = None

    async def initialize(self):
        """Initialize the database connection and create tables"""
        self.logger.info("Initializing database...")

        # Convert sqlite URL to async if needed
        database_url = self.database_url
        if database_url.startswith('sqlite:///'):
            database_url = database_url.replace('sqlite:///', 'sqlite+aiosqlite:///')

        self.engine = create_async_engine(
            database_url,
            echo=Config.DEBUG,
            future=True
        )

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.logger.info("Database initialized successfully")

    @property
    def session_factory(self):
        return self.async_session

    @asynccontextmanager
    async def get_session(self):
        """Get a database session"""
        async with self.async_session() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    @asynccontextmanager
    async def transaction(self):
        """
        Create a transaction boundary for atomic operations.

        All operations within the context are committed together on success,
        or rolled back together on failure.
        """
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def close(self):
        """Close the database connection"""
        if self.engine:
            await self.engine.dispose()
            self.logger.info("Database connection closed")

    # Snapshot accessors
    async def _fetch_active_players(self, session) -> List[PlayerInfo]:
        result = await session.execute(
            select(Player).where(Player.active == True).order_by(Player.id)
        )
        return [
            PlayerInfo(id=p.id, name=p.name, handicap=p.handicap, active=p.active, team_id=p.team_id)
            for p in result.scalars().all()
        ]

    async def _fetch_hole_details(self, session) -> Dict[Tuple[int, int], HoleDetails]:
        result = await session.execute(select(Hole).order_by(Hole.course_id, Hole.hole_num))
        return {
            (h.course_id, h.hole_num): HoleDetails(
                course_id=h.course_id, hole_number=h.hole_num, par=h.par, handicap_index=h.handicap
            )
            for h in result.scalars().all()
        }

    async def _fetch_scores(self, session, day_num: Optional[int] = None) -> List[ScoreEntry]:
        query = select(Score).join(Player, Score.player_id == Player.id).where(Player.active == True)
        if day_num is not None:
            query = query.where(Score.day_num == day_num)
        query = query.order_by(Score.player_id, Score.day_num, Score.hole_num)
        result = await session.execute(query)
        return [
            ScoreEntry(
                player_id=s.player_id, day_num=s.day_num, hole_number=s.hole_num,
                course_id=s.course_id, gross_score=s.score
            )
            for s in result.scalars().all()
        ]

    async def _fetch_teams(self, session, players: Sequence[PlayerInfo]) -> List[TeamInfo]:
        result = await session.execute(select(Team).order_by(Team.id))
        members_by_team: Dict[int, List[PlayerInfo]] = {}
        for player in players:
            if player.team_id is not None:
                members_by_team.setdefault(player.team_id, []).append(player)
        return [
            TeamInfo(id=t.id, name=t.name, members=tuple(members_by_team.get(t.id, [])))
            for t in result.scalars().all()
        ]

    async def fetch_active_players(self) -> List[PlayerInfo]:
        """Get all active players"""
        async with self.get_session() as session:
            return await self._fetch_active_players(session)

    async def fetch_hole_details(self) -> Dict[Tuple[int, int], HoleDetails]:
        """Get par and handicap index for every hole keyed by (course_id, hole_num)"""
        async with self.get_session() as session:
            return await self._fetch_hole_details(session)

    async def fetch_scores(self, day_num: Optional[int] = None) -> List[ScoreEntry]:
        """Get scores of active players, optionally for a single day"""
        async with self.get_session() as session:
            return await self._fetch_scores(session, day_num)

    async def fetch_teams(self) -> List[TeamInfo]:
        """Get all teams with their active members resolved through players.team_id"""
        async with self.get_session() as session:
            players = await self._fetch_active_players(session)
            return await self._fetch_teams(session, players)

    async def load_snapshot(self) -> TournamentSnapshot:
        """Read players, holes, scores and teams in one session"""
        try:
            async with self.get_session() as session:
                players = await self._fetch_active_players(session)
                holes = await self._fetch_hole_details(session)
                scores = await self._fetch_scores(session)
                teams = await self._fetch_teams(session, players)
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to load tournament snapshot: {e}")
            raise DatabaseError("snapshot load", str(e))

        self.logger.debug(
            f"Loaded snapshot: {len(players)} players, {len(holes)} holes, "
            f"{len(scores)} scores, {len(teams)} teams"
        )
        return TournamentSnapshot.build(players, holes.values(), scores, teams)

    # Player operations
    async def create_player(self, name: str, handicap: int = 0, active: bool = True) -> Player:
        """Register a new player"""
        async with self.transaction() as session:
            player = Player(name=name, handicap=handicap, active=active)
            session.add(player)
            await session.flush()
            await session.refresh(player)
            return player

    async def get_player_by_name(self, name: str) -> Optional[Player]:
        async with self.get_session() as session:
            result = await session.execute(select(Player).where(Player.name == name))
            return result.scalar_one_or_none()

    async def set_player_active(self, player_id: int, active: bool):
        """Include or exclude a player from every leaderboard"""
        async with self.transaction() as session:
            player = await session.get(Player, player_id)
            if player is None:
                raise PlayerNotFoundError(str(player_id))
            player.active = active

    # Course operations
    async def create_course(self, name: str, holes: Sequence[Tuple[int, int]]) -> Course:
        """
        Create a course with its 18 holes.

        Args:
            name: Course name
            holes: (par, handicap_index) for holes 1 to 18 in order
        """
        hole_count = len(TournamentConstants.HOLES)
        if len(holes) != hole_count:
            raise CourseValidationError(name, f"expected {hole_count} holes, got {len(holes)}")
        if any(par < 1 for par, _ in holes):
            raise CourseValidationError(name, "every hole needs a par of at least 1")
        if sorted(index for _, index in holes) != list(TournamentConstants.HOLES):
            raise CourseValidationError(name, "handicap indexes must use each of 1-18 exactly once")

        async with self.transaction() as session:
            course = Course(name=name)
            session.add(course)
            await session.flush()
            for hole_num, (par, index) in enumerate(holes, start=1):
                session.add(Hole(course_id=course.id, hole_num=hole_num, par=par, handicap=index))
            self.logger.info(f"Created course '{name}' (par {sum(par for par, _ in holes)})")
            return course

    async def get_course_by_name(self, name: str) -> Optional[Course]:
        async with self.get_session() as session:
            result = await session.execute(select(Course).where(Course.name == name))
            return result.scalar_one_or_none()

    # Team operations
    async def create_team(self, name: str, team_id: Optional[int] = None) -> Team:
        async with self.transaction() as session:
            team = Team(id=team_id, name=name)
            session.add(team)
            await session.flush()
            await session.refresh(team)
            return team

    async def get_team_by_name(self, name: str) -> Optional[Team]:
        async with self.get_session() as session:
            result = await session.execute(select(Team).where(Team.name == name))
            return result.scalar_one_or_none()

    async def assign_player_to_team(self, player_id: int, team_id: Optional[int]):
        """Move a player onto a team, or off every team when team_id is None"""
        async with self.transaction() as session:
            player = await session.get(Player, player_id)
            if player is None:
                raise PlayerNotFoundError(str(player_id))
            if team_id is not None and await session.get(Team, team_id) is None:
                raise TeamNotFoundError(str(team_id))
            player.team_id = team_id

    # Score operations
    async def record_score(self, player_id: int, course_id: int, day_num: int,
                           hole_num: int, score: Optional[int]) -> Score:
        """Insert or replace one hole score. A score of None marks the hole unplayed."""
        if day_num not in TournamentConstants.DAYS:
            raise ScoreValidationError(score, f"Day must be 1-3, got {day_num}")
        if hole_num not in TournamentConstants.HOLES:
            raise ScoreValidationError(score, f"Hole must be 1-18, got {hole_num}")
        if score is not None and score < 1:
            raise ScoreValidationError(score, "Score must be at least 1")

        async with self.transaction() as session:
            if await session.get(Player, player_id) is None:
                raise PlayerNotFoundError(str(player_id))
            result = await session.execute(
                select(Score).where(
                    Score.player_id == player_id,
                    Score.course_id == course_id,
                    Score.day_num == day_num,
                    Score.hole_num == hole_num
                )
            )
            entry = result.scalar_one_or_none()
            if entry:
                entry.score = score
            else:
                entry = Score(player_id=player_id, course_id=course_id, day_num=day_num,
                              hole_num=hole_num, score=score)
                session.add(entry)
            return entry

    async def clear_scores(self, day_num: int, course_id: int) -> int:
        """Delete every score for one day on one course"""
        async with self.transaction() as session:
            result = await session.execute(
                delete(Score).where(Score.day_num == day_num, Score.course_id == course_id)
            )
            self.logger.info(f"Cleared {result.rowcount} scores for day {day_num} course {course_id}")
            return result.rowcount
