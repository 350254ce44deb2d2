"""
Leaderboard data models for the tournament scoring engine.

Provides the immutable inputs the calculators read (players, holes, scores,
teams bundled into a TournamentSnapshot) and the immutable rows they produce.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class TournamentContext(Enum):
    """The two brackets a tournament leaderboard can be computed for."""
    MOSLEY_OPEN = "mosley_open"
    TWISTED_CREEK = "twisted_creek"

    @property
    def display_name(self) -> str:
        return "Mosley Open" if self is TournamentContext.MOSLEY_OPEN else "Twisted Creek"


@dataclass(frozen=True)
class PlayerInfo:
    """A registered player as read at the start of a refresh."""
    id: int
    name: str
    handicap: int
    active: bool = True
    team_id: Optional[int] = None


@dataclass(frozen=True)
class HoleDetails:
    """Par and handicap index of one hole on one course."""
    course_id: int
    hole_number: int
    par: int
    handicap_index: int


@dataclass(frozen=True)
class ScoreEntry:
    """Gross strokes for one player on one hole of one day."""
    player_id: int
    day_num: int
    hole_number: int
    course_id: int
    gross_score: Optional[int]


@dataclass(frozen=True)
class TeamInfo:
    """A team and its resolved members."""
    id: int
    name: str
    members: Tuple[PlayerInfo, ...] = ()


ScoreKey = Tuple[int, int, int]  # (player_id, day_num, hole_number)
HoleKey = Tuple[int, int]        # (course_id, hole_number)


@dataclass(frozen=True)
class TournamentSnapshot:
    """Everything one refresh needs, indexed for direct lookup.

    Built once from rows fetched in bulk and never mutated afterwards, so any
    number of calculators can read the same snapshot.
    """
    players: Mapping[int, PlayerInfo]
    holes: Mapping[HoleKey, HoleDetails]
    scores: Mapping[ScoreKey, ScoreEntry]
    teams: Tuple[TeamInfo, ...] = ()
    days_with_scores: FrozenSet[int] = frozenset()
    _scored_holes: Mapping[Tuple[int, int], Tuple[int, ...]] = field(default_factory=dict, repr=False)

    @classmethod
    def build(
        cls,
        players: Iterable[PlayerInfo],
        holes: Iterable[HoleDetails],
        scores: Iterable[ScoreEntry],
        teams: Iterable[TeamInfo] = ()
    ) -> "TournamentSnapshot":
        """Index raw rows. Inactive players and unplayed holes are dropped here."""
        player_map: Dict[int, PlayerInfo] = {}
        for player in sorted(players, key=lambda p: p.id):
            if player.active:
                player_map[player.id] = player

        hole_map: Dict[HoleKey, HoleDetails] = {}
        for hole in holes:
            hole_map[(hole.course_id, hole.hole_number)] = hole

        score_map: Dict[ScoreKey, ScoreEntry] = {}
        scored_holes: Dict[Tuple[int, int], List[int]] = {}
        days = set()
        for entry in scores:
            if entry.player_id not in player_map:
                continue
            # A missing score means the hole has not been played yet
            if entry.gross_score is None or entry.gross_score < 1:
                continue
            key = (entry.player_id, entry.day_num, entry.hole_number)
            if key in score_map:
                logger.debug(
                    f"Player {entry.player_id} has more than one score for day {entry.day_num} "
                    f"hole {entry.hole_number}; keeping course {entry.course_id}"
                )
            else:
                scored_holes.setdefault((entry.player_id, entry.day_num), []).append(entry.hole_number)
            score_map[key] = entry
            days.add(entry.day_num)

        resolved_teams = []
        for team in sorted(teams, key=lambda t: t.id):
            members = tuple(
                player_map[member.id] for member in team.members if member.id in player_map
            )
            resolved_teams.append(TeamInfo(id=team.id, name=team.name, members=members))

        return cls(
            players=player_map,
            holes=hole_map,
            scores=score_map,
            teams=tuple(resolved_teams),
            days_with_scores=frozenset(days),
            _scored_holes={key: tuple(sorted(value)) for key, value in scored_holes.items()},
        )

    def score_for(self, player_id: int, day_num: int, hole_number: int) -> Optional[ScoreEntry]:
        return self.scores.get((player_id, day_num, hole_number))

    def hole_for(self, course_id: int, hole_number: int) -> Optional[HoleDetails]:
        return self.holes.get((course_id, hole_number))

    def scores_for(self, player_id: int, day_num: int) -> List[ScoreEntry]:
        """A player's played holes on one day, in hole order."""
        return [
            self.scores[(player_id, day_num, hole_number)]
            for hole_number in self._scored_holes.get((player_id, day_num), ())
        ]

    def has_scores(self, player_id: int, day_num: int) -> bool:
        return (player_id, day_num) in self._scored_holes


@dataclass(frozen=True)
class DailyLeaderboardRow:
    """Single row of a one-day individual leaderboard."""
    rank: int
    player_id: int
    player_name: str
    handicap: int
    gross_points: int
    net_points: int
    holes_played: int


@dataclass(frozen=True)
class TournamentLeaderboardRow:
    """Single row of the three-day individual leaderboard for one context."""
    rank: int
    player_id: int
    player_name: str
    handicap: int
    daily_gross_points: Mapping[int, int]
    daily_net_points: Mapping[int, int]
    total_net_points: int
    two_day_cut_score: int
    made_cut: bool


@dataclass(frozen=True)
class TeamLeaderboardRow:
    """Single row of the team leaderboard."""
    rank: int
    team_id: int
    team_name: str
    daily_points: Mapping[int, int]
    overall_points: int
    members: Tuple[str, ...]
