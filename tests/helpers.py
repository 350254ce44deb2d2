"""Builders for test snapshots."""

from golfbot.data_models.leaderboard import HoleDetails, ScoreEntry


def make_course(course_id=1, pars=None):
    """18 holes; handicap index equals the hole number."""
    pars = pars or [4] * 18
    return [
        HoleDetails(course_id=course_id, hole_number=number, par=par, handicap_index=number)
        for number, par in enumerate(pars, start=1)
    ]


def make_round(player_id, day_num, strokes, course_id=1, first_hole=1):
    """Consecutive hole scores starting at ``first_hole``."""
    return [
        ScoreEntry(player_id=player_id, day_num=day_num, hole_number=first_hole + offset,
                   course_id=course_id, gross_score=score)
        for offset, score in enumerate(strokes)
    ]


def round_worth(points_target, holes=18):
    """Strokes on an all-par-4 course worth exactly ``points_target`` gross points.

    Pars score 2 and double bogeys score 0, so the first target/2 holes are pars.
    """
    assert points_target % 2 == 0 and 0 <= points_target <= 2 * holes
    pars = points_target // 2
    return [4] * pars + [6] * (holes - pars)


class StaticSource:
    """Snapshot source that hands out a prepared snapshot."""

    def __init__(self, snapshot):
        self.snapshot = snapshot
        self.loads = 0

    async def load_snapshot(self):
        self.loads += 1
        return self.snapshot
