import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.dirname(__file__))

from golfbot.data_models.leaderboard import TournamentSnapshot
from helpers import make_course


@pytest.fixture
def course():
    return make_course()


@pytest.fixture
def build_snapshot(course):
    def _build(players, scores, teams=(), holes=None):
        return TournamentSnapshot.build(players, course if holes is None else holes, scores, teams)
    return _build
