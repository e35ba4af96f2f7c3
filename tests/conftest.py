import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from neon_snake.model import GameModel
from neon_snake.storage import MemoryHighScoreStore


class Recorder:
    """GameListener that remembers every call."""

    def __init__(self):
        self.scores = []
        self.highscores = []
        self.game_overs = []

    def on_score(self, score):
        self.scores.append(score)

    def on_highscore(self, highscore):
        self.highscores.append(highscore)

    def on_game_over(self, score, highscore):
        self.game_overs.append((score, highscore))


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def model(store):
    return GameModel(grid_size=24, store=store, rng=random.Random(1234))


@pytest.fixture
def recorder(model):
    rec = Recorder()
    model.add_listener(rec)
    return rec
