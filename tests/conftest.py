"""Shared fixtures. pygame runs headless through SDL's dummy drivers."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random

import pygame
import pytest

from skidodge.core.scheduling import FrameQueue, TextSink
from skidodge.game.grid import GridConfig
from skidodge.graphics.surface import CanvasSurface


class ScriptedRandom(random.Random):
    """Random source with scripted random() values and fixed column picks."""

    def __init__(self, values=(), columns=None, default=0.99):
        super().__init__(0)
        self._values = list(values)
        self._columns = columns
        self._default = default

    def random(self):
        if self._values:
            return self._values.pop(0)
        return self._default

    def sample(self, population, k, **kwargs):
        pool = list(population)
        if self._columns is not None:
            preferred = [c for c in self._columns if c in pool]
            pool = preferred + [c for c in pool if c not in preferred]
        return pool[:k]

    def choice(self, seq):
        return seq[0]


class RecordingSink(TextSink):
    def __init__(self):
        self.lines = []

    def set_text(self, text):
        self.lines.append(text)

    @property
    def text(self):
        return self.lines[-1] if self.lines else None


@pytest.fixture
def grid():
    """700x560 canvas: 70px cells, 8 rows x 10 cols."""
    return GridConfig.from_canvas(700, 560)


@pytest.fixture
def host():
    return pygame.Surface((800, 700))


@pytest.fixture
def canvas(host):
    return CanvasSurface(host, 700, 560, bg_color=(255, 255, 255))


@pytest.fixture
def scheduler():
    return FrameQueue()


@pytest.fixture
def score_sink():
    return RecordingSink()


@pytest.fixture
def status_sink():
    return RecordingSink()
