"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for surfaces and key constants
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from blobflock.macros.catalog import MacroCatalog
from blobflock.renderer import DrawSurface
from blobflock.settings import BlobSettings, CanvasSettings, Settings
from blobflock.simulation import Simulation


class RecordingSurface(DrawSurface):
    """DrawSurface that records every call instead of drawing."""

    def __init__(self, width: int = 200, height: int = 100):
        self._size = (width, height)
        self.calls = []

    @property
    def size(self):
        return self._size

    def fill(self, colour):
        self.calls.append(("fill", colour))

    def disc(self, colour, center, radius):
        self.calls.append(("disc", colour, center, radius))

    def border(self, colour):
        self.calls.append(("border", colour))

    def of_kind(self, kind: str) -> list:
        return [c for c in self.calls if c[0] == kind]


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def small_settings() -> Settings:
    """A 200x100 surface with five blobs."""
    return Settings(
        canvas=CanvasSettings(width=200, height=100),
        blob=BlobSettings(radius=2, count=5, speed=100.0, slow_speed=50.0, max_extra_speed=20.0),
    )


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(200, 100)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sim(small_settings, clock) -> Simulation:
    """Seeded simulation on the small surface."""
    return Simulation(settings=small_settings, catalog=MacroCatalog(), seed=1234, clock=clock)
