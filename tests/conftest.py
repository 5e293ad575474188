import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from swarm_config import build_preset
from swarm_engine import Swarm
from swarm_surface import RecordingSurface


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def make_swarm(clock):
    """Seeded, quiet swarm; keyword args override the preset."""
    def _make(preset='bloom', width=800, height=600, **overrides):
        overrides.setdefault('seed', 1234)
        cfg = build_preset(preset, **overrides)
        return Swarm(cfg, width, height, clock=clock, verbose=False)
    return _make
