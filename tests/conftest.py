import random
from dataclasses import replace

import pytest

from dodge.configs.game_config import STAGES
from dodge.controls import InputSource
from dodge.engine import GameEngine
from dodge.storage import MemoryHighScoreStore
from dodge.timing import VirtualClock, ManualFrameScheduler

# Same table, but nothing ever spawns on its own
QUIET_STAGES = [replace(s, bullet_frequency=10 ** 9) for s in STAGES]


def short_stages(n=3, duration=2000):
    return [replace(s, duration=duration) for s in QUIET_STAGES[:n]]


def run_frames(engine, clock, scheduler, n, ms=100):
    """Advance the clock and run up to n scheduled frames; returns frames run"""
    ran = 0
    for _ in range(n):
        clock.advance(ms)
        if not scheduler.run_next():
            break
        ran += 1
    return ran


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def input_source():
    return InputSource()


@pytest.fixture
def make_engine(clock, scheduler, store, input_source):
    def _make(stages=QUIET_STAGES, seed=0, **kwargs):
        return GameEngine(
            clock=clock,
            scheduler=scheduler,
            store=kwargs.pop("store", store),
            input_source=input_source,
            rng=random.Random(seed),
            stages=stages,
            **kwargs,
        )
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
