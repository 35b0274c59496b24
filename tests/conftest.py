from __future__ import annotations

import pytest

from game.voyager.audio import RecordingCueSink
from game.voyager.config import SimConfig
from game.voyager.simulation import Simulation


@pytest.fixture()
def config() -> SimConfig:
    return SimConfig(width=800, height=600)


@pytest.fixture()
def cues() -> RecordingCueSink:
    return RecordingCueSink()


@pytest.fixture()
def sim(config: SimConfig, cues: RecordingCueSink) -> Simulation:
    """A started simulation on an 800x600 viewport with a fixed seed"""
    s = Simulation(config, audio=cues, seed=1234)
    s.start()
    cues.drain()
    return s
