"""
Audio cues emitted by the simulation

The simulation only announces *that* something audible happened; sinks
decide what to do with it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class AudioCue(Enum):
    LASER = "laser"
    ENEMY_LASER = "enemyLaser"
    THRUST = "thrust"
    EXPLOSION = "explosion"


CUE_VOLUMES: Dict[AudioCue, float] = {
    AudioCue.LASER: 0.2,
    AudioCue.ENEMY_LASER: 0.2,
    AudioCue.THRUST: 0.1,
    AudioCue.EXPLOSION: 0.2,
}


class CueSink(Protocol):
    def emit(self, cue: AudioCue) -> None:
        ...


class NullCueSink:
    """Drops every cue"""

    def emit(self, cue: AudioCue) -> None:
        pass


class RecordingCueSink:
    """Collects cues in order; used by the RL env and tests"""

    def __init__(self):
        self.cues: List[AudioCue] = []

    def emit(self, cue: AudioCue) -> None:
        self.cues.append(cue)

    def drain(self) -> List[AudioCue]:
        cues, self.cues = self.cues, []
        return cues

    def count(self, cue: AudioCue) -> int:
        return sum(1 for c in self.cues if c is cue)


class PlaybackCueSink(ABC):
    """
    Base for sinks that actually play sounds.

    Sound is cosmetic, so any failure in ``_play`` is logged and dropped
    instead of reaching the simulation tick.
    """

    def __init__(self, volumes: Optional[Dict[AudioCue, float]] = None):
        self.volumes = dict(CUE_VOLUMES)
        if volumes:
            self.volumes.update(volumes)
        self.failures = 0

    def emit(self, cue: AudioCue) -> None:
        try:
            self._play(cue, self.volumes.get(cue, 0.2))
        except Exception:
            self.failures += 1
            logger.warning("Could not play sound %s", cue.value, exc_info=True)

    @abstractmethod
    def _play(self, cue: AudioCue, volume: float) -> None:
        ...
