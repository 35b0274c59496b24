"""
Arcade-backed audio sink
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import arcade

from .audio import AudioCue, PlaybackCueSink

logger = logging.getLogger(__name__)


class ArcadeCueSink(PlaybackCueSink):
    """
    Plays each cue from a sound file. A cue that is already playing is
    stopped and restarted from the beginning, one player per cue.
    """

    def __init__(self, sound_files: Dict[AudioCue, str], volumes: Optional[Dict[AudioCue, float]] = None):
        super().__init__(volumes)
        self._sounds: Dict[AudioCue, arcade.Sound] = {}
        self._players: Dict[AudioCue, object] = {}
        for cue, path in sound_files.items():
            try:
                self._sounds[cue] = arcade.load_sound(path)
            except Exception:
                logger.warning("Could not load sound %s from %s", cue.value, path, exc_info=True)

    def _play(self, cue: AudioCue, volume: float) -> None:
        sound = self._sounds.get(cue)
        if sound is None:
            return
        previous = self._players.pop(cue, None)
        if previous is not None:
            arcade.stop_sound(previous)
        self._players[cue] = arcade.play_sound(sound, volume=volume)
