"""
Per-tick enemy behaviour: meteor spin and armed enemies taking pot shots
"""

from __future__ import annotations

import math
import random
from typing import List, Optional

from .archetypes import archetype
from .audio import AudioCue, CueSink
from .config import SimConfig
from .entities import Enemy, Laser, Player, Vector2D, next_id


def aimed_laser(enemy: Enemy, target: Player, config: SimConfig) -> Laser:
    angle = math.atan2(target.position.y - enemy.position.y, target.position.x - enemy.position.x)
    return Laser(
        id=next_id("el"),
        position=enemy.position.copy(),
        velocity=Vector2D.from_angle(angle, config.enemy_laser_speed),
        radius=config.enemy_laser_radius,
        is_player_laser=False,
    )


def update_enemies(
    enemies: List[Enemy],
    player: Optional[Player],
    lasers: List[Laser],
    rng: random.Random,
    audio: CueSink,
    config: SimConfig,
    k: float = 1.0,
):
    for e in enemies:
        kind = archetype(e.type)

        if kind.spin:
            e.rotation = (e.rotation or 0.0) + kind.spin * k

        # no cooldown, the per-tick chance alone throttles fire
        if kind.armed and rng.random() < config.enemy_fire_chance and player is not None:
            audio.emit(AudioCue.ENEMY_LASER)
            lasers.append(aimed_laser(e, player, config))
