"""
Player control application
"""

from __future__ import annotations

import math
import random
from typing import AbstractSet, List, Optional

from .audio import AudioCue, CueSink
from .config import SimConfig
from .entities import Laser, Particle, Player, Vector2D, next_id
from .utils import normalize, random_between, vec_len

# Input identifiers produced by the input source
FORWARD = "forward"
LEFT = "left"
RIGHT = "right"
FIRE = "fire"

EXHAUST_COLORS = ("#ffc83d", "#ff7800", "#ffffff")


def _exhaust(player: Player, rng: random.Random, config: SimConfig) -> List[Particle]:
    out = []
    for _ in range(config.exhaust_particles):
        angle = player.rotation + math.pi + random_between(-config.exhaust_spread, config.exhaust_spread, rng)
        out.append(Particle(
            id=next_id("pt"),
            position=player.position.copy(),
            velocity=player.velocity + Vector2D.from_angle(angle, config.exhaust_speed),
            radius=random_between(1, 3, rng),
            life=config.exhaust_life,
            max_life=config.exhaust_life,
            color=EXHAUST_COLORS[rng.randrange(len(EXHAUST_COLORS))],
            start_size=random_between(2, 4, rng),
        ))
    return out


class PlayerControls:
    """
    Applies the held inputs to the player once per tick.

    Keeps the fire cooldown clock, which runs on simulation time (the sum
    of tick deltas) rather than wall time.
    """

    def __init__(self, config: SimConfig):
        self.config = config
        self.clock_ms = 0.0
        self.last_shot_ms: Optional[float] = None

    def reset(self):
        self.clock_ms = 0.0
        self.last_shot_ms = None

    def can_fire(self) -> bool:
        if self.last_shot_ms is None:
            return True
        return self.clock_ms - self.last_shot_ms > self.config.player_shoot_cooldown_ms

    def apply(
        self,
        player: Optional[Player],
        inputs: AbstractSet[str],
        delta_ms: float,
        lasers: List[Laser],
        particles: List[Particle],
        rng: random.Random,
        audio: CueSink,
        k: float = 1.0,
    ):
        self.clock_ms += delta_ms
        if player is None:
            return
        cfg = self.config

        # 1. thrust
        if FORWARD in inputs:
            player.velocity = player.velocity + Vector2D.from_angle(player.rotation, cfg.player_thrust * k)
            audio.emit(AudioCue.THRUST)
            particles.extend(_exhaust(player, rng, cfg))

        # 2. turn
        if LEFT in inputs:
            player.rotation -= cfg.player_turn_speed * k
        if RIGHT in inputs:
            player.rotation += cfg.player_turn_speed * k

        # 3. clamp speed
        vx, vy = player.velocity.x, player.velocity.y
        if vec_len(vx, vy) > cfg.player_max_speed:
            nx, ny = normalize(vx, vy)
            player.velocity = Vector2D(nx * cfg.player_max_speed, ny * cfg.player_max_speed)

        # 4. friction
        player.velocity = player.velocity * (cfg.player_friction ** k)

        # 5. fire
        if FIRE in inputs and self.can_fire():
            audio.emit(AudioCue.LASER)
            self.last_shot_ms = self.clock_ms
            lasers.append(Laser(
                id=next_id("l"),
                position=player.position.copy(),
                velocity=Vector2D.from_angle(player.rotation, cfg.player_laser_speed),
                radius=cfg.player_laser_radius,
                is_player_laser=True,
            ))
