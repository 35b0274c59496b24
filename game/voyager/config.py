"""
Simulation and environment configuration for Cosmic Voyager
All gameplay constants are tunables; none of them is an invariant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict


class VoyagerError(Exception):
    """Base class for errors raised by the simulation"""


class ConfigError(VoyagerError):
    """Invalid configuration or viewport"""


class SimulationStateError(VoyagerError):
    """Operation not allowed in the current game status"""


@dataclass(frozen=True)
class SimConfig:
    # Viewport
    width: float = 1280.0
    height: float = 720.0

    # Frame stepping: motion/turning/thrust are per-tick increments unless
    # time_scaled is set, in which case they scale by delta_ms / frame_ms
    time_scaled: bool = False
    frame_ms: float = 1000.0 / 60.0

    # Player
    player_size: float = 20.0
    player_thrust: float = 0.1
    player_turn_speed: float = 0.1  # rad per tick
    player_max_speed: float = 5.0
    player_friction: float = 0.99
    player_laser_speed: float = 7.0
    player_laser_radius: float = 2.0
    player_shoot_cooldown_ms: float = 200.0
    player_max_health: float = 100.0
    player_start_rotation: float = -math.pi / 2

    # Exhaust
    exhaust_particles: int = 2
    exhaust_spread: float = 0.3
    exhaust_speed: float = 2.0
    exhaust_life: float = 0.5

    # Enemies
    enemy_laser_speed: float = 5.0
    enemy_laser_radius: float = 3.0
    enemy_fire_chance: float = 0.01  # per tick, per armed enemy

    # Spawner
    spawn_base: int = 5
    spawn_score_step: int = 500
    saucer_min_score: int = 200
    mothership_min_score: int = 1000

    # Combat
    laser_damage: float = 5.0
    collision_damage: float = 20.0
    enemy_laser_damage: float = 10.0
    score_per_health: float = 5.0
    game_over_delay_ms: float = 1000.0

    # Background
    star_count: int = 200
    nebula_count: int = 5

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"viewport must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.player_friction <= 1.0:
            raise ConfigError("player_friction must be in (0, 1]")
        if not 0.0 <= self.enemy_fire_chance <= 1.0:
            raise ConfigError("enemy_fire_chance must be a probability")
        if self.spawn_score_step <= 0:
            raise ConfigError("spawn_score_step must be positive")
        if self.frame_ms <= 0:
            raise ConfigError("frame_ms must be positive")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "SimConfig":
        """Build a config from a dict, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        return cls(**values)


# Environment parameters
ENV_CONFIG = {
    "width": 800,
    "height": 600,
    "frame_ms": 1000 / 60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
    "m_lasers": 3,
}

# Reward shaping for the gymnasium environment
REWARD_CONFIG = {
    "R_SCORE": 0.01,     # per point of score gained
    "R_DAMAGE": 0.05,    # per point of health lost
    "R_DEATH": 5.0,      # death penalty
    "R_TIME": 0.001,     # small time penalty
}
