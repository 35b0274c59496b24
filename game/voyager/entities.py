"""
Game entity dataclasses
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


_ids = itertools.count(1)


def next_id(prefix: str) -> str:
    """Allocate a process-wide unique entity id, e.g. ``e_42``"""
    return f"{prefix}_{next(_ids)}"


@dataclass
class Vector2D:
    """2D vector in screen pixels (y grows downwards)"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vector2D":
        return Vector2D(self.x * k, self.y * k)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def copy(self) -> "Vector2D":
        return Vector2D(self.x, self.y)

    @classmethod
    def from_angle(cls, angle: float, magnitude: float = 1.0) -> "Vector2D":
        return cls(math.cos(angle) * magnitude, math.sin(angle) * magnitude)


class EnemyType(Enum):
    METEOR = "meteor"
    SAUCER = "saucer"
    BLACK_HOLE = "black_hole"  # reserved, never spawned
    MOTHERSHIP = "mothership"


class GameStatus(Enum):
    START_SCREEN = "start_screen"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameObject:
    """Anything that moves and collides as a circle"""
    id: str
    position: Vector2D
    velocity: Vector2D
    radius: float


@dataclass
class Player(GameObject):
    """Player ship"""
    health: float = 100.0
    max_health: float = 100.0
    rotation: float = -math.pi / 2  # radians, facing direction


@dataclass
class Enemy(GameObject):
    """Enemy entity, behaviour is looked up by ``type``"""
    type: EnemyType = EnemyType.METEOR
    health: float = 1.0
    max_health: float = 1.0
    rotation: Optional[float] = None  # meteor spin only


@dataclass
class Laser(GameObject):
    """Laser projectile; the faction tag routes collision checks"""
    is_player_laser: bool = True


@dataclass
class Particle(GameObject):
    """Short-lived visual particle, shrinks as ``life`` runs out"""
    life: float = 1.0  # seconds remaining
    max_life: float = 1.0
    color: str = "#ffffff"
    start_size: float = 1.0

    @property
    def life_ratio(self) -> float:
        if self.max_life <= 0:
            return 0.0
        return max(0.0, self.life / self.max_life)


@dataclass
class Star:
    """Background star"""
    id: str
    position: Vector2D
    size: float
    opacity: float
    parallax_factor: float


@dataclass
class Nebula:
    """Background nebula cloud"""
    id: str
    position: Vector2D
    size: float
    color: str
    opacity: float
