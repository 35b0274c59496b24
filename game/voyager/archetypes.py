"""
Enemy archetype table

One entry per EnemyType: how big and tough a fresh spawn is, how it moves,
whether it shoots, which colour it explodes in and how it is drawn.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .entities import EnemyType
from .utils import random_between

Point = Tuple[float, float]


def meteor_outline(radius: float, rng: Optional[random.Random] = None) -> List[Point]:
    # jagged heptagon, re-rolled every frame so meteors shimmer
    r = rng if rng is not None else random
    points = [(0.0, -radius)]
    for i in range(1, 7):
        angle = i * math.pi / 3.5
        dist = radius * (0.8 + r.random() * 0.4)
        points.append((math.sin(angle) * dist, -math.cos(angle) * dist))
    return points


def saucer_outline(radius: float, rng: Optional[random.Random] = None) -> List[Point]:
    # dome over a flat rim
    points = []
    for i in range(9):
        angle = math.pi + i * math.pi / 8
        points.append((math.cos(angle) * radius, math.sin(angle) * radius))
    points.append((radius * 1.5, 0.0))
    points.append((-radius * 1.5, 0.0))
    return points


def mothership_outline(radius: float, rng: Optional[random.Random] = None) -> List[Point]:
    h = radius / 2
    return [(-radius, 0.0), (-h, -h), (h, -h), (radius, 0.0), (h, h), (-h, h)]


@dataclass(frozen=True)
class Archetype:
    type: EnemyType
    roll_stats: Callable[[random.Random], Tuple[float, float]]  # -> (radius, health)
    spin: float  # rad per tick, 0 for no spin
    armed: bool
    explosion_color: str
    fill_color: str
    line_color: str
    line_width: float
    outline: Optional[Callable[..., List[Point]]]


def _meteor_stats(rng: random.Random) -> Tuple[float, float]:
    radius = random_between(15, 40, rng)
    return radius, radius / 2


ARCHETYPES: Dict[EnemyType, Archetype] = {
    EnemyType.METEOR: Archetype(
        type=EnemyType.METEOR,
        roll_stats=_meteor_stats,
        spin=0.01,
        armed=False,
        explosion_color="#a9a9a9",
        fill_color="#696969",
        line_color="#a9a9a9",
        line_width=2,
        outline=meteor_outline,
    ),
    EnemyType.SAUCER: Archetype(
        type=EnemyType.SAUCER,
        roll_stats=lambda rng: (20.0, 10.0),
        spin=0.0,
        armed=True,
        explosion_color="#8338ec",
        fill_color="#8338ec",
        line_color="#3a86ff",
        line_width=2,
        outline=saucer_outline,
    ),
    EnemyType.MOTHERSHIP: Archetype(
        type=EnemyType.MOTHERSHIP,
        roll_stats=lambda rng: (60.0, 50.0),
        spin=0.0,
        armed=True,
        explosion_color="#a9a9a9",
        fill_color="#ff006e",
        line_color="#ffbe0b",
        line_width=3,
        outline=mothership_outline,
    ),
    # Reserved: no spawn path, no behaviour, not drawn
    EnemyType.BLACK_HOLE: Archetype(
        type=EnemyType.BLACK_HOLE,
        roll_stats=lambda rng: (30.0, 30.0),
        spin=0.0,
        armed=False,
        explosion_color="#000000",
        fill_color="#000000",
        line_color="#000000",
        line_width=0,
        outline=None,
    ),
}


def archetype(enemy_type: EnemyType) -> Archetype:
    return ARCHETYPES[enemy_type]
