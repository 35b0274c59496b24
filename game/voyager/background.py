"""
Starfield and nebula decoration, regenerated on every viewport change
"""

from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .entities import Nebula, Star, Vector2D
from .utils import random_between

NEBULA_PALETTE = ("#ff006e", "#8338ec", "#3a86ff")


def make_stars(width: float, height: float, count: int = 200,
               rng: Optional[random.Random] = None) -> List[Star]:
    r = rng if rng is not None else random.Random()
    return [
        Star(
            id=f"s_{i}",
            position=Vector2D(r.random() * width, r.random() * height),
            size=r.random() * 1.5,
            opacity=r.random(),
            parallax_factor=r.random() * 0.5 + 0.1,
        )
        for i in range(count)
    ]


def make_nebulas(width: float, height: float, count: int = 5,
                 rng: Optional[random.Random] = None) -> List[Nebula]:
    r = rng if rng is not None else random.Random()
    return [
        Nebula(
            id=f"n_{i}",
            position=Vector2D(r.random() * width, r.random() * height),
            size=random_between(100, 300, r),
            color=NEBULA_PALETTE[i % len(NEBULA_PALETTE)],
            opacity=random_between(0.1, 0.3, r),
        )
        for i in range(count)
    ]


def make_background(width: float, height: float, star_count: int = 200, nebula_count: int = 5,
                    rng: Optional[random.Random] = None) -> Tuple[List[Star], List[Nebula]]:
    return (make_stars(width, height, star_count, rng),
            make_nebulas(width, height, nebula_count, rng))
