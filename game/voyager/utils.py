"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from .entities import GameObject, Vector2D


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def distance(p1: "Vector2D", p2: "Vector2D") -> float:
    """Euclidean distance between two positions"""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def check_collision(obj1: "GameObject", obj2: "GameObject") -> bool:
    """Circle overlap test, strict: touching circles do not collide"""
    return distance(obj1.position, obj2.position) < obj1.radius + obj2.radius


def random_between(lo: float, hi: float, rng: Optional[random.Random] = None) -> float:
    """Uniform value in [lo, hi)"""
    r = rng if rng is not None else random
    return r.random() * (hi - lo) + lo


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
