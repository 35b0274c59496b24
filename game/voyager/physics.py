"""
Motion stepper: integrate, wrap, decay particles, prune lasers
"""

from __future__ import annotations

from typing import Iterable, List

from .config import SimConfig
from .entities import GameObject, Laser, Particle


def motion_scale(delta_ms: float, config: SimConfig) -> float:
    """Per-tick stepping (1.0) unless time scaling is enabled"""
    if config.time_scaled:
        return delta_ms / config.frame_ms
    return 1.0


def move(obj: GameObject, k: float = 1.0):
    obj.position.x += obj.velocity.x * k
    obj.position.y += obj.velocity.y * k


def wrap(obj: GameObject, width: float, height: float):
    """Toroidal edges: leaving by more than the radius re-enters opposite"""
    r = obj.radius
    p = obj.position
    if p.x < -r:
        p.x = width + r
    elif p.x > width + r:
        p.x = -r
    if p.y < -r:
        p.y = height + r
    elif p.y > height + r:
        p.y = -r


def in_viewport(obj: GameObject, width: float, height: float) -> bool:
    p = obj.position
    return 0 < p.x < width and 0 < p.y < height


def step_wrapping(objects: Iterable[GameObject], width: float, height: float, k: float = 1.0):
    for obj in objects:
        move(obj, k)
        wrap(obj, width, height)


def prune_lasers(lasers: List[Laser], width: float, height: float) -> List[Laser]:
    return [l for l in lasers if in_viewport(l, width, height)]


def step_lasers(lasers: List[Laser], width: float, height: float, k: float = 1.0) -> List[Laser]:
    """Lasers do not wrap; anything outside the viewport is dropped"""
    for laser in lasers:
        move(laser, k)
    return prune_lasers(lasers, width, height)


def step_particles(
    particles: List[Particle], delta_ms: float, width: float, height: float, k: float = 1.0
) -> List[Particle]:
    alive = []
    for p in particles:
        p.life -= delta_ms / 1000.0
        if p.life <= 0:
            continue
        move(p, k)
        p.radius = p.start_size * p.life_ratio
        wrap(p, width, height)
        alive.append(p)
    return alive
