"""
Enemy spawner: decides when, where and what to spawn
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from .archetypes import archetype
from .config import SimConfig
from .entities import Enemy, EnemyType, Vector2D, next_id
from .utils import random_between

logger = logging.getLogger(__name__)


def enemy_cap(score: int, config: SimConfig) -> int:
    """Live enemy limit; grows by one every ``spawn_score_step`` points"""
    return config.spawn_base + score // config.spawn_score_step


def roll_enemy_type(score: int, rng: random.Random, config: SimConfig) -> EnemyType:
    roll = rng.random()
    if score > config.mothership_min_score and roll > 0.95:
        return EnemyType.MOTHERSHIP
    if score > config.saucer_min_score and roll > 0.7:
        return EnemyType.SAUCER
    return EnemyType.METEOR


def edge_position(radius: float, width: float, height: float, rng: random.Random) -> Vector2D:
    """Random point just outside one of the four viewport edges"""
    side = rng.randrange(4)
    if side == 0:  # top
        return Vector2D(random_between(0, width, rng), -radius)
    elif side == 1:  # right
        return Vector2D(width + radius, random_between(0, height, rng))
    elif side == 2:  # bottom
        return Vector2D(random_between(0, width, rng), height + radius)
    else:  # left
        return Vector2D(-radius, random_between(0, height, rng))


def spawn_enemy(
    score: int,
    width: float,
    height: float,
    rng: random.Random,
    config: SimConfig,
) -> Enemy:
    enemy_type = roll_enemy_type(score, rng, config)
    radius, health = archetype(enemy_type).roll_stats(rng)
    position = edge_position(radius, width, height, rng)
    velocity = Vector2D(random_between(-1, 1, rng), random_between(-1, 1, rng))
    enemy = Enemy(
        id=next_id("e"),
        position=position,
        velocity=velocity,
        radius=radius,
        type=enemy_type,
        health=health,
        max_health=health,
    )
    if archetype(enemy_type).spin:
        enemy.rotation = 0.0
    return enemy


def maybe_spawn(
    enemies: List[Enemy],
    score: int,
    width: float,
    height: float,
    rng: random.Random,
    config: SimConfig,
) -> Optional[Enemy]:
    """At most one spawn per tick, only while below the cap"""
    if len(enemies) >= enemy_cap(score, config):
        return None
    enemy = spawn_enemy(score, width, height, rng, config)
    enemies.append(enemy)
    logger.debug("spawned %s %s r=%.1f hp=%.1f", enemy.type.value, enemy.id, enemy.radius, enemy.health)
    return enemy
