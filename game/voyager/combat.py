"""
Collision & combat resolution

Runs once per tick after motion, spawning and enemy AI, in a fixed order:
player lasers vs enemies, player vs enemies, enemy lasers vs player. Hit
tests are recomputed from positions every tick; nothing is remembered
between ticks.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .archetypes import archetype
from .audio import AudioCue, CueSink
from .config import SimConfig
from .entities import Enemy, Laser, Particle, Player, Vector2D, next_id
from .utils import check_collision, random_between

PLAYER_HIT_COLOR = "#00f2ff"
RAM_COLOR = "#ffbe0b"
ENEMY_HIT_COLOR = "#ff4136"


@dataclass
class CombatOutcome:
    """What happened during one resolution pass"""
    score_gained: int = 0
    enemies_destroyed: List[Enemy] = field(default_factory=list)
    rammed: Optional[Enemy] = None
    damage_taken: float = 0.0


def explode(
    particles: List[Particle],
    position: Vector2D,
    count: float,
    color: str,
    size: float,
    rng: random.Random,
):
    """Burst of ``count`` particles at ``position``; fractional counts round up"""
    for _ in range(int(math.ceil(count))):
        particles.append(Particle(
            id=next_id("p"),
            position=position.copy(),
            velocity=Vector2D(random_between(-3, 3, rng), random_between(-3, 3, rng)),
            radius=rng.random() * size,
            life=1.0,
            max_life=1.0,
            color=color,
            start_size=rng.random() * size + 1,
        ))


def resolve_player_lasers(
    enemies: List[Enemy],
    lasers: List[Laser],
    particles: List[Particle],
    rng: random.Random,
    audio: CueSink,
    config: SimConfig,
    outcome: CombatOutcome,
):
    """
    Sweep enemies in order. Every player laser overlapping the current enemy
    damages it and is consumed, so a laser only ever counts against the
    first enemy it overlaps. Returns the surviving (enemies, lasers).
    """
    survivors = []
    for enemy in enemies:
        remaining = []
        for laser in lasers:
            if laser.is_player_laser and check_collision(laser, enemy):
                enemy.health -= config.laser_damage
                explode(particles, laser.position, 5, PLAYER_HIT_COLOR, 2, rng)
            else:
                remaining.append(laser)
        lasers = remaining

        if enemy.health <= 0:
            audio.emit(AudioCue.EXPLOSION)
            explode(particles, enemy.position, enemy.radius,
                    archetype(enemy.type).explosion_color, enemy.radius / 2, rng)
            outcome.score_gained += int(math.floor(enemy.max_health * config.score_per_health))
            outcome.enemies_destroyed.append(enemy)
        else:
            survivors.append(enemy)
    return survivors, lasers


def resolve_ram(
    player: Optional[Player],
    enemies: List[Enemy],
    particles: List[Particle],
    rng: random.Random,
    config: SimConfig,
    outcome: CombatOutcome,
) -> List[Enemy]:
    """Only the first enemy overlapping the player is resolved per tick"""
    if player is None:
        return enemies
    for enemy in enemies:
        if check_collision(player, enemy):
            player.health -= config.collision_damage
            outcome.damage_taken += config.collision_damage
            outcome.rammed = enemy
            explode(particles, enemy.position, enemy.radius, RAM_COLOR, enemy.radius / 2, rng)
            return [e for e in enemies if e.id != enemy.id]
    return enemies


def resolve_enemy_lasers(
    player: Optional[Player],
    lasers: List[Laser],
    particles: List[Particle],
    rng: random.Random,
    config: SimConfig,
    outcome: CombatOutcome,
) -> List[Laser]:
    if player is None:
        return lasers
    remaining = []
    for laser in lasers:
        if not laser.is_player_laser and check_collision(laser, player):
            player.health -= config.enemy_laser_damage
            outcome.damage_taken += config.enemy_laser_damage
            explode(particles, laser.position, 10, ENEMY_HIT_COLOR, 3, rng)
        else:
            remaining.append(laser)
    return remaining
