from __future__ import annotations

import math
import random

import pytest

from game.voyager.audio import AudioCue, RecordingCueSink
from game.voyager.behavior import update_enemies
from game.voyager.config import SimConfig
from game.voyager.controls import FIRE, FORWARD, LEFT, RIGHT, PlayerControls
from game.voyager.entities import Enemy, EnemyType, Player, Vector2D

CFG = SimConfig(width=800, height=600)


class FixedRoll(random.Random):
    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _player(rotation: float = 0.0) -> Player:
    return Player(id="player", position=Vector2D(400, 300), velocity=Vector2D(), radius=10, rotation=rotation)


def _apply(controls, player, inputs, lasers=None, particles=None, cues=None, delta=16.0):
    lasers = [] if lasers is None else lasers
    particles = [] if particles is None else particles
    cues = cues or RecordingCueSink()
    controls.apply(player, frozenset(inputs), delta, lasers, particles, random.Random(1), cues)
    return lasers, particles, cues


def test_thrust_accelerates_along_facing_and_emits_exhaust() -> None:
    controls = PlayerControls(CFG)
    player = _player(rotation=0.0)
    _, particles, cues = _apply(controls, player, {FORWARD})

    assert player.velocity.x == pytest.approx(0.1 * 0.99)
    assert player.velocity.y == pytest.approx(0.0)
    assert cues.cues == [AudioCue.THRUST]
    assert len(particles) == 2
    for p in particles:
        assert p.life == p.max_life == 0.5
        assert p.color in ("#ffc83d", "#ff7800", "#ffffff")
        # exhaust flies backwards, within the jitter cone
        assert p.velocity.x < 0


def test_turning_is_a_fixed_step_per_tick() -> None:
    controls = PlayerControls(CFG)
    player = _player(rotation=0.0)
    _apply(controls, player, {LEFT}, delta=100.0)
    assert player.rotation == pytest.approx(-0.1)
    _apply(controls, player, {RIGHT}, delta=5.0)
    _apply(controls, player, {RIGHT}, delta=5.0)
    assert player.rotation == pytest.approx(0.1)


def test_speed_is_clamped_then_friction_applied() -> None:
    controls = PlayerControls(CFG)
    player = _player()
    player.velocity = Vector2D(30, 40)
    _apply(controls, player, set())
    assert player.velocity.length() == pytest.approx(5 * 0.99)
    assert player.velocity.x / player.velocity.y == pytest.approx(0.75)


def test_fire_respects_cooldown_on_simulation_time() -> None:
    controls = PlayerControls(CFG)
    player = _player(rotation=math.pi / 2)
    lasers = []

    _apply(controls, player, {FIRE}, lasers=lasers)
    assert len(lasers) == 1
    assert lasers[0].is_player_laser
    assert lasers[0].velocity.y == pytest.approx(7.0)
    assert lasers[0].radius == 2

    # 12 ticks of 16 ms = 192 ms later: still cooling down
    for _ in range(12):
        _apply(controls, player, {FIRE}, lasers=lasers)
    assert len(lasers) == 1

    # 200 ms exactly is not enough, the gap must exceed it
    controls2 = PlayerControls(CFG)
    l2 = []
    _apply(controls2, player, {FIRE}, lasers=l2, delta=0.0)
    _apply(controls2, player, {FIRE}, lasers=l2, delta=200.0)
    assert len(l2) == 1
    _apply(controls2, player, {FIRE}, lasers=l2, delta=1.0)
    assert len(l2) == 2


def test_controls_are_a_noop_without_a_player() -> None:
    controls = PlayerControls(CFG)
    lasers, particles, cues = _apply(controls, None, {FORWARD, FIRE, LEFT})
    assert lasers == [] and particles == [] and cues.cues == []
    assert controls.clock_ms == 16.0


def _enemy(kind: EnemyType, x: float = 100, y: float = 100) -> Enemy:
    return Enemy(id=f"{kind.value}", position=Vector2D(x, y), velocity=Vector2D(), radius=20,
                 type=kind, health=10, max_health=10,
                 rotation=0.0 if kind is EnemyType.METEOR else None)


def test_meteor_spins_and_never_fires() -> None:
    meteor = _enemy(EnemyType.METEOR)
    lasers = []
    for _ in range(10):
        update_enemies([meteor], _player(), lasers, FixedRoll(0.0), RecordingCueSink(), CFG)
    assert meteor.rotation == pytest.approx(0.1)
    assert lasers == []


def test_armed_enemies_fire_aimed_shots() -> None:
    saucer = _enemy(EnemyType.SAUCER, x=100, y=300)
    player = _player()  # at (400, 300)
    lasers = []
    cues = RecordingCueSink()
    update_enemies([saucer], player, lasers, FixedRoll(0.005), cues, CFG)

    assert len(lasers) == 1
    shot = lasers[0]
    assert not shot.is_player_laser
    assert shot.radius == 3
    assert shot.velocity.x == pytest.approx(5.0)
    assert shot.velocity.y == pytest.approx(0.0, abs=1e-9)
    assert cues.cues == [AudioCue.ENEMY_LASER]


def test_armed_enemies_hold_fire_on_a_failed_roll_or_without_target() -> None:
    mothership = _enemy(EnemyType.MOTHERSHIP)
    lasers = []
    update_enemies([mothership], _player(), lasers, FixedRoll(0.5), RecordingCueSink(), CFG)
    update_enemies([mothership], None, lasers, FixedRoll(0.0), RecordingCueSink(), CFG)
    assert lasers == []


def test_black_hole_has_no_behaviour() -> None:
    hole = _enemy(EnemyType.BLACK_HOLE)
    lasers = []
    update_enemies([hole], _player(), lasers, FixedRoll(0.0), RecordingCueSink(), CFG)
    assert lasers == [] and hole.rotation is None
