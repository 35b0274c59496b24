from __future__ import annotations

import dataclasses
import math

import pytest

from game.voyager.audio import AudioCue, RecordingCueSink
from game.voyager.config import ConfigError, SimConfig, SimulationStateError
from game.voyager.controls import FIRE, FORWARD, LEFT, RIGHT
from game.voyager.entities import Enemy, EnemyType, GameStatus, Laser, Vector2D
from game.voyager.simulation import Simulation

TICK = 1000 / 60


def _meteor(eid: str, x: float, y: float, health: float = 5, radius: float = 20) -> Enemy:
    return Enemy(id=eid, position=Vector2D(x, y), velocity=Vector2D(), radius=radius,
                 type=EnemyType.METEOR, health=health, max_health=health, rotation=0.0)


def test_new_simulation_waits_on_the_start_screen(config: SimConfig) -> None:
    sim = Simulation(config)
    assert sim.status is GameStatus.START_SCREEN
    assert sim.player is None
    with pytest.raises(SimulationStateError):
        sim.advance(set(), TICK)


def test_start_places_player_at_centre(sim: Simulation) -> None:
    assert sim.status is GameStatus.PLAYING
    p = sim.player
    assert (p.position.x, p.position.y) == (400, 300)
    assert p.rotation == pytest.approx(-math.pi / 2)
    assert p.health == p.max_health == 100
    assert p.radius == 10
    assert sim.score == 0
    assert sim.enemies == sim.lasers == sim.particles == []


def test_reset_is_idempotent(sim: Simulation) -> None:
    for _ in range(120):
        sim.advance({FORWARD, FIRE, LEFT}, TICK)
    sim.score = 1234

    sim.reset()
    first = sim.snapshot()
    sim.reset()
    second = sim.snapshot()

    assert first == second
    assert first.score == 0
    assert first.enemies == first.lasers == first.particles == ()
    assert first.player.health == first.player.max_health


def test_reset_can_change_viewport(sim: Simulation) -> None:
    sim.reset(1000, 500)
    assert (sim.player.position.x, sim.player.position.y) == (500, 250)
    with pytest.raises(ConfigError):
        sim.reset(-1, 500)
    with pytest.raises(ConfigError):
        sim.reset(0, 500)
    with pytest.raises(ConfigError):
        sim.reset(500, 0)
    assert (sim.width, sim.height) == (1000, 500)


def test_reset_with_new_viewport_regenerates_background() -> None:
    sim = Simulation(SimConfig(width=800, height=600), seed=3)
    sim.reset(200, 100)
    snap = sim.snapshot()
    assert len(snap.stars) == 200
    assert all(0 <= s.position.x < 200 and 0 <= s.position.y < 100 for s in snap.stars)
    assert all(0 <= n.position.x < 200 and 0 <= n.position.y < 100 for n in snap.nebulas)

    # same viewport keeps the starfield
    before = sim.snapshot().stars
    sim.reset()
    assert sim.snapshot().stars == before


def test_first_spawn_is_a_meteor(sim: Simulation) -> None:
    ticks = 0
    while not sim.enemies:
        sim.advance(set(), TICK)
        ticks += 1
        assert ticks < 10
    enemy = sim.enemies[0]
    assert enemy.type is EnemyType.METEOR
    assert 15 <= enemy.radius <= 40
    assert enemy.health == pytest.approx(enemy.radius / 2)


def test_one_spawn_per_tick(sim: Simulation) -> None:
    sim.advance(set(), TICK)
    assert len(sim.enemies) == 1
    sim.advance(set(), TICK)
    assert len(sim.enemies) == 2


def test_laser_kill_end_to_end(sim: Simulation, cues: RecordingCueSink) -> None:
    target = _meteor("target", 200, 200, health=5)
    sim.enemies = [target]
    sim.lasers = [Laser(id="shot", position=Vector2D(200, 200), velocity=Vector2D(), radius=2)]

    sim.advance(set(), TICK)

    assert target.health == 0
    assert all(e.id != "target" for e in sim.enemies)
    assert all(l.id != "shot" for l in sim.lasers)
    assert sim.score == math.floor(5 * 5)
    assert AudioCue.EXPLOSION in cues.cues


def test_only_one_ram_per_tick(sim: Simulation) -> None:
    sim.enemies = [_meteor("a", 400, 300), _meteor("b", 402, 300)]

    sim.advance(set(), TICK)

    ids = [e.id for e in sim.enemies]
    assert "a" not in ids and "b" in ids
    assert sim.player.health == 80
    assert sim.last_outcome.damage_taken == 20
    assert sim.score == 0


def test_low_health_ram_loses_exactly_twenty(sim: Simulation) -> None:
    sim.player.health = 5
    sim.enemies = [_meteor("a", 400, 300), _meteor("b", 398, 300), _meteor("c", 400, 302)]

    sim.advance(set(), TICK)

    assert sim.last_outcome.damage_taken == 20
    remaining = {e.id for e in sim.enemies}
    assert {"b", "c"} <= remaining and "a" not in remaining
    assert sim.player is None


def test_game_over_waits_for_the_death_explosion(sim: Simulation, cues: RecordingCueSink) -> None:
    sim.player.health = 5
    sim.lasers = [Laser(id="el", position=Vector2D(400, 300), velocity=Vector2D(), radius=3,
                        is_player_laser=False)]

    sim.advance(set(), TICK)

    assert sim.player is None
    assert sim.status is GameStatus.PLAYING
    assert sim.game_over_pending
    assert cues.count(AudioCue.EXPLOSION) == 1
    assert len(sim.particles) >= 40

    sim.advance({FIRE, FORWARD}, 500)  # no player, controls are a no-op
    assert sim.status is GameStatus.PLAYING
    sim.advance(set(), 499)
    assert sim.status is GameStatus.PLAYING
    sim.advance(set(), 1)
    assert sim.status is GameStatus.GAME_OVER
    assert not sim.game_over_pending

    with pytest.raises(SimulationStateError):
        sim.advance(set(), TICK)

    sim.start()
    assert sim.status is GameStatus.PLAYING
    assert sim.player is not None


def test_invariants_hold_over_a_long_run(config: SimConfig) -> None:
    sim = Simulation(config, seed=99)
    sim.start()
    sim.score = 1500  # unlock every archetype
    inputs_cycle = [{FORWARD, FIRE}, {LEFT, FIRE}, {FORWARD, RIGHT}, set()]

    for i in range(2000):
        if sim.status is not GameStatus.PLAYING:
            sim.start()
            sim.score = 1500
        sim.advance(inputs_cycle[i % 4], TICK)

        assert len(sim.enemies) <= sim.enemy_cap()
        assert all(p.life > 0 for p in sim.particles)
        for l in sim.lasers:
            assert 0 < l.position.x < sim.width and 0 < l.position.y < sim.height
        wrapping = list(sim.enemies) + list(sim.particles)
        if sim.player is not None:
            wrapping.append(sim.player)
        for o in wrapping:
            assert -o.radius <= o.position.x <= sim.width + o.radius
            assert -o.radius <= o.position.y <= sim.height + o.radius


def test_thrust_and_fire_emit_cues(sim: Simulation, cues: RecordingCueSink) -> None:
    sim.advance({FORWARD, FIRE}, TICK)
    assert AudioCue.THRUST in cues.cues
    assert AudioCue.LASER in cues.cues
    # facing up: the ship moved up, the laser flies up
    assert sim.player.position.y < 300
    assert sim.lasers[0].velocity.y == pytest.approx(-7.0)


def test_snapshot_is_a_detached_copy(sim: Simulation) -> None:
    sim.advance({FORWARD}, TICK)
    snap = sim.snapshot()

    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 10  # type: ignore[misc]

    snap.player.position.x = -999
    snap.enemies[0].health = -1
    assert sim.player.position.x != -999
    assert sim.enemies[0].health > 0
    assert isinstance(snap.enemies, tuple)
    assert len(snap.stars) == 200 and len(snap.nebulas) == 5


def test_time_scaled_motion() -> None:
    sim = Simulation(SimConfig(width=800, height=600, time_scaled=True, frame_ms=10.0), seed=1)
    sim.start()
    sim.player.velocity = Vector2D(1.0, 0.0)
    sim.advance(set(), 20.0)
    # moved two frames' worth before friction kicked in
    assert sim.player.position.x == pytest.approx(400 + 2 * 0.99 ** 2)


def test_negative_delta_is_rejected(sim: Simulation) -> None:
    with pytest.raises(ConfigError):
        sim.advance(set(), -1)


def test_resize_regenerates_background(sim: Simulation) -> None:
    before = sim.snapshot().stars
    sim.resize(320, 200)
    after = sim.snapshot()
    assert (after.width, after.height) == (320, 200)
    assert after.stars != before
    assert all(0 <= s.position.x < 320 and 0 <= s.position.y < 200 for s in after.stars)
