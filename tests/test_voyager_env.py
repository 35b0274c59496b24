from __future__ import annotations

import numpy as np
import pytest

from game.voyager import VoyagerEnv
from game.voyager.config import ConfigError
from game.voyager.entities import Laser, Vector2D


def test_reset_returns_observation_in_space() -> None:
    env = VoyagerEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["health"] == 100
    assert info["score"] == 0
    assert info["status"] == "playing"


def test_random_rollout_stays_in_bounds() -> None:
    env = VoyagerEnv(max_steps=300)
    env.reset(seed=1)
    env.action_space.seed(1)
    truncated = terminated = False
    steps = 0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        steps += 1
    assert steps <= 300
    env.close()


def test_same_seed_same_episode() -> None:
    a, b = VoyagerEnv(), VoyagerEnv()
    obs_a, _ = a.reset(seed=7)
    obs_b, _ = b.reset(seed=7)
    for _ in range(50):
        obs_a, ra, *_ = a.step([1, 1, 1])
        obs_b, rb, *_ = b.step([1, 1, 1])
    np.testing.assert_allclose(obs_a, obs_b)


def test_death_terminates_with_penalty() -> None:
    env = VoyagerEnv()
    env.reset(seed=3)
    sim = env.sim
    sim.player.health = 5
    sim.lasers = [Laser(id="el", position=Vector2D(sim.player.position.x, sim.player.position.y),
                        velocity=Vector2D(), radius=3, is_player_laser=False)]
    obs, reward, terminated, truncated, info = env.step([0, 0, 0])
    assert terminated
    assert reward < -env.rewards["R_DEATH"] + 1e-6
    assert info["health"] == 0.0
    assert info["damage_taken"] == 10
    assert not obs.any()


def test_sim_overrides_reach_the_simulation() -> None:
    env = VoyagerEnv(width=400, height=300, sim_overrides={"enemy_fire_chance": 0.0, "spawn_base": 2})
    assert env.sim_config.width == 400
    assert env.sim_config.enemy_fire_chance == 0.0
    assert env.sim.enemy_cap() == 2

    with pytest.raises(ConfigError):
        VoyagerEnv(sim_overrides={"warp_drive": True})
