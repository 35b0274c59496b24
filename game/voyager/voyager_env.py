"""
VoyagerEnv - Cosmic Voyager as a gymnasium environment
------------------------------------------------------
- Wraps the frame-driven Simulation; one env step = one tick
- Discrete MultiDiscrete action space: [thrust(2), turn(3), fire(2)]
- Vector observation: ship state + top-K nearest enemies + top-M nearest
  enemy lasers, all scaled into [-1, 1]
- Reward from score gained, damage taken and death

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.voyager.voyager_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .audio import RecordingCueSink
from .config import ENV_CONFIG, REWARD_CONFIG, SimConfig
from .controls import FIRE, FORWARD, LEFT, RIGHT
from .entities import GameStatus
from .simulation import Simulation
from .utils import clamp, seed_everything


class VoyagerEnv(gym.Env):
    """Cosmic Voyager environment, rendered with Arcade"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = ENV_CONFIG["width"],
        height: int = ENV_CONFIG["height"],
        frame_ms: float = ENV_CONFIG["frame_ms"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        m_lasers: int = ENV_CONFIG["m_lasers"],
        reward_config: Optional[Dict[str, float]] = None,
        sim_config: Optional[SimConfig] = None,
        sim_overrides: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_lasers = m_lasers
        self.rewards = dict(REWARD_CONFIG)
        if reward_config:
            self.rewards.update(reward_config)

        if sim_config is None:
            sim_config = SimConfig.from_dict(
                {"width": width, "height": height, "frame_ms": frame_ms, **(sim_overrides or {})}
            )
        self.sim_config = sim_config
        self.cues = RecordingCueSink()
        self.sim = Simulation(self.sim_config, audio=self.cues)

        # thrust: 0/1, turn: 0 none, 1 left, 2 right, fire: 0/1
        self.action_space = spaces.MultiDiscrete([2, 3, 2])

        # Ship: pos(2) vel(2) heading cos/sin(2) health(1)
        # Each enemy: rel pos(2) rel vel(2) radius(1)
        # Each enemy laser: rel pos(2)
        obs_dim = 7 + (self.k_enemies * 5) + (self.m_lasers * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._last_health = 0.0
        self._last_score = 0
        self._kills = 0
        self._damage = 0.0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self.sim.rng.seed(seed)

        self.sim.start()
        self.cues.drain()
        self._step_count = 0
        self._last_health = self.sim.player.health
        self._last_score = 0
        self._kills = 0
        self._damage = 0.0

        return self._get_obs(), self._get_info()

    def step(self, action):
        thrust, turn, fire = int(action[0]), int(action[1]), int(action[2])
        inputs = set()
        if thrust:
            inputs.add(FORWARD)
        if turn == 1:
            inputs.add(LEFT)
        elif turn == 2:
            inputs.add(RIGHT)
        if fire:
            inputs.add(FIRE)

        self.sim.advance(inputs, self.frame_ms)
        self.cues.drain()
        self._kills += len(self.sim.last_outcome.enemies_destroyed)
        self._damage += self.sim.last_outcome.damage_taken

        reward = self._compute_reward()

        # Termination: the ship is gone, no need to sit through the death delay
        terminated = self.sim.player is None or self.sim.status is GameStatus.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        sim = self.sim
        w, h = sim.width, sim.height
        vmax = max(1e-6, self.sim_config.player_max_speed)
        player = sim.player

        if player is None:
            return np.zeros(self.observation_space.shape, dtype=np.float32)

        px, py = player.position.x, player.position.y
        obs_parts: List[float] = [
            clamp(px / w * 2 - 1, -1, 1), clamp(py / h * 2 - 1, -1, 1),
            clamp(player.velocity.x / vmax, -1, 1), clamp(player.velocity.y / vmax, -1, 1),
            math.cos(player.rotation), math.sin(player.rotation),
            clamp(player.health / player.max_health * 2 - 1, -1, 1),
        ]

        enemies_sorted = sorted(
            sim.enemies,
            key=lambda e: (e.position.x - px) ** 2 + (e.position.y - py) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.position.x - px) / w, -1, 1),
                    clamp((e.position.y - py) / h, -1, 1),
                    clamp((e.velocity.x - player.velocity.x) / vmax, -1, 1),
                    clamp((e.velocity.y - player.velocity.y) / vmax, -1, 1),
                    clamp(e.radius / 60.0, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        hostile = sorted(
            (l for l in sim.lasers if not l.is_player_laser),
            key=lambda l: (l.position.x - px) ** 2 + (l.position.y - py) ** 2
        )
        for i in range(self.m_lasers):
            if i < len(hostile):
                l = hostile[i]
                obs_parts += [clamp((l.position.x - px) / w, -1, 1),
                              clamp((l.position.y - py) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0

        gained = self.sim.score - self._last_score
        self._last_score = self.sim.score
        reward += r["R_SCORE"] * gained

        reward -= r["R_DAMAGE"] * self.sim.last_outcome.damage_taken
        reward -= r["R_TIME"]

        if self.sim.player is None and self._last_health > 0:
            reward -= r["R_DEATH"]
        self._last_health = self.sim.player.health if self.sim.player else 0.0

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        player = self.sim.player
        return {
            "health": player.health if player else 0.0,
            "score": self.sim.score,
            "num_enemies": len(self.sim.enemies),
            "num_lasers": len(self.sim.lasers),
            "num_particles": len(self.sim.particles),
            "enemies_killed": self._kills,
            "damage_taken": self._damage,
            "status": self.sim.status.value,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # imported here so headless training never needs a display
            from .window import VoyagerWindow
            self._window = VoyagerWindow(self.sim, drive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True):
    """Run a random episode for testing"""
    env = VoyagerEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=42)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.frame_ms / 1000.0)

    print(f"Random episode return: {total:.3f}  score: {info['score']}")
    env.close()


if __name__ == "__main__":
    run_random_episode(render=True)
