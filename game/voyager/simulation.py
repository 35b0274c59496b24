"""
Simulation - the per-frame core of Cosmic Voyager
-------------------------------------------------
- Owns the player, enemies, lasers, particles, background and score
- Drives one tick per ``advance`` call, composing the stepper, spawner,
  enemy AI and combat resolver in a fixed order
- Tracks the StartScreen -> Playing -> GameOver status machine
- Hands out immutable snapshots for renderers

The frame clock, input source, renderer and audio playback are external;
see ``window.py`` and ``voyager_env.py``.
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import AbstractSet, List, Optional, Tuple

from .audio import AudioCue, CueSink, NullCueSink
from .background import make_background
from .behavior import update_enemies
from .combat import (
    CombatOutcome,
    explode,
    resolve_enemy_lasers,
    resolve_player_lasers,
    resolve_ram,
)
from .config import ConfigError, SimConfig, SimulationStateError
from .controls import PlayerControls
from .entities import (
    Enemy,
    GameStatus,
    Laser,
    Nebula,
    Particle,
    Player,
    Star,
    Vector2D,
)
from .physics import (
    motion_scale,
    prune_lasers,
    step_lasers,
    step_particles,
    step_wrapping,
    wrap,
)
from .spawner import enemy_cap, maybe_spawn

logger = logging.getLogger(__name__)

DEATH_COLOR = "#00f2ff"


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the world after a tick"""
    player: Optional[Player]
    enemies: Tuple[Enemy, ...]
    lasers: Tuple[Laser, ...]
    particles: Tuple[Particle, ...]
    stars: Tuple[Star, ...]
    nebulas: Tuple[Nebula, ...]
    score: int
    status: GameStatus
    width: float
    height: float


class Simulation:
    """Single-owner simulation state; not reentrant, one tick at a time"""

    def __init__(
        self,
        config: Optional[SimConfig] = None,
        audio: Optional[CueSink] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or SimConfig()
        self.audio: CueSink = audio or NullCueSink()
        self.rng = random.Random(seed)

        self.width = float(self.config.width)
        self.height = float(self.config.height)

        self.status = GameStatus.START_SCREEN
        self.controls = PlayerControls(self.config)

        self.player: Optional[Player] = None
        self.enemies: List[Enemy] = []
        self.lasers: List[Laser] = []
        self.particles: List[Particle] = []
        self.stars: List[Star] = []
        self.nebulas: List[Nebula] = []
        self.score = 0

        # ms left until GameOver after the player died, None if not pending
        self._game_over_in: Optional[float] = None
        self.last_outcome = CombatOutcome()

        self.regenerate_background(self.width, self.height)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def reset(self, width: Optional[float] = None, height: Optional[float] = None):
        """Fresh player at the centre, empty world, zero score"""
        if width is not None or height is not None:
            self.resize(
                width if width is not None else self.width,
                height if height is not None else self.height,
            )

        cfg = self.config
        self.player = Player(
            id="player",
            position=Vector2D(self.width / 2, self.height / 2),
            velocity=Vector2D(0.0, 0.0),
            radius=cfg.player_size / 2,
            health=cfg.player_max_health,
            max_health=cfg.player_max_health,
            rotation=cfg.player_start_rotation,
        )
        self.enemies = []
        self.lasers = []
        self.particles = []
        self.score = 0
        self._game_over_in = None
        self.last_outcome = CombatOutcome()
        self.controls.reset()

    def start(self):
        self.reset()
        self.status = GameStatus.PLAYING
        logger.info("game started (%dx%d)", self.width, self.height)

    def resize(self, width: float, height: float):
        self._set_viewport(width, height)
        self.regenerate_background(width, height)

    def _set_viewport(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ConfigError(f"viewport must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    def regenerate_background(self, width: float, height: float):
        self.stars, self.nebulas = make_background(
            width, height, self.config.star_count, self.config.nebula_count, self.rng
        )
        # background never changes between regenerations, copy it once
        self._stars_view = tuple(copy.deepcopy(self.stars))
        self._nebulas_view = tuple(copy.deepcopy(self.nebulas))

    @property
    def game_over_pending(self) -> bool:
        return self._game_over_in is not None

    # ----------------------------
    # Tick
    # ----------------------------

    def advance(self, inputs: AbstractSet[str], delta_ms: float):
        if self.status is not GameStatus.PLAYING:
            raise SimulationStateError(f"advance() requires PLAYING, status is {self.status.name}")
        if delta_ms < 0:
            raise ConfigError(f"delta_ms must be non-negative, got {delta_ms}")

        cfg = self.config
        k = motion_scale(delta_ms, cfg)
        w, h = self.width, self.height

        # controls
        self.controls.apply(self.player, inputs, delta_ms, self.lasers,
                            self.particles, self.rng, self.audio, k)

        # motion
        if self.player is not None:
            step_wrapping([self.player], w, h, k)
        self.lasers = step_lasers(self.lasers, w, h, k)
        self.particles = step_particles(self.particles, delta_ms, w, h, k)
        step_wrapping(self.enemies, w, h, k)

        # spawn + AI
        maybe_spawn(self.enemies, self.score, w, h, self.rng, cfg)
        update_enemies(self.enemies, self.player, self.lasers, self.rng, self.audio, cfg, k)

        # combat
        outcome = CombatOutcome()
        self.enemies, self.lasers = resolve_player_lasers(
            self.enemies, self.lasers, self.particles, self.rng, self.audio, cfg, outcome)
        self.score += outcome.score_gained
        self.enemies = resolve_ram(self.player, self.enemies, self.particles, self.rng, cfg, outcome)
        self.lasers = resolve_enemy_lasers(self.player, self.lasers, self.particles, self.rng, cfg, outcome)
        self.last_outcome = outcome

        died = self._check_player_death()

        # enemy shots fired from just outside the edge never enter play
        self.lasers = prune_lasers(self.lasers, w, h)
        for p in self.particles:
            wrap(p, w, h)

        if not died:
            self._tick_game_over(delta_ms)

    def _check_player_death(self) -> bool:
        player = self.player
        if player is None or player.health > 0:
            return False
        self.audio.emit(AudioCue.EXPLOSION)
        explode(self.particles, player.position, 40, DEATH_COLOR, 20, self.rng)
        self.player = None
        # the death burst plays out before the game-over overlay appears
        self._game_over_in = self.config.game_over_delay_ms
        logger.info("player destroyed, score %d", self.score)
        return True

    def _tick_game_over(self, delta_ms: float):
        if self._game_over_in is None:
            return
        self._game_over_in -= delta_ms
        if self._game_over_in <= 0:
            self._game_over_in = None
            self.status = GameStatus.GAME_OVER
            logger.info("game over, final score %d", self.score)

    # ----------------------------
    # Read side
    # ----------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            player=copy.deepcopy(self.player),
            enemies=tuple(copy.deepcopy(self.enemies)),
            lasers=tuple(copy.deepcopy(self.lasers)),
            particles=tuple(copy.deepcopy(self.particles)),
            stars=self._stars_view,
            nebulas=self._nebulas_view,
            score=self.score,
            status=self.status,
            width=self.width,
            height=self.height,
        )

    def enemy_cap(self) -> int:
        return enemy_cap(self.score, self.config)
