"""
Arcade front end: keyboard input, frame clock, rendering and UI screens

The simulation works in y-down screen space; arcade is y-up, so every
draw call flips y against the window height.
"""

from __future__ import annotations

import argparse
import math
import os
import random
from typing import Iterable, List, Optional, Set, Tuple

import arcade
from arcade.types import Color

from .archetypes import archetype
from .audio import AudioCue, CueSink
from .config import SimConfig
from .controls import FIRE, FORWARD, LEFT, RIGHT
from .entities import GameStatus, Player
from .simulation import Simulation, Snapshot

KEY_BINDINGS = {
    arcade.key.UP: FORWARD,
    arcade.key.W: FORWARD,
    arcade.key.LEFT: LEFT,
    arcade.key.A: LEFT,
    arcade.key.RIGHT: RIGHT,
    arcade.key.D: RIGHT,
    arcade.key.SPACE: FIRE,
}

START_KEYS = (arcade.key.ENTER, arcade.key.RETURN, arcade.key.SPACE)

SHIP_FILL = "#0d2b2c"
SHIP_LINE = "#00f2ff"
PLAYER_LASER = "#00f2ff"
ENEMY_LASER = "#ff4136"
TITLE_C = "#67e8f9"
GAME_OVER_C = "#ef4444"

_colors = {}


def hex_color(value: str, alpha: float = 1.0) -> Color:
    """Cached hex -> arcade Color, with alpha in [0, 1]"""
    base = _colors.get(value)
    if base is None:
        base = _colors[value] = Color.from_hex_string(value)
    return Color(base.r, base.g, base.b, int(255 * max(0.0, min(1.0, alpha))))


class VoyagerWindow(arcade.Window):
    """Arcade window that plays (or just shows) a Simulation"""

    def __init__(self, sim: Simulation, drive: bool = True, title: str = "Cosmic Voyager"):
        super().__init__(int(sim.width), int(sim.height), title, resizable=drive)
        self.sim = sim
        # drive=False: someone else ticks the simulation (e.g. the RL env)
        self.drive = drive
        self.held: Set[str] = set()
        # meteor shimmer only, kept apart from the simulation rng
        self._jitter = random.Random()
        self.BG = arcade.color.BLACK
        self.HUD_C = arcade.color.WHITE
        arcade.set_background_color(self.BG)

    # ----------------------------
    # Input + frame clock
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in KEY_BINDINGS:
            self.held.add(KEY_BINDINGS[symbol])
        if self.drive and symbol in START_KEYS and self.sim.status is not GameStatus.PLAYING:
            self.held.clear()
            self.sim.start()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in KEY_BINDINGS:
            self.held.discard(KEY_BINDINGS[symbol])

    def on_update(self, delta_time: float):
        if self.drive and self.sim.status is GameStatus.PLAYING:
            self.sim.advance(frozenset(self.held), delta_time * 1000.0)

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        if width > 0 and height > 0:
            self.sim.resize(width, height)

    # ----------------------------
    # Drawing
    # ----------------------------

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x, self.height - y

    def transform(self, points: Iterable[Tuple[float, float]], x: float, y: float,
                  rotation: float = 0.0) -> List[Tuple[float, float]]:
        c, s = math.cos(rotation), math.sin(rotation)
        return [self.to_screen(x + lx * c - ly * s, y + lx * s + ly * c) for lx, ly in points]

    def on_draw(self):
        self.clear()
        snap = self.sim.snapshot()

        self.draw_background(snap)
        if snap.player is not None:
            self.draw_ship(snap.player)
        for l in snap.lasers:
            sx, sy = self.to_screen(l.position.x, l.position.y)
            arcade.draw_circle_filled(sx, sy, l.radius, hex_color(PLAYER_LASER if l.is_player_laser else ENEMY_LASER))
        for p in snap.particles:
            if p.radius > 0:
                sx, sy = self.to_screen(p.position.x, p.position.y)
                arcade.draw_circle_filled(sx, sy, p.radius, hex_color(p.color, p.life_ratio))
        for e in snap.enemies:
            kind = archetype(e.type)
            if kind.outline is None:
                continue
            pts = self.transform(kind.outline(e.radius, self._jitter), e.position.x, e.position.y, e.rotation or 0.0)
            arcade.draw_polygon_filled(pts, hex_color(kind.fill_color))
            arcade.draw_polygon_outline(pts, hex_color(kind.line_color), kind.line_width)

        self.draw_hud(snap)

    def draw_background(self, snap: Snapshot):
        for s in snap.stars:
            sx, sy = self.to_screen(s.position.x, s.position.y)
            arcade.draw_circle_filled(sx, sy, max(s.size, 0.5), Color(255, 255, 255, int(255 * s.opacity)))
        for n in snap.nebulas:
            # radial fade approximated with concentric discs
            sx, sy = self.to_screen(n.position.x, n.position.y)
            rings = 6
            for i in range(rings, 0, -1):
                arcade.draw_circle_filled(sx, sy, n.size * i / rings, hex_color(n.color, n.opacity / rings))

    def draw_ship(self, p: Player):
        r = p.radius
        hull = [(r, 0.0), (-r / 2, -r / 2), (-r / 2, r / 2)]
        pts = self.transform(hull, p.position.x, p.position.y, p.rotation)
        arcade.draw_polygon_filled(pts, hex_color(SHIP_FILL))
        arcade.draw_polygon_outline(pts, hex_color(SHIP_LINE), 2)

    def draw_hud(self, snap: Snapshot):
        if snap.player is not None:
            bar_w, bar_h = 200, 10
            x0, y0 = 20, 20
            arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, arcade.color.RED)
            fill = bar_w * max(0.0, snap.player.health / snap.player.max_health)
            if fill > 0:
                arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, arcade.color.GREEN)

        arcade.draw_text(f"Score: {snap.score}", 20, self.height - 48, self.HUD_C, 24)

        cx, cy = self.width / 2, self.height / 2
        if snap.status is GameStatus.START_SCREEN:
            arcade.draw_text("COSMIC VOYAGER", cx, cy + 40, hex_color(TITLE_C), 56, anchor_x="center", bold=True)
            arcade.draw_text("Press ENTER to start", cx, cy - 30, self.HUD_C, 22, anchor_x="center")
        elif snap.status is GameStatus.GAME_OVER:
            arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, Color(0, 0, 0, 128))
            arcade.draw_text("GAME OVER", cx, cy + 40, hex_color(GAME_OVER_C), 64, anchor_x="center", bold=True)
            arcade.draw_text(f"Final Score: {snap.score}", cx, cy - 20, self.HUD_C, 30, anchor_x="center")
            arcade.draw_text("Press ENTER to restart", cx, cy - 70, self.HUD_C, 20, anchor_x="center")


def load_cue_sink(sound_dir: Optional[str]) -> Optional[CueSink]:
    """Arcade sink over ``<sound_dir>/<cue>.wav`` files, if a dir is given"""
    if not sound_dir:
        return None
    from .sound import ArcadeCueSink

    files = {}
    for cue in AudioCue:
        path = os.path.join(sound_dir, f"{cue.value}.wav")
        if os.path.exists(path):
            files[cue] = path
    print(f"[CosmicVoyager] Loaded {len(files)}/{len(AudioCue)} sounds from {sound_dir}")
    return ArcadeCueSink(files)


def main():
    parser = argparse.ArgumentParser(description="Play Cosmic Voyager")
    parser.add_argument("--width", type=int, default=1280, help="Window width (default: 1280)")
    parser.add_argument("--height", type=int, default=720, help="Window height (default: 720)")
    parser.add_argument("--sounds", type=str, default=None,
                        help="Directory with laser.wav, enemyLaser.wav, thrust.wav, explosion.wav")
    parser.add_argument("--time-scaled", action="store_true",
                        help="Scale motion by frame time instead of stepping per frame")
    args = parser.parse_args()

    config = SimConfig.from_dict({"width": args.width, "height": args.height, "time_scaled": args.time_scaled})
    sim = Simulation(config, audio=load_cue_sink(args.sounds))
    VoyagerWindow(sim)
    arcade.run()


if __name__ == "__main__":
    main()
