from __future__ import annotations

import pytest

arcade = pytest.importorskip("arcade")

from game.voyager import window as window_mod  # noqa: E402
from game.voyager.simulation import Simulation  # noqa: E402


@pytest.fixture()
def headless_window(monkeypatch, sim: Simulation):
    """VoyagerWindow without a GL context; background colour calls recorded"""
    calls = []
    monkeypatch.setattr(arcade.Window, "__init__", lambda self, *a, **kw: None)
    monkeypatch.setattr(window_mod.arcade, "set_background_color", lambda color: calls.append(color))
    win = window_mod.VoyagerWindow(sim)
    win.clear = lambda *a, **kw: None
    win.draw_background = lambda snap: None
    win.draw_ship = lambda player: None
    win.draw_hud = lambda snap: None
    return win, calls


def test_background_colour_is_set_once(headless_window) -> None:
    win, calls = headless_window
    assert calls == [arcade.color.BLACK]
    for _ in range(3):
        win.on_draw()
    assert calls == [arcade.color.BLACK]


def test_key_bindings_map_to_inputs(headless_window) -> None:
    win, _ = headless_window
    win.on_key_press(arcade.key.W, 0)
    win.on_key_press(arcade.key.SPACE, 0)
    assert win.held == {window_mod.FORWARD, window_mod.FIRE}
    win.on_key_release(arcade.key.W, 0)
    assert win.held == {window_mod.FIRE}
