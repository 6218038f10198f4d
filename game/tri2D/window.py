"""
Arcade window: draws the round and feeds key presses into the loop
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import arcade

from .controls import KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT
from .entities import Color, Triangle
from .loop import GameLoop
from .utils import format_time, triangle_vertices
from .world import GameState

LOGGER = logging.getLogger(__name__)

KEY_MAP = {
    arcade.key.UP: KEY_UP,
    arcade.key.W: KEY_UP,
    arcade.key.DOWN: KEY_DOWN,
    arcade.key.S: KEY_DOWN,
    arcade.key.LEFT: KEY_LEFT,
    arcade.key.A: KEY_LEFT,
    arcade.key.RIGHT: KEY_RIGHT,
    arcade.key.D: KEY_RIGHT,
}


def to_rgba255(color: Color):
    return tuple(int(round(c * 255)) for c in color)


class TriangleWindow(arcade.Window):
    """Arcade window acting as renderer, input source and lifecycle UI"""

    def __init__(
        self,
        loop: GameLoop,
        width: int = 800,
        height: int = 800,
        title: str = "Triangle Collector",
        background=(18, 18, 22),
    ):
        super().__init__(width, height, title)
        self.loop = loop
        self.background_color = background

        # Colors
        self.TIMER_C = (255, 255, 0)
        self.HUD_C = (220, 220, 220)
        self.BANNER_C = (240, 240, 240)

        self._objects: Optional[Sequence[Triangle]] = None
        self._remaining_ms: Optional[float] = None
        self._banner = ""

    # ----------------------------
    # Renderer / LifecycleUI
    # ----------------------------

    def render(self, objects):
        self._objects = list(objects)

    def display_timer(self, remaining_ms):
        self._remaining_ms = remaining_ms

    def show_rules(self, text):
        LOGGER.info(text)
        self._banner = "Arrow keys / WASD to move. Collect every non-red triangle."

    def show_outcome(self, state, score):
        if state is GameState.WON:
            self._banner = f"Congratulations! You won! Score: {score}   (R to play again)"
        else:
            self._banner = f"Game over! You lost. Score: {score}   (R to play again)"
        LOGGER.info(self._banner)

    # ----------------------------
    # Arcade callbacks
    # ----------------------------

    def to_pixels(self, x: float, y: float):
        return (x + 1) / 2 * self.width, (y + 1) / 2 * self.height

    def on_draw(self):
        self.clear()

        objects = self._objects if self._objects is not None else self.loop.world.game_objects
        for obj in objects:
            (x1, y1), (x2, y2), (x3, y3) = (
                self.to_pixels(vx, vy) for vx, vy in triangle_vertices(obj.x, obj.y, obj.size)
            )
            arcade.draw_triangle_filled(x1, y1, x2, y2, x3, y3, to_rgba255(obj.color))

        remaining = self._remaining_ms if self._remaining_ms is not None else self.loop.remaining_ms
        arcade.draw_text(f"Time: {format_time(remaining)}", 10, self.height - 30, self.TIMER_C, 20, bold=True)
        arcade.draw_text(f"Score: {self.loop.world.score}", 10, self.height - 56, self.HUD_C, 14)
        if self._banner:
            arcade.draw_text(self._banner, self.width / 2, 20, self.BANNER_C, 14, anchor_x="center")

    def on_update(self, delta_time: float):
        # Frame cadence comes from arcade; the loop just runs one tick
        if self.loop.running:
            self.loop.tick()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
        elif symbol == arcade.key.R and not self.loop.running:
            self._objects = None
            self.loop.start()
        elif symbol in KEY_MAP:
            self.loop.set_key_state(KEY_MAP[symbol], True)

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in KEY_MAP:
            self.loop.set_key_state(KEY_MAP[symbol], False)
