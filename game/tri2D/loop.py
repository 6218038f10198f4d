"""
Round driver: wall-clock timing, one world update per tick, hand-off to the view
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol, Sequence

from .controls import InputState
from .entities import Triangle
from .world import GameState, TriangleWorld

LOGGER = logging.getLogger(__name__)

RULES = (
    "Game rules: Collect all non-red triangles using the green triangle. "
    "Avoid red triangles. Use arrow keys to move and get started. "
    "The game ends after {minutes} minute(s)."
)


class GameInitError(RuntimeError):
    """A collaborator (window, renderer) could not be set up; the round never starts"""


class Renderer(Protocol):
    def render(self, objects: Sequence[Triangle]) -> None: ...

    def display_timer(self, remaining_ms: float) -> None: ...


class LifecycleUI(Protocol):
    def show_rules(self, text: str) -> None: ...

    def show_outcome(self, state: GameState, score: int) -> None: ...


class NullRenderer:
    """Keeps the last frame around instead of drawing it"""

    def __init__(self):
        self.frames = 0
        self.last_objects: Sequence[Triangle] = ()
        self.last_remaining_ms: Optional[float] = None

    def render(self, objects):
        self.frames += 1
        self.last_objects = list(objects)

    def display_timer(self, remaining_ms):
        self.last_remaining_ms = remaining_ms


class LogUI:
    def show_rules(self, text):
        LOGGER.info(text)

    def show_outcome(self, state, score):
        if state is GameState.WON:
            LOGGER.info("Congratulations! You won! Score: %d", score)
        else:
            LOGGER.info("Game over! You lost. Score: %d", score)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameLoop:
    """
    Drives one round of a TriangleWorld.

    The host calls tick() once per frame for as long as it returns True;
    the loop itself never sleeps or schedules anything.
    """

    def __init__(
        self,
        world: TriangleWorld,
        renderer: Optional[Renderer] = None,
        ui: Optional[LifecycleUI] = None,
        duration_ms: float = 60_000,
        clock: Callable[[], float] = monotonic_ms,
    ):
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms}")
        self.world = world
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.ui = ui if ui is not None else LogUI()
        self.duration_ms = duration_ms
        self.clock = clock

        self.keys = InputState()
        self.start_time: Optional[float] = None
        self.remaining_ms = duration_ms
        self.ticks = 0
        self.final_state: Optional[GameState] = None

    @property
    def running(self) -> bool:
        return self.start_time is not None and self.final_state is None

    def set_key_state(self, key: str, pressed: bool) -> bool:
        return self.keys.set_key_state(key, pressed)

    def start(self):
        minutes = self.duration_ms / 60_000
        self.ui.show_rules(RULES.format(minutes=f"{minutes:g}"))

        self.world.initialize_game()
        self.start_time = self.clock()
        self.remaining_ms = self.duration_ms
        self.ticks = 0
        self.final_state = None
        LOGGER.info("Round started (%d triangles, %.0f ms)", len(self.world.game_objects), self.duration_ms)

    def tick(self) -> bool:
        """Run one frame. Returns True if another tick should be scheduled."""
        if self.start_time is None:
            raise RuntimeError("tick() called before start()")
        if self.final_state is not None:
            return False

        elapsed = self.clock() - self.start_time
        self.remaining_ms = max(0.0, self.duration_ms - elapsed)
        self.renderer.display_timer(self.remaining_ms)

        if self.remaining_ms <= 0:
            self.world.force_loss()

        self.world.update(self.keys)
        self.renderer.render(self.world.game_objects)
        self.ticks += 1

        if self.world.is_active:
            return True
        self.end_game()
        return False

    def end_game(self):
        self.final_state = self.world.game_state
        LOGGER.info(
            "Round over: %s after %d ticks, score %d, %.0f ms left",
            self.final_state.value, self.ticks, self.world.score, self.remaining_ms,
        )
        self.ui.show_outcome(self.final_state, self.world.score)

    def run(self, max_ticks: Optional[int] = None) -> Optional[GameState]:
        """Tick back to back until the round ends (headless play)"""
        if self.start_time is None:
            self.start()
        while self.tick():
            if max_ticks is not None and self.ticks >= max_ticks:
                break
        return self.final_state
