"""Tests for the round driver: timing, termination and collaborator hand-off."""

from __future__ import annotations

import random

import pytest

from game.tri2D.controls import KEY_RIGHT
from game.tri2D.entities import BLUE, GREEN, RED, Role, Triangle
from game.tri2D.loop import GameLoop, LogUI, NullRenderer
from game.tri2D.world import GameState, TriangleWorld


class FakeClock:
    def __init__(self, step_ms: float = 0.0):
        self.now = 0.0
        self.step_ms = step_ms

    def __call__(self) -> float:
        value = self.now
        self.now += self.step_ms
        return value


class RecordingUI:
    def __init__(self):
        self.rules = []
        self.outcomes = []

    def show_rules(self, text):
        self.rules.append(text)

    def show_outcome(self, state, score):
        self.outcomes.append((state, score))


def _build_loop(clock: FakeClock, duration_ms: float = 60_000):
    world = TriangleWorld(rng=random.Random(1))
    renderer = NullRenderer()
    ui = RecordingUI()
    loop = GameLoop(world, renderer=renderer, ui=ui, duration_ms=duration_ms, clock=clock)
    return loop, renderer, ui


def _place(world: TriangleWorld, *objects: Triangle) -> None:
    world.game_objects = list(objects)
    world.player = objects[0]


def _quiet_layout(world: TriangleWorld) -> None:
    _place(
        world,
        Triangle(0.0, 0.0, 0.1, GREEN, Role.PLAYER),
        Triangle(-0.8, -0.8, color=BLUE),
        Triangle(-0.8, 0.8, color=RED),
    )


def test_tick_before_start_is_an_error() -> None:
    loop, _, _ = _build_loop(FakeClock())
    with pytest.raises(RuntimeError):
        loop.tick()


def test_start_presents_rules_and_spawns_round() -> None:
    loop, _, ui = _build_loop(FakeClock())
    loop.start()
    assert len(ui.rules) == 1
    assert "non-red triangles" in ui.rules[0]
    assert len(loop.world.game_objects) == 10
    assert loop.running


def test_tick_publishes_objects_and_remaining_time() -> None:
    clock = FakeClock()
    loop, renderer, ui = _build_loop(clock)
    loop.start()
    _quiet_layout(loop.world)

    clock.now = 15_000
    assert loop.tick() is True
    assert renderer.frames == 1
    assert renderer.last_remaining_ms == 45_000
    assert renderer.last_objects == loop.world.game_objects
    assert ui.outcomes == []


def test_timeout_forces_loss_and_stops_scheduling() -> None:
    clock = FakeClock()
    loop, renderer, ui = _build_loop(clock)
    loop.start()
    _quiet_layout(loop.world)

    clock.now = 60_000
    assert loop.tick() is False
    assert loop.final_state is GameState.LOST
    assert renderer.last_remaining_ms == 0
    assert ui.outcomes == [(GameState.LOST, 0)]

    # Nothing more happens once the round is over
    assert loop.tick() is False
    assert renderer.frames == 1
    assert len(ui.outcomes) == 1


def test_win_ends_the_loop_with_won() -> None:
    clock = FakeClock()
    loop, _, ui = _build_loop(clock)
    loop.start()
    _place(loop.world, Triangle(0.0, 0.0, 0.1, GREEN, Role.PLAYER), Triangle(0.05, 0.0, color=BLUE))

    clock.now = 1_000
    assert loop.tick() is False
    assert loop.final_state is GameState.WON
    assert ui.outcomes == [(GameState.WON, 10)]
    assert not loop.running


def test_key_state_reaches_the_world() -> None:
    loop, _, _ = _build_loop(FakeClock())
    loop.start()
    _quiet_layout(loop.world)

    assert loop.set_key_state(KEY_RIGHT, True) is True
    assert loop.set_key_state("Enter", True) is False
    loop.tick()
    loop.tick()
    assert loop.world.player.x == pytest.approx(0.02)

    loop.set_key_state(KEY_RIGHT, False)
    loop.tick()
    assert loop.world.player.x == pytest.approx(0.02)


def test_run_plays_until_timeout() -> None:
    clock = FakeClock(step_ms=1000 / 60)
    loop, renderer, ui = _build_loop(clock, duration_ms=1_000)
    loop.start()
    _quiet_layout(loop.world)

    assert loop.run() is GameState.LOST
    assert 55 <= loop.ticks <= 62
    assert renderer.frames == loop.ticks
    assert ui.outcomes == [(GameState.LOST, 0)]


def test_run_respects_max_ticks() -> None:
    loop, _, ui = _build_loop(FakeClock(step_ms=1.0))
    loop.start()
    _quiet_layout(loop.world)

    assert loop.run(max_ticks=5) is None
    assert loop.ticks == 5
    assert loop.running
    assert ui.outcomes == []


def test_restart_after_round_resets_state() -> None:
    clock = FakeClock()
    loop, _, _ = _build_loop(clock)
    loop.start()
    _place(loop.world, Triangle(0.0, 0.0, 0.1, GREEN, Role.PLAYER), Triangle(0.05, 0.0, color=BLUE))
    loop.tick()
    assert loop.final_state is GameState.WON

    clock.now = 90_000
    loop.start()
    assert loop.final_state is None
    assert loop.world.game_state is GameState.ACTIVE
    assert loop.world.score == 0
    assert len(loop.world.game_objects) == 10
    assert loop.start_time == 90_000
    assert loop.remaining_ms == 60_000


def test_default_collaborators_and_validation() -> None:
    loop = GameLoop(TriangleWorld(rng=random.Random(0)))
    assert isinstance(loop.renderer, NullRenderer)
    assert isinstance(loop.ui, LogUI)
    with pytest.raises(ValueError):
        GameLoop(TriangleWorld(), duration_ms=0)
