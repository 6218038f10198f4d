"""Tests for the command-line entry point."""

from __future__ import annotations

import random
import sys
import types

import pytest

from game.tri2D import play
from game.tri2D.loop import GameInitError, GameLoop
from game.tri2D.world import TriangleWorld


def test_missing_arcade_exits_with_status_one(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "arcade", None)
    monkeypatch.setitem(sys.modules, "game.tri2D.window", None)
    assert play.main(["--seed", "0"]) == 1


def test_window_failure_becomes_init_error(monkeypatch) -> None:
    class BrokenWindow:
        def __init__(self, *args, **kwargs):
            raise RuntimeError("no display")

    fake = types.ModuleType("game.tri2D.window")
    fake.TriangleWindow = BrokenWindow
    monkeypatch.setitem(sys.modules, "game.tri2D.window", fake)

    loop = GameLoop(TriangleWorld(rng=random.Random(0)))
    with pytest.raises(GameInitError) as excinfo:
        play.open_window(loop)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert loop.start_time is None


def test_headless_round_longer_than_a_minute_finishes() -> None:
    info = play.play_headless(seed=0, duration_ms=90_000)
    assert info["state"] in ("won", "lost")


def test_headless_cli_exits_cleanly(capsys) -> None:
    assert play.main(["--headless", "--seed", "1", "--duration-ms", "2000"]) == 0
    out = capsys.readouterr().out
    assert "Round over: won" in out or "Round over: lost" in out
