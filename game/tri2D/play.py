"""
Play the triangle collector game

    python -m game.tri2D.play              # arcade window, arrow keys
    python -m game.tri2D.play --headless   # one random-key round, no window
"""

import argparse
import logging
import random
import sys

from game.configs.triangle_config import WORLD_CONFIG, LOOP_CONFIG, WINDOW_CONFIG, ENV_CONFIG, REWARD_CONFIG

from .collect_env import CollectEnv
from .loop import GameInitError, GameLoop
from .utils import seed_everything
from .world import TriangleWorld

LOGGER = logging.getLogger(__name__)


def open_window(loop: GameLoop):
    """Create the arcade window, or fail before the round starts"""
    try:
        from .window import TriangleWindow

        window = TriangleWindow(loop=loop, **WINDOW_CONFIG)
    except Exception as exc:
        raise GameInitError(f"Could not open game window: {exc}") from exc

    loop.renderer = window
    loop.ui = window
    return window


def play_windowed(seed=None, duration_ms=LOOP_CONFIG["duration_ms"]):
    world = TriangleWorld(rng=random.Random(seed), **WORLD_CONFIG)
    loop = GameLoop(world, duration_ms=duration_ms)
    open_window(loop)

    # arcade is importable once the window is up
    import arcade

    loop.start()
    arcade.run()
    return loop.final_state


def play_headless(seed=None, duration_ms=LOOP_CONFIG["duration_ms"]):
    env = CollectEnv(duration_ms=duration_ms, reward_config=REWARD_CONFIG, **ENV_CONFIG, **WORLD_CONFIG)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)

    terminated = truncated = False
    total = 0.0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        total += reward
    env.close()

    print(f"Round over: {info['state']} | score {info['score']} | "
          f"{info['step']} ticks | return {total:.2f}")
    return info


def main(argv=None):
    parser = argparse.ArgumentParser(description="Triangle collector game")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the spawn layout (default: random)",
    )
    parser.add_argument(
        "--duration-ms",
        type=int,
        default=LOOP_CONFIG["duration_ms"],
        help="Round length in milliseconds (default: 60000)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Play one round with random keys and no window",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    seed_everything(args.seed)

    if args.headless:
        play_headless(seed=args.seed, duration_ms=args.duration_ms)
        return 0

    try:
        play_windowed(seed=args.seed, duration_ms=args.duration_ms)
    except GameInitError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
