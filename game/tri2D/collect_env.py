"""
CollectEnv - the triangle collector round as a Gymnasium environment
--------------------------------------------------------------------
- One episode = one round driven through GameLoop on a simulated clock
- MultiBinary(4) action: which of up/down/left/right are held this step
- Vector observation: player pos + time left + K nearest hazards + M nearest collectibles
- Reward for collections and winning, penalty for hazards/timeout

Quick test:
    python -m game.tri2D.collect_env
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .controls import InputState
from .entities import Triangle
from .loop import GameLoop, NullRenderer
from .utils import clamp, seed_everything
from .world import GameState, TriangleWorld

LOGGER = logging.getLogger(__name__)


class CollectEnv(gym.Env):
    """Collect every non-red triangle before time runs out"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 60,
        max_steps: Optional[int] = None,  # default: enough steps to reach the timeout
        k_hazards: int = 3,
        m_collectibles: int = 3,
        duration_ms: float = 60_000,
        reward_config: Optional[Dict[str, float]] = None,
        **world_kwargs,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.dt = dt
        if max_steps is None:
            # One spare step so the round always ends on its own timeout
            max_steps = math.ceil(duration_ms / (dt * 1000.0)) + 1
        self.max_steps = max_steps
        self.k_hazards = k_hazards
        self.m_collectibles = m_collectibles

        rewards = {"R_COLLECT": 1.0, "R_WIN": 5.0, "R_LOSS": 5.0, "R_TIME": 0.001}
        rewards.update(reward_config or {})
        self.rewards = rewards

        # Action space: up, down, left, right held (0/1 each)
        self.action_space = spaces.MultiBinary(4)

        # Observation space (vector)
        # Player: pos(2) time left(1)
        # Each hazard / collectible: rel pos(2)
        obs_dim = 2 + 1 + (self.k_hazards * 2) + (self.m_collectibles * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # Simulated clock in ms, advanced by dt every step
        self._now_ms = 0.0
        self._frames = NullRenderer()
        self.world = TriangleWorld(**world_kwargs)
        self.loop = GameLoop(
            self.world,
            renderer=self._frames,
            ui=self,
            duration_ms=duration_ms,
            clock=lambda: self._now_ms,
        )

        self._window = None
        self._step_count = 0
        self._done = True

    # ----------------------------
    # LifecycleUI (kept quiet, episodes are many)
    # ----------------------------

    def show_rules(self, text: str):
        LOGGER.debug("Episode start")

    def show_outcome(self, state: GameState, score: int):
        LOGGER.debug("Episode over: %s, score %d", state.value, score)

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self.world.rng = random.Random(seed)

        self._now_ms = 0.0
        self._step_count = 0
        self.loop.keys.release_all()
        self.loop.start()
        self._done = False

        return self._get_obs(), self._get_info()

    def step(self, action):
        if self._done:
            raise RuntimeError("Episode is over, call reset() first")

        self.loop.keys = InputState.from_action(np.asarray(action).reshape(-1))

        score_before = self.world.score
        self._now_ms += self.dt * 1000.0
        self.loop.tick()

        collected = (self.world.score - score_before) / max(1, self.world.score_increment)
        reward = self._compute_reward(collected)

        terminated = not self.world.is_active
        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps
        self._done = terminated or truncated

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _nearest(self, objects: List[Triangle], n: int) -> List[float]:
        p = self.world.player
        ordered = sorted(objects, key=lambda o: (o.x - p.x) ** 2 + (o.y - p.y) ** 2)
        parts: List[float] = []
        for i in range(n):
            if i < len(ordered):
                o = ordered[i]
                # Relative offsets span [-2, 2], halve into [-1, 1]
                parts += [clamp((o.x - p.x) / 2, -1, 1), clamp((o.y - p.y) / 2, -1, 1)]
            else:
                parts += [0.0, 0.0]
        return parts

    def _get_obs(self) -> np.ndarray:
        p = self.world.player
        time_left = self.loop.remaining_ms / self.loop.duration_ms

        obs_parts = [clamp(p.x, -1, 1), clamp(p.y, -1, 1), time_left * 2 - 1]
        obs_parts += self._nearest(self.world.hazards, self.k_hazards)
        obs_parts += self._nearest(self.world.collectibles, self.m_collectibles)
        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, collected: float) -> float:
        reward = self.rewards["R_COLLECT"] * collected
        reward -= self.rewards["R_TIME"]

        if self.world.game_state is GameState.WON:
            reward += self.rewards["R_WIN"]
        elif self.world.game_state is GameState.LOST:
            reward -= self.rewards["R_LOSS"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.world.score,
            "state": self.world.game_state.value,
            "remaining_ms": self.loop.remaining_ms,
            "n_hazards": len(self.world.hazards),
            "n_collectibles": len(self.world.collectibles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import TriangleWindow

            self._window = TriangleWindow(loop=self.loop)

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

def run_random_episode(seed: Optional[int] = None, render: bool = False) -> Dict[str, Any]:
    """Play one round with random key presses"""
    env = CollectEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.3f} ({info['state']}, score {info['score']})")
    env.close()
    info["return"] = total
    return info


if __name__ == "__main__":
    run_random_episode(seed=42)
