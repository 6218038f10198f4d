"""
TriangleWorld - simulation core of the triangle collector game
--------------------------------------------------------------
- 10 triangles spawned at random inside the [-1, 1] square
- Slot 0 is the green player, red triangles are hazards, the rest are collectibles
- Arrow keys move the player by a fixed step, never out of bounds
- Touch a collectible: +10 and it disappears. Touch a hazard: round lost
- Round is won once the player is the only non-hazard triangle left

Rendering and timing live elsewhere (see window.py and loop.py); this module
only advances state one tick at a time.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from .controls import InputState, KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT
from .entities import (
    Color,
    PALETTE,
    HAZARD_COLOR,
    PLAYER_COLOR,
    Role,
    Triangle,
    is_hazard_color,
)
from .utils import collision_distance, pairwise_distances

LOGGER = logging.getLogger(__name__)


class GameState(str, Enum):
    ACTIVE = "playing"
    WON = "won"
    LOST = "lost"


class TriangleWorld:
    """Owns the triangles, the score and the terminal state of one round"""

    def __init__(
        self,
        n_objects: int = 10,
        n_hazards: int = 3,
        size: float = 0.1,
        step: float = 0.01,
        score_increment: int = 10,
        reserve_player_slot: bool = True,
        palette: Sequence[Color] = PALETTE,
        rng: Optional[random.Random] = None,
    ):
        if size <= 0 or size >= 1:
            raise ValueError(f"size must be in (0, 1), got {size}")
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        if not 0 <= n_hazards < n_objects:
            raise ValueError(f"need 0 <= n_hazards < n_objects, got {n_hazards} / {n_objects}")
        if not any(not is_hazard_color(c) for c in palette):
            raise ValueError("palette needs at least one non-red color")

        self.n_objects = n_objects
        self.n_hazards = n_hazards
        self.size = size
        self.step = step
        self.score_increment = score_increment
        self.reserve_player_slot = reserve_player_slot
        self.palette = [tuple(c) for c in palette]
        self.rng = rng if rng is not None else random.Random()

        # World state
        self.game_objects: List[Triangle] = []
        self.game_state = GameState.ACTIVE
        self.score = 0
        self.keys = InputState()
        self.player: Triangle = None  # type: ignore

        self.create_game_objects()

    # ----------------------------
    # Round lifecycle
    # ----------------------------

    def initialize_game(self):
        """Start a fresh round: clear state and respawn everything"""
        self.game_state = GameState.ACTIVE
        self.score = 0
        self.create_game_objects()

    def create_game_objects(self):
        self.game_objects = []

        if self.reserve_player_slot:
            self.game_objects.append(self._spawn(PLAYER_COLOR, Role.PLAYER))

        # Hazards first so the quota is met regardless of palette draws
        for _ in range(self.n_hazards):
            self.game_objects.append(self._spawn(HAZARD_COLOR))

        while len(self.game_objects) < self.n_objects:
            self.game_objects.append(self._spawn(self._sample_color()))

        if not self.reserve_player_slot:
            # Legacy order: slot 0 is recolored even if it was drawn as a hazard
            first = self.game_objects[0]
            first.color = PLAYER_COLOR
            first.role = Role.PLAYER

        self.player = self.game_objects[0]
        LOGGER.debug(
            "Spawned %d triangles (%d hazards)", len(self.game_objects), len(self.hazards)
        )

    def _spawn(self, color: Color, role: Optional[Role] = None) -> Triangle:
        # Pad by size so the whole footprint stays on screen
        lo, hi = -1 + self.size, 1 - self.size
        x = self.rng.uniform(lo, hi)
        y = self.rng.uniform(lo, hi)
        return Triangle(x=x, y=y, size=self.size, color=color, role=role)

    def _sample_color(self) -> Color:
        color = self.rng.choice(self.palette)
        while is_hazard_color(color):
            color = self.rng.choice(self.palette)
        return color

    # ----------------------------
    # Tick
    # ----------------------------

    @property
    def is_active(self) -> bool:
        return self.game_state is GameState.ACTIVE

    def update(self, keys: Optional[InputState] = None):
        """Advance one tick. Does nothing once the round is over."""
        if keys is not None:
            self.keys = keys
        if not self.is_active:
            return

        self.update_player()
        for obj in self.game_objects:
            obj.update()
        self.check_collisions()
        self.check_game_over()

    def update_player(self):
        p = self.player
        lo, hi = -1 + p.size, 1 - p.size

        if self.keys.is_pressed(KEY_UP) and p.y + self.step <= hi:
            p.y += self.step
        if self.keys.is_pressed(KEY_DOWN) and p.y - self.step >= lo:
            p.y -= self.step
        if self.keys.is_pressed(KEY_LEFT) and p.x - self.step >= lo:
            p.x -= self.step
        if self.keys.is_pressed(KEY_RIGHT) and p.x + self.step <= hi:
            p.x += self.step

    def force_loss(self):
        """Timeout. Only an active round can be lost this way."""
        if self.is_active:
            self.game_state = GameState.LOST
            LOGGER.info("Round lost on timeout (score %d)", self.score)

    # ----------------------------
    # Collisions
    # ----------------------------

    @staticmethod
    def is_colliding(a: Triangle, b: Triangle) -> bool:
        return bool(TriangleWorld.collision_matrix((a, b))[0, 1])

    @staticmethod
    def collision_matrix(objects: Sequence[Triangle]) -> np.ndarray:
        """Boolean matrix of colliding pairs, diagonal cleared"""
        if not objects:
            return np.zeros((0, 0), dtype=bool)
        dists = pairwise_distances([o.x for o in objects], [o.y for o in objects])
        sizes = np.array([o.size for o in objects], dtype=np.float64)
        reach = collision_distance(np.maximum.outer(sizes, sizes))
        close = dists < reach
        np.fill_diagonal(close, False)
        return close

    def check_collisions(self):
        # Work on a snapshot so removals don't disturb the pair scan
        snapshot = list(self.game_objects)
        close = self.collision_matrix(snapshot)
        idx = snapshot.index(self.player)
        touched = [snapshot[j] for j in np.flatnonzero(close[idx])]

        # Hazards first: a loss can't also score in the same tick
        touched.sort(key=lambda o: not o.is_hazard)
        for other in touched:
            self.handle_collision(self.player, other)
            if not self.is_active:
                return

    def handle_collision(self, a: Triangle, b: Triangle):
        if not (a.is_player or b.is_player):
            return
        other = b if a.is_player else a

        if other.is_hazard:
            self.game_state = GameState.LOST
            LOGGER.info("Hazard hit at (%.3f, %.3f), round lost", other.x, other.y)
            return

        self.score += self.score_increment
        if other in self.game_objects:
            self.game_objects.remove(other)
        LOGGER.debug("Collected triangle at (%.3f, %.3f), score %d", other.x, other.y, self.score)

    def check_game_over(self):
        # Only the player left among non-red triangles
        if self.is_active and len(self.game_objects) - len(self.hazards) == 1:
            self.game_state = GameState.WON
            LOGGER.info("Round won with score %d", self.score)

    # ----------------------------
    # Queries
    # ----------------------------

    @property
    def hazards(self) -> List[Triangle]:
        return [o for o in self.game_objects if o.is_hazard]

    @property
    def collectibles(self) -> List[Triangle]:
        return [o for o in self.game_objects if o.role is Role.COLLECTIBLE]
