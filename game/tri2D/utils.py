"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np

SQRT3_2 = math.sqrt(3) / 2


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def triangle_height(size: float) -> float:
    """Height of an equilateral triangle with the given side"""
    return SQRT3_2 * size


def collision_distance(size: float) -> float:
    """Centers closer than this collide (circle proxy for the triangle)"""
    return triangle_height(size)


def triangle_vertices(x: float, y: float, size: float) -> Tuple[Tuple[float, float], ...]:
    """Apex at (x, y), base below it"""
    h = triangle_height(size)
    return (x, y), (x + size / 2, y - h), (x - size / 2, y - h)


def pairwise_distances(xs, ys) -> np.ndarray:
    """Full symmetric distance matrix for a set of centers"""
    pts = np.stack([np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)], axis=1)
    diff = pts[:, None, :] - pts[None, :, :]
    return np.sqrt((diff ** 2).sum(axis=-1))


def format_time(remaining_ms: float) -> str:
    """Format milliseconds as m:ss"""
    total = int(max(0.0, remaining_ms) // 1000)
    minutes, seconds = divmod(total, 60)
    return f"{minutes}:{seconds:02d}"


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
