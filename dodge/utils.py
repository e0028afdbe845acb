"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import NamedTuple, Tuple, Optional
import numpy as np


class Bounds(NamedTuple):
    left: float
    top: float
    right: float
    bottom: float


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def inset_bounds(entity, left: float, top: float, right: float, bottom: float) -> Bounds:
    """Entity box shrunk by the given padding on each side"""
    x, y = entity.position.x, entity.position.y
    w, h = entity.size.width, entity.size.height
    return Bounds(x + left, y + top, x + w - right, y + h - bottom)


def aabb_overlap(a: Bounds, b: Bounds) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges do not count)"""
    return a.left < b.right and a.right > b.left and a.top < b.bottom and a.bottom > b.top


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
