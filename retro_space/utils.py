"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def aabb_overlap(a, b) -> bool:
    """
    Check if two axis-aligned boxes overlap.

    Both arguments need ``x``, ``y``, ``width`` and ``height``. Intervals are
    half-open, so boxes that only touch along an edge do not overlap.
    """
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def is_finite(*values: float) -> bool:
    """True if every value is a real, finite number"""
    return all(math.isfinite(v) for v in values)

