#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vector2 is an immutable (x, y) pair. The helpers accept any 2-sequence, so
plain tuples coming from pygame or from tests work everywhere a Vector2 does.
"""
import math
from typing import NamedTuple, Sequence


class Vector2(NamedTuple):
    x: float
    y: float


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Sequence[float], b: Sequence[float]) -> Vector2:
    return Vector2(a[0] + b[0], a[1] + b[1])


def vec_sub(a: Sequence[float], b: Sequence[float]) -> Vector2:
    return Vector2(a[0] - b[0], a[1] - b[1])


def vec_scale(a: Sequence[float], s: float) -> Vector2:
    return Vector2(a[0] * s, a[1] * s)


def vec_dist_sq(a: Sequence[float], b: Sequence[float]) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def vec_dist(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(vec_dist_sq(a, b))


def vec_mid(a: Sequence[float], b: Sequence[float]) -> Vector2:
    return Vector2((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


def vec_is_finite(a: Sequence[float]) -> bool:
    return math.isfinite(a[0]) and math.isfinite(a[1])
