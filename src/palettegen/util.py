# util.py – scalar helpers shared by the conversions and the palette models

from __future__ import annotations

import math

TAU = 2.0 * math.pi

Turn = float  # 1.0 == one full revolution
Radians = float


def lerp(lo: float, hi: float, t: float) -> float:
    return lo + (hi - lo) * t


def clamp(x: float, lo: float, hi: float) -> float:
    return hi if x > hi else lo if x < lo else x


def approx_equal(a: float, b: float, epsilon: float = 1e-16) -> bool:
    return abs(a - b) < epsilon


def turn_to_rad(n: Turn) -> Radians:
    return n * TAU


def rad_to_turn(n: Radians) -> Turn:
    return n / TAU


def wrap_turn(n: Turn) -> Turn:
    """Wrap into [0, 1). NaN becomes 0.0."""
    if math.isnan(n) or math.isinf(n):
        return 0.0
    w = n % 1.0
    # -1e-17 % 1.0 == 1.0 in floating point
    return 0.0 if w >= 1.0 else w


__all__ = [
    "TAU",
    "lerp",
    "clamp",
    "approx_equal",
    "turn_to_rad",
    "rad_to_turn",
    "wrap_turn",
]
