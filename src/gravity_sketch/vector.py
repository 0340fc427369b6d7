"""Minimal 2D vector arithmetic.

Vectors are immutable: every operation returns a new `Vector2`. The free
functions are the primary API; the operators on `Vector2` delegate to them.

Zero-vector convention:
    `with_magnitude(ZERO, m)` returns `ZERO`. The direction of a zero vector is
    undefined, so rescaling it cannot produce a meaningful direction. Returning
    the zero vector keeps callers (notably the pairwise force computation at
    zero separation) free of NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float

    def __add__(self, other: Vector2) -> Vector2:
        return add(self, other)

    def __sub__(self, other: Vector2) -> Vector2:
        return sub(self, other)

    def __mul__(self, k: float) -> Vector2:
        return scale(self, k)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def magnitude_squared(self) -> float:
        return magnitude_squared(self)

    def with_magnitude(self, m: float) -> Vector2:
        return with_magnitude(self, m)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


ZERO = Vector2(0.0, 0.0)


def add(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x + b.x, a.y + b.y)


def sub(a: Vector2, b: Vector2) -> Vector2:
    return Vector2(a.x - b.x, a.y - b.y)


def scale(v: Vector2, k: float) -> Vector2:
    return Vector2(v.x * k, v.y * k)


def magnitude_squared(v: Vector2) -> float:
    return v.x * v.x + v.y * v.y


def with_magnitude(v: Vector2, m: float) -> Vector2:
    """Return a vector pointing along `v` with length `m`.

    Args:
        v: Direction vector.
        m: Target magnitude.

    Returns:
        The rescaled vector, or `ZERO` when `v` is the zero vector.
    """
    length = math.sqrt(magnitude_squared(v))
    if length == 0.0:
        return ZERO
    k = m / length
    return Vector2(v.x * k, v.y * k)


def as_array(vectors: Iterable[Vector2]) -> np.ndarray:
    """Stack vectors into a float array of shape (n, 2)."""
    arr = np.array([(v.x, v.y) for v in vectors], dtype=float)
    return arr.reshape(-1, 2)
