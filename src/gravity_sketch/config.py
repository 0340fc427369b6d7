"""Tunable constants for the sketch, grouped by concern.

The defaults reproduce the feel of the original sketch. The distance clamp and
the zoom bounds have no physical derivation; they shape how the simulation
looks rather than whether it is correct, so they live here instead of being
hardcoded in the physics or camera code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PhysicsConfig:
    """Distance-squared clamp applied to every pairwise force.

    The floor softens the singular force at near-zero separation; the ceiling
    keeps far-apart pairs attracting with a small but fixed minimum force.
    Together they make the potential a softened one, not pure 1/r^2.
    """

    min_dist_sq: float = 25.0
    max_dist_sq: float = 50_000.0

    def __post_init__(self) -> None:
        if not (0.0 < self.min_dist_sq <= self.max_dist_sq):
            raise ValueError(
                f"Expected 0 < min_dist_sq <= max_dist_sq, got {self.min_dist_sq}, {self.max_dist_sq}"
            )
        if not math.isfinite(self.max_dist_sq):
            raise ValueError("max_dist_sq must be finite")


@dataclass(frozen=True)
class CameraConfig:
    # Added to each bounding-box extent so the zoom never divides by zero.
    padding: float = 200.0
    # Fraction of the viewport the bounding box may fill.
    fill: float = 0.9
    min_zoom: float = 0.1
    max_zoom: float = 2.0

    def __post_init__(self) -> None:
        if self.padding <= 0.0:
            raise ValueError("padding must be positive")
        if self.fill <= 0.0:
            raise ValueError("fill must be positive")
        if not (0.0 < self.min_zoom <= self.max_zoom):
            raise ValueError(
                f"Expected 0 < min_zoom <= max_zoom, got {self.min_zoom}, {self.max_zoom}"
            )


@dataclass(frozen=True)
class TrailConfig:
    cap: int = 4000
    batch: int = 1000

    def __post_init__(self) -> None:
        if self.cap < 1:
            raise ValueError("cap must be >= 1")
        if not (1 <= self.batch <= self.cap):
            raise ValueError(f"batch must be in [1, cap], got {self.batch}")


@dataclass(frozen=True)
class ParameterRange:
    """Closed interval for a live steering parameter (one UI slider)."""

    low: float
    high: float
    step: float

    def __post_init__(self) -> None:
        if not (0.0 < self.low <= self.high):
            raise ValueError(f"Expected 0 < low <= high, got {self.low}, {self.high}")
        if self.step <= 0.0:
            raise ValueError("step must be positive")

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def clamp(self, value: float) -> float:
        return max(self.low, min(self.high, float(value)))


@dataclass(frozen=True)
class ParameterRanges:
    gravity: ParameterRange = field(default_factory=lambda: ParameterRange(0.1, 5.0, 0.1))
    speed: ParameterRange = field(default_factory=lambda: ParameterRange(0.1, 5.0, 0.1))
    mass: ParameterRange = field(default_factory=lambda: ParameterRange(5.0, 100.0, 1.0))
