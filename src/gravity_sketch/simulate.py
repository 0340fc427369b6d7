"""Frame-driven simulation driver.

The Simulator owns the bodies and advances them one step per frame. The outer
layer (viewer, CLI) samples its controls into a `SimulationParameters` value
every frame and passes it to `step`; nothing here reads UI state.

Step order:
    a. apply per-body mass overrides (clamped to the mass slider range)
    b. compute all pairwise forces from the pre-step positions
    c. update every velocity
    d. update every position

Forces are computed once from a consistent snapshot before any body moves, so
the result does not depend on body index order beyond summation rounding.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .bodies import Body
from .config import ParameterRanges, PhysicsConfig
from .dynamics import compute_step_forces
from .presets import InitialConfiguration, default_configuration
from .vector import Vector2, as_array

logger = logging.getLogger(__name__)

ResetListener = Callable[[], None]


@dataclass(frozen=True)
class SimulationParameters:
    """Per-frame steering inputs.

    Attributes:
        gravitational_constant: G (> 0).
        speed_factor: Time step multiplier (> 0).
        mass_overrides: One mass per body in simulator index order, or None to
            keep the current masses.
    """

    gravitational_constant: float = 1.0
    speed_factor: float = 1.0
    mass_overrides: Optional[Sequence[float]] = None


@dataclass(frozen=True)
class BodyState:
    """Read-only view of one body after a step."""

    position: Vector2
    velocity: Vector2
    mass: float
    color: str


def _check_positive(value: float, *, name: str) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(f"{name} must be a positive finite number, got {value}")
    return value


class Simulator:
    """Owns an ordered body set with an explicit reset/step lifecycle."""

    def __init__(
        self,
        configuration: InitialConfiguration | None = None,
        *,
        width: float = 800.0,
        height: float = 600.0,
        physics: PhysicsConfig = PhysicsConfig(),
        ranges: ParameterRanges = ParameterRanges(),
    ) -> None:
        self.physics = physics
        self.ranges = ranges
        self.width = float(width)
        self.height = float(height)
        self._configuration = default_configuration() if configuration is None else configuration
        self._bodies: List[Body] = []
        self._listeners: List[ResetListener] = []
        self.step_count = 0
        self.reset()

    def __len__(self) -> int:
        return len(self._bodies)

    @property
    def configuration(self) -> InitialConfiguration:
        return self._configuration

    def add_reset_listener(self, callback: ResetListener) -> None:
        """Register a callback run after every reset (e.g. `TrailBuffer.clear`)."""
        self._listeners.append(callback)

    def reset(self, configuration: InitialConfiguration | None = None) -> None:
        """Replace all bodies with fresh ones from `configuration` (or the last one used).

        Raises:
            ValueError: If any configured mass is non-finite or non-positive.
                Positive masses outside the mass range are clamped into it.
        """
        config = self._configuration if configuration is None else configuration
        bodies = config.centered(self.width, self.height)
        masses = [_check_positive(b.mass, name=f"{config.name}.bodies[{k}].mass") for k, b in enumerate(bodies)]
        for body, m in zip(bodies, masses):
            body.mass = self.ranges.mass.clamp(m)

        self._configuration = config
        self._bodies = bodies
        self.step_count = 0
        logger.debug(
            "Reset to '%s' with %d bodies in %gx%g viewport",
            self._configuration.name,
            len(self._bodies),
            self.width,
            self.height,
        )
        for callback in self._listeners:
            callback()

    def _apply_mass_overrides(self, overrides: Sequence[float]) -> None:
        if len(overrides) != len(self._bodies):
            raise ValueError(f"Expected {len(self._bodies)} mass overrides, got {len(overrides)}")
        masses = [_check_positive(m, name=f"mass_overrides[{k}]") for k, m in enumerate(overrides)]
        for body, m in zip(self._bodies, masses):
            body.mass = self.ranges.mass.clamp(m)

    def step(self, params: SimulationParameters = SimulationParameters()) -> Tuple[BodyState, ...]:
        """Advance every body by one explicit Euler step.

        Args:
            params: Steering inputs sampled for this frame.

        Returns:
            Snapshot of all bodies after the step.

        Raises:
            ValueError: On non-positive G or speed factor, or malformed mass overrides.
            FloatingPointError: If the step produced a non-finite position or velocity.
        """
        G = _check_positive(params.gravitational_constant, name="gravitational_constant")
        speed = _check_positive(params.speed_factor, name="speed_factor")
        if params.mass_overrides is not None:
            self._apply_mass_overrides(params.mass_overrides)

        forces = compute_step_forces(self._bodies, G, self.physics)
        for body, force in zip(self._bodies, forces):
            body.apply_force(force, speed)
        for body in self._bodies:
            body.update_position(speed)

        self.step_count += 1
        for k, body in enumerate(self._bodies):
            if not body.is_finite():
                raise FloatingPointError(f"Body {k} has a non-finite state after step {self.step_count}")

        return self.snapshot()

    # ------------------------- Queries -------------------------

    def snapshot(self) -> Tuple[BodyState, ...]:
        return tuple(BodyState(b.position, b.velocity, b.mass, b.color) for b in self._bodies)

    @property
    def bodies(self) -> Tuple[BodyState, ...]:
        return self.snapshot()

    def positions(self) -> np.ndarray:
        """Body positions, shape (n, 2)."""
        return as_array(b.position for b in self._bodies)

    def velocities(self) -> np.ndarray:
        return as_array(b.velocity for b in self._bodies)

    def masses(self) -> np.ndarray:
        return np.array([b.mass for b in self._bodies], dtype=float)

    def live_bodies(self) -> Tuple[Body, ...]:
        """The mutable bodies themselves, for diagnostics. Do not mutate."""
        return tuple(self._bodies)

    def resize(self, width: float, height: float) -> None:
        """Set the viewport size used to centre the next reset."""
        self.width = _check_positive(width, name="width")
        self.height = _check_positive(height, name="height")
