"""Point-mass bodies and their explicit Euler update.

A `Body` is a plain mutable record owned by the Simulator. The two update
operations form a forward (explicit) Euler step where `speed_factor` plays the
role of the time step:

    v <- v + (F / m) * speed_factor
    x <- x + v * speed_factor

This is not symplectic and total energy drifts over long runs. That is accepted
for an interactive sketch; the orbits only need to look right.
"""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vector2


@dataclass
class Body:
    position: Vector2
    velocity: Vector2
    mass: float
    color: str

    def apply_force(self, force: Vector2, speed_factor: float) -> None:
        """Accelerate by `force / mass`, scaled by the speed factor.

        The caller guarantees mass > 0 (the Simulator clamps mass overrides).
        """
        acceleration = Vector2(force.x / self.mass, force.y / self.mass)
        self.velocity = self.velocity + acceleration * speed_factor

    def update_position(self, speed_factor: float) -> None:
        self.position = self.position + self.velocity * speed_factor

    def is_finite(self) -> bool:
        return self.position.is_finite() and self.velocity.is_finite()
