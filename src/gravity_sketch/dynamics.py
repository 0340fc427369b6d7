"""Pairwise gravity between bodies, using a clamped form of F = G m1 m2 / r^2.

For a pair (i, j) the force on body i is

    F_ij = G * m_i * m_j / clamp(|r_j - r_i|^2, min_dist_sq, max_dist_sq) * r_hat_ij

and body j receives exactly -F_ij. Each pair is evaluated once per step.

The clamp replaces the usual Plummer softening term: at near-zero separation
the magnitude saturates at G m_i m_j / min_dist_sq, and beyond
sqrt(max_dist_sq) it stops decaying. Both bounds live in `PhysicsConfig`.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .bodies import Body
from .config import PhysicsConfig
from .vector import ZERO, Vector2, as_array


def force_magnitude(body_i: Body, body_j: Body, G: float, physics: PhysicsConfig = PhysicsConfig()) -> float:
    """Scalar G * m_i * m_j / clamp(r^2) for a pair; finite even at zero separation."""
    dist_sq = (body_j.position - body_i.position).magnitude_squared()
    dist_sq = min(max(dist_sq, physics.min_dist_sq), physics.max_dist_sq)
    return G * body_i.mass * body_j.mass / dist_sq


def pair_force(body_i: Body, body_j: Body, G: float, physics: PhysicsConfig = PhysicsConfig()) -> Vector2:
    """Force exerted on `body_i` by `body_j`.

    Args:
        body_i: Body the force acts on.
        body_j: Attracting body.
        G: Gravitational constant (> 0).
        physics: Distance clamp.

    Returns:
        Force vector pointing from i towards j. Zero when both bodies share a
        position, since the direction is undefined there.
    """
    direction = body_j.position - body_i.position
    return direction.with_magnitude(force_magnitude(body_i, body_j, G, physics))


def compute_step_forces(
    bodies: Sequence[Body], G: float, physics: PhysicsConfig = PhysicsConfig()
) -> List[Vector2]:
    """Net force on every body from the current positions.

    Args:
        bodies: Bodies in simulator index order. Masses must be > 0.
        G: Gravitational constant.
        physics: Distance clamp.

    Returns:
        Net force per body, same order as `bodies`.

    Notes:
        O(n^2) over unordered pairs i < j. Summing the pairs in a different
        order (e.g. in parallel) changes results only by floating-point
        rounding.
    """
    forces: List[Vector2] = [ZERO] * len(bodies)
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            f = pair_force(bodies[i], bodies[j], G, physics)
            forces[i] = forces[i] + f
            forces[j] = forces[j] - f
    return forces


def total_momentum(bodies: Sequence[Body]) -> np.ndarray:
    """Sum of m * v over all bodies, shape (2,)."""
    if not bodies:
        return np.zeros(2, dtype=float)
    masses = np.array([b.mass for b in bodies], dtype=float)
    v = as_array(b.velocity for b in bodies)
    return np.sum(masses[:, None] * v, axis=0)


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """Total kinetic energy 1/2 * sum_i m_i * |v_i|^2."""
    if not bodies:
        return 0.0
    masses = np.array([b.mass for b in bodies], dtype=float)
    v = as_array(b.velocity for b in bodies)
    return 0.5 * float(np.sum(masses * np.sum(v * v, axis=1)))


def center_of_mass(bodies: Sequence[Body]) -> np.ndarray:
    """Mass-weighted mean position, shape (2,)."""
    if not bodies:
        raise ValueError("center_of_mass needs at least one body")
    masses = np.array([b.mass for b in bodies], dtype=float)
    r = as_array(b.position for b in bodies)
    return np.sum(masses[:, None] * r, axis=0) / float(np.sum(masses))
