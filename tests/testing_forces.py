## Checks for pairwise gravity: Newton's third law, the distance clamp and
## body-level Euler updates.

import math

import numpy as np
import pytest

from gravity_sketch.bodies import Body
from gravity_sketch.config import PhysicsConfig
from gravity_sketch.dynamics import (
    center_of_mass,
    compute_step_forces,
    force_magnitude,
    kinetic_energy,
    pair_force,
    total_momentum,
)
from gravity_sketch.presets import default_configuration
from gravity_sketch.vector import ZERO, Vector2


def _body(x, y, m=20.0, vx=0.0, vy=0.0):
    return Body(position=Vector2(x, y), velocity=Vector2(vx, vy), mass=m, color="#ffffff")


def test_pair_forces_are_exact_negations():
    # Non-integer masses and G, so the product rounding is not trivially exact.
    bodies = [_body(300.0, 300.0, 20.7), _body(500.3, 301.1, 19.3), _body(400.9, 450.2, 31.13)]
    G = 1.37

    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            f_i, f_j = compute_step_forces([bodies[i], bodies[j]], G)
            assert f_i == -f_j, f"pair ({i},{j}) violates the third law"
            assert f_i == pair_force(bodies[i], bodies[j], G)


def test_three_body_net_force_is_sum_of_pair_contributions():
    bodies = [_body(300.0, 300.0, 20.7), _body(500.3, 301.1, 19.3), _body(400.9, 450.2, 31.13)]
    G = 1.37
    f01 = pair_force(bodies[0], bodies[1], G)
    f02 = pair_force(bodies[0], bodies[2], G)
    f12 = pair_force(bodies[1], bodies[2], G)

    forces = compute_step_forces(bodies, G)

    assert forces[0] == ZERO + f01 + f02
    assert forces[1] == ZERO - f01 + f12
    assert forces[2] == ZERO - f02 - f12


def test_two_body_net_forces_cancel_exactly():
    bodies = [_body(0.0, 0.0, 20.0), _body(37.0, -81.5, 30.0)]
    forces = compute_step_forces(bodies, 2.0)

    assert forces[0] == -forces[1]


def test_net_forces_sum_to_zero():
    bodies = default_configuration().centered(800, 600)
    forces = compute_step_forces(bodies, 1.0)

    total = np.sum([(f.x, f.y) for f in forces], axis=0)
    np.testing.assert_allclose(total, [0.0, 0.0], atol=1e-15)


def test_force_magnitude_and_direction():
    # Separation 100 -> dist_sq 10000, inside the clamp.
    a, b = _body(0.0, 0.0, 20.0), _body(100.0, 0.0, 30.0)
    f = pair_force(a, b, 1.0)

    assert math.isclose(f.x, 1.0 * 20.0 * 30.0 / 10_000.0)
    assert f.y == 0.0


def test_coincident_bodies_stay_finite():
    a, b = _body(5.0, 5.0, 20.0), _body(5.0, 5.0, 30.0)
    physics = PhysicsConfig()

    # Magnitude saturates at the distance floor.
    mag = force_magnitude(a, b, 1.0, physics)
    assert math.isfinite(mag)
    assert mag == 20.0 * 30.0 / 25.0
    assert force_magnitude(a, b, 2.5, physics) == 2.5 * 20.0 * 30.0 / physics.min_dist_sq

    # The direction is undefined, so the force vector itself is zero.
    forces = compute_step_forces([a, b], 1.0, physics)
    for f in forces:
        assert f.is_finite()
        assert f == ZERO


def test_close_bodies_use_distance_floor():
    # Separation 1 -> dist_sq 1, clamped up to 25.
    a, b = _body(0.0, 0.0, 20.0), _body(1.0, 0.0, 30.0)
    f = pair_force(a, b, 1.0)

    assert math.isclose(math.sqrt(f.magnitude_squared()), 20.0 * 30.0 / 25.0)


def test_far_bodies_use_distance_ceiling():
    # Separation 1000 -> dist_sq 1e6, clamped down to 50000.
    a, b = _body(0.0, 0.0, 20.0), _body(0.0, 1000.0, 30.0)
    f = pair_force(a, b, 1.0)

    assert math.isclose(f.y, 20.0 * 30.0 / 50_000.0)


def test_custom_clamp_changes_dynamics():
    a, b = _body(0.0, 0.0), _body(1.0, 0.0)
    loose = pair_force(a, b, 1.0, PhysicsConfig(min_dist_sq=1.0, max_dist_sq=10.0))
    tight = pair_force(a, b, 1.0, PhysicsConfig())

    assert loose.x == pytest.approx(25.0 * tight.x)


def test_physics_config_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        PhysicsConfig(min_dist_sq=100.0, max_dist_sq=10.0)
    with pytest.raises(ValueError):
        PhysicsConfig(min_dist_sq=0.0)


def test_apply_force_and_update_position():
    b = _body(10.0, 20.0, m=4.0, vx=1.0, vy=-1.0)

    b.apply_force(Vector2(8.0, 4.0), 0.5)
    # v += F/m * s = (2, 1) * 0.5
    assert b.velocity == Vector2(2.0, -0.5)

    b.update_position(2.0)
    assert b.position == Vector2(14.0, 19.0)


def test_diagnostics():
    bodies = [_body(0.0, 0.0, m=2.0, vx=1.0), _body(10.0, 0.0, m=3.0, vy=2.0)]

    np.testing.assert_allclose(total_momentum(bodies), [2.0, 6.0])
    assert kinetic_energy(bodies) == pytest.approx(0.5 * 2.0 * 1.0 + 0.5 * 3.0 * 4.0)
    np.testing.assert_allclose(center_of_mass(bodies), [6.0, 0.0])

    np.testing.assert_array_equal(total_momentum([]), [0.0, 0.0])
    with pytest.raises(ValueError):
        center_of_mass([])
