## Checks for the 2D vector helpers, in particular the zero-vector convention
## of with_magnitude that the force computation relies on.

import math

import numpy as np

from gravity_sketch.vector import ZERO, Vector2, add, as_array, magnitude_squared, scale, sub, with_magnitude


def test_basic_arithmetic():
    a = Vector2(1.0, 2.0)
    b = Vector2(-3.0, 0.5)

    assert add(a, b) == Vector2(-2.0, 2.5)
    assert sub(a, b) == Vector2(4.0, 1.5)
    assert scale(a, 3.0) == Vector2(3.0, 6.0)
    assert magnitude_squared(Vector2(3.0, 4.0)) == 25.0

    # Operators delegate to the free functions.
    assert a + b == add(a, b)
    assert a - b == sub(a, b)
    assert a * 3.0 == 3.0 * a == scale(a, 3.0)
    assert -a == Vector2(-1.0, -2.0)


def test_operations_do_not_mutate():
    a = Vector2(1.0, 1.0)
    _ = a + Vector2(5.0, 5.0)
    _ = a.with_magnitude(10.0)
    assert a == Vector2(1.0, 1.0)


def test_with_magnitude_keeps_direction():
    v = Vector2(3.0, 4.0)
    w = with_magnitude(v, 10.0)

    assert math.isclose(w.x, 6.0)
    assert math.isclose(w.y, 8.0)
    assert math.isclose(math.sqrt(magnitude_squared(w)), 10.0)


def test_with_magnitude_of_zero_vector_is_zero():
    w = with_magnitude(ZERO, 42.0)

    assert w == ZERO
    assert not math.isnan(w.x) and not math.isnan(w.y)
    assert Vector2(0.0, 0.0).with_magnitude(1e9).is_finite()


def test_as_array_shape():
    arr = as_array([Vector2(1.0, 2.0), Vector2(3.0, 4.0)])
    np.testing.assert_array_equal(arr, [[1.0, 2.0], [3.0, 4.0]])
    assert as_array([]).shape == (0, 2)
