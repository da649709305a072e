import dataclasses
import math

import numpy as np
import pytest
from nbody_sim.types import Vector3, ZERO

def test_arithmetic_returns_new_values():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-1.0, 0.5, 2.0)

    assert a + b == Vector3(0.0, 2.5, 5.0)
    assert a - b == Vector3(2.0, 1.5, 1.0)
    assert a * 2.0 == Vector3(2.0, 4.0, 6.0)
    assert 2.0 * a == a * 2.0
    assert -a == Vector3(-1.0, -2.0, -3.0)
    assert a / 2.0 == Vector3(0.5, 1.0, 1.5)
    assert a.dot(b) == pytest.approx(-1.0 + 1.0 + 6.0)
    # operands untouched
    assert a == Vector3(1.0, 2.0, 3.0)

def test_magnitude_and_normalize():
    v = Vector3(3.0, 4.0, 12.0)
    assert v.magnitude_squared() == 169.0
    assert v.magnitude() == 13.0

    u = v.normalized()
    assert u.magnitude() == pytest.approx(1.0)
    assert u.isclose(Vector3(3 / 13, 4 / 13, 12 / 13))

def test_normalize_zero_is_zero():
    """Zero length has no direction; the zero vector comes back instead of NaNs."""
    assert Vector3.zero().normalized() == ZERO

def test_frozen():
    v = Vector3(1.0, 2.0, 3.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5.0

def test_of_and_array_conversion():
    v = Vector3.of((1, 2, 3))
    assert v == Vector3(1.0, 2.0, 3.0)
    assert Vector3.of(np.array([1.0, 2.0, 3.0])) == v
    assert Vector3.of(v) is v
    np.testing.assert_array_equal(v.to_array(), np.array([1.0, 2.0, 3.0]))
    assert v.to_array().dtype == np.float64

    with pytest.raises(ValueError):
        Vector3.of((1.0, 2.0))

def test_is_finite():
    assert Vector3(1.0, 2.0, 3.0).is_finite()
    assert not Vector3(math.nan, 0.0, 0.0).is_finite()
    assert not Vector3(0.0, math.inf, 0.0).is_finite()
