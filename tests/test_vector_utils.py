import math

import pytest

from threebody.vector_utils import Vector2, clamp, lerp


def test_arithmetic_returns_new_values():
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -1.0)
    assert a + b == Vector2(4.0, 1.0)
    assert a - b == Vector2(-2.0, 3.0)
    assert -a == Vector2(-1.0, -2.0)
    assert a * 2 == Vector2(2.0, 4.0)
    assert 2 * a == Vector2(2.0, 4.0)
    assert b / 2 == Vector2(1.5, -0.5)
    assert a == Vector2(1.0, 2.0)


def test_vector_is_immutable():
    v = Vector2(1.0, 1.0)
    with pytest.raises(AttributeError):
        v.x = 5.0


def test_no_vector_by_vector_product():
    with pytest.raises(TypeError):
        Vector2(1.0, 2.0) * Vector2(3.0, 4.0)


def test_no_scalar_vector_addition():
    with pytest.raises(TypeError):
        Vector2(1.0, 2.0) + 1.0


def test_length_and_normalized():
    v = Vector2(3.0, 4.0)
    assert v.length() == 5.0
    n = v.normalized()
    assert n.x == pytest.approx(0.6)
    assert n.y == pytest.approx(0.8)
    assert Vector2(0.0, 0.0).normalized() == Vector2(0.0, 0.0)


def test_from_polar():
    v = Vector2.from_polar(2.0, math.pi / 2)
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(2.0)
    assert v.length() == pytest.approx(2.0)


def test_unpacks_like_a_pair():
    x, y = Vector2(5.0, 6.0)
    assert (x, y) == (5.0, 6.0)


def test_clamp_and_lerp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert lerp(10.0, 20.0, 0.25) == 12.5
