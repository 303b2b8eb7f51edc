import math

import numpy as np
import pytest

from perlin_chunks import Color3, DimensionMismatchError, DirectedInfluence, Scalar, VectorN


def test_arithmetic_returns_new_values():
    a = VectorN(1.0, 2.0, 3.0)
    b = VectorN(0.5, -1.0, 4.0)

    assert a.add(b) == VectorN(1.5, 1.0, 7.0)
    assert a.sub(b) == VectorN(0.5, 3.0, -1.0)
    assert a.scale(2) == VectorN(2.0, 4.0, 6.0)
    assert a.dot(b) == pytest.approx(0.5 - 2.0 + 12.0)
    # operands are untouched
    assert a == VectorN(1.0, 2.0, 3.0)
    assert b == VectorN(0.5, -1.0, 4.0)


def test_operator_sugar_matches_methods():
    a = VectorN([1.0, 2.0])
    b = VectorN([3.0, 5.0])
    assert a + b == a.add(b)
    assert a - b == a.sub(b)
    assert -a == a.scale(-1)
    assert 3 * a == a * 3 == a.scale(3)
    assert a / 2 == VectorN(0.5, 1.0)


def test_lerp_hits_both_endpoints_exactly():
    a = VectorN(0.1, -7.3, 2.0)
    b = VectorN(9.9, 0.7, -2.0)
    assert a.lerp(b, 0.0) == a
    assert a.lerp(b, 1.0) == b
    assert np.allclose(a.lerp(b, 0.25).components, 0.75 * a.components + 0.25 * b.components)


@pytest.mark.parametrize("op", ["add", "sub", "dot", "lerp"])
def test_mismatched_dimensions_fail_loudly(op):
    a = VectorN(1.0, 2.0)
    b = VectorN(1.0, 2.0, 3.0)
    args = (b, 0.5) if op == "lerp" else (b,)
    with pytest.raises(DimensionMismatchError) as exc:
        getattr(a, op)(*args)
    assert isinstance(exc.value, ValueError)
    assert exc.value.details == {"left": 2, "right": 3}


def test_components_are_read_only_copies():
    source = [1.0, 2.0]
    v = VectorN(source)
    source[0] = 100.0
    assert v[0] == 1.0
    with pytest.raises(ValueError):
        v.components[0] = 5.0


def test_empty_vector_rejected():
    with pytest.raises(ValueError):
        VectorN([])


def test_scalar_and_color_types():
    s = Scalar(2.5)
    assert s.size == 1
    assert s.value == 2.5
    assert isinstance(s.scale(2), Scalar)
    with pytest.raises(DimensionMismatchError):
        Scalar.from_components([1.0, 2.0])

    c = Color3.from_rgb255(255, 0, 51)
    assert (c.r, c.g, c.b) == pytest.approx((1.0, 0.0, 0.2))
    assert isinstance(c.lerp(Color3(0, 0, 0), 0.5), Color3)


def test_const_zero_and_standard_vectors():
    assert VectorN.const(3, 2.0) == VectorN(2.0, 2.0, 2.0)
    assert VectorN.zero(2) == VectorN(0.0, 0.0)
    basis = VectorN.standard_vectors(3)
    assert basis == [VectorN(1, 0, 0), VectorN(0, 1, 0), VectorN(0, 0, 1)]
    assert all(e.norm() == 1.0 for e in basis)


def test_vectors_are_hashable_values():
    assert len({VectorN(1, 2), VectorN(1.0, 2.0), VectorN(2, 1)}) == 2
    assert repr(VectorN(1, 2)) == "VectorN(1.0, 2.0)"


def test_directed_influence_projects_distance_onto_direction():
    d = DirectedInfluence.from_angle(0.0, VectorN(2.0, 4.0))
    assert d.dot((0.5, 3.0)) == VectorN(1.0, 2.0)

    up = DirectedInfluence.from_angle(math.pi / 2, VectorN(1.0))
    assert up.dot((5.0, -2.0))[0] == pytest.approx(-2.0)
    assert up.a[0] == pytest.approx(0.0)
    assert up.b[0] == pytest.approx(1.0)


def test_directed_influence_requires_2d_direction():
    with pytest.raises(ValueError):
        DirectedInfluence((1.0, 0.0, 0.0), VectorN(1.0))


def test_directed_dot_combines_the_scaled_components():
    d = DirectedInfluence.from_angle(0.7, VectorN(1.0, -3.0, 0.5))
    expected = d.vector.scale(0.25 * math.cos(0.7) - 1.5 * math.sin(0.7))
    assert d.dot((0.25, -1.5)) == d.a.scale(0.25).add(d.b.scale(-1.5))
    assert np.allclose(d.dot((0.25, -1.5)).components, expected.components)
