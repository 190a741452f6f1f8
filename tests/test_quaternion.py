import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from svgraster.matrix3x3 import Matrix3x3
from svgraster.quaternion import Quaternion
from svgraster.vector3d import Vector3D, dot


def approx_q(q):
    return pytest.approx(list(q), abs=1e-9)


def approx_v(v):
    return pytest.approx(list(v), abs=1e-9)


def axis_angle(axis, angle):
    q = Quaternion()
    q.from_axis_angle(axis, angle)
    return q


angles = st.floats(min_value=-3.0, max_value=3.0)
coords = st.floats(min_value=-5.0, max_value=5.0)


def test_default_is_identity():
    assert Quaternion() == Quaternion(0.0, 0.0, 0.0, 1.0)


def test_identity_rotation_matrix():
    assert list(Quaternion().rotation_matrix()) == list(Matrix3x3.identity())


@given(angles, coords, coords, coords)
def test_rotated_vector_matches_rotation_matrix(angle, vx, vy, vz):
    q = axis_angle(Vector3D(1.0, 2.0, 3.0), angle)
    v = Vector3D(vx, vy, vz)
    expected = q.rotation_matrix() * v
    assert list(q.rotated_vector(v)) == pytest.approx(list(expected), abs=1e-9)


@given(angles)
def test_from_axis_angle_is_unit(angle):
    q = axis_angle(Vector3D(0.3, -1.0, 2.0), angle)
    assert q.norm() == pytest.approx(1.0)


@given(angles)
def test_rotation_preserves_length_and_axis_component(angle):
    axis = Vector3D(0.0, 1.0, 1.0)
    q = axis_angle(axis, angle)
    v = Vector3D(2.0, -1.0, 0.5)
    r = q.rotated_vector(v)
    assert r.norm() == pytest.approx(v.norm())
    assert dot(r, axis) == pytest.approx(dot(v, axis))


def test_product_with_conjugate_is_identity():
    q = axis_angle(Vector3D(1.0, 1.0, 0.0), 0.7)
    assert list(q * q.conjugate()) == approx_q(Quaternion())


def test_inverse_of_unit_equals_conjugate():
    q = axis_angle(Vector3D(0.0, 0.0, 1.0), 1.2)
    assert list(q.inverse()) == approx_q(q.conjugate())
    assert list(q.product(q.inverse())) == approx_q(Quaternion())


def test_conjugate_negates_complex_part():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    c = q.conjugate()
    assert c.complex() == -q.complex()
    assert c.real() == q.real()


def test_set_complex_and_real():
    q = Quaternion()
    q.set_complex(Vector3D(5.0, 6.0, 7.0))
    q.set_real(8.0)
    assert q == Quaternion(5.0, 6.0, 7.0, 8.0)


def test_scalar_multiplication_commutes():
    q = Quaternion(1.0, -2.0, 3.0, 0.5)
    assert 2.0 * q == q * 2.0
    assert (q * 2.0) / 2.0 == q


def test_unit_and_normalize_agree():
    q = Quaternion(1.0, 2.0, 2.0, 4.0)
    u = q.unit()
    q.normalize()
    assert list(q) == approx_q(u)
    assert u.norm() == pytest.approx(1.0)


@given(
    st.floats(min_value=-1.0, max_value=1.0),
    st.floats(min_value=-1.0, max_value=1.0),
    st.floats(min_value=-1.0, max_value=1.0),
)
def test_euler_round_trip(roll, pitch, yaw):
    q = Quaternion()
    q.set_euler(Vector3D(roll, pitch, yaw))
    assert list(q.euler()) == pytest.approx([roll, pitch, yaw], abs=1e-7)


def test_set_euler_gives_unit():
    q = Quaternion()
    q.set_euler(Vector3D(0.4, -0.2, 1.1))
    assert q.norm() == pytest.approx(1.0)


def test_small_scaled_axis_is_identity():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    q.set_scaled_axis(Vector3D(0.0, 0.00001, 0.0))
    assert q == Quaternion()


def test_scaled_axis_direction_round_trip():
    vec = Vector3D(0.2, -0.4, 0.5)
    q = Quaternion()
    q.set_scaled_axis(vec)
    assert q.norm() == pytest.approx(1.0)
    assert list(q.scaled_axis()) == approx_v(vec.unit())


def test_set_scaled_axis_matches_axis_angle():
    vec = Vector3D(0.0, 0.9, 0.3)
    q = Quaternion()
    q.set_scaled_axis(vec)
    assert list(q) == approx_q(axis_angle(vec, vec.norm()))


def test_decouple_z_recombines():
    q = axis_angle(Vector3D(1.0, 0.5, 2.0), 0.9)
    qxy, qz = q.decouple_z()
    assert list(qxy * qz) == approx_q(q)
    assert qz.x == pytest.approx(0.0, abs=1e-9)
    assert qz.y == pytest.approx(0.0, abs=1e-9)


def test_slerp_endpoints():
    q0 = axis_angle(Vector3D(0.0, 0.0, 1.0), 0.2)
    q1 = axis_angle(Vector3D(0.0, 0.0, 1.0), 1.4)
    assert list(q0.slerp(q1, 0.0)) == approx_q(q0)
    assert list(q0.slerp(q1, 1.0)) == approx_q(q1)


def test_slerp_midpoint_about_same_axis():
    axis = Vector3D(0.0, 1.0, 0.0)
    q0 = axis_angle(axis, 0.2)
    q1 = axis_angle(axis, 1.4)
    mid = Quaternion.slerp_between(q0, q1, 0.5)
    assert list(mid) == approx_q(axis_angle(axis, 0.8))
    assert list(q0.slerp(q1, 0.5)) == approx_q(mid)


def test_slerp_identical_quaternions():
    q = axis_angle(Vector3D(1.0, 0.0, 0.0), 0.5)
    assert list(q.slerp(q, 0.3)) == approx_q(q)


def test_quarter_turn_about_z():
    q = axis_angle(Vector3D(0.0, 0.0, 2.0), math.pi / 2)
    assert list(q.rotated_vector(Vector3D(1.0, 0.0, 0.0))) == approx_v(Vector3D(0.0, 1.0, 0.0))