"""Quaternions for representing 3D rotations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator

from .matrix3x3 import Matrix3x3
from .misc import EPS_D, PI, clamp
from .vector3d import Vector3D, cross


@dataclass
class Quaternion:
    """The quaternion ``x i + y j + z k + w``; defaults to the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z, self.w)[index]

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            return self.product(other)
        if isinstance(other, Real):
            return Quaternion(self.x * other, self.y * other, self.z * other, self.w * other)
        return NotImplemented

    def __rmul__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return Quaternion(s * self.x, s * self.y, s * self.z, s * self.w)

    def __truediv__(self, s):
        if not isinstance(s, Real):
            return NotImplemented
        return Quaternion(self.x / s, self.y / s, self.z / s, self.w / s)

    def norm(self) -> float:
        """Euclidean length of the four components."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def unit(self) -> Quaternion:
        """Copy scaled to unit length."""
        return self / self.norm()

    def normalize(self) -> None:
        """Scale in place to unit length."""
        n = self.norm()
        self.x, self.y, self.z, self.w = self.x / n, self.y / n, self.z / n, self.w / n

    def from_axis_angle(self, axis: Vector3D, radians: float) -> None:
        """Set this quaternion to a rotation of ``radians`` about ``axis``."""
        half = radians / 2
        n_axis = axis.unit()
        sin_theta = math.sin(half)
        self.x = sin_theta * n_axis.x
        self.y = sin_theta * n_axis.y
        self.z = sin_theta * n_axis.z
        self.w = math.cos(half)
        self.normalize()

    def complex(self) -> Vector3D:
        """The imaginary part as a vector."""
        return Vector3D(self.x, self.y, self.z)

    def set_complex(self, c: Vector3D) -> None:
        """Replace the imaginary part."""
        self.x, self.y, self.z = c.x, c.y, c.z

    def real(self) -> float:
        """The real part."""
        return self.w

    def set_real(self, r: float) -> None:
        """Replace the real part."""
        self.w = r

    def conjugate(self) -> Quaternion:
        """Conjugate: imaginary part negated."""
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverse(self) -> Quaternion:
        """Conjugate divided by the norm; the true inverse for unit quaternions."""
        return self.conjugate() / self.norm()

    def product(self, rhs: Quaternion) -> Quaternion:
        """Hamilton product ``self * rhs``."""
        x, y, z, w = self.x, self.y, self.z, self.w
        return Quaternion(
            y * rhs.z - z * rhs.y + x * rhs.w + w * rhs.x,
            z * rhs.x - x * rhs.z + y * rhs.w + w * rhs.y,
            x * rhs.y - y * rhs.x + z * rhs.w + w * rhs.z,
            w * rhs.w - x * rhs.x - y * rhs.y - z * rhs.z,
        )

    def rotation_matrix(self) -> Matrix3x3:
        """Rotation matrix of this (assumed unit) quaternion."""
        x, y, z, w = self.x, self.y, self.z, self.w
        return Matrix3x3(
            1 - 2 * y * y - 2 * z * z, 2 * x * y - 2 * z * w, 2 * x * z + 2 * y * w,
            2 * x * y + 2 * z * w, 1 - 2 * x * x - 2 * z * z, 2 * y * z - 2 * x * w,
            2 * x * z - 2 * y * w, 2 * y * z + 2 * x * w, 1 - 2 * x * x - 2 * y * y,
        )

    def scaled_axis(self) -> Vector3D:
        """Rotation axis of this quaternion, normalised unless the rotation is tiny."""
        q1 = self.unit()
        s = math.sqrt(max(0.0, 1 - q1.w * q1.w))
        if s < 0.001:
            return Vector3D(q1.x, q1.y, q1.z)
        return Vector3D(q1.x / s, q1.y / s, q1.z / s)

    def set_scaled_axis(self, vec: Vector3D) -> None:
        """Set to the rotation by ``|vec|`` radians about ``vec``."""
        theta = vec.norm()
        if theta > 0.0001:
            s = math.sin(theta / 2.0)
            axis = vec / theta * s
            self.x, self.y, self.z = axis.x, axis.y, axis.z
            self.w = math.cos(theta / 2.0)
        else:
            self.x = self.y = self.z = 0.0
            self.w = 1.0

    def rotated_vector(self, v: Vector3D) -> Vector3D:
        """``v`` rotated by this (assumed unit) quaternion."""
        return ((self * Quaternion(v.x, v.y, v.z, 0.0)) * self.conjugate()).complex()

    def set_euler(self, euler: Vector3D) -> None:
        """Set from roll-pitch-yaw angles."""
        c1 = math.cos(euler[2] * 0.5)
        c2 = math.cos(euler[1] * 0.5)
        c3 = math.cos(euler[0] * 0.5)
        s1 = math.sin(euler[2] * 0.5)
        s2 = math.sin(euler[1] * 0.5)
        s3 = math.sin(euler[0] * 0.5)
        self.x = c1 * c2 * s3 - s1 * s2 * c3
        self.y = c1 * s2 * c3 + s1 * c2 * s3
        self.z = s1 * c2 * c3 - c1 * s2 * s3
        self.w = c1 * c2 * c3 + s1 * s2 * s3

    def euler(self) -> Vector3D:
        """Equivalent roll-pitch-yaw angles."""
        x, y, z, w = self.x, self.y, self.z, self.w
        sqw, sqx, sqy, sqz = w * w, x * x, y * y, z * z
        result = Vector3D()
        result[1] = math.asin(clamp(2.0 * (w * y - x * z), -1.0, 1.0))
        if PI * 0.5 - abs(result[1]) > EPS_D:
            result[2] = math.atan2(2.0 * (x * y + w * z), sqx - sqy - sqz + sqw)
            result[0] = math.atan2(2.0 * (w * x + y * z), sqw - sqx - sqy + sqz)
        else:
            result[2] = math.atan2(2 * y * z - 2 * x * w, 2 * x * z + 2 * y * w)
            result[0] = 0.0
            if result[1] < 0:
                result[2] = PI - result[2]
        return result

    def decouple_z(self) -> tuple[Quaternion, Quaternion]:
        """Split into ``(qxy, qz)`` with ``self == qxy * qz`` and ``qz`` about the z axis."""
        ztt = Vector3D(0.0, 0.0, 1.0)
        zbt = self.rotated_vector(ztt)
        axis_xy = cross(ztt, zbt)
        axis_norm = axis_xy.norm()
        axis_theta = math.acos(clamp(zbt.z, -1.0, 1.0))
        if axis_norm > 0.00001:
            axis_xy = axis_xy * (axis_theta / axis_norm)
        qxy = Quaternion()
        qxy.set_scaled_axis(axis_xy)
        qz = qxy.conjugate() * self
        return qxy, qz

    def slerp(self, q1: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation from this quaternion to ``q1``."""
        return Quaternion.slerp_between(self, q1, t)

    @staticmethod
    def slerp_between(q0: Quaternion, q1: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation between ``q0`` and ``q1`` by fraction ``t``."""
        omega = math.acos(
            clamp(q0.x * q1.x + q0.y * q1.y + q0.z * q1.z + q0.w * q1.w, -1.0, 1.0)
        )
        if abs(omega) < 1e-10:
            omega = 1e-10
        som = math.sin(omega)
        st0 = math.sin((1 - t) * omega) / som
        st1 = math.sin(t * omega) / som
        return Quaternion(
            q0.x * st0 + q1.x * st1,
            q0.y * st0 + q1.y * st1,
            q0.z * st0 + q1.z * st1,
            q0.w * st0 + q1.w * st1,
        )