"""Three-dimensional vectors, also used as RGB triples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass
class Vector3D:
    """A 3D vector; ``r``, ``g`` and ``b`` alias ``x``, ``y`` and ``z``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def r(self) -> float:
        return self.x

    @r.setter
    def r(self, value: float) -> None:
        self.x = value

    @property
    def g(self) -> float:
        return self.y

    @g.setter
    def g(self, value: float) -> None:
        self.y = value

    @property
    def b(self) -> float:
        return self.z

    @b.setter
    def b(self, value: float) -> None:
        self.z = value

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __setitem__(self, index: int, value: float) -> None:
        name = ("x", "y", "z")[index]
        setattr(self, name, value)

    def __neg__(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def __add__(self, v: Vector3D) -> Vector3D:
        if not isinstance(v, Vector3D):
            return NotImplemented
        return Vector3D(self.x + v.x, self.y + v.y, self.z + v.z)

    def __sub__(self, v: Vector3D) -> Vector3D:
        if not isinstance(v, Vector3D):
            return NotImplemented
        return Vector3D(self.x - v.x, self.y - v.y, self.z - v.z)

    def __mul__(self, other: Vector3D | float) -> Vector3D:
        if isinstance(other, Vector3D):
            return Vector3D(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vector3D(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, c: float) -> Vector3D:
        if not isinstance(c, Real):
            return NotImplemented
        return Vector3D(c * self.x, c * self.y, c * self.z)

    def __truediv__(self, other: Vector3D | float) -> Vector3D:
        if isinstance(other, Vector3D):
            return Vector3D(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, Real):
            rc = 1.0 / other
            return Vector3D(rc * self.x, rc * self.y, rc * self.z)
        return NotImplemented

    def __rtruediv__(self, c: float) -> Vector3D:
        if not isinstance(c, Real):
            return NotImplemented
        return Vector3D(c / self.x, c / self.y, c / self.z)

    def __iadd__(self, v: Vector3D) -> Vector3D:
        if not isinstance(v, Vector3D):
            return NotImplemented
        self.x += v.x
        self.y += v.y
        self.z += v.z
        return self

    def __isub__(self, v: Vector3D) -> Vector3D:
        if not isinstance(v, Vector3D):
            return NotImplemented
        self.x -= v.x
        self.y -= v.y
        self.z -= v.z
        return self

    def __imul__(self, c: float) -> Vector3D:
        if not isinstance(c, Real):
            return NotImplemented
        self.x *= c
        self.y *= c
        self.z *= c
        return self

    def __itruediv__(self, c: float) -> Vector3D:
        if not isinstance(c, Real):
            return NotImplemented
        self *= 1.0 / c
        return self

    def rcp(self) -> Vector3D:
        """Per-component reciprocal."""
        return Vector3D(1.0 / self.x, 1.0 / self.y, 1.0 / self.z)

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.norm2())

    def norm2(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def unit(self) -> Vector3D:
        """Unit vector parallel to this one."""
        r_norm = 1.0 / self.norm()
        return self * r_norm

    def normalize(self) -> None:
        """Scale this vector in place to unit length."""
        self /= self.norm()

    def illum(self) -> float:
        """Luminance of the vector read as an RGB colour."""
        return 0.2126 * self.r + 0.7152 * self.g + 0.0722 * self.b


def dot(u: Vector3D, v: Vector3D) -> float:
    """Inner product."""
    return u.x * v.x + u.y * v.y + u.z * v.z


def cross(u: Vector3D, v: Vector3D) -> Vector3D:
    """Cross product."""
    return Vector3D(
        u.y * v.z - u.z * v.y,
        u.z * v.x - u.x * v.z,
        u.x * v.y - u.y * v.x,
    )