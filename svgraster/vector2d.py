"""Two-dimensional vectors."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass
class Vector2D:
    """A 2D vector with float components."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y)[index]

    def __setitem__(self, index: int, value: float) -> None:
        if index in (0, -2):
            self.x = value
        elif index in (1, -1):
            self.y = value
        else:
            raise IndexError("Vector2D index out of range")

    def __neg__(self) -> Vector2D:
        return type(self)(-self.x, -self.y)

    def __add__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return type(self)(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return type(self)(self.x - other.x, self.y - other.y)

    def __mul__(self, r: float) -> Vector2D:
        if not isinstance(r, Real):
            return NotImplemented
        return type(self)(self.x * r, self.y * r)

    def __rmul__(self, r: float) -> Vector2D:
        if not isinstance(r, Real):
            return NotImplemented
        return type(self)(self.x * r, self.y * r)

    def __truediv__(self, r: float) -> Vector2D:
        if not isinstance(r, Real):
            return NotImplemented
        return type(self)(self.x / r, self.y / r)

    def __iadd__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        self.x += other.x
        self.y += other.y
        return self

    def __isub__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        self.x -= other.x
        self.y -= other.y
        return self

    def __imul__(self, r: float) -> Vector2D:
        if not isinstance(r, Real):
            return NotImplemented
        self.x *= r
        self.y *= r
        return self

    def __itruediv__(self, r: float) -> Vector2D:
        if not isinstance(r, Real):
            return NotImplemented
        self.x /= r
        self.y /= r
        return self

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def norm2(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y

    def unit(self) -> Vector2D:
        """Unit vector parallel to this one."""
        return self / self.norm()


def dot(v1: Vector2D, v2: Vector2D) -> float:
    """Inner product."""
    return v1.x * v2.x + v1.y * v2.y


def cross(v1: Vector2D, v2: Vector2D) -> float:
    """Scalar 2D cross product."""
    return v1.x * v2.y - v1.y * v2.x