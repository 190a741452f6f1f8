"""3x3 matrices of floats."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator

from .vector3d import Vector3D


class Matrix3x3:
    """A 3x3 matrix; built from nine row-major entries or as the identity."""

    __slots__ = ("_m",)

    def __init__(self, *entries: float) -> None:
        if not entries:
            self._m = [[1.0 if i == j else 0.0 for j in range(3)] for i in range(3)]
        elif len(entries) == 9:
            self._m = [[float(v) for v in entries[r * 3:r * 3 + 3]] for r in range(3)]
        else:
            raise ValueError(f"expected 0 or 9 entries, got {len(entries)}")

    @classmethod
    def _from_rows(cls, rows) -> Matrix3x3:
        return cls(*(v for row in rows for v in row))

    def __iter__(self) -> Iterator[tuple[float, float, float]]:
        for row in self._m:
            yield tuple(row)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            return self._m[i][j]
        return self.column(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            i, j = key
            self._m[i][j] = float(value)
        else:
            for i, v in enumerate(value):
                self._m[i][key] = float(v)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return self._m == other._m

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix3x3({', '.join(repr(v) for row in self._m for v in row)})"

    def zero(self, val: float = 0.0) -> None:
        """Set every entry to ``val``."""
        self._m = [[float(val)] * 3 for _ in range(3)]

    def _cofactor(self, i: int, j: int) -> float:
        m = self._m
        i1, i2 = (i + 1) % 3, (i + 2) % 3
        j1, j2 = (j + 1) % 3, (j + 2) % 3
        return m[i1][j1] * m[i2][j2] - m[i1][j2] * m[i2][j1]

    def det(self) -> float:
        """Determinant."""
        return sum(self._m[0][j] * self._cofactor(0, j) for j in range(3))

    def norm(self) -> float:
        """Frobenius norm."""
        return math.sqrt(sum(v * v for row in self._m for v in row))

    @staticmethod
    def identity() -> Matrix3x3:
        """The 3x3 identity matrix."""
        return Matrix3x3()

    @staticmethod
    def cross_product(u: Vector3D) -> Matrix3x3:
        """Matrix ``M`` such that ``M * v == cross(u, v)``."""
        return Matrix3x3(
            0.0, -u.z, u.y,
            u.z, 0.0, -u.x,
            -u.y, u.x, 0.0,
        )

    def column(self, i: int) -> Vector3D:
        """The ``i``-th column as a vector."""
        return Vector3D(self._m[0][i], self._m[1][i], self._m[2][i])

    def transpose(self) -> Matrix3x3:
        """Transposed copy."""
        return Matrix3x3._from_rows(zip(*self._m))

    def inv(self) -> Matrix3x3:
        """Inverse; raises ZeroDivisionError for a singular matrix."""
        d = self.det()
        if d == 0:
            raise ZeroDivisionError("matrix is singular")
        return Matrix3x3._from_rows(
            (self._cofactor(j, i) / d for j in range(3)) for i in range(3)
        )

    def __neg__(self) -> Matrix3x3:
        return Matrix3x3._from_rows((-v for v in row) for row in self._m)

    def __add__(self, other: Matrix3x3) -> Matrix3x3:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return Matrix3x3._from_rows(
            (a + b for a, b in zip(ra, rb)) for ra, rb in zip(self._m, other._m)
        )

    def __iadd__(self, other: Matrix3x3) -> Matrix3x3:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        self._m = (self + other)._m
        return self

    def __sub__(self, other: Matrix3x3) -> Matrix3x3:
        if not isinstance(other, Matrix3x3):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other):
        if isinstance(other, Matrix3x3):
            cols = list(zip(*other._m))
            return Matrix3x3._from_rows(
                (sum(a * b for a, b in zip(row, col)) for col in cols)
                for row in self._m
            )
        if isinstance(other, Vector3D):
            return Vector3D(*(sum(a * b for a, b in zip(row, other)) for row in self._m))
        if isinstance(other, Real):
            return Matrix3x3._from_rows((v * other for v in row) for row in self._m)
        return NotImplemented

    def __rmul__(self, c: float) -> Matrix3x3:
        if not isinstance(c, Real):
            return NotImplemented
        return self * c

    def __truediv__(self, x: float) -> Matrix3x3:
        if not isinstance(x, Real):
            return NotImplemented
        return Matrix3x3._from_rows((v / x for v in row) for row in self._m)

    def __itruediv__(self, x: float) -> Matrix3x3:
        if not isinstance(x, Real):
            return NotImplemented
        self._m = (self / x)._m
        return self


def outer(u: Vector3D, v: Vector3D) -> Matrix3x3:
    """Outer product ``u v^T``."""
    return Matrix3x3._from_rows((a * b for b in v) for a in u)