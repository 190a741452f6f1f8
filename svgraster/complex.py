"""Complex numbers stored as 2D vectors of real and imaginary parts."""

from __future__ import annotations

import math

from .vector2d import Vector2D


class Complex(Vector2D):
    """The complex number ``x + y i``."""

    def conj(self) -> Complex:
        """Complex conjugate."""
        return Complex(self.x, -self.y)

    def inv(self) -> Complex:
        """Multiplicative inverse."""
        r = 1.0 / self.norm2()
        return Complex(r * self.x, -r * self.y)

    def arg(self) -> float:
        """Argument in radians."""
        return math.atan2(self.y, self.x)

    def exponential(self) -> Complex:
        """Complex exponential ``e**z``."""
        return math.exp(self.x) * Complex(math.cos(self.y), math.sin(self.y))

    def _product(self, z: Complex) -> tuple[float, float]:
        a, b, c, d = self.x, self.y, z.x, z.y
        return a * c - b * d, a * d + b * c

    def __mul__(self, other):
        if isinstance(other, Complex):
            return Complex(*self._product(other))
        return super().__mul__(other)

    def __imul__(self, other):
        if isinstance(other, Complex):
            self.x, self.y = self._product(other)
            return self
        return super().__imul__(other)

    def __truediv__(self, other):
        if isinstance(other, Complex):
            return self * other.inv()
        return super().__truediv__(other)

    def __itruediv__(self, other):
        if isinstance(other, Complex):
            self *= other.inv()
            return self
        return super().__itruediv__(other)


def re(z: Complex) -> float:
    """Real part of ``z``."""
    return z.x


def im(z: Complex) -> float:
    """Imaginary part of ``z``."""
    return z.y