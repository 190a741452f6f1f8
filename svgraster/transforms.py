"""Homogeneous 2D transformations."""

from __future__ import annotations

import math

from .matrix3x3 import Matrix3x3
from .misc import radians
from .vector2d import Vector2D
from .vector3d import Vector3D


def apply(m: Matrix3x3, v: Vector2D) -> Vector2D:
    """Transform point ``v`` by ``m`` in homogeneous coordinates."""
    mv = m * Vector3D(v.x, v.y, 1.0)
    return Vector2D(mv.x / mv.z, mv.y / mv.z)


def translate(dx: float, dy: float) -> Matrix3x3:
    """Translation by ``(dx, dy)``."""
    return Matrix3x3(
        1.0, 0.0, dx,
        0.0, 1.0, dy,
        0.0, 0.0, 1.0,
    )


def scale(sx: float, sy: float) -> Matrix3x3:
    """Axis-aligned scaling by ``sx`` and ``sy``."""
    return Matrix3x3(
        sx, 0.0, 0.0,
        0.0, sy, 0.0,
        0.0, 0.0, 1.0,
    )


def rotate(deg: float) -> Matrix3x3:
    """Counterclockwise rotation by ``deg`` degrees about the origin."""
    a = radians(deg)
    c, s = math.cos(a), math.sin(a)
    return Matrix3x3(
        c, -s, 0.0,
        s, c, 0.0,
        0.0, 0.0, 1.0,
    )