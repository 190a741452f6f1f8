"""Scene elements of a parsed SVG document and how they are drawn."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional, Protocol

from .matrix3x3 import Matrix3x3
from .texture import Color, Texture
from .transforms import apply
from .triangulation import triangulate
from .vector2d import Vector2D


class _Rasterizer(Protocol):
    def rasterize_point(self, x: float, y: float, color: Color) -> None: ...

    def rasterize_line(self, x0: float, y0: float, x1: float, y1: float, color: Color) -> None: ...

    def rasterize_triangle(
        self, x0: float, y0: float, x1: float, y1: float, x2: float, y2: float, color: Color
    ) -> None: ...

    def rasterize_interpolated_color_triangle(
        self,
        x0: float, y0: float, c0: Color,
        x1: float, y1: float, c1: Color,
        x2: float, y2: float, c2: Color,
    ) -> None: ...

    def rasterize_textured_triangle(
        self,
        x0: float, y0: float, u0: float, v0: float,
        x1: float, y1: float, u1: float, v1: float,
        x2: float, y2: float, u2: float, v2: float,
        tex: Optional[Texture],
    ) -> None: ...


class SVGElementType(IntEnum):
    """Kind of a scene element."""

    NONE = 0
    POINT = 1
    LINE = 2
    POLYLINE = 3
    RECT = 4
    POLYGON = 5
    ELLIPSE = 6
    IMAGE = 7
    GROUP = 8
    TRIANGLE = 9


@dataclass
class Style:
    """Stroke and fill styling of an element."""

    stroke_color: Color = field(default_factory=Color)
    fill_color: Color = field(default_factory=Color)
    stroke_width: float = 0.0
    miter_limit: float = 0.0
    stroke_visible: bool = False


@dataclass
class SVGElement(ABC):
    """Base of all drawable elements: a style and a local transform."""

    type: ClassVar[SVGElementType] = SVGElementType.NONE

    style: Style = field(default_factory=Style)
    transform: Matrix3x3 = field(default_factory=Matrix3x3.identity)

    @abstractmethod
    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        """Send this element, transformed by ``global_transform``, to the rasterizer."""


@dataclass
class Triangle(SVGElement):
    """A triangle with a single colour."""

    type: ClassVar[SVGElementType] = SVGElementType.TRIANGLE

    p0_svg: Vector2D = field(default_factory=Vector2D)
    p1_svg: Vector2D = field(default_factory=Vector2D)
    p2_svg: Vector2D = field(default_factory=Vector2D)
    clr: Color = field(default_factory=Color)

    def _screen_points(self, global_transform: Matrix3x3) -> tuple[Vector2D, Vector2D, Vector2D]:
        m = global_transform * self.transform
        return apply(m, self.p0_svg), apply(m, self.p1_svg), apply(m, self.p2_svg)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        p0, p1, p2 = self._screen_points(global_transform)
        rasterizer.rasterize_triangle(p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, Color())


@dataclass
class InterpolatedColorTriangle(Triangle):
    """A triangle whose colour interpolates the three vertex colours."""

    p0_col: Color = field(default_factory=Color)
    p1_col: Color = field(default_factory=Color)
    p2_col: Color = field(default_factory=Color)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        p0, p1, p2 = self._screen_points(global_transform)
        rasterizer.rasterize_interpolated_color_triangle(
            p0.x, p0.y, self.p0_col,
            p1.x, p1.y, self.p1_col,
            p2.x, p2.y, self.p2_col,
        )


@dataclass
class TexturedTriangle(Triangle):
    """A triangle coloured by a texture through per-vertex uv coordinates."""

    p0_uv: Vector2D = field(default_factory=Vector2D)
    p1_uv: Vector2D = field(default_factory=Vector2D)
    p2_uv: Vector2D = field(default_factory=Vector2D)
    tex: Optional[Texture] = None

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        p0, p1, p2 = self._screen_points(global_transform)
        rasterizer.rasterize_textured_triangle(
            p0.x, p0.y, self.p0_uv.x, self.p0_uv.y,
            p1.x, p1.y, self.p1_uv.x, self.p1_uv.y,
            p2.x, p2.y, self.p2_uv.x, self.p2_uv.y,
            self.tex,
        )


@dataclass
class Group(SVGElement):
    """Elements drawn in order under a shared transform."""

    type: ClassVar[SVGElementType] = SVGElementType.GROUP

    elements: list[SVGElement] = field(default_factory=list)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        m = global_transform * self.transform
        for element in self.elements:
            element.draw(rasterizer, m)


@dataclass
class Point(SVGElement):
    """A single point drawn in the fill colour."""

    type: ClassVar[SVGElementType] = SVGElementType.POINT

    position: Vector2D = field(default_factory=Vector2D)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        p = apply(global_transform * self.transform, self.position)
        rasterizer.rasterize_point(p.x, p.y, self.style.fill_color)


@dataclass
class Line(SVGElement):
    """A line segment, drawn only when its stroke is visible."""

    type: ClassVar[SVGElementType] = SVGElementType.LINE

    start: Vector2D = field(default_factory=Vector2D)
    end: Vector2D = field(default_factory=Vector2D)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        m = global_transform * self.transform
        f, t = apply(m, self.start), apply(m, self.end)
        if self.style.stroke_visible:
            rasterizer.rasterize_line(f.x, f.y, t.x, t.y, self.style.stroke_color)


@dataclass
class Polyline(SVGElement):
    """An open chain of line segments in the stroke colour."""

    type: ClassVar[SVGElementType] = SVGElementType.POLYLINE

    points: list[Vector2D] = field(default_factory=list)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        m = global_transform * self.transform
        c = self.style.stroke_color
        screen = [apply(m, p) for p in self.points]
        for p0, p1 in zip(screen, screen[1:]):
            rasterizer.rasterize_line(p0.x, p0.y, p1.x, p1.y, c)


@dataclass
class Rect(SVGElement):
    """An axis-aligned rectangle, filled as two triangles."""

    type: ClassVar[SVGElementType] = SVGElementType.RECT

    position: Vector2D = field(default_factory=Vector2D)
    dimension: Vector2D = field(default_factory=Vector2D)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        m = global_transform * self.transform
        x, y = self.position.x, self.position.y
        w, h = self.dimension.x, self.dimension.y

        p0 = apply(m, Vector2D(x, y))
        p1 = apply(m, Vector2D(x + w, y))
        p2 = apply(m, Vector2D(x, y + h))
        p3 = apply(m, Vector2D(x + w, y + h))

        c = self.style.fill_color
        rasterizer.rasterize_triangle(p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, c)
        rasterizer.rasterize_triangle(p2.x, p2.y, p1.x, p1.y, p3.x, p3.y, c)

        if self.style.stroke_visible:
            c = self.style.stroke_color
            for a, b in ((p0, p1), (p1, p3), (p3, p2), (p2, p0)):
                rasterizer.rasterize_line(a.x, a.y, b.x, b.y, c)


@dataclass
class Polygon(SVGElement):
    """A closed simple polygon, filled by triangulation."""

    type: ClassVar[SVGElementType] = SVGElementType.POLYGON

    points: list[Vector2D] = field(default_factory=list)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        m = global_transform * self.transform

        c = self.style.fill_color
        for tri in triangulate(self.points):
            p0, p1, p2 = (apply(m, p) for p in tri)
            rasterizer.rasterize_triangle(p0.x, p0.y, p1.x, p1.y, p2.x, p2.y, c)

        if self.style.stroke_visible:
            c = self.style.stroke_color
            screen = [apply(m, p) for p in self.points]
            for p0, p1 in zip(screen, screen[1:] + screen[:1]):
                rasterizer.rasterize_line(p0.x, p0.y, p1.x, p1.y, c)


@dataclass
class Image(SVGElement):
    """A bitmap stretched over a rectangle, drawn point by point."""

    type: ClassVar[SVGElementType] = SVGElementType.IMAGE

    position: Vector2D = field(default_factory=Vector2D)
    dimension: Vector2D = field(default_factory=Vector2D)
    tex: Texture = field(default_factory=Texture)

    def draw(self, rasterizer: _Rasterizer, global_transform: Matrix3x3) -> None:
        m = global_transform * self.transform
        p0 = apply(m, self.position)
        p1 = apply(m, self.position + self.dimension)
        span_x = p1.x - p0.x + 1
        span_y = p1.y - p0.y + 1
        for x in range(math.floor(p0.x), math.floor(p1.x) + 1):
            for y in range(math.floor(p0.y), math.floor(p1.y) + 1):
                uv = Vector2D((x + 0.5 - p0.x) / span_x, (y + 0.5 - p0.y) / span_y)
                rasterizer.rasterize_point(x, y, self.tex.sample_bilinear(uv))


@dataclass
class SVG:
    """A whole document: its size, top-level elements and named textures."""

    width: float = 0.0
    height: float = 0.0
    elements: list[SVGElement] = field(default_factory=list)
    textures: dict[str, Texture] = field(default_factory=dict)

    def draw(self, rasterizer: _Rasterizer, global_transform: Optional[Matrix3x3] = None) -> None:
        """Draw every element in document order."""
        m = Matrix3x3.identity() if global_transform is None else global_transform
        for element in self.elements:
            element.draw(rasterizer, m)