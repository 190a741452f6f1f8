"""Reading SVG documents into scene elements."""

from __future__ import annotations

import base64
import io
import logging
import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from PIL import Image as PILImage

from .matrix3x3 import Matrix3x3
from .misc import PI
from .svg import (
    SVG,
    Group,
    Image,
    InterpolatedColorTriangle,
    Line,
    Point,
    Polygon,
    Polyline,
    Rect,
    Style,
    SVGElement,
    TexturedTriangle,
)
from .texture import Color, MipLevel, Texture
from .transforms import rotate, scale, translate
from .vector2d import Vector2D

log = logging.getLogger(__name__)

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_XLINK_HREF = "{http://www.w3.org/1999/xlink}href"


class SVGParseError(ValueError):
    """Raised when a document cannot be read as an SVG scene."""


@dataclass
class _Context:
    svg: SVG
    base_dir: Path


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _numbers(text: Optional[str]) -> list[float]:
    return [float(token) for token in _NUMBER.findall(text or "")]


def _float_attr(xml: ET.Element, name: str, default: float = 0.0) -> float:
    """Leading number of an attribute, or ``default`` if absent or not numeric."""
    value = xml.get(name)
    if value is None:
        return default
    match = _NUMBER.match(value.lstrip())
    return float(match.group()) if match else default


def _transform_step(kind: str, args: list[float]) -> Matrix3x3:
    def arg(i: int, default: float) -> float:
        return args[i] if len(args) > i else default

    if kind == "matrix":
        if len(args) < 6:
            raise SVGParseError(f"matrix() needs 6 values, got {len(args)}")
        a, b, c, d, e, f = args[:6]
        return Matrix3x3(a, c, e, b, d, f, 0.0, 0.0, 1.0)
    if kind == "translate":
        return translate(arg(0, 0.0), arg(1, 0.0))
    if kind == "scale":
        return scale(arg(0, 1.0), arg(1, 1.0))
    if kind == "rotate":
        a, x, y = arg(0, 0.0), arg(1, 0.0), arg(2, 0.0)
        return translate(x, y) * rotate(a) * translate(-x, -y)
    m = Matrix3x3.identity()
    if kind == "skewX":
        m[0, 1] = math.tan(arg(0, 0.0) * PI / 180.0)
    elif kind == "skewY":
        m[1, 0] = math.tan(arg(0, 0.0) * PI / 180.0)
    else:
        log.warning("unknown transformation type: %s", kind)
    return m


def parse_transform(text: str) -> Matrix3x3:
    """Compose the transformations listed in an SVG ``transform`` attribute."""
    transform = Matrix3x3.identity()
    rest = text
    while "(" in rest:
        left = rest.index("(")
        right = rest.find(")", left)
        if right == -1:
            raise SVGParseError(f"unclosed parenthesis in transform {text!r}")
        kind = rest[:left].strip(" \t\r\n,")
        transform = transform * _transform_step(kind, _numbers(rest[left + 1:right]))
        rest = rest[right + 1:]
    return transform


def parse_points(text: Optional[str]) -> list[Vector2D]:
    """Read an SVG ``points`` list as pairs of coordinates; an odd trailing value is ignored."""
    values = _numbers(text)
    return [Vector2D(x, y) for x, y in zip(values[0::2], values[1::2])]


def _color(value: str) -> Color:
    try:
        return Color.from_hex(value)
    except ValueError as exc:
        raise SVGParseError(str(exc)) from exc


def _common(xml: ET.Element) -> dict:
    style = Style()
    fill = xml.get("fill")
    if fill is not None:
        style.fill_color = _color(fill)
    stroke = xml.get("stroke")
    if stroke is not None:
        style.stroke_color = _color(stroke)
        style.stroke_visible = True
    else:
        style.stroke_color = Color.BLACK
        style.stroke_visible = False
    style.stroke_width = _float_attr(xml, "stroke-width", style.stroke_width)
    style.miter_limit = _float_attr(xml, "stroke-miterlimit", style.miter_limit)

    trans = xml.get("transform")
    transform = parse_transform(trans) if trans is not None else Matrix3x3.identity()
    return {"style": style, "transform": transform}


def _decode_rgb(data: bytes) -> tuple[int, int, bytes]:
    with PILImage.open(io.BytesIO(data)) as img:
        rgb = img.convert("RGB")
        return rgb.width, rgb.height, rgb.tobytes()


def _parse_line(xml: ET.Element, ctx: _Context) -> Line:
    return Line(
        **_common(xml),
        start=Vector2D(_float_attr(xml, "x1"), _float_attr(xml, "y1")),
        end=Vector2D(_float_attr(xml, "x2"), _float_attr(xml, "y2")),
    )


def _parse_polyline(xml: ET.Element, ctx: _Context) -> Polyline:
    return Polyline(**_common(xml), points=parse_points(xml.get("points")))


def _parse_polygon(xml: ET.Element, ctx: _Context) -> Polygon:
    return Polygon(**_common(xml), points=parse_points(xml.get("points")))


def _parse_rect(xml: ET.Element, ctx: _Context) -> SVGElement:
    w = _float_attr(xml, "width")
    h = _float_attr(xml, "height")
    position = Vector2D(_float_attr(xml, "x"), _float_attr(xml, "y"))
    # zero-size rectangles are points
    if w == 0 and h == 0:
        return Point(**_common(xml), position=position)
    return Rect(**_common(xml), position=position, dimension=Vector2D(w, h))


def _parse_image(xml: ET.Element, ctx: _Context) -> Image:
    image = Image(
        **_common(xml),
        position=Vector2D(_float_attr(xml, "x"), _float_attr(xml, "y")),
        dimension=Vector2D(_float_attr(xml, "width"), _float_attr(xml, "height")),
    )
    href = xml.get(_XLINK_HREF) or xml.get("xlink:href") or xml.get("href")
    if href is None or "," not in href:
        raise SVGParseError("image has no embedded data")
    encoded = "".join(href.split(",", 1)[1].split())
    try:
        width, height, pixels = _decode_rgb(base64.b64decode(encoded))
    except (ValueError, OSError):
        log.warning("could not load image")
        return image
    image.tex = Texture(width, height, [MipLevel(width, height, bytearray(pixels))])
    return image


def _parse_group(xml: ET.Element, ctx: _Context) -> Group:
    group = Group(**_common(xml))
    _parse_children(xml, group.elements, ctx)
    return group


def _three_points(xml: ET.Element, attr: str) -> list[Vector2D]:
    values = _numbers(xml.get(attr))
    if len(values) < 6:
        raise SVGParseError(f"{attr!r} needs 3 coordinate pairs")
    return [Vector2D(values[i], values[i + 1]) for i in (0, 2, 4)]


def _parse_color_tri(xml: ET.Element, ctx: _Context) -> InterpolatedColorTriangle:
    p0, p1, p2 = _three_points(xml, "points")
    values = _numbers(xml.get("colors"))
    if len(values) < 12:
        raise SVGParseError("'colors' needs 3 RGBA values")
    c0, c1, c2 = (Color(*values[i:i + 3]) for i in (0, 4, 8))
    return InterpolatedColorTriangle(
        **_common(xml),
        p0_svg=p0, p1_svg=p1, p2_svg=p2,
        p0_col=c0, p1_col=c1, p2_col=c2,
    )


def _parse_tex_tri(xml: ET.Element, ctx: _Context) -> TexturedTriangle:
    p0, p1, p2 = _three_points(xml, "points")
    uv0, uv1, uv2 = _three_points(xml, "uvs")
    texid = xml.get("texid")
    if texid is None:
        raise SVGParseError("textri has no texid")
    return TexturedTriangle(
        **_common(xml),
        p0_svg=p0, p1_svg=p1, p2_svg=p2,
        p0_uv=uv0, p1_uv=uv1, p2_uv=uv2,
        tex=ctx.svg.textures.get(texid),
    )


def _parse_texture(xml: ET.Element, ctx: _Context) -> None:
    texid = xml.get("texid")
    filename = xml.get("filename")
    if texid is None or filename is None:
        raise SVGParseError("texture needs texid and filename")
    try:
        width, height, pixels = _decode_rgb((ctx.base_dir / filename).read_bytes())
    except (ValueError, OSError):
        log.warning("could not load image %s", filename)
        return None
    ctx.svg.textures[texid] = Texture.from_pixels(pixels, width, height)
    return None


_BUILDERS: dict[str, Callable[[ET.Element, _Context], Optional[SVGElement]]] = {
    "line": _parse_line,
    "polyline": _parse_polyline,
    "rect": _parse_rect,
    "polygon": _parse_polygon,
    "image": _parse_image,
    "g": _parse_group,
    "colortri": _parse_color_tri,
    "textri": _parse_tex_tri,
    "texture": _parse_texture,
}


def _parse_children(xml: ET.Element, out: list[SVGElement], ctx: _Context) -> None:
    # document order is draw order
    for child in xml:
        if not isinstance(child.tag, str):
            continue
        builder = _BUILDERS.get(_local(child.tag))
        if builder is None:
            continue
        element = builder(child, ctx)
        if element is not None:
            out.append(element)


def parse_string(text: Union[str, bytes], base_dir: Union[str, Path, None] = None) -> SVG:
    """Parse an SVG document; texture files are looked up relative to ``base_dir``."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise SVGParseError(f"malformed XML: {exc}") from exc
    if _local(root.tag) != "svg":
        raise SVGParseError("not an SVG file")
    svg = SVG(width=_float_attr(root, "width"), height=_float_attr(root, "height"))
    ctx = _Context(svg, Path(base_dir) if base_dir is not None else Path.cwd())
    _parse_children(root, svg.elements, ctx)
    return svg


def load(filename: Union[str, Path]) -> SVG:
    """Read and parse an SVG file; raises OSError if it cannot be read."""
    path = Path(filename)
    data = path.read_bytes()
    return parse_string(data, path.resolve().parent)