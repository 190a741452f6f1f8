import base64
import io

import pytest
from hypothesis import given
from hypothesis import strategies as st
from PIL import Image as PILImage

from svgraster.matrix3x3 import Matrix3x3
from svgraster.svg import (
    Group,
    Image,
    InterpolatedColorTriangle,
    Line,
    Point,
    Polygon,
    Polyline,
    Rect,
    TexturedTriangle,
)
from svgraster.svgparser import (
    SVGParseError,
    load,
    parse_points,
    parse_string,
    parse_transform,
)
from svgraster.texture import Color
from svgraster.transforms import apply, rotate, scale, translate
from svgraster.vector2d import Vector2D


def _png_bytes(color=(255, 0, 0), size=(2, 2)):
    buf = io.BytesIO()
    PILImage.new("RGBA", size, color + (128,)).save(buf, format="PNG")
    return buf.getvalue()


def _entries(m):
    return [v for row in m for v in row]


def _doc(body, attrs='width="100" height="50"'):
    return f'<svg xmlns="http://www.w3.org/2000/svg" {attrs}>{body}</svg>'


class _Recorder:
    def __init__(self):
        self.calls = []

    def rasterize_point(self, x, y, color):
        self.calls.append(("point", x, y, color))

    def rasterize_line(self, x0, y0, x1, y1, color):
        self.calls.append(("line", x0, y0, x1, y1, color))

    def rasterize_triangle(self, x0, y0, x1, y1, x2, y2, color):
        self.calls.append(("tri", x0, y0, x1, y1, x2, y2, color))


def test_translate_transform():
    p = apply(parse_transform("translate(10, 20)"), Vector2D(0, 0))
    assert p.x == pytest.approx(10)
    assert p.y == pytest.approx(20)


def test_translate_missing_y_defaults_to_zero():
    assert _entries(parse_transform("translate(7)")) == pytest.approx(_entries(translate(7, 0)))


def test_scale_single_value_leaves_y_unscaled():
    assert _entries(parse_transform("scale(2)")) == pytest.approx(_entries(scale(2, 1)))


def test_rotate_about_point():
    m = parse_transform("rotate(30 4 5)")
    expected = translate(4, 5) * rotate(30) * translate(-4, -5)
    assert _entries(m) == pytest.approx(_entries(expected))
    centre = apply(m, Vector2D(4, 5))
    assert (centre.x, centre.y) == pytest.approx((4, 5))


def test_matrix_transform_layout():
    m = parse_transform("matrix(1,2,3,4,5,6)")
    assert m[0, 0] == 1 and m[1, 0] == 2
    assert m[0, 1] == 3 and m[1, 1] == 4
    assert m[0, 2] == 5 and m[1, 2] == 6
    assert (m[2, 0], m[2, 1], m[2, 2]) == (0, 0, 1)


def test_matrix_with_too_few_values():
    with pytest.raises(SVGParseError):
        parse_transform("matrix(1 2 3)")


def test_skew_x():
    m = parse_transform("skewX(45)")
    assert m[0, 1] == pytest.approx(1.0)
    assert m[1, 0] == 0


def test_skew_y():
    m = parse_transform("skewY(45)")
    assert m[1, 0] == pytest.approx(1.0)
    assert m[0, 1] == 0


def test_composition_order():
    m = parse_transform("translate(1,0) scale(2,2)")
    assert _entries(m) == pytest.approx(_entries(translate(1, 0) * scale(2, 2)))


def test_unknown_transform_is_identity():
    assert parse_transform("wobble(3)") == Matrix3x3.identity()


def test_unclosed_transform():
    with pytest.raises(SVGParseError):
        parse_transform("translate(1, 2")


def test_parse_points_pairs():
    assert parse_points("1,2 3.5,-4") == [Vector2D(1, 2), Vector2D(3.5, -4)]


def test_parse_points_empty():
    assert parse_points(None) == []


@given(st.lists(st.tuples(st.integers(-1000, 1000), st.integers(-1000, 1000)), max_size=20))
def test_parse_points_round_trip(pairs):
    text = " ".join(f"{x},{y}" for x, y in pairs)
    assert parse_points(text) == [Vector2D(x, y) for x, y in pairs]


def test_document_size_and_order():
    document = _doc(
        '<line x1="0" y1="0" x2="1" y2="1" stroke="#000000"/>'
        '<polyline points="0,0 1,1 2,0"/>'
        '<polygon points="0,0 1,0 1,1"/>',
        attrs='width="100px" height="50"',
    )
    svg = parse_string(document)
    assert svg.width == 100
    assert svg.height == 50
    assert [type(e) for e in svg.elements] == [Line, Polyline, Polygon]
    assert svg.elements[1].points == [Vector2D(0, 0), Vector2D(1, 1), Vector2D(2, 0)]


def test_zero_size_rect_is_point():
    svg = parse_string(_doc('<rect x="3" y="4" width="0" height="0" fill="#00ff00"/>'))
    (point,) = svg.elements
    assert isinstance(point, Point)
    assert point.position == Vector2D(3, 4)
    assert point.style.fill_color == Color.from_hex("#00ff00")


def test_rect_and_styles():
    svg = parse_string(_doc(
        '<rect x="1" y="2" width="3" height="4" fill="#ff0000" '
        'stroke="#0000ff" stroke-width="2.5" stroke-miterlimit="4"/>'
        '<rect x="0" y="0" width="1" height="1"/>'
    ))
    rect, plain = svg.elements
    assert isinstance(rect, Rect)
    assert rect.position == Vector2D(1, 2)
    assert rect.dimension == Vector2D(3, 4)
    assert rect.style.fill_color == Color.from_hex("#ff0000")
    assert rect.style.stroke_color == Color.from_hex("#0000ff")
    assert rect.style.stroke_visible is True
    assert rect.style.stroke_width == 2.5
    assert rect.style.miter_limit == 4
    assert plain.style.stroke_visible is False
    assert plain.style.stroke_color == Color.BLACK


def test_line_coordinates_and_transform():
    svg = parse_string(_doc(
        '<line x1="1" y1="2" x2="3" y2="4" stroke="#000000" transform="translate(5,6)"/>'
    ))
    (line,) = svg.elements
    assert line.start == Vector2D(1, 2)
    assert line.end == Vector2D(3, 4)
    assert _entries(line.transform) == pytest.approx(_entries(translate(5, 6)))


def test_nested_groups_draw_with_accumulated_transform():
    svg = parse_string(_doc(
        '<g transform="translate(5,0)"><g transform="translate(0,2)">'
        '<line x1="0" y1="0" x2="1" y2="0" stroke="#000000"/></g></g>'
    ))
    (outer,) = svg.elements
    assert isinstance(outer, Group)
    assert isinstance(outer.elements[0], Group)
    rec = _Recorder()
    svg.draw(rec, Matrix3x3.identity())
    assert len(rec.calls) == 1
    kind, x0, y0, x1, y1, color = rec.calls[0]
    assert kind == "line"
    assert (x0, y0, x1, y1) == pytest.approx((5, 2, 6, 2))
    assert color == Color.BLACK


def test_color_triangle():
    svg = parse_string(_doc(
        '<colortri points="0 0 10 0 0 10" colors="1 0 0 1 0 1 0 1 0 0 1 1"/>'
    ))
    (tri,) = svg.elements
    assert isinstance(tri, InterpolatedColorTriangle)
    assert (tri.p0_svg, tri.p1_svg, tri.p2_svg) == (
        Vector2D(0, 0), Vector2D(10, 0), Vector2D(0, 10))
    assert (tri.p0_col, tri.p1_col, tri.p2_col) == (
        Color(1, 0, 0), Color(0, 1, 0), Color(0, 0, 1))


def test_color_triangle_missing_colors():
    with pytest.raises(SVGParseError):
        parse_string(_doc('<colortri points="0 0 10 0 0 10" colors="1 0 0 1"/>'))


def test_textured_triangle_unknown_texture():
    svg = parse_string(_doc('<textri points="0 0 1 0 0 1" uvs="0 0 1 0 0 1" texid="nope"/>'))
    (tri,) = svg.elements
    assert isinstance(tri, TexturedTriangle)
    assert tri.tex is None
    assert tri.p1_uv == Vector2D(1, 0)


def test_embedded_image():
    data = base64.b64encode(_png_bytes((255, 0, 0), (2, 3))).decode()
    href = "data:image/png;base64," + data[:10] + "\n  " + data[10:]
    svg = parse_string(
        '<svg xmlns="http://www.w3.org/2000/svg" '
        'xmlns:xlink="http://www.w3.org/1999/xlink">'
        f'<image x="1" y="2" width="4" height="5" xlink:href="{href}"/></svg>'
    )
    (image,) = svg.elements
    assert isinstance(image, Image)
    assert (image.tex.width, image.tex.height) == (2, 3)
    assert len(image.tex.mipmap) == 1
    assert image.tex.mipmap[0].get_texel(1, 2) == Color(1.0, 0.0, 0.0)
    assert image.dimension == Vector2D(4, 5)


def test_image_without_data():
    with pytest.raises(SVGParseError):
        parse_string(_doc('<image x="0" y="0" width="1" height="1" href="nothing"/>'))


def test_unknown_elements_are_skipped():
    svg = parse_string(_doc('<circle r="3"/><text>hi</text><rect width="1" height="1"/>'))
    assert [type(e) for e in svg.elements] == [Rect]


def test_not_svg_root():
    with pytest.raises(SVGParseError):
        parse_string("<html><body/></html>")


def test_malformed_xml():
    with pytest.raises(SVGParseError):
        parse_string("<svg><rect></svg>")


def test_bad_fill_colour():
    with pytest.raises(SVGParseError):
        parse_string(_doc('<rect width="1" height="1" fill="#zzzzzz"/>'))


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.svg")


def test_load_texture_relative_to_file(tmp_path):
    (tmp_path / "tex.png").write_bytes(_png_bytes((0, 0, 255), (4, 4)))
    (tmp_path / "scene.svg").write_text(_doc(
        '<texture texid="t" filename="tex.png"/>'
        '<textri points="0 0 1 0 0 1" uvs="0 0 1 0 0 1" texid="t"/>'
    ))
    svg = load(str(tmp_path / "scene.svg"))
    tex = svg.textures["t"]
    (tri,) = svg.elements
    assert tri.tex is tex
    assert (tex.width, tex.height) == (4, 4)
    assert len(tex.mipmap) > 1
    assert tex.mipmap[0].get_texel(0, 0) == Color(0.0, 0.0, 1.0)


def test_missing_texture_file_is_skipped(tmp_path):
    svg = parse_string(_doc('<texture texid="t" filename="absent.png"/>'), tmp_path)
    assert svg.textures == {}