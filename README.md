# svgraster

`svgraster` reads a small subset of SVG into a scene graph of drawable
elements. It also provides the geometry needed to render that scene: 2D and
3D vectors, 3×3 matrices, complex numbers, quaternions, SVG transforms,
ear-clipping polygon triangulation and mipmapped RGB textures.

## What it does not do

`svgraster` does not produce pixels, image files or a window, and it has no
command-line program. You supply a *rasterizer*, an object with the drawing
methods listed below. The scene calls it in document order (painter's model),
and the rasterizer decides what to do with each point, line and triangle.

## Installation

```
pip install svgraster
```

To run the tests:

```
pip install "svgraster[test]"
pytest
```

## Supported SVG elements

| Element      | Scene type (`svgraster.svg`) | Attributes read                                   |
|--------------|------------------------------|---------------------------------------------------|
| `line`       | `Line`                       | `x1`, `y1`, `x2`, `y2` (stored as `start`, `end`)  |
| `polyline`   | `Polyline`                   | `points`                                          |
| `rect`       | `Rect`, or `Point` when width and height are both 0 | `x`, `y`, `width`, `height`  |
| `polygon`    | `Polygon`                    | `points`                                          |
| `image`      | `Image`                      | `x`, `y`, `width`, `height`, base64 data in `xlink:href` |
| `g`          | `Group`                      | child elements; groups nest                       |
| `colortri`   | `InterpolatedColorTriangle`  | `points` (3 pairs), `colors` (3 RGBA quadruples; alpha ignored) |
| `textri`     | `TexturedTriangle`           | `points`, `uvs`, `texid`                          |
| `texture`    | stored in `SVG.textures`     | `texid`, `filename` (relative to the document)    |

Every element also reads `fill`, `stroke` (hex colours, `#rrggbb` or `#rgb`),
`stroke-width`, `stroke-miterlimit` and `transform`. An element with no
`stroke` gets a black, invisible stroke. Transforms may use `matrix`,
`translate`, `scale`, `rotate` (with an optional centre), `skewX` and `skewY`.
An unknown transform type is logged as a warning and treated as the identity.
Elements of any other kind are skipped.

Images and textures are decoded with Pillow and kept as RGB. Alpha is
dropped. A texture loaded through `<texture>` gets a full mip chain. An
`<image>` keeps only its original level. An image or texture file that cannot
be decoded is logged as a warning and left out: the image keeps an empty
texture, and the texture is not registered.

## Loading a document

```python
from svgraster.svgparser import load, parse_string, SVGParseError

svg = load("drawing.svg")
print(svg.width, svg.height, len(svg.elements))

svg = parse_string(
    '<svg width="100" height="100">'
    '<rect x="10" y="10" width="20" height="30" fill="#ff0000" stroke="#000000"/>'
    "</svg>",
    base_dir=".",
)
```

`SVGParseError` (a `ValueError`) is raised in these cases:

- the text is not well-formed XML;
- the root element is not `<svg>`;
- a colour is not valid hex;
- a `transform` is malformed;
- a required attribute is missing, for example an image without embedded
  data or a `textri` without `texid`.

`load` raises `OSError` when the file cannot be read.

`parse_transform(text)` and `parse_points(text)` in `svgraster.svgparser`
can also be used on their own. `parse_transform` returns a `Matrix3x3`.
`parse_points` returns a list of `Vector2D`.

## Drawing

Pass any object with these methods to `SVG.draw`:

```python
class Rasterizer:
    def rasterize_point(self, x, y, color): ...
    def rasterize_line(self, x0, y0, x1, y1, color): ...
    def rasterize_triangle(self, x0, y0, x1, y1, x2, y2, color): ...
    def rasterize_interpolated_color_triangle(
        self, x0, y0, c0, x1, y1, c1, x2, y2, c2): ...
    def rasterize_textured_triangle(
        self, x0, y0, u0, v0, x1, y1, u1, v1, x2, y2, u2, v2, texture): ...
```

```python
from svgraster.transforms import scale

svg.draw(my_rasterizer)               # identity transform
svg.draw(my_rasterizer, scale(2, 2))  # the whole scene at double size
```

How each element is drawn:

- A `Rect` is filled as two triangles. It is outlined only when its stroke is
  visible.
- A `Polygon` is filled from its triangulation and outlined as a closed loop
  when its stroke is visible.
- A `Line` is drawn only when its stroke is visible.
- A `Polyline` draws its segments in the stroke colour.
- An `Image` is drawn point by point, with bilinear samples of its texture.

## Geometry helpers

```python
from svgraster.transforms import apply, translate, rotate
from svgraster.vector2d import Vector2D
from svgraster.triangulation import triangulate

m = translate(5, 0) * rotate(90)   # Matrix3x3 product: rotate first, then translate
p = apply(m, Vector2D(1, 0))       # approximately Vector2D(5, 1)

square = [Vector2D(0, 0), Vector2D(1, 0), Vector2D(1, 1), Vector2D(0, 1)]
triangles = triangulate(square)    # list of (Vector2D, Vector2D, Vector2D) tuples
```

`triangulate` accepts either winding order. For a polygon that is not simple,
it stops early and returns the triangles found so far.

Other modules:

- `svgraster.vector2d`: `Vector2D`, `dot`, `cross`.
- `svgraster.vector3d`: `Vector3D`, `dot`, `cross`.
- `svgraster.complex`: `Complex`, `re`, `im`.
- `svgraster.matrix3x3`: `Matrix3x3` and `outer`. The matrix supports
  determinant, inverse, transpose and the Frobenius norm.
- `svgraster.quaternion`: `Quaternion`. It covers axis–angle, Euler angles,
  rotation matrices, vector rotation and slerp.
- `svgraster.misc`: `radians`, `degrees`, `clamp`.

## Textures

```python
from svgraster.texture import Texture, SampleParams, PixelSampleMethod, LevelSampleMethod
from svgraster.vector2d import Vector2D

tex = Texture.from_pixels(rgb_bytes, width, height)   # packed RGB; builds the mip chain
color = tex.sample_bilinear(Vector2D(0.5, 0.5))
color = tex.sample(SampleParams(
    p_uv=Vector2D(0.5, 0.5),
    p_dx_uv=Vector2D(0.51, 0.5),
    p_dy_uv=Vector2D(0.5, 0.51),
    psm=PixelSampleMethod.P_LINEAR,
    lsm=LevelSampleMethod.L_NEAREST,
))
```

Level 0 holds the original pixels. Each further level halves the size. It is
filtered with a box filter, or with a trapezoidal filter where a side is odd,
up to 14 levels in all. `sample_nearest` and `sample_bilinear` return magenta
for a level that does not exist. Colours are `Color` values with float
channels. `Color.from_hex` parses `#rrggbb` and `#rgb`.