"""Parse a subset of SVG into a drawable scene graph, with the geometry and texture tools to render it."""

__version__ = "0.1.0"

__all__ = [
    "misc",
    "vector2d",
    "vector3d",
    "complex",
    "matrix3x3",
    "quaternion",
    "transforms",
    "triangulation",
    "texture",
    "svg",
    "svgparser",
]