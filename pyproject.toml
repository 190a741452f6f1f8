[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "svgraster"
version = "0.1.0"
description = "Parse a subset of SVG into a drawable scene graph with 2D transforms, polygon triangulation and mipmapped textures."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["svg", "rasterization", "graphics", "triangulation", "mipmap", "texture", "quaternion"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["svgraster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
