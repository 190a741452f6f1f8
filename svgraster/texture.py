"""Colours, mipmapped RGB textures and texture sampling."""

from __future__ import annotations

import math
import string
from dataclasses import dataclass, field
from enum import IntEnum
from numbers import Real
from typing import ClassVar, Iterator, Sequence

from .misc import clamp
from .vector2d import Vector2D

K_MAX_MIP_LEVELS = 14


@dataclass(frozen=True)
class Color:
    """An RGB colour with float channels, nominally in ``[0, 1]``."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    MAGENTA: ClassVar[Color]

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#rrggbb`` or ``#rgb`` (the ``#`` is optional)."""
        s = text.strip()
        if s.startswith("#"):
            s = s[1:]
        if len(s) == 3:
            s = "".join(ch * 2 for ch in s)
        if len(s) != 6 or any(ch not in string.hexdigits for ch in s):
            raise ValueError(f"not a hex colour: {text!r}")
        v = int(s, 16)
        return cls(((v >> 16) & 0xFF) / 255.0, ((v >> 8) & 0xFF) / 255.0, (v & 0xFF) / 255.0)

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, s: float) -> Color:
        if not isinstance(s, Real):
            return NotImplemented
        return Color(self.r * s, self.g * s, self.b * s)

    __rmul__ = __mul__


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)
Color.MAGENTA = Color(1.0, 0.0, 1.0)


def _lerp(a: Color, b: Color, t: float) -> Color:
    return a * (1.0 - t) + b * t


class PixelSampleMethod(IntEnum):
    """How texels are combined within one mip level."""

    P_NEAREST = 0
    P_LINEAR = 1


class LevelSampleMethod(IntEnum):
    """How mip levels are chosen or combined."""

    L_ZERO = 0
    L_NEAREST = 1
    L_LINEAR = 2


@dataclass
class SampleParams:
    """Texture coordinates of a pixel and of its right and lower neighbours."""

    p_uv: Vector2D = field(default_factory=Vector2D)
    p_dx_uv: Vector2D = field(default_factory=Vector2D)
    p_dy_uv: Vector2D = field(default_factory=Vector2D)
    psm: PixelSampleMethod = PixelSampleMethod.P_NEAREST
    lsm: LevelSampleMethod = LevelSampleMethod.L_ZERO


@dataclass
class MipLevel:
    """One level of a mipmap: packed 8-bit RGB texels, row by row."""

    width: int
    height: int
    texels: bytearray

    def get_texel(self, tx: int, ty: int) -> Color:
        """Colour of the texel at column ``tx``, row ``ty``."""
        off = 3 * (tx + ty * self.width)
        r, g, b = self.texels[off:off + 3]
        return Color(r / 255.0, g / 255.0, b / 255.0)


def _filter_taps(prev_size: int, curr_size: int, index: int) -> list[tuple[int, float]]:
    """Source indices and weights feeding output ``index`` along one axis."""
    if curr_size == prev_size:
        return [(index, 1.0)]
    if prev_size & 1:
        support, decimal = 3, 1.0 / curr_size
    else:
        support, decimal = 2, 0.0
    norm = 1.0 / (2.0 + decimal)
    weights = (
        norm * (1.0 - decimal * index),
        norm,
        norm * decimal * (index + 1),
    )
    return [(2 * index + k, weights[k]) for k in range(support)]


@dataclass
class Texture:
    """An RGB texture with a mipmap chain; level 0 holds the original pixels."""

    width: int = 0
    height: int = 0
    mipmap: list[MipLevel] = field(default_factory=list)

    @classmethod
    def from_pixels(cls, pixels: Sequence[int] | bytes, width: int, height: int) -> Texture:
        """Build a texture from packed RGB bytes and generate its mip levels."""
        data = bytearray(pixels)
        if len(data) != 3 * width * height:
            raise ValueError(
                f"expected {3 * width * height} bytes for {width}x{height}, got {len(data)}"
            )
        tex = cls(width, height, [MipLevel(width, height, data)])
        tex.generate_mips()
        return tex

    def generate_mips(self, start_level: int = 0) -> None:
        """Rebuild the levels below ``start_level`` by repeated 2x downsampling."""
        if not 0 <= start_level < len(self.mipmap):
            raise ValueError(f"invalid start level {start_level}")

        base = self.mipmap[start_level]
        largest = max(base.width, base.height)
        num_sub = int(math.log2(largest)) if largest > 0 else 0
        num_sub = max(0, min(num_sub, K_MAX_MIP_LEVELS - start_level - 1))

        levels = []
        width, height = base.width, base.height
        for _ in range(num_sub):
            width = max(1, width // 2)
            height = max(1, height // 2)
            levels.append(MipLevel(width, height, bytearray(3 * width * height)))
        self.mipmap[start_level + 1:] = levels

        sub_levels = num_sub - (start_level + 1)
        for mip_level in range(start_level + 1, start_level + sub_levels + 1):
            prev = self.mipmap[mip_level - 1]
            curr = self.mipmap[mip_level]
            src, dst = prev.texels, curr.texels
            pitch = prev.width * 3
            for j in range(curr.height):
                y_taps = _filter_taps(prev.height, curr.height, j)
                for i in range(curr.width):
                    x_taps = _filter_taps(prev.width, curr.width, i)
                    acc = [0.0, 0.0, 0.0]
                    for row, hw in y_taps:
                        for col, ww in x_taps:
                            weight = hw * ww
                            off = pitch * row + 3 * col
                            for k in range(3):
                                acc[k] += weight * (src[off + k] / 255.0)
                    out = 3 * (curr.width * j + i)
                    for k in range(3):
                        dst[out + k] = int(255.0 * clamp(acc[k], 0.0, 1.0))

    def _sample_level(self, uv: Vector2D, level: int, psm: PixelSampleMethod) -> Color:
        if psm is PixelSampleMethod.P_LINEAR:
            return self.sample_bilinear(uv, level)
        return self.sample_nearest(uv, level)

    def sample(self, sp: SampleParams) -> Color:
        """Sample the texture as directed by the pixel and level methods."""
        if not self.mipmap:
            return Color.MAGENTA
        if sp.lsm is LevelSampleMethod.L_ZERO:
            return self._sample_level(sp.p_uv, 0, sp.psm)
        level = self.get_level(sp)
        if sp.lsm is LevelSampleMethod.L_NEAREST:
            return self._sample_level(sp.p_uv, int(round(level)), sp.psm)
        lo = math.floor(level)
        hi = min(lo + 1, len(self.mipmap) - 1)
        t = level - lo
        c_lo = self._sample_level(sp.p_uv, lo, sp.psm)
        if hi == lo:
            return c_lo
        return _lerp(c_lo, self._sample_level(sp.p_uv, hi, sp.psm), t)

    def get_level(self, sp: SampleParams) -> float:
        """Continuous mip level matching the pixel's footprint in texel space."""
        if sp.lsm is LevelSampleMethod.L_ZERO or not self.mipmap:
            return 0.0
        dx = sp.p_dx_uv - sp.p_uv
        dy = sp.p_dy_uv - sp.p_uv
        lx = math.hypot(dx.x * self.width, dx.y * self.height)
        ly = math.hypot(dy.x * self.width, dy.y * self.height)
        footprint = max(lx, ly)
        if footprint <= 0.0:
            return 0.0
        level = clamp(math.log2(footprint), 0.0, float(len(self.mipmap) - 1))
        if sp.lsm is LevelSampleMethod.L_NEAREST:
            return float(round(level))
        return level

    def sample_nearest(self, uv: Vector2D, level: int = 0) -> Color:
        """Colour of the texel containing ``uv``; magenta for a missing level."""
        if not 0 <= level < len(self.mipmap):
            return Color.MAGENTA
        mip = self.mipmap[level]
        tx = clamp(math.floor(uv.x * mip.width), 0, mip.width - 1)
        ty = clamp(math.floor(uv.y * mip.height), 0, mip.height - 1)
        return mip.get_texel(tx, ty)

    def sample_bilinear(self, uv: Vector2D, level: int = 0) -> Color:
        """Bilinear blend of the four texels around ``uv``; magenta for a missing level."""
        if not 0 <= level < len(self.mipmap):
            return Color.MAGENTA
        mip = self.mipmap[level]
        u = uv.x * mip.width - 0.5
        v = uv.y * mip.height - 0.5
        x0, y0 = math.floor(u), math.floor(v)
        s, t = u - x0, v - y0
        xa = clamp(x0, 0, mip.width - 1)
        xb = clamp(x0 + 1, 0, mip.width - 1)
        ya = clamp(y0, 0, mip.height - 1)
        yb = clamp(y0 + 1, 0, mip.height - 1)
        top = _lerp(mip.get_texel(xa, ya), mip.get_texel(xb, ya), s)
        bottom = _lerp(mip.get_texel(xa, yb), mip.get_texel(xb, yb), s)
        return _lerp(top, bottom, t)