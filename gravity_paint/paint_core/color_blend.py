"""
Color Blend
===========

Hex color parsing and the weighted RGB blend used when paint merges.
"""

from __future__ import annotations

import math
import re
from typing import Tuple, Union

from gravity_paint.paint_core.errors import InvalidColorFormat

RGB = Tuple[int, int, int]
ColorLike = Union[str, RGB]

_HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{6})$")


def parse_hex_color(value: str) -> RGB:
    """
    Parse '#rrggbb' into an RGB triple.

    Raises:
        InvalidColorFormat: If value is not a 6-digit hex color.
    """
    if not isinstance(value, str):
        raise InvalidColorFormat(value)
    match = _HEX_PATTERN.match(value.strip())
    if match is None:
        raise InvalidColorFormat(value)
    digits = match.group(1)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _clamp_channel(value: float) -> int:
    return int(max(0, min(255, value)))


def to_hex(rgb: RGB) -> str:
    """Format an RGB triple as lower-case '#rrggbb', clamping each channel."""
    r, g, b = (_clamp_channel(c) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def as_rgb(color: ColorLike) -> RGB:
    """Accept either a hex string or an RGB triple."""
    if isinstance(color, str):
        return parse_hex_color(color)
    if len(color) != 3:
        raise InvalidColorFormat(color)
    return tuple(_clamp_channel(round_half_away(c)) for c in color)


def round_half_away(value: float) -> int:
    """Round to nearest integer, ties away from zero (0.5 -> 1, -0.5 -> -1)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def blend_rgb(color1: RGB, color2: RGB, ratio: float) -> RGB:
    """
    Per-channel linear interpolation weighted towards color1 by ratio.

    ratio is the mass fraction of the first particle. Channels are rounded
    half away from zero and clamped to [0, 255].
    """
    return tuple(
        _clamp_channel(round_half_away(c1 * ratio + c2 * (1 - ratio)))
        for c1, c2 in zip(color1, color2)
    )


def blend(color1: ColorLike, color2: ColorLike, ratio: float) -> str:
    """Blend two colors and return '#rrggbb'."""
    return to_hex(blend_rgb(as_rgb(color1), as_rgb(color2), ratio))
