"""
Tests for hex color parsing and blending.
"""

import random

import pytest

from gravity_paint.paint_core.color_blend import (
    blend,
    blend_rgb,
    parse_hex_color,
    as_rgb,
    round_half_away,
    to_hex,
)
from gravity_paint.paint_core.errors import InvalidColorFormat


class TestParsing:
    """Test hex parsing and formatting."""

    def test_parse_basic(self):
        assert parse_hex_color("#ff8000") == (255, 128, 0)

    def test_parse_upper_case(self):
        assert parse_hex_color("#FFAA00") == (255, 170, 0)

    @pytest.mark.parametrize("value", ["ff0000", "#ff00", "#gg0000", "#ff00001", "", "red", None, 0xff0000])
    def test_malformed_rejected(self, value):
        """Malformed input fails fast instead of producing bad channels."""
        with pytest.raises(InvalidColorFormat):
            parse_hex_color(value)

    def test_invalid_color_is_value_error(self):
        with pytest.raises(ValueError):
            parse_hex_color("#12345z")

    def test_to_hex_pads_and_lowers(self):
        assert to_hex((1, 10, 171)) == "#010aab"

    def test_to_hex_clamps(self):
        assert to_hex((300, -5, 128)) == "#ff0080"


class TestRounding:
    """Test half-away-from-zero rounding."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1), (1.5, 2), (2.5, 3), (127.5, 128),
        (-0.5, -1), (-2.5, -3), (0.49, 0), (2.51, 3), (0.0, 0),
    ])
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected


class TestBlend:
    """Test weighted blending."""

    def test_black_white_midpoint(self):
        """Half/half black and white rounds up to #808080."""
        assert blend("#000000", "#ffffff", 0.5) == "#808080"

    def test_ratio_one_returns_first(self):
        assert blend("#123456", "#abcdef", 1.0) == "#123456"

    def test_ratio_zero_returns_second(self):
        assert blend("#123456", "#abcdef", 0.0) == "#abcdef"

    def test_symmetric_at_half(self):
        """Swapping inputs at ratio 0.5 gives the same color."""
        rng = random.Random(7)
        for _ in range(200):
            a = to_hex(tuple(rng.randrange(256) for _ in range(3)))
            b = to_hex(tuple(rng.randrange(256) for _ in range(3)))
            assert blend(a, b, 0.5) == blend(b, a, 0.5)

    def test_deterministic(self):
        assert blend("#ff0000", "#0000ff", 0.3) == blend("#ff0000", "#0000ff", 0.3)

    def test_channels_within_bounds(self):
        """Every output channel stays in [0, 255] for ratios in [0, 1]."""
        rng = random.Random(11)
        for _ in range(500):
            c1 = tuple(rng.randrange(256) for _ in range(3))
            c2 = tuple(rng.randrange(256) for _ in range(3))
            ratio = rng.random()
            out = blend_rgb(c1, c2, ratio)
            assert all(0 <= c <= 255 for c in out)
            assert all(isinstance(c, int) for c in out)
            assert len(parse_hex_color(blend(to_hex(c1), to_hex(c2), ratio))) == 3

    def test_out_of_range_ratio_clamped(self):
        assert blend("#ffffff", "#000000", 2.0) == "#ffffff"
        assert blend("#ffffff", "#000000", -1.0) == "#000000"

    def test_accepts_rgb_tuples(self):
        assert blend((255, 0, 0), "#0000ff", 0.5) == "#800080"

    def test_float_channels_rounded_like_blend(self):
        """Tuple channels round half away from zero, then clamp."""
        assert as_rgb((0.5, 127.5, 254.6)) == (1, 128, 255)
        assert as_rgb((-0.4, 300.2, 10.49)) == (0, 255, 10)
        assert blend((0.5, 0.5, 0.5), "#000000", 1.0) == "#010101"

    def test_blend_rejects_bad_color(self):
        with pytest.raises(InvalidColorFormat):
            blend("#ff0000", "blue", 0.5)
