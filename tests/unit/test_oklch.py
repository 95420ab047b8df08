"""Tests for sRGB <-> OKLCH conversion and formatting."""

from __future__ import annotations

import pytest


class TestParseHex:
    """Test hex color parsing."""

    def test_six_digit(self):
        from tokensmith.core.oklch import parse_hex

        assert parse_hex("#FF8000") == (255, 128, 0, 255)

    def test_three_digit_expands(self):
        from tokensmith.core.oklch import parse_hex

        assert parse_hex("#f80") == (255, 136, 0, 255)

    def test_alpha_forms(self):
        from tokensmith.core.oklch import parse_hex

        assert parse_hex("#0008") == (0, 0, 0, 136)
        assert parse_hex("#11223344") == (17, 34, 51, 68)

    def test_case_and_whitespace(self):
        from tokensmith.core.oklch import parse_hex

        assert parse_hex("  #abcdef ") == parse_hex("#ABCDEF")

    @pytest.mark.parametrize("value", ["fff", "#ggg", "#12345", "#", "", "rgb(0, 0, 0)", None, 12])
    def test_invalid(self, value):
        from tokensmith.core.oklch import parse_hex

        assert parse_hex(value) is None


class TestHexToOklch:
    """Test hex -> oklch() conversion."""

    def test_white(self):
        from tokensmith.core.oklch import hex_to_oklch

        assert hex_to_oklch("#FFFFFF") == "oklch(100% 0 none)"

    def test_black(self):
        from tokensmith.core.oklch import hex_to_oklch

        assert hex_to_oklch("#000") == "oklch(0% 0 none)"

    def test_grey_is_achromatic(self):
        from tokensmith.core.oklch import hex_to_oklch

        assert hex_to_oklch("#808080").endswith(" 0 none)")

    def test_red_components(self):
        from tokensmith.core.oklch import hex_to_oklch, parse_oklch

        L, C, H, alpha = parse_oklch(hex_to_oklch("#FF0000"))
        assert L == pytest.approx(0.628, abs=1e-3)
        assert C == pytest.approx(0.2577, abs=1e-3)
        assert H == pytest.approx(29.2, abs=0.2)
        assert alpha == 1.0

    def test_alpha_appended_when_translucent(self):
        from tokensmith.core.oklch import hex_to_oklch

        assert hex_to_oklch("#FF000080").endswith(" / 0.5)")
        assert "/" not in hex_to_oklch("#FF0000FF")

    def test_case_insensitive(self):
        from tokensmith.core.oklch import hex_to_oklch

        assert hex_to_oklch("#79dde8") == hex_to_oklch("#79DDE8")

    def test_invalid_returns_none(self):
        from tokensmith.core.oklch import hex_to_oklch

        assert hex_to_oklch("teal") is None

    def test_round_trip_is_close(self):
        from tokensmith.core.oklch import hex_to_oklch, oklch_to_hex, parse_hex, parse_oklch

        L, C, H, _ = parse_oklch(hex_to_oklch("#79DDE8"))
        back = parse_hex(oklch_to_hex(L, C, H))
        for original, restored in zip((0x79, 0xDD, 0xE8), back[:3], strict=True):
            assert abs(original - restored) <= 2


class TestToOklch:
    """Test the combined converter."""

    def test_oklch_passes_through_trimmed(self):
        from tokensmith.core.oklch import to_oklch

        assert to_oklch("  oklch(50% 0.1 200) ") == "oklch(50% 0.1 200)"

    def test_hex_converted(self):
        from tokensmith.core.oklch import to_oklch

        assert to_oklch("#fff") == "oklch(100% 0 none)"

    @pytest.mark.parametrize("value", ["red", "rgba(0, 0, 0, 0.5)", "{color.missing}", 12])
    def test_other_values(self, value):
        from tokensmith.core.oklch import is_color_value, to_oklch

        assert to_oklch(value) is None
        assert not is_color_value(value)


class TestFormatting:
    """Test oklch() string formatting."""

    def test_format_rounded_strips_zeros(self):
        from tokensmith.core.oklch import format_rounded

        assert format_rounded(1.23456, 2) == "1.23"
        assert format_rounded(3.0, 2) == "3"
        assert format_rounded(0.125, 2) == "0.13"
        assert format_rounded(-0.0001, 2) == "0"

    def test_precision(self):
        from tokensmith.core.oklch import oklch_to_css

        assert oklch_to_css(0.5, 0.12, 264.06) == "oklch(50% 0.12 264.1)"

    def test_low_chroma_is_achromatic(self):
        from tokensmith.core.oklch import oklch_to_css

        assert oklch_to_css(0.5, 0.0004, 120.0) == "oklch(50% 0 none)"

    def test_alpha(self):
        from tokensmith.core.oklch import oklch_to_css

        assert oklch_to_css(0.5, 0.1, 200.0, alpha=0.72) == "oklch(50% 0.1 200 / 0.72)"
        assert oklch_to_css(0.5, 0.1, 200.0, alpha=0.999) == "oklch(50% 0.1 200)"


class TestParseOklch:
    """Test oklch() parsing."""

    def test_full_form(self):
        from tokensmith.core.oklch import parse_oklch

        assert parse_oklch("oklch(50% 0.1 200 / 0.5)") == (0.5, 0.1, 200.0, 0.5)

    def test_none_hue(self):
        from tokensmith.core.oklch import parse_oklch

        assert parse_oklch("oklch(100% 0 none)") == (1.0, 0.0, 0.0, 1.0)

    def test_invalid(self):
        from tokensmith.core.oklch import parse_oklch

        assert parse_oklch("oklch(bad)") is None
        assert parse_oklch("oklch(a b c)") is None
