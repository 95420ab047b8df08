"""
Pure-Python sRGB <-> OKLCH conversion.

Forward path: sRGB hex -> linear RGB -> CIE XYZ (D65) -> OKLab -> OKLCH.
Matrices are the IEC 61966-2-1 sRGB matrix and Björn Ottosson's M1/M2
(https://bottosson.github.io/posts/oklab/). No external color libraries
required.
"""

from __future__ import annotations

import math
import re

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")
_OKLCH_PREFIX = re.compile(r"^\s*oklch\s*\(", re.IGNORECASE)
_OKLCH_PARTS = re.compile(
    r"^\s*oklch\s*\(\s*(?P<l>[^\s/)]+)\s+(?P<c>[^\s/)]+)\s+(?P<h>[^\s/)]+)"
    r"\s*(?:/\s*(?P<alpha>[^\s)]+)\s*)?\)\s*$",
    re.IGNORECASE,
)

# Chroma below this (after rounding) is treated as achromatic
ACHROMATIC_CHROMA = 0.0005

# =============================================================================
# Matrices
# =============================================================================

_SRGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

_XYZ_TO_SRGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)

_XYZ_TO_LMS = (
    (0.8189330101, 0.3618667424, -0.1288597137),
    (0.0329845436, 0.9293118715, 0.0361456387),
    (0.0482003018, 0.2643662691, 0.6338517070),
)

_LMS_TO_XYZ = (
    (1.2270138511035211, -0.5577999806518222, 0.2812561489664678),
    (-0.0405801784232806, 1.1122568696168302, -0.0716766786656012),
    (-0.0763812845057069, -0.4214819784180127, 1.5861632204407947),
)

_LMS_TO_OKLAB = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)

_OKLAB_TO_LMS = (
    (0.9999999984505198, 0.3963377921737679, 0.2158037580607588),
    (1.0000000088817609, -0.1055613423236564, -0.0638541747717059),
    (1.0000000546724109, -0.0894841820949658, -1.2914855378640917),
)


def _apply(matrix: tuple[tuple[float, float, float], ...], v: tuple[float, float, float]):
    return tuple(row[0] * v[0] + row[1] * v[1] + row[2] * v[2] for row in matrix)


# =============================================================================
# Parsing
# =============================================================================


def parse_hex(value: object) -> tuple[int, int, int, int] | None:
    """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa`` into 0-255 channels.

    Returns:
        (r, g, b, a) tuple, or None if the value is not a hex color.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text.startswith("#"):
        return None
    digits = text[1:]
    if not _HEX_DIGITS.match(digits):
        return None

    if len(digits) in (3, 4):
        channels = [int(ch * 2, 16) for ch in digits]
    elif len(digits) in (6, 8):
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    else:
        return None

    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return r, g, b, a


def is_oklch_value(value: object) -> bool:
    """Whether a CSS value is already written in ``oklch()`` syntax."""
    return isinstance(value, str) and bool(_OKLCH_PREFIX.match(value))


def is_color_value(value: object) -> bool:
    """Whether a CSS value is a hex or oklch() color this module understands."""
    return is_oklch_value(value) or parse_hex(value) is not None


def parse_oklch(value: str) -> tuple[float, float, float, float] | None:
    """Parse ``oklch(L C H [/ A])`` into (L 0-1, C, H degrees, alpha 0-1).

    ``none`` components read as 0. Returns None on parse failure.
    """
    match = _OKLCH_PARTS.match(value) if isinstance(value, str) else None
    if not match:
        return None
    try:
        lightness = _parse_component(match.group("l"), percent_scale=100.0)
        chroma = _parse_component(match.group("c"), percent_scale=250.0)
        hue = _parse_component(match.group("h"))
        alpha_text = match.group("alpha")
        alpha = _parse_component(alpha_text, percent_scale=100.0) if alpha_text else 1.0
    except ValueError:
        return None
    return lightness, chroma, hue, alpha


def _parse_component(text: str, percent_scale: float | None = None) -> float:
    if text.lower() == "none":
        return 0.0
    if text.endswith("%"):
        if percent_scale is None:
            raise ValueError(f"percentage not allowed: {text}")
        return float(text[:-1]) / percent_scale
    return float(text)


# =============================================================================
# Conversion
# =============================================================================


def srgb_to_linear(c: float) -> float:
    """Inverse sRGB companding for one channel in [0, 1]."""
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def linear_to_srgb(c: float) -> float:
    """sRGB companding for one linear channel in [0, 1]."""
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1.0 / 2.4)) - 0.055


def srgb_to_oklch(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert sRGB channels in [0, 1] to OKLCH (L 0-1, C, H degrees in [0, 360))."""
    linear = (srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))
    xyz = _apply(_SRGB_TO_XYZ, linear)
    lms = _apply(_XYZ_TO_LMS, xyz)
    lms_ = tuple(math.cbrt(v) for v in lms)
    L, a, b_ = _apply(_LMS_TO_OKLAB, lms_)

    C = math.sqrt(a * a + b_ * b_)
    H = math.degrees(math.atan2(b_, a))
    if H < 0:
        H += 360.0
    return L, C, H


def oklch_to_srgb(L: float, C: float, H: float) -> tuple[float, float, float]:
    """Convert OKLCH back to sRGB channels, clamped to [0, 1]."""
    h = math.radians(H)
    lab = (L, C * math.cos(h), C * math.sin(h))
    lms_ = _apply(_OKLAB_TO_LMS, lab)
    lms = tuple(v**3 for v in lms_)
    xyz = _apply(_LMS_TO_XYZ, lms)
    linear = _apply(_XYZ_TO_SRGB, xyz)
    return tuple(linear_to_srgb(max(0.0, min(1.0, c))) for c in linear)  # type: ignore[return-value]


def oklch_to_hex(L: float, C: float, H: float) -> str:
    """Convert OKLCH to an uppercase ``#RRGGBB`` string."""
    r, g, b = oklch_to_srgb(L, C, H)
    return f"#{round(r * 255):02X}{round(g * 255):02X}{round(b * 255):02X}"


# =============================================================================
# Formatting
# =============================================================================


def _round_half_up(num: float, places: int) -> float:
    factor = 10**places
    return math.floor(num * factor + 0.5) / factor


def format_rounded(num: float, places: int) -> str:
    """Round half-up to ``places`` decimals and strip trailing zeros."""
    text = f"{_round_half_up(num, places):.{places}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def oklch_to_css(L: float, C: float, H: float, alpha: float = 1.0) -> str:
    """Format an OKLCH color as a CSS string.

    Args:
        L: Lightness (0-1), written as a percentage with 2 decimals.
        C: Chroma, 4 decimals.
        H: Hue (0-360), 1 decimal.
        alpha: Opacity (0-1), appended only when it rounds below 1.

    Returns:
        CSS oklch() string, e.g. ``oklch(54.5% 0.12 264.1 / 0.72)``.
    """
    lightness = format_rounded(L * 100, 2)
    chroma_rounded = _round_half_up(C, 4)
    if chroma_rounded < ACHROMATIC_CHROMA:
        chroma, hue = "0", "none"
    else:
        chroma, hue = format_rounded(C, 4), format_rounded(H, 1)

    if _round_half_up(alpha, 2) < 1.0:
        return f"oklch({lightness}% {chroma} {hue} / {format_rounded(alpha, 2)})"
    return f"oklch({lightness}% {chroma} {hue})"


def hex_to_oklch(value: str) -> str | None:
    """Convert a hex color to an OKLCH CSS string, or None if unparseable."""
    parsed = parse_hex(value)
    if parsed is None:
        return None
    r8, g8, b8, a8 = parsed
    L, C, H = srgb_to_oklch(r8 / 255, g8 / 255, b8 / 255)
    return oklch_to_css(L, C, H, a8 / 255)


def to_oklch(value: object) -> str | None:
    """Convert a color value to OKLCH if possible.

    - ``oklch()`` values are returned trimmed, unchanged.
    - Hex values are converted.
    - Anything else returns None.
    """
    if is_oklch_value(value):
        return value.strip()  # type: ignore[union-attr]
    if isinstance(value, str):
        return hex_to_oklch(value)
    return None
