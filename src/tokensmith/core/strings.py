"""
String utility functions for tokensmith.

Turns token values (numbers, booleans, lists, composite records) into the
text that appears in CSS declarations and substituted alias strings.
"""

from __future__ import annotations

from typing import Any


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def stringify(value: Any) -> str:
    """Render any resolved token value as plain text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return format_number(value)
    if isinstance(value, list | tuple):
        return ", ".join(stringify(v) for v in value)
    if isinstance(value, dict):
        return " ".join(stringify(v) for v in value.values())
    if value is None:
        return ""
    return str(value)


def with_unit(value: Any, unit: str) -> str:
    """Append ``unit`` to numeric values; ``0`` stays unitless for lengths.

    Non-numeric values are stringified unchanged.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return stringify(value)
    if value == 0 and unit == "px":
        return "0"
    return f"{format_number(value)}{unit}"


def px(value: Any) -> str:
    """Format a length; bare numbers become pixels."""
    return with_unit(value, "px")
