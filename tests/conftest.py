"""Shared pytest fixtures for tokensmith tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

WriteJson = Callable[[Path, Any], Path]


def _dark(value: Any) -> dict[str, Any]:
    return {"$value": value, "$extensions": {"mode": "dark"}}


def _light(value: Any) -> dict[str, Any]:
    return {"$value": value, "$extensions": {"mode": "light"}}


@pytest.fixture
def write_json() -> WriteJson:
    """Return a helper that writes JSON to a path, creating parent directories."""

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def three_tier_tokens(tmp_path: Path, write_json: WriteJson) -> Path:
    """A three-tier token root with an accent color defined only for dark mode."""
    root = tmp_path / "tokens"
    write_json(
        root / "primitives" / "color.tokens.json",
        {
            "color": {
                "$type": "color",
                "blue": {"500": {"$value": "#3B82F6"}},
                "white": {"$value": "#FFFFFF"},
                "black": {"$value": "#000000"},
            }
        },
    )
    write_json(
        root / "primitives" / "size.tokens.json",
        {
            "radius": {"$type": "dimension", "radius-20": {"$value": 8}},
            "size": {"$type": "dimension", "size-4": {"$value": 16}},
        },
    )
    write_json(
        root / "semantic" / "theme.tokens.json",
        {
            "color": {
                "$type": "color",
                "accent-primary": {"dark": _dark("{color.blue.500}")},
                "surface": {
                    "dark": _dark("{color.black}"),
                    "light": _light("{color.white}"),
                },
            },
            "radius": {"radius-20": {"$value": "{radius.radius-20}"}},
        },
    )
    write_json(
        root / "component" / "button.tokens.json",
        {
            "button": {
                "background": {"$value": "{color.accent-primary.dark}", "$type": "color"},
                "padding": {"$value": "{size.size-4}", "$type": "dimension"},
            }
        },
    )
    return root


@pytest.fixture
def flat_tokens(tmp_path: Path, write_json: WriteJson) -> Path:
    """A flat-alias token root aliasing within its own files."""
    root = tmp_path / "tokens"
    write_json(
        root / "color.tokens.json",
        {
            "color": {
                "$type": "color",
                "brand": {"$value": "#FF5500"},
                "link": {"$value": "{color.brand}"},
                "surface": {
                    "dark": _dark("#111111"),
                    "light": _light("#FAFAFA"),
                },
            }
        },
    )
    write_json(
        root / "motion.tokens.json",
        {
            "duration": {"$type": "duration", "duration-fast": {"$value": 150}},
            "easing": {
                "$type": "cubicBezier",
                "easing-standard": {"$value": [0.4, 0, 0.2, 1]},
            },
        },
    )
    return root


@pytest.fixture
def legacy_tokens(tmp_path: Path, write_json: WriteJson) -> Path:
    """A complete legacy token root of fixed category files."""
    root = tmp_path / "tokens"
    files: dict[str, Any] = {
        "colors.json": {
            "_meta": {"description": "Color tokens"},
            "dark": {
                "accent-primary": "#79DDE8",
                "surface": "#111111",
                "overlay": "rgba(0, 0, 0, 0.5)",
            },
            "light": {"accent-primary": "#0E7490", "surface": "#FFFFFF"},
            "shared": {"modeless-brand": "#FF5500"},
        },
        "sizing.json": {"size": {"size-4": 16}, "space": {"space-2": 8}},
        "typography.json": {
            "primitive": {
                "family": {"sans": "Inter, sans-serif"},
                "weight": {"regular": 400, "bold": 700},
            },
            "composite": {
                "body": {"fontSize": 16, "lineHeight": 24, "fontWeight": "regular"},
                "heading": {"fontSize": 24, "lineHeight": 32, "fontWeight": "bold"},
            },
        },
        "radii.json": {"radius": {"radius-20": 8}},
        "shadows.json": {
            "geometry": {
                "small": {"offsetX": 0, "offsetY": 4, "blurRadius": 8, "spreadRadius": 0}
            },
            "dark": {"shadow-small": "rgba(0, 0, 0, 0.5)"},
            "light": {"shadow-small": "rgba(0, 0, 0, 0.1)"},
            "blur": {"blur-sm": 4},
        },
        "borders.json": {"width": {"thin": 1}, "style": {"solid": "solid"}},
        "opacity.json": {"opacity": {"50": 0.5}},
        "z-index.json": {"z": {"modal": 100}},
        "transitions.json": {
            "duration": {"fast": 150},
            "easing": {"standard": "cubic-bezier(0.4, 0, 0.2, 1)"},
        },
    }
    for name, data in files.items():
        write_json(root / name, data)
    return root
