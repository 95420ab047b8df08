"""
tokensmith - design tokens to CSS custom properties.

Compiles DTCG-style token trees (or the older fixed-file layout) into one
stylesheet with shared, dark and light theme buckets, optional OKLCH
overrides and optional modern-CSS progressive enhancement.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import (
    CyclicReferenceError,
    MissingInputError,
    TokenParseError,
    TokensmithError,
)
from .core.ir import GenerateOptions
from .core.pipeline import GenerationResult, build, generate_stylesheet

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "build",
    "generate_stylesheet",
    "GenerateOptions",
    "GenerationResult",
    "TokensmithError",
    "MissingInputError",
    "TokenParseError",
    "CyclicReferenceError",
]
