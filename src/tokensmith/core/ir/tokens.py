"""
Token IR types.

A Token is one leaf of a token source tree: the key chain that reaches it,
its literal (or alias) value, its type tag, and an optional theme mode.
Tokens from all three source layouts are normalised into this one shape
before resolution and emission.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class TokenFormat(StrEnum):
    """Token source layouts."""

    LEGACY = "legacy"
    FLAT_ALIAS = "flat-alias"
    THREE_TIER = "three-tier"


class TokenType(StrEnum):
    """Token type tags that influence value formatting."""

    COLOR = "color"
    DIMENSION = "dimension"
    NUMBER = "number"
    DURATION = "duration"
    CUBIC_BEZIER = "cubicBezier"
    SHADOW = "shadow"
    FONT_FAMILY = "fontFamily"
    OTHER = "other"


# DTCG $type spellings that share formatting with a known tag
_TYPE_ALIASES: dict[str, TokenType] = {
    "fontWeight": TokenType.NUMBER,
}


def coerce_token_type(raw: Any) -> TokenType:
    """Map a raw ``$type`` value onto a TokenType (unknown types become OTHER)."""
    if isinstance(raw, str):
        if raw in _TYPE_ALIASES:
            return _TYPE_ALIASES[raw]
        try:
            return TokenType(raw)
        except ValueError:
            pass
    return TokenType.OTHER


class Mode(StrEnum):
    """Theme mode carried by a token's mode extension."""

    DARK = "dark"
    LIGHT = "light"


class Bucket(StrEnum):
    """Theme bucket a declaration lands in."""

    ROOT = "root"
    DARK = "dark"
    LIGHT = "light"


class Tier(StrEnum):
    """Resolution tiers of the three-tier layout, in dependency order."""

    PRIMITIVES = "primitives"
    SEMANTIC = "semantic"
    COMPONENT = "component"


# =============================================================================
# Tokens
# =============================================================================


class Token(BaseModel):
    """A single design token."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(..., min_length=1, description="Key chain from the tree root")
    value: Any = Field(..., description="Literal, alias expression, or composite record")
    type: TokenType = Field(default=TokenType.OTHER)
    mode: Mode | None = Field(default=None, description="Theme mode; None means shared")

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def bucket(self) -> Bucket:
        if self.mode is None:
            return Bucket.ROOT
        return Bucket(self.mode.value)

    def with_value(self, value: Any) -> Token:
        """Return a copy of this token carrying a different value."""
        return self.model_copy(update={"value": value})


class TokenSet(BaseModel):
    """Tokens loaded from one source root, grouped by tier.

    Legacy and flat-alias sources only populate ``primitives``; the
    three-tier layout fills all three lists.
    """

    model_config = ConfigDict(frozen=True)

    format: TokenFormat
    primitives: tuple[Token, ...] = ()
    semantic: tuple[Token, ...] = ()
    component: tuple[Token, ...] = ()

    def tier(self, tier: Tier) -> tuple[Token, ...]:
        return getattr(self, tier.value)

    @property
    def counts(self) -> dict[str, int]:
        return {tier.value: len(self.tier(tier)) for tier in Tier}
