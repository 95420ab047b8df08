"""
CSS custom-property emission from resolved tokens.

Tokens are routed into a closed set of categories by their leading path
segment. Each category has a kind that decides ordering and default value
formatting; names come from the token path. Tokens whose leading segment
matches no standard category are grouped into catch-all sections named
after that segment, so component-tier tokens are never dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .diagnostics import Diagnostics
from .ir import Bucket, ColorDerivation, Declaration, EmittedSection, Token, TokenType
from .oklch import is_color_value, to_oklch
from .strings import px, stringify, with_unit

logger = logging.getLogger(__name__)

# =============================================================================
# Categories
# =============================================================================


class CategoryKind(StrEnum):
    """Kinds of token category."""

    COLOR = "color"
    DIMENSION = "dimension"
    TYPOGRAPHY = "typography"
    SHADOW = "shadow"
    OPACITY = "opacity"
    Z_INDEX = "z_index"
    MOTION = "motion"
    CATCH_ALL = "catch_all"


@dataclass(frozen=True)
class Category:
    """A labelled output section and the leading path segments it claims."""

    label: str
    kind: CategoryKind
    prefixes: tuple[str, ...]


STANDARD_CATEGORIES: tuple[Category, ...] = (
    Category("colors", CategoryKind.COLOR, ("color",)),
    Category("sizing", CategoryKind.DIMENSION, ("size", "space")),
    Category(
        "typography", CategoryKind.TYPOGRAPHY, ("font", "line-height", "font-weight-composite")
    ),
    Category("radii", CategoryKind.DIMENSION, ("radius",)),
    Category("shadows", CategoryKind.SHADOW, ("shadow", "blur")),
    Category("borders", CategoryKind.DIMENSION, ("border",)),
    Category("opacity", CategoryKind.OPACITY, ("opacity",)),
    Category("z-index", CategoryKind.Z_INDEX, ("z",)),
    Category("transitions", CategoryKind.MOTION, ("duration", "easing")),
)

# Two-segment paths under these prefixes are named by their last segment
# (size.size-4 -> --size-4, z.z-modal -> --z-modal)
LEAF_NAMED_PREFIXES = frozenset(
    {"size", "space", "radius", "blur", "opacity", "z", "duration", "easing"}
)

# Type assumed when a token declares none
_DEFAULT_TYPES: dict[str, TokenType] = {
    "color": TokenType.COLOR,
    "size": TokenType.DIMENSION,
    "space": TokenType.DIMENSION,
    "radius": TokenType.DIMENSION,
    "blur": TokenType.DIMENSION,
    "shadow": TokenType.SHADOW,
    "opacity": TokenType.NUMBER,
    "z": TokenType.NUMBER,
    "duration": TokenType.DURATION,
    "easing": TokenType.CUBIC_BEZIER,
}

_FONT_DEFAULT_TYPES: dict[str, TokenType] = {
    "family": TokenType.FONT_FAMILY,
    "weight": TokenType.NUMBER,
    "size": TokenType.DIMENSION,
}

_CATEGORY_BY_PREFIX: dict[str, Category] = {
    prefix: category for category in STANDARD_CATEGORIES for prefix in category.prefixes
}


def category_for(token: Token) -> Category:
    """Return the standard category of a token, or a catch-all for its group."""
    head = token.path[0]
    return _CATEGORY_BY_PREFIX.get(head) or Category(head, CategoryKind.CATCH_ALL, (head,))


def group_by_category(tokens: Iterable[Token]) -> list[tuple[Category, list[Token]]]:
    """Group tokens into standard categories (fixed order) then catch-alls (first seen).

    A catch-all group named like a standard section label joins that section,
    so each section comment appears once.
    """
    standard: dict[str, list[Token]] = {c.label: [] for c in STANDARD_CATEGORIES}
    catch_all: dict[str, tuple[Category, list[Token]]] = {}

    for token in tokens:
        category = category_for(token)
        if category.kind == CategoryKind.CATCH_ALL and category.label in standard:
            standard[category.label].append(token)
        elif category.kind == CategoryKind.CATCH_ALL:
            catch_all.setdefault(category.label, (category, []))[1].append(token)
        else:
            standard[category.label].append(token)

    groups = [(c, standard[c.label]) for c in STANDARD_CATEGORIES if standard[c.label]]
    groups.extend(catch_all.values())
    return groups


# =============================================================================
# Naming and formatting
# =============================================================================


def name_path(token: Token) -> tuple[str, ...]:
    """Token path with the trailing mode segment removed for moded tokens."""
    if token.mode is not None and len(token.path) > 1:
        return token.path[:-1]
    return token.path


def property_name(token: Token) -> str:
    """Custom-property name (without ``--``) for a token."""
    path = name_path(token)
    head = path[0]
    if head in LEAF_NAMED_PREFIXES and len(path) == 2:
        return path[-1]
    if head == "shadow" and len(path) > 1:
        return f"shadow-{path[1]}"
    if head == "font-weight-composite" and len(path) > 1:
        return "-".join(("font-weight", *path[1:]))
    return "-".join(path)


def effective_type(token: Token) -> TokenType:
    """The token's declared type, or the type implied by its category."""
    if token.type != TokenType.OTHER:
        return token.type
    head = token.path[0]
    if head == "font" and len(token.path) > 2:
        return _FONT_DEFAULT_TYPES.get(token.path[1], TokenType.OTHER)
    return _DEFAULT_TYPES.get(head, TokenType.OTHER)


def format_shadow(value: dict[str, Any]) -> str:
    """Format a shadow record as ``[inset] x y blur spread color``."""
    parts = [px(value.get(key, 0)) for key in ("offsetX", "offsetY", "blur", "spread")]
    parts.append(stringify(value.get("color", "")))
    if value.get("inset") is True:
        parts.insert(0, "inset")
    return " ".join(parts)


def format_value(value: Any, token_type: TokenType) -> str:
    """Format a resolved token value for a CSS declaration."""
    if token_type == TokenType.SHADOW and isinstance(value, dict):
        return format_shadow(value)
    if token_type == TokenType.CUBIC_BEZIER and isinstance(value, list | tuple):
        return f"cubic-bezier({', '.join(stringify(v) for v in value)})"
    if token_type == TokenType.DURATION:
        return with_unit(value, "ms")
    if token_type == TokenType.DIMENSION:
        return px(value)
    return stringify(value)


# =============================================================================
# Ordering
# =============================================================================


def _order_by_prefix(category: Category, tokens: list[Token]) -> list[Token]:
    rank = {prefix: i for i, prefix in enumerate(category.prefixes)}
    return sorted(tokens, key=lambda t: rank.get(t.path[0], len(rank)))


def _order_typography(tokens: list[Token]) -> list[Token]:
    """Families, weights, then size/line-height/weight interleaved per style."""
    families: list[Token] = []
    weights: list[Token] = []
    sizes: dict[str, Token] = {}
    line_heights: dict[str, Token] = {}
    composite_weights: dict[str, Token] = {}
    other: list[Token] = []

    for token in tokens:
        path = name_path(token)
        if path[0] == "font" and len(path) > 2 and path[1] == "family":
            families.append(token)
        elif path[0] == "font" and len(path) > 2 and path[1] == "weight":
            weights.append(token)
        elif path[0] == "font" and len(path) > 2 and path[1] == "size":
            sizes.setdefault("-".join(path[2:]), token)
        elif path[0] == "line-height" and len(path) > 1:
            line_heights.setdefault("-".join(path[1:]), token)
        elif path[0] == "font-weight-composite" and len(path) > 1:
            composite_weights.setdefault("-".join(path[1:]), token)
        else:
            other.append(token)

    ordered = families + weights
    for style, size in sizes.items():
        ordered.append(size)
        if style in line_heights:
            ordered.append(line_heights.pop(style))
        if style in composite_weights:
            ordered.append(composite_weights.pop(style))

    placed = {id(t) for t in ordered}
    leftovers = [t for t in tokens if id(t) not in placed and t not in other]
    return ordered + leftovers + other


def order_tokens(category: Category, tokens: list[Token]) -> list[Token]:
    """Order a category's tokens for output."""
    if category.kind == CategoryKind.TYPOGRAPHY:
        return _order_typography(tokens)
    return _order_by_prefix(category, tokens)


# =============================================================================
# Emission
# =============================================================================


@dataclass
class EmissionResult:
    """Emitted sections plus the OKLCH derivations found along the way."""

    sections: list[EmittedSection] = field(default_factory=list)
    derivations: list[ColorDerivation] = field(default_factory=list)

    def declarations(self, bucket: Bucket) -> list[Declaration]:
        return [d for section in self.sections for d in section.bucket(bucket)]


def emit_section(
    category: Category,
    tokens: list[Token],
    diagnostics: Diagnostics,
    *,
    oklch: bool = False,
    check_colors: bool = False,
) -> tuple[EmittedSection, list[ColorDerivation]]:
    """Emit one category's declarations, split by bucket."""
    buckets: dict[Bucket, list[Declaration]] = {bucket: [] for bucket in Bucket}
    derivations: list[ColorDerivation] = []

    for token in order_tokens(category, tokens):
        token_type = effective_type(token)
        name = property_name(token)
        value = format_value(token.value, token_type)

        unparseable = token_type == TokenType.COLOR and not is_color_value(value)
        if unparseable and check_colors:
            diagnostics.unparseable_color(name, value)

        buckets[token.bucket].append(
            Declaration(
                name=name,
                value=value,
                bucket=token.bucket,
                section=category.label,
                unparseable_color=unparseable,
            )
        )

        if oklch and token_type == TokenType.COLOR and not unparseable:
            converted = to_oklch(value)
            if converted is not None:
                derivations.append(
                    ColorDerivation(
                        property_name=name,
                        source_color=value,
                        converted=converted,
                        bucket=token.bucket,
                    )
                )

    section = EmittedSection(
        label=category.label,
        root=tuple(buckets[Bucket.ROOT]),
        dark=tuple(buckets[Bucket.DARK]),
        light=tuple(buckets[Bucket.LIGHT]),
    )
    return section, derivations


def emit_declarations(
    tokens: Iterable[Token],
    diagnostics: Diagnostics,
    *,
    oklch: bool = False,
    check_colors: bool = False,
) -> EmissionResult:
    """Emit every resolved token as declarations grouped by category.

    Args:
        tokens: Resolved tokens.
        diagnostics: Collector for unparseable-color warnings.
        oklch: Collect OKLCH derivations for color tokens.
        check_colors: Report color values that are neither hex nor oklch().
    """
    result = EmissionResult()
    for category, members in group_by_category(tokens):
        section, derivations = emit_section(
            category, members, diagnostics, oklch=oklch, check_colors=check_colors
        )
        result.sections.append(section)
        result.derivations.extend(derivations)

    logger.debug(
        f"Emitted {len(result.sections)} sections, {len(result.derivations)} OKLCH colors"
    )
    return result
