"""
Token ingestion for the three supported source layouts.

- legacy: fixed per-category ``*.json`` files holding shallow key/value maps
- flat-alias: top-level ``*.tokens.json`` trees of groups and ``$value`` leaves
- three-tier: the same trees split across ``primitives/``, ``semantic/`` and
  ``component/`` subdirectories

Every layout is normalised into :class:`Token` records; the legacy loader
chooses paths and types so that the shared emitter reproduces the legacy
property names.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .diagnostics import Diagnostics
from .errors import ErrorContext, TokenParseError, make_missing_input_error
from .format_detect import token_files
from .ir import Mode, Tier, Token, TokenFormat, TokenSet, TokenType, coerce_token_type

logger = logging.getLogger(__name__)

META_PREFIX = "$"
LEGACY_META_KEY = "_meta"

# =============================================================================
# File reading
# =============================================================================


def read_token_file(path: Path) -> dict[str, Any]:
    """Read and parse one token definition file.

    Raises:
        MissingInputError: If the file does not exist.
        TokenParseError: If the file is not valid JSON or not a JSON object.
    """
    if not path.is_file():
        raise make_missing_input_error(f"Token file not found: {path}", path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TokenParseError(f"Invalid JSON: {e}", ErrorContext(file=path)) from e

    if not isinstance(data, dict):
        raise TokenParseError(
            f"Expected a JSON object at the top level, got {type(data).__name__}",
            ErrorContext(file=path),
        )
    return data


# =============================================================================
# Tree flattening (flat-alias and three-tier)
# =============================================================================


def _mode_of(node: dict[str, Any]) -> Mode | None:
    extensions = node.get("$extensions")
    if not isinstance(extensions, dict):
        return None
    mode = extensions.get("mode")
    if mode in (Mode.DARK.value, Mode.LIGHT.value):
        return Mode(mode)
    return None


def flatten_tree(
    tree: dict[str, Any],
    parent_path: tuple[str, ...] = (),
    inherited_type: Any = None,
) -> list[Token]:
    """Collect every ``$value`` leaf of a nested token tree.

    Keys starting with ``$`` are metadata and skipped. A group's ``$type``
    applies to descendants that do not declare their own.
    """
    group_type = tree.get("$type", inherited_type)
    tokens: list[Token] = []

    for key, node in tree.items():
        if key.startswith(META_PREFIX) or not isinstance(node, dict):
            continue
        path = (*parent_path, key)
        if "$value" in node:
            tokens.append(
                Token(
                    path=path,
                    value=node["$value"],
                    type=coerce_token_type(node.get("$type", group_type)),
                    mode=_mode_of(node),
                )
            )
        else:
            tokens.extend(flatten_tree(node, path, group_type))

    return tokens


def load_token_files(files: list[Path]) -> list[Token]:
    """Flatten a list of ``*.tokens.json`` files in order."""
    tokens: list[Token] = []
    for path in files:
        tokens.extend(flatten_tree(read_token_file(path)))
    return tokens


def load_flat(tokens_dir: Path) -> TokenSet:
    """Load every top-level ``*.tokens.json`` file as one token set."""
    tokens = load_token_files(token_files(tokens_dir))
    return TokenSet(format=TokenFormat.FLAT_ALIAS, primitives=tuple(tokens))


def load_tier(tokens_dir: Path, tier: Tier) -> list[Token]:
    """Load one tier directory; a missing semantic or component tier is empty."""
    tier_dir = tokens_dir / tier.value
    if not tier_dir.is_dir():
        if tier is Tier.PRIMITIVES:
            raise make_missing_input_error(f"Primitives tier not found: {tier_dir}", tier_dir)
        logger.debug(f"No {tier} tier at {tier_dir}, treating as empty")
        return []
    return load_token_files(token_files(tier_dir))


def load_three_tier(tokens_dir: Path) -> TokenSet:
    """Load primitives, semantic and component tiers."""
    return TokenSet(
        format=TokenFormat.THREE_TIER,
        primitives=tuple(load_tier(tokens_dir, Tier.PRIMITIVES)),
        semantic=tuple(load_tier(tokens_dir, Tier.SEMANTIC)),
        component=tuple(load_tier(tokens_dir, Tier.COMPONENT)),
    )


# =============================================================================
# Legacy layout
# =============================================================================


LegacyLoader = Callable[[dict[str, Any], Diagnostics], list[Token]]


def _group(data: dict[str, Any], key: str) -> dict[str, Any]:
    group = data.get(key) or {}
    return group if isinstance(group, dict) else {}


def _legacy_colors(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    tokens: list[Token] = []
    for mode in Mode:
        for key, value in _group(data, mode.value).items():
            tokens.append(
                Token(path=("color", key, mode.value), value=value, type=TokenType.COLOR, mode=mode)
            )
    for key, value in _group(data, "shared").items():
        tokens.append(Token(path=("color", key), value=value, type=TokenType.COLOR))
    return tokens


def _legacy_sizing(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    return [
        Token(path=(group, key), value=value, type=TokenType.DIMENSION)
        for group in ("size", "space")
        for key, value in _group(data, group).items()
    ]


def _legacy_typography(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    primitive = _group(data, "primitive")
    weights = _group(primitive, "weight")
    tokens = [
        Token(path=("font", "family", key), value=value, type=TokenType.FONT_FAMILY)
        for key, value in _group(primitive, "family").items()
    ]
    tokens.extend(
        Token(path=("font", "weight", key), value=value, type=TokenType.NUMBER)
        for key, value in weights.items()
    )

    for name, style in _group(data, "composite").items():
        if not isinstance(style, dict):
            continue
        if "fontSize" in style:
            tokens.append(
                Token(path=("font", "size", name), value=style["fontSize"], type=TokenType.DIMENSION)
            )
        if "lineHeight" in style:
            tokens.append(
                Token(path=("line-height", name), value=style["lineHeight"], type=TokenType.DIMENSION)
            )
        if "fontWeight" in style:
            weight_key = str(style["fontWeight"])
            if weight_key in weights:
                weight = weights[weight_key]
            else:
                diagnostics.unresolved_reference(
                    f"font.weight.{weight_key}", context=f"typography composite '{name}'"
                )
                weight = weight_key
            tokens.append(
                Token(path=("font-weight-composite", name), value=weight, type=TokenType.NUMBER)
            )
    return tokens


def _legacy_radii(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    return [
        Token(path=("radius", key), value=value, type=TokenType.DIMENSION)
        for key, value in _group(data, "radius").items()
    ]


def _legacy_shadows(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    tokens: list[Token] = []
    for level, geometry in _group(data, "geometry").items():
        if not isinstance(geometry, dict):
            continue
        for mode in Mode:
            color = _group(data, mode.value).get(f"shadow-{level}")
            if color is None:
                continue
            value = {
                "offsetX": geometry.get("offsetX", 0),
                "offsetY": geometry.get("offsetY", 0),
                "blur": geometry.get("blurRadius", 0),
                "spread": geometry.get("spreadRadius", 0),
                "color": color,
            }
            tokens.append(
                Token(path=("shadow", level, mode.value), value=value, type=TokenType.SHADOW, mode=mode)
            )
    tokens.extend(
        Token(path=("blur", key), value=value, type=TokenType.DIMENSION)
        for key, value in _group(data, "blur").items()
    )
    return tokens


def _legacy_borders(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    tokens = [
        Token(path=("border", "width", key), value=value, type=TokenType.DIMENSION)
        for key, value in _group(data, "width").items()
    ]
    tokens.extend(
        Token(path=("border", "style", key), value=value, type=TokenType.OTHER)
        for key, value in _group(data, "style").items()
    )
    return tokens


def _legacy_prefixed(group: str, prefix: str, token_type: TokenType) -> LegacyLoader:
    def load(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
        return [
            Token(path=(prefix, f"{prefix}-{key}"), value=value, type=token_type)
            for key, value in _group(data, group).items()
        ]

    return load


_legacy_durations = _legacy_prefixed("duration", "duration", TokenType.DURATION)
_legacy_easings = _legacy_prefixed("easing", "easing", TokenType.CUBIC_BEZIER)


def _legacy_transitions(data: dict[str, Any], diagnostics: Diagnostics) -> list[Token]:
    return _legacy_durations(data, diagnostics) + _legacy_easings(data, diagnostics)


LEGACY_FILES: tuple[tuple[str, LegacyLoader], ...] = (
    ("colors.json", _legacy_colors),
    ("sizing.json", _legacy_sizing),
    ("typography.json", _legacy_typography),
    ("radii.json", _legacy_radii),
    ("shadows.json", _legacy_shadows),
    ("borders.json", _legacy_borders),
    ("opacity.json", _legacy_prefixed("opacity", "opacity", TokenType.NUMBER)),
    ("z-index.json", _legacy_prefixed("z", "z", TokenType.NUMBER)),
    ("transitions.json", _legacy_transitions),
)


def load_legacy(tokens_dir: Path, diagnostics: Diagnostics) -> TokenSet:
    """Load the fixed legacy category files.

    Raises:
        MissingInputError: If any category file is absent.
    """
    tokens: list[Token] = []
    for filename, loader in LEGACY_FILES:
        data = read_token_file(tokens_dir / filename)
        data.pop(LEGACY_META_KEY, None)
        tokens.extend(loader(data, diagnostics))
    return TokenSet(format=TokenFormat.LEGACY, primitives=tuple(tokens))


# =============================================================================
# Entry point
# =============================================================================


def load_tokens(tokens_dir: Path, fmt: TokenFormat, diagnostics: Diagnostics) -> TokenSet:
    """Load the token set for a detected layout."""
    if fmt == TokenFormat.THREE_TIER:
        token_set = load_three_tier(tokens_dir)
    elif fmt == TokenFormat.FLAT_ALIAS:
        token_set = load_flat(tokens_dir)
    else:
        token_set = load_legacy(tokens_dir, diagnostics)

    logger.debug(f"Loaded {fmt} tokens: {token_set.counts}")
    return token_set
