"""
Progressive-enhancement generators for modern CSS.

Each generator is a pure function of already-emitted declarations and
returns new declarations (or rule text) for the assembler to place inside
its ``@supports`` blocks. Empty input yields empty output.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from .ir import Bucket, Declaration

COLOR_PREFIX = "color-"

_ALPHA_VARIANT = re.compile(r"-\d+$")

# Ordered: first matching prefix decides the @property syntax; None skips it
_PROPERTY_SYNTAX: tuple[tuple[str, str | None], ...] = (
    ("color-", "<color>"),
    ("shadow-", None),
    ("size-", "<length>"),
    ("space-", "<length>"),
    ("border-width-", "<length>"),
    ("blur-", "<length>"),
    ("radius-", "<length>"),
    ("font-size-", "<length>"),
    ("line-height-", "<length>"),
    ("opacity-", "<number>"),
    ("z-", "<integer>"),
    ("font-weight-", "<number>"),
    ("duration-", "<time>"),
)

BucketDeclarations = dict[Bucket, list[Declaration]]


def is_accent_or_action_color(name: str) -> bool:
    """Whether a property is an accent/action color that gets derived states.

    Matches ``color-accent-*`` and ``color-modeless-*`` action colors;
    excludes shadow colors, overlays, numeric alpha variants
    (``color-modeless-white-24``) and the modeless white/black neutrals.
    """
    if not name.startswith(COLOR_PREFIX):
        return False
    rest = name[len(COLOR_PREFIX) :]
    if rest.startswith("shadow-") or "overlay" in rest or _ALPHA_VARIANT.search(rest):
        return False
    if rest.startswith("accent-"):
        return True
    return rest.startswith("modeless-") and "white" not in rest and "black" not in rest


def property_syntax(name: str) -> str | None:
    """Infer the ``@property`` syntax for a property name, or None to skip."""
    for prefix, syntax in _PROPERTY_SYNTAX:
        if name.startswith(prefix):
            return syntax
    return None


def property_declarations(
    root: Iterable[Declaration], dark: Iterable[Declaration]
) -> list[str]:
    """Build ``@property`` rules; the first occurrence of a name supplies its initial value."""
    rules: list[str] = []
    seen: set[str] = set()

    for decl in [*root, *dark]:
        if decl.name in seen:
            continue
        syntax = property_syntax(decl.name)
        if syntax is None:
            continue
        seen.add(decl.name)
        rules.append(
            f"@property --{decl.name} {{\n"
            f"  syntax: '{syntax}';\n"
            f"  inherits: true;\n"
            f"  initial-value: {decl.value};\n"
            f"}}"
        )
    return rules


def _derive(
    buckets: dict[Bucket, Sequence[Declaration]],
    variants: tuple[tuple[str, str], ...],
) -> BucketDeclarations:
    result: BucketDeclarations = {bucket: [] for bucket in Bucket}
    for bucket, declarations in buckets.items():
        for decl in declarations:
            if decl.unparseable_color or not is_accent_or_action_color(decl.name):
                continue
            for suffix, template in variants:
                result[bucket].append(
                    Declaration(
                        name=f"{decl.name}-{suffix}",
                        value=template.format(var=f"var(--{decl.name})"),
                        bucket=bucket,
                        section=decl.section,
                    )
                )
    return result


def interaction_state_colors(
    root: Sequence[Declaration],
    dark: Sequence[Declaration],
    light: Sequence[Declaration],
) -> BucketDeclarations:
    """Hover and active states for accent/action colors, per bucket."""
    return _derive(
        {Bucket.ROOT: root, Bucket.DARK: dark, Bucket.LIGHT: light},
        (
            ("hover", "color-mix(in oklch, {var} 90%, white)"),
            ("active", "color-mix(in oklch, {var} 80%, black)"),
        ),
    )


def relative_shades(
    root: Sequence[Declaration],
    dark: Sequence[Declaration],
    light: Sequence[Declaration],
) -> BucketDeclarations:
    """Lighter and darker relative-color shades for accent/action colors."""
    return _derive(
        {Bucket.ROOT: root, Bucket.DARK: dark, Bucket.LIGHT: light},
        (
            ("lighter", "oklch(from {var} calc(l * 1.2) c h)"),
            ("darker", "oklch(from {var} calc(l * 0.8) c h)"),
        ),
    )


def light_dark_collapse(
    dark: Iterable[Declaration], light: Iterable[Declaration]
) -> list[Declaration]:
    """One ``light-dark()`` root declaration per color present in both themes.

    Order follows the dark theme; a repeated name keeps its last value, as in
    the cascade. The light value comes first in the function.
    """
    light_values: dict[str, str] = {}
    for decl in light:
        light_values[decl.name] = decl.value

    dark_values: dict[str, str] = {}
    for decl in dark:
        dark_values[decl.name] = decl.value

    return [
        Declaration(
            name=name,
            value=f"light-dark({light_values[name]}, {dark_value})",
            bucket=Bucket.ROOT,
        )
        for name, dark_value in dark_values.items()
        if name.startswith(COLOR_PREFIX) and light_values.get(name)
    ]


def has_any(buckets: BucketDeclarations) -> bool:
    return any(buckets.values())
