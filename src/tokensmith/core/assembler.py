"""
Stylesheet assembly.

Stitches emitted declarations, OKLCH overrides and modern-CSS enhancement
blocks into the final stylesheet text. Block order is fixed:

1. header comment
2. ``:root``, ``.dark``, ``.light``
3. ``prefers-color-scheme`` fallbacks for pages with no theme class
4. ``@supports (color: oklch(...))`` overrides (when enabled)
5. modern CSS block (when enabled): ``@property``, ``color-mix()``,
   ``light-dark()``, relative color syntax
"""

from __future__ import annotations

from collections.abc import Sequence

from .css_emitter import EmissionResult
from .enhancements import (
    BucketDeclarations,
    has_any,
    interaction_state_colors,
    light_dark_collapse,
    property_declarations,
    relative_shades,
)
from .ir import Bucket, ColorDerivation, Declaration

HEADER = (
    "/* tokens.css — Generated from tokens/*.tokens.json */",
    "/* Do not edit manually. Run: tokensmith generate */\n",
)

THEME_SELECTORS: dict[Bucket, str] = {
    Bucket.ROOT: ":root",
    Bucket.DARK: ".dark",
    Bucket.LIGHT: ".light",
}

NO_THEME_CLASS = ":root:not(.dark):not(.light)"


def bucket_lines(emission: EmissionResult, bucket: Bucket) -> list[str]:
    """Declaration lines for one bucket, each populated section led by its label."""
    lines: list[str] = []
    for section in emission.sections:
        declarations = section.bucket(bucket)
        if not declarations:
            continue
        lines.append(f"\n  /* {section.label} */")
        lines.extend(decl.css_line() for decl in declarations)
    return lines


def _nest(lines: Sequence[str]) -> str:
    """Indent every non-empty line by two more spaces."""
    return "\n".join(f"  {line}" if line else line for line in "\n".join(lines).split("\n"))


def theme_blocks(emission: EmissionResult) -> list[str]:
    """The three theme rules plus the OS preference fallbacks."""
    vars_by_bucket = {bucket: bucket_lines(emission, bucket) for bucket in Bucket}
    dark = vars_by_bucket[Bucket.DARK]
    light = vars_by_bucket[Bucket.LIGHT]

    blocks = [
        f"{THEME_SELECTORS[bucket]} {{" + "\n".join(vars_by_bucket[bucket]) + "\n}\n"
        for bucket in Bucket
    ]
    blocks.append("/* OS preference fallback (when no .dark/.light class is set) */")
    blocks.append(
        f"@media (prefers-color-scheme: dark) {{\n  {NO_THEME_CLASS} {{{_nest(dark)}\n  }}\n}}\n"
    )
    blocks.append(
        f"@media (prefers-color-scheme: light) {{\n  {NO_THEME_CLASS} {{{_nest(light)}\n  }}\n}}"
    )
    return blocks


# =============================================================================
# OKLCH overrides
# =============================================================================


def _oklch_pair(derivation: ColorDerivation, indent: int) -> list[str]:
    pad = " " * indent
    return [
        f"{pad}--{derivation.property_name}: {derivation.converted};",
        f"{pad}--{derivation.property_name}-hex: {derivation.source_color};",
    ]


def oklch_block(derivations: Sequence[ColorDerivation]) -> list[str]:
    """The ``@supports`` OKLCH override block, or nothing without derivations."""
    if not derivations:
        return []

    by_bucket: dict[Bucket, list[ColorDerivation]] = {bucket: [] for bucket in Bucket}
    for derivation in derivations:
        by_bucket[derivation.bucket].append(derivation)

    lines = ["@supports (color: oklch(0% 0 0)) {"]
    for bucket in Bucket:
        if not by_bucket[bucket]:
            continue
        lines.append(f"  {THEME_SELECTORS[bucket]} {{")
        for derivation in by_bucket[bucket]:
            lines.extend(_oklch_pair(derivation, 4))
        lines.append("  }\n")

    for bucket, scheme, closing in (
        (Bucket.DARK, "dark", "  }\n"),
        (Bucket.LIGHT, "light", "  }"),
    ):
        if not by_bucket[bucket]:
            continue
        lines.append(f"  @media (prefers-color-scheme: {scheme}) {{")
        lines.append(f"    {NO_THEME_CLASS} {{")
        for derivation in by_bucket[bucket]:
            lines.extend(_oklch_pair(derivation, 6))
        lines.append("    }")
        lines.append(closing)
    lines.append("}")

    return [
        "",
        "/* OKLCH color space — perceptually uniform, wider gamut */",
        "/* Hex fallbacks above; OKLCH overrides below for supporting browsers */",
        "\n".join(lines),
    ]


# =============================================================================
# Modern CSS
# =============================================================================


def _supports_block(condition: str, buckets: BucketDeclarations) -> str:
    """An ``@supports`` rule holding one theme rule per populated bucket."""
    lines = [f"@supports ({condition}) {{"]
    for bucket in Bucket:
        if not buckets[bucket]:
            continue
        lines.append(f"  {THEME_SELECTORS[bucket]} {{")
        lines.extend(decl.css_line(indent=4) for decl in buckets[bucket])
        lines.append("  }" if bucket == Bucket.LIGHT else "  }\n")
    lines.append("}")
    return "\n".join(lines)


def modern_block(emission: EmissionResult, *, oklch: bool) -> list[str]:
    """The progressive-enhancement block."""
    root = emission.declarations(Bucket.ROOT)
    dark = emission.declarations(Bucket.DARK)
    light = emission.declarations(Bucket.LIGHT)

    blocks = [
        "",
        "/* Modern CSS — progressive enhancement */",
        "/* Browser support: Chrome 111+, Safari 16.4+, Firefox 113+ */",
    ]

    rules = property_declarations(root, dark)
    if rules:
        blocks.append("")
        blocks.append("/* @property — typed custom properties (enables transitions, validation) */")
        blocks.append("\n\n".join(rules))

    states = interaction_state_colors(root, dark, light)
    if has_any(states):
        blocks.append("")
        blocks.append("/* color-mix() — runtime hover/active derived states */")
        blocks.append(_supports_block("color: color-mix(in oklch, red, blue)", states))

    collapsed = light_dark_collapse(dark, light)
    if collapsed:
        blocks.append("")
        blocks.append(
            "/* light-dark() — single-property theme values (requires color-scheme on :root) */"
        )
        blocks.append(_light_dark_block(collapsed))

    if oklch:
        shades = relative_shades(root, dark, light)
        if has_any(shades):
            blocks.append("")
            blocks.append("/* Relative color syntax — OKLCH shade generation */")
            blocks.append(_supports_block("color: oklch(from red l c h)", shades))

    return blocks


def _light_dark_block(collapsed: Sequence[Declaration]) -> str:
    lines = [
        "@supports (color: light-dark(red, blue)) {",
        "  :root {",
        "    color-scheme: light dark;",
    ]
    lines.extend(decl.css_line(indent=4) for decl in collapsed)
    lines.append("  }")
    lines.append("}")
    return "\n".join(lines)


# =============================================================================
# Entry point
# =============================================================================


def assemble(emission: EmissionResult, *, oklch: bool = False, modern_css: bool = False) -> str:
    """Assemble the complete stylesheet text, ending with a newline."""
    blocks: list[str] = list(HEADER)
    blocks.extend(theme_blocks(emission))
    if oklch:
        blocks.extend(oklch_block(emission.derivations))
    if modern_css:
        blocks.extend(modern_block(emission, oklch=oklch))
    return "\n".join(blocks) + "\n"
