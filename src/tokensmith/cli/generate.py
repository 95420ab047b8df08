"""
Stylesheet generation command.

Maps command-line options onto GenerateOptions, runs one build and
reports the detected layout, counts and warnings.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from tokensmith.core.errors import TokensmithError
from tokensmith.core.ir import GenerateOptions, TokenFormat
from tokensmith.core.pipeline import GenerationResult, build


def configure_logging(verbose: bool) -> None:
    """Log to stderr; ``--verbose`` wins over ``LOG_LEVEL``."""
    level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "ERROR").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.ERROR),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _report(result: GenerationResult, output: Path, oklch: bool, modern_css: bool) -> None:
    console = Console(soft_wrap=True)
    stats = result.stats
    console.print(f"  Format: {result.format}")
    if oklch:
        console.print("  OKLCH:  enabled")
    if modern_css:
        console.print("  Modern: enabled")
    if result.format == TokenFormat.THREE_TIER:
        counts = stats.tier_counts
        console.print(
            f"  Tiers: {counts.get('primitives', 0)} primitives, "
            f"{counts.get('semantic', 0)} semantic, {counts.get('component', 0)} component"
        )
    for diagnostic in result.diagnostics:
        console.print(f"  [yellow]Warning:[/yellow] {escape(diagnostic.format())}")

    console.print(f"[green]Generated[/green] {escape(str(output))}")
    console.print(f"  :root    {stats.shared_properties} shared vars")
    console.print(f"  .dark    {stats.dark_properties} themed vars")
    console.print(f"  .light   {stats.light_properties} themed vars")
    console.print(f"  Total    {stats.total_properties} unique custom properties")
    if oklch:
        console.print(f"  OKLCH    {stats.converted_colors} converted colors")


def generate_command(
    tokens_dir: Path = typer.Option(
        Path("tokens"), "--tokens-dir", "-t", help="Token source directory"
    ),
    output: Path = typer.Option(
        Path("generated/tokens.css"), "--output", "-o", help="Stylesheet to write"
    ),
    oklch: bool = typer.Option(
        False, "--oklch", help="Add OKLCH overrides inside @supports (hex stays as fallback)"
    ),
    modern_css: bool = typer.Option(
        False, "--modern-css", help="Add @property, color-mix(), light-dark() enhancements"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Generate the CSS custom-property stylesheet from design tokens."""
    configure_logging(verbose)

    options = GenerateOptions(
        tokens_dir=tokens_dir,
        output_file=output,
        oklch=oklch,
        modern_css=modern_css,
    )

    try:
        result = build(options)
    except TokensmithError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _report(result, output, oklch, modern_css)
