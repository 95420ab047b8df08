"""
Generation pipeline.

    detect_format -> load_tokens -> resolve_token_set -> emit_declarations
        -> assemble -> atomic write

:func:`generate_stylesheet` runs everything in memory. :func:`build` also
writes the stylesheet, replacing the output file in one step so that a
failed pass never leaves a partial file behind.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .assembler import assemble
from .css_emitter import EmissionResult, emit_declarations
from .diagnostics import Diagnostics
from .format_detect import detect_format
from .ir import Bucket, GenerateOptions, GenerationStats, TokenFormat, TokenSet
from .references import resolve_token_set
from .token_loader import load_tokens

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    css: str
    format: TokenFormat
    stats: GenerationStats
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def collect_stats(token_set: TokenSet, emission: EmissionResult) -> GenerationStats:
    return GenerationStats(
        tier_counts=token_set.counts,
        shared_properties=len(emission.declarations(Bucket.ROOT)),
        dark_properties=len(emission.declarations(Bucket.DARK)),
        light_properties=len(emission.declarations(Bucket.LIGHT)),
        converted_colors=len(emission.derivations),
    )


def generate_stylesheet(options: GenerateOptions) -> GenerationResult:
    """Run one generation pass in memory.

    Args:
        options: Token root and feature flags.

    Returns:
        GenerationResult with the stylesheet text, detected layout,
        statistics and any non-fatal diagnostics.

    Raises:
        MissingInputError: If the token root or a required file is missing.
        TokenParseError: If a token file cannot be parsed.
        CyclicReferenceError: If an alias chain loops.
    """
    diagnostics = Diagnostics()

    fmt = detect_format(options.tokens_dir)
    logger.info(f"Token format: {fmt}")

    token_set = load_tokens(options.tokens_dir, fmt, diagnostics)
    tokens = resolve_token_set(token_set, diagnostics)

    emission = emit_declarations(
        tokens,
        diagnostics,
        oklch=options.oklch,
        check_colors=options.oklch or options.modern_css,
    )
    css = assemble(emission, oklch=options.oklch, modern_css=options.modern_css)

    return GenerationResult(
        css=css,
        format=fmt,
        stats=collect_stats(token_set, emission),
        diagnostics=diagnostics,
    )


def _file_mode(path: Path) -> int:
    """Mode for the written file: the existing file's, else 0o666 less the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temporary file in the same directory.

    The temporary file is created owner-only, so it takes the final mode
    before it replaces ``path``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(temp_path, _file_mode(path))
        os.replace(temp_path, path)
    except BaseException:
        Path(temp_path).unlink(missing_ok=True)
        raise


def build(options: GenerateOptions) -> GenerationResult:
    """Generate the stylesheet and write it to ``options.output_file``.

    All fatal errors are raised before anything is written.
    """
    result = generate_stylesheet(options)
    write_atomic(options.output_file, result.css)

    stats = result.stats
    logger.info(f"Generated {options.output_file}")
    logger.info(
        f"{stats.shared_properties} shared, {stats.dark_properties} dark, "
        f"{stats.light_properties} light ({stats.total_properties} unique custom properties)"
    )
    if result.diagnostics:
        logger.info(f"{len(result.diagnostics)} warnings")
    return result
