"""
Token source layout detection.

Decides which ingestion strategy applies to a token root by looking at the
directory shape only; no file content is parsed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import make_missing_input_error
from .ir import Tier, TokenFormat

logger = logging.getLogger(__name__)

TOKEN_FILE_SUFFIX = ".tokens.json"


def token_files(directory: Path) -> list[Path]:
    """Alias-capable definition files directly inside ``directory``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(TOKEN_FILE_SUFFIX)
    )


def detect_format(tokens_dir: Path) -> TokenFormat:
    """Select the ingestion strategy for a token root.

    - ``primitives/`` holding at least one ``*.tokens.json`` -> three-tier
    - any top-level ``*.tokens.json`` -> flat-alias
    - otherwise -> legacy

    Raises:
        MissingInputError: If ``tokens_dir`` is not a directory.
    """
    if not tokens_dir.is_dir():
        raise make_missing_input_error(f"Token directory not found: {tokens_dir}", tokens_dir)

    if token_files(tokens_dir / Tier.PRIMITIVES.value):
        fmt = TokenFormat.THREE_TIER
    elif token_files(tokens_dir):
        fmt = TokenFormat.FLAT_ALIAS
    else:
        fmt = TokenFormat.LEGACY

    logger.debug(f"Detected {fmt} token layout in {tokens_dir}")
    return fmt
