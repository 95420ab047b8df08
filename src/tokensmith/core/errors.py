"""
Error types for token loading, reference resolution, and stylesheet generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokensmithError(Exception):
    """Base exception for all tokensmith errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class MissingInputError(TokensmithError):
    """
    Raised when a required token source is absent.

    Examples:
    - Token root directory does not exist
    - A fixed legacy category file (colors.json, sizing.json, ...) is missing
    """

    pass


class TokenParseError(TokensmithError):
    """
    Raised when a token definition file exists but cannot be parsed.

    Examples:
    - Invalid JSON
    - Top-level value is not an object
    """

    pass


class CyclicReferenceError(TokensmithError):
    """
    Raised when an alias chain revisits a path that is still being resolved.

    The ``chain`` attribute holds the dotted paths in expansion order, ending
    with the revisited path (``("a", "b", "a")``).
    """

    def __init__(self, chain: tuple[str, ...], context: Optional["ErrorContext"] = None):
        self.chain = chain
        super().__init__(f"Cyclic token reference: {' -> '.join(chain)}", context)


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Path to the token file involved
        path: Optional dotted token path inside that file
    """

    file: Path
    path: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens/colors.tokens.json (color.brand.primary)"
        """
        if self.path:
            return f"{self.file} ({self.path})"
        return str(self.file)


def make_missing_input_error(message: str, file: Path | None = None) -> MissingInputError:
    """
    Helper to create a MissingInputError with optional context.

    Args:
        message: Error description
        file: Optional path that was expected to exist

    Returns:
        MissingInputError with context if a path was provided
    """
    if file is not None:
        return MissingInputError(message, ErrorContext(file=file))
    return MissingInputError(message)
