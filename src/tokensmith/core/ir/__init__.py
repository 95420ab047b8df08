"""
Intermediate representation types for tokens and emitted stylesheets.

All types are re-exported from this package.
"""

from .stylesheet import (
    ColorDerivation,
    Declaration,
    EmittedSection,
    GenerateOptions,
    GenerationStats,
)
from .tokens import (
    Bucket,
    Mode,
    Tier,
    Token,
    TokenFormat,
    TokenSet,
    TokenType,
    coerce_token_type,
)

__all__ = [
    # Tokens
    "Bucket",
    "Mode",
    "Tier",
    "Token",
    "TokenFormat",
    "TokenSet",
    "TokenType",
    "coerce_token_type",
    # Stylesheet
    "ColorDerivation",
    "Declaration",
    "EmittedSection",
    "GenerateOptions",
    "GenerationStats",
]
