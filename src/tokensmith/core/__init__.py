"""Core tokensmith functionality: IR, loading, alias resolution, emission, assembly."""

from . import ir
from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from .errors import (
    CyclicReferenceError,
    ErrorContext,
    MissingInputError,
    TokenParseError,
    TokensmithError,
)
from .format_detect import detect_format
from .pipeline import GenerationResult, build, generate_stylesheet
from .references import ScopeChain, resolve_token_set, resolve_value
from .token_loader import load_tokens

__all__ = [
    "ir",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "TokensmithError",
    "MissingInputError",
    "TokenParseError",
    "CyclicReferenceError",
    "ErrorContext",
    "detect_format",
    "load_tokens",
    "ScopeChain",
    "resolve_value",
    "resolve_token_set",
    "GenerationResult",
    "generate_stylesheet",
    "build",
]
