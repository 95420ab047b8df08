"""
Structured warnings collected during a generation pass.

Non-fatal problems (unresolved aliases, colors that cannot be converted) are
recorded here in the order they occur and returned with the generated
stylesheet, so callers can inspect them without parsing log output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)


class DiagnosticKind(StrEnum):
    """Kinds of non-fatal diagnostics."""

    UNRESOLVED_REFERENCE = "unresolved-reference"
    UNPARSEABLE_COLOR = "unparseable-color"


@dataclass(frozen=True)
class Diagnostic:
    """A single warning record."""

    kind: DiagnosticKind
    path: str
    message: str

    def format(self) -> str:
        return f"{self.kind}: {self.path}: {self.message}"


class Diagnostics:
    """Ordered collector of diagnostics for one pass."""

    def __init__(self) -> None:
        self.records: list[Diagnostic] = []

    def warn(self, kind: DiagnosticKind, path: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, path=path, message=message)
        self.records.append(diagnostic)
        logger.warning(diagnostic.format())
        return diagnostic

    def unresolved_reference(self, ref: str, context: str | None = None) -> Diagnostic:
        where = f" in {context}" if context else ""
        return self.warn(
            DiagnosticKind.UNRESOLVED_REFERENCE,
            ref,
            f"unresolved reference {{{ref}}}{where}",
        )

    def unparseable_color(self, prop: str, value: str) -> Diagnostic:
        return self.warn(
            DiagnosticKind.UNPARSEABLE_COLOR,
            prop,
            f"'{value}' is neither a hex color nor oklch()",
        )

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.records if d.kind == kind]

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    def __repr__(self) -> str:
        return f"Diagnostics(records={len(self.records)})"
