"""
Alias resolution for token values.

A value may be a whole-value alias (``"{color.blue.500}"``), contain
embedded aliases (``"{size.1} {size.2}"``), be a composite record whose
fields contain aliases, or be a plain literal. Lookups go through a
:class:`ScopeChain`: an ordered tuple of read-only tier scopes searched
first-match-wins.

Tiers resolve strictly in order: primitives against nothing, semantic
against primitives, component against semantic then primitives. A scope is
built only from a tier's already-resolved values, so a later tier can never
change what an earlier tier resolved to.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from .diagnostics import Diagnostics
from .errors import CyclicReferenceError
from .ir import Token, TokenFormat, TokenSet
from .strings import stringify

logger = logging.getLogger(__name__)

FULL_ALIAS = re.compile(r"^\{([^{}]+)\}$")
EMBEDDED_ALIAS = re.compile(r"\{([^{}]+)\}")

_MISSING = object()


def build_scope(tokens: Iterable[Token]) -> Mapping[str, Any]:
    """Build an immutable dotted-path -> value lookup for one tier."""
    return MappingProxyType({token.dotted_path: token.value for token in tokens})


class ScopeChain:
    """Ordered, immutable stack of lookup scopes."""

    def __init__(self, scopes: Iterable[Mapping[str, Any]] = ()) -> None:
        self._scopes: tuple[Mapping[str, Any], ...] = tuple(scopes)

    def lookup(self, path: str) -> Any:
        """Return the first value found for ``path``, or ``_MISSING``."""
        for scope in self._scopes:
            if path in scope:
                return scope[path]
        return _MISSING

    def __contains__(self, path: str) -> bool:
        return self.lookup(path) is not _MISSING

    def __len__(self) -> int:
        return len(self._scopes)


class ReferenceResolver:
    """Resolves alias expressions in token values against a scope chain."""

    def __init__(self, scopes: ScopeChain, diagnostics: Diagnostics) -> None:
        self.scopes = scopes
        self.diagnostics = diagnostics

    def resolve(self, value: Any, context: str | None = None) -> Any:
        """Resolve every alias in ``value``.

        A whole-value alias keeps the referenced value's native type; embedded
        aliases are substituted as text. Unknown paths are reported and their
        alias text is kept.

        Raises:
            CyclicReferenceError: If an alias chain revisits a path.
        """
        return self._resolve(value, (), context)

    def _resolve(self, value: Any, chain: tuple[str, ...], context: str | None) -> Any:
        if isinstance(value, str):
            match = FULL_ALIAS.match(value)
            if match:
                return self._follow(match.group(1), value, chain, context)
            if "{" in value:
                return EMBEDDED_ALIAS.sub(
                    lambda m: stringify(self._follow(m.group(1), m.group(0), chain, context)),
                    value,
                )
            return value
        if isinstance(value, dict):
            return {key: self._resolve(field, chain, context) for key, field in value.items()}
        # Lists (e.g. cubic-bezier control points), numbers and booleans pass through
        return value

    def _follow(self, ref: str, alias_text: str, chain: tuple[str, ...], context: str | None) -> Any:
        if ref in chain:
            raise CyclicReferenceError((*chain, ref))
        target = self.scopes.lookup(ref)
        if target is _MISSING:
            # Only aliases written in the value itself are reported; ones reached
            # through a found target were reported where they are written
            if not chain:
                self.diagnostics.unresolved_reference(ref, context)
            return alias_text
        return self._resolve(target, (*chain, ref), context)


def resolve_value(value: Any, scopes: ScopeChain, diagnostics: Diagnostics) -> Any:
    """Resolve one value against ``scopes``."""
    return ReferenceResolver(scopes, diagnostics).resolve(value)


def resolve_tokens(
    tokens: Iterable[Token], scopes: ScopeChain, diagnostics: Diagnostics
) -> list[Token]:
    """Return copies of ``tokens`` with fully resolved values."""
    resolver = ReferenceResolver(scopes, diagnostics)
    return [token.with_value(resolver.resolve(token.value, token.dotted_path)) for token in tokens]


def resolve_token_set(token_set: TokenSet, diagnostics: Diagnostics) -> list[Token]:
    """Resolve a loaded token set and return the tokens that reach the stylesheet.

    - three-tier: primitives -> semantic -> component; semantic and component
      tokens are emitted, primitives only feed lookups
    - flat-alias: one scope of the raw tree values, every token emitted
    - legacy: values are already literal and emitted as loaded
    """
    if token_set.format == TokenFormat.LEGACY:
        return list(token_set.primitives)

    if token_set.format == TokenFormat.FLAT_ALIAS:
        scope = ScopeChain([build_scope(token_set.primitives)])
        return resolve_tokens(token_set.primitives, scope, diagnostics)

    primitives = resolve_tokens(token_set.primitives, ScopeChain(), diagnostics)
    primitive_scope = build_scope(primitives)

    semantic = resolve_tokens(token_set.semantic, ScopeChain([primitive_scope]), diagnostics)
    semantic_scope = build_scope(semantic)

    component = resolve_tokens(
        token_set.component, ScopeChain([semantic_scope, primitive_scope]), diagnostics
    )

    logger.debug(
        f"Resolved tiers: {len(primitives)} primitives, "
        f"{len(semantic)} semantic, {len(component)} component"
    )
    return semantic + component
