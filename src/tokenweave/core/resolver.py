"""
Reference resolver for tokenweave.

Resolves every token of a store snapshot to a concrete literal for one
theme by following reference chains:

1. The effective value of a token is the theme's override if one exists,
   otherwise the base declaration.
2. References are followed within the same theme, so an override on a
   semantic token propagates to every component token aliasing it.
3. Walks use an explicit chain instead of recursion. Revisiting a name on
   the chain is a cycle; the chain length is also bounded by the number of
   tokens.
4. Dangling references and references into a higher layer fail lazily
   during the walk.

Each call builds its own memo table and returns a new ResolvedGraph, so
concurrent calls for different themes share nothing mutable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import CyclicReferenceError, LayerViolationError, UnresolvedReferenceError
from .ir import (
    BASE_THEME,
    BASE_THEME_ALIASES,
    LiteralValue,
    ResolvedGraph,
    ResolvedToken,
    TokenRef,
    TokenValue,
)
from .store import StoreSnapshot

logger = logging.getLogger(__name__)


def normalize_theme(theme: str | None) -> str:
    """Map the base theme aliases ("" / None / "default") to BASE_THEME."""
    if theme is None or theme in BASE_THEME_ALIASES:
        return BASE_THEME
    return theme


@dataclass(frozen=True)
class ResolutionTrace:
    """How a single token was resolved: the alias chain walked and where overrides applied."""

    name: str
    theme: str
    chain: tuple[str, ...]
    value: LiteralValue
    overridden: tuple[str, ...] = ()

    @property
    def is_alias(self) -> bool:
        return len(self.chain) > 1


class _ThemeWalk:
    """Resolution state for one call. Never shared between calls."""

    def __init__(self, snapshot: StoreSnapshot, theme: str):
        self.snapshot = snapshot
        self.theme = theme
        self.overrides: Mapping[str, TokenValue] = (
            {} if theme == BASE_THEME else snapshot.overrides_for(theme)
        )
        self.memo: dict[str, LiteralValue] = {}
        self.max_chain = len(snapshot.tokens) + 1

    def effective(self, name: str) -> TokenValue:
        if name in self.overrides:
            return self.overrides[name]
        return self.snapshot.index[name].value

    def walk(self, name: str) -> tuple[list[str], LiteralValue]:
        """Follow references from name to a literal, returning the chain walked."""
        chain = [name]
        on_chain = {name}
        current = name

        while True:
            if current in self.memo:
                literal = self.memo[current]
                break

            value = self.effective(current)
            if not isinstance(value, TokenRef):
                literal = value
                break

            target = value.ref
            source = self.snapshot.index[current]
            target_token = self.snapshot.index.get(target)
            if target_token is None:
                raise UnresolvedReferenceError(target, current, self.theme)
            if not source.layer.can_reference(target_token.layer):
                raise LayerViolationError(
                    current,
                    source.layer.value,
                    target,
                    target_token.layer.value,
                    self.theme,
                )
            if target in on_chain:
                start = chain.index(target)
                raise CyclicReferenceError(chain[start:] + [target], self.theme)

            chain.append(target)
            on_chain.add(target)
            if len(chain) > self.max_chain:
                raise CyclicReferenceError(chain, self.theme)
            current = target

        for visited in chain:
            self.memo[visited] = literal
        return chain, literal


def resolve_theme(snapshot: StoreSnapshot, theme: str | None = None) -> ResolvedGraph:
    """
    Resolve every declared token for one theme.

    Args:
        snapshot: Immutable store snapshot.
        theme: Theme name; None, "" or "default" resolve the base theme
            and ignore all overrides.

    Returns:
        ResolvedGraph with one literal per declared token, in insertion order.

    Raises:
        CyclicReferenceError: A reference chain loops.
        UnresolvedReferenceError: A reference names an undeclared token.
        LayerViolationError: A token references a token in a higher layer.
    """
    theme_name = normalize_theme(theme)
    state = _ThemeWalk(snapshot, theme_name)

    entries: list[ResolvedToken] = []
    for token in snapshot.tokens:
        _, literal = state.walk(token.name)
        entries.append(
            ResolvedToken(
                name=token.name,
                category=token.category,
                layer=token.layer,
                value=literal,
                description=token.description,
            )
        )

    logger.debug(f"Resolved {len(entries)} tokens for theme {theme_name}")
    return ResolvedGraph(theme=theme_name, entries=tuple(entries))


def resolve_token(snapshot: StoreSnapshot, name: str, theme: str | None = None) -> ResolutionTrace:
    """
    Resolve a single token and report the alias chain that produced its value.

    Raises:
        KeyError: If name is not declared.
        ResolutionError: As for resolve_theme, limited to this token's chain.
    """
    if name not in snapshot.index:
        raise KeyError(name)

    theme_name = normalize_theme(theme)
    state = _ThemeWalk(snapshot, theme_name)
    chain, literal = state.walk(name)
    overridden = tuple(hop for hop in chain if hop in state.overrides)
    return ResolutionTrace(
        name=name,
        theme=theme_name,
        chain=tuple(chain),
        value=literal,
        overridden=overridden,
    )
