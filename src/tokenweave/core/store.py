"""
Token store for tokenweave.

Holds raw token declarations and per-theme overrides. Every mutation is
validated immediately; a failed mutation leaves the store unchanged and
should stop ingestion. Resolution never reads the live store, it works
from an immutable StoreSnapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pydantic import ValidationError

from .errors import (
    DuplicateNameError,
    DuplicateOverrideError,
    InvalidOverrideTargetError,
    LiteralTypeError,
    ReservedThemeError,
    UnknownTokenError,
)
from .ir import (
    BASE_THEME_ALIASES,
    ThemeOverride,
    Token,
    TokenLayer,
    TokenRef,
    TokenValue,
    check_literal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable view of a token store taken at one point in time."""

    tokens: tuple[Token, ...]
    index: Mapping[str, Token]
    overrides: Mapping[str, Mapping[str, TokenValue]]

    @property
    def themes(self) -> tuple[str, ...]:
        return tuple(self.overrides)

    def overrides_for(self, theme: str) -> Mapping[str, TokenValue]:
        return self.overrides.get(theme, MappingProxyType({}))


class TokenStore:
    """
    Ordered collection of token declarations and theme overrides.

    Insertion order of tokens is preserved and becomes the default
    serialization order.

    Example:
        store = TokenStore()
        store.add_token(Token(name="colorBlue500", category="color",
                              layer="global", value="#3b82f6"))
        store.add_token(Token(name="colorPrimary", category="color",
                              layer="semantic", value=TokenRef(ref="colorBlue500")))
        store.add_override("dark", "colorPrimary", "#60a5fa")
    """

    def __init__(self) -> None:
        self._tokens: dict[str, Token] = {}
        self._overrides: dict[str, dict[str, TokenValue]] = {}

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, name: object) -> bool:
        return name in self._tokens

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_token(self, token: Token) -> Token:
        """
        Declare a token.

        Raises:
            DuplicateNameError: If a token with the same name already exists.
            LiteralTypeError: If the literal does not fit the token category.
        """
        if token.name in self._tokens:
            raise DuplicateNameError(token.name)
        if not isinstance(token.value, TokenRef):
            problem = check_literal(token.value, token.category)
            if problem:
                raise LiteralTypeError(problem, name=token.name)

        self._tokens[token.name] = token
        logger.debug(f"Declared {token.layer} {token.category} token {token.name}")
        return token

    def add_tokens(self, tokens: Iterable[Token]) -> None:
        for token in tokens:
            self.add_token(token)

    def add_override(self, theme: str, token_name: str, value: TokenValue) -> ThemeOverride:
        """
        Override a semantic or component token for one theme.

        Raises:
            ReservedThemeError: If theme names the base theme.
            UnknownTokenError: If token_name is not declared.
            InvalidOverrideTargetError: If the target token is in the global layer.
            DuplicateOverrideError: If the theme already overrides the token.
            LiteralTypeError: If the literal does not fit the target's category.
        """
        if theme in BASE_THEME_ALIASES:
            raise ReservedThemeError(theme, token_name)

        target = self._tokens.get(token_name)
        if target is None:
            raise UnknownTokenError(token_name, theme=theme)
        if target.layer == TokenLayer.GLOBAL:
            raise InvalidOverrideTargetError(token_name, theme)

        theme_overrides = self._overrides.get(theme, {})
        if token_name in theme_overrides:
            raise DuplicateOverrideError(token_name, theme)

        try:
            override = ThemeOverride(theme=theme, token_name=token_name, value=value)
        except ValidationError as e:
            problem = check_literal(value, target.category) or f"invalid override value: {e}"
            raise LiteralTypeError(problem, name=token_name, theme=theme) from e
        if not isinstance(override.value, TokenRef):
            problem = check_literal(override.value, target.category)
            if problem:
                raise LiteralTypeError(problem, name=token_name, theme=theme)

        self._overrides.setdefault(theme, {})[token_name] = override.value
        logger.debug(f"Theme {theme} overrides {token_name}")
        return override

    def add_overrides(self, overrides: Iterable[ThemeOverride]) -> None:
        for override in overrides:
            self.add_override(override.theme, override.token_name, override.value)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, name: str) -> Token | None:
        return self._tokens.get(name)

    def get_all(self) -> tuple[Token, ...]:
        """Immutable snapshot of all tokens in insertion order."""
        return tuple(self._tokens.values())

    def overrides_for(self, theme: str) -> Mapping[str, TokenValue]:
        return MappingProxyType(dict(self._overrides.get(theme, {})))

    def get_overrides(self) -> tuple[ThemeOverride, ...]:
        """All overrides, grouped by theme in first-appearance order."""
        return tuple(
            ThemeOverride(theme=theme, token_name=name, value=value)
            for theme, values in self._overrides.items()
            for name, value in values.items()
        )

    def theme_names(self) -> tuple[str, ...]:
        """Named themes in order of first appearance in the override set."""
        return tuple(self._overrides)

    def snapshot(self) -> StoreSnapshot:
        tokens = self.get_all()
        return StoreSnapshot(
            tokens=tokens,
            index=MappingProxyType({token.name: token for token in tokens}),
            overrides=MappingProxyType(
                {
                    theme: MappingProxyType(dict(values))
                    for theme, values in self._overrides.items()
                }
            ),
        )
