"""
tokenweave Intermediate Representation (IR) types.

Declaration models (tokens, references, theme overrides) and the resolved
per-theme graphs produced from them.
"""

from .tokens import (
    BASE_THEME,
    BASE_THEME_ALIASES,
    STRING_ONLY_CATEGORIES,
    LiteralValue,
    ResolvedGraph,
    ResolvedToken,
    ThemeOverride,
    Token,
    TokenCategory,
    TokenLayer,
    TokenRef,
    TokenValue,
    check_literal,
    format_literal,
    is_reference,
)

__all__ = [
    "BASE_THEME",
    "BASE_THEME_ALIASES",
    "STRING_ONLY_CATEGORIES",
    "LiteralValue",
    "ResolvedGraph",
    "ResolvedToken",
    "ThemeOverride",
    "Token",
    "TokenCategory",
    "TokenLayer",
    "TokenRef",
    "TokenValue",
    "check_literal",
    "format_literal",
    "is_reference",
]
