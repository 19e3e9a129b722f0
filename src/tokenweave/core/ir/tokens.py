"""
Token IR types for layered design-token declarations.

Declarations are the raw input: tokens that hold either a literal or a
reference to another token, and per-theme overrides of semantic and
component tokens. Resolved graphs are the output of resolution: one
immutable name -> literal mapping per theme.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Enums
# =============================================================================


class TokenCategory(StrEnum):
    """Kind of design value a token holds."""

    COLOR = "color"
    SPACING = "spacing"
    TYPOGRAPHY = "typography"
    RADIUS = "radius"
    SHADOW = "shadow"
    DURATION = "duration"
    OTHER = "other"


class TokenLayer(StrEnum):
    """Layer a token lives in. References may only point down or sideways."""

    GLOBAL = "global"
    SEMANTIC = "semantic"
    COMPONENT = "component"

    @property
    def rank(self) -> int:
        return _LAYER_RANK[self]

    def can_reference(self, other: TokenLayer) -> bool:
        """True if a token in this layer may reference a token in ``other``."""
        return other.rank <= self.rank


_LAYER_RANK: dict[TokenLayer, int] = {
    TokenLayer.GLOBAL: 0,
    TokenLayer.SEMANTIC: 1,
    TokenLayer.COMPONENT: 2,
}

# Categories whose literals must be strings
STRING_ONLY_CATEGORIES: frozenset[TokenCategory] = frozenset(
    {TokenCategory.COLOR, TokenCategory.SHADOW}
)

BASE_THEME = "default"
BASE_THEME_ALIASES: frozenset[str] = frozenset({BASE_THEME, ""})


# =============================================================================
# Values
# =============================================================================

LiteralValue = str | int | float


class TokenRef(BaseModel):
    """Reference to another token by bare name."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ref: str = Field(min_length=1, description="Name of the referenced token")

    def __str__(self) -> str:
        return f"{{ref: {self.ref}}}"


TokenValue = TokenRef | LiteralValue


def is_reference(value: TokenValue) -> bool:
    return isinstance(value, TokenRef)


def check_literal(value: LiteralValue, category: TokenCategory) -> str | None:
    """Return a problem description if ``value`` is not a valid literal for ``category``."""
    if isinstance(value, bool) or not isinstance(value, str | int | float):
        return f"literal must be a string or number, got {type(value).__name__}"
    if isinstance(value, str) and not value.strip():
        return "literal must not be empty"
    if category in STRING_ONLY_CATEGORIES and not isinstance(value, str):
        return f"{category} literal must be a string, got {value!r}"
    if isinstance(value, float) and not math.isfinite(value):
        return f"literal must be a finite number, got {value!r}"
    return None


def format_literal(value: LiteralValue) -> str:
    """Canonical string form of a literal, used for text output and audit matching."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Declarations
# =============================================================================


class Token(BaseModel):
    """A named design value declared in one layer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Globally unique token name")
    category: TokenCategory = Field(description="Token category")
    layer: TokenLayer = Field(description="Layer the token belongs to")
    value: TokenValue = Field(description="Literal value or {ref: name}")
    description: str | None = Field(default=None, description="Human-readable purpose")

    @field_validator("value", mode="before")
    @classmethod
    def _reject_bool(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("boolean values are not valid token literals")
        return value

    @property
    def is_alias(self) -> bool:
        return is_reference(self.value)


class ThemeOverride(BaseModel):
    """Replacement value for a semantic or component token in one theme."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    theme: str = Field(description="Theme name, e.g. dark or brand-acme")
    token_name: str = Field(min_length=1, description="Name of the overridden token")
    value: TokenValue = Field(description="Literal value or {ref: name}")

    @field_validator("value", mode="before")
    @classmethod
    def _reject_bool(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("boolean values are not valid token literals")
        return value


# =============================================================================
# Resolved output
# =============================================================================


@dataclass(frozen=True)
class ResolvedToken:
    """A token with its concrete literal for one theme."""

    name: str
    category: TokenCategory
    layer: TokenLayer
    value: LiteralValue
    description: str | None = None

    @property
    def text(self) -> str:
        return format_literal(self.value)


@dataclass(frozen=True)
class ResolvedGraph(Mapping[str, LiteralValue]):
    """
    Fully dereferenced name -> literal mapping for one theme.

    Entries keep token store insertion order. Instances are never mutated
    after construction.
    """

    theme: str
    entries: tuple[ResolvedToken, ...]
    _index: Mapping[str, ResolvedToken] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {entry.name: entry for entry in self.entries}
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __getitem__(self, name: str) -> LiteralValue:
        return self._index[name].value

    def __iter__(self) -> Iterator[str]:
        return (entry.name for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def entry(self, name: str) -> ResolvedToken:
        return self._index[name]

    @property
    def is_base(self) -> bool:
        return self.theme == BASE_THEME

    def by_category(self) -> dict[TokenCategory, list[ResolvedToken]]:
        """Group entries by category, categories in first-appearance order."""
        grouped: dict[TokenCategory, list[ResolvedToken]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.category, []).append(entry)
        return grouped

    def as_dict(self) -> dict[str, LiteralValue]:
        return {entry.name: entry.value for entry in self.entries}
