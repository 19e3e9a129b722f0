"""
Helpers shared by the output formats.

Identifier derivation, theme ordering, and value validation for the
text-based syntaxes (CSS and SCSS), where a literal is written verbatim.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from tokenweave.core.errors import SerializationError
from tokenweave.core.ir import BASE_THEME, ResolvedGraph, ResolvedToken, TokenCategory

GENERATED_NOTICE = "Generated by tokenweave - do not edit"

# Leaf "type" values for structured output, derived from category
TYPE_BY_CATEGORY: dict[TokenCategory, str] = {
    TokenCategory.COLOR: "color",
    TokenCategory.SPACING: "dimension",
    TokenCategory.RADIUS: "dimension",
    TokenCategory.TYPOGRAPHY: "typography",
    TokenCategory.SHADOW: "shadow",
    TokenCategory.DURATION: "duration",
    TokenCategory.OTHER: "string",
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_DIGIT_BOUNDARY = re.compile(r"(?<=[A-Za-z])(?=[0-9])")
_SEPARATORS = re.compile(r"[\s._/]+")
_IDENTIFIER = re.compile(r"^[a-z0-9_-]+$")

_CLOSERS = {"(": ")", "[": "]"}


Graphs = ResolvedGraph | Mapping[str, ResolvedGraph]


def ordered_graphs(graphs: Graphs) -> list[ResolvedGraph]:
    """
    Normalize serializer input to a list of graphs, base theme first.

    Named themes keep the order of the given mapping.
    """
    if isinstance(graphs, ResolvedGraph):
        items = [graphs]
    else:
        items = list(graphs.values())

    seen: set[str] = set()
    for graph in items:
        if graph.theme in seen:
            raise SerializationError(f"Theme '{graph.theme}' given more than once")
        seen.add(graph.theme)

    base = [graph for graph in items if graph.theme == BASE_THEME]
    named = [graph for graph in items if graph.theme != BASE_THEME]
    return base + named


def kebab_case(name: str) -> str:
    """
    Convert a token name to a kebab-case identifier.

    colorBlue500 -> color-blue-500, button.bg -> button-bg
    """
    text = _CAMEL_BOUNDARY.sub("-", name)
    text = _DIGIT_BOUNDARY.sub("-", text)
    text = _SEPARATORS.sub("-", text)
    text = re.sub(r"-{2,}", "-", text)
    return text.strip("-").lower()


def identifiers(graph: ResolvedGraph, fmt: str, prefix: str = "") -> dict[str, str]:
    """
    Map every token name to its kebab-case identifier.

    Raises:
        SerializationError: If a name has no valid identifier, or two names
            collapse to the same identifier.
    """
    result: dict[str, str] = {}
    owners: dict[str, str] = {}
    for entry in graph.entries:
        ident = prefix + kebab_case(entry.name)
        if not _IDENTIFIER.match(ident):
            raise SerializationError(
                f"Token name '{entry.name}' cannot be written as an identifier ('{ident}')",
                token=entry.name,
                fmt=fmt,
            )
        if ident in owners:
            raise SerializationError(
                f"Tokens '{owners[ident]}' and '{entry.name}' both map to '{ident}'",
                token=entry.name,
                fmt=fmt,
            )
        owners[ident] = entry.name
        result[entry.name] = ident
    return result


def check_verbatim_value(
    entry: ResolvedToken,
    fmt: str,
    *,
    line_comments: bool = False,
    flags: bool = False,
) -> str:
    """
    Validate a literal that will be written verbatim into a declaration.

    Rejects newlines, unbalanced quotes or brackets, block comment markers
    and top-level ``;``, ``{`` or ``}``. With line_comments, ``//`` outside
    strings and brackets is rejected too (SCSS). With flags, a ``!`` outside
    strings and brackets is rejected, since SCSS reads it as !default,
    !global or !important.

    Returns:
        The literal text.

    Raises:
        SerializationError: If the literal would produce malformed output.
    """
    text = entry.text

    def fail(reason: str) -> SerializationError:
        return SerializationError(
            f"Value {text!r} of '{entry.name}' {reason}", token=entry.name, fmt=fmt
        )

    if "\n" in text or "\r" in text or "\f" in text:
        raise fail("contains a line break")

    quote: str | None = None
    stack: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\":
            if i == len(text) - 1:
                raise fail("ends with an escape character")
            i += 2
            continue
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in (")", "]"):
            if not stack or stack.pop() != char:
                raise fail(f"has an unbalanced '{char}'")
        elif char in "{}":
            raise fail(f"contains '{char}'")
        elif char == ";" and not stack:
            raise fail("contains ';'")
        elif text.startswith("/*", i) or text.startswith("*/", i):
            raise fail("contains a comment marker")
        elif line_comments and not stack and text.startswith("//", i):
            raise fail("contains '//'")
        elif flags and not stack and char == "!":
            raise fail("contains an SCSS flag marker '!'")
        i += 1

    if quote:
        raise fail(f"has an unterminated {quote} string")
    if stack:
        raise fail(f"is missing '{stack[-1]}'")
    return text


def css_string(value: str) -> str:
    """Quote a value as a CSS string."""
    if "\n" in value or "\r" in value:
        raise SerializationError(f"Theme name {value!r} contains a line break", fmt="css")
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
