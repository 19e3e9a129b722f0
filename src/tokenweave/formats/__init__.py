"""
Output formats for resolved token graphs.

A closed set of named serializers, each a pure function from resolved
graphs to text:

- css:  native custom properties (:root plus [data-theme] blocks)
- scss: preprocessor variables (base theme only)
- js:   ES module object, theme -> category -> name
- json: structured data with typed leaves (optionally W3C DTCG)

Serializers never resolve references; they only format literals that are
already resolved, and produce byte-identical output for identical input.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from ._shared import Graphs, kebab_case
from .css_generator import generate_css
from .js_generator import generate_js
from .json_export import build_token_tree, generate_json
from .scss_generator import generate_scss


class OutputFormat(StrEnum):
    """Supported serializer formats."""

    CSS = "css"
    SCSS = "scss"
    JS = "js"
    JSON = "json"


_SERIALIZERS: dict[OutputFormat, Callable[..., str]] = {
    OutputFormat.CSS: generate_css,
    OutputFormat.SCSS: generate_scss,
    OutputFormat.JS: generate_js,
    OutputFormat.JSON: generate_json,
}

_EXTENSIONS: dict[OutputFormat, str] = {
    OutputFormat.CSS: ".css",
    OutputFormat.SCSS: ".scss",
    OutputFormat.JS: ".js",
    OutputFormat.JSON: ".json",
}


def available_formats() -> list[str]:
    return [fmt.value for fmt in OutputFormat]


def file_extension(fmt: str | OutputFormat) -> str:
    return _EXTENSIONS[OutputFormat(fmt)]


def serialize(graphs: Graphs, fmt: str | OutputFormat, **options: object) -> str:
    """
    Serialize resolved graphs to one format.

    Args:
        graphs: One ResolvedGraph or a theme -> ResolvedGraph mapping.
        fmt: Format name (css, scss, js, json).
        **options: Format-specific keyword options.

    Raises:
        ValueError: If fmt is not a known format.
        SerializationError: If a literal cannot be written in the format.
    """
    try:
        output_format = OutputFormat(fmt)
    except ValueError:
        raise ValueError(
            f"Unknown format '{fmt}'. Available: {', '.join(available_formats())}"
        ) from None
    return _SERIALIZERS[output_format](graphs, **options)


__all__ = [
    "OutputFormat",
    "available_formats",
    "build_token_tree",
    "file_extension",
    "generate_css",
    "generate_js",
    "generate_json",
    "generate_scss",
    "kebab_case",
    "serialize",
]
