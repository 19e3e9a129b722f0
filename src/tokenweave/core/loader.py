"""
Declaration loader for tokenweave.

Reads token and theme override declarations from YAML documents (JSON is
accepted as a YAML subset) into a TokenStore, and reads usage documents
for the auditor.

Declaration document layout:

    tokens:
      - name: colorBlue500
        category: color
        layer: global
        value: "#3b82f6"
      - name: colorPrimary
        category: color
        layer: semantic
        value: {ref: colorBlue500}
    themes:
      dark:
        colorPrimary: "#60a5fa"

``tokens`` may also be a mapping of name -> record, and ``themes`` a list
of {theme, token, value} records. Documents are applied in order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import DeclarationError, StoreValidationError
from .ir import ThemeOverride, Token, format_literal
from .store import TokenStore

logger = logging.getLogger(__name__)


@dataclass
class UsageSet:
    """Observed token names and raw literal values from consuming files."""

    names: set[str] = field(default_factory=set)
    values: set[str] = field(default_factory=set)


# =============================================================================
# Parsing
# =============================================================================


def _read_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise DeclarationError("Declaration file not found", file=path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DeclarationError(f"Invalid YAML: {e}", file=path) from e

    if data is None:
        logger.warning(f"Empty declaration document {path}")
        return {}
    if not isinstance(data, dict):
        raise DeclarationError("Top level must be a mapping", file=path)
    return data


def _token_records(raw: Any) -> list[dict[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        records = []
        for name, record in raw.items():
            if not isinstance(record, dict):
                raise ValueError(f"token '{name}' must be a mapping")
            records.append({"name": name, **record})
        return records
    if isinstance(raw, list):
        for record in raw:
            if not isinstance(record, dict):
                raise ValueError(f"token records must be mappings, got {record!r}")
        return list(raw)
    raise ValueError("'tokens' must be a list or a mapping")


def _override_records(raw: Any) -> list[ThemeOverride]:
    if raw is None:
        return []
    overrides: list[ThemeOverride] = []
    if isinstance(raw, dict):
        for theme, values in raw.items():
            if not isinstance(values, dict):
                raise ValueError(f"theme '{theme}' must map token names to values")
            for token_name, value in values.items():
                overrides.append(
                    ThemeOverride(theme=str(theme), token_name=token_name, value=value)
                )
        return overrides
    if isinstance(raw, list):
        for record in raw:
            if not isinstance(record, dict):
                raise ValueError(f"override records must be mappings, got {record!r}")
            overrides.append(
                ThemeOverride(
                    theme=str(record.get("theme", "")),
                    token_name=record.get("token", record.get("token_name", "")),
                    value=record.get("value"),
                )
            )
        return overrides
    raise ValueError("'themes' must be a list or a mapping")


def parse_declarations(
    data: dict[str, Any],
    store: TokenStore | None = None,
    *,
    file: Path | None = None,
) -> TokenStore:
    """
    Apply one declaration document to a store.

    Tokens are added before overrides, so a document may override tokens it
    declares itself.

    Raises:
        DeclarationError: If the document does not match the declaration schema.
        StoreValidationError: If a declaration is rejected by the store.
    """
    store = store if store is not None else TokenStore()
    try:
        tokens = [Token(**record) for record in _token_records(data.get("tokens"))]
        overrides = _override_records(data.get("themes"))
    except (ValidationError, ValueError, TypeError) as e:
        raise DeclarationError(f"Invalid declarations: {e}", file=file) from e

    try:
        store.add_tokens(tokens)
        store.add_overrides(overrides)
    except StoreValidationError:
        logger.error(f"Rejected declaration in {file or '<data>'}")
        raise

    logger.debug(
        f"Loaded {len(tokens)} tokens and {len(overrides)} overrides from {file or '<data>'}"
    )
    return store


def load_declarations(paths: Iterable[Path], store: TokenStore | None = None) -> TokenStore:
    """
    Load declaration documents, in order, into one store.

    Args:
        paths: YAML/JSON declaration files.
        store: Existing store to extend (default: new store).

    Returns:
        The populated TokenStore.
    """
    store = store if store is not None else TokenStore()
    for path in paths:
        parse_declarations(_read_document(path), store, file=path)
    logger.info(f"Loaded {len(store)} tokens, themes: {', '.join(store.theme_names()) or 'none'}")
    return store


def load_usage(path: Path) -> UsageSet:
    """
    Load an audit usage document.

    Layout:
        names: [colorPrimary, buttonBg]
        values: ["#3b82f6", "16px"]
    """
    data = _read_document(path)
    names = data.get("names") or []
    values = data.get("values") or []
    if not isinstance(names, list) or not isinstance(values, list):
        raise DeclarationError("'names' and 'values' must be lists", file=path)
    return UsageSet(
        names={str(n) for n in names},
        values={format_literal(v) for v in values},
    )


def dump_declarations(store: TokenStore) -> str:
    """Render a store back into a declaration document (YAML)."""
    tokens = []
    for token in store.get_all():
        record = token.model_dump(mode="json", exclude_none=True)
        tokens.append(record)

    themes: dict[str, dict[str, Any]] = {}
    for override in store.get_overrides():
        value = override.model_dump(mode="json")["value"]
        themes.setdefault(override.theme, {})[override.token_name] = value

    data: dict[str, Any] = {"tokens": tokens}
    if themes:
        data["themes"] = themes
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
