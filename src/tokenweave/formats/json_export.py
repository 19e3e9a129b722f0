"""
Structured JSON export for tokenweave.

Same nesting as the JS module (theme -> category -> name) with typed
leaves. With dtcg=True the leaf keys follow the W3C Design Token Community
Group format ($type, $value, $description).
See: https://design-tokens.github.io/community-group/format/
"""

from __future__ import annotations

import json
from typing import Any

from tokenweave.core.errors import SerializationError

from ._shared import TYPE_BY_CATEGORY, Graphs, ordered_graphs


def build_token_tree(graphs: Graphs, *, dtcg: bool = False) -> dict[str, Any]:
    """
    Build the nested token tree.

    Args:
        graphs: One graph or a theme -> graph mapping.
        dtcg: Use $-prefixed leaf keys.

    Returns:
        Dict suitable for json.dumps.
    """
    key = "${}" if dtcg else "{}"
    tree: dict[str, Any] = {}
    for graph in ordered_graphs(graphs):
        theme_group: dict[str, Any] = {}
        for category, entries in graph.by_category().items():
            category_group: dict[str, Any] = {}
            for entry in entries:
                leaf: dict[str, Any] = {
                    key.format("type"): TYPE_BY_CATEGORY[entry.category],
                    key.format("value"): entry.value,
                }
                if entry.description:
                    leaf[key.format("description")] = entry.description
                category_group[entry.name] = leaf
            theme_group[category.value] = category_group
        tree[graph.theme] = theme_group
    return tree


def generate_json(graphs: Graphs, *, dtcg: bool = False, indent: int = 2) -> str:
    """
    Generate structured JSON from resolved graphs.

    Raises:
        SerializationError: If a literal cannot be encoded as JSON.
    """
    tree = build_token_tree(graphs, dtcg=dtcg)
    try:
        text = json.dumps(tree, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise SerializationError(f"Cannot encode tokens: {e}", fmt="json") from e
    return text + "\n"
