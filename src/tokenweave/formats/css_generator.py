"""
CSS generator for tokenweave.

Generates CSS custom properties from resolved graphs: the base theme
populates :root and every named theme gets a [data-theme="<name>"] block.
"""

from __future__ import annotations

from tokenweave.core.ir import ResolvedGraph

from ._shared import (
    GENERATED_NOTICE,
    Graphs,
    check_verbatim_value,
    css_string,
    identifiers,
    ordered_graphs,
)

FORMAT = "css"


def generate_css(
    graphs: Graphs,
    *,
    prefix: str = "",
    theme_attribute: str = "data-theme",
    changed_only: bool = False,
) -> str:
    """
    Generate CSS from resolved graphs.

    Args:
        graphs: One graph or a theme -> graph mapping.
        prefix: Prepended to every property name, e.g. "dz-" gives --dz-color-primary.
        theme_attribute: Attribute used to scope named themes.
        changed_only: In named theme blocks, only emit tokens whose value
            differs from the base theme (requires the base graph).

    Returns:
        CSS string with :root and theme selectors.
    """
    ordered = ordered_graphs(graphs)
    base = ordered[0] if ordered and ordered[0].is_base else None

    lines: list[str] = [f"/* {GENERATED_NOTICE} */"]

    for graph in ordered:
        if graph.is_base:
            selector = ":root"
        else:
            selector = f"[{theme_attribute}={css_string(graph.theme)}]"
        lines.append("")
        lines.append(f"{selector} {{")
        lines.extend(_declarations(graph, prefix, base if changed_only else None))
        lines.append("}")

    return "\n".join(lines) + "\n"


def _declarations(graph: ResolvedGraph, prefix: str, base: ResolvedGraph | None) -> list[str]:
    names = identifiers(graph, FORMAT, prefix)
    lines: list[str] = []
    for entry in graph.entries:
        if base is not None and not graph.is_base and base.get(entry.name) == entry.value:
            continue
        value = check_verbatim_value(entry, FORMAT)
        lines.append(f"  --{names[entry.name]}: {value};")
    return lines
