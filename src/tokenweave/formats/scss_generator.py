"""
SCSS variable generator for tokenweave.

SCSS variables are global and cannot be scoped to a theme selector, so
only the base theme becomes real `$variables`. Named themes are written
as a commented map under an explicit limitation note, or listed as
skipped when include_themes is False. No theme is dropped silently.
"""

from __future__ import annotations

from tokenweave.core.errors import SerializationError

from ._shared import GENERATED_NOTICE, Graphs, check_verbatim_value, identifiers, ordered_graphs

FORMAT = "scss"

THEME_LIMITATION = (
    "SCSS variables cannot be scoped per theme; values below are reference only"
)


def generate_scss(graphs: Graphs, *, prefix: str = "", include_themes: bool = True) -> str:
    """
    Generate SCSS variables for the base theme.

    Args:
        graphs: One graph or a theme -> graph mapping; must contain the base theme.
        prefix: Prepended to every variable name.
        include_themes: Emit named themes as commented maps (True) or as a
            single "skipped" note (False).

    Raises:
        SerializationError: If the base theme is missing or a value cannot
            be written.
    """
    ordered = ordered_graphs(graphs)
    if not ordered or not ordered[0].is_base:
        raise SerializationError("SCSS output requires the base (default) theme", fmt=FORMAT)

    base, named = ordered[0], ordered[1:]
    lines: list[str] = [f"// {GENERATED_NOTICE}", ""]

    names = identifiers(base, FORMAT, prefix)
    for entry in base.entries:
        ident = names[entry.name]
        if ident[0].isdigit():
            raise SerializationError(
                f"SCSS variable '${ident}' cannot start with a digit", token=entry.name, fmt=FORMAT
            )
        value = check_verbatim_value(entry, FORMAT, line_comments=True, flags=True)
        lines.append(f"${ident}: {value};")

    if named and not include_themes:
        lines.append("")
        lines.append(f"// Named themes not emitted: {', '.join(g.theme for g in named)}")
    elif named:
        for graph in named:
            theme_names = identifiers(graph, FORMAT, prefix)
            lines.append("")
            lines.append(f"// Theme {graph.theme!r}: {THEME_LIMITATION}")
            lines.append(f"// ${prefix}theme-{_map_suffix(graph.theme)}: (")
            for entry in graph.entries:
                value = check_verbatim_value(entry, FORMAT, line_comments=True, flags=True)
                lines.append(f"//   {theme_names[entry.name]}: {value},")
            lines.append("// );")

    return "\n".join(lines) + "\n"


def _map_suffix(theme: str) -> str:
    if "\n" in theme or "\r" in theme:
        raise SerializationError(f"Theme name {theme!r} contains a line break", fmt=FORMAT)
    return "".join(char if char.isalnum() or char in "-_" else "-" for char in theme)
