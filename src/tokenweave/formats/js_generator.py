"""
JavaScript module generator for tokenweave.

Emits an ES module exporting one nested object per theme:
theme -> category -> token name -> literal.
"""

from __future__ import annotations

import json
import re

from tokenweave.core.ir import LiteralValue

from ._shared import GENERATED_NOTICE, Graphs, ordered_graphs

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def js_key(key: str) -> str:
    """Object key, quoted unless it is a plain identifier."""
    if key == "__proto__":
        # a literal __proto__ key sets the prototype instead of a property
        return '["__proto__"]'
    if _JS_IDENTIFIER.match(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def js_literal(value: LiteralValue) -> str:
    return json.dumps(value, ensure_ascii=False, allow_nan=False)


def generate_js(graphs: Graphs, *, export_name: str = "tokens") -> str:
    """
    Generate an ES module from resolved graphs.

    Example output:
        export const tokens = {
          default: {
            color: {
              colorPrimary: "#3b82f6",
            },
          },
        };

        export default tokens;
    """
    if not _JS_IDENTIFIER.match(export_name):
        raise ValueError(f"Invalid export name: {export_name!r}")

    lines: list[str] = [f"// {GENERATED_NOTICE}", "", f"export const {export_name} = {{"]
    for graph in ordered_graphs(graphs):
        lines.append(f"  {js_key(graph.theme)}: {{")
        for category, entries in graph.by_category().items():
            lines.append(f"    {js_key(category.value)}: {{")
            for entry in entries:
                lines.append(f"      {js_key(entry.name)}: {js_literal(entry.value)},")
            lines.append("    },")
        lines.append("  },")
    lines.append("};")
    lines.append("")
    lines.append(f"export default {export_name};")
    return "\n".join(lines) + "\n"
