"""
Resolution commands for tokenweave CLI.

- themes:  list the base theme and every named theme
- resolve: show every resolved value for one theme
- inspect: show how a single token resolves (alias chain, overrides)
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from tokenweave.core.errors import TokenweaveError
from tokenweave.core.ir import BASE_THEME
from tokenweave.core.themes import ThemeEngine

from .utils import console, err_console, fail, load_project

_MANIFEST_OPTION = typer.Option(
    "tokenweave.toml", "--manifest", "-m", help="Path to tokenweave.toml"
)
_SOURCE_OPTION = typer.Option(
    None, "--source", "-s", help="Declaration file (repeatable, replaces manifest sources)"
)


def themes_command(
    manifest: str = _MANIFEST_OPTION,
    source: list[Path] | None = _SOURCE_OPTION,
) -> None:
    """List available themes."""
    try:
        _, store = load_project(manifest, source)
    except TokenweaveError as e:
        raise fail(e)

    engine = ThemeEngine(store)
    for theme in engine.themes():
        overrides = len(store.overrides_for(theme)) if theme != BASE_THEME else 0
        suffix = " (base)" if theme == BASE_THEME else f" ({overrides} overrides)"
        typer.echo(f"{theme}{suffix}")


def resolve_command(
    theme: str = typer.Argument(BASE_THEME, help="Theme to resolve"),
    manifest: str = _MANIFEST_OPTION,
    source: list[Path] | None = _SOURCE_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print name -> value JSON"),
) -> None:
    """Resolve one theme and print every token value."""
    try:
        _, store = load_project(manifest, source)
        graph = ThemeEngine(store).resolve(theme)
    except TokenweaveError as e:
        raise fail(e)

    if as_json:
        typer.echo(json.dumps(graph.as_dict(), indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Theme: {graph.theme}")
    table.add_column("Token", style="cyan")
    table.add_column("Category")
    table.add_column("Layer")
    table.add_column("Value", style="green")
    for entry in graph.entries:
        table.add_row(entry.name, entry.category.value, entry.layer.value, entry.text)
    console.print(table)


def inspect_command(
    name: str = typer.Argument(..., help="Token name"),
    theme: str = typer.Option(BASE_THEME, "--theme", "-t", help="Theme to resolve in"),
    manifest: str = _MANIFEST_OPTION,
    source: list[Path] | None = _SOURCE_OPTION,
) -> None:
    """Show the alias chain and resolved value of one token."""
    try:
        _, store = load_project(manifest, source)
        token = store.get(name)
        if token is None:
            err_console.print(f"Unknown token: {name}", style="red", markup=False)
            raise typer.Exit(code=1)
        trace = ThemeEngine(store).inspect(name, theme)
    except TokenweaveError as e:
        raise fail(e)

    typer.echo(f"{token.name} ({token.layer.value} {token.category.value})")
    if token.description:
        typer.echo(f"  {token.description}")
    typer.echo(f"  theme: {trace.theme}")
    typer.echo(f"  chain: {' -> '.join(trace.chain)}")
    if trace.overridden:
        typer.echo(f"  overridden by theme: {', '.join(trace.overridden)}")
    typer.echo(f"  value: {trace.value}")
