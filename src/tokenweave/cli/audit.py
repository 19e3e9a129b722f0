"""
Audit command: compare resolved tokens against observed usage.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from tokenweave.core.audit import audit
from tokenweave.core.errors import TokenweaveError
from tokenweave.core.ir import BASE_THEME
from tokenweave.core.loader import load_usage
from tokenweave.core.themes import ThemeEngine

from .utils import console, fail, load_project


def audit_command(
    usage: Path = typer.Argument(..., help="YAML/JSON file with observed 'names' and 'values'"),
    theme: str = typer.Option(BASE_THEME, "--theme", "-t", help="Theme to audit"),
    manifest: str = typer.Option(
        "tokenweave.toml", "--manifest", "-m", help="Path to tokenweave.toml"
    ),
    source: list[Path] | None = typer.Option(
        None, "--source", "-s", help="Declaration file (repeatable, replaces manifest sources)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 when the report is not clean"),
) -> None:
    """Report unused tokens and hard-coded values that match a token."""
    try:
        _, store = load_project(manifest, source)
        graph = ThemeEngine(store).resolve(theme)
        observed = load_usage(usage)
    except TokenweaveError as e:
        raise fail(e)

    report = audit(graph, observed.names, observed.values)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        console.print(f"Audit ({report.theme})", style="bold", markup=False)
        console.print(f"Unused tokens: {len(report.unused)}")
        for name in report.unused:
            console.print(f"  - {name}", highlight=False, markup=False)
        console.print(f"Hard-coded candidates: {len(report.hardcoded_candidates)}")
        for candidate in report.hardcoded_candidates:
            also = f" (also {', '.join(candidate.alternatives)})" if candidate.alternatives else ""
            console.print(
                f"  - {candidate.value} -> {candidate.matching_token}{also}",
                highlight=False,
                markup=False,
            )
        if report.unknown_usages:
            console.print(f"[yellow]Unknown token names: {len(report.unknown_usages)}[/yellow]")
            for name in report.unknown_usages:
                console.print(f"  - {name}", highlight=False, markup=False)

    if strict and not report.is_clean:
        raise typer.Exit(code=1)
