"""
Build command: resolve all themes and write one artifact per format.
"""

from __future__ import annotations

from pathlib import Path

import typer

from tokenweave.core.errors import TokenweaveError
from tokenweave.formats import available_formats
from tokenweave.pipeline import build

from .utils import console, err_console, fail, load_project


def build_command(
    manifest: str = typer.Option(
        "tokenweave.toml", "--manifest", "-m", help="Path to tokenweave.toml"
    ),
    source: list[Path] | None = typer.Option(
        None, "--source", "-s", help="Declaration file (repeatable, replaces manifest sources)"
    ),
    format: list[str] | None = typer.Option(
        None, "--format", "-f", help=f"Output format (repeatable): {', '.join(available_formats())}"
    ),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output directory"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render without writing files"),
) -> None:
    """Resolve every theme and write css/scss/js/json artifacts."""
    unknown = [fmt for fmt in (format or []) if fmt not in available_formats()]
    if unknown:
        err_console.print(f"Unknown format(s): {', '.join(unknown)}", style="red", markup=False)
        raise typer.Exit(code=1)

    try:
        project, store = load_project(manifest, source)
        result = build(
            store,
            project.output,
            formats=format or None,
            out_dir=out,
            workers=project.resolve.workers,
            write=not dry_run,
        )
    except TokenweaveError as e:
        raise fail(e)

    for theme, error in result.theme_errors.items():
        err_console.print(
            f"Theme {theme}: {error.message}", style="red", markup=False, highlight=False
        )
    for fmt, error in result.format_errors.items():
        err_console.print(f"Format {fmt}: {error}", style="red", markup=False, highlight=False)

    if dry_run:
        for fmt, text in result.artifacts.items():
            console.rule(fmt)
            typer.echo(text, nl=False)
    else:
        for path in result.written:
            console.print(f"✓ {path}", style="green", markup=False, highlight=False)

    if not result.ok:
        raise typer.Exit(code=1)
