"""
tokenweave CLI utilities.

Shared helpers used across CLI modules: version display, logging setup,
and loading a token store from a manifest or explicit source files.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console

from tokenweave._version import get_version
from tokenweave.core.loader import load_declarations
from tokenweave.core.manifest import ProjectManifest, load_manifest
from tokenweave.core.store import TokenStore

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tokenweave {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def load_project(manifest: str, sources: list[Path] | None) -> tuple[ProjectManifest, TokenStore]:
    """
    Load the manifest and the token store it describes.

    Explicit --source files replace the manifest's [tokens] sources.
    """
    project = load_manifest(Path(manifest).resolve())
    if sources:
        project.sources = [source.resolve() for source in sources]
    if not project.sources:
        err_console.print(
            "No declaration sources. Pass --source or set [tokens] sources in tokenweave.toml",
            style="red",
            markup=False,
        )
        raise typer.Exit(code=1)
    return project, load_declarations(project.sources)


def fail(error: Exception) -> typer.Exit:
    """Print an error and return the Exit to raise."""
    err_console.print(f"Error: {error}", style="red", markup=False, highlight=False)
    return typer.Exit(code=1)
