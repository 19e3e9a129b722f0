"""
tokenweave CLI package.

- build.py: artifact generation
- resolve.py: themes, resolve and inspect commands
- audit.py: usage audit
- utils.py: shared utilities
"""

from __future__ import annotations

import typer

from .audit import audit_command
from .build import build_command
from .resolve import inspect_command, resolve_command, themes_command
from .utils import configure_logging, version_callback

app = typer.Typer(
    help="""tokenweave – layered design tokens

Resolves global/semantic/component token declarations per theme and
exports them as CSS custom properties, SCSS variables, a JS module or JSON.
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """tokenweave CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="build")(build_command)
app.command(name="themes")(themes_command)
app.command(name="resolve")(resolve_command)
app.command(name="inspect")(inspect_command)
app.command(name="audit")(audit_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]
