"""
Build pipeline: declarations -> resolved themes -> artifacts on disk.

A theme that fails to resolve aborts the build before anything is
written, since every artifact would otherwise be missing that theme. A
format that fails to serialize is reported and skipped; the remaining
formats are still written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tokenweave.core.errors import ResolutionError, SerializationError
from tokenweave.core.ir import ResolvedGraph
from tokenweave.core.loader import load_declarations
from tokenweave.core.manifest import OutputConfig, ProjectManifest
from tokenweave.core.store import TokenStore
from tokenweave.core.themes import ThemeEngine
from tokenweave.formats import OutputFormat, file_extension, serialize

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of rendering (and optionally writing) artifacts."""

    artifacts: dict[str, str] = field(default_factory=dict)
    written: list[Path] = field(default_factory=list)
    theme_errors: dict[str, ResolutionError] = field(default_factory=dict)
    format_errors: dict[str, SerializationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.theme_errors and not self.format_errors


def format_options(fmt: str, output: OutputConfig) -> dict[str, object]:
    """Serializer keyword options for one format, taken from the output config."""
    if fmt == OutputFormat.CSS:
        return {"prefix": output.prefix}
    if fmt == OutputFormat.SCSS:
        return {"prefix": output.prefix, "include_themes": output.scss_include_themes}
    if fmt == OutputFormat.JSON:
        return {"dtcg": output.dtcg}
    return {}


def render_artifacts(
    graphs: dict[str, ResolvedGraph],
    formats: list[str],
    output: OutputConfig,
) -> BuildResult:
    """Serialize graphs to every requested format, collecting per-format failures."""
    result = BuildResult()
    for fmt in formats:
        try:
            result.artifacts[fmt] = serialize(graphs, fmt, **format_options(fmt, output))
        except SerializationError as e:
            logger.error(f"Failed to serialize {fmt}: {e}")
            result.format_errors[fmt] = e
    return result


def write_artifacts(result: BuildResult, out_dir: Path, basename: str) -> list[Path]:
    """Write rendered artifacts as <out_dir>/<basename><ext>."""
    out_dir.mkdir(parents=True, exist_ok=True)
    for fmt, text in result.artifacts.items():
        path = out_dir / f"{basename}{file_extension(fmt)}"
        path.write_text(text, encoding="utf-8")
        result.written.append(path)
        logger.info(f"Wrote {path}")
    return result.written


def build(
    store: TokenStore,
    output: OutputConfig,
    *,
    formats: list[str] | None = None,
    out_dir: Path | None = None,
    workers: int = 1,
    write: bool = True,
) -> BuildResult:
    """
    Resolve every theme in the store and produce artifacts.

    Args:
        store: Populated token store.
        output: Output configuration (formats, prefix, basename, ...).
        formats: Override the configured formats.
        out_dir: Override the configured output directory.
        workers: Thread pool size for theme resolution.
        write: Write artifacts to disk (False renders only).
    """
    engine = ThemeEngine(store)
    resolution = engine.resolve_each(max_workers=workers)
    if not resolution.ok:
        return BuildResult(theme_errors=dict(resolution.errors))

    result = render_artifacts(resolution.graphs, formats or output.formats, output)
    if write:
        write_artifacts(result, out_dir or output.dir, output.basename)
    return result


def build_project(
    manifest: ProjectManifest,
    *,
    formats: list[str] | None = None,
    out_dir: Path | None = None,
    write: bool = True,
) -> BuildResult:
    """Load the manifest's declaration sources and build them."""
    store = load_declarations(manifest.sources)
    return build(
        store,
        manifest.output,
        formats=formats,
        out_dir=out_dir,
        workers=manifest.resolve.workers,
        write=write,
    )
