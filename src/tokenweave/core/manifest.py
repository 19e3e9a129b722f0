import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_FILE = "tokenweave.toml"

KNOWN_FORMATS = ("css", "scss", "js", "json")


@dataclass
class OutputConfig:
    """Artifact output configuration."""

    dir: Path = Path("build/tokens")
    formats: list[str] = field(default_factory=lambda: list(KNOWN_FORMATS))
    basename: str = "tokens"
    prefix: str = ""  # prepended to css/scss identifiers, e.g. "dz-"
    dtcg: bool = False  # $type/$value keys in json output
    scss_include_themes: bool = True


@dataclass
class ResolveConfig:
    """Theme resolution configuration."""

    workers: int = 1  # > 1 resolves themes in a thread pool


@dataclass
class ProjectManifest:
    name: str
    root: Path
    sources: list[Path] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)
    resolve: ResolveConfig = field(default_factory=ResolveConfig)


def get_manifest_path(project_root: Path) -> Path:
    return project_root / MANIFEST_FILE


def default_manifest(project_root: Path) -> ProjectManifest:
    return ProjectManifest(
        name=project_root.resolve().name,
        root=project_root,
        output=OutputConfig(dir=project_root / "build" / "tokens"),
    )


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load tokenweave.toml.

    Relative source and output paths are resolved against the manifest's
    directory. A missing file yields the defaults.

    Raises:
        ManifestError: If the file is not valid TOML or holds invalid values.
    """
    root = path.parent
    if not path.exists():
        logger.debug(f"No {MANIFEST_FILE} at {path}, using defaults")
        return default_manifest(root)

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    tokens_data = data.get("tokens", {})
    output_data = data.get("output", {})
    resolve_data = data.get("resolve", {})

    sources = tokens_data.get("sources", [])
    if not isinstance(sources, list) or not all(isinstance(s, str) for s in sources):
        raise ManifestError(f"[tokens] sources must be a list of paths in {path}")

    formats = output_data.get("formats", list(KNOWN_FORMATS))
    if not isinstance(formats, list):
        raise ManifestError(f"[output] formats must be a list in {path}")
    unknown = [fmt for fmt in formats if fmt not in KNOWN_FORMATS]
    if unknown:
        raise ManifestError(
            f"Unknown output format(s) {', '.join(unknown)} in {path}. "
            f"Known: {', '.join(KNOWN_FORMATS)}"
        )

    workers = resolve_data.get("workers", 1)
    if not isinstance(workers, int) or workers < 1:
        raise ManifestError(f"[resolve] workers must be a positive integer in {path}")

    output = OutputConfig(
        dir=root / output_data.get("dir", "build/tokens"),
        formats=list(formats),
        basename=output_data.get("basename", "tokens"),
        prefix=output_data.get("prefix", ""),
        dtcg=bool(output_data.get("dtcg", False)),
        scss_include_themes=bool(output_data.get("scss_include_themes", True)),
    )

    return ProjectManifest(
        name=project.get("name", root.resolve().name),
        root=root,
        sources=[root / source for source in sources],
        output=output,
        resolve=ResolveConfig(workers=workers),
    )
