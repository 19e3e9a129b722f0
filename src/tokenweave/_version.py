"""Package version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "tokenweave"


def get_version() -> str:
    """Installed distribution version, or the source checkout's pyproject version."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        pass

    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        with pyproject.open("rb") as f:
            return tomllib.load(f).get("project", {}).get("version", "0.0.0")
    return "0.0.0"
