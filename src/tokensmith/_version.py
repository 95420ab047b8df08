"""Package version lookup."""

import tomllib
from importlib import metadata
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Installed distribution version; a source checkout falls back to pyproject.toml."""
    try:
        return metadata.version("tokensmith")
    except metadata.PackageNotFoundError:
        pass
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            return tomllib.load(f)["project"]["version"]
    return "0.0.0"
