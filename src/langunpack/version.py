"""Report the installed package version for the CLI and the lookup service."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

DISTRIBUTION_NAME: Final = "language-unpack"
PYPROJECT_FILE: Final = Path(__file__).resolve().parents[2] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the distribution version, reading ``pyproject.toml`` for source checkouts."""

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _version_from_pyproject(PYPROJECT_FILE)


def _version_from_pyproject(path: Path) -> str:
    if not path.is_file():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    with path.open("rb") as handle:
        document = tomllib.load(handle)

    version = document.get("project", {}).get("version")
    if not isinstance(version, str) or not version:
        raise RuntimeError(f"No [project] version declared in {path}")
    return version


__all__ = ["DISTRIBUTION_NAME", "get_project_version"]
