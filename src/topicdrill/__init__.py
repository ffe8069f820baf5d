"""topicdrill package."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["__version__"]

DISTRIBUTION_NAME = "topicdrill"


def _source_checkout_version() -> str | None:
    """Read ``[project].version`` when running from a source checkout."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.is_file():
            continue
        with pyproject.open("rb") as handle:
            project = tomllib.load(handle).get("project", {})
        if project.get("name") != DISTRIBUTION_NAME:
            continue
        value = project.get("version")
        return value if isinstance(value, str) else None
    return None


_checkout_version = _source_checkout_version()
if _checkout_version is not None:
    __version__ = _checkout_version
else:
    try:
        __version__ = version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        __version__ = "0+unknown"
