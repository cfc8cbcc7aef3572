"""Version lookup for tokensmith."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

PACKAGE_NAME = "tokensmith"
FALLBACK_VERSION = "0.0.0"

_SOURCE_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_checkout_version(pyproject: Path) -> str | None:
    """Version from a source checkout's pyproject, if it declares this package."""
    if not pyproject.is_file():
        return None
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except tomllib.TOMLDecodeError:
        return None
    if project.get("name") != PACKAGE_NAME:
        return None
    return project.get("version")


def get_version(pyproject: Path = _SOURCE_PYPROJECT) -> str:
    """Version of the running code: the checkout's pyproject, else installed metadata."""
    if found := _source_checkout_version(pyproject):
        return found
    try:
        return _metadata_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION
