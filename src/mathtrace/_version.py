"""Version lookup for the mathtrace package."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Prefer the checkout's pyproject.toml, then installed metadata."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "mathtrace" and "version" in project:
            return str(project["version"])
    try:
        return _metadata_version("mathtrace")
    except PackageNotFoundError:
        return "0.0.0"
