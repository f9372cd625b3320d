"""Package name/version lookup for ``--version``."""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

from helmsman.errors import VersionLookupError


def package_version(local_dir: Path, package_name: str | None = None) -> tuple[str, str]:
    """Return (name, version).

    With *package_name*, ask the installed distribution. Otherwise read
    ``pyproject.toml`` one level above *local_dir* (the usual ``bin/`` layout).
    """
    if package_name:
        try:
            return package_name, metadata.version(package_name)
        except metadata.PackageNotFoundError as e:
            raise VersionLookupError(f"package {package_name!r} is not installed") from e

    pyproject = local_dir.parent / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise VersionLookupError(f"no package metadata found at {pyproject}") from e
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise VersionLookupError(f"could not read {pyproject}: {e}") from e

    project = data.get("project", {})
    name = project.get("name", "")
    version = project.get("version", "")
    if not name or not version:
        raise VersionLookupError(f"{pyproject} has no [project] name and version")
    return name, version
