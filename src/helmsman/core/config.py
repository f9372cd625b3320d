"""Configuration: env, settings file, search locations, prefix."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .utils import infer_prefix, invoking_script, main_module_file, normalize_prefix, path_dirs

SETTINGS_FILE = "helmsman.json"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class Config:
    local_dir: Path = field(default_factory=lambda: invoking_script().parent)
    prefix: str = ""  # empty = infer from the invoking script
    search_path: bool = False
    metadata: dict[str, dict] = field(default_factory=dict)
    ignore_metadata_errors: bool = True
    interpreter: str = field(default_factory=lambda: sys.executable or "python3")
    package_name: str | None = None
    verbose: bool = False

    def __post_init__(self) -> None:
        self.local_dir = Path(self.local_dir).resolve()

    @property
    def command_prefix(self) -> str:
        """The normalized prefix, e.g. 'git-'."""
        return normalize_prefix(self.prefix or infer_prefix(invoking_script(), main_module_file()))

    @property
    def search_locations(self) -> list[Path]:
        """Directories to scan, in order. Later locations win, so local_dir comes last."""
        if not self.search_path:
            return [self.local_dir]
        dirs = [d for d in path_dirs() if d.resolve() != self.local_dir]
        dirs.append(self.local_dir)
        return dirs


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single helmsman.json file to config."""
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return
    if not isinstance(data, dict):
        return

    if prefix := data.get("prefix"):
        config.prefix = str(prefix)
    if "searchPath" in data:
        config.search_path = _as_bool(data["searchPath"])
    if "ignoreMetadataErrors" in data:
        config.ignore_metadata_errors = _as_bool(data["ignoreMetadataErrors"])
    if interpreter := data.get("interpreter"):
        config.interpreter = str(interpreter)
    if package := data.get("packageName"):
        config.package_name = str(package)
    if isinstance(data.get("metadata"), dict):
        for name, meta in data["metadata"].items():
            if isinstance(meta, dict):
                config.metadata[name] = dict(meta)


def _apply_env(config: Config) -> None:
    if prefix := os.getenv("HELMSMAN_PREFIX"):
        config.prefix = prefix
    if (search := os.getenv("HELMSMAN_SEARCH_PATH")) is not None:
        config.search_path = _as_bool(search)
    if (ignore := os.getenv("HELMSMAN_IGNORE_METADATA_ERRORS")) is not None:
        config.ignore_metadata_errors = _as_bool(ignore)
    if interpreter := os.getenv("HELMSMAN_INTERPRETER"):
        config.interpreter = interpreter
    if package := os.getenv("HELMSMAN_PACKAGE"):
        config.package_name = package
    if (verbose := os.getenv("HELMSMAN_VERBOSE")) is not None:
        config.verbose = _as_bool(verbose)


def load_config(
    local_dir: str | Path | None = None,
    prefix: str | None = None,
    search_path: bool | None = None,
    metadata: dict[str, dict] | None = None,
    ignore_metadata_errors: bool | None = None,
    interpreter: str | None = None,
    package_name: str | None = None,
    verbose: bool | None = None,
) -> Config:
    """Load config with priority: args > env > .env > helmsman.json > defaults."""
    load_dotenv()

    if local_dir is None and (env_dir := os.getenv("HELMSMAN_LOCAL_DIR")):
        local_dir = env_dir
    config = Config(local_dir=Path(local_dir)) if local_dir is not None else Config()

    _apply_settings(config, config.local_dir / SETTINGS_FILE)
    _apply_env(config)

    if prefix:
        config.prefix = prefix
    if search_path is not None:
        config.search_path = search_path
    if metadata:
        config.metadata.update(metadata)
    if ignore_metadata_errors is not None:
        config.ignore_metadata_errors = ignore_metadata_errors
    if interpreter:
        config.interpreter = interpreter
    if package_name:
        config.package_name = package_name
    if verbose is not None:
        config.verbose = verbose

    return config
