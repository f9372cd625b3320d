"""Prefix normalization, command name derivation, PATH splitting, flag checks."""

from __future__ import annotations

import os
import sys
from pathlib import Path

PREFIX_SEPARATOR = "-"


def normalize_prefix(prefix: str) -> str:
    """Append the separator unless *prefix* already ends with it ('git' -> 'git-')."""
    if not prefix.endswith(PREFIX_SEPARATOR):
        prefix += PREFIX_SEPARATOR
    return prefix


def split_command_name(filename: str, prefix: str) -> tuple[str, str]:
    """Return (name, extension) for *filename*, e.g. 'git-status.py' -> ('status', '.py').

    *prefix* must already be normalized. Only the last extension is stripped.
    """
    rest = filename[len(prefix) :] if filename.startswith(prefix) else filename
    stem, dot, ext = rest.rpartition(".")
    if not dot or not stem:
        return rest, ""
    return stem, f".{ext}"


def is_flag(arg: str) -> bool:
    return arg.startswith("-")


def path_dirs(env_path: str | None = None) -> list[Path]:
    """Split $PATH (or *env_path*) into directories, dropping empty and duplicate entries."""
    raw = os.environ.get("PATH", "") if env_path is None else env_path
    dirs: list[Path] = []
    for entry in raw.split(os.pathsep):
        if not entry:
            continue
        p = Path(entry)
        if p not in dirs:
            dirs.append(p)
    return dirs


def invoking_script() -> Path:
    """Path of the script the user ran (``sys.argv[0]``), resolved."""
    return Path(sys.argv[0] or ".").resolve()


def main_module_file() -> Path | None:
    """File of the ``__main__`` module, when there is one."""
    main = sys.modules.get("__main__")
    f = getattr(main, "__file__", None)
    return Path(f).resolve() if f else None


def infer_prefix(script: Path, main_file: Path | None = None) -> str:
    """Guess the command prefix from the invoked script's name.

    When the invoked executable is not the root command (a secondary entry
    point), the root command's file name is used instead. A trailing ``.py``
    is dropped so ``tool.py`` discovers ``tool-*`` files.
    """
    name = script.name
    if main_file is not None and main_file.name != name:
        name = main_file.name
    if name.endswith(".py"):
        name = name[: -len(".py")]
    return name
