"""Command discovery: scan search locations for <prefix>-<name> files and build a CommandTable."""

from __future__ import annotations

import importlib.machinery
import importlib.util
import sys
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from rich.console import Console

from helmsman.core.utils import normalize_prefix, split_command_name
from helmsman.errors import MetadataLoadFailure

from .models import HELP_COMMAND, CommandRecord, CommandTable

# Extensions whose files may be loaded to read their `command` metadata.
METADATA_EXTENSIONS = frozenset({"", ".py"})

err_console = Console(stderr=True)


class MetadataStrategy(Protocol):
    def __call__(
        self, record: CommandRecord, path: Path, extension: str
    ) -> Mapping[str, Any] | CommandRecord | None: ...


Lister = Callable[[Path, str], Iterable[Path]]


def list_candidates(directory: Path, prefix: str) -> list[Path]:
    """Regular files in *directory* whose name starts with *prefix*, sorted by name."""
    if not directory.is_dir():
        return []
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []
    return sorted(
        (f for f in entries if f.name.startswith(prefix) and f.is_file()),
        key=lambda f: f.name,
    )


def load_command_metadata(record: CommandRecord, path: Path, extension: str) -> dict[str, Any]:
    """Load *path* as Python source and read its module-level ``command``.

    The module runs under a private name, so a script's
    ``if __name__ == "__main__":`` block is not executed.
    """
    module_name = f"_helmsman_command_{record.name.replace('-', '_')}"
    loader = importlib.machinery.SourceFileLoader(module_name, str(path))
    spec = importlib.util.spec_from_loader(module_name, loader)
    if spec is None:
        raise ImportError(f"cannot load {path}")
    module = importlib.util.module_from_spec(spec)
    # Registered while executing so dataclasses and friends can find the module.
    sys.modules[module_name] = module
    try:
        # Compiled directly so no __pycache__ lands next to the commands.
        code = loader.source_to_code(loader.get_data(str(path)), str(path))
        exec(code, module.__dict__)
    except SystemExit as e:
        # unguarded sys.exit() or an argparse usage error
        raise ImportError(f"{path.name} exited with status {e.code} while loading") from e
    finally:
        sys.modules.pop(module_name, None)

    command = getattr(module, "command", None)
    if command is None:
        return {}
    if isinstance(command, Mapping):
        return dict(command)
    return {
        key: getattr(command, key)
        for key in ("description", "arguments", "arguments_hint")
        if getattr(command, key, None) is not None
    }


def _build_record(
    path: Path,
    name: str,
    extension: str,
    strategy: MetadataStrategy | None,
    overrides: Mapping[str, Mapping[str, Any]],
    ignore_metadata_errors: bool,
    verbose: bool,
    err: Console,
) -> CommandRecord:
    record = CommandRecord(name=name, path=path.resolve(), extension=extension)

    if name in overrides:
        return record.merged(overrides[name])

    if extension not in METADATA_EXTENSIONS or strategy is None:
        return record

    try:
        partial = strategy(record, record.path, extension)
    except (Exception, SystemExit) as e:
        if not ignore_metadata_errors:
            raise MetadataLoadFailure(record.path, str(e)) from e
        if verbose:
            err.print(f"skipping metadata for {path.name}: {e}", style="dim", markup=False)
        return record
    return record.merged(partial)


def discover(
    search_locations: Iterable[Path],
    prefix: str,
    strategy: MetadataStrategy | None = load_command_metadata,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ignore_metadata_errors: bool = True,
    lister: Lister = list_candidates,
    verbose: bool = False,
    err: Console | None = None,
) -> CommandTable:
    """Scan *search_locations* in order and return the command table.

    A name found in a later location replaces the earlier record. Overrides win
    over extracted metadata, which wins over the bare defaults. The synthetic
    ``help`` command is always added last. Verbose traces go to *err*
    (default: stderr).
    """
    err = err or err_console
    prefix = normalize_prefix(prefix)
    overrides = overrides or {}
    records: dict[str, CommandRecord] = {}

    for location in search_locations:
        for path in lister(Path(location), prefix):
            name, extension = split_command_name(path.name, prefix)
            if not name:
                continue
            records[name] = _build_record(
                path, name, extension, strategy, overrides, ignore_metadata_errors, verbose, err
            )
            if verbose:
                err.print(f"found {name} -> {path}", style="dim", markup=False)

    records.pop(HELP_COMMAND.name, None)
    records[HELP_COMMAND.name] = HELP_COMMAND
    return CommandTable(records.values())
