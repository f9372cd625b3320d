"""Run a subcommand as a child process with inherited stdio."""

from __future__ import annotations

import errno
import signal
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence

from helmsman.commands.models import CommandRecord
from helmsman.errors import PermissionDenied, SpawnFailure

# Script types the host can only run through the interpreter, keyed by platform prefix.
_INTERPRETED = {"win": frozenset({".py"})}

Runner = Callable[[Sequence[str]], int]


def needs_interpreter(extension: str, platform: str | None = None) -> bool:
    platform = platform or sys.platform
    for prefix, extensions in _INTERPRETED.items():
        if platform.startswith(prefix) and extension.lower() in extensions:
            return True
    return False


def build_invocation(
    record: CommandRecord,
    args: Sequence[str],
    interpreter: str,
    platform: str | None = None,
) -> list[str]:
    """argv for *record*: ``[path, *args]`` or ``[interpreter, path, *args]``."""
    if record.path is None:
        raise ValueError(f"command {record.name!r} has no executable")
    if needs_interpreter(record.extension, platform):
        return [interpreter, str(record.path), *args]
    return [str(record.path), *args]


def run_process(argv: Sequence[str]) -> int:
    """Run *argv* to completion. stdin/stdout/stderr are inherited, not captured.

    While the child runs, SIGINT is ignored here so Ctrl-C reaches only the
    child (same process group) and the exit code is the child's own.
    """
    proc = subprocess.Popen(list(argv))
    if threading.current_thread() is not threading.main_thread():
        code = proc.wait()
    else:
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
        try:
            code = proc.wait()
        finally:
            signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)
    if code < 0:
        # killed by a signal, report it the way shells do
        return 128 - code
    return code


def execute(
    record: CommandRecord,
    args: Sequence[str],
    command: str,
    interpreter: str,
    runner: Runner = run_process,
    platform: str | None = None,
) -> int:
    """Spawn *record* and wait for it. OS errors become PermissionDenied or SpawnFailure.

    *command* is the full command name used in messages, e.g. ``git-status``.
    """
    argv = build_invocation(record, args, interpreter, platform)
    try:
        return runner(argv)
    except PermissionError as e:
        raise PermissionDenied(command, record.path) from e
    except Exception as e:
        if isinstance(e, OSError) and e.errno == errno.EACCES:
            raise PermissionDenied(command, record.path) from e
        raise SpawnFailure(command, record.path, str(e)) from e
