"""Helmsman: top-level triage, resolution, implicit help, and subcommand execution."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Sequence

from rich.console import Console
from rich.traceback import Traceback

from helmsman.commands import (
    HELP_COMMAND,
    CommandTable,
    Lister,
    MetadataStrategy,
    Resolution,
    discover,
    list_candidates,
    load_command_metadata,
    resolve,
)
from helmsman.core.config import Config, load_config
from helmsman.core.utils import is_flag
from helmsman.errors import HelmsmanError, PermissionDenied, SpawnFailure

from .runner import Runner, execute, run_process
from .version import package_version

console = Console()
err_console = Console(stderr=True)

VERSION_FLAG = "--version"
HELP_FLAG = "--help"

VersionProvider = Callable[[], tuple[str, str]]


def format_command_listing(commands: CommandTable) -> list[str]:
    """Lines of the command listing, usage column padded to the widest entry."""
    width = commands.usage_width
    lines = ["", "Commands:", ""]
    for record in commands.values():
        lines.append(f"   {record.usage.ljust(width)}     {record.description}")
    return lines


class Helmsman:
    """Discover ``<prefix>-<name>`` commands and dispatch to them.

    The command table is built once, here; ``parse`` never rescans.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        strategy: MetadataStrategy | None = load_command_metadata,
        lister: Lister = list_candidates,
        runner: Runner = run_process,
        version_provider: VersionProvider | None = None,
        platform: str | None = None,
        out: Console | None = None,
        err: Console | None = None,
    ):
        self.config = config or load_config()
        self.prefix = self.config.command_prefix
        self.local_dir = self.config.local_dir
        self.runner = runner
        self.platform = platform
        self.console = out or console
        self.err_console = err or err_console
        self._version_provider = version_provider
        self._help_observers: list[Callable[[], None]] = []

        self.commands: CommandTable = discover(
            self.config.search_locations,
            self.prefix,
            strategy=strategy,
            overrides=self.config.metadata,
            ignore_metadata_errors=self.config.ignore_metadata_errors,
            lister=lister,
            verbose=self.config.verbose,
            err=self.err_console,
        )

    # ── Observers ───────────────────────────────────────────────────

    def on_help(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register *callback* to run right before the command listing is shown."""
        self._help_observers.append(callback)
        return callback

    def _emit_help(self) -> None:
        for callback in self._help_observers:
            callback()

    # ── Resolution ──────────────────────────────────────────────────

    def get_command(self, token: str, candidates: Iterable[str] | None = None) -> Resolution:
        """Resolve *token* against *candidates* (default: every known command)."""
        return resolve(token, self.commands if candidates is None else candidates)

    # ── Output ──────────────────────────────────────────────────────

    def show_help(self) -> None:
        for line in format_command_listing(self.commands):
            self.console.out(line, highlight=False)

    def _trace(self, msg: str) -> None:
        if self.config.verbose:
            self.err_console.print(msg, style="dim", markup=False, highlight=False)

    def _error(self, msg: str) -> None:
        self.err_console.print(msg, style="red", markup=False, highlight=False)

    # ── State machine ───────────────────────────────────────────────

    def parse(self, args: Sequence[str]) -> int:
        """Handle one invocation. *args* excludes the program name. Returns the exit code."""
        args = list(args)

        if args and args[0] == VERSION_FLAG:
            return self._print_version()

        if not args or is_flag(args[0]) or (args[0] == HELP_COMMAND.name and len(args) == 1):
            return self._listing()

        token, rest = args[0], args[1:]
        resolution = self.get_command(token)
        if not resolution.ok:
            return self._resolution_failed(resolution)
        name = resolution.name
        self._trace(f"resolved {token!r} -> {name}")

        if name == HELP_COMMAND.name:
            if not rest:
                return self._listing()
            # `tool help foo` runs `tool-foo --help`
            resolution = self.get_command(rest[0])
            if not resolution.ok:
                return self._resolution_failed(resolution)
            name = resolution.name
            if name == HELP_COMMAND.name:
                return self._listing()
            rest = [HELP_FLAG]

        return self._execute(name, rest)

    def run(self, argv: Sequence[str] | None = None) -> None:
        """Parse *argv* (default ``sys.argv[1:]``) and exit with the resulting code."""
        sys.exit(self.parse(sys.argv[1:] if argv is None else argv))

    def _listing(self) -> int:
        self._emit_help()
        self.show_help()
        return 0

    def _resolution_failed(self, resolution: Resolution) -> int:
        self._error(resolution.message)
        self.show_help()
        return 1

    def _print_version(self) -> int:
        try:
            if self._version_provider is not None:
                name, version = self._version_provider()
            else:
                name, version = package_version(self.local_dir, self.config.package_name)
        except HelmsmanError as e:
            self._error(e.message)
            return 1
        self.console.out(f"{name}: {version}", highlight=False)
        return 0

    def _execute(self, name: str, args: list[str]) -> int:
        record = self.commands[name]
        command = f"{self.prefix}{name}"
        self._trace(f"exec {record.path} {' '.join(args)}".rstrip())
        try:
            return execute(
                record,
                args,
                command,
                self.config.interpreter,
                runner=self.runner,
                platform=self.platform,
            )
        except PermissionDenied as e:
            self.err_console.print()
            self._error(e.message)
            self.err_console.print()
            self.err_console.print(e.hint, markup=False, highlight=False)
            return 1
        except SpawnFailure as e:
            self._error(e.message)
            cause = e.__cause__
            if cause is not None:
                self.err_console.print(
                    Traceback.from_exception(type(cause), cause, cause.__traceback__)
                )
            return 1
