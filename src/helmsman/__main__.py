"""CLI entry point: run a Helmsman dispatcher from the command line."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from .core.config import load_config
from .dispatch import Helmsman
from .errors import HelmsmanError

err_console = Console(stderr=True)


# Options end at the first positional; `--help` and `--version` go to the dispatcher.
@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": [],
    }
)
@click.option("--prefix", "-p", default=None, help="Subcommand file prefix (e.g. git)")
@click.option(
    "--local-dir",
    "-d",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory holding the subcommands",
)
@click.option("--search-path", is_flag=True, help="Also search every $PATH directory")
@click.option(
    "--strict-metadata", is_flag=True, default=False, help="Fail when a command cannot be loaded"
)
@click.option("--interpreter", default=None, help="Interpreter for scripts the OS cannot run")
@click.option("--package", "package_name", default=None, help="Package whose version to print")
@click.option("--verbose", "-v", is_flag=True, help="Trace discovery and dispatch")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def _click_main(
    prefix: str | None,
    local_dir: str | None,
    search_path: bool,
    strict_metadata: bool,
    interpreter: str | None,
    package_name: str | None,
    verbose: bool,
    args: tuple[str, ...],
):
    """Dispatch to <prefix>-<command> executables."""
    config = load_config(
        local_dir=local_dir,
        prefix=prefix,
        search_path=search_path or None,
        ignore_metadata_errors=False if strict_metadata else None,
        interpreter=interpreter,
        package_name=package_name,
        verbose=verbose or None,
    )
    try:
        cli = Helmsman(config)
    except HelmsmanError as e:
        err_console.print(e.message, style="bold red", markup=False, highlight=False)
        if config.verbose:
            err_console.print_exception()
        sys.exit(1)

    sys.exit(cli.parse(args))


def main():
    _click_main()


if __name__ == "__main__":
    main()
