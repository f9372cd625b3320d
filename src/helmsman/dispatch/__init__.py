"""Dispatch: the Helmsman state machine and the child-process runner."""

from .dispatcher import HELP_FLAG, VERSION_FLAG, Helmsman, format_command_listing
from .runner import build_invocation, execute, needs_interpreter, run_process
from .version import package_version

__all__ = [
    "HELP_FLAG",
    "VERSION_FLAG",
    "Helmsman",
    "build_invocation",
    "execute",
    "format_command_listing",
    "needs_interpreter",
    "package_version",
    "run_process",
]
