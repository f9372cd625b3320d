"""helmsman: git-style subcommand discovery and dispatch.

Example ``bin/tool``::

    #!/usr/bin/env python3
    from helmsman import helmsman

    helmsman().run()

Every ``bin/tool-<name>`` file becomes ``tool <name>``.
"""

from .commands import CommandRecord, CommandTable, discover, resolve
from .core.config import Config, load_config
from .dispatch import Helmsman
from .errors import (
    HelmsmanError,
    MetadataLoadFailure,
    PermissionDenied,
    SpawnFailure,
    VersionLookupError,
)

__version__ = "0.1.0"

_COLLABORATORS = ("strategy", "lister", "runner", "version_provider", "platform", "out", "err")


def helmsman(**options) -> Helmsman:
    """Build a Helmsman from keyword options.

    Config options (``local_dir``, ``prefix``, ``search_path``, ``metadata``,
    ``ignore_metadata_errors``, ``interpreter``, ``package_name``, ``verbose``)
    go through ``load_config``; the rest are passed to ``Helmsman``.
    """
    collaborators = {k: options.pop(k) for k in _COLLABORATORS if k in options}
    return Helmsman(load_config(**options), **collaborators)


__all__ = [
    "CommandRecord",
    "CommandTable",
    "Config",
    "Helmsman",
    "HelmsmanError",
    "MetadataLoadFailure",
    "PermissionDenied",
    "SpawnFailure",
    "VersionLookupError",
    "discover",
    "helmsman",
    "load_config",
    "resolve",
]
