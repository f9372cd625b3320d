"""Commands: discovery, metadata records, and token resolution."""

from .discovery import (
    METADATA_EXTENSIONS,
    Lister,
    MetadataStrategy,
    discover,
    list_candidates,
    load_command_metadata,
)
from .models import HELP_COMMAND, CommandRecord, CommandTable
from .resolver import (
    MAX_EDIT_DISTANCE,
    Ambiguous,
    NotFound,
    Resolution,
    Resolved,
    levenshtein,
    resolve,
)

__all__ = [
    "HELP_COMMAND",
    "Lister",
    "MAX_EDIT_DISTANCE",
    "METADATA_EXTENSIONS",
    "Ambiguous",
    "CommandRecord",
    "CommandTable",
    "MetadataStrategy",
    "NotFound",
    "Resolution",
    "Resolved",
    "discover",
    "levenshtein",
    "list_candidates",
    "load_command_metadata",
    "resolve",
]
