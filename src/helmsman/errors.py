"""Fatal error kinds: metadata load, permission denied, spawn failure, version lookup."""

from __future__ import annotations

from pathlib import Path


class HelmsmanError(Exception):
    """Base class for fatal dispatcher errors. ``message`` is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MetadataLoadFailure(HelmsmanError):
    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        msg = f"The file ({path}) could not be loaded to read its command metadata"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PermissionDenied(HelmsmanError):
    """The subcommand exists but is not executable."""

    def __init__(self, command: str, path: Path):
        self.command = command
        self.path = path
        super().__init__(f"Could not execute the subcommand: {command}")

    @property
    def hint(self) -> str:
        return f"Consider running:\n chmod +x {self.path}"


class SpawnFailure(HelmsmanError):
    def __init__(self, command: str, path: Path, reason: str = ""):
        self.command = command
        self.path = path
        msg = f"Failed to run the subcommand: {command} ({path})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class VersionLookupError(HelmsmanError):
    pass
