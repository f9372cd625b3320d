"""Command data models: CommandRecord, CommandTable, HELP_COMMAND."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

# Keys accepted in a partial record, mapped to CommandRecord fields.
PARTIAL_KEYS = {
    "description": "description",
    "arguments": "arguments",
    "argumentsHint": "arguments",
    "arguments_hint": "arguments",
}


@dataclass(frozen=True)
class CommandRecord:
    """One discovered subcommand."""

    name: str
    path: Path | None = None
    description: str = ""
    arguments: str = ""  # usage fragment shown after the name, e.g. "<sub-command>"
    extension: str = ""

    @property
    def usage(self) -> str:
        return f"{self.name} {self.arguments}" if self.arguments else self.name

    def merged(self, partial: Mapping[str, Any] | CommandRecord | None) -> CommandRecord:
        """Return a copy with the fields of *partial* laid over this record."""
        if partial is None:
            return self
        if isinstance(partial, CommandRecord):
            partial = {"description": partial.description, "arguments": partial.arguments}
        changes: dict[str, str] = {}
        for key, value in partial.items():
            target = PARTIAL_KEYS.get(key)
            if target and value is not None:
                changes[target] = str(value)
        return replace(self, **changes) if changes else self


HELP_COMMAND = CommandRecord(
    name="help",
    arguments="<sub-command>",
    description="Show the --help for a specific command",
)


class CommandTable(Mapping[str, CommandRecord]):
    """Read-only name -> CommandRecord mapping, in discovery order."""

    def __init__(self, records: Iterable[CommandRecord] = ()):
        self._records: dict[str, CommandRecord] = {}
        for record in records:
            self._records[record.name] = record

    def __getitem__(self, name: str) -> CommandRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommandTable):
            return list(self._records.items()) == list(other._records.items())
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CommandTable({list(self._records)!r})"

    @property
    def names(self) -> list[str]:
        return list(self._records)

    @property
    def usage_width(self) -> int:
        """Length of the longest ``usage`` string, for aligning the listing."""
        return max((len(r.usage) for r in self._records.values()), default=0)
