"""Resolve a typed token to a command name: exact, unique prefix, then Levenshtein <= 2."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

MAX_EDIT_DISTANCE = 2


@dataclass(frozen=True)
class Resolved:
    name: str
    ok: bool = True


@dataclass(frozen=True)
class Ambiguous:
    token: str
    candidates: tuple[str, ...]
    ok: bool = False

    @property
    def message(self) -> str:
        return (
            f'There are {len(self.candidates)} potential options for "{self.token}": '
            + ", ".join(self.candidates)
        )


@dataclass(frozen=True)
class NotFound:
    token: str
    ok: bool = False

    @property
    def message(self) -> str:
        return f'There are no commands by the name of "{self.token}"'


Resolution = Resolved | Ambiguous | NotFound


def levenshtein(s1: str, s2: str) -> int:
    """Edit distance with unit-cost insertions, deletions and substitutions."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    prev_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        curr_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = prev_row[j + 1] + 1
            deletions = curr_row[j] + 1
            substitutions = prev_row[j] + (c1 != c2)
            curr_row.append(min(insertions, deletions, substitutions))
        prev_row = curr_row
    return prev_row[-1]


def _one_or_more(
    token: str, candidates: list[str], predicate: Callable[[str], bool]
) -> Resolution | None:
    matches = tuple(c for c in candidates if predicate(c))
    if len(matches) == 1:
        return Resolved(matches[0])
    if matches:
        return Ambiguous(token, matches)
    return None


def resolve(token: str, candidates: Iterable[str]) -> Resolution:
    """Match *token* against *candidates*.

    Tiers, first hit wins:
      * exact match (``status`` -> status)
      * unique prefix (``st`` -> status)
      * edit distance <= 2 (``sratus`` -> status)

    Several hits within one tier give ``Ambiguous``; no hit gives ``NotFound``.
    """
    names = list(candidates)

    if token in names:
        return Resolved(token)

    by_prefix = _one_or_more(token, names, lambda c: c.startswith(token))
    if by_prefix is not None:
        return by_prefix

    similar = _one_or_more(token, names, lambda c: levenshtein(token, c) <= MAX_EDIT_DISTANCE)
    if similar is not None:
        return similar

    return NotFound(token)
