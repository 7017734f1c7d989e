"""Scoring how many tracked names a short prefix could stand for."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

__all__ = [
    "alias_parts",
    "ambiguity",
    "could_be_alias_for",
]


def alias_parts(prefix: str) -> Iterator[str]:
    """Yield each run of one upper case letter followed by lower case letters.

    Characters that cannot start a run (lower case letters with no upper case
    letter before them in the run) are skipped, so ``"GoBl"`` yields ``"Go"``
    and ``"Bl"`` while ``"gob"`` yields nothing.
    """

    index = 0
    length = len(prefix)
    while index < length:
        if not prefix[index].isupper():
            index += 1
            continue
        end = index + 1
        while end < length and prefix[end].islower():
            end += 1
        yield prefix[index:end]
        index = end


def could_be_alias_for(prefix: str, name_parts: Sequence[str]) -> bool:
    """Return whether ``prefix`` could abbreviate the split canonical name.

    Run ``i`` of the prefix must begin word ``i`` of the name. A prefix with
    fewer runs than the name has words still matches.
    """

    if not prefix or not name_parts:
        return False
    part_count = len(name_parts)
    for index, run in enumerate(alias_parts(prefix)):
        if index >= part_count:
            return False
        if not name_parts[index].startswith(run):
            return False
    return True


def ambiguity(prefix: str, tracked_names: Iterable[Sequence[str]]) -> int:
    """Count the tracked split names that ``prefix`` could stand for."""

    return sum(1 for name_parts in tracked_names if could_be_alias_for(prefix, name_parts))
