"""Disambiguation numbers handed out under a shared prefix."""

from __future__ import annotations

from typing import Iterator, Mapping

__all__ = ["NumbersInUse", "smallest_free_number"]


class NumbersInUse:
    """Numbers allocated under one prefix, plus their running maximum."""

    __slots__ = ("_numbers", "max_value")

    def __init__(self, number: int) -> None:
        self._numbers = {number}
        self.max_value = number

    def add(self, number: int) -> None:
        self._numbers.add(number)
        if number > self.max_value:
            self.max_value = number

    def __contains__(self, number: object) -> bool:
        return number in self._numbers

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._numbers))


def smallest_free_number(
    prefix: str,
    numbers_in_use: Mapping[str, NumbersInUse],
    force_non_zero: bool,
) -> int:
    """Return the lowest number not yet used with ``prefix``.

    With ``force_non_zero`` the search starts at 1, so the alias always
    shows a number.
    """

    lowest = 1 if force_non_zero else 0
    existing = numbers_in_use.get(prefix)
    if existing is None:
        return lowest
    for number in range(lowest, existing.max_value):
        if number not in existing:
            return number
    return existing.max_value + 1
