"""Canonical forms for character and monster names."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "NotCanonicalizableError",
    "canonicalize",
    "split_name",
    "try_canonicalize",
]


class NotCanonicalizableError(ValueError):
    """Raised when a name contains anything other than letters and white space."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Name '{name}' cannot be canonicalized")
        self.name = name


def canonicalize(name: str) -> str:
    """Return ``name`` as capitalised words joined by single spaces.

    Runs of white space collapse to one separator and leading or trailing
    white space is dropped. Each word keeps only its first letter upper case.
    Canonicalising an already canonical name returns it unchanged.
    """

    for character in name:
        if not (character.isalpha() or character.isspace()):
            raise NotCanonicalizableError(name)
    words = name.split()
    if not words:
        raise NotCanonicalizableError(name)
    return " ".join(_capitalise(word) for word in words)


def _map_case(character: str, upper: bool) -> str:
    # Mappings that are not exactly one letter ("ß" -> "SS", "İ" -> "i" plus a
    # combining dot) would change the word length, so the letter stays as it is.
    mapped = character.upper() if upper else character.lower()
    if len(mapped) != 1 or not mapped.isalpha():
        return character
    return mapped


def _capitalise(word: str) -> str:
    return _map_case(word[0], True) + "".join(_map_case(character, False) for character in word[1:])


def try_canonicalize(name: str) -> Optional[str]:
    try:
        return canonicalize(name)
    except NotCanonicalizableError:
        return None


def split_name(canonical_name: str) -> tuple[str, ...]:
    """Split an already canonical name into its word parts."""

    return tuple(canonical_name.split(" "))
