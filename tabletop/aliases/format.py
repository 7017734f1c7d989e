"""Parsing and rendering of ``prefix`` + optional ``number`` aliases."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "MAX_ALIAS_NUMBER",
    "InvalidAliasFormatError",
    "ParsedAlias",
    "format_alias",
    "is_valid_alias",
    "parse_alias",
]

_DIGITS = frozenset("0123456789")

# Largest disambiguation number accepted from stored or typed aliases.
MAX_ALIAS_NUMBER = 2**31 - 1


class InvalidAliasFormatError(ValueError):
    """Raised when an alias is not letters followed by optional digits."""

    def __init__(self, alias: str) -> None:
        super().__init__(f"Invalid alias: '{alias}'")
        self.alias = alias


@dataclass(frozen=True)
class ParsedAlias:
    prefix: str
    number: int = 0

    def __str__(self) -> str:
        return format_alias(self.prefix, self.number)


def parse_alias(alias: str) -> ParsedAlias:
    """Split ``alias`` into its letter prefix and disambiguation number.

    A missing number reads as ``0``. Numbers above ``MAX_ALIAS_NUMBER`` are
    rejected along with malformed text.
    """

    split_at = len(alias)
    while split_at > 0 and alias[split_at - 1] in _DIGITS:
        split_at -= 1
    prefix, digits = alias[:split_at], alias[split_at:]
    if not prefix or not prefix.isalpha():
        raise InvalidAliasFormatError(alias)
    if not digits:
        return ParsedAlias(prefix=prefix)
    try:
        number = int(digits)
    except ValueError:
        raise InvalidAliasFormatError(alias) from None
    if number > MAX_ALIAS_NUMBER:
        raise InvalidAliasFormatError(alias)
    return ParsedAlias(prefix=prefix, number=number)


def is_valid_alias(alias: str) -> bool:
    try:
        parse_alias(alias)
    except InvalidAliasFormatError:
        return False
    return True


def format_alias(prefix: str, number: int) -> str:
    # Number 0 is the bare prefix.
    return prefix if number == 0 else f"{prefix}{number}"
