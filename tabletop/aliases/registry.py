"""Allocation of short, unique aliases for the combatants of an encounter."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from ..names import canonicalize, split_name
from .ambiguity import ambiguity
from .candidates import DEFAULT_PREFIX_TRY_COUNT, Candidate, generate_candidates
from .format import format_alias, parse_alias
from .numbers import NumbersInUse, smallest_free_number

__all__ = [
    "MAX_PREFIX_LENGTH",
    "AliasRegistry",
    "InconsistentPrefixError",
    "NoCandidateAvailableError",
]

log = logging.getLogger(__name__)

MAX_PREFIX_LENGTH = 10


class InconsistentPrefixError(RuntimeError):
    """Raised when one name turns up under two different prefixes."""

    def __init__(self, name: str, prefix: str, current_prefix: str) -> None:
        super().__init__(
            f"Saw '{name}' with an alias starting '{prefix}' but have already "
            f"tracked it using the prefix '{current_prefix}'"
        )
        self.name = name
        self.prefix = prefix
        self.current_prefix = current_prefix


class NoCandidateAvailableError(RuntimeError):
    """Raised when no prefix at all could be generated for a new name."""


class AliasRegistry:
    """Short aliases for a growing set of names.

    The registry is rebuilt from the ``(alias, name)`` pairs already in use
    each time it is needed; it holds no state of its own beyond that. Every
    canonical name keeps one prefix for the lifetime of the registry, and
    repeated names are told apart by the number after the prefix (``Gob``,
    ``Gob1``, ``Gob2``...).

    Instances are not safe for concurrent mutation; callers serialise
    :meth:`add` per encounter.
    """

    def __init__(
        self,
        pairs: Iterable[Tuple[str, str]] = (),
        *,
        prefix_try_count: int = DEFAULT_PREFIX_TRY_COUNT,
    ) -> None:
        self._numbers_in_use: Dict[str, NumbersInUse] = {}
        self._prefixes_by_name: Dict[str, str] = {}
        # Split forms of the keys of ``_prefixes_by_name``, kept in step with it
        self._split_names: List[tuple[str, ...]] = []
        self._prefix_try_count = prefix_try_count
        for alias, name in pairs:
            canonical_name = canonicalize(name)
            parsed = parse_alias(alias)
            self._register(parsed.prefix, canonical_name, parsed.number)

    @property
    def names(self) -> Tuple[str, ...]:
        """Canonical names tracked so far, in the order they were first seen."""

        return tuple(self._prefixes_by_name)

    def aliases(self) -> List[str]:
        """Every alias in use, ordered by prefix and then by number."""

        return [
            format_alias(prefix, number)
            for prefix in sorted(self._numbers_in_use)
            for number in self._numbers_in_use[prefix]
        ]

    def add(self, name: str, prefix_length: int, always_add_number: bool) -> str:
        """Allocate and return a new alias for ``name``.

        A name seen before keeps its prefix and gets the next free number.
        Otherwise the least ambiguous generated prefix wins, ties going to the
        smaller number, then the earlier candidate, then the smaller prefix.
        """

        if prefix_length > MAX_PREFIX_LENGTH:
            raise ValueError("Prefix length too long")
        if prefix_length < 1:
            raise ValueError("Prefix length must be at least 1")

        canonical_name = canonicalize(name)
        prefix, number = self._choose_prefix_and_number(
            canonical_name, prefix_length, always_add_number
        )
        self._register(prefix, canonical_name, number)
        alias = format_alias(prefix, number)
        log.debug("Allocated alias %s for '%s'", alias, canonical_name)
        return alias

    def check_ambiguity(self, alias: str) -> int:
        """Return how many tracked names ``alias`` could refer to.

        Zero means it matches none of them.
        """

        return self._ambiguity(parse_alias(alias).prefix)

    # -- helpers -----------------------------------------------------------
    def _ambiguity(self, prefix: str) -> int:
        return ambiguity(prefix, self._split_names)

    def _choose_prefix_and_number(
        self, canonical_name: str, prefix_length: int, always_add_number: bool
    ) -> Tuple[str, int]:
        current_prefix = self._prefixes_by_name.get(canonical_name)
        if current_prefix is not None:
            number = smallest_free_number(current_prefix, self._numbers_in_use, always_add_number)
            return current_prefix, number

        prefixes = generate_candidates(
            split_name(canonical_name), prefix_length, self._prefix_try_count
        )
        candidates = [
            Candidate(
                ambiguity=self._ambiguity(prefix),
                number=smallest_free_number(prefix, self._numbers_in_use, always_add_number),
                order=order,
                prefix=prefix,
            )
            for order, prefix in enumerate(prefixes)
        ]
        if not candidates:
            raise NoCandidateAvailableError(
                f"No possible alias for '{canonical_name}' with prefix length {prefix_length}"
            )
        best = min(candidates)
        return best.prefix, best.number

    def _register(self, prefix: str, canonical_name: str, number: int) -> None:
        current_prefix = self._prefixes_by_name.get(canonical_name)
        if current_prefix is None:
            self._prefixes_by_name[canonical_name] = prefix
            self._split_names.append(split_name(canonical_name))
        elif current_prefix != prefix:
            raise InconsistentPrefixError(canonical_name, prefix, current_prefix)

        numbers = self._numbers_in_use.get(prefix)
        if numbers is None:
            self._numbers_in_use[prefix] = NumbersInUse(number)
        else:
            numbers.add(number)
