"""Short alias allocation for tracked characters and monsters."""

from .ambiguity import alias_parts, ambiguity, could_be_alias_for
from .candidates import DEFAULT_PREFIX_TRY_COUNT, Candidate, generate_candidates
from .format import (
    MAX_ALIAS_NUMBER,
    InvalidAliasFormatError,
    ParsedAlias,
    format_alias,
    is_valid_alias,
    parse_alias,
)
from .numbers import NumbersInUse, smallest_free_number
from .registry import (
    MAX_PREFIX_LENGTH,
    AliasRegistry,
    InconsistentPrefixError,
    NoCandidateAvailableError,
)

__all__ = [
    "DEFAULT_PREFIX_TRY_COUNT",
    "MAX_ALIAS_NUMBER",
    "MAX_PREFIX_LENGTH",
    "AliasRegistry",
    "Candidate",
    "InconsistentPrefixError",
    "InvalidAliasFormatError",
    "NoCandidateAvailableError",
    "NumbersInUse",
    "ParsedAlias",
    "alias_parts",
    "ambiguity",
    "could_be_alias_for",
    "format_alias",
    "generate_candidates",
    "is_valid_alias",
    "parse_alias",
    "smallest_free_number",
]
