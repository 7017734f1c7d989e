"""Tabletop role-playing bookkeeping: encounters and combatant aliases."""

from .aliases import (
    AliasRegistry,
    InconsistentPrefixError,
    InvalidAliasFormatError,
    NoCandidateAvailableError,
)
from .config import BotSettings, load_settings
from .encounter import Combatant, Encounter
from .names import NotCanonicalizableError, canonicalize
from .profiles import AliasProfile, AliasRule, ProfileLoadError, load_alias_profiles
from .repository import EncounterRepository

__all__ = [
    "AliasProfile",
    "AliasRegistry",
    "AliasRule",
    "BotSettings",
    "Combatant",
    "Encounter",
    "EncounterRepository",
    "InconsistentPrefixError",
    "InvalidAliasFormatError",
    "NoCandidateAvailableError",
    "NotCanonicalizableError",
    "ProfileLoadError",
    "canonicalize",
    "load_alias_profiles",
    "load_settings",
]
