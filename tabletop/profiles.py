"""Per game system settings for how combatant aliases are allocated."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping

import yaml

from .aliases import MAX_PREFIX_LENGTH

__all__ = [
    "DEFAULT_PROFILES_PATH",
    "AliasProfile",
    "AliasRule",
    "ProfileLoadError",
    "SchemaError",
    "load_alias_profiles",
]

DEFAULT_PROFILES_PATH = Path(__file__).with_name("content") / "alias_profiles.yaml"


class SchemaError(ValueError):
    """Raised when profile data fails validation."""


class ProfileLoadError(RuntimeError):
    """Raised when alias profiles could not be loaded from disk."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        if path is not None:
            message = f"{message} (source: {path})"
        super().__init__(message)
        self.path = path


def _coerce_mapping(name: str, value: object) -> MutableMapping[str, object]:
    if isinstance(value, MutableMapping):
        return value
    if isinstance(value, Mapping):
        return dict(value)
    raise SchemaError(f"{name} must be a mapping")


@dataclass(frozen=True)
class AliasRule:
    """Arguments passed to :meth:`AliasRegistry.add` for one kind of combatant."""

    prefix_length: int
    always_add_number: bool

    @classmethod
    def from_mapping(cls, name: str, data: object, *, default: "AliasRule") -> "AliasRule":
        if data is None:
            return default
        mapping = _coerce_mapping(name, data)
        try:
            prefix_length = int(mapping.get("prefix_length", default.prefix_length))
        except (TypeError, ValueError):
            raise SchemaError(f"{name}.prefix_length must be an integer") from None
        if not 1 <= prefix_length <= MAX_PREFIX_LENGTH:
            raise SchemaError(
                f"{name}.prefix_length must be between 1 and {MAX_PREFIX_LENGTH}"
            )
        always_add_number = mapping.get("always_add_number", default.always_add_number)
        if not isinstance(always_add_number, bool):
            raise SchemaError(f"{name}.always_add_number must be true or false")
        return cls(prefix_length=prefix_length, always_add_number=always_add_number)


ADVENTURER_DEFAULT = AliasRule(prefix_length=10, always_add_number=False)
MONSTER_DEFAULT = AliasRule(prefix_length=5, always_add_number=True)


@dataclass(frozen=True)
class AliasProfile:
    key: str
    name: str
    adventurer: AliasRule = ADVENTURER_DEFAULT
    monster: AliasRule = MONSTER_DEFAULT

    @classmethod
    def from_mapping(cls, key: str, data: Mapping[str, object]) -> "AliasProfile":
        mapping = _coerce_mapping(key, data)
        return cls(
            key=str(key).lower(),
            name=str(mapping.get("name") or key),
            adventurer=AliasRule.from_mapping(
                f"{key}.adventurer", mapping.get("adventurer"), default=ADVENTURER_DEFAULT
            ),
            monster=AliasRule.from_mapping(
                f"{key}.monster", mapping.get("monster"), default=MONSTER_DEFAULT
            ),
        )

    def rule_for(self, kind: str) -> AliasRule:
        if kind == "adventurer":
            return self.adventurer
        if kind == "monster":
            return self.monster
        raise ValueError(f"Unknown combatant kind '{kind}'")


def load_alias_profiles(path: Path = DEFAULT_PROFILES_PATH) -> Dict[str, AliasProfile]:
    """Load the game system alias profiles keyed by lower case system key."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileLoadError("Unable to read alias profiles", path=path) from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProfileLoadError("Failed to parse alias profiles", path=path) from exc
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ProfileLoadError("Expected a mapping of game systems", path=path)

    profiles: Dict[str, AliasProfile] = {}
    for key, data in raw.items():
        try:
            profile = AliasProfile.from_mapping(str(key), data)
        except SchemaError as exc:
            raise ProfileLoadError(str(exc), path=path) from exc
        if profile.key in profiles:
            raise ProfileLoadError(f"Duplicate game system '{key}'", path=path)
        profiles[profile.key] = profile
    return profiles
