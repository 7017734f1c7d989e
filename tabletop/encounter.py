"""Combat encounters and the combatants that join them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .aliases import AliasRegistry
from .names import canonicalize
from .profiles import AliasProfile

__all__ = [
    "COMBATANT_KINDS",
    "Combatant",
    "Encounter",
]

COMBATANT_KINDS: Tuple[str, ...] = ("adventurer", "monster")


@dataclass(frozen=True)
class Combatant:
    """A player character or monster taking part in an encounter."""

    alias: str
    name: str
    kind: str
    user_id: int
    swarm_count: int = 1

    def __post_init__(self) -> None:
        if self.kind not in COMBATANT_KINDS:
            raise ValueError(f"Unknown combatant kind '{self.kind}'")
        if self.swarm_count < 1:
            raise ValueError("Swarm count must be at least 1")

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "alias": self.alias,
            "name": self.name,
            "kind": self.kind,
            "user_id": self.user_id,
        }
        if self.swarm_count != 1:
            payload["swarm_count"] = self.swarm_count
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Combatant":
        return cls(
            alias=str(data["alias"]),
            name=str(data["name"]),
            kind=str(data.get("kind", "monster")),
            user_id=int(data.get("user_id", 0)),
            swarm_count=int(data.get("swarm_count", 1)),
        )


@dataclass
class Encounter:
    """The combat running in one guild channel.

    The combatant list is the only record of which aliases are taken; a fresh
    :class:`AliasRegistry` is built from it whenever someone joins.
    """

    guild_id: int
    channel_id: int
    game_system: str
    combatants: List[Combatant] = field(default_factory=list)

    def alias_registry(self) -> AliasRegistry:
        return AliasRegistry((combatant.alias, combatant.name) for combatant in self.combatants)

    def join(self, name: str, user_id: int, profile: AliasProfile) -> Combatant:
        """Add a player character, rejecting a second copy for the same player."""

        canonical_name = canonicalize(name)
        for combatant in self.combatants:
            if (
                combatant.kind == "adventurer"
                and combatant.user_id == user_id
                and canonicalize(combatant.name) == canonical_name
            ):
                raise ValueError(f"{canonical_name} is already in this encounter as {combatant.alias}")
        return self._add(canonical_name, "adventurer", user_id, profile)

    def add_monster(
        self, name: str, user_id: int, profile: AliasProfile, *, swarm_count: int = 1
    ) -> Combatant:
        if swarm_count < 1:
            raise ValueError("Swarm count must be at least 1")
        return self._add(canonicalize(name), "monster", user_id, profile, swarm_count=swarm_count)

    def remove(self, alias: str) -> Optional[Combatant]:
        combatant = self.get(alias)
        if combatant is not None:
            self.combatants.remove(combatant)
        return combatant

    def get(self, alias: str) -> Optional[Combatant]:
        for combatant in self.combatants:
            if combatant.alias == alias:
                return combatant
        return None

    def resolve(self, handle: str) -> Tuple[Combatant, ...]:
        """Return the combatants a typed ``handle`` could mean.

        An exact alias wins outright. Aliases may differ only in case
        (``Koar`` and ``KoAr``), so case-insensitive equality comes next and
        returns every alias it matches. Otherwise every combatant whose alias
        starts with the handle is returned, ignoring case.
        """

        handle = handle.strip()
        if not handle:
            return ()
        exact = self.get(handle)
        if exact is not None:
            return (exact,)
        lowered = handle.casefold()
        same_letters = tuple(c for c in self.combatants if c.alias.casefold() == lowered)
        if same_letters:
            return same_letters
        return tuple(
            combatant for combatant in self.combatants if combatant.alias.casefold().startswith(lowered)
        )

    def _add(
        self,
        canonical_name: str,
        kind: str,
        user_id: int,
        profile: AliasProfile,
        *,
        swarm_count: int = 1,
    ) -> Combatant:
        rule = profile.rule_for(kind)
        alias = self.alias_registry().add(canonical_name, rule.prefix_length, rule.always_add_number)
        combatant = Combatant(
            alias=alias,
            name=canonical_name,
            kind=kind,
            user_id=user_id,
            swarm_count=swarm_count,
        )
        self.combatants.append(combatant)
        return combatant

    def to_dict(self) -> Dict[str, object]:
        return {
            "guild_id": self.guild_id,
            "channel_id": self.channel_id,
            "game_system": self.game_system,
            "combatants": [combatant.to_dict() for combatant in self.combatants],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Encounter":
        combatants_raw = data.get("combatants") or []
        if not isinstance(combatants_raw, list):
            raise ValueError("combatants must be a list")
        return cls(
            guild_id=int(data["guild_id"]),
            channel_id=int(data["channel_id"]),
            game_system=str(data["game_system"]).lower(),
            combatants=[Combatant.from_dict(entry) for entry in combatants_raw],
        )
