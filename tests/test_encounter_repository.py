import asyncio
from pathlib import Path

import pytest

from tabletop import Encounter, EncounterRepository
from tabletop.profiles import AliasProfile

PROFILE = AliasProfile(key="swn", name="Stars Without Number")


def test_repository_detects_external_updates(tmp_path: Path) -> None:
    async def scenario() -> None:
        storage = tmp_path / "encounters.json"
        repo_one = EncounterRepository(storage)
        repo_two = EncounterRepository(storage)

        assert await repo_two.get(1, 2) is None

        encounter = Encounter(guild_id=1, channel_id=2, game_system="swn")
        encounter.join("Aria Swift", 10, PROFILE)
        await repo_one.save(encounter)

        assert await repo_two.get(1, 2) == encounter

        assert await repo_one.clear(1, 2) is True
        assert await repo_two.get(1, 2) is None
        assert await repo_two.clear(1, 2) is False

    asyncio.run(scenario())


def test_update_applies_and_persists_mutation(tmp_path: Path) -> None:
    async def scenario() -> None:
        storage = tmp_path / "encounters.json"
        repo = EncounterRepository(storage)
        await repo.save(Encounter(guild_id=1, channel_id=2, game_system="swn"))

        combatant = await repo.update(1, 2, lambda e: e.add_monster("Goblin", 7, PROFILE))
        assert combatant is not None and combatant.alias == "Gobli1"

        missing = await repo.update(1, 3, lambda e: e.add_monster("Goblin", 7, PROFILE))
        assert missing is None

        reloaded = await EncounterRepository(storage).get(1, 2)
        assert reloaded is not None
        assert [c.alias for c in reloaded.combatants] == ["Gobli1"]

    asyncio.run(scenario())


def test_failed_update_is_not_persisted(tmp_path: Path) -> None:
    async def scenario() -> None:
        storage = tmp_path / "encounters.json"
        repo = EncounterRepository(storage)
        await repo.save(Encounter(guild_id=1, channel_id=2, game_system="swn"))

        with pytest.raises(ValueError):
            await repo.update(1, 2, lambda e: e.add_monster("Goblin!", 7, PROFILE))

        encounter = await repo.get(1, 2)
        assert encounter is not None and encounter.combatants == []

    asyncio.run(scenario())


def test_concurrent_updates_allocate_distinct_aliases(tmp_path: Path) -> None:
    async def scenario() -> None:
        repo = EncounterRepository(tmp_path / "encounters.json")
        await repo.save(Encounter(guild_id=1, channel_id=2, game_system="swn"))

        combatants = await asyncio.gather(
            *(repo.update(1, 2, lambda e: e.add_monster("Goblin", 7, PROFILE)) for _ in range(5))
        )
        aliases = sorted(c.alias for c in combatants)
        assert aliases == ["Gobli1", "Gobli2", "Gobli3", "Gobli4", "Gobli5"]

    asyncio.run(scenario())


def test_corrupt_storage_is_treated_as_empty(tmp_path: Path) -> None:
    async def scenario() -> None:
        storage = tmp_path / "encounters.json"
        storage.write_text("{not json", encoding="utf-8")
        repo = EncounterRepository(storage)
        assert await repo.get(1, 2) is None

    asyncio.run(scenario())


def test_storage_that_is_not_an_object_is_treated_as_empty(tmp_path: Path) -> None:
    async def scenario() -> None:
        storage = tmp_path / "encounters.json"
        storage.write_text('[{"guild_id": 1}]', encoding="utf-8")
        repo = EncounterRepository(storage)
        assert await repo.get(1, 2) is None

        await repo.save(Encounter(guild_id=1, channel_id=2, game_system="swn"))
        assert await EncounterRepository(storage).get(1, 2) is not None
        assert await repo.clear(1, 2) is True
        assert await repo.clear(1, 2) is False

    asyncio.run(scenario())
