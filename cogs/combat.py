"""Slash commands for tracking the combatants of an encounter."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import discord
from discord import app_commands
from discord.ext import commands

from tabletop import (
    AliasProfile,
    BotSettings,
    Combatant,
    Encounter,
    EncounterRepository,
    InconsistentPrefixError,
    InvalidAliasFormatError,
    NoCandidateAvailableError,
    load_alias_profiles,
    load_settings,
)
from tabletop.aliases import is_valid_alias, parse_alias
from tabletop.names import try_canonicalize

log = logging.getLogger(__name__)


def _describe(combatant: Combatant) -> str:
    label = f"**{combatant.alias}**: {combatant.name}"
    if combatant.swarm_count > 1:
        label += f" (swarm of {combatant.swarm_count})"
    return label


class CombatCog(commands.Cog):
    """Run encounters: join characters, add monsters and list their aliases."""

    combat = app_commands.Group(name="combat", description="Manage the encounter in this channel")

    def __init__(self, bot: commands.Bot, settings: Optional[BotSettings] = None) -> None:
        self.bot = bot
        self.settings = settings or load_settings(require_token=False)
        self.encounters = EncounterRepository(self.settings.encounter_storage)
        self.profiles: Dict[str, AliasProfile] = load_alias_profiles(self.settings.alias_profiles)

    def _profile(self, game_system: str) -> Optional[AliasProfile]:
        return self.profiles.get(game_system.strip().lower())

    async def _require_channel(self, interaction: discord.Interaction) -> bool:
        if interaction.guild_id is None or interaction.channel_id is None:
            await interaction.response.send_message(
                "Encounters can only be run inside a server channel.", ephemeral=True
            )
            return False
        return True

    async def _add_combatant(self, interaction: discord.Interaction, kind: str, name: str, swarm: int) -> None:
        if not await self._require_channel(interaction):
            return
        if try_canonicalize(name) is None:
            await interaction.response.send_message(
                "Names may only contain letters and spaces.", ephemeral=True
            )
            return
        user_id = interaction.user.id

        def mutate(encounter: Encounter) -> Combatant:
            profile = self._profile(encounter.game_system)
            if profile is None:
                raise ValueError(f"Unknown game system '{encounter.game_system}'")
            if kind == "adventurer":
                return encounter.join(name, user_id, profile)
            return encounter.add_monster(name, user_id, profile, swarm_count=swarm)

        try:
            combatant = await self.encounters.update(interaction.guild_id, interaction.channel_id, mutate)
        except (InconsistentPrefixError, NoCandidateAvailableError, InvalidAliasFormatError):
            log.exception(
                "Failed to allocate an alias for '%s' in channel %s", name, interaction.channel_id
            )
            await interaction.response.send_message(
                "The encounter record is inconsistent; I couldn't add that combatant.", ephemeral=True
            )
            return
        except ValueError as exc:
            await interaction.response.send_message(str(exc), ephemeral=True)
            return

        if combatant is None:
            await interaction.response.send_message(
                "There is no encounter in this channel. Start one with `/combat begin`.",
                ephemeral=True,
            )
            return
        verb = "joined" if kind == "adventurer" else "was added to"
        await interaction.response.send_message(f"{combatant.name} {verb} the encounter as **{combatant.alias}**.")

    @combat.command(name="begin", description="Begin an encounter in this channel")
    @app_commands.describe(system="Game system key, e.g. swn or thirteenth_age")
    async def combat_begin(self, interaction: discord.Interaction, system: Optional[str] = None) -> None:
        if not await self._require_channel(interaction):
            return
        game_system = (system or self.settings.default_game_system).strip().lower()
        profile = self._profile(game_system)
        if profile is None:
            known = ", ".join(sorted(self.profiles)) or "none"
            await interaction.response.send_message(
                f"Unknown game system '{game_system}'. Known systems: {known}.", ephemeral=True
            )
            return
        existing = await self.encounters.get(interaction.guild_id, interaction.channel_id)
        if existing is not None:
            await interaction.response.send_message(
                "An encounter is already running in this channel.", ephemeral=True
            )
            return
        await self.encounters.save(
            Encounter(
                guild_id=interaction.guild_id,
                channel_id=interaction.channel_id,
                game_system=profile.key,
            )
        )
        log.info("Began %s encounter in channel %s", profile.key, interaction.channel_id)
        await interaction.response.send_message(f"A {profile.name} encounter has begun!")

    @combat.command(name="join", description="Join the encounter with your character")
    @app_commands.describe(name="Your character's name")
    async def combat_join(self, interaction: discord.Interaction, name: str) -> None:
        await self._add_combatant(interaction, "adventurer", name, 1)

    @combat.command(name="add", description="Add a monster to the encounter")
    @app_commands.describe(monster="The monster's name", swarm="How many creatures the swarm holds")
    async def combat_add(
        self,
        interaction: discord.Interaction,
        monster: str,
        swarm: app_commands.Range[int, 1, 100] = 1,
    ) -> None:
        await self._add_combatant(interaction, "monster", monster, swarm)

    @combat.command(name="remove", description="Remove a combatant from the encounter")
    @app_commands.describe(alias="The combatant's alias, or enough of it to be unique")
    async def combat_remove(self, interaction: discord.Interaction, alias: str) -> None:
        if not await self._require_channel(interaction):
            return

        def mutate(encounter: Encounter) -> tuple[Combatant, ...]:
            matches = encounter.resolve(alias)
            if len(matches) == 1:
                encounter.remove(matches[0].alias)
            return matches

        matches = await self.encounters.update(interaction.guild_id, interaction.channel_id, mutate)
        if matches is None:
            await interaction.response.send_message("There is no encounter in this channel.", ephemeral=True)
        elif not matches:
            await interaction.response.send_message(f"No combatant matches '{alias}'.", ephemeral=True)
        elif len(matches) > 1:
            options = ", ".join(combatant.alias for combatant in matches)
            await interaction.response.send_message(
                f"'{alias}' could mean any of: {options}.", ephemeral=True
            )
        else:
            await interaction.response.send_message(f"Removed {_describe(matches[0])}.")

    @combat.command(name="list", description="List the combatants and their aliases")
    async def combat_list(self, interaction: discord.Interaction) -> None:
        if not await self._require_channel(interaction):
            return
        encounter = await self.encounters.get(interaction.guild_id, interaction.channel_id)
        if encounter is None:
            await interaction.response.send_message("There is no encounter in this channel.", ephemeral=True)
            return
        by_alias = {str(parse_alias(combatant.alias)): combatant for combatant in encounter.combatants}
        lines = [_describe(by_alias[alias]) for alias in encounter.alias_registry().aliases()]
        embed = discord.Embed(
            title="Encounter",
            description="\n".join(lines) if lines else "No combatants yet.",
            colour=discord.Colour.dark_red(),
        )
        await interaction.response.send_message(embed=embed)

    @combat.command(name="ambiguity", description="Check how many combatants an alias could refer to")
    @app_commands.describe(alias="The alias to check")
    async def combat_ambiguity(self, interaction: discord.Interaction, alias: str) -> None:
        if not await self._require_channel(interaction):
            return
        encounter = await self.encounters.get(interaction.guild_id, interaction.channel_id)
        if encounter is None:
            await interaction.response.send_message("There is no encounter in this channel.", ephemeral=True)
            return
        if not is_valid_alias(alias):
            await interaction.response.send_message(
                "Aliases are letters optionally followed by a number.", ephemeral=True
            )
            return
        count = encounter.alias_registry().check_ambiguity(alias)
        if count == 0:
            message = f"'{alias}' doesn't match any combatant."
        elif count == 1:
            message = f"'{alias}' refers to exactly one kind of combatant."
        else:
            message = f"'{alias}' could refer to {count} different kinds of combatant."
        await interaction.response.send_message(message, ephemeral=True)

    @combat.command(name="end", description="End the encounter in this channel")
    async def combat_end(self, interaction: discord.Interaction) -> None:
        if not await self._require_channel(interaction):
            return
        removed = await self.encounters.clear(interaction.guild_id, interaction.channel_id)
        if not removed:
            await interaction.response.send_message("There is no encounter in this channel.", ephemeral=True)
            return
        log.info("Ended encounter in channel %s", interaction.channel_id)
        await interaction.response.send_message("The encounter is over.")


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(CombatCog(bot, getattr(bot, "settings", None)))
