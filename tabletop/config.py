"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .profiles import DEFAULT_PROFILES_PATH

__all__ = ["BotSettings", "load_settings"]

DEFAULT_ENCOUNTER_STORAGE = Path("data") / "encounters.json"
DEFAULT_GAME_SYSTEM = "swn"


@dataclass(frozen=True)
class BotSettings:
    token: str
    encounter_storage: Path = DEFAULT_ENCOUNTER_STORAGE
    alias_profiles: Path = DEFAULT_PROFILES_PATH
    default_game_system: str = DEFAULT_GAME_SYSTEM

    @classmethod
    def from_env(cls, env: Mapping[str, str], *, require_token: bool = True) -> "BotSettings":
        token = (env.get("DISCORD_TOKEN") or "").strip()
        if require_token and not token:
            raise RuntimeError(
                "DISCORD_TOKEN environment variable is required. "
                "Set it in the .env file before starting the bot."
            )
        storage = env.get("ENCOUNTER_STORAGE")
        profiles = env.get("ALIAS_PROFILES")
        game_system = (env.get("DEFAULT_GAME_SYSTEM") or DEFAULT_GAME_SYSTEM).strip().lower()
        return cls(
            token=token,
            encounter_storage=Path(storage) if storage else DEFAULT_ENCOUNTER_STORAGE,
            alias_profiles=Path(profiles) if profiles else DEFAULT_PROFILES_PATH,
            default_game_system=game_system,
        )


def load_settings(env: Optional[Mapping[str, str]] = None, *, require_token: bool = True) -> BotSettings:
    """Read settings, loading ``.env`` first when no mapping is given."""

    if env is None:
        load_dotenv()
        env = os.environ
    return BotSettings.from_env(env, require_token=require_token)
