import logging
from pathlib import Path

import discord
from discord.ext import commands

from tabletop import BotSettings, load_settings


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def get_cog_module_names(cogs_path: Path) -> list[str]:
    module_names: list[str] = []
    for path in sorted(cogs_path.glob("*.py")):
        if path.name.startswith("__"):
            continue
        module_names.append(f"cogs.{path.stem}")
    return module_names


async def load_cogs(bot: commands.Bot, cogs_path: Path) -> None:
    for module_name in get_cog_module_names(cogs_path):
        await bot.load_extension(module_name)
        logging.info("Loaded cog: %s", module_name)


class TabletopBot(commands.Bot):
    """Slash-command-only bot carrying the settings its cogs read."""

    def __init__(self, settings: BotSettings) -> None:
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=discord.Intents.default(),
            help_command=None,
        )
        self.settings = settings
        self._cogs_path = Path(__file__).parent / "cogs"

    async def setup_hook(self) -> None:  # type: ignore[override]
        await load_cogs(self, self._cogs_path)
        synced_commands = await self.tree.sync()
        logging.info("Synced %s application commands", len(synced_commands))

    async def process_commands(self, message: discord.Message) -> None:  # type: ignore[override]
        """Prefixed commands are not supported."""
        return


def main() -> None:
    configure_logging()
    settings = load_settings()
    bot = TabletopBot(settings)

    try:
        bot.run(settings.token, log_handler=None)
    except KeyboardInterrupt:
        logging.info("Shutting down bot")


if __name__ == "__main__":
    main()
