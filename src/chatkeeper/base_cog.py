from __future__ import annotations

import logging

from discord.ext import commands

log = logging.getLogger("chatkeeper.base_cog")


class BaseCog(commands.Cog):
    """Base class for all cogs with common functionality."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot
        self.log = logging.getLogger(f"chatkeeper.cog.{self.__class__.__name__.lower()}")

    async def cog_load(self) -> None:
        self.log.info("Loaded %s", self.__class__.__name__)

    async def cog_unload(self) -> None:
        self.log.info("Unloaded %s", self.__class__.__name__)
