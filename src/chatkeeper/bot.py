from __future__ import annotations

import logging

import discord
from discord.ext import commands

from .commands.interpreter import CommandInterpreter
from .config import Settings
from .constants import API_URL, BANNED_TERMS
from .dispatcher import EventDispatcher
from .services.command_registry import CommandRegistry
from .services.fetcher import ExternalFetcher
from .services.message_log import MessageLogSink
from .services.stats import RuntimeStats

log = logging.getLogger("chatkeeper.bot")


class ChatKeeperBot(commands.Bot):
    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        # Logging, moderation and !cmd all read message text.
        intents.message_content = bool(settings.message_content_intent)

        log.info("INTENTS: guilds=%s messages=%s message_content=%s", intents.guilds, intents.messages, intents.message_content)

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
            help_command=None,
        )

        self.settings = settings
        self.stats = RuntimeStats()

        # Shared state for all dispatch tasks; owned here, released in close().
        self.registry = CommandRegistry(lock_timeout=settings.registry_lock_timeout_seconds)
        self.message_log = MessageLogSink(settings.message_log_path)
        self.fetcher = ExternalFetcher(timeout=settings.fetch_timeout_seconds)
        self.interpreter = CommandInterpreter(self.registry, self.stats)
        self.dispatcher = EventDispatcher.build(
            interpreter=self.interpreter,
            sink=self.message_log,
            fetcher=self.fetcher,
            stats=self.stats,
            banned_terms=BANNED_TERMS,
            api_url=API_URL,
        )

    async def setup_hook(self) -> None:
        # Failing to open the log is a startup error, not a per-message one.
        self.message_log.open()

        from .cogs.dispatch import DispatchCog

        await self.add_cog(DispatchCog(self))
        log.info("Dispatch pipeline ready: %s", " -> ".join(s.name for s in self.dispatcher.stages))

    async def on_ready(self) -> None:
        name = self.user.name if self.user else "unknown"
        log.info("%s is connected!", name)

    async def on_command_error(self, context: commands.Context, exception: commands.CommandError) -> None:
        if isinstance(exception, commands.CommandNotFound):
            return
        log.warning("Command error: %s", exception, exc_info=exception)

    async def close(self) -> None:
        try:
            await self.dispatcher.aclose()
            await self.fetcher.aclose()
            await self.message_log.close()
            log.info("Runtime stats: %s", self.stats.summary())
        finally:
            await super().close()
