from __future__ import annotations

import discord
from discord.ext import commands

from ..base_cog import BaseCog
from ..gateway import DiscordGateway
from ..models import MessageEvent


class DispatchCog(BaseCog):
    """Feeds every gateway message into the dispatch pipeline."""

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        self_id = self.bot.user.id if self.bot.user else None
        event = MessageEvent.from_discord(message, self_id)
        gateway = DiscordGateway(message, reply_timeout=self.bot.settings.reply_timeout_seconds)  # type: ignore[attr-defined]
        self.bot.dispatcher.submit(event, gateway)  # type: ignore[attr-defined]
