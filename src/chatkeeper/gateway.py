"""
Gateway client contract used by the dispatch stages.

Stages never touch discord.py objects directly; they talk to a
``GatewayClient`` so they can be exercised without a live connection.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

import discord

from .constants import MAX_MESSAGE_LENGTH
from .models import MessageEvent

log = logging.getLogger("chatkeeper.gateway")


@runtime_checkable
class GatewayClient(Protocol):
    async def send_reply(self, event: MessageEvent, text: str) -> None:
        """Reply to the message that produced ``event``."""
        ...

    async def delete_message(self, event: MessageEvent) -> None:
        """Delete the message that produced ``event``."""
        ...


def clamp_reply(text: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


class DiscordGateway:
    """``GatewayClient`` bound to a single ``discord.Message``."""

    def __init__(self, message: discord.Message, *, reply_timeout: float = 0) -> None:
        self._message = message
        self._reply_timeout = reply_timeout

    async def send_reply(self, event: MessageEvent, text: str) -> None:
        coro = self._message.reply(clamp_reply(text), mention_author=False)
        if self._reply_timeout > 0:
            await asyncio.wait_for(coro, timeout=self._reply_timeout)
        else:
            await coro

    async def delete_message(self, event: MessageEvent) -> None:
        await self._message.delete()
