from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import discord


@dataclass(frozen=True)
class MessageEvent:
    """Read-only view of one observed message, passed through every dispatch stage."""

    author_name: str
    timestamp: str
    content: str
    # Opaque to the core; only the gateway adapter looks inside.
    channel_reference: Any = None
    author_id: Optional[int] = None
    message_id: Optional[int] = None
    from_self: bool = False

    @classmethod
    def from_discord(cls, message: discord.Message, self_id: Optional[int] = None) -> "MessageEvent":
        author_id = getattr(message.author, "id", None)
        return cls(
            author_name=str(message.author.name),
            timestamp=message.created_at.isoformat(),
            content=message.content or "",
            channel_reference=message.channel,
            author_id=author_id,
            message_id=getattr(message, "id", None),
            from_self=self_id is not None and author_id == self_id,
        )


def format_log_record(event: MessageEvent) -> str:
    return f"[{event.timestamp}] {event.author_name}: {event.content}\n"
