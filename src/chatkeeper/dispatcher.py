"""
Per-message dispatch pipeline.

Every observed message runs through the same ordered stages:

    Log -> Moderate -> Command -> Fetch

Each stage is a small object taking the event and a ``GatewayClient``.
A stage failure is logged and the next stage still runs; nothing raised by
a stage escapes ``EventDispatcher.dispatch``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Protocol, Sequence

import discord

from .commands.interpreter import CommandInterpreter, is_command
from .constants import API_TRIGGER, API_URL, BANNED_TERMS, REPLIES
from .errors import FetchError
from .gateway import GatewayClient
from .models import MessageEvent
from .moderation.filter import should_delete
from .services.fetcher import ExternalFetcher
from .services.message_log import MessageLogSink
from .services.stats import RuntimeStats

log = logging.getLogger("chatkeeper.dispatcher")


class Stage(Protocol):
    name: str

    async def run(self, event: MessageEvent, gateway: GatewayClient) -> None:
        ...


async def send_reply(gateway: GatewayClient, event: MessageEvent, text: str, stats: RuntimeStats) -> bool:
    """Send a reply; failures are logged and reported as ``False``."""
    try:
        await gateway.send_reply(event, text)
    except asyncio.TimeoutError:
        stats.replies_failed += 1
        log.warning("Timed out sending reply to message %s", event.message_id)
        return False
    except discord.HTTPException as e:
        stats.replies_failed += 1
        log.warning("Error sending message: %s", e)
        return False
    except Exception:
        stats.replies_failed += 1
        log.exception("Unexpected error sending reply to message %s", event.message_id)
        return False
    stats.replies_sent += 1
    return True


class LogStage:
    name = "log"

    def __init__(self, sink: MessageLogSink, stats: RuntimeStats) -> None:
        self.sink = sink
        self.stats = stats

    async def run(self, event: MessageEvent, gateway: GatewayClient) -> None:
        try:
            await self.sink.append(event)
        except (OSError, RuntimeError, ValueError) as e:
            self.stats.log_failures += 1
            log.error("Failed to write to log file: %s", e)
            return
        self.stats.messages_logged += 1


class ModerationStage:
    name = "moderate"

    def __init__(self, banned_terms: Iterable[str], stats: RuntimeStats) -> None:
        self.banned_terms: tuple[str, ...] = tuple(banned_terms)
        self.stats = stats

    async def run(self, event: MessageEvent, gateway: GatewayClient) -> None:
        term = should_delete(event.content, self.banned_terms)
        if term is None:
            return
        log.info("Deleting message containing '%s'", term)
        try:
            await gateway.delete_message(event)
        except discord.HTTPException as e:
            self.stats.delete_failures += 1
            log.warning("Failed to delete message %s: %s", event.message_id, e)
            return
        except asyncio.TimeoutError:
            self.stats.delete_failures += 1
            log.warning("Timed out deleting message %s", event.message_id)
            return
        self.stats.messages_deleted += 1


class CommandStage:
    name = "command"

    def __init__(self, interpreter: CommandInterpreter, stats: RuntimeStats) -> None:
        self.interpreter = interpreter
        self.stats = stats

    async def run(self, event: MessageEvent, gateway: GatewayClient) -> None:
        # Our own replies must never re-trigger commands.
        if event.from_self or not is_command(event.content):
            return
        reply = await self.interpreter.execute(event.content)
        if reply is not None:
            await send_reply(gateway, event, reply, self.stats)


class FetchStage:
    name = "fetch"

    def __init__(
        self,
        fetcher: ExternalFetcher,
        stats: RuntimeStats,
        *,
        url: str = API_URL,
        trigger: str = API_TRIGGER,
    ) -> None:
        self.fetcher = fetcher
        self.stats = stats
        self.url = url
        self.trigger = trigger

    async def run(self, event: MessageEvent, gateway: GatewayClient) -> None:
        if event.from_self or event.content != self.trigger:
            return
        try:
            data = await self.fetcher.fetch(self.url)
        except FetchError as e:
            self.stats.fetches_failed += 1
            log.error("API Error: %s", e)
            await send_reply(gateway, event, REPLIES["api_error"].format(error=e), self.stats)
            return
        self.stats.fetches_ok += 1
        await send_reply(gateway, event, REPLIES["api_data"].format(data=data), self.stats)


class EventDispatcher:
    def __init__(self, stages: Sequence[Stage], stats: Optional[RuntimeStats] = None) -> None:
        self.stages: tuple[Stage, ...] = tuple(stages)
        self.stats = stats or RuntimeStats()
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def build(
        cls,
        *,
        interpreter: CommandInterpreter,
        sink: MessageLogSink,
        fetcher: ExternalFetcher,
        stats: RuntimeStats,
        banned_terms: Iterable[str] = BANNED_TERMS,
        api_url: str = API_URL,
    ) -> "EventDispatcher":
        return cls(
            [
                LogStage(sink, stats),
                ModerationStage(banned_terms, stats),
                CommandStage(interpreter, stats),
                FetchStage(fetcher, stats, url=api_url),
            ],
            stats=stats,
        )

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def dispatch(self, event: MessageEvent, gateway: GatewayClient) -> None:
        for stage in self.stages:
            try:
                await stage.run(event, gateway)
            except Exception:
                self.stats.stage_failures += 1
                log.exception("Stage %s failed for message %s", stage.name, event.message_id)
        self.stats.events_dispatched += 1

    def submit(self, event: MessageEvent, gateway: GatewayClient) -> asyncio.Task[None]:
        """Schedule ``dispatch`` as its own task so slow stages don't hold up other events."""
        task = asyncio.create_task(self.dispatch(event, gateway), name=f"dispatch-{event.message_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def aclose(self) -> None:
        if not self._tasks:
            return
        log.info("Waiting for %d in-flight dispatches", len(self._tasks))
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
