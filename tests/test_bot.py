"""
Wiring tests for the bot and its dispatch cog (no gateway connection).
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from chatkeeper.bot import ChatKeeperBot
from chatkeeper.cogs.dispatch import DispatchCog
from chatkeeper.config import Settings
from chatkeeper.gateway import DiscordGateway
from chatkeeper.testing.fakes import FakeMessage, FakeUser


@pytest.fixture
def settings(log_path):
    return Settings(token="test-token", message_log_path=str(log_path), reply_timeout_seconds=3)


def test_bot_owns_shared_state(settings):
    bot = ChatKeeperBot(settings)
    assert bot.intents.message_content is True
    assert [s.name for s in bot.dispatcher.stages] == ["log", "moderate", "command", "fetch"]
    assert bot.interpreter.registry is bot.registry
    assert bot.dispatcher.stats is bot.stats


def test_message_content_intent_can_be_disabled(log_path):
    bot = ChatKeeperBot(Settings(token="t", message_log_path=str(log_path), message_content_intent=False))
    assert bot.intents.message_content is False


@pytest.mark.asyncio
async def test_setup_hook_opens_log_and_loads_cog(settings, log_path):
    bot = ChatKeeperBot(settings)
    await bot.setup_hook()
    try:
        assert bot.message_log.is_open
        assert log_path.exists()
        assert isinstance(bot.get_cog("DispatchCog"), DispatchCog)
    finally:
        await bot.message_log.close()
        await bot.fetcher.aclose()


@pytest.mark.asyncio
async def test_dispatch_cog_submits_events(settings):
    dispatcher = MagicMock()
    bot = SimpleNamespace(user=SimpleNamespace(id=1), settings=settings, dispatcher=dispatcher)
    cog = DispatchCog(bot)

    msg = FakeMessage("!cmd greet", author=FakeUser(id=1, name="me"))
    await cog.on_message(msg)

    event, gateway = dispatcher.submit.call_args.args
    assert event.content == "!cmd greet"
    assert event.from_self is True
    assert isinstance(gateway, DiscordGateway)
