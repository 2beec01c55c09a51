from __future__ import annotations

import logging
import sys

import discord
from dotenv import load_dotenv

from .bot import ChatKeeperBot
from .config import load_settings
from .logging_setup import setup_logging

log = logging.getLogger("chatkeeper.main")


def main() -> None:
    load_dotenv()
    try:
        settings = load_settings()
    except RuntimeError as e:
        setup_logging()
        log.critical("Startup aborted: %s", e)
        sys.exit(1)
    setup_logging(settings.log_level)

    bot = ChatKeeperBot(settings)
    try:
        bot.run(settings.token, log_handler=None)
    except discord.LoginFailure as e:
        log.critical("Client error: login failed: %s", e)
        sys.exit(1)
    except discord.PrivilegedIntentsRequired as e:
        log.critical("Client error: %s", e)
        sys.exit(1)
    except OSError as e:
        log.critical("Client error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
