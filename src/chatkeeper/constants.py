from __future__ import annotations

from typing import Final

# Discord limits
MAX_MESSAGE_LENGTH: Final[int] = 2000

# Operator-edited values. These are intentionally not read from the environment.
API_URL: Final[str] = "https://api.example.com/data"
BANNED_TERMS: Final[tuple[str, ...]] = ("badword1", "badword2")

# Triggers
COMMAND_PREFIX: Final[str] = "!cmd"
ADD_SUBCOMMAND: Final[str] = "add"
API_TRIGGER: Final[str] = "!api"

# Replies
REPLIES = {
    "added": "Added command {name} -> {response}",
    "add_failed": "Error adding command: {error}",
    "lookup_failed": "Error looking up command: {error}",
    "not_found": "Command not found.",
    "usage_add": "Usage: !cmd add <name> <response>",
    "usage_cmd": "Usage: !cmd <command>",
    "api_data": "API Data: {data}",
    "api_error": "API Error: {error}",
}

# Defaults
DEFAULT_MESSAGE_LOG_PATH: Final[str] = "message_log.txt"
DEFAULT_FETCH_TIMEOUT_SECONDS: Final[float] = 10.0
DEFAULT_REPLY_TIMEOUT_SECONDS: Final[float] = 15.0
DEFAULT_LOCK_TIMEOUT_SECONDS: Final[float] = 5.0
