from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..constants import ADD_SUBCOMMAND, COMMAND_PREFIX, REPLIES
from ..errors import RegistryError
from ..services.command_registry import CommandRegistry
from ..services.stats import RuntimeStats

log = logging.getLogger("chatkeeper.interpreter")


@dataclass(frozen=True)
class AddCommand:
    name: str
    response: str


@dataclass(frozen=True)
class LookupCommand:
    name: str


@dataclass(frozen=True)
class Usage:
    text: str


ParsedCommand = Union[AddCommand, LookupCommand, Usage]


def is_command(content: str) -> bool:
    return content.strip().startswith(COMMAND_PREFIX)


def parse_command(content: str) -> Optional[ParsedCommand]:
    """Parse ``!cmd add <name> <response...>`` or ``!cmd <name>``.

    Only the first two spaces split the line, then the ``add`` argument is
    split once more; the response keeps every remaining space. Returns
    ``None`` for text that is not a command at all.
    """
    text = content.strip()
    if not text.startswith(COMMAND_PREFIX):
        return None

    parts = text.split(" ", 2)
    if len(parts) < 2 or not parts[1]:
        return Usage(REPLIES["usage_cmd"])

    sub = parts[1]
    if sub != ADD_SUBCOMMAND:
        return LookupCommand(sub)

    if len(parts) < 3:
        return Usage(REPLIES["usage_add"])
    name_and_response = parts[2].split(" ", 1)
    if len(name_and_response) < 2:
        return Usage(REPLIES["usage_add"])
    name, response = name_and_response
    if not name or not response:
        return Usage(REPLIES["usage_add"])
    return AddCommand(name=name, response=response)


class CommandInterpreter:
    def __init__(self, registry: CommandRegistry, stats: Optional[RuntimeStats] = None) -> None:
        self.registry = registry
        self.stats = stats or RuntimeStats()

    async def execute(self, content: str) -> Optional[str]:
        """Run one command line against the registry and return the reply text."""
        parsed = parse_command(content)
        if parsed is None:
            return None

        if isinstance(parsed, Usage):
            return parsed.text

        if isinstance(parsed, AddCommand):
            try:
                await self.registry.insert(parsed.name, parsed.response)
            except RegistryError as e:
                log.error("Error adding command %r: %s", parsed.name, e)
                return REPLIES["add_failed"].format(error=e)
            self.stats.commands_added += 1
            log.info("Added command %s -> %s", parsed.name, parsed.response)
            return REPLIES["added"].format(name=parsed.name, response=parsed.response)

        try:
            response = await self.registry.lookup(parsed.name)
        except RegistryError as e:
            log.error("Error looking up command %r: %s", parsed.name, e)
            return REPLIES["lookup_failed"].format(error=e)
        if response is None:
            return REPLIES["not_found"]
        self.stats.commands_served += 1
        return response
