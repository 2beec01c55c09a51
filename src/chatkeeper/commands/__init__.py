from .interpreter import (
    AddCommand,
    CommandInterpreter,
    LookupCommand,
    ParsedCommand,
    Usage,
    is_command,
    parse_command,
)

__all__ = [
    "AddCommand",
    "CommandInterpreter",
    "LookupCommand",
    "ParsedCommand",
    "Usage",
    "is_command",
    "parse_command",
]
