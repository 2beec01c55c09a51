"""Discord message logger, moderator and custom-command responder."""

__version__ = "0.1.0"
