from __future__ import annotations


class ChatKeeperError(Exception):
    """Base class for recoverable, per-event failures."""


class RegistryError(ChatKeeperError):
    pass


class LockUnavailable(RegistryError):
    """Raised when the registry lock cannot be acquired in time."""

    def __init__(self, mode: str, timeout: float | None) -> None:
        self.mode = mode
        self.timeout = timeout
        super().__init__(f"Failed to acquire {mode} lock on commands (timeout={timeout}s)")


class FetchError(ChatKeeperError):
    """Any failure while retrieving the external API payload."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(reason)
