from __future__ import annotations

import os
from dataclasses import dataclass

from .constants import (
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_MESSAGE_LOG_PATH,
    DEFAULT_REPLY_TIMEOUT_SECONDS,
)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "y", "on"}


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


@dataclass(frozen=True)
class Settings:
    token: str
    log_level: str = "INFO"
    message_log_path: str = DEFAULT_MESSAGE_LOG_PATH
    # Commands are parsed from message text, so this must also be enabled
    # in the Discord Developer Portal.
    message_content_intent: bool = True
    # 0 disables the bound and falls back to the library default.
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    reply_timeout_seconds: float = DEFAULT_REPLY_TIMEOUT_SECONDS
    registry_lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS


def load_settings() -> Settings:
    token = os.getenv("DISCORD_TOKEN", "").strip()
    if not token:
        raise RuntimeError("DISCORD_TOKEN is required")
    return Settings(
        token=token,
        log_level=_get_str("LOG_LEVEL", "INFO"),
        message_log_path=_get_str("MESSAGE_LOG_PATH", DEFAULT_MESSAGE_LOG_PATH),
        message_content_intent=_get_bool("MESSAGE_CONTENT_INTENT", True),
        fetch_timeout_seconds=_get_float("FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT_SECONDS),
        reply_timeout_seconds=_get_float("REPLY_TIMEOUT_SECONDS", DEFAULT_REPLY_TIMEOUT_SECONDS),
        registry_lock_timeout_seconds=_get_float("REGISTRY_LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT_SECONDS),
    )
