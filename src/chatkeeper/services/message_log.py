from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import IO, Optional

from ..models import MessageEvent, format_log_record

log = logging.getLogger("chatkeeper.message_log")


class MessageLogSink:
    """Append-only text log with one line per observed message.

    Appends are serialized with an ``asyncio.Lock`` so concurrent dispatches
    never interleave partial lines; the blocking write runs in a worker thread.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._fh: Optional[IO[str]] = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def open(self) -> None:
        if self._fh is not None:
            return
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")
        log.info("Message log opened at %s", self.path)

    def _write(self, fh: IO[str], line: str) -> None:
        fh.write(line)
        fh.flush()

    async def append(self, event: MessageEvent) -> None:
        line = format_log_record(event)
        async with self._lock:
            if self._fh is None:
                raise RuntimeError("Message log is not open")
            await asyncio.to_thread(self._write, self._fh, line)

    async def close(self) -> None:
        async with self._lock:
            if self._fh is None:
                return
            fh, self._fh = self._fh, None
            fh.close()
        log.info("Message log closed")
