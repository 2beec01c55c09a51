from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from ..errors import LockUnavailable

log = logging.getLogger("chatkeeper.command_registry")


class ReadWriteLock:
    """Asyncio reader/writer lock.

    Readers share the lock; a writer holds it alone. Once a writer is
    waiting, new readers queue behind it so writes are not starved.
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def write_locked(self) -> bool:
        return self._writer

    async def _wait(self, predicate, timeout: Optional[float]) -> None:
        if timeout is None:
            await self._cond.wait_for(predicate)
        else:
            await asyncio.wait_for(self._cond.wait_for(predicate), timeout)

    @asynccontextmanager
    async def read(self, timeout: Optional[float] = None) -> AsyncIterator[None]:
        async with self._cond:
            try:
                await self._wait(lambda: not self._writer and self._writers_waiting == 0, timeout)
            except asyncio.TimeoutError:
                raise LockUnavailable("read", timeout) from None
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self, timeout: Optional[float] = None) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._wait(lambda: not self._writer and self._readers == 0, timeout)
            except asyncio.TimeoutError:
                raise LockUnavailable("write", timeout) from None
            finally:
                self._writers_waiting -= 1
                # A reader may have been held back only by this waiter.
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


class CommandRegistry:
    """In-memory map of custom command name -> response text.

    Lives for the process lifetime; nothing is persisted.
    """

    def __init__(self, lock_timeout: Optional[float] = None) -> None:
        self._commands: dict[str, str] = {}
        self._lock = ReadWriteLock()
        self._lock_timeout = lock_timeout if lock_timeout else None

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def __len__(self) -> int:
        return len(self._commands)

    async def insert(self, name: str, response: str) -> None:
        async with self._lock.write(self._lock_timeout):
            replaced = name in self._commands
            self._commands[name] = response
        log.debug("Stored command %r (replaced=%s)", name, replaced)

    async def lookup(self, name: str) -> Optional[str]:
        async with self._lock.read(self._lock_timeout):
            return self._commands.get(name)

    async def snapshot(self) -> dict[str, str]:
        async with self._lock.read(self._lock_timeout):
            return dict(self._commands)
