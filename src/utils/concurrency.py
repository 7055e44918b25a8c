"""Shared asyncio concurrency primitives for the collection cache.

Two patterns are exposed:

1. **ReadWriteLock** -- an asyncio reader/writer lock.  Any number of
   readers may hold it at once; a writer holds it alone.  Waiting writers
   block new readers so a steady stream of reads cannot starve a refresh.

2. **SingleFlight** -- collapses concurrent calls for the same key into one
   in-flight awaitable.  The collection cache keys it by collection kind so
   that N requests hitting a cold cache share a single upstream fetch.

Both are loop-agnostic at construction time and may be created before the
event loop starts (e.g. while FastAPI builds ``app.state``).
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Generic, Hashable, TypeVar

_K = TypeVar("_K", bound=Hashable)
_T = TypeVar("_T")


class ReadWriteLock:
    """Writer-preferring reader/writer lock built on ``asyncio.Condition``.

    Usage::

        lock = ReadWriteLock()
        async with lock.read():
            snapshot = items
        async with lock.write():
            items = new_items
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        return self._readers

    @property
    def writer_active(self) -> bool:
        """``True`` while a writer holds the lock."""
        return self._writer

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._waiting_writers == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            # Released before any await so a cancelled reader cannot leak its count.
            self._readers -= 1
            if self._readers == 0:
                await asyncio.shield(self._notify())

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._waiting_writers += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._waiting_writers -= 1
                # A cancelled writer must release readers it was holding back.
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await asyncio.shield(self._notify())

    async def _notify(self) -> None:
        async with self._cond:
            self._cond.notify_all()


class SingleFlight(Generic[_K, _T]):
    """De-duplicate concurrent async calls that share a key.

    The first caller for a key starts the work as a task; callers arriving
    while it runs await the same task and receive the same result (or the
    same exception).  The key is released as soon as the task finishes, so
    the next call after completion starts fresh work.
    """

    def __init__(self) -> None:
        self._inflight: dict[_K, asyncio.Future[_T]] = {}

    def in_flight(self, key: _K) -> bool:
        """Return ``True`` if work for *key* is currently running."""
        return key in self._inflight

    async def do(self, key: _K, fn: Callable[[], Awaitable[_T]]) -> _T:
        """Run ``fn()`` for *key*, or join the call already in flight."""
        existing = self._inflight.get(key)
        if existing is not None:
            return await asyncio.shield(existing)

        task = asyncio.ensure_future(fn())
        self._inflight[key] = task
        task.add_done_callback(lambda _done: self._inflight.pop(key, None))
        # shield() keeps one cancelled waiter from cancelling the shared work.
        return await asyncio.shield(task)
