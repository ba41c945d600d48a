"""
Concurrency primitives shared by the domain services.

- KeyedLock: one asyncio.Lock per entity key (SKU, order id, queue entry id)
- RevisionCounter: monotonic counter bumped on every mutation
"""

import asyncio
import itertools
from collections.abc import AsyncIterator, Iterable
from contextlib import AsyncExitStack, asynccontextmanager


class KeyedLock:
    """
    Partitioned mutual exclusion.

    Mutations on the same key are serialized; different keys never contend.
    A lock exists only while some caller holds or waits for it, so unknown
    or retired keys leave nothing behind.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def _checkout(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        return lock

    def _checkin(self, key: str) -> None:
        self._users[key] -= 1
        if self._users[key] == 0:
            del self._users[key]
            del self._locks[key]

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """
        Hold the lock for a single key.

        Usage:
            async with locks.acquire("PARA500"):
                ...
        """
        lock = self._checkout(key)
        try:
            async with lock:
                yield
        finally:
            self._checkin(key)

    @asynccontextmanager
    async def acquire_many(self, keys: Iterable[str]) -> AsyncIterator[list[str]]:
        """
        Hold the locks for several keys, taken in sorted order.

        Two callers sharing keys always lock them in the same sequence,
        so they cannot deadlock. Yields the sorted, de-duplicated keys.
        """
        ordered = sorted(set(keys))
        async with AsyncExitStack() as stack:
            for key in ordered:
                await stack.enter_async_context(self.acquire(key))
            yield ordered

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()


class RevisionCounter:
    """Monotonically increasing revision number."""

    def __init__(self) -> None:
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def bump(self) -> int:
        self._value += 1
        return self._value


class SequenceGenerator:
    """Sequential, prefixed identifiers (``ORD-000001``, ``Q-000001``, ...)."""

    def __init__(self, prefix: str, width: int = 6) -> None:
        self._prefix = prefix
        self._width = width
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter):0{self._width}d}"
