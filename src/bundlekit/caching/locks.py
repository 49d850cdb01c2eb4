"""Per-key asynchronous mutual exclusion."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class _Slot:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class AsyncKeyedMutex:
    """Serializes coroutines that share a key while leaving other keys unblocked.

    Waiters suspend on an :class:`asyncio.Lock`, so a slow build holds no
    worker thread. Slots are reference counted and dropped once the last
    holder or waiter leaves, keeping the table bounded by in-flight keys.
    All callers must share one event loop.
    """

    def __init__(self) -> None:
        self._slots: dict[str, _Slot] = {}

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncIterator[None]:
        slot = self._slots.get(key)
        if slot is None:
            slot = self._slots[key] = _Slot()
        slot.users += 1
        if slot.lock.locked():
            logger.debug("Waiting for in-flight build of %s", key)
        try:
            async with slot.lock:
                yield
        finally:
            slot.users -= 1
            if slot.users == 0 and self._slots.get(key) is slot:
                del self._slots[key]

    def active_keys(self) -> frozenset[str]:
        """Keys currently held or awaited."""
        return frozenset(self._slots)
