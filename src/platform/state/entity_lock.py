"""
In-process entity locks

Keyed asyncio locks serializing requests that touch the same record. Keys are
always acquired in sorted order, so two holders can never wait on each other
in a cycle.
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator
import weakref

from src.platform.logging.loguru_io import Logger


def member_lock_key(member_id: int) -> str:
    return f'member:{member_id}'


def inventory_item_lock_key(item_id: int) -> str:
    return f'inventory_item:{item_id}'


def booking_lock_key(booking_id: int) -> str:
    return f'booking:{booking_id}'


class EntityLockRegistry:
    """
    Lazily created asyncio.Lock per key.

    Entries live only while some coroutine holds or waits on the lock, so the
    registry does not grow with the number of records ever touched.
    """

    def __init__(self) -> None:
        self._locks: 'weakref.WeakValueDictionary[str, asyncio.Lock]' = (
            weakref.WeakValueDictionary()
        )

    def _get_lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        """
        Hold every lock in `keys` for the duration of the block.

        Usage:
            async with registry.hold(member_lock_key(1), inventory_item_lock_key(7)):
                ...
        """
        ordered = sorted(set(keys))
        async with AsyncExitStack() as stack:
            for key in ordered:
                await stack.enter_async_context(self._get_lock(key))
            Logger.base.debug(f'🔒 [LOCK] Holding {", ".join(ordered)}')
            yield
