# services/active_order/src/active_order/locks.py
"""
Per-session locks for serializing active order resolution.

Only used when ``session_locking`` is enabled. Locks live in process memory,
so resolutions are serialized within one worker only.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

from libs.cart_shared.logging import get_logger

logger = get_logger(__name__)


class SessionLockRegistry:
    """
    Hands out one ``asyncio.Lock`` per session token.

    A lock is dropped again once no task holds or waits for it.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, token: str) -> AsyncIterator[None]:
        """Hold the lock of ``token`` for the duration of the block."""
        lock = self._locks.setdefault(token, asyncio.Lock())
        self._users[token] = self._users.get(token, 0) + 1
        try:
            if lock.locked():
                logger.debug(f"Waiting for resolution in progress on session {token}")
            async with lock:
                yield
        finally:
            self._users[token] -= 1
            if self._users[token] == 0:
                del self._users[token]
                del self._locks[token]
