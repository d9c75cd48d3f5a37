from __future__ import annotations

from asyncio import Lock
import logging
import time
from typing import Callable, TypeVar
import uuid

from ..config import GAME_TTL_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GameStore:
    """An in-memory registry of running games with idle expiry.

    Every access goes through one async lock, so roll submissions for a game
    are applied one at a time.
    """

    def __init__(
        self,
        ttl_seconds: float = GAME_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        self._store: dict[str, tuple[dict, float | None]] = {}

    def _expiry(self) -> float | None:
        if self._ttl <= 0:
            return None
        return self._clock() + self._ttl

    def _purge(self) -> None:
        now = self._clock()
        expired = [
            gid
            for gid, (_, expires_at) in self._store.items()
            if expires_at is not None and expires_at <= now
        ]
        for gid in expired:
            self._store.pop(gid, None)
        if expired:
            logger.info("Expired %d idle game(s)", len(expired))

    async def create(self, state: dict) -> str:
        gid = uuid.uuid4().hex
        async with self._lock:
            self._purge()
            self._store[gid] = (state, self._expiry())
        return gid

    async def get(self, gid: str) -> dict | None:
        async with self._lock:
            self._purge()
            entry = self._store.get(gid)
            if not entry:
                return None
            state, _ = entry
            self._store[gid] = (state, self._expiry())
            return state

    async def update(self, gid: str, fn: Callable[[dict], T]) -> T | None:
        """Run ``fn`` on the stored game while holding the lock."""
        async with self._lock:
            self._purge()
            entry = self._store.get(gid)
            if not entry:
                return None
            state, _ = entry
            result = fn(state)
            self._store[gid] = (state, self._expiry())
            return result

    async def delete(self, gid: str) -> bool:
        async with self._lock:
            return self._store.pop(gid, None) is not None

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


games = GameStore()
