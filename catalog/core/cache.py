"""Time-bounded single-snapshot cache."""
import asyncio
import time
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from cachetools import TTLCache

from catalog.core.logging import get_logger

logger = get_logger("cache")

T = TypeVar("T")

_SNAPSHOT = "snapshot"


class SnapshotCache(Generic[T]):
    """Holds at most one snapshot and reloads it once it is older than ``ttl``.

    The cache is invalidated by time only. Writes to the underlying store do
    not refresh it, so a caller that mutates data and then reads through the
    cache may see the previous snapshot for up to ``ttl`` seconds.

    Expiry is left to a ``TTLCache`` driven by ``clock``. Refreshes are
    serialized by an ``asyncio.Lock``, so concurrent readers either get the
    old snapshot or the fully built new one.
    """

    def __init__(
        self,
        loader: Callable[[], Awaitable[T]],
        ttl: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._loader = loader
        self._clock = clock
        self._entries: TTLCache = TTLCache(maxsize=1, ttl=ttl, timer=clock)
        self._lock = asyncio.Lock()

    @property
    def ttl(self) -> float:
        return self._entries.ttl

    def _current(self) -> Optional[tuple[T, float]]:
        return self._entries.get(_SNAPSHOT)

    async def get(self) -> T:
        """Return the cached snapshot, reloading it if missing or expired."""
        entry = self._current()
        if entry is not None:
            logger.debug("Cache hit")
            return entry[0]

        async with self._lock:
            # Another coroutine may have refreshed while we waited
            entry = self._current()
            if entry is not None:
                return entry[0]

            logger.debug("Cache miss, reloading snapshot")
            snapshot = await self._loader()
            self._entries[_SNAPSHOT] = (snapshot, self._clock())
            return snapshot

    def invalidate(self) -> None:
        """Drop the current snapshot."""
        self._entries.clear()

    @property
    def captured_at(self) -> Optional[float]:
        """Clock reading at which the live snapshot was captured, if any."""
        entry = self._current()
        return entry[1] if entry else None
