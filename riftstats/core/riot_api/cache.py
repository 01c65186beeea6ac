"""
Caching layer for Riot API responses using TTL-based in-memory cache.
"""

import asyncio
import threading
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import structlog

from .constants import RiotRegion

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ENTRIES = 1000


def _consume_exception(task: "asyncio.Future[Any]") -> None:
    # Every caller may have been cancelled before the shared fetch failed
    if not task.cancelled():
        task.exception()


class TTLCache:
    """Thread-safe cache with a TTL per entry and a clear-all overflow policy."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
        coalesce_misses: bool = False,
    ):
        """
        Initialize TTL cache.

        Args:
            max_entries: Entry count above which the whole cache is cleared
                on the next insert
            clock: Source of the current time in seconds
            coalesce_misses: Share one upstream fetch between concurrent
                misses for the same key
        """
        self.max_entries = max_entries
        self.clock = clock
        self.coalesce_misses = coalesce_misses
        self.cache: Dict[str, Tuple[Any, float]] = {}
        self.lock = threading.RLock()
        self._in_flight: Dict[str, "asyncio.Future[Any]"] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache if not expired.

        Args:
            key: Cache key

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        with self.lock:
            entry = self.cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            value, expires_at = entry
            if self.clock() >= expires_at:
                # Lazy eviction
                del self.cache[key]
                self._misses += 1
                logger.debug("Cache expired", key=key)
                return None

            self._hits += 1
            logger.debug("Cache hit", key=key, hits=self._hits)
            return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Set value in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds
        """
        with self.lock:
            if len(self.cache) > self.max_entries:
                count = len(self.cache)
                self.cache.clear()
                logger.info(
                    "Cache overflow, all entries dropped",
                    entries_removed=count,
                    max_entries=self.max_entries,
                )

            self.cache[key] = (value, self.clock() + ttl)
            logger.debug("Cache set", key=key, ttl=ttl)

    async def get_or_fetch(
        self, key: str, ttl: float, fetch: Callable[[], Awaitable[Any]]
    ) -> Any:
        """
        Return the cached value for key, calling fetch on a miss.

        The fetched value is stored with the given TTL. Exceptions raised by
        fetch propagate and nothing is cached.
        """
        value = self.get(key)
        if value is not None:
            return value

        if not self.coalesce_misses:
            value = await fetch()
            self.set(key, value, ttl)
            return value

        with self.lock:
            pending = self._in_flight.get(key)
            if pending is None:
                pending = asyncio.ensure_future(self._fetch_and_store(key, ttl, fetch))
                pending.add_done_callback(_consume_exception)
                self._in_flight[key] = pending
            else:
                logger.debug("Cache miss joined in-flight fetch", key=key)

        # Cancelling one caller must not cancel the fetch other callers share
        return await asyncio.shield(pending)

    async def _fetch_and_store(
        self, key: str, ttl: float, fetch: Callable[[], Awaitable[Any]]
    ) -> Any:
        try:
            value = await fetch()
            self.set(key, value, ttl)
            return value
        finally:
            with self.lock:
                self._in_flight.pop(key, None)

    def clear(self) -> None:
        """Clear all entries from cache."""
        with self.lock:
            count = len(self.cache)
            self.cache.clear()
            self._hits = 0
            self._misses = 0
            logger.info("Cache cleared", entries_removed=count)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self.lock:
            total = self._hits + self._misses
            return {
                "size": len(self.cache),
                "max_entries": self.max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
            }

    def __len__(self) -> int:
        """Get number of entries in cache."""
        return len(self.cache)


class CacheKeys:
    """Deterministic cache keys for every upstream query type."""

    @staticmethod
    def account(game_name: str, tag_line: str, region: RiotRegion) -> str:
        return f"account:{region.routing.value}:{game_name.lower()}#{tag_line.lower()}"

    @staticmethod
    def match_ids(puuid: str, region: RiotRegion, start: int, count: int) -> str:
        return f"matchIds:{region.routing.value}:{puuid}:start={start}:count={count}"

    @staticmethod
    def match_detail(match_id: str, region: RiotRegion) -> str:
        return f"matchDetail:{region.routing.value}:{match_id}"

    @staticmethod
    def summoner(puuid: str, region: RiotRegion) -> str:
        return f"summoner:{region.platform.value}:{puuid}"

    @staticmethod
    def ranked(puuid: str, region: RiotRegion) -> str:
        return f"ranked:{region.platform.value}:{puuid}"
