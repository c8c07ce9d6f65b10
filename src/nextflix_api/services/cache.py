"""Read-through response cache with TTL expiry and a bounded entry count."""

import asyncio
import json
import logging
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_cache_key(operation: str, **params: Any) -> str:
    """Build a deterministic cache key for an operation and its parameters.

    Parameters are serialized as JSON with sorted keys, so the same logical
    request always yields the same key regardless of argument order, and
    any differing parameter (including ``None`` vs. a value) yields a
    different key.
    """
    if not params:
        return f"movies:{operation}"
    serialized = json.dumps(params, sort_keys=True, separators=(",", ":"), default=str)
    return f"movies:{operation}:{serialized}"


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the monotonic time it expires at."""

    value: Any
    expires_at: float


@dataclass(frozen=True)
class CacheStats:
    """Counters describing cache behaviour since creation or last clear."""

    hits: int
    misses: int
    size: int


class ResponseCache:
    """In-memory LRU cache with per-entry TTL.

    ``get_or_compute`` returns the stored value on a hit. On a miss it awaits
    the compute function, stores the result and returns it. Concurrent
    misses for the same key share one computation. Failures are never
    stored.

    A ``ttl`` or ``max_entries`` of zero disables storage; every call then
    computes.
    """

    def __init__(
        self,
        ttl: float = 300.0,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Seconds an entry stays valid.
            max_entries: Maximum number of stored entries. The least recently
                used entry is evicted on overflow.
            clock: Monotonic time source, injectable for tests.
        """
        self.ttl = max(0.0, ttl)
        self.max_entries = max(0, max_entries)
        self._clock = clock
        self._lock = Lock()
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._inflight: dict[str, asyncio.Future[Any]] = {}
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        """Whether results are stored at all."""
        return self.ttl > 0 and self.max_entries > 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._lookup(key, count=False) is not None

    def _lookup(self, key: str, count: bool = True) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at <= self._clock():
                del self._entries[key]
                entry = None
            if entry is None:
                if count:
                    self._misses += 1
                return None
            self._entries.move_to_end(key)
            if count:
                self._hits += 1
            return entry

    def get(self, key: str) -> Any | None:
        """Return the live value for ``key`` or ``None``."""
        entry = self._lookup(key)
        return entry.value if entry is not None else None

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, evicting the oldest entries on overflow."""
        if not self.enabled:
            return
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + self.ttl)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache evicted %s", evicted)

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        """Return hit/miss counters and the current size."""
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))

    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key``, computing and storing it on a miss."""
        entry = self._lookup(key)
        if entry is not None:
            logger.debug("Cache hit %s", key)
            return entry.value

        pending = self._inflight.get(key)
        if pending is not None:
            logger.debug("Cache miss %s, awaiting in-flight computation", key)
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                # The leading request went away; compute for this caller instead.
                return await self.get_or_compute(key, compute)

        logger.debug("Cache miss %s", key)
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            value = await compute()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved so an un-awaited future does not log a warning.
            future.exception()
            raise
        else:
            self.set(key, value)
            future.set_result(value)
            return value
        finally:
            self._inflight.pop(key, None)
