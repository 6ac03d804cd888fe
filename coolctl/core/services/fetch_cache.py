"""
In-memory fetch cache — keep the previous data while refetching.

Every API list is fetched through :meth:`FetchCache.get`.  The cache
keeps the last value that was fetched successfully for each key, so a
failing or slow refetch never blanks a list:

    - fetch succeeds  → new value stored and returned (``stale=False``)
    - fetch fails     → last-good value returned with ``stale=True``
                        and the error attached; raises only when the
                        key has never been fetched successfully
    - within ``ttl``  → cached value returned without refetching

Thread safety: a per-key lock makes concurrent ``get()`` calls on the
same key share one fetch; different keys fetch in parallel.  ``peek()``
never takes the key lock, so readers never wait on an in-flight fetch.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any = None
    fetched_at: float = 0.0
    has_value: bool = False
    in_flight: bool = False
    error: str = ""


@dataclass
class CacheRead:
    """What a reader gets back from the cache."""

    value: Any
    stale: bool = False
    error: str = ""
    age_seconds: float = 0.0
    from_cache: bool = False

    def to_dict(self) -> dict:
        return {
            "stale": self.stale,
            "error": self.error,
            "age_seconds": round(self.age_seconds),
            "from_cache": self.from_cache,
        }


class FetchCache:
    """Last-good-value cache keyed by fetch parameters.

    Args:
        ttl: Seconds a successful value is served without refetching.
            0 (default) refetches on every ``get()``.
        clock: Monotonic time source (overridable in tests).
    """

    def __init__(self, ttl: float = 0.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry] = {}
        self._key_locks: dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            if key not in self._key_locks:
                self._key_locks[key] = threading.Lock()
            return self._key_locks[key]

    def _entry(self, key: Hashable) -> CacheEntry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = CacheEntry()
            return entry

    def get(self, key: Hashable, fetch: Callable[[], Any], *, force: bool = False) -> CacheRead:
        """Return fresh data for *key*, falling back to the last-good value."""
        with self._lock_for(key):
            entry = self._entry(key)
            now = self._clock()

            if not force and entry.has_value and self.ttl > 0:
                age = now - entry.fetched_at
                if age < self.ttl:
                    logger.debug("cache HIT for %s (age %.1fs)", key, age)
                    return CacheRead(value=entry.value, age_seconds=age, from_cache=True)

            entry.in_flight = True
            try:
                value = fetch()
            except Exception as exc:
                entry.error = str(exc)
                if not entry.has_value:
                    logger.debug("cache MISS for %s failed with no fallback: %s", key, exc)
                    raise
                age = now - entry.fetched_at
                logger.warning("Refetch of %s failed, serving data from %.0fs ago: %s", key, age, exc)
                return CacheRead(
                    value=entry.value, stale=True, error=str(exc),
                    age_seconds=age, from_cache=True,
                )
            finally:
                entry.in_flight = False

            entry.value = value
            entry.fetched_at = self._clock()
            entry.has_value = True
            entry.error = ""
            logger.debug("cache MISS for %s (fetched)", key)
            return CacheRead(value=value)

    def peek(self, key: Hashable) -> CacheRead | None:
        """Last-good value for *key* without fetching, or None."""
        with self._guard:
            entry = self._entries.get(key)
        if entry is None or not entry.has_value:
            return None
        return CacheRead(
            value=entry.value,
            stale=entry.in_flight or bool(entry.error),
            error=entry.error,
            age_seconds=self._clock() - entry.fetched_at,
            from_cache=True,
        )

    def is_in_flight(self, key: Hashable) -> bool:
        with self._guard:
            entry = self._entries.get(key)
        return bool(entry and entry.in_flight)

    def invalidate(self, key: Hashable) -> None:
        """Forget *key*.  A fetch already running for it finishes on its own."""
        with self._guard:
            self._entries.pop(key, None)
            self._key_locks.pop(key, None)

    def clear(self) -> None:
        with self._guard:
            self._entries.clear()
            self._key_locks.clear()

    def keys(self) -> list[Hashable]:
        with self._guard:
            return [k for k, e in self._entries.items() if e.has_value]
