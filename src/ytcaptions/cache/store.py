"""
In-memory TTL cache store.

Entries live in a ``cachetools.TLRUCache`` whose time-to-use function reads
each entry's own TTL, so every key can carry a different expiration. Reads
check the TTL, which means an expired entry is a miss even before the
background sweep has removed it.

Example usage:
    store = CacheStore(CacheConfig(default_ttl=600))
    with store:                       # starts the background sweep
        store.set("video_info:dQw4w9WgXcQ", info, ttl=3600)
        store.get("video_info:dQw4w9WgXcQ")
"""

from __future__ import annotations

import json
import logging
import math
import sys
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from cachetools import TLRUCache

from ytcaptions.exceptions import CacheError, YtCaptionsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheConfig:
    """Cache store settings.

    Attributes:
        enabled: When False, reads miss and writes are rejected
        default_ttl: TTL in seconds applied when ``set`` gets no TTL
        max_keys: Maximum number of live entries (<= 0 means unbounded)
        check_period: Seconds between background sweeps (<= 0 disables it)
    """

    enabled: bool = True
    default_ttl: int = 3600
    max_keys: int = 1000
    check_period: int = 600


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache instrumentation."""

    keys: int
    hits: int
    misses: int
    ksize: int
    vsize: int

    def to_dict(self) -> dict:
        return {
            "keys": self.keys,
            "hits": self.hits,
            "misses": self.misses,
            "ksize": self.ksize,
            "vsize": self.vsize,
        }


class CacheObserver(Protocol):
    """Receives a synchronous callback for every cache mutation."""

    def on_set(self, key: str, value: Any) -> None: ...

    def on_delete(self, key: str, value: Any) -> None: ...

    def on_expire(self, key: str, value: Any) -> None: ...


class LoggingCacheObserver:
    """Logs cache mutations at DEBUG level."""

    def on_set(self, key: str, value: Any) -> None:
        logger.debug("Cache SET: %s", key)

    def on_delete(self, key: str, value: Any) -> None:
        logger.debug("Cache DEL: %s", key)

    def on_expire(self, key: str, value: Any) -> None:
        logger.debug("Cache EXPIRED: %s", key)


@dataclass(frozen=True)
class _Entry:
    value: Any
    ttl: float
    size: int


def approximate_size(value: Any) -> int:
    """Rough size of a cached value in bytes (length of its JSON form)."""
    if isinstance(value, (str, bytes)):
        return len(value)
    try:
        return len(json.dumps(value, default=str))
    except (TypeError, ValueError):
        return sys.getsizeof(value)


def _time_to_use(key: str, entry: _Entry, now: float) -> float:
    if entry.ttl <= 0:
        return math.inf
    return now + entry.ttl


class CacheStore:
    """Synchronous key/value store with per-entry expiration.

    Never evicts to make room: once ``max_keys`` live entries exist, ``set``
    of a new key returns False until something expires or is deleted.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        observers: Iterable[CacheObserver] = (),
        timer: Callable[[], float] = time.monotonic,
    ):
        self.config = config or CacheConfig()
        self._observers = list(observers)
        maxsize = self.config.max_keys if self.config.max_keys > 0 else math.inf
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None

    # Lifecycle

    def start(self) -> None:
        """Start the background sweep thread (no-op if disabled or running)."""
        if self._sweeper is not None or self.config.check_period <= 0:
            return
        self._stop.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop,
            name="ytcaptions-cache-sweep",
            daemon=True,
        )
        self._sweeper.start()
        logger.debug("Cache sweep started (every %ss)", self.config.check_period)

    def close(self) -> None:
        """Stop the background sweep thread."""
        self._stop.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=5)
            self._sweeper = None

    def __enter__(self) -> CacheStore:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self.config.check_period):
            try:
                removed = self.sweep()
                if removed:
                    logger.debug("Cache sweep removed %d expired entries", removed)
            except Exception:
                logger.exception("Cache sweep failed")

    # Operations

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on a miss or expired entry."""
        if not self.config.enabled:
            return None
        try:
            with self._lock:
                entry = self._cache.get(key)
                if entry is None:
                    self._misses += 1
                    return None
                self._hits += 1
                return entry.value
        except Exception as e:
            raise CacheError(
                f"Failed to retrieve from cache: {key}",
                details={"key": key, "error": str(e)},
            ) from e

    def set(self, key: str, value: Any, ttl: float | None = None) -> bool:
        """Store a value.

        Args:
            key: Namespaced cache key
            value: Value to store (kept by reference, not copied)
            ttl: Seconds until expiry; None uses the default TTL, 0 never expires

        Returns:
            True if stored, False if the store is disabled or full
        """
        if not self.config.enabled:
            return False
        ttl = self.config.default_ttl if ttl is None else ttl
        try:
            with self._lock:
                self._expire()
                if key not in self._cache and len(self._cache) >= self._cache.maxsize:
                    logger.warning(f"Cache SET failed, store is full: {key}")
                    return False
                self._cache[key] = _Entry(value, ttl, approximate_size(value))
                for observer in self._observers:
                    observer.on_set(key, value)
                return True
        except YtCaptionsError:
            raise
        except Exception as e:
            raise CacheError(
                f"Failed to save to cache: {key}",
                details={"key": key, "error": str(e)},
            ) from e

    def delete(self, key: str) -> int:
        """Remove a key. Returns the number of entries removed (0 or 1)."""
        if not self.config.enabled:
            return 0
        try:
            with self._lock:
                entry = self._cache.pop(key, None)
                if entry is None:
                    return 0
                for observer in self._observers:
                    observer.on_delete(key, entry.value)
                return 1
        except Exception as e:
            raise CacheError(
                f"Failed to delete from cache: {key}",
                details={"key": key, "error": str(e)},
            ) from e

    def clear(self) -> None:
        """Remove every entry, regardless of TTL."""
        try:
            with self._lock:
                self._cache.clear()
        except Exception as e:
            raise CacheError("Failed to clear cache", details={"error": str(e)}) from e
        logger.info("Cache cleared")

    def sweep(self) -> int:
        """Remove expired entries now. Returns how many were removed."""
        with self._lock:
            return self._expire()

    def stats(self) -> CacheStats:
        """Current key count, hit/miss counters and size accounting."""
        with self._lock:
            self._expire()
            entries = self._live_items()
            return CacheStats(
                keys=len(entries),
                hits=self._hits,
                misses=self._misses,
                ksize=sum(len(key) for key, _ in entries),
                vsize=sum(entry.size for _, entry in entries),
            )

    def keys(self) -> list[str]:
        """Keys of all live entries."""
        with self._lock:
            self._expire()
            return [key for key, _ in self._live_items()]

    def _live_items(self) -> list[tuple[str, _Entry]]:
        items = []
        for key in list(self._cache.keys()):
            entry = self._cache.get(key)
            if entry is not None:
                items.append((key, entry))
        return items

    def _expire(self) -> int:
        expired = self._cache.expire()
        for key, entry in expired:
            for observer in self._observers:
                observer.on_expire(key, entry.value)
        return len(expired)
