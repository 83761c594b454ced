"""Bounded, time-expiring cache for resolved NFT metadata.

Entries expire ``ttl`` seconds after insertion.  When the cache is full the
oldest-inserted entry is evicted; reads never change eviction order.

Insertion timestamps come from a monotonic clock, so the entries are always
stored oldest first and the expired ones form a prefix of the map.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, NamedTuple

logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    value: Any
    inserted_at: float


class MetadataCache:
    def __init__(
        self,
        capacity: int,
        ttl: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.capacity = capacity
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and not self._is_expired(entry, self._clock())

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for *key*, or *default* if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                return default
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Insert or replace *key*, evicting the oldest entry when full."""
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted %s from metadata cache (capacity %d)", evicted, self.capacity)
            self._entries[key] = _Entry(value, now)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _is_expired(self, entry: _Entry, now: float) -> bool:
        return now - entry.inserted_at >= self.ttl

    def _purge_expired(self, now: float) -> None:
        while self._entries:
            key, entry = next(iter(self._entries.items()))
            if not self._is_expired(entry, now):
                break
            del self._entries[key]
