"""Simple in-memory TTL cache. No Redis needed for this service.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
a prediction may be fetched twice (once per worker). The keyspace is
bounded by the configured match ids times the two detail states, so there
is no capacity limit beyond the TTL.
"""

import threading
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    key: Hashable
    value: Any
    created_at: float
    ttl_seconds: float

    def is_fresh(self, now: float) -> bool:
        return now - self.created_at <= self.ttl_seconds


def prediction_key(match_id: str, detail: bool) -> tuple[str, str, bool]:
    """Cache key for one match query. Differs whenever match id or detail flag differ."""
    return ("predictor", match_id, bool(detail))


class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._store: dict[Hashable, CacheEntry] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Any | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_fresh(self._clock()):
                return entry.value
            del self._store[key]
            return None

    def set(self, key: Hashable, value: Any, ttl_seconds: float = 20) -> None:
        entry = CacheEntry(key=key, value=value, created_at=self._clock(), ttl_seconds=ttl_seconds)
        with self._lock:
            self._store[key] = entry

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
