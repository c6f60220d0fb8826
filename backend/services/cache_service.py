import time
from typing import Any, Hashable

from config import settings


class TTLCache:
    """Small in-memory cache; entries expire ``ttl`` seconds after being set."""

    def __init__(self, ttl: int | None = None, max_entries: int = 64):
        self._store: dict[Hashable, tuple[Any, float]] = {}
        self._ttl = ttl or settings.cache_ttl_seconds
        self._max_entries = max_entries

    def get(self, key: Hashable) -> Any | None:
        if key in self._store:
            value, ts = self._store[key]
            if time.monotonic() - ts < self._ttl:
                return value
            del self._store[key]
        return None

    def set(self, key: Hashable, value: Any) -> None:
        if key not in self._store and len(self._store) >= self._max_entries:
            # Drop the oldest entry
            oldest = min(self._store, key=lambda k: self._store[k][1])
            del self._store[oldest]
        self._store[key] = (value, time.monotonic())

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
