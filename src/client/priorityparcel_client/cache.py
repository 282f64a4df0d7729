# priorityparcel_client/cache.py
from __future__ import annotations
import time
import typing as t
from dataclasses import dataclass


@dataclass
class _Entry:
    data: t.Any
    updated_at: float


class QueryCache:
    """Latest successful response per resource path.

    ``fetch`` serves the cached value while it is younger than ``stale_time``
    seconds and refetches afterwards. A failed refetch leaves the old entry.
    """

    def __init__(self, clock: t.Callable[[], float] = time.monotonic):
        self.clock = clock
        self._entries: dict[str, _Entry] = {}

    def get(self, key: str) -> t.Any | None:
        entry = self._entries.get(key)
        return entry.data if entry else None

    def is_fresh(self, key: str, stale_time: float) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self.clock() - entry.updated_at < stale_time

    def set(self, key: str, data: t.Any) -> None:
        self._entries[key] = _Entry(data=data, updated_at=self.clock())

    def fetch(self, key: str, fetcher: t.Callable[[], t.Any], *, stale_time: float = 0.0) -> t.Any:
        if self.is_fresh(key, stale_time):
            return self._entries[key].data
        data = fetcher()
        self.set(key, data)
        return data

    def invalidate(self, prefix: str) -> None:
        for key in [k for k in self._entries if k.startswith(prefix)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries
