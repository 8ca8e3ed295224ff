"""Bounded, thread-safe cache of per-stylesheet analysis results."""

from __future__ import annotations

import threading
from typing import Any, Hashable

from stylescope.config import AnalysisConfig
from stylescope.model.identity import TargetIdentity
from stylescope.sources import StylesheetSource

DEFAULT_CAPACITY = 50


class AnalysisCache:
    """Memo of analysis results keyed by stylesheet, target and settings.

    When full, the entry inserted first is evicted. Every public method
    takes the lock, so one cache can be shared by worker threads. A miss
    only costs a recomputation.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._data: dict[Hashable, Any] = {}
        self._hits = 0
        self._misses = 0

    @staticmethod
    def key(
        source: StylesheetSource,
        identity: TargetIdentity,
        config: AnalysisConfig | None = None,
    ) -> tuple[Hashable, ...]:
        settings = (config or AnalysisConfig()).file_settings
        return (source.name, source.digest, identity, settings)

    def get(self, key: Hashable) -> Any:
        """Return the cached value for *key*, or None."""
        with self._lock:
            value = self._data.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            if key not in self._data:
                while len(self._data) >= self.capacity:
                    del self._data[next(iter(self._data))]
            self._data[key] = value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "size": len(self._data),
                "capacity": self.capacity,
                "hits": self._hits,
                "misses": self._misses,
            }
