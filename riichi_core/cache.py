from __future__ import annotations

from collections.abc import Callable, Hashable
from threading import Lock
from typing import Generic, TypeVar

V = TypeVar("V")


class ShantenCache(Generic[V]):
    """Bounded read-through cache keyed by hand signature; oldest entries are evicted first."""

    def __init__(self, max_size: int = 65536) -> None:
        self._max_size = max_size
        self._items: dict[Hashable, V] = {}
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def _prune(self) -> None:
        overflow = len(self._items) - self._max_size
        if overflow <= 0:
            return
        for key in list(self._items)[:overflow]:
            del self._items[key]

    def get(self, key: Hashable) -> V | None:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                self.misses += 1
            else:
                self.hits += 1
            return item

    def put(self, key: Hashable, value: V) -> None:
        if self._max_size <= 0:
            return
        with self._lock:
            self._items[key] = value
            self._prune()

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        item = self.get(key)
        if item is None:
            item = compute()
            self.put(key, item)
        return item

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
