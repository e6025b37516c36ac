from __future__ import annotations

import time
from collections import OrderedDict
from typing import Callable, Generic, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class BoundedCache(Generic[K, V]):
    """
    Size- and age-limited mapping.

    Oldest insertions are evicted once `max_entries` is exceeded; entries
    older than `ttl_sec` are dropped on read (ttl_sec=0 keeps them forever).
    """

    def __init__(
        self,
        max_entries: int,
        ttl_sec: float = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        if ttl_sec < 0:
            raise ValueError("ttl_sec must be >= 0")
        self._max_entries = max_entries
        self._ttl = ttl_sec
        self._clock = clock
        self._items: "OrderedDict[K, Tuple[float, V]]" = OrderedDict()

    def get(self, key: K) -> Optional[V]:
        item = self._items.get(key)
        if item is None:
            return None
        stored_at, value = item
        if self._ttl and self._clock() - stored_at >= self._ttl:
            del self._items[key]
            return None
        return value

    def put(self, key: K, value: V) -> None:
        if key in self._items:
            del self._items[key]
        self._items[key] = (self._clock(), value)
        while len(self._items) > self._max_entries:
            self._items.popitem(last=False)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._items)
