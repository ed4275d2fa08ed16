from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Hashable, Optional, TypeVar
import threading

import structlog

from deadyet.config import Settings


log = structlog.get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_CACHE_SIZE = 8192

_MISSING = object()


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int
    misses: int
    evictions: int
    size: int
    maxsize: int


class BoundedCache(Generic[K, V]):
    """Thread-safe, fixed capacity, least-recently-used mapping."""

    def __init__(self, maxsize: int = DEFAULT_CACHE_SIZE) -> None:
        if maxsize < 1:
            raise ValueError(f"cache size must be at least 1, got {maxsize}")
        self._lock = threading.Lock()
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._maxsize = maxsize
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(self, key: K, default=_MISSING):
        """Return the cached value and mark it as recently used.

        Without a default, a miss raises KeyError, since None is a legitimate
        cached value.
        """
        with self._lock:
            try:
                value = self._entries[key]
            except KeyError:
                self._misses += 1
                if default is _MISSING:
                    raise
                return default
            self._entries.move_to_end(key)
            self._hits += 1
            return value

    def put(self, key: K, value: V) -> None:
        """Store a value, evicting the least recently used entry when full."""
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            if len(self._entries) > self._maxsize:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                log.debug("cache evicted", key=evicted, maxsize=self._maxsize)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                size=len(self._entries),
                maxsize=self._maxsize,
            )

    def __contains__(self, key: K) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_default_cache: Optional[BoundedCache] = None
_default_lock = threading.Lock()


def default_cache() -> BoundedCache:
    """Process-wide cache, created on first use with the configured size."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = BoundedCache(Settings.from_env().cache_size)
        return _default_cache
