"""
In-process named caches for the employee service.
"""

import inspect
import threading
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, MutableMapping, Optional, Tuple, TYPE_CHECKING, Union

from cachetools import LRUCache

from shared.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


# Cache names
ALL_EMPLOYEES = "employees"
EMPLOYEE_BY_ID = "employee"
EMPLOYEES_BY_NAME = "employees_by_name"
HIGHEST_SALARY = "highest_salary"
TOP_EARNERS = "top_earners"

CACHE_NAMES = (ALL_EMPLOYEES, EMPLOYEE_BY_ID, EMPLOYEES_BY_NAME, HIGHEST_SALARY, TOP_EARNERS)

# Fixed keys
ALL_KEY = "all"
MAX_KEY = "max"

# Name searches are keyed by caller input
DEFAULT_MAX_SIZES = {EMPLOYEES_BY_NAME: 1024}

ComputeFn = Callable[[], Union[Any, Awaitable[Any]]]


class CacheStore:
    """A set of independent named caches without expiry.

    Entries live for the process lifetime and leave only through explicit
    eviction, except in caches given a maximum size, which drop their least
    recently used entry when full. Every cache name has its own lock; no lock
    is held while a value is being computed, so concurrent misses on one key
    may each run ``compute_fn`` and the last result stored wins.

    Each cache also carries a generation number bumped by every eviction. A
    computed value is stored only if no eviction happened on that cache while
    it was being computed.
    """

    def __init__(
        self,
        cache_names: Iterable[str] = CACHE_NAMES,
        *,
        max_sizes: Optional[Dict[str, int]] = None,
        metrics: Optional["MetricsCollector"] = None,
    ):
        self.logger = get_logger("employees.cache_store")
        self.metrics = metrics
        max_sizes = DEFAULT_MAX_SIZES if max_sizes is None else max_sizes

        self._caches: Dict[str, MutableMapping[Hashable, Any]] = {}
        for name in cache_names:
            maxsize = max_sizes.get(name)
            self._caches[name] = LRUCache(maxsize=maxsize) if maxsize else {}

        self._locks: Dict[str, threading.Lock] = {name: threading.Lock() for name in self._caches}
        self._generations: Dict[str, int] = {name: 0 for name in self._caches}
        self._hits: Dict[str, int] = {name: 0 for name in self._caches}
        self._misses: Dict[str, int] = {name: 0 for name in self._caches}

    def _cache(self, cache_name: str) -> MutableMapping[Hashable, Any]:
        try:
            return self._caches[cache_name]
        except KeyError:
            raise ValueError(f"Unknown cache: {cache_name}") from None

    def _lookup(self, cache_name: str, key: Hashable) -> Tuple[bool, Any, int]:
        cache = self._cache(cache_name)
        with self._locks[cache_name]:
            found = key in cache
            value = cache[key] if found else None
            generation = self._generations[cache_name]
            if found:
                self._hits[cache_name] += 1
            else:
                self._misses[cache_name] += 1

        self._count("cache_hits_total" if found else "cache_misses_total", cache_name)
        return found, value, generation

    def contains(self, cache_name: str, key: Hashable) -> bool:
        cache = self._cache(cache_name)
        with self._locks[cache_name]:
            return key in cache

    async def get_or_compute(self, cache_name: str, key: Hashable, compute_fn: ComputeFn) -> Any:
        """Return the cached value, computing and storing it on a miss.

        Exceptions from ``compute_fn`` propagate and nothing is stored. A
        value computed across an eviction of ``cache_name`` is returned to
        the caller but not stored.
        """
        found, value, generation = self._lookup(cache_name, key)
        if found:
            return value

        self.logger.info("Cache miss", cache=cache_name, key=key)

        value = compute_fn()
        if inspect.isawaitable(value):
            value = await value

        if not self._store(cache_name, key, value, generation):
            self.logger.info("Discarded value computed across an eviction", cache=cache_name, key=key)
        return value

    def put(self, cache_name: str, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        self._store(cache_name, key, value)

    def _store(self, cache_name: str, key: Hashable, value: Any, generation: Optional[int] = None) -> bool:
        cache = self._cache(cache_name)
        with self._locks[cache_name]:
            if generation is not None and generation != self._generations[cache_name]:
                return False
            cache[key] = value
        self.logger.debug("Cached value", cache=cache_name, key=key)
        return True

    def evict(self, cache_name: str, key: Hashable) -> bool:
        """Remove one entry; returns whether it was present."""
        cache = self._cache(cache_name)
        with self._locks[cache_name]:
            self._generations[cache_name] += 1
            removed = key in cache
            cache.pop(key, None)
        self._count("cache_evictions_total", cache_name, scope="key")
        self.logger.debug("Evicted cache entry", cache=cache_name, key=key, removed=removed)
        return removed

    def evict_where(self, cache_name: str, predicate: Callable[[Hashable, Any], bool]) -> int:
        """Remove entries for which ``predicate(key, value)`` is true."""
        cache = self._cache(cache_name)
        with self._locks[cache_name]:
            self._generations[cache_name] += 1
            doomed = [key for key, value in cache.items() if predicate(key, value)]
            for key in doomed:
                del cache[key]
        if doomed:
            self._count("cache_evictions_total", cache_name, scope="key")
            self.logger.debug("Evicted cache entries", cache=cache_name, keys=doomed)
        return len(doomed)

    def evict_all(self, cache_name: str) -> int:
        """Remove every entry of one cache; returns how many were dropped."""
        cache = self._cache(cache_name)
        with self._locks[cache_name]:
            self._generations[cache_name] += 1
            dropped = len(cache)
            cache.clear()
        self._count("cache_evictions_total", cache_name, scope="all")
        self.logger.debug("Evicted cache", cache=cache_name, dropped=dropped)
        return dropped

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Per-cache size, hit and miss counts."""
        summary: Dict[str, Dict[str, int]] = {}
        for cache_name, cache in self._caches.items():
            with self._locks[cache_name]:
                summary[cache_name] = {
                    "size": len(cache),
                    "hits": self._hits[cache_name],
                    "misses": self._misses[cache_name],
                }
        return summary

    def _count(self, metric_name: str, cache_name: str, **labels) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, cache_type=cache_name, **labels)
