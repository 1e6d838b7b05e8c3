"""
Child-extractor caching for DazzleChain.

Implicit trees are described by a child extractor function that is called
again on every traversal. Wrapping the extractor in a CachingChildExtractor
makes the children of each value a cached sequence that is computed once and
then shared by all traversals (and all positions in a tree where the same
value reappears).
"""

import logging
import threading
from typing import Any, Callable, Hashable, Iterable, Optional

from cachetools import LRUCache, TTLCache

from ..config import CacheConfig
from ..core.sequence import Sequence
from ..errors import require_callable
from .adapter import CachedSequence

logger = logging.getLogger(__name__)


class _EvictionLogging:
    """Mixin for cachetools caches that reports evicted keys."""

    def popitem(self):
        key, value = super().popitem()
        logger.debug("Evicted children of %r", key)
        return key, value


class _LRUCache(_EvictionLogging, LRUCache):
    pass


class _TTLCache(_EvictionLogging, TTLCache):
    pass


class CachingChildExtractor:
    """
    Memoizing wrapper around a child extractor.

    Results are keyed by the item itself, so items must be hashable; an
    unhashable item bypasses the cache and is extracted every time. The
    cache is an LRU cache bounded by `max_size`, or a TTL cache when `ttl`
    is configured.

    Example:
        children = CachingChildExtractor(lambda n: expensive_lookup(n))
        tree = Sequence.of(root).breadth_first(children)
        tree.to_list()   # extractor called once per node
        tree.to_list()   # served from the cache
    """

    def __init__(self,
                 extractor: Callable[[Any], Optional[Iterable[Any]]],
                 config: Optional[CacheConfig] = None):
        """
        Initialize caching extractor.

        Args:
            extractor: The underlying child extractor to wrap
            config: Cache sizing (10000 entries, no expiry by default)
        """
        self._extractor = require_callable(extractor, "extractor")
        self.config = (config or CacheConfig()).ensure_valid()
        self._cache = self._create_cache()
        self._lock = threading.RLock()

        # Statistics
        self.hits = 0
        self.misses = 0

    def _create_cache(self):
        if self.config.ttl is not None:
            return _TTLCache(maxsize=self.config.max_size, ttl=self.config.ttl)
        return _LRUCache(maxsize=self.config.max_size)

    def __call__(self, item: Any) -> Sequence:
        """Return the (cached) children of `item`."""
        try:
            hash(item)
        except TypeError:
            return Sequence.from_iterable(self._extractor(item))

        with self._lock:
            children = self._cache.get(item)
            if children is not None:
                self.hits += 1
                return children

            self.misses += 1
            logger.debug("Child cache miss for %r", item)
            children = CachedSequence(self._deferred(item))
            self._cache[item] = children
            return children

    def _deferred(self, item: Hashable) -> Sequence:
        # The extractor itself runs only when the children are first pulled
        return Sequence.from_iterator_factory(lambda: self._extractor(item) or ())

    def invalidate(self, item: Any = None) -> None:
        """
        Drop cached children.

        Args:
            item: The item whose children to forget; None clears everything
                and resets the statistics
        """
        with self._lock:
            if item is None:
                self._cache.clear()
                self.hits = 0
                self.misses = 0
                logger.debug("Child cache cleared")
            else:
                self._cache.pop(item, None)

    def get_stats(self) -> dict:
        """
        Get cache statistics for monitoring and debugging.
        """
        total_requests = self.hits + self.misses
        hit_rate = self.hits / total_requests if total_requests > 0 else 0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'cache_size': len(self._cache),
            'max_size': self._cache.maxsize,
            'ttl': self.config.ttl,
        }
