"""
Tests for CachingChildExtractor.

The extractor cache keys children by item value in a bounded cachetools
cache (LRU by default, TTL when configured) and defers the wrapped
extractor until the children are first pulled.
"""

import logging
import time

import pytest
from cachetools import LRUCache, TTLCache

from dazzlechain import CacheConfig, CachingChildExtractor, InvalidArgument, Sequence

TREE = {
    "root": ["a", "b"],
    "a": ["a1", "a2"],
    "b": ["b1"],
}


class CountingExtractor:
    """Underlying extractor that counts calls per item."""

    def __init__(self, tree):
        self.tree = tree
        self.calls = {}

    def __call__(self, item):
        self.calls[item] = self.calls.get(item, 0) + 1
        return self.tree.get(item)


class TestCachingChildExtractor:

    def test_repeated_traversals_extract_once(self):
        underlying = CountingExtractor(TREE)
        children = CachingChildExtractor(underlying)
        walk = Sequence.of("root").breadth_first(children)

        assert walk.to_list() == ["root", "a", "b", "a1", "a2", "b1"]
        assert walk.to_list() == ["root", "a", "b", "a1", "a2", "b1"]
        assert all(count == 1 for count in underlying.calls.values())
        assert children.misses == 6
        assert children.hits == 6

    def test_extraction_is_deferred_until_pulled(self):
        underlying = CountingExtractor(TREE)
        children = CachingChildExtractor(underlying)

        result = children("root")
        assert underlying.calls == {}
        assert result.to_list() == ["a", "b"]
        assert underlying.calls == {"root": 1}

    def test_same_sequence_returned_on_hit(self):
        children = CachingChildExtractor(CountingExtractor(TREE))
        assert children("a") is children("a")

    def test_leaf_children_are_empty(self):
        children = CachingChildExtractor(CountingExtractor(TREE))
        assert children("a1").is_empty()

    def test_unhashable_items_bypass_cache(self):
        calls = []

        def extractor(item):
            calls.append(item)
            return item[1:]

        children = CachingChildExtractor(extractor)
        assert children([1, 2, 3]).to_list() == [2, 3]
        assert children([1, 2, 3]).to_list() == [2, 3]
        assert len(calls) == 2
        assert children.get_stats()["cache_size"] == 0
        assert children.hits == 0 and children.misses == 0

    def test_lru_eviction(self):
        underlying = CountingExtractor(TREE)
        children = CachingChildExtractor(underlying, CacheConfig(max_size=2))

        for item in ("root", "a", "b"):
            children(item).to_list()
        children("root").to_list()

        assert underlying.calls["root"] == 2
        assert children.get_stats()["cache_size"] == 2

    def test_eviction_is_logged(self, caplog):
        children = CachingChildExtractor(CountingExtractor(TREE), CacheConfig(max_size=1))
        with caplog.at_level(logging.DEBUG, logger="dazzlechain.caching.extractor"):
            children("a")
            children("b")
        assert "Evicted children of 'a'" in caplog.text

    def test_default_cache_is_lru(self):
        children = CachingChildExtractor(CountingExtractor(TREE))
        assert isinstance(children._cache, LRUCache)
        assert children.get_stats()["max_size"] == 10000

    def test_ttl_cache_expires_entries(self):
        underlying = CountingExtractor(TREE)
        children = CachingChildExtractor(underlying, CacheConfig(ttl=0.05))
        assert isinstance(children._cache, TTLCache)

        children("root").to_list()
        children("root").to_list()
        assert underlying.calls["root"] == 1

        time.sleep(0.1)
        children("root").to_list()
        assert underlying.calls["root"] == 2

    def test_invalidate_single_item(self):
        underlying = CountingExtractor(TREE)
        children = CachingChildExtractor(underlying)
        children("a").to_list()
        children("b").to_list()

        children.invalidate("a")
        children("a").to_list()
        children("b").to_list()

        assert underlying.calls == {"a": 2, "b": 1}

    def test_invalidate_everything_resets_stats(self):
        children = CachingChildExtractor(CountingExtractor(TREE))
        children("a")
        children("a")
        children.invalidate()

        stats = children.get_stats()
        assert stats["hits"] == 0
        assert stats["misses"] == 0
        assert stats["cache_size"] == 0

    def test_invalidate_unknown_item_is_harmless(self):
        children = CachingChildExtractor(CountingExtractor(TREE))
        children.invalidate("never seen")

    def test_get_stats(self):
        children = CachingChildExtractor(CountingExtractor(TREE), CacheConfig(max_size=50, ttl=30))
        children("a")
        children("a")
        children("a")
        children("b")

        stats = children.get_stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 2
        assert stats["hit_rate"] == 0.5
        assert stats["cache_size"] == 2
        assert stats["max_size"] == 50
        assert stats["ttl"] == 30

    def test_empty_stats(self):
        assert CachingChildExtractor(CountingExtractor(TREE)).get_stats()["hit_rate"] == 0

    def test_extractor_is_required(self):
        with pytest.raises(InvalidArgument):
            CachingChildExtractor(None)

    @pytest.mark.parametrize("config", [CacheConfig(max_size=0), CacheConfig(ttl=-1)])
    def test_invalid_cache_config(self, config):
        with pytest.raises(InvalidArgument):
            CachingChildExtractor(CountingExtractor(TREE), config)

    def test_extractor_errors_propagate_on_pull(self):
        def broken(item):
            raise KeyError(item)

        children = CachingChildExtractor(broken)
        lazy = children("x")
        with pytest.raises(KeyError):
            lazy.to_list()
