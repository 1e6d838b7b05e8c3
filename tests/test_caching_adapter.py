"""
Test suite for CachedSequence with focus on single-source-pass guarantees
and concurrent access patterns.

Tests the caching layer's ability to:
1. Replay identical items from non-deterministic sources
2. Pull the wrapped source at most once in total
3. Share one buffer between partial and concurrent traversals
4. Detect a source that re-enters its own cache
5. Replay a source failure instead of resuming a broken source
"""

import logging
import threading
import time

import pytest

from dazzlechain import ConcurrentCacheFault, ExhaustedCursor, Sequence
from dazzlechain.caching import CachedSequence
from dazzlechain.testing import CountingSource, RandomSource


def test_uncached_random_source_recomputes():
    """Without caching every traversal draws fresh values."""
    source = RandomSource(20, seed=7)
    assert source.to_list() != source.to_list()
    assert source.traversals == 2


def test_cached_random_source_is_stable():
    source = RandomSource(20, seed=7)
    cached = source.cached()

    first = cached.to_list()
    assert cached.to_list() == first
    assert list(cached) == first
    assert source.traversals == 1


def test_source_pulled_at_most_once():
    source = CountingSource(["a", "b", "c"])
    cached = source.cached()

    for _ in range(3):
        assert cached.to_list() == ["a", "b", "c"]

    assert source.traversals == 1
    assert source.pulled == [0, 1, 2]


def test_partial_traversals_share_the_buffer():
    source = CountingSource([1, 2, 3, 4])
    cached = source.cached()

    assert cached.first() == 1
    assert cached.buffered_count == 1
    assert not cached.is_complete

    # A later, longer traversal replays the buffered item and extends the buffer
    assert cached.take(3).to_list() == [1, 2, 3]
    assert source.pulled == [0, 1, 2]

    assert cached.to_list() == [1, 2, 3, 4]
    assert cached.is_complete
    assert source.pulled == [0, 1, 2, 3]
    assert source.traversals == 1


def test_interleaved_cursors_see_the_same_items():
    source = CountingSource(["x", "y", "z"])
    cached = source.cached()
    first = cached.cursor()
    second = cached.cursor()

    assert first.advance() == "x"
    assert first.advance() == "y"
    assert second.advance() == "x"
    assert second.advance() == "y"
    assert second.advance() == "z"
    assert first.advance() == "z"
    assert not first.has_more()
    with pytest.raises(ExhaustedCursor):
        first.advance()
    assert source.pulled == [0, 1, 2]


def test_cached_is_idempotent():
    cached = Sequence.of(1, 2).cached()
    assert isinstance(cached, CachedSequence)
    assert cached.cached() is cached


def test_cached_sequence_composes():
    cached = Sequence.of(3, 1, 2).cached()
    assert cached.where(lambda n: n > 1).ascending().to_list() == [2, 3]
    assert cached.get(2) == 2
    assert cached.count() == 3


def test_get_fills_only_as_far_as_needed():
    source = CountingSource(list("abcdef"))
    cached = source.cached()
    assert cached.get(2) == "c"
    assert source.pulled == [0, 1, 2]
    with pytest.raises(IndexError):
        cached.get(10)
    assert cached.is_complete


def test_cache_of_infinite_sequence_is_lazy():
    naturals = Sequence.generate(lambda n: 0 if n is None else n + 1).cached()
    assert naturals.take(5).to_list() == [0, 1, 2, 3, 4]
    assert naturals.buffered_count == 5
    assert not naturals.is_complete


def test_single_pass_iterator_is_cached():
    """from_iterable() on an iterator makes it re-traversable."""
    sequence = Sequence.from_iterable(iter([1, 2, 3]))
    assert sequence.to_list() == [1, 2, 3]
    assert sequence.to_list() == [1, 2, 3]

    squares = Sequence.from_iterable(n * n for n in range(4))
    assert squares.to_list() == [0, 1, 4, 9]
    assert squares.count() == 4


def test_empty_source():
    cached = Sequence.empty().cached()
    assert cached.to_list() == []
    assert cached.is_complete
    assert cached.count() == 0


class TestSourceFailure:
    """A source error is remembered and replayed, never skipped over."""

    def test_generator_error_is_raised_on_every_traversal(self):
        attempts = []

        def flaky():
            attempts.append(1)
            yield 1
            if len(attempts) == 1:
                raise RuntimeError("source failed")
            yield 2

        cached = Sequence.from_iterator_factory(flaky).cached()
        with pytest.raises(RuntimeError, match="source failed"):
            cached.to_list()
        with pytest.raises(RuntimeError, match="source failed"):
            cached.to_list()
        with pytest.raises(RuntimeError, match="source failed"):
            cached.count()

        assert not cached.is_complete
        assert len(attempts) == 1
        # The buffered prefix is still served
        assert cached.buffered_count == 1
        assert cached.first() == 1
        assert cached.take(1).to_list() == [1]

    def test_transformer_error_does_not_drop_the_item(self):
        failed = []

        def fragile(n):
            if n == 2 and not failed:
                failed.append(n)
                raise ValueError("bad item")
            return n * 10

        cached = Sequence.of(1, 2, 3).transform(fragile).cached()
        with pytest.raises(ValueError, match="bad item"):
            cached.to_list()
        # fragile would now succeed, but the cache must not resume past the failure
        with pytest.raises(ValueError, match="bad item"):
            cached.to_list()
        with pytest.raises(ValueError, match="bad item"):
            cached.get(1)

        assert cached.get(0) == 10
        assert cached.buffered_count == 1

    def test_cursor_stops_at_the_failure_point(self):
        def items():
            yield "a"
            yield "b"
            raise KeyError("c")

        cached = Sequence.from_iterator_factory(items).cached()
        with pytest.raises(KeyError):
            cached.to_list()

        cursor = cached.cursor()
        assert cursor.advance() == "a"
        assert cursor.advance() == "b"
        with pytest.raises(KeyError):
            cursor.has_more()

    def test_failure_is_logged(self, caplog):
        def broken():
            yield 1
            raise RuntimeError("boom")

        cached = Sequence.from_iterator_factory(broken).cached()
        with caplog.at_level(logging.DEBUG, logger="dazzlechain.caching.adapter"):
            with pytest.raises(RuntimeError):
                cached.to_list()
        assert "failed after 1 items" in caplog.text


def test_reader_racing_a_completing_fill_sees_every_item():
    """A lock-free reader that misses the buffer must not trust a fresh completion blindly.

    The buffer below lets another "thread" drain the cache between the reader's
    length check and its completion check, which is the interleaving a real
    concurrent filler can produce.
    """
    cached = Sequence.of(0, 1, 2).cached()

    class RacingBuffer(list):
        raced = False

        def __len__(self):
            length = super().__len__()
            if not self.raced:
                self.raced = True
                cached._drain()
            return length

    cached._buffer = RacingBuffer()

    cursor = cached.cursor()
    seen = []
    while cursor.has_more():
        seen.append(cursor.advance())

    assert seen == [0, 1, 2]
    assert cached.is_complete


def test_reentrant_fill_raises_fault():
    """A source that reads its own cache past the buffer is a lock violation."""
    holder = {}

    def produce():
        yield "a"
        # Reading the cache while it is being filled, past the buffered prefix
        yield holder["cache"].count()

    holder["cache"] = Sequence.from_iterator_factory(produce).cached()
    with pytest.raises(ConcurrentCacheFault):
        holder["cache"].to_list()


def test_reentrant_read_of_buffered_prefix_is_allowed():
    holder = {}

    def produce():
        yield "a"
        yield holder["cache"].first() + "!"

    holder["cache"] = Sequence.from_iterator_factory(produce).cached()
    assert holder["cache"].to_list() == ["a", "a!"]


class TestConcurrentAccess:
    """Several threads traversing one cache."""

    def test_concurrent_traversals_pull_source_once(self):
        pulls = []
        lock = threading.Lock()

        def slow_items():
            for n in range(50):
                with lock:
                    pulls.append(n)
                time.sleep(0.001)
                yield n

        cached = Sequence.from_iterator_factory(slow_items).cached()
        results = [None] * 8

        def worker(slot):
            results[slot] = cached.to_list()

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        expected = list(range(50))
        assert all(result == expected for result in results)
        assert pulls == expected

    def test_concurrent_partial_and_full_traversal(self):
        cached = RandomSource(200, seed=3).cached()
        partial = []
        full = []

        def read_partial():
            partial.extend(cached.take(50))

        def read_full():
            full.extend(cached)

        threads = [threading.Thread(target=read_partial), threading.Thread(target=read_full)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(full) == 200
        assert partial == full[:50]
        assert cached.to_list() == full
