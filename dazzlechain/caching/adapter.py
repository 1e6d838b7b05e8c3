"""
Caching sequence implementation for DazzleChain.

Provides a memoizing layer that can wrap any sequence, so that expensive
or non-deterministic sources are evaluated only once no matter how many
times (or from how many threads) the result is traversed.
"""

import logging
import threading
from typing import Any, Iterable, List, Optional

from ..core.cursor import Cursor, cursor_of
from ..core.sequence import Sequence
from ..errors import ConcurrentCacheFault, require_count

logger = logging.getLogger(__name__)


class CachedSequence(Sequence):
    """
    Memoizing wrapper around any sequence.

    All traversals share one append-only buffer. A traversal first replays
    what is already buffered (no locking involved), and only once it runs
    past the buffered prefix does it take the lock and pull one more item
    from the single underlying source cursor. That cursor is created lazily
    on first need and never recreated, so the wrapped source is traversed at
    most once in total. When the source reports exhaustion the buffer is
    marked complete and from then on is authoritative.

    If the source raises while being pulled, the error is remembered and the
    source cursor is dropped. Every later traversal replays the buffered
    prefix and then raises that same error at the point where the failure
    happened, instead of resuming a source left in an unknown state.

    Example:
        dice = Sequence.generate(lambda _: random.randint(1, 6)).take(10).cached()
        assert dice.to_list() == dice.to_list()
    """

    def __init__(self, source: Optional[Iterable[Any]]):
        """
        Initialize the cache.

        Args:
            source: The sequence (or any iterable) whose output is memoized
        """
        super().__init__(self._new_cursor)
        self._source = source
        self._buffer: List[Any] = []
        self._lock = threading.RLock()
        self._source_cursor: Optional[Cursor] = None
        self._complete = False
        self._filling = False
        self._failure: Optional[BaseException] = None

    def _new_cursor(self) -> 'CachingCursor':
        return CachingCursor(self)

    @property
    def is_complete(self) -> bool:
        """True once the source has been drained into the buffer."""
        return self._complete

    @property
    def buffered_count(self) -> int:
        """Number of items buffered so far."""
        return len(self._buffer)

    def cached(self) -> 'CachedSequence':
        return self

    def _is_available(self, index: int) -> bool:
        """Make sure the buffer holds an item at `index`, if the source has one.

        Buffered positions are answered without locking. Otherwise the lock
        is taken and the source pulled until the position is filled or the
        source runs out.

        Raises:
            ConcurrentCacheFault: If the source, while being pulled, reads
                this same cache past the buffered prefix
            Exception: Whatever the source raised, on this pull and on every
                later pull past the buffered prefix
        """
        if index < len(self._buffer):
            return True
        # The buffer may have grown between the two reads; once complete it
        # no longer changes, so read it again.
        if self._complete:
            return index < len(self._buffer)

        with self._lock:
            while index >= len(self._buffer) and not self._complete:
                if self._failure is not None:
                    raise self._failure
                if self._filling:
                    logger.debug("Re-entrant fill of %r at index %d", self, index)
                    raise ConcurrentCacheFault(
                        "Cached sequence was read past its buffer by its own source"
                    )
                self._filling = True
                try:
                    self._pull_one()
                except Exception as error:
                    self._failure = error
                    self._source_cursor = None
                    logger.debug("Source of %r failed after %d items: %r",
                                 self, len(self._buffer), error)
                    raise
                finally:
                    self._filling = False
            return index < len(self._buffer)

    def _pull_one(self) -> None:
        if self._source_cursor is None:
            self._source_cursor = cursor_of(self._source)
        if self._source_cursor.has_more():
            self._buffer.append(self._source_cursor.advance())
        else:
            self._complete = True
            self._source_cursor = None
            logger.debug("Cache %r complete with %d items", self, len(self._buffer))

    def _item_at(self, index: int) -> Any:
        return self._buffer[index]

    def _drain(self) -> None:
        while not self._complete:
            self._is_available(len(self._buffer))

    def to_list(self) -> List[Any]:
        self._drain()
        return list(self._buffer)

    def count(self) -> int:
        self._drain()
        return len(self._buffer)

    def get(self, index: int) -> Any:
        require_count(index, "index")
        if not self._is_available(index):
            raise IndexError(f"No item at index {index}")
        return self._buffer[index]


class CachingCursor(Cursor):
    """Cursor over a CachedSequence; reads the shared buffer by position."""

    def __init__(self, cache: CachedSequence):
        self._cache = cache
        self._index = 0

    def has_more(self) -> bool:
        return self._cache._is_available(self._index)

    def advance(self) -> Any:
        if not self.has_more():
            raise self._exhausted()
        item = self._cache._item_at(self._index)
        self._index += 1
        return item
