"""Test fixtures for DazzleChain consumers.

These fixtures make laziness observable: they record exactly which items a
pipeline pulled and how many traversals it started, so tests can assert
that short-circuiting combinators stop early and that caches never touch
their source twice.
"""

import random
import threading
from typing import Any, Iterable, List, Optional

from ..core.cursor import Cursor
from ..core.sequence import Sequence


class CountingSource(Sequence):
    """A re-traversable sequence over fixed items that logs every pull.

    Example:
        source = CountingSource(["A", "B", "C"])
        assert not source.equals(["A", "X", "Y"])
        assert source.max_pulled_index == 1
    """

    def __init__(self, items: Iterable[Any]):
        """Initialize with the items to serve.

        Args:
            items: Finite collection served, in order, by every traversal
        """
        super().__init__(self._new_cursor)
        self._items = list(items)
        self._lock = threading.Lock()
        self.pulled: List[int] = []
        self.traversals = 0

    def _new_cursor(self) -> Cursor:
        with self._lock:
            self.traversals += 1
        return _CountingCursor(self)

    def _record(self, index: int) -> Any:
        with self._lock:
            self.pulled.append(index)
        return self._items[index]

    @property
    def pull_count(self) -> int:
        """Total number of items handed out across all traversals."""
        return len(self.pulled)

    @property
    def max_pulled_index(self) -> int:
        """Highest position ever pulled, or -1 if nothing was pulled."""
        return max(self.pulled, default=-1)

    def reset(self) -> None:
        """Forget recorded pulls and traversals."""
        with self._lock:
            self.pulled = []
            self.traversals = 0


class _CountingCursor(Cursor):
    """Counts only advance(); has_more() looks at the length alone."""

    def __init__(self, source: CountingSource):
        self._source = source
        self._index = 0

    def has_more(self) -> bool:
        return self._index < len(self._source._items)

    def advance(self) -> Any:
        if not self.has_more():
            raise self._exhausted()
        item = self._source._record(self._index)
        self._index += 1
        return item


class RandomSource(Sequence):
    """A non-deterministic sequence: fresh random numbers on every traversal.

    Useful to demonstrate that uncached sequences recompute while cached()
    ones replay.
    """

    def __init__(self, length: int, low: int = 0, high: int = 1_000_000, seed: Optional[int] = None):
        super().__init__(self._new_cursor)
        self._length = length
        self._low = low
        self._high = high
        self._random = random.Random(seed)
        self.traversals = 0

    def _new_cursor(self) -> Cursor:
        self.traversals += 1

        def draw(_previous):
            return self._random.randint(self._low, self._high)

        return Sequence.generate(draw).take(self._length).cursor()
