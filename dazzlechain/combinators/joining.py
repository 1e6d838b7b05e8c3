"""Combinators that join several sources: concat, splice and interleave."""

from collections import deque
from typing import Any, Callable, Deque, Iterable, List, Optional

from ..core.cursor import END, Cursor, LookaheadCursor, cursor_of


class ConcatCursor(LookaheadCursor):
    """Walks several sources strictly one after another.

    Cursors for later sources are created only when the earlier ones are
    exhausted. None sources count as empty.
    """

    def __init__(self, sources: List[Optional[Iterable[Any]]]):
        super().__init__()
        self._sources = sources
        self._position = 0
        self._current: Optional[Cursor] = None

    def _fetch(self) -> Any:
        while True:
            if self._current is not None and self._current.has_more():
                return self._current.advance()
            if self._position >= len(self._sources):
                self._current = None
                return END
            self._current = cursor_of(self._sources[self._position])
            self._position += 1


class SpliceCursor(LookaheadCursor):
    """Yields each parent item followed by whatever `lister(item)` produces.

    The spliced run is generated from the item that was just produced, so a
    caller can insert conditional sub-runs after particular elements. A None
    result from the lister splices in nothing.
    """

    def __init__(self, source: Cursor, lister: Callable[[Any], Optional[Iterable[Any]]]):
        super().__init__()
        self._source = source
        self._lister = lister
        self._spliced: Optional[Cursor] = None

    def _fetch(self) -> Any:
        if self._spliced is not None:
            if self._spliced.has_more():
                return self._spliced.advance()
            self._spliced = None
        if not self._source.has_more():
            return END
        item = self._source.advance()
        self._spliced = cursor_of(self._lister(item))
        return item


class InterleaveCursor(LookaheadCursor):
    """Round-robins one item from each live source per round.

    Sources that report exhaustion drop out of the rotation; the cursor ends
    when every source is exhausted. Order within a round is argument order.
    """

    def __init__(self, sources: List[Optional[Iterable[Any]]]):
        super().__init__()
        self._rotation: Optional[Deque[Cursor]] = None
        self._sources = sources

    def _fetch(self) -> Any:
        if self._rotation is None:
            self._rotation = deque(cursor_of(source) for source in self._sources)
        while self._rotation:
            cursor = self._rotation.popleft()
            if cursor.has_more():
                self._rotation.append(cursor)
                return cursor.advance()
        return END
