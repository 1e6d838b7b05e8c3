"""Reordering combinators: reverse, sort and tail.

These cannot stream. On the first pull of each traversal the parent is
drained completely into a list, rearranged, and then served by index. An
infinite parent therefore never produces anything here.
"""

from typing import Any, Callable, List, Optional

from ..core.cursor import Cursor, ListCursor


class BufferedCursor(Cursor):
    """Drains the parent on first use and serves a rearranged copy."""

    def __init__(self, source: Cursor):
        self._source = source
        self._buffered: Optional[ListCursor] = None

    def _arrange(self, items: List[Any]) -> List[Any]:
        return items

    def _ensure_buffered(self) -> ListCursor:
        if self._buffered is None:
            items = []
            while self._source.has_more():
                items.append(self._source.advance())
            self._buffered = ListCursor(self._arrange(items))
        return self._buffered

    def has_more(self) -> bool:
        return self._ensure_buffered().has_more()

    def advance(self) -> Any:
        return self._ensure_buffered().advance()


class ReverseCursor(BufferedCursor):
    """Yields the parent's items last to first."""

    def _arrange(self, items: List[Any]) -> List[Any]:
        items.reverse()
        return items


class SortCursor(BufferedCursor):
    """Yields the parent's items sorted, optionally by a key function."""

    def __init__(self,
                 source: Cursor,
                 key: Optional[Callable[[Any], Any]] = None,
                 descending: bool = False):
        super().__init__(source)
        self._key = key
        self._descending = descending

    def _arrange(self, items: List[Any]) -> List[Any]:
        items.sort(key=self._key, reverse=self._descending)
        return items


class TailCursor(BufferedCursor):
    """Yields only the last `count` items of the parent."""

    def __init__(self, source: Cursor, count: int):
        super().__init__(source)
        self._count = count

    def _arrange(self, items: List[Any]) -> List[Any]:
        if self._count == 0:
            return []
        return items[-self._count:]
