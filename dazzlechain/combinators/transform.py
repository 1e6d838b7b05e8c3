"""Mapping combinators: transform, flatten and side-effect pass-through.

Each cursor here wraps exactly one parent cursor and pulls from it only
when its own consumer asks for an item.
"""

from typing import Any, Callable, Iterable, Optional

from ..core.cursor import END, Cursor, LookaheadCursor, cursor_of


class TransformCursor(Cursor):
    """Applies a function to each item of the parent, one to one.

    has_more() is forwarded untouched, so the transformer runs only inside
    advance() and never on an exhausted parent.
    """

    def __init__(self, source: Cursor, transformer: Callable[[Any], Any]):
        self._source = source
        self._transformer = transformer

    def has_more(self) -> bool:
        return self._source.has_more()

    def advance(self) -> Any:
        if not self._source.has_more():
            raise self._exhausted()
        return self._transformer(self._source.advance())


class FlattenCursor(LookaheadCursor):
    """Expands every parent item into an inner sequence and walks it.

    Holds at most one inner cursor at a time. When the inner cursor runs
    dry the next outer item is pulled and expanded; outer items that expand
    to nothing are skipped without surfacing anything.
    """

    def __init__(self,
                 source: Cursor,
                 expander: Callable[[Any], Optional[Iterable[Any]]]):
        super().__init__()
        self._source = source
        self._expander = expander
        self._inner: Optional[Cursor] = None

    def _fetch(self) -> Any:
        while True:
            if self._inner is not None and self._inner.has_more():
                return self._inner.advance()
            self._inner = None
            if not self._source.has_more():
                return END
            self._inner = cursor_of(self._expander(self._source.advance()))


class PeekCursor(Cursor):
    """Runs an action on each item as it passes through, then yields it."""

    def __init__(self, source: Cursor, action: Callable[[Any], Any]):
        self._source = source
        self._action = action

    def has_more(self) -> bool:
        return self._source.has_more()

    def advance(self) -> Any:
        if not self._source.has_more():
            raise self._exhausted()
        item = self._source.advance()
        self._action(item)
        return item
