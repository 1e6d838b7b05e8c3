"""Cursor abstraction for DazzleChain.

A Cursor is the per-traversal state machine behind every Sequence. It is
created fresh for each traversal and never shared between traversals.

The contract is deliberately small:
- has_more() is idempotent: calling it repeatedly without advance() has no
  further effect on the underlying source
- advance() returns the next item and moves forward exactly once; calling it
  when has_more() would return False raises ExhaustedCursor

Cursors also speak the Python iterator protocol so they can be used directly
in for-loops and with the builtins that consume iterators.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Iterator, Optional, Sequence as _PySequence, TypeVar

from ..errors import ExhaustedCursor

T = TypeVar("T")


class Marker:
    """Named singleton used as a sentinel value."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


# Returned by LookaheadCursor._fetch() to signal that the source is exhausted.
# Never visible to callers; items themselves may be None.
END = Marker("END")

_EMPTY = Marker("EMPTY")


class Cursor(ABC, Generic[T]):
    """Abstract per-traversal iteration state."""

    @abstractmethod
    def has_more(self) -> bool:
        """Check whether another item is available.

        Returns:
            True if advance() will return an item
        """
        pass

    @abstractmethod
    def advance(self) -> T:
        """Return the next item and move forward.

        Raises:
            ExhaustedCursor: If there are no more items
        """
        pass

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self.has_more():
            raise StopIteration
        return self.advance()

    def _exhausted(self) -> ExhaustedCursor:
        return ExhaustedCursor(f"{self.__class__.__name__} has no more items")


class LookaheadCursor(Cursor[T]):
    """Base class for cursors that compute their next item on demand.

    Subclasses implement _fetch(), which returns the next item or END. The
    base class buffers one fetched item so that has_more() stays idempotent,
    and remembers exhaustion so that _fetch() is never called again once it
    returned END.
    """

    def __init__(self):
        self._pending: Any = _EMPTY
        self._finished = False

    @abstractmethod
    def _fetch(self) -> Any:
        """Produce the next item, or END when there are no more."""
        pass

    def has_more(self) -> bool:
        if self._pending is not _EMPTY:
            return True
        if self._finished:
            return False
        item = self._fetch()
        if item is END:
            self._finished = True
            return False
        self._pending = item
        return True

    def advance(self) -> T:
        if not self.has_more():
            raise self._exhausted()
        item = self._pending
        self._pending = _EMPTY
        return item


class EmptyCursor(Cursor[Any]):
    """Cursor over nothing."""

    def has_more(self) -> bool:
        return False

    def advance(self) -> Any:
        raise self._exhausted()


class ListCursor(Cursor[T]):
    """Cursor over an indexable collection (list, tuple, range...).

    Reads by index, so has_more() never touches anything but the length.
    """

    def __init__(self, items: _PySequence):
        self._items = items
        self._index = 0

    def has_more(self) -> bool:
        return self._index < len(self._items)

    def advance(self) -> T:
        if not self.has_more():
            raise self._exhausted()
        item = self._items[self._index]
        self._index += 1
        return item


class IteratorCursor(LookaheadCursor[T]):
    """Cursor over a Python iterator.

    The iterator is single-pass, so one IteratorCursor must wrap one freshly
    obtained iterator. Peeking for has_more() pulls one item ahead.
    """

    def __init__(self, iterator: Iterator[T]):
        super().__init__()
        self._iterator = iterator

    def _fetch(self) -> Any:
        try:
            return next(self._iterator)
        except StopIteration:
            self._iterator = None
            return END


def cursor_of(items: Optional[Iterable[T]]) -> Cursor[T]:
    """Obtain a fresh cursor for anything iterable.

    Sequences (anything exposing cursor()) hand out their own cursor,
    indexable builtins are read by index, everything else goes through
    iter(). None is treated as empty.

    Args:
        items: A Sequence, a collection, an iterable or None

    Returns:
        A new Cursor positioned before the first item
    """
    if items is None:
        return EmptyCursor()
    factory = getattr(items, "cursor", None)
    if factory is not None and callable(factory):
        return factory()
    if isinstance(items, (list, tuple, range)):
        return ListCursor(items)
    return IteratorCursor(iter(items))
