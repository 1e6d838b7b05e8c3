"""Skip/trim combinators.

All predicate-driven trimming shares one state machine with three phases:

    SKIPPING  -- parent items are pulled and dropped
    PASSING   -- parent items are pulled and yielded
    STOPPED   -- terminal; the parent cursor is never touched again

The TrimMode decides the starting phase and which transition fires:

    NOT_AS_LONG_AS  SKIPPING -> PASSING at the first item failing the predicate
    NOT_BEFORE      SKIPPING -> PASSING at the first item satisfying it
    AS_LONG_AS      PASSING  -> STOPPED at the first item failing it (dropped)
    BEFORE          PASSING  -> STOPPED at the first item satisfying it (dropped)
    NOT_AFTER       PASSING  -> STOPPED right after yielding a satisfying item

The STOPPED phase is what lets equality and containment checks built on top
of these combinators finish without over-reading their inputs.
"""

from enum import Enum
from typing import Any, Callable

from ..core.cursor import END, Cursor, LookaheadCursor


class Phase(Enum):
    """Phase of a trimming cursor."""
    SKIPPING = "skipping"
    PASSING = "passing"
    STOPPED = "stopped"


class TrimMode(Enum):
    """Which trimming rule a TrimCursor applies."""
    NOT_AS_LONG_AS = "not_as_long_as"
    NOT_BEFORE = "not_before"
    AS_LONG_AS = "as_long_as"
    BEFORE = "before"
    NOT_AFTER = "not_after"

    @property
    def initial_phase(self) -> Phase:
        if self in (TrimMode.NOT_AS_LONG_AS, TrimMode.NOT_BEFORE):
            return Phase.SKIPPING
        return Phase.PASSING


class TrimCursor(LookaheadCursor):
    """Predicate-driven skip/trim cursor."""

    def __init__(self, source: Cursor, mode: TrimMode, predicate: Callable[[Any], bool]):
        super().__init__()
        self._source = source
        self._mode = mode
        self._predicate = predicate
        self.phase = mode.initial_phase

    def _fetch(self) -> Any:
        while self.phase is Phase.SKIPPING:
            if not self._source.has_more():
                self.phase = Phase.STOPPED
                return END
            item = self._source.advance()
            if self._starts_passing(item):
                self.phase = Phase.PASSING
                return item

        if self.phase is Phase.STOPPED or not self._source.has_more():
            self.phase = Phase.STOPPED
            return END

        item = self._source.advance()
        mode = self._mode
        if mode is TrimMode.AS_LONG_AS and not self._predicate(item):
            self.phase = Phase.STOPPED
            return END
        if mode is TrimMode.BEFORE and self._predicate(item):
            self.phase = Phase.STOPPED
            return END
        if mode is TrimMode.NOT_AFTER and self._predicate(item):
            self.phase = Phase.STOPPED
        return item

    def _starts_passing(self, item: Any) -> bool:
        if self._mode is TrimMode.NOT_AS_LONG_AS:
            return not self._predicate(item)
        return bool(self._predicate(item))


class SkipCursor(LookaheadCursor):
    """Drops the first `count` parent items, then passes the rest."""

    def __init__(self, source: Cursor, count: int):
        super().__init__()
        self._source = source
        self._remaining = count
        self.phase = Phase.SKIPPING if count > 0 else Phase.PASSING

    def _fetch(self) -> Any:
        while self.phase is Phase.SKIPPING:
            if not self._source.has_more():
                self.phase = Phase.STOPPED
                return END
            self._source.advance()
            self._remaining -= 1
            if self._remaining <= 0:
                self.phase = Phase.PASSING
        if not self._source.has_more():
            self.phase = Phase.STOPPED
            return END
        return self._source.advance()


class TakeCursor(Cursor):
    """Yields at most `count` parent items.

    Once the quota is reached the cursor reports exhaustion without asking
    the parent, so an infinite parent is never pulled past item `count`.
    """

    def __init__(self, source: Cursor, count: int):
        self._source = source
        self._remaining = count
        self.phase = Phase.PASSING if count > 0 else Phase.STOPPED

    def has_more(self) -> bool:
        if self.phase is Phase.STOPPED:
            return False
        if not self._source.has_more():
            self.phase = Phase.STOPPED
            return False
        return True

    def advance(self) -> Any:
        if not self.has_more():
            raise self._exhausted()
        item = self._source.advance()
        self._remaining -= 1
        if self._remaining <= 0:
            self.phase = Phase.STOPPED
        return item
