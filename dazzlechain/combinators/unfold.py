"""Unfold generator: sequences produced from a seed and a next-item function.

The next-item function is a plain state transition closure. It receives the
previously produced item (and, depending on the step mode, the one before it
or the running index) and returns either the next item or STOP. STOP is the
only end marker, so None is a perfectly valid item to produce.

When the function never returns STOP the sequence is infinite; bounding it
is left to downstream combinators such as take() or as_long_as().
"""

from enum import Enum
from typing import Any, Callable, Optional

from ..core.cursor import END, Cursor, LookaheadCursor, Marker

STOP = Marker("STOP")


class StepMode(Enum):
    """Which history the next-item function is given."""
    PREVIOUS = "previous"   # fn(last)
    PAIRWISE = "pairwise"   # fn(second_last, last)
    INDEXED = "indexed"     # fn(last, index)


class UnfoldCursor(LookaheadCursor):
    """Replays seed items, then keeps asking the step function for more.

    With no seed items the first call receives None as the previous item
    (and as the second-to-last in pairwise mode). The index passed in
    INDEXED mode is the number of items this cursor produced so far,
    seed items included.
    """

    def __init__(self,
                 seed: Optional[Cursor],
                 step: Callable[..., Any],
                 mode: StepMode = StepMode.PREVIOUS):
        super().__init__()
        self._seed = seed
        self._step = step
        self._mode = mode
        self._last: Any = None
        self._second_last: Any = None
        self._produced = 0

    def _fetch(self) -> Any:
        if self._seed is not None:
            if self._seed.has_more():
                return self._record(self._seed.advance())
            self._seed = None

        if self._mode is StepMode.PAIRWISE:
            item = self._step(self._second_last, self._last)
        elif self._mode is StepMode.INDEXED:
            item = self._step(self._last, self._produced)
        else:
            item = self._step(self._last)

        if item is STOP:
            return END
        return self._record(item)

    def _record(self, item: Any) -> Any:
        self._second_last, self._last = self._last, item
        self._produced += 1
        return item


class ChainIfCursor(LookaheadCursor):
    """Replays the parent, then extends it while a condition holds.

    After the parent is exhausted the condition is checked against the last
    produced item (None if the parent was empty); while it holds, the step
    function supplies one more item. Without a condition the extension runs
    until the step function returns STOP.
    """

    def __init__(self,
                 source: Cursor,
                 condition: Optional[Callable[[Any], bool]],
                 step: Callable[[Any], Any]):
        super().__init__()
        self._source = source
        self._condition = condition
        self._step = step
        self._last: Any = None

    def _fetch(self) -> Any:
        if self._source is not None:
            if self._source.has_more():
                self._last = self._source.advance()
                return self._last
            self._source = None

        if self._condition is not None and not self._condition(self._last):
            return END
        item = self._step(self._last)
        if item is STOP:
            return END
        self._last = item
        return item
