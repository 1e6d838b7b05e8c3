"""Filtering combinators.

FilterCursor combines its predicates with OR: an item passes when any one
of them holds. An empty predicate tuple lets everything through. Callers
who need AND compose it inside a single predicate.
"""

from typing import Any, Callable, Hashable, Optional, Set, Tuple

from ..core.cursor import END, Cursor, LookaheadCursor

Predicate = Callable[[Any], bool]


def matches_any(item: Any, predicates: Tuple[Predicate, ...]) -> bool:
    """Check an item against a disjunctive predicate set.

    Args:
        item: The item to test
        predicates: Predicates combined with logical OR

    Returns:
        True if predicates is empty or any predicate returns True
    """
    if not predicates:
        return True
    for predicate in predicates:
        if predicate(item):
            return True
    return False


class FilterCursor(LookaheadCursor):
    """Yields only parent items that satisfy at least one predicate."""

    def __init__(self, source: Cursor, predicates: Tuple[Predicate, ...]):
        super().__init__()
        self._source = source
        self._predicates = predicates

    def _fetch(self) -> Any:
        while self._source.has_more():
            item = self._source.advance()
            if matches_any(item, self._predicates):
                return item
        return END


class DistinctCursor(LookaheadCursor):
    """Drops items whose key was already seen during this traversal.

    The seen-set is cursor local, so every traversal starts from scratch.
    """

    def __init__(self, source: Cursor, key: Optional[Callable[[Any], Hashable]] = None):
        super().__init__()
        self._source = source
        self._key = key
        self._seen: Set[Hashable] = set()

    def _fetch(self) -> Any:
        while self._source.has_more():
            item = self._source.advance()
            marker = self._key(item) if self._key is not None else item
            if marker not in self._seen:
                self._seen.add(marker)
                return item
        return END
