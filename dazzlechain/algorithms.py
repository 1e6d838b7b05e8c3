"""Short-circuit algorithms over sequences.

Every function here pulls from its inputs one item at a time and returns as
soon as the answer is known. None of them materializes a haystack; the only
inputs ever buffered are needles, prefixes and suffixes, which the caller
provides and which must therefore be finite.

All functions accept anything cursor_of() accepts: Sequences, collections,
iterables or None (treated as empty).
"""

from collections import deque
from typing import Any, Iterable, List, Optional

from .core.cursor import cursor_of


def equal(first: Optional[Iterable[Any]], second: Optional[Iterable[Any]]) -> bool:
    """Compare two sequences item by item.

    Returns False at the first mismatching pair or as soon as one side runs
    out before the other. Nothing beyond the deciding position is pulled.
    """
    left = cursor_of(first)
    right = cursor_of(second)
    while True:
        left_more = left.has_more()
        right_more = right.has_more()
        if not (left_more and right_more):
            return left_more == right_more
        if left.advance() != right.advance():
            return False


def _failure_table(needle: List[Any]) -> List[int]:
    """Longest proper prefix that is also a suffix, for every needle prefix."""
    table = [0] * len(needle)
    matched = 0
    for position in range(1, len(needle)):
        while matched > 0 and needle[position] != needle[matched]:
            matched = table[matched - 1]
        if needle[position] == needle[matched]:
            matched += 1
        table[position] = matched
    return table


def contains_subsequence(haystack: Optional[Iterable[Any]],
                         needle: Optional[Iterable[Any]]) -> bool:
    """Check whether `needle` occurs as a contiguous run inside `haystack`.

    The needle is buffered once; the haystack is streamed through a
    Knuth-Morris-Pratt matcher so every haystack item is pulled at most
    once and no backtracking over the haystack is needed. Returns True the
    moment the last needle item matches, leaving the rest of the haystack
    untouched. An empty needle is contained in anything.

    Args:
        haystack: The sequence to search (may be infinite if it contains the needle)
        needle: The finite run to look for

    Returns:
        True if the needle occurs in the haystack
    """
    pattern = list(cursor_of(needle))
    if not pattern:
        return True

    table = _failure_table(pattern)
    matched = 0
    for item in cursor_of(haystack):
        while matched > 0 and item != pattern[matched]:
            matched = table[matched - 1]
        if item == pattern[matched]:
            matched += 1
            if matched == len(pattern):
                return True
    return False


def starts_with(items: Optional[Iterable[Any]], prefix: Optional[Iterable[Any]]) -> bool:
    """Check whether `items` begins with every item of `prefix`, in order."""
    source = cursor_of(items)
    for expected in cursor_of(prefix):
        if not source.has_more() or source.advance() != expected:
            return False
    return True


def ends_with(items: Optional[Iterable[Any]], suffix: Optional[Iterable[Any]]) -> bool:
    """Check whether `items` ends with every item of `suffix`, in order.

    The answer depends on the end, so `items` is walked completely, keeping
    only a window as long as the suffix.
    """
    expected = list(cursor_of(suffix))
    if not expected:
        return True
    window = deque(cursor_of(items), maxlen=len(expected))
    return len(window) == len(expected) and list(window) == expected


def contains_all(items: Optional[Iterable[Any]], values: Optional[Iterable[Any]]) -> bool:
    """Check whether every one of `values` appears somewhere in `items`.

    Stops pulling as soon as the last missing value has been seen.
    """
    missing = list(cursor_of(values))
    source = cursor_of(items)
    while missing and source.has_more():
        item = source.advance()
        missing = [value for value in missing if value != item]
    return not missing


def contains_any(items: Optional[Iterable[Any]], values: Optional[Iterable[Any]]) -> bool:
    """Check whether at least one of `values` appears in `items`."""
    candidates = list(cursor_of(values))
    if not candidates:
        return False
    for item in cursor_of(items):
        if item in candidates:
            return True
    return False


def count_at_least(items: Optional[Iterable[Any]], minimum: int) -> bool:
    """Check for at least `minimum` items, pulling no more than that many."""
    source = cursor_of(items)
    seen = 0
    while seen < minimum:
        if not source.has_more():
            return False
        source.advance()
        seen += 1
    return True


def count_at_most(items: Optional[Iterable[Any]], maximum: int) -> bool:
    """Check for at most `maximum` items, pulling no more than maximum + 1."""
    return not count_at_least(items, maximum + 1)


def count_exactly(items: Optional[Iterable[Any]], expected: int) -> bool:
    """Check for exactly `expected` items, pulling no more than expected + 1."""
    source = cursor_of(items)
    seen = 0
    while source.has_more():
        if seen == expected:
            return False
        source.advance()
        seen += 1
    return seen == expected
