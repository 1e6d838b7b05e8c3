"""Lazy tree traversal strategies for DazzleChain.

Traversal cursors walk a tree that exists only implicitly: the roots come
from a cursor and the children of any item come from a child extractor
function. Both strategies keep a frontier of child cursors rather than of
individual nodes, so a node's children are requested from the extractor
only when the traversal proceeds past that node, and sibling lists are
pulled one item at a time.

Breadth-first appends new child cursors at the tail of the frontier (FIFO).
Depth-first pushes them at the head (LIFO), which makes the first child of
the node just yielded the next item processed, i.e. pre-order.
"""

import logging
from collections import deque
from typing import Any, Callable, Deque, Iterable, Optional, Set, Tuple

from ..config import TraversalConfig, TraversalStrategy
from ..core.cursor import END, Cursor, LookaheadCursor, Marker, cursor_of
from ..combinators.filtering import FilterCursor

logger = logging.getLogger(__name__)

ChildExtractor = Callable[[Any], Optional[Iterable[Any]]]

_NOTHING = Marker("NOTHING")


class TraversalCursor(LookaheadCursor):
    """Abstract lazy traversal over roots and a child extractor.

    Subclasses only decide where a freshly expanded child cursor goes in
    the frontier via _schedule().
    """

    def __init__(self,
                 roots: Cursor,
                 child_extractor: ChildExtractor,
                 config: Optional[TraversalConfig] = None):
        super().__init__()
        self.child_extractor = child_extractor
        self.config = config or TraversalConfig()
        self._frontier: Deque[Tuple[Cursor, int]] = deque([(roots, 0)])
        self._visited: Set[Any] = set()
        self._expansion: Tuple[Any, int] = (_NOTHING, 0)

    def _schedule(self, children: Cursor, depth: int) -> None:
        raise NotImplementedError

    def _fetch(self) -> Any:
        self._expand_pending()

        while self._frontier:
            cursor, depth = self._frontier[0]
            if not cursor.has_more():
                self._frontier.popleft()
                continue

            item = cursor.advance()
            if self.config.skip_seen and not self._first_visit(item):
                continue

            self._expansion = (item, depth)
            if not self.config.depth.should_yield(depth):
                # Hidden levels (above min_depth) are still expanded
                self._expand_pending()
                continue

            if self.config.with_depth:
                return (item, depth)
            return item

        return END

    def _first_visit(self, item: Any) -> bool:
        try:
            if item in self._visited:
                return False
            self._visited.add(item)
        except TypeError:
            # Unhashable items are not tracked
            pass
        return True

    def _expand_pending(self) -> None:
        item, depth = self._expansion
        if item is _NOTHING:
            return
        self._expansion = (_NOTHING, 0)

        if not self.config.depth.should_explore(depth):
            return
        if self.config.not_below is not None and self.config.not_below(item):
            logger.debug("Not descending below %r at depth %d", item, depth)
            return

        children = cursor_of(self.child_extractor(item))
        if self.config.child_filter is not None:
            children = FilterCursor(children, (self.config.child_filter,))
        self._schedule(children, depth + 1)


class BreadthFirstCursor(TraversalCursor):
    """Breadth-first (level-order) traversal.

    Visits all items at depth N before any item at depth N+1.
    """

    def _schedule(self, children: Cursor, depth: int) -> None:
        self._frontier.append((children, depth))


class DepthFirstCursor(TraversalCursor):
    """Depth-first pre-order traversal.

    Visits a parent before its children and the first child's subtree before
    the second child.
    """

    def _schedule(self, children: Cursor, depth: int) -> None:
        self._frontier.appendleft((children, depth))


def create_traverser(roots: Cursor,
                     child_extractor: ChildExtractor,
                     config: Optional[TraversalConfig] = None) -> TraversalCursor:
    """Factory function to create the traversal cursor for a config.

    Args:
        roots: Cursor over the root items
        child_extractor: Function returning the children of an item
        config: Traversal configuration (breadth-first by default)

    Returns:
        A fresh TraversalCursor
    """
    config = config or TraversalConfig()
    traversers = {
        TraversalStrategy.BREADTH_FIRST: BreadthFirstCursor,
        TraversalStrategy.DEPTH_FIRST: DepthFirstCursor,
    }
    return traversers[config.strategy](roots, child_extractor, config)
