"""High-level API for DazzleChain.

This module provides simple, functional interfaces for common traversals
of implicit trees (roots plus a child extractor function). These functions
wrap the fluent Sequence API and TraversalConfig for ease of use in simple
cases. Every function returns a lazy Sequence unless it has to produce a
single answer.
"""

from typing import Any, Callable, Iterable, Optional, Union

from .config import DepthConfig, TraversalConfig, TraversalStrategy, parse_strategy
from .core.sequence import ChildExtractor, Sequence
from .errors import require_callable


def traverse(
    roots: Optional[Iterable[Any]],
    child_extractor: ChildExtractor,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.BREADTH_FIRST,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    not_below: Optional[Callable[[Any], bool]] = None,
    child_filter: Optional[Callable[[Any], bool]] = None,
    skip_seen: bool = True,
    with_depth: bool = False,
) -> Sequence:
    """Simple interface for tree traversal.

    This is the primary high-level function for walking trees. It handles
    the common case of wanting to iterate over items without building a
    TraversalConfig by hand.

    Args:
        roots: The root item(s); a single root can be passed as [root]
        child_extractor: Function returning the children of an item
        strategy: Traversal strategy ('bfs', 'breadth_first', 'dfs', 'depth_first')
        max_depth: Deepest level to visit; children of items at this depth
            are never requested
        min_depth: Shallowest level to yield (shallower items are still expanded)
        not_below: Items satisfying this are yielded but not expanded
        child_filter: Children failing this are neither yielded nor expanded
        skip_seen: Skip items already visited (protects against cycles)
        with_depth: Yield (item, depth) pairs instead of items

    Returns:
        A lazy Sequence of the visited items

    Raises:
        InvalidArgument: If the strategy is unknown or the limits are inconsistent

    Example:
        >>> tree = {"a": ["b", "c"], "b": ["d"]}
        >>> traverse(["a"], lambda n: tree.get(n, []), strategy="dfs").to_list()
        ['a', 'b', 'd', 'c']
    """
    config = TraversalConfig(
        strategy=parse_strategy(strategy),
        depth=DepthConfig(
            min_depth=min_depth,
            max_depth=max_depth
        ),
        not_below=not_below,
        child_filter=child_filter,
        skip_seen=skip_seen,
        with_depth=with_depth,
    )
    return create_traversal(roots, child_extractor, config)


def create_traversal(
    roots: Optional[Iterable[Any]],
    child_extractor: ChildExtractor,
    config: Optional[TraversalConfig] = None,
) -> Sequence:
    """Build a traversal from a ready-made TraversalConfig.

    Args:
        roots: The root item(s)
        child_extractor: Function returning the children of an item
        config: Traversal configuration (breadth-first, unlimited by default)

    Returns:
        A lazy Sequence of the visited items
    """
    require_callable(child_extractor, "child_extractor")
    return Sequence.from_iterable(roots).traverse(child_extractor, config)


def count_nodes(
    roots: Optional[Iterable[Any]],
    child_extractor: ChildExtractor,
    **kwargs
) -> int:
    """Count the items a traversal visits.

    Args:
        roots: The root item(s)
        child_extractor: Function returning the children of an item
        **kwargs: Traversal options (see traverse)

    Returns:
        Number of visited items
    """
    return traverse(roots, child_extractor, **kwargs).count()


def find_nodes(
    roots: Optional[Iterable[Any]],
    child_extractor: ChildExtractor,
    predicate: Callable[[Any], bool],
    **kwargs
) -> Sequence:
    """Find the visited items that match a predicate.

    Non-matching items are still expanded, so matches below them are found.

    Example:
        >>> find_nodes([1], lambda n: [n * 2, n * 2 + 1], lambda n: n % 5 == 0,
        ...            max_depth=3).to_list()
        [5, 10, 15]
    """
    require_callable(predicate, "predicate")
    return traverse(roots, child_extractor, **kwargs).where(predicate)


def leaf_values(
    roots: Optional[Iterable[Any]],
    child_extractor: ChildExtractor,
    **kwargs
) -> Sequence:
    """Get the visited items that have no children.

    The child extractor is called once more for every visited item to
    decide whether it is a leaf, so it should be cheap or cached (see
    CachingChildExtractor).
    """
    require_callable(child_extractor, "child_extractor")
    return traverse(roots, child_extractor, **kwargs).where(
        lambda item: Sequence.from_iterable(child_extractor(item)).is_empty())
