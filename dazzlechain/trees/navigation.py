"""Navigation over TreeNode structures.

Everything here is expressed with Sequence combinators on top of two
primitives a node provides: its lazily built `children` sequence and its
`parent` back-reference. Positional queries (siblings, predecessors,
successors) locate a node among its parent's children by value equality,
so they assume values are unique among siblings.

The back-reference is weak, so upward and sideways queries only see
parents that are still alive. A node whose parent was garbage collected
behaves like a root.

The view builders at the bottom (not_below, where...) do not modify the
tree they are given. They return a clone of the root whose children are,
lazily, clones of the original descendants, rearranged as requested.
"""

from typing import Any, Callable, Iterable, Optional

from ..combinators.unfold import STOP
from ..core.sequence import Sequence
from ..errors import require_callable

NodePredicate = Callable[[Any], bool]


def _children_of(node: Any) -> Sequence:
    return node.children


def _parent_or_stop(node: Any) -> Any:
    parent = node.parent
    return STOP if parent is None else parent


def values(trees: Optional[Iterable[Any]]) -> Sequence:
    """The wrapped values of the given tree nodes."""
    return Sequence.from_iterable(trees).transform(lambda tree: tree.value)


# ---------------------------------------------------------------------------
# Vertical navigation
# ---------------------------------------------------------------------------

def ancestors(node: Any) -> Sequence:
    """The parent of `node`, its parent, and so on up to the root.

    Stops early at the first ancestor that no longer exists, so keep the
    root referenced while walking up.
    """
    parent = node.parent
    if parent is None:
        return Sequence.empty()
    return Sequence.unfold(parent, _parent_or_stop)


def _self_and_ancestors(node: Any) -> Sequence:
    return Sequence.of(node).concat(ancestors(node))


def up_as_long_as(node: Any, predicate: NodePredicate) -> Any:
    """The highest node, going up from `node` itself, while `predicate` holds.

    Returns None when `node` itself fails the predicate.
    """
    require_callable(predicate, "predicate")
    return _self_and_ancestors(node).before(lambda tree: not predicate(tree)).last()


def up_until(node: Any, predicate: NodePredicate) -> Any:
    """The first node, starting with `node` itself and going up, satisfying `predicate`."""
    require_callable(predicate, "predicate")
    return _self_and_ancestors(node).first_where(predicate)


def up_until_either(node: Any, *predicates: NodePredicate) -> Any:
    return _self_and_ancestors(node).first_where_either(*predicates)


def is_below(node: Any, value: Any) -> bool:
    """True if some ancestor of `node` wraps `value`."""
    return values(ancestors(node)).contains(value)


def is_below_where(node: Any, predicate: NodePredicate) -> bool:
    return ancestors(node).any_where(predicate)


# ---------------------------------------------------------------------------
# Downward traversal
# ---------------------------------------------------------------------------

def breadth_first(node: Any) -> Sequence:
    """`node` and all its descendants, level by level."""
    return Sequence.of(node).breadth_first(_children_of)


def depth_first(node: Any) -> Sequence:
    """`node` and all its descendants, pre-order."""
    return Sequence.of(node).depth_first(_children_of)


def depth_first_not_below(node: Any, predicate: NodePredicate) -> Sequence:
    """Pre-order, but not descending below nodes satisfying `predicate`."""
    return Sequence.of(node).depth_first_not_below(_children_of, predicate)


def descendants(node: Any) -> Sequence:
    """All nodes below `node`, breadth first."""
    return breadth_first(node).skip(1)


def terminals(node: Any) -> Sequence:
    """The leaves at or below `node`, in depth-first order."""
    return depth_first(node).where(lambda tree: tree.children.is_empty())


def first_where(node: Any, predicate: NodePredicate) -> Any:
    """The first node at or below `node` satisfying `predicate`, breadth first."""
    return breadth_first(node).first_where(predicate)


def first_with_value(node: Any, value: Any) -> Any:
    return breadth_first(node).first_where(lambda tree: tree.value == value)


def is_above(node: Any, value: Any) -> bool:
    """True if some descendant of `node` wraps `value`."""
    return values(descendants(node)).contains(value)


def is_above_where(node: Any, predicate: NodePredicate) -> bool:
    return descendants(node).any_where(predicate)


# ---------------------------------------------------------------------------
# Sideways navigation
# ---------------------------------------------------------------------------

def siblings(node: Any) -> Sequence:
    """The other children of `node`'s parent.

    Empty for a root and for a node whose parent no longer exists.
    """
    parent = node.parent
    if parent is None:
        return Sequence.empty()
    return parent.children.where(lambda child: child != node)


def predecessors(node: Any) -> Sequence:
    """The children of `node`'s parent that come before `node`."""
    parent = node.parent
    if parent is None:
        return Sequence.empty()
    return parent.children.before(lambda child: child == node)


def predecessor(node: Any) -> Any:
    return predecessors(node).last()


def successors(node: Any) -> Sequence:
    """The children of `node`'s parent that come after `node`."""
    parent = node.parent
    if parent is None:
        return Sequence.empty()
    return parent.children.not_before(lambda child: child == node).skip(1)


def successor(node: Any) -> Any:
    return successors(node).first()


# ---------------------------------------------------------------------------
# Tree views
# ---------------------------------------------------------------------------

def not_below(node: Any, predicate: NodePredicate) -> Any:
    """A view of the tree without the nodes below those satisfying `predicate`."""
    require_callable(predicate, "predicate")
    view = node.clone().without_children()
    if predicate(node):
        return view
    return view.with_children(node.children.transform(lambda child: not_below(child, predicate)))


def not_below_at_depth(node: Any,
                       predicate: Callable[[Any, int], bool],
                       depth: int = 0) -> Any:
    """Like not_below(), with the predicate also given each node's depth.

    The root of the view is at depth 0.
    """
    require_callable(predicate, "predicate")
    view = node.clone().without_children()
    if predicate(node, depth):
        return view
    return view.with_children(node.children.transform(
        lambda child: not_below_at_depth(child, predicate, depth + 1)))


def where(node: Any, predicate: NodePredicate) -> Any:
    """A view keeping only descendants that satisfy `predicate`.

    A descendant failing the predicate is replaced by its nearest
    descendants that satisfy it. The root itself is always kept.
    """
    require_callable(predicate, "predicate")
    return node.clone().without_children().with_children(
        node.children.transform_and_flatten(
            lambda child: child
            .depth_first_not_below(predicate)
            .where(predicate)
            .transform(lambda kept: where(kept, predicate))))


def not_where(node: Any, predicate: NodePredicate) -> Any:
    """A view dropping descendants that satisfy `predicate`.

    A dropped descendant is replaced by its nearest descendants that do not
    satisfy it. The root itself is always kept.
    """
    require_callable(predicate, "predicate")
    return node.clone().without_children().with_children(
        node.children.transform_and_flatten(
            lambda child: child
            .depth_first_not_below(lambda tree: not predicate(tree))
            .not_where(predicate)
            .transform(lambda kept: not_where(kept, predicate))))
