"""TreeNode: a value with a lazily built sequence of child nodes.

Children are held as a Sequence, so a tree can be spelled out explicitly
(with_children, with_child_values) or described implicitly by a child value
extractor that is re-applied to every child, which allows infinite trees
bounded only by how far a traversal chooses to go.

Each batch of children attached to a node is cached after it is first
walked and the children are linked back to the node as they are produced.
That back-link is a weak reference: a node does not keep its parent alive,
so hold on to the root for as long as ancestor queries are needed.

Nodes compare and hash by their value. Sibling, predecessor and successor
queries rely on that, so values should be unique among siblings.
"""

import logging
import weakref
from collections.abc import Iterable as _Iterable
from typing import Any, Callable, Generic, Iterable, Optional, Tuple, TypeVar

from ..core.sequence import Sequence
from ..errors import InvalidArgument
from . import navigation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TreeNode(Generic[T]):
    """A node in an explicit or implicit tree."""

    def __init__(self, value: T):
        self._value = value
        self._parent_ref: Optional[weakref.ref] = None
        self._runs: Tuple[Sequence, ...] = ()

    @classmethod
    def with_root(cls, value: T) -> 'TreeNode[T]':
        """Create a parentless node wrapping `value`."""
        return cls(value)

    @property
    def value(self) -> T:
        return self._value

    @property
    def parent(self) -> Optional['TreeNode[T]']:
        """The node this one was attached to, or None for a root.

        Also None once the parent has been garbage collected; see
        is_detached.
        """
        if self._parent_ref is None:
            return None
        parent = self._parent_ref()
        if parent is None:
            logger.debug("Parent of %r no longer exists", self)
        return parent

    @property
    def is_detached(self) -> bool:
        """True if this node had a parent that no longer exists.

        Parent links are weak, so a child outlives its parent when nothing
        else holds the parent (or the root above it). Ancestor and sibling
        queries on a detached node come back empty.
        """
        return self._parent_ref is not None and self._parent_ref() is None

    @property
    def children(self) -> Sequence:
        """The child nodes, in the order they were attached."""
        runs = self._runs
        if not runs:
            return Sequence.empty()
        if len(runs) == 1:
            return runs[0]
        return runs[0].concat(*runs[1:])

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._value!r})"

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def with_children(self, *children: Any) -> 'TreeNode[T]':
        """Append children to this node.

        Accepts either child nodes as separate arguments or a single
        iterable (list, Sequence, generator...) of child nodes, which is
        consumed lazily. A single None removes all existing children.

        Returns:
            self, for chaining
        """
        if len(children) == 1 and not isinstance(children[0], TreeNode):
            source = children[0]
            if source is None:
                self._runs = ()
                return self
            if not isinstance(source, _Iterable):
                raise InvalidArgument(
                    f"with_children expects nodes or an iterable of nodes, got {type(source).__name__}")
        else:
            source = children

        parent_ref = weakref.ref(self)

        def adopt(child: 'TreeNode') -> None:
            child._parent_ref = parent_ref

        run = Sequence.from_iterable(source).apply_as_you_go(adopt).cached()
        self._runs = self._runs + (run,)
        return self

    def with_child_values(self, *values: Any) -> 'TreeNode[T]':
        """Append children wrapping the given values.

        Like with_children(), a single non-node iterable argument is taken
        as the collection of values.
        """
        if len(values) == 1 and isinstance(values[0], _Iterable) and not isinstance(values[0], str):
            source = values[0]
        else:
            source = values
        node_type = type(self)
        return self.with_children(Sequence.from_iterable(source).transform(node_type))

    def with_child_value_extractor(self,
                                   extractor: Optional[Callable[..., Optional[Iterable[Any]]]],
                                   depth_aware: bool = False) -> 'TreeNode[T]':
        """Describe the subtree implicitly through a child value function.

        extractor(value) returns the values of a node's children and is
        applied again to each child, lazily, as the tree is walked. With
        depth_aware=True it is called as extractor(value, level) where the
        first level of children is 1.
        """
        if extractor is None:
            return self
        if depth_aware:
            return self._with_leveled_extractor(extractor, 1)

        value = self._value
        node_type = type(self)
        return self.with_children(
            Sequence.from_iterator_factory(lambda: extractor(value) or ())
            .transform(lambda child: node_type(child).with_child_value_extractor(extractor)))

    def _with_leveled_extractor(self,
                                extractor: Callable[[Any, int], Optional[Iterable[Any]]],
                                level: int) -> 'TreeNode[T]':
        value = self._value
        node_type = type(self)
        return self.with_children(
            Sequence.from_iterator_factory(lambda: extractor(value, level) or ())
            .transform(lambda child: node_type(child)._with_leveled_extractor(extractor, level + 1)))

    def without_children(self) -> 'TreeNode[T]':
        return self.with_children(None)

    def clone(self) -> 'TreeNode[T]':
        """A new node with the same value, parent and children as this one."""
        twin = type(self)(self._value)
        twin._parent_ref = self._parent_ref
        twin._runs = self._runs
        return twin

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def ancestors(self) -> Sequence:
        return navigation.ancestors(self)

    def descendants(self) -> Sequence:
        return navigation.descendants(self)

    def breadth_first(self) -> Sequence:
        return navigation.breadth_first(self)

    def depth_first(self) -> Sequence:
        return navigation.depth_first(self)

    def depth_first_not_below(self, predicate: Callable[['TreeNode[T]'], bool]) -> Sequence:
        return navigation.depth_first_not_below(self, predicate)

    def first_where(self, predicate: Callable[['TreeNode[T]'], bool]) -> Optional['TreeNode[T]']:
        return navigation.first_where(self, predicate)

    def first_with_value(self, value: T) -> Optional['TreeNode[T]']:
        return navigation.first_with_value(self, value)

    def is_above(self, value: T) -> bool:
        return navigation.is_above(self, value)

    def is_above_where(self, predicate: Callable[['TreeNode[T]'], bool]) -> bool:
        return navigation.is_above_where(self, predicate)

    def is_below(self, value: T) -> bool:
        return navigation.is_below(self, value)

    def is_below_where(self, predicate: Callable[['TreeNode[T]'], bool]) -> bool:
        return navigation.is_below_where(self, predicate)

    def siblings(self) -> Sequence:
        return navigation.siblings(self)

    def predecessors(self) -> Sequence:
        return navigation.predecessors(self)

    def predecessor(self) -> Optional['TreeNode[T]']:
        return navigation.predecessor(self)

    def successors(self) -> Sequence:
        return navigation.successors(self)

    def successor(self) -> Optional['TreeNode[T]']:
        return navigation.successor(self)

    def terminals(self) -> Sequence:
        return navigation.terminals(self)

    def up_as_long_as(self, predicate: Callable[['TreeNode[T]'], bool]) -> Optional['TreeNode[T]']:
        return navigation.up_as_long_as(self, predicate)

    def up_until(self, predicate: Callable[['TreeNode[T]'], bool]) -> Optional['TreeNode[T]']:
        return navigation.up_until(self, predicate)

    def up_until_either(self, *predicates: Callable[['TreeNode[T]'], bool]) -> Optional['TreeNode[T]']:
        return navigation.up_until_either(self, *predicates)

    @staticmethod
    def values(trees: Optional[Iterable['TreeNode[Any]']]) -> Sequence:
        return navigation.values(trees)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def not_below(self, predicate: Callable[['TreeNode[T]'], bool]) -> 'TreeNode[T]':
        return navigation.not_below(self, predicate)

    def not_below_at_depth(self, predicate: Callable[['TreeNode[T]', int], bool]) -> 'TreeNode[T]':
        return navigation.not_below_at_depth(self, predicate)

    def where(self, predicate: Callable[['TreeNode[T]'], bool]) -> 'TreeNode[T]':
        return navigation.where(self, predicate)

    def not_where(self, predicate: Callable[['TreeNode[T]'], bool]) -> 'TreeNode[T]':
        return navigation.not_where(self, predicate)
