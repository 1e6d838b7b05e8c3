"""The Sequence type: a lazy, re-traversable description of items.

A Sequence holds nothing but a cursor factory. Every traversal (a for-loop,
to_list(), a query such as contains()) asks the factory for a brand new
Cursor, so the same Sequence can be walked any number of times, including
concurrently, without traversals interfering with each other.

Combinator methods never touch items. They return a new Sequence whose
cursor factory creates the parent's cursor and wraps it, so chains such as

    Sequence.of(1, 2, 3).where(is_odd).transform(str)

do no work at all until something pulls from them.

A Sequence built over a non-deterministic source (random numbers, a clock,
a mutable collection) recomputes on every traversal. Call cached() to pin
the items produced by the first traversal.
"""

from collections.abc import Iterator as _PyIterator
from typing import (Any, Callable, Dict, Generic, Hashable, Iterable, Iterator,
                    List, Optional, TypeVar)

from ..errors import InvalidArgument, require_callable, require_count
from .cursor import Cursor, EmptyCursor, IteratorCursor, ListCursor, cursor_of
from ..combinators.filtering import DistinctCursor, FilterCursor, Predicate, matches_any
from ..combinators.joining import ConcatCursor, InterleaveCursor, SpliceCursor
from ..combinators.ordering import ReverseCursor, SortCursor, TailCursor
from ..combinators.transform import FlattenCursor, PeekCursor, TransformCursor
from ..combinators.trimming import SkipCursor, TakeCursor, TrimCursor, TrimMode
from ..combinators.unfold import ChainIfCursor, StepMode, UnfoldCursor
from ..config import DepthConfig, TraversalConfig, TraversalStrategy
from .. import algorithms

T = TypeVar("T")

ChildExtractor = Callable[[Any], Optional[Iterable[Any]]]


class Sequence(Generic[T]):
    """Lazy, immutable, re-traversable sequence of items."""

    def __init__(self, cursor_factory: Callable[[], Cursor[T]]):
        """Create a sequence from a cursor factory.

        Args:
            cursor_factory: Zero-argument callable returning a fresh Cursor
                positioned before the first item on every call
        """
        self._cursor_factory = require_callable(cursor_factory, "cursor_factory")

    def cursor(self) -> Cursor[T]:
        """Start a new, independent traversal."""
        return self._cursor_factory()

    def __iter__(self) -> Iterator[T]:
        return self.cursor()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at {id(self):#x}>"

    def _derive(self, factory: Callable[[], Cursor[Any]]) -> 'Sequence[Any]':
        return Sequence(factory)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def empty() -> 'Sequence[Any]':
        """A sequence with no items."""
        return Sequence(EmptyCursor)

    @staticmethod
    def of(*items: T) -> 'Sequence[T]':
        """A sequence of the given items, in argument order."""
        return Sequence(lambda: ListCursor(items))

    @staticmethod
    def from_iterable(items: Optional[Iterable[T]]) -> 'Sequence[T]':
        """Wrap any iterable as a Sequence.

        Re-iterable collections are read afresh on every traversal, so later
        changes to a list show up in later traversals. Single-pass producers
        (iterators, generator objects) can only be read once, so they are
        wrapped in a cache that records their one-time output and replays it
        to every traversal. None gives an empty sequence.

        Args:
            items: A collection, an iterable, an iterator or None

        Returns:
            A Sequence over the items
        """
        if items is None:
            return Sequence.empty()
        if isinstance(items, Sequence):
            return items
        if isinstance(items, _PyIterator):
            from ..caching.adapter import CachedSequence
            return CachedSequence(Sequence(lambda: IteratorCursor(items)))
        return Sequence(lambda: cursor_of(items))

    @staticmethod
    def from_iterator_factory(factory: Callable[[], Iterable[T]]) -> 'Sequence[T]':
        """A sequence that calls `factory` for a fresh iterable per traversal.

        Typical use is a generator function, which is re-run on every
        traversal:

            Sequence.from_iterator_factory(lambda: read_lines(path))
        """
        require_callable(factory, "factory")
        return Sequence(lambda: IteratorCursor(iter(factory())))

    @staticmethod
    def from_cursor_factory(factory: Callable[[], Cursor[T]]) -> 'Sequence[T]':
        return Sequence(factory)

    @staticmethod
    def unfold(seed: T, next_item: Callable[[T], Any]) -> 'Sequence[T]':
        """A sequence starting with `seed`, each next item computed from the last.

        Generation ends when next_item returns STOP; if it never does, the
        sequence is infinite and must be bounded downstream (take(),
        as_long_as()...).
        """
        require_callable(next_item, "next_item")
        return Sequence(lambda: UnfoldCursor(ListCursor((seed,)), next_item))

    @staticmethod
    def generate(next_item: Callable[[Optional[T]], Any]) -> 'Sequence[T]':
        """Like unfold() without a seed; the first call receives None."""
        require_callable(next_item, "next_item")
        return Sequence(lambda: UnfoldCursor(None, next_item))

    # ------------------------------------------------------------------
    # Unfold continuations
    # ------------------------------------------------------------------

    def chain(self, next_item: Callable[[Any], Any]) -> 'Sequence[Any]':
        """This sequence's items, then items generated from the last one.

        next_item(previous) returns the next item or STOP. If this sequence
        is empty the first call receives None.
        """
        require_callable(next_item, "next_item")
        return self._derive(lambda: UnfoldCursor(self.cursor(), next_item, StepMode.PREVIOUS))

    def chain_pairwise(self, next_item: Callable[[Any, Any], Any]) -> 'Sequence[Any]':
        """Continue with next_item(second_last, last), e.g. Fibonacci:

            Sequence.of(0, 1).chain_pairwise(lambda a, b: a + b)
        """
        require_callable(next_item, "next_item")
        return self._derive(lambda: UnfoldCursor(self.cursor(), next_item, StepMode.PAIRWISE))

    def chain_indexed(self, next_item: Callable[[Any, int], Any]) -> 'Sequence[Any]':
        """Continue with next_item(last, index), index counting every item so far."""
        require_callable(next_item, "next_item")
        return self._derive(lambda: UnfoldCursor(self.cursor(), next_item, StepMode.INDEXED))

    def chain_if(self,
                 condition: Optional[Callable[[Any], bool]],
                 next_item: Callable[[Any], Any]) -> 'Sequence[Any]':
        """Continue with next_item(last) for as long as condition(last) holds.

        A None condition keeps going until next_item returns STOP.
        """
        require_callable(next_item, "next_item")
        return self._derive(lambda: ChainIfCursor(self.cursor(), condition, next_item))

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def transform(self, transformer: Callable[[T], Any]) -> 'Sequence[Any]':
        """Apply `transformer` to each item, one to one."""
        require_callable(transformer, "transformer")
        return self._derive(lambda: TransformCursor(self.cursor(), transformer))

    def transform_and_flatten(self,
                              transformer: Callable[[T], Optional[Iterable[Any]]]) -> 'Sequence[Any]':
        """Expand each item into zero or more items (flat map).

        Items whose expansion is empty (or None) vanish from the output.
        """
        require_callable(transformer, "transformer")
        return self._derive(lambda: FlattenCursor(self.cursor(), transformer))

    def replace(self, replacer: Callable[[T], Optional[Iterable[Any]]]) -> 'Sequence[Any]':
        """Replace each item with the items `replacer` returns for it.

        Returning None (or an empty iterable) drops the item.
        """
        return self.transform_and_flatten(replacer)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def where(self, predicate: Predicate) -> 'Sequence[T]':
        """Keep the items satisfying `predicate`."""
        require_callable(predicate, "predicate")
        return self.where_either(predicate)

    def where_either(self, *predicates: Predicate) -> 'Sequence[T]':
        """Keep the items satisfying ANY of `predicates` (OR).

        With no predicates every item is kept.
        """
        for predicate in predicates:
            require_callable(predicate, "predicate")
        return self._derive(lambda: FilterCursor(self.cursor(), predicates))

    def not_where(self, predicate: Predicate) -> 'Sequence[T]':
        """Drop the items satisfying `predicate`."""
        require_callable(predicate, "predicate")
        return self.where_either(lambda item: not predicate(item))

    def without_none(self) -> 'Sequence[T]':
        return self.where_either(lambda item: item is not None)

    def of_type(self, cls: type) -> 'Sequence[Any]':
        """Keep only instances of `cls` (or of a tuple of classes)."""
        if not isinstance(cls, (type, tuple)):
            raise InvalidArgument(f"of_type expects a class, got {type(cls).__name__}")
        return self.where_either(lambda item: isinstance(item, cls))

    def distinct(self, key: Optional[Callable[[T], Hashable]] = None) -> 'Sequence[T]':
        """Drop items whose key (the item itself by default) was already seen."""
        return self._derive(lambda: DistinctCursor(self.cursor(), key))

    # ------------------------------------------------------------------
    # Joining
    # ------------------------------------------------------------------

    def concat(self, *sequences: Optional[Iterable[Any]]) -> 'Sequence[Any]':
        """This sequence followed by each of `sequences`; None counts as empty."""
        sources = [self] + list(sequences)
        return self._derive(lambda: ConcatCursor(sources))

    def concat_items(self, *items: Any) -> 'Sequence[Any]':
        """This sequence followed by the given items."""
        return self.concat(items)

    def splice_after(self, lister: Callable[[T], Optional[Iterable[Any]]]) -> 'Sequence[Any]':
        """After each item, splice in whatever lister(item) returns.

        Example:
            Sequence.of("a", "b").splice_after(lambda x: ["!"] if x == "a" else None)
            # a, !, b
        """
        require_callable(lister, "lister")
        return self._derive(lambda: SpliceCursor(self.cursor(), lister))

    def interleave(self, *others: Optional[Iterable[Any]]) -> 'Sequence[Any]':
        """Round-robin this sequence's items with those of `others`.

        Each round takes one item from every sequence that still has items,
        in argument order. The result ends when all of them are exhausted.
        """
        sources = [self] + list(others)
        return self._derive(lambda: InterleaveCursor(sources))

    # ------------------------------------------------------------------
    # Trimming
    # ------------------------------------------------------------------

    def _trim(self, mode: TrimMode, predicate: Predicate) -> 'Sequence[T]':
        require_callable(predicate, "predicate")
        return self._derive(lambda: TrimCursor(self.cursor(), mode, predicate))

    def as_long_as(self, predicate: Predicate) -> 'Sequence[T]':
        """Items up to (excluding) the first one failing `predicate`."""
        return self._trim(TrimMode.AS_LONG_AS, predicate)

    def as_long_as_value(self, value: Any) -> 'Sequence[T]':
        return self.as_long_as(lambda item: item == value)

    def before(self, predicate: Predicate) -> 'Sequence[T]':
        """Items up to (excluding) the first one satisfying `predicate`."""
        return self._trim(TrimMode.BEFORE, predicate)

    def before_value(self, value: Any) -> 'Sequence[T]':
        return self.before(lambda item: item == value)

    def not_after(self, predicate: Predicate) -> 'Sequence[T]':
        """Items up to and including the first one satisfying `predicate`."""
        return self._trim(TrimMode.NOT_AFTER, predicate)

    def not_as_long_as(self, predicate: Predicate) -> 'Sequence[T]':
        """Items from the first one failing `predicate` onwards."""
        return self._trim(TrimMode.NOT_AS_LONG_AS, predicate)

    def not_as_long_as_value(self, value: Any) -> 'Sequence[T]':
        return self.not_as_long_as(lambda item: item == value)

    def not_before(self, predicate: Predicate) -> 'Sequence[T]':
        """Items from the first one satisfying `predicate` onwards."""
        return self._trim(TrimMode.NOT_BEFORE, predicate)

    def not_before_value(self, value: Any) -> 'Sequence[T]':
        return self.not_before(lambda item: item == value)

    def skip(self, count: int) -> 'Sequence[T]':
        """All but the first `count` items."""
        require_count(count, "count")
        return self._derive(lambda: SkipCursor(self.cursor(), count))

    def take(self, count: int) -> 'Sequence[T]':
        """At most the first `count` items; the parent is never pulled further."""
        require_count(count, "count")
        return self._derive(lambda: TakeCursor(self.cursor(), count))

    def take_last(self, count: int) -> 'Sequence[T]':
        """The last `count` items. Buffers the whole parent on each traversal."""
        require_count(count, "count")
        return self._derive(lambda: TailCursor(self.cursor(), count))

    # ------------------------------------------------------------------
    # Ordering (buffering)
    # ------------------------------------------------------------------

    def reverse(self) -> 'Sequence[T]':
        """Items last to first. Buffers the whole parent on each traversal."""
        return self._derive(lambda: ReverseCursor(self.cursor()))

    def ascending(self, key: Optional[Callable[[T], Any]] = None) -> 'Sequence[T]':
        """Items sorted ascending. Buffers the whole parent on each traversal."""
        return self._derive(lambda: SortCursor(self.cursor(), key))

    def descending(self, key: Optional[Callable[[T], Any]] = None) -> 'Sequence[T]':
        """Items sorted descending. Buffers the whole parent on each traversal."""
        return self._derive(lambda: SortCursor(self.cursor(), key, descending=True))

    # ------------------------------------------------------------------
    # Caching
    # ------------------------------------------------------------------

    def cached(self) -> 'Sequence[T]':
        """Memoize the items of the first traversal for all later ones.

        The returned sequence pulls from this one through a single cursor,
        at most once in total, no matter how many traversals (sequential or
        concurrent) are made of it.
        """
        from ..caching.adapter import CachedSequence
        return CachedSequence(self)

    # ------------------------------------------------------------------
    # Tree traversal
    # ------------------------------------------------------------------

    def traverse(self,
                 child_extractor: ChildExtractor,
                 config: Optional[TraversalConfig] = None) -> 'Sequence[Any]':
        """Walk the tree(s) rooted at this sequence's items.

        Args:
            child_extractor: Function returning the children of an item
                (any iterable, a Sequence or None for no children)
            config: Strategy, depth limits and pruning (breadth-first,
                unlimited by default)

        Returns:
            A lazy Sequence of the visited items
        """
        from ..trees.traverser import create_traverser
        require_callable(child_extractor, "child_extractor")
        config = (config or TraversalConfig()).ensure_valid()
        return self._derive(lambda: create_traverser(self.cursor(), child_extractor, config))

    def breadth_first(self, child_extractor: ChildExtractor, skip_seen: bool = True) -> 'Sequence[Any]':
        """Level-order walk: all roots, then all their children, and so on."""
        return self.traverse(child_extractor, TraversalConfig(
            strategy=TraversalStrategy.BREADTH_FIRST, skip_seen=skip_seen))

    def depth_first(self, child_extractor: ChildExtractor, skip_seen: bool = True) -> 'Sequence[Any]':
        """Pre-order walk: each item followed by its whole subtree."""
        return self.traverse(child_extractor, TraversalConfig(
            strategy=TraversalStrategy.DEPTH_FIRST, skip_seen=skip_seen))

    def breadth_first_not_below(self,
                                child_extractor: ChildExtractor,
                                predicate: Predicate) -> 'Sequence[Any]':
        """Breadth-first, not descending below items satisfying `predicate`.

        Matching items are still yielded; their children are never requested.
        """
        require_callable(predicate, "predicate")
        return self.traverse(child_extractor, TraversalConfig(
            strategy=TraversalStrategy.BREADTH_FIRST, not_below=predicate))

    def depth_first_not_below(self,
                              child_extractor: ChildExtractor,
                              predicate: Predicate) -> 'Sequence[Any]':
        """Depth-first, not descending below items satisfying `predicate`."""
        require_callable(predicate, "predicate")
        return self.traverse(child_extractor, TraversalConfig.pruned(predicate))

    def breadth_first_as_long_as(self,
                                 child_extractor: ChildExtractor,
                                 predicate: Predicate) -> 'Sequence[Any]':
        """Breadth-first over the children that satisfy `predicate` only.

        Children failing the predicate are neither yielded nor expanded.
        The roots themselves are not tested.
        """
        require_callable(predicate, "predicate")
        return self.traverse(child_extractor, TraversalConfig(
            strategy=TraversalStrategy.BREADTH_FIRST, child_filter=predicate))

    def with_depth(self,
                   child_extractor: ChildExtractor,
                   strategy: TraversalStrategy = TraversalStrategy.BREADTH_FIRST,
                   max_depth: Optional[int] = None) -> 'Sequence[Any]':
        """Walk the trees yielding (item, depth) pairs, roots at depth 0."""
        return self.traverse(child_extractor, TraversalConfig(
            strategy=strategy,
            depth=DepthConfig(max_depth=max_depth),
            with_depth=True))

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    def apply_as_you_go(self, action: Callable[[T], Any]) -> 'Sequence[T]':
        """Run `action` on each item as it is pulled (lazy, per traversal)."""
        require_callable(action, "action")
        return self._derive(lambda: PeekCursor(self.cursor(), action))

    def collect_into(self, target: Any) -> 'Sequence[T]':
        """Lazily add each pulled item to `target` (a list or a set)."""
        if hasattr(target, "append"):
            return self.apply_as_you_go(target.append)
        if hasattr(target, "add"):
            return self.apply_as_you_go(target.add)
        raise InvalidArgument(f"Cannot collect into {type(target).__name__}")

    def apply(self, action: Callable[[T], Any]) -> 'Sequence[T]':
        """Run `action` on every item right now.

        Traverses once and returns a sequence over the items seen, so the
        action is not re-run by later traversals.
        """
        require_callable(action, "action")
        items = []
        for item in self:
            action(item)
            items.append(item)
        return Sequence.from_iterable(items)

    # ------------------------------------------------------------------
    # Materializing queries
    # ------------------------------------------------------------------

    def to_list(self) -> List[T]:
        return list(self.cursor())

    def to_dict(self, key: Callable[[T], Hashable]) -> Dict[Hashable, T]:
        """Map key(item) to item; later items win on key collisions."""
        require_callable(key, "key")
        return {key(item): item for item in self}

    def count(self) -> int:
        """Number of items. Walks the whole sequence."""
        total = 0
        cursor = self.cursor()
        while cursor.has_more():
            cursor.advance()
            total += 1
        return total

    def last(self, default: Any = None) -> Any:
        """The final item, or `default` when empty. Walks the whole sequence."""
        item = default
        for item in self:
            pass
        return item

    def sum(self, value: Optional[Callable[[T], Any]] = None) -> Any:
        """Sum of the items, or of value(item) for each item."""
        if value is None:
            return sum(self)
        return sum(value(item) for item in self)

    def min_by(self, key: Callable[[T], Any], default: Any = None) -> Any:
        """The item with the smallest key (the first one on ties)."""
        require_callable(key, "key")
        return min(self, key=key, default=default)

    def max_by(self, key: Callable[[T], Any], default: Any = None) -> Any:
        """The item with the largest key (the first one on ties)."""
        require_callable(key, "key")
        return max(self, key=key, default=default)

    # ------------------------------------------------------------------
    # Short-circuit queries
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.cursor().has_more()

    def any(self) -> bool:
        return self.cursor().has_more()

    def first(self, default: Any = None) -> Any:
        """The first item, or `default` when empty. Pulls at most one item."""
        cursor = self.cursor()
        return cursor.advance() if cursor.has_more() else default

    def first_where(self, predicate: Predicate, default: Any = None) -> Any:
        require_callable(predicate, "predicate")
        return self.where(predicate).first(default)

    def first_where_either(self, *predicates: Predicate) -> Any:
        """The first item satisfying any of `predicates`, or None."""
        return self.where_either(*predicates).first()

    def get(self, index: int) -> Any:
        """The item at `index`.

        Raises:
            IndexError: If the sequence has no item at that position
        """
        require_count(index, "index")
        cursor = self.skip(index).cursor()
        if not cursor.has_more():
            raise IndexError(f"No item at index {index}")
        return cursor.advance()

    def any_where(self, predicate: Predicate) -> bool:
        require_callable(predicate, "predicate")
        return self.where(predicate).any()

    def any_where_either(self, *predicates: Predicate) -> bool:
        return self.where_either(*predicates).any()

    def all_where(self, predicate: Predicate) -> bool:
        """True unless some item fails `predicate` (vacuously True when empty)."""
        require_callable(predicate, "predicate")
        return not self.not_where(predicate).any()

    def all_where_either(self, *predicates: Predicate) -> bool:
        """True if every item satisfies at least one of `predicates`."""
        return self.all_where(lambda item: matches_any(item, predicates))

    def none_where(self, predicate: Predicate) -> bool:
        return not self.any_where(predicate)

    def none_where_either(self, *predicates: Predicate) -> bool:
        return not self.any_where_either(*predicates)

    def contains(self, value: Any) -> bool:
        return self.any_where(lambda item: item == value)

    def contains_all(self, *values: Any) -> bool:
        return algorithms.contains_all(self, values)

    def contains_any(self, *values: Any) -> bool:
        return algorithms.contains_any(self, values)

    def contains_subsequence(self, needle: Optional[Iterable[Any]]) -> bool:
        """Check whether `needle` occurs as a contiguous run in this sequence."""
        return algorithms.contains_subsequence(self, needle)

    def starts_with(self, prefix: Optional[Iterable[Any]]) -> bool:
        return algorithms.starts_with(self, prefix)

    def starts_with_either(self, *prefixes: Optional[Iterable[Any]]) -> bool:
        return any(algorithms.starts_with(self, prefix) for prefix in prefixes)

    def ends_with(self, suffix: Optional[Iterable[Any]]) -> bool:
        return algorithms.ends_with(self, suffix)

    def ends_with_either(self, *suffixes: Optional[Iterable[Any]]) -> bool:
        return any(algorithms.ends_with(self, suffix) for suffix in suffixes)

    def equals(self, other: Optional[Iterable[Any]]) -> bool:
        """Item-by-item equality, stopping at the first difference."""
        return algorithms.equal(self, other)

    def equals_either(self, *others: Optional[Iterable[Any]]) -> bool:
        return any(algorithms.equal(self, other) for other in others)

    def is_count_at_least(self, minimum: int) -> bool:
        require_count(minimum, "minimum")
        return algorithms.count_at_least(self, minimum)

    def is_count_at_most(self, maximum: int) -> bool:
        require_count(maximum, "maximum")
        return algorithms.count_at_most(self, maximum)

    def is_count_exactly(self, expected: int) -> bool:
        require_count(expected, "expected")
        return algorithms.count_exactly(self, expected)
