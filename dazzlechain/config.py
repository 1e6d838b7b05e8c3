"""Configuration system for DazzleChain.

This module defines how users specify traversal requirements (strategy,
depth limits, pruning) and how child-extractor caches are sized.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Union

from .errors import InvalidArgument


class TraversalStrategy(Enum):
    """How to traverse a tree.

    Both strategies are lazy; they only differ in where newly discovered
    children are scheduled.
    """
    BREADTH_FIRST = "bfs"   # FIFO: children go to the back of the queue
    DEPTH_FIRST = "dfs"     # LIFO: children are processed next (pre-order)


_STRATEGY_ALIASES = {
    'bfs': TraversalStrategy.BREADTH_FIRST,
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'dfs': TraversalStrategy.DEPTH_FIRST,
    'dfs_pre': TraversalStrategy.DEPTH_FIRST,
    'depth_first': TraversalStrategy.DEPTH_FIRST,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Resolve a strategy given as enum member or name.

    Args:
        strategy: TraversalStrategy or one of 'bfs', 'breadth_first',
            'dfs', 'dfs_pre', 'depth_first'

    Returns:
        The matching TraversalStrategy

    Raises:
        InvalidArgument: If the name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy
    if isinstance(strategy, str) and strategy.lower() in _STRATEGY_ALIASES:
        return _STRATEGY_ALIASES[strategy.lower()]
    raise InvalidArgument(
        f"Unknown traversal strategy: {strategy}. "
        f"Choose from: {', '.join(_STRATEGY_ALIASES.keys())}"
    )


@dataclass
class DepthConfig:
    """Configuration for depth-based limits. Roots are at depth 0."""

    min_depth: int = 0                  # Minimum depth to yield
    max_depth: Optional[int] = None     # Maximum depth to traverse

    def should_yield(self, depth: int) -> bool:
        """Check if items at this depth should be yielded."""
        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children of an item at this depth should be fetched."""
        if self.max_depth is None:
            return True
        return depth < self.max_depth


@dataclass
class TraversalConfig:
    """Complete configuration for a lazy traversal.

    not_below prunes: a node satisfying it is yielded, but its children are
    never requested. child_filter restricts which children get scheduled at
    all (used by breadth_first_as_long_as).
    """

    strategy: TraversalStrategy = TraversalStrategy.BREADTH_FIRST
    depth: DepthConfig = field(default_factory=DepthConfig)
    not_below: Optional[Callable[[Any], bool]] = None
    child_filter: Optional[Callable[[Any], bool]] = None
    skip_seen: bool = True      # Skip items already yielded (cycle protection)
    with_depth: bool = False    # Yield (item, depth) pairs instead of items

    @classmethod
    def shallow(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Config for scanning only the top levels, breadth first."""
        return cls(depth=DepthConfig(max_depth=max_depth))

    @classmethod
    def pruned(cls,
               condition: Callable[[Any], bool],
               strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST) -> 'TraversalConfig':
        """Config that stops descending below nodes satisfying `condition`."""
        return cls(strategy=strategy, not_below=condition)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append("strategy must be a TraversalStrategy")

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.not_below is not None and not callable(self.not_below):
            errors.append("not_below must be callable")

        if self.child_filter is not None and not callable(self.child_filter):
            errors.append("child_filter must be callable")

        return errors

    def ensure_valid(self) -> 'TraversalConfig':
        """Raise InvalidArgument listing every problem, or return self."""
        errors = self.validate()
        if errors:
            raise InvalidArgument(f"Invalid traversal configuration: {'; '.join(errors)}")
        return self


@dataclass
class CacheConfig:
    """Sizing for caches keyed by item value (see CachingChildExtractor)."""

    max_size: int = 10000
    ttl: Optional[float] = None     # Seconds; None keeps entries until evicted

    def validate(self) -> List[str]:
        errors = []
        if self.max_size <= 0:
            errors.append("max_size must be positive")
        if self.ttl is not None and self.ttl <= 0:
            errors.append("ttl must be positive")
        return errors

    def ensure_valid(self) -> 'CacheConfig':
        errors = self.validate()
        if errors:
            raise InvalidArgument(f"Invalid cache configuration: {'; '.join(errors)}")
        return self
