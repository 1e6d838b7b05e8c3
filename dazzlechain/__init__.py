"""DazzleChain - Lazy, re-traversable sequences.

A Sequence describes how to produce items rather than holding them. It can
be walked any number of times, each walk getting its own independent
Cursor, and it composes through chained combinators that do no work until
something pulls from them:

    from dazzlechain import Sequence, STOP

    evens = Sequence.generate(lambda n: 0 if n is None else n + 2)
    evens.where(lambda n: n % 3 == 0).take(3).to_list()   # [0, 6, 12]

Trees are first-class: any sequence can be walked breadth or depth first
through a child extractor, and TreeNode builds explicit or implicit trees
with ancestor/sibling navigation.
"""

__version__ = "0.1.0"

from .errors import ChainError, ConcurrentCacheFault, ExhaustedCursor, InvalidArgument
from .core import Cursor, LookaheadCursor, Sequence, cursor_of
from .combinators import STOP
from .caching import CachedSequence, CachingChildExtractor
from .config import CacheConfig, DepthConfig, TraversalConfig, TraversalStrategy
from .trees import TreeNode, create_traverser
from .api import count_nodes, create_traversal, find_nodes, leaf_values, traverse
from . import algorithms

__all__ = [
    "__version__",
    # Errors
    "ChainError",
    "ConcurrentCacheFault",
    "ExhaustedCursor",
    "InvalidArgument",
    # Core
    "Cursor",
    "LookaheadCursor",
    "Sequence",
    "cursor_of",
    "STOP",
    # Caching
    "CachedSequence",
    "CachingChildExtractor",
    # Configuration
    "CacheConfig",
    "DepthConfig",
    "TraversalConfig",
    "TraversalStrategy",
    # Trees
    "TreeNode",
    "create_traverser",
    # High-level API
    "traverse",
    "create_traversal",
    "count_nodes",
    "find_nodes",
    "leaf_values",
    "algorithms",
]
