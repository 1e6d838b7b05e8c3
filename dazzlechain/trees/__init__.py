"""Tree support: lazy traversal cursors, TreeNode and its navigation."""

from .traverser import (
    BreadthFirstCursor,
    DepthFirstCursor,
    TraversalCursor,
    create_traverser,
)
from .node import TreeNode

__all__ = [
    'BreadthFirstCursor',
    'DepthFirstCursor',
    'TraversalCursor',
    'create_traverser',
    'TreeNode',
]
