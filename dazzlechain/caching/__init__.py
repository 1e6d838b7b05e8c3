"""
Caching layer for DazzleChain.

CachedSequence memoizes the output of one traversal for all later ones and
is what Sequence.cached() returns. CachingChildExtractor applies the same
idea to implicit trees, keeping the children of each value in a bounded
cachetools cache.
"""

from .adapter import CachedSequence, CachingCursor
from .extractor import CachingChildExtractor

__all__ = [
    'CachedSequence',
    'CachingCursor',
    'CachingChildExtractor',
]
