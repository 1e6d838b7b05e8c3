"""Combinator cursors.

Each cursor here wraps one or more parent cursors and pulls from them on
demand. Sequence methods are thin factories around these classes; use them
directly only when building a custom Sequence via from_cursor_factory().
"""

from .filtering import DistinctCursor, FilterCursor, matches_any
from .joining import ConcatCursor, InterleaveCursor, SpliceCursor
from .ordering import BufferedCursor, ReverseCursor, SortCursor, TailCursor
from .transform import FlattenCursor, PeekCursor, TransformCursor
from .trimming import Phase, SkipCursor, TakeCursor, TrimCursor, TrimMode
from .unfold import STOP, ChainIfCursor, StepMode, UnfoldCursor

__all__ = [
    'DistinctCursor', 'FilterCursor', 'matches_any',
    'ConcatCursor', 'InterleaveCursor', 'SpliceCursor',
    'BufferedCursor', 'ReverseCursor', 'SortCursor', 'TailCursor',
    'FlattenCursor', 'PeekCursor', 'TransformCursor',
    'Phase', 'SkipCursor', 'TakeCursor', 'TrimCursor', 'TrimMode',
    'STOP', 'ChainIfCursor', 'StepMode', 'UnfoldCursor',
]
