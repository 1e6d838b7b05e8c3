"""Core abstractions: the per-traversal Cursor and the lazy Sequence."""

from .cursor import (
    END,
    Cursor,
    EmptyCursor,
    IteratorCursor,
    ListCursor,
    LookaheadCursor,
    Marker,
    cursor_of,
)
from .sequence import Sequence

__all__ = [
    'END',
    'Cursor',
    'EmptyCursor',
    'IteratorCursor',
    'ListCursor',
    'LookaheadCursor',
    'Marker',
    'cursor_of',
    'Sequence',
]
