"""Testing utilities for DazzleChain consumers."""

from .fixtures import CountingSource, RandomSource

__all__ = ['CountingSource', 'RandomSource']
