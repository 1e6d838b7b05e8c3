#!/usr/bin/env python3
"""
Basic example showing lazy, re-traversable sequences in DazzleChain.

This example demonstrates:
- Building pipelines that do no work until pulled
- Infinite sequences bounded downstream
- Pinning a non-deterministic source with cached()
- Navigating an implicit tree with TreeNode
"""

import random
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlechain import STOP, Sequence, TreeNode


def main():
    """Demonstrate the core sequence operations."""
    print("Pipelines")
    print("-" * 50)

    evens = Sequence.generate(lambda n: 0 if n is None else n + 2)
    print(f"  First even multiples of 3: {evens.where(lambda n: n % 3 == 0).take(5).to_list()}")

    fibonacci = Sequence.of(0, 1).chain_pairwise(lambda a, b: a + b)
    print(f"  Fibonacci below 100: {fibonacci.as_long_as(lambda n: n < 100).to_list()}")

    countdown = Sequence.unfold(5, lambda n: n - 1 if n > 0 else STOP)
    print(f"  Countdown: {countdown.to_list()}")
    print(f"  Interleaved: {Sequence.of(1, 3, 5).interleave([2, 4, 6, 8]).to_list()}")

    print("\nCaching")
    print("-" * 50)
    dice = Sequence.generate(lambda _: random.randint(1, 6)).take(8)
    print(f"  Uncached rolls differ:  {dice.to_list()} vs {dice.to_list()}")
    pinned = dice.cached()
    print(f"  Cached rolls are fixed: {pinned.to_list()} vs {pinned.to_list()}")

    print("\nTrees")
    print("-" * 50)
    tree = TreeNode.with_root("1").with_child_value_extractor(
        lambda value: [f"{value}.{i}" for i in (1, 2, 3)])

    shallow = tree.not_below(lambda node: len(node.value) >= 5)
    print(f"  Nodes in the pruned view: {shallow.breadth_first().count()}")

    node = tree.first_with_value("1.2.3")
    print(f"  Ancestors of {node}: {', '.join(str(a) for a in node.ancestors())}")
    print(f"  Siblings of {node}: {', '.join(str(s) for s in node.siblings())}")
    print(f"  Predecessor of {node}: {node.predecessor()}")


if __name__ == "__main__":
    main()
