#!/usr/bin/env python3
"""Demo script for depth tracking functionality in DazzleChain.

This script walks a directory tree lazily through a child extractor and
shows how depth information and depth limits shape the traversal.
"""

import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlechain import CachingChildExtractor, Sequence, TraversalStrategy, traverse


def list_directory(path: Path):
    """Child extractor for the filesystem: directory entries, sorted."""
    if not path.is_dir():
        return None
    try:
        return sorted(path.iterdir())
    except PermissionError:
        return None


def demo_basic_depth_tracking(root: Path):
    """Show basic depth tracking during traversal."""
    print("\n=== Basic Depth Tracking ===")
    print(f"Traversing: {root}\n")

    depth_counts = {}

    walk = Sequence.of(root).with_depth(
        list_directory, strategy=TraversalStrategy.DEPTH_FIRST, max_depth=3)
    for path, depth in walk:
        depth_counts[depth] = depth_counts.get(depth, 0) + 1

        indent = "  " * depth
        node_type = "[D]" if path.is_dir() else "[F]"
        print(f"{indent}{node_type} {path.name or path} (depth: {depth})")

    print("\nDepth statistics:")
    for depth in sorted(depth_counts.keys()):
        print(f"  Depth {depth}: {depth_counts[depth]} nodes")


def demo_depth_filtering(root: Path):
    """Show filtering by depth criteria."""
    print("\n=== Depth-Based Filtering ===")
    print(f"Filtering nodes in: {root}\n")

    depth_2_nodes = traverse([root], list_directory, min_depth=2, max_depth=2).to_list()
    print(f"Nodes at depth 2: {len(depth_2_nodes)}")
    for path in depth_2_nodes[:5]:
        print(f"  - {path.relative_to(root.parent)}")
    if len(depth_2_nodes) > 5:
        print(f"  ... and {len(depth_2_nodes) - 5} more")

    range_count = traverse([root], list_directory, min_depth=1, max_depth=3).count()
    print(f"\nNodes at depth 1-3: {range_count}")

    # Stop at the first deep file instead of walking everything
    deep_file = (traverse([root], list_directory, min_depth=3)
                 .first_where(lambda p: p.is_file()))
    print(f"First file at depth >= 3: {deep_file}")


def demo_pruning(root: Path):
    """Skip hidden and cache directories without ever listing them."""
    print("\n=== Pruned Traversal ===")

    def is_noise(path: Path) -> bool:
        return path.name.startswith(".") or path.name == "__pycache__"

    kept = Sequence.of(root).depth_first_not_below(list_directory, is_noise).not_where(is_noise)
    print(f"Entries outside hidden/cache directories: {kept.count()}")


def demo_cached_children(root: Path):
    """Compare repeated traversals with and without a child cache."""
    print("\n=== Cached Child Extraction ===")

    plain = Sequence.of(root).breadth_first(list_directory)
    children = CachingChildExtractor(list_directory)
    cached = Sequence.of(root).breadth_first(children)

    for label, walk in (("uncached", plain), ("cached", cached)):
        start = time.perf_counter()
        for _ in range(3):
            walk.count()
        elapsed = time.perf_counter() - start
        print(f"  {label:>8}: 3 traversals in {elapsed:.4f}s")

    stats = children.get_stats()
    print(f"  Cache hit rate: {stats['hit_rate']:.0%} ({stats['cache_size']} entries)")


def main():
    """Run all demonstrations."""
    if len(sys.argv) > 1:
        root = Path(sys.argv[1])
    else:
        root = Path.cwd()

    if not root.exists():
        print(f"Error: {root} does not exist")
        sys.exit(1)

    print("DazzleChain Depth Tracking Demo")
    print(f"{'=' * 50}")

    demo_basic_depth_tracking(root)
    demo_depth_filtering(root)
    demo_pruning(root)
    demo_cached_children(root)


if __name__ == "__main__":
    main()
