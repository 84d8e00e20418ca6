#!/usr/bin/env python3
"""
Change report example for DiffTreeLib.

This example demonstrates:
- Building a diff tree the way a differencing engine would
- Listing changes with their paths
- Patching a working copy back to the base version
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from difftreelib import (
    CollectionItemAccessor,
    DiffNode,
    MapEntryAccessor,
    PropertyAccessor,
    State,
    get_changed_nodes,
    get_tree_stats,
)


@dataclass
class Person:
    name: str
    tags: List[str] = field(default_factory=list)
    settings: Dict[str, int] = field(default_factory=dict)


def build_tree() -> DiffNode:
    """Diff tree between the base and working Person below."""
    root = DiffNode.new_root_node(Person)

    name = DiffNode(PropertyAccessor("name", str))
    name.set_state(State.CHANGED)
    root.add_child(name)

    tags = DiffNode(PropertyAccessor("tags", list))
    added_tag = DiffNode(CollectionItemAccessor("admin"))
    added_tag.set_state(State.ADDED)
    tags.add_child(added_tag)  # promotes tags to CHANGED
    root.add_child(tags)

    settings = DiffNode(PropertyAccessor("settings", dict), parent_node=root)
    DiffNode(MapEntryAccessor("volume"), parent_node=settings)

    root.freeze()
    return root


def main():
    base = Person(name="Alice", tags=["staff"], settings={"volume": 3})
    working = Person(name="Alicia", tags=["staff", "admin"], settings={"volume": 3})

    root = build_tree()

    print("Changes:")
    print("-" * 50)
    for node in get_changed_nodes(root, include_start=False):
        print(f"  {str(node.get_path()):<20} {node.get_state().name:<10} "
              f"{node.canonical_get(base)!r} -> {node.canonical_get(working)!r}")

    # Revert the working copy, deepest changes first
    for node in reversed(get_changed_nodes(root, include_start=False)):
        if node.has_children():
            continue
        if node.is_added():
            node.canonical_unset(working)
        else:
            node.canonical_set(working, node.canonical_get(base))

    stats = get_tree_stats(root)
    print(f"\nNodes: {stats['total_nodes']}, leaves: {stats['leaf_nodes']}")
    print(f"Reverted: {working}")
    return 0 if working == base else 1


if __name__ == "__main__":
    sys.exit(main())
