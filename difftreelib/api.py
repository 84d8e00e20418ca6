"""High-level API for DiffTreeLib.

This module provides simple, functional interfaces for common queries over a
diff tree. These functions wrap TraversalConfig and TraversalPlan for ease of
use in simple cases.
"""

from typing import Any, Callable, Dict, Iterator, List, Tuple

from .config import TraversalConfig
from .core.node import DiffNode
from .core.path import NodePath
from .core.state import State
from .planning import TraversalPlan


def traverse_tree(root: DiffNode, **kwargs) -> Iterator[DiffNode]:
    """Simple interface for diff tree traversal.

    Nodes are reported depth-first, pre-order, starting with root.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options
            max_depth: Maximum depth to traverse (relative to root)
            min_depth: Minimum depth before yielding nodes
            include_filter: Function to determine if node should be included
            exclude_filter: Function to determine if node should be excluded
            states: Only report nodes in one of these states
            categories: Only report nodes carrying one of these categories
            prune_on_exclude: Skip the subtrees of excluded nodes
            max_nodes: Stop after this many nodes
            include_start: Report root itself (default True)

    Yields:
        DiffNode instances that match the criteria

    Example:
        >>> for node in traverse_tree(root, states={State.CHANGED}, max_depth=2):
        ...     print(node.get_path())
    """
    for node, _ in _execute(root, **kwargs):
        yield node


def count_nodes(root: DiffNode, **kwargs) -> int:
    """Count nodes in a tree that match criteria.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Number of nodes that match criteria
    """
    count = 0
    for _ in traverse_tree(root, **kwargs):
        count += 1
    return count


def find_nodes(
    root: DiffNode,
    predicate: Callable[[DiffNode], bool],
    **kwargs
) -> Iterator[DiffNode]:
    """Find nodes that match a predicate.

    Example:
        >>> excluded = list(find_nodes(root, lambda n: n.is_excluded()))
    """
    kwargs['include_filter'] = predicate
    yield from traverse_tree(root, **kwargs)


def get_changed_nodes(root: DiffNode, **kwargs) -> List[DiffNode]:
    """Return all added, changed and removed nodes below and including root."""
    kwargs.setdefault('states', (State.ADDED, State.CHANGED, State.REMOVED))
    return list(traverse_tree(root, **kwargs))


def get_node_paths(root: DiffNode, **kwargs) -> List[NodePath]:
    """Return the absolute paths of all matching nodes."""
    return [node.get_path() for node in traverse_tree(root, **kwargs)]


def get_leaf_nodes(root: DiffNode, **kwargs) -> Iterator[DiffNode]:
    """Get all leaf nodes (nodes without children) in a tree."""
    for node in traverse_tree(root, **kwargs):
        if not node.has_children():
            yield node


def get_tree_stats(root: DiffNode, **kwargs) -> Dict[str, Any]:
    """Get statistics about a diff tree.

    Args:
        root: Starting node for traversal
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Dictionary with tree statistics

    Example:
        >>> stats = get_tree_stats(root)
        >>> print(f"Changed nodes: {stats['states']['CHANGED']}")
    """
    stats: Dict[str, Any] = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {},
        'states': {state.name: 0 for state in State},
        'circular_nodes': 0,
    }
    child_links = 0

    for node, depth in _execute(root, **kwargs):
        stats['total_nodes'] += 1

        if node.has_children():
            child_links += node.child_count()
        else:
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1
        stats['states'][node.get_state().name] += 1

        if node.is_circular():
            stats['circular_nodes'] += 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    stats['average_branching'] = (
        child_links / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )

    return stats


# Helper functions

def _execute(root: DiffNode, **kwargs) -> List[Tuple[DiffNode, int]]:
    return TraversalPlan(_build_config_from_kwargs(**kwargs)).execute(root)


def _build_config_from_kwargs(**kwargs) -> TraversalConfig:
    """Build TraversalConfig from keyword arguments.

    Args:
        **kwargs: Configuration options

    Returns:
        TraversalConfig instance

    Raises:
        TypeError: If an option is not known
    """
    config = TraversalConfig()

    if 'max_depth' in kwargs:
        config.depth.max_depth = kwargs.pop('max_depth')

    if 'min_depth' in kwargs:
        config.depth.min_depth = kwargs.pop('min_depth')

    if 'include_filter' in kwargs:
        config.filter.include_filter = kwargs.pop('include_filter')

    if 'exclude_filter' in kwargs:
        config.filter.exclude_filter = kwargs.pop('exclude_filter')

    if 'prune_on_exclude' in kwargs:
        config.filter.prune_on_exclude = kwargs.pop('prune_on_exclude')

    states = kwargs.pop('states', None)
    if states is not None:
        config.filter.states = {states} if isinstance(states, State) else set(states)

    categories = kwargs.pop('categories', None)
    if categories is not None:
        config.filter.categories = {categories} if isinstance(categories, str) else set(categories)

    if 'max_nodes' in kwargs:
        config.max_nodes = kwargs.pop('max_nodes')

    if 'include_start' in kwargs:
        config.include_start = kwargs.pop('include_start')

    if kwargs:
        raise TypeError(f"Unknown traversal option(s): {', '.join(sorted(kwargs))}")

    return config
