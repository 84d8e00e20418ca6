"""Configuration system for DiffTreeLib queries.

This module defines how users specify what they want from a traversal of a
diff tree: how deep to go, which nodes to report, which branches to prune,
and how many nodes to report at most.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Set

from .core.state import State


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering.

    Depths are relative to the node the traversal starts from (depth 0).
    """

    min_depth: int = 0                          # Minimum depth to yield
    max_depth: Optional[int] = None             # Maximum depth to traverse
    specific_depths: Optional[Set[int]] = None  # Only these specific depths

    def should_yield(self, depth: int) -> bool:
        """Check if nodes at this depth should be yielded.

        Args:
            depth: Current depth

        Returns:
            True if depth is within configured range
        """
        if self.specific_depths is not None:
            return depth in self.specific_depths

        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False

        return True

    def should_explore(self, depth: int) -> bool:
        """Check if children of a node at this depth should be explored.

        Args:
            depth: Current depth

        Returns:
            True if we should go deeper
        """
        if self.specific_depths is not None:
            return any(d > depth for d in self.specific_depths)

        if self.max_depth is not None:
            return depth < self.max_depth

        return True  # No limit


@dataclass
class FilterConfig:
    """Configuration for filtering nodes during traversal."""

    # Custom filter functions
    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate

    # Node attribute filters
    states: Optional[Set[State]] = None     # Only nodes in one of these states
    categories: Optional[Set[str]] = None   # Only nodes with one of these categories

    # Pruning behavior
    prune_on_exclude: bool = False  # Don't traverse excluded branches

    def should_include(self, node) -> bool:
        """Check if a node should be included based on filters.

        Args:
            node: DiffNode to check

        Returns:
            True if node passes all filters
        """
        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.states is not None and node.get_state() not in self.states:
            return False

        if self.categories is not None and not (node.get_categories() & self.categories):
            return False

        if self.include_filter:
            return bool(self.include_filter(node))

        return True

    def should_explore_children(self, node) -> bool:
        """Check if children of a node should be explored.

        Only an explicit exclude_filter match prunes a branch; state and
        category filters never hide matching descendants.
        """
        if not self.prune_on_exclude:
            return True
        return not (self.exclude_filter and self.exclude_filter(node))


@dataclass
class TraversalConfig:
    """Complete configuration for a diff tree query.

    The TraversalPlan validates this configuration before running it.
    """

    depth: DepthConfig = field(default_factory=DepthConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)

    max_nodes: Optional[int] = None  # Stop after reporting this many nodes
    include_start: bool = True       # Report the node the traversal starts from

    @classmethod
    def shallow_scan(cls, max_depth: int = 1) -> 'TraversalConfig':
        """Create config for looking at the top of a tree only.

        Args:
            max_depth: How deep to scan (default 1 = immediate children only)
        """
        return cls(depth=DepthConfig(max_depth=max_depth))

    @classmethod
    def changes_only(cls, states: Optional[Iterable[State]] = None) -> 'TraversalConfig':
        """Create config reporting only added, changed and removed nodes.

        Args:
            states: Override the reported states
        """
        if states is None:
            states = (State.ADDED, State.CHANGED, State.REMOVED)
        elif isinstance(states, State):
            states = (states,)
        return cls(filter=FilterConfig(states=set(states)))

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth.min_depth < 0:
            errors.append("min_depth cannot be negative")

        if self.depth.max_depth is not None:
            if self.depth.max_depth < 0:
                errors.append("max_depth cannot be negative")
            if self.depth.max_depth < self.depth.min_depth:
                errors.append("max_depth cannot be less than min_depth")

        if self.depth.specific_depths is not None:
            if any(d < 0 for d in self.depth.specific_depths):
                errors.append("specific_depths cannot contain negative depths")

        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.filter.states is not None:
            unknown = [s for s in self.filter.states if not isinstance(s, State)]
            if unknown:
                errors.append(f"states must be State members, got {unknown!r}")

        return errors
