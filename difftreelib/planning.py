"""Execution planning for DiffTreeLib queries.

The TraversalPlan validates a TraversalConfig and runs it over a diff tree
through the visitor protocol. Depth limits and pruning become
Visit.dont_go_deeper() calls, node limits become Visit.stop(), so a query
never looks at more of the tree than it needs.
"""

import logging
from typing import Any, Dict, List, Tuple

from .config import TraversalConfig
from .core.node import DiffNode
from .core.visitor import Visit, Visitor
from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class ConfiguredVisitor(Visitor):
    """Visitor applying a TraversalConfig relative to a start node."""

    def __init__(self, config: TraversalConfig, start: DiffNode):
        self.config = config
        self.start = start
        self.results: List[Tuple[DiffNode, int]] = []
        # Depths by id(node); a parent is always visited before its children.
        self._depths: Dict[int, int] = {id(start): 0}

    def accept(self, node: DiffNode, visit: Visit) -> None:
        depth = self._depth_of(node)

        if node is not self.start or self.config.include_start:
            if self.config.depth.should_yield(depth) and self.config.filter.should_include(node):
                self.results.append((node, depth))
                if self.config.max_nodes is not None and len(self.results) >= self.config.max_nodes:
                    visit.stop()
                    return

        if not self.config.depth.should_explore(depth):
            visit.dont_go_deeper()
        elif not self.config.filter.should_explore_children(node):
            visit.dont_go_deeper()

    def _depth_of(self, node: DiffNode) -> int:
        depth = self._depths.get(id(node))
        if depth is None:
            depth = self._depths[id(node.get_parent_node())] + 1
            self._depths[id(node)] = depth
        return depth


class TraversalPlan:
    """Validated execution plan for a diff tree query.

    Example:
        >>> plan = TraversalPlan(TraversalConfig.changes_only())
        >>> changed = [node for node, depth in plan.execute(root)]
    """

    def __init__(self, config: TraversalConfig):
        """Create and validate a plan.

        Raises:
            InvalidArgumentError: If the configuration is inconsistent
        """
        config_errors = config.validate()
        if config_errors:
            raise InvalidArgumentError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        self.config = config
        self.nodes_processed = 0

    def execute(self, start: DiffNode) -> List[Tuple[DiffNode, int]]:
        """Run the query starting at a node.

        Args:
            start: Node the traversal starts from (depth 0)

        Returns:
            List of (node, depth) tuples in depth-first pre-order
        """
        visitor = ConfiguredVisitor(self.config, start)
        start.visit(visitor)
        self.nodes_processed = len(visitor.results)
        logger.debug("Query from %s reported %d nodes", start.get_path(), self.nodes_processed)
        return visitor.results

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the plan, for debugging and logging."""
        return {
            'max_depth': self.config.depth.max_depth,
            'min_depth': self.config.depth.min_depth,
            'states': sorted(s.name for s in self.config.filter.states)
            if self.config.filter.states is not None else None,
            'categories': sorted(self.config.filter.categories)
            if self.config.filter.categories is not None else None,
            'max_nodes': self.config.max_nodes,
            'include_start': self.config.include_start,
        }
