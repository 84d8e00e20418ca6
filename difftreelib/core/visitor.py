"""Visitor protocol for DiffTreeLib.

Traversal over a diff tree is depth-first and pre-order: every node is offered
to the visitor before its children. For each node the visitor receives a fresh
Visit object through which it can stop the whole traversal or skip the node's
children.

Traversal runs over an explicit stack, so tree depth is not bounded by the
interpreter recursion limit. A stopped walk reports VisitResult.STOP.
Once a visitor stops, no further node - child, sibling or pending ancestor
sibling - is offered, and the outer visit() call returns normally.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional, Union

from .path import NodePath

if TYPE_CHECKING:
    from .node import DiffNode


class VisitResult(Enum):
    """Outcome of visiting a node or subtree."""
    CONTINUE = "continue"
    STOP = "stop"


class Visit:
    """Per-node traversal control handed to a visitor."""

    __slots__ = ('_stopped', '_dont_go_deeper')

    def __init__(self):
        self._stopped = False
        self._dont_go_deeper = False

    def stop(self) -> None:
        """Abort the entire traversal after the current callback returns."""
        self._stopped = True

    def dont_go_deeper(self) -> None:
        """Skip the children of the current node."""
        self._dont_go_deeper = True

    def is_stopped(self) -> bool:
        return self._stopped

    def is_allowed_to_go_deeper(self) -> bool:
        return not self._dont_go_deeper

    def result(self) -> VisitResult:
        return VisitResult.STOP if self._stopped else VisitResult.CONTINUE


class Visitor(ABC):
    """Abstract base class for diff tree visitors."""

    @abstractmethod
    def accept(self, node: 'DiffNode', visit: Visit) -> None:
        """Inspect a node during traversal.

        Args:
            node: The node being visited
            visit: Control object for this node (stop / don't go deeper)
        """
        pass


VisitorLike = Union[Visitor, Callable[['DiffNode', Visit], None]]


class FunctionVisitor(Visitor):
    """Visitor that delegates to a plain callable ``(node, visit) -> None``."""

    def __init__(self, func: Callable[['DiffNode', Visit], None]):
        self.func = func

    def accept(self, node: 'DiffNode', visit: Visit) -> None:
        self.func(node, visit)


def as_visitor(visitor: VisitorLike) -> Visitor:
    """Coerce a visitor or callable into a Visitor instance.

    Raises:
        TypeError: If the argument is neither a Visitor nor callable
    """
    if isinstance(visitor, Visitor):
        return visitor
    if callable(visitor):
        return FunctionVisitor(visitor)
    raise TypeError(f"Expected a Visitor or a callable, got {type(visitor).__name__}")


class NodePathVisitor(Visitor):
    """Finds the node located at an absolute path.

    Branches whose path is not a prefix of the wanted path are skipped, and
    the traversal stops at the first match.
    """

    def __init__(self, path: NodePath):
        self.path = path
        self.node: Optional['DiffNode'] = None

    def accept(self, node: 'DiffNode', visit: Visit) -> None:
        node_path = node.get_path()
        if node_path.matches(self.path):
            self.node = node
            visit.stop()
        elif not node_path.is_parent_of(self.path):
            visit.dont_go_deeper()

    def get_node(self) -> Optional['DiffNode']:
        return self.node


class CollectingVisitor(Visitor):
    """Collects visited nodes, optionally only those matching a predicate."""

    def __init__(self, predicate: Optional[Callable[['DiffNode'], bool]] = None):
        self.predicate = predicate
        self.nodes: List['DiffNode'] = []

    def accept(self, node: 'DiffNode', visit: Visit) -> None:
        if self.predicate is None or self.predicate(node):
            self.nodes.append(node)

    def get_nodes(self) -> List['DiffNode']:
        return list(self.nodes)
