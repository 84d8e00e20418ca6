"""DiffNode - the node of a diff tree.

A DiffNode represents one part of a compared object graph: the root object
itself, one of its properties, a collection item or a map entry. It records
how that part differs between the base and the working version (its State),
owns the nodes of its sub-parts, and can read, write or remove the value it
represents on any object of the same shape as the compared ones.

The tree is built by a differencing engine, one attachment at a time:

    root = DiffNode.new_root_node(Person)
    name = DiffNode(PropertyAccessor("name", str))
    name.set_state(State.CHANGED)
    root.add_child(name)        # root is promoted to CHANGED

Invariants kept by this class:
- a node has at most one parent, and an attached node is never re-parented
- a node is never its own ancestor, so the tree stays acyclic even when the
  compared data is circular
- the root node (the one using the RootAccessor) is never a child
"""

import logging
from typing import Any, Dict, List, Optional, Set, Type, TypeVar, Union

from ..exceptions import InvalidArgumentError, InvalidStateError
from .accessor import Accessor, RootAccessor
from .path import NodePath
from .selector import ElementSelector, PropertyElementSelector
from .state import State
from .visitor import (
    NodePathVisitor,
    Visit,
    VisitorLike,
    Visitor,
    VisitResult,
    as_visitor,
)

logger = logging.getLogger(__name__)

A = TypeVar('A')


class DiffNode:
    """Node of a diff tree.

    Identity of a node is defined by its accessor alone: two nodes with equal
    accessors are equal, whatever their state, children or position. This
    lets a node from one tree build stand in for the structurally identical
    node of another build.
    """

    def __init__(self,
                 accessor: Accessor,
                 value_type: Optional[type] = None,
                 parent_node: Optional['DiffNode'] = None):
        """Create a node.

        Args:
            accessor: Accessor for the represented value (required)
            value_type: Explicit type of the represented value
            parent_node: Parent to attach to right away. Attachment follows
                the same rules as add_child().

        Raises:
            InvalidArgumentError: If accessor is None, or the attachment to
                parent_node is forbidden
        """
        if accessor is None:
            raise InvalidArgumentError("accessor must not be None")
        self._accessor = accessor
        self._value_type = value_type
        self._state = State.UNTOUCHED
        self._parent_node: Optional['DiffNode'] = None
        self._children: Dict[ElementSelector, 'DiffNode'] = {}
        self._circle_start_path: Optional[NodePath] = None
        self._circle_start_node: Optional['DiffNode'] = None
        self._frozen = False
        if parent_node is not None:
            parent_node.add_child(self)

    @classmethod
    def new_root_node(cls, value_type: Optional[type] = None) -> 'DiffNode':
        """Create the root node of a new tree."""
        return cls(RootAccessor.get_instance(), value_type)

    # State

    def get_state(self) -> State:
        return self._state

    def set_state(self, state: State) -> None:
        """Set the state of this node.

        Raises:
            InvalidArgumentError: If state is None
            InvalidStateError: If the node is frozen
        """
        if state is None:
            raise InvalidArgumentError("state must not be None")
        if not isinstance(state, State):
            raise InvalidArgumentError(f"Expected a State, got {type(state).__name__}")
        self._check_not_frozen("change the state of")
        self._state = state

    def is_added(self) -> bool:
        return self._state is State.ADDED

    def is_changed(self) -> bool:
        return self._state is State.CHANGED

    def is_removed(self) -> bool:
        return self._state is State.REMOVED

    def is_untouched(self) -> bool:
        return self._state is State.UNTOUCHED

    def is_circular(self) -> bool:
        return self._state is State.CIRCULAR

    def is_ignored(self) -> bool:
        return self._state is State.IGNORED

    def has_changes(self) -> bool:
        """Check if this node or any of its descendants was added, changed or removed.

        The descendants are searched depth-first and the search ends at the
        first change found. The state of this node is not modified.
        """
        if self._state.is_change():
            return True
        found: List['DiffNode'] = []

        def find_change(node: 'DiffNode', visit: Visit) -> None:
            if node.get_state().is_change():
                found.append(node)
                visit.stop()

        self.visit_children(find_change)
        return bool(found)

    # Identity and addressing

    def get_path(self) -> NodePath:
        """Return the absolute path from the tree root to this node.

        A node without parent has the root path if it is the root node, and a
        single-element path made of its own selector otherwise.
        """
        builder = NodePath.start_building()
        for node in self._lineage():
            if not node.is_root_node():
                builder.element(node.get_element_selector())
        return builder.build()

    def _lineage(self) -> List['DiffNode']:
        """Return the ancestors of this node and the node itself, topmost first."""
        lineage = []
        node: Optional['DiffNode'] = self
        while node is not None:
            lineage.append(node)
            node = node._parent_node
        lineage.reverse()
        return lineage

    def matches(self, path: NodePath) -> bool:
        return path.matches(self.get_path())

    def get_element_selector(self) -> ElementSelector:
        return self._accessor.get_element_selector()

    def get_accessor(self) -> Accessor:
        return self._accessor

    def get_value_type(self) -> Optional[type]:
        """Return the type of the represented value, or None if unknown.

        An explicit type set through the constructor or set_type() wins over
        the type reported by the accessor.
        """
        if self._value_type is not None:
            return self._value_type
        if self._accessor.supports_type():
            return self._accessor.get_type()
        return None

    def set_type(self, value_type: Optional[type]) -> None:
        self._check_not_frozen("change the type of")
        self._value_type = value_type

    # Children

    def has_children(self) -> bool:
        return bool(self._children)

    def child_count(self) -> int:
        return len(self._children)

    def get_children(self) -> List['DiffNode']:
        """Return the children in insertion order."""
        return list(self._children.values())

    def get_child(self, key: Union[str, ElementSelector, NodePath]) -> Optional['DiffNode']:
        """Look up a child node.

        Args:
            key: One of
                - a property name: the direct child representing that property
                - an ElementSelector: the direct child under that selector
                - a NodePath: the descendant at that absolute path (searched
                  among the descendants of this node)

        Returns:
            The matching node, or None
        """
        if isinstance(key, NodePath):
            visitor = NodePathVisitor(key)
            self.visit_children(visitor)
            return visitor.get_node()
        if isinstance(key, ElementSelector):
            return self._children.get(key)
        if isinstance(key, str):
            return self._children.get(PropertyElementSelector(key))
        raise TypeError(
            f"Expected a property name, ElementSelector or NodePath, got {type(key).__name__}"
        )

    def add_child(self, node: 'DiffNode') -> bool:
        """Attach a node as child of this node.

        The child is keyed by its element selector; a child already stored
        under an equal selector is replaced. The replaced node is orphaned:
        it keeps this node as its parent but is no longer one of its
        children, so it should be discarded. If this node is UNTOUCHED and
        the added subtree has changes, this node becomes CHANGED.

        Args:
            node: The node to attach

        Returns:
            True - acceptance is unconditional once validation passes

        Raises:
            InvalidArgumentError: If node is None, the root node, this node,
                an ancestor of this node, or already the child of another node
            InvalidStateError: If this node, or the detached node, is frozen
        """
        if node is None:
            raise InvalidArgumentError("node must not be None")
        if node.is_root_node():
            raise InvalidArgumentError(
                "Detected attempt to add root node as child. "
                "This is not allowed and must be a mistake."
            )
        if node is self:
            raise InvalidArgumentError(
                "Detected attempt to add a node to itself. "
                "This would cause infinite loops and must never happen."
            )
        parent = node.get_parent_node()
        if parent is not None and parent is not self:
            raise InvalidArgumentError(
                f"Detected attempt to add child node at path '{node.get_path()}' "
                f"to '{self.get_path()}', but it is already the child of another node. "
                "Adding nodes multiple times is not allowed, since it could cause infinite loops."
            )
        if parent is None and node._children and self._is_descendant_of(node):
            raise InvalidArgumentError(
                f"Detected attempt to add an ancestor of '{self.get_path()}' as its child. "
                "This would turn the tree into a cycle."
            )
        self._check_not_frozen("add a child to")

        selector = node.get_element_selector()
        debug = logger.isEnabledFor(logging.DEBUG)
        if parent is None:
            if node.is_frozen():
                raise InvalidStateError("A frozen node cannot be attached to a parent")
            node._set_parent_node(self)
            if debug:
                logger.debug("Attached %s under %s", selector, self.get_path())
        previous = self._children.get(selector)
        if debug and previous is not None and previous is not node:
            logger.debug("Replacing child %s of %s", selector, self.get_path())
        self._children[selector] = node

        if self._state is State.UNTOUCHED and node.has_changes():
            self._state = State.CHANGED
            if debug:
                logger.debug("Promoted %s to CHANGED", self.get_path())
        return True

    def _is_descendant_of(self, node: 'DiffNode') -> bool:
        current = self._parent_node
        while current is not None:
            if current is node:
                return True
            current = current._parent_node
        return False

    # Traversal

    def visit(self, visitor: VisitorLike) -> None:
        """Visit this node and all of its descendants, depth-first pre-order.

        Args:
            visitor: Visitor instance or callable ``(node, visit)``
        """
        self._visit(as_visitor(visitor))

    def visit_children(self, visitor: VisitorLike) -> None:
        """Visit all descendants of this node, but not the node itself."""
        self._visit_children(as_visitor(visitor))

    def _visit(self, visitor: Visitor) -> VisitResult:
        return _walk(visitor, [self])

    def _visit_children(self, visitor: Visitor) -> VisitResult:
        return _walk(visitor, list(reversed(self._children.values())))

    # Property metadata

    def is_property_aware(self) -> bool:
        return self._accessor.supports_property()

    def is_root_node(self) -> bool:
        return self._accessor.is_root()

    def get_property_annotations(self) -> Set[Any]:
        """Return the annotations of the represented property, or an empty set."""
        if self.is_property_aware():
            return set(self._accessor.get_annotations())
        return set()

    def get_property_annotation(self, annotation_type: Type[A]) -> Optional[A]:
        if self.is_property_aware():
            return self._accessor.get_annotation(annotation_type)
        return None

    def get_property_name(self) -> Optional[str]:
        """Return the name of the property this node belongs to.

        Nodes for collection items, map entries and the like have no name of
        their own; they report the name of the closest ancestor representing a
        property, so that they stay tied to their container.
        """
        node: Optional['DiffNode'] = self
        while node is not None:
            if node.is_property_aware():
                return node._accessor.get_property_name()
            node = node._parent_node
        return None

    def get_comparison_strategy(self) -> Any:
        if self._accessor.supports_comparison_strategy():
            return self._accessor.get_comparison_strategy()
        return None

    def is_excluded(self) -> bool:
        if self._accessor.supports_exclusion():
            return bool(self._accessor.is_excluded())
        return False

    def get_categories(self) -> Set[str]:
        """Return the categories of this node and all of its ancestors."""
        categories: Set[str] = set()
        for node in self._lineage():
            if node._accessor.supports_categories():
                own = node._accessor.get_categories()
                if own:
                    categories.update(own)
        return categories

    # Parent

    def get_parent_node(self) -> Optional['DiffNode']:
        return self._parent_node

    def _set_parent_node(self, parent_node: Optional['DiffNode']) -> None:
        """Set the parent node. The parent is write-once.

        Raises:
            InvalidStateError: If a different parent is already set
        """
        if self._parent_node is not None and self._parent_node is not parent_node:
            raise InvalidStateError("The parent of a node cannot be changed, once it's set.")
        self._parent_node = parent_node

    # Value access

    def get(self, target: Any) -> Any:
        """Read the represented value directly from target (one level)."""
        return self._accessor.get(target)

    def set(self, target: Any, value: Any) -> None:
        self._accessor.set(target, value)

    def unset(self, target: Any) -> None:
        self._accessor.unset(target)

    def canonical_get(self, target: Any) -> Any:
        """Read the represented value, starting from the root object.

        Args:
            target: The root object of the compared graph

        Returns:
            The value this node represents within target
        """
        return self._accessor.get(self._resolve_container(target))

    def canonical_set(self, target: Any, value: Any) -> None:
        """Write the represented value, starting from the root object."""
        self._accessor.set(self._resolve_container(target), value)

    def canonical_unset(self, target: Any) -> None:
        """Remove the represented value, starting from the root object."""
        self._accessor.unset(self._resolve_container(target))

    def _resolve_container(self, target: Any) -> Any:
        """Resolve the object holding this node's value, starting from the root object."""
        for node in self._lineage()[:-1]:
            target = node._accessor.get(target)
        return target

    # Circular references

    def get_circle_start_path(self) -> Optional[NodePath]:
        """Return the path of the node where the circle started, if circular."""
        return self._circle_start_path

    def set_circle_start_path(self, path: Optional[NodePath]) -> None:
        self._check_not_frozen("mark the circle start of")
        self._circle_start_path = path

    def get_circle_start_node(self) -> Optional['DiffNode']:
        return self._circle_start_node

    def set_circle_start_node(self, node: Optional['DiffNode']) -> None:
        self._check_not_frozen("mark the circle start of")
        self._circle_start_node = node

    # Build phase

    def freeze(self) -> None:
        """Seal this node and its whole subtree against further mutation."""
        pending = [self]
        while pending:
            node = pending.pop()
            node._frozen = True
            pending.extend(node._children.values())
        logger.debug("Froze subtree at %s", self.get_path())

    def is_frozen(self) -> bool:
        return self._frozen

    def _check_not_frozen(self, action: str) -> None:
        if self._frozen:
            raise InvalidStateError(
                f"Cannot {action} frozen node at path '{self.get_path()}'"
            )

    # Python protocols

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, DiffNode):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return self._accessor == other._accessor

    def __hash__(self) -> int:
        return hash(self._accessor)

    def __str__(self) -> str:
        parts = [f"state={self._state.name}"]
        value_type = self.get_value_type()
        if value_type is not None:
            parts.append(f"type={_type_name(value_type)}")
        count = self.child_count()
        if count == 1:
            parts.append("1 child")
        elif count > 1:
            parts.append(f"{count} children")
        else:
            parts.append("no children")
        categories = self.get_categories()
        if categories:
            parts.append(f"categorized as {sorted(categories)}")
        parts.append(f"accessed via {self._accessor}")
        return f"{self.__class__.__name__}({', '.join(parts)})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={str(self.get_path())!r}, state={self._state.name})"


def _walk(visitor: Visitor, pending: List[DiffNode]) -> VisitResult:
    """Offer nodes to a visitor depth-first, pre-order.

    pending is a stack holding the next node last. Children are pushed in
    reverse so they are offered in insertion order, and they are read only
    after their parent was accepted, so nodes attached by the visitor to an
    already expanded node are not offered.
    """
    while pending:
        node = pending.pop()
        visit = Visit()
        visitor.accept(node, visit)
        if visit.is_stopped():
            return VisitResult.STOP
        if visit.is_allowed_to_go_deeper() and node._children:
            pending.extend(reversed(node._children.values()))
    return VisitResult.CONTINUE


def _type_name(value_type: Any) -> str:
    qualname = getattr(value_type, '__qualname__', None)
    module = getattr(value_type, '__module__', None)
    if qualname is None:
        return str(value_type)
    if module is None:
        return qualname
    return f"{module}.{qualname}"
