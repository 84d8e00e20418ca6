"""Test fixtures for DiffTreeLib consumers.

These fixtures build diff trees from compact nested specifications and check
tree invariants, so that test suites of differencing engines and report
builders don't have to wire nodes by hand.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..accessors.property import PropertyAccessor
from ..core.accessor import Accessor
from ..core.node import DiffNode
from ..core.state import State
from ..core.visitor import Visit

NodeSpec = Union[State, Mapping[Any, Any], Tuple[State, Mapping[Any, Any]]]


class DiffTreeTestHelper:
    """Public test fixture for building and verifying diff trees.

    Example:
        helper = DiffTreeTestHelper()
        root = helper.build({
            "name": State.CHANGED,
            "address": {"street": State.ADDED},
            "tags": (State.UNTOUCHED, {}),
        })
        helper.assert_consistent(root)
        assert helper.paths(root) == ["/", "/name", "/address", "/address/street", "/tags"]

    Keys of a specification are property names (wrapped in a
    PropertyAccessor) or Accessor instances. Values are a State for a leaf,
    a mapping for an UNTOUCHED node with children, or a (State, mapping)
    tuple. Subtrees are completed before they are attached, the way a
    differencing engine builds them, so state promotion applies.
    """

    def build(self, spec: Mapping[Any, Any], root_state: State = State.UNTOUCHED,
              value_type: Optional[type] = None) -> DiffNode:
        """Build a tree below a new root node.

        Args:
            spec: Mapping of child keys to node specifications
            root_state: Initial state of the root node
            value_type: Value type of the root node

        Returns:
            The root DiffNode
        """
        root = DiffNode.new_root_node(value_type)
        root.set_state(root_state)
        self._attach_children(root, spec)
        return root

    def build_node(self, key: Any, spec: NodeSpec) -> DiffNode:
        """Build a detached node (and its subtree) for one specification entry."""
        node = DiffNode(self._accessor_for(key))
        state, children = self._split(spec)
        node.set_state(state)
        self._attach_children(node, children)
        return node

    def paths(self, root: DiffNode) -> List[str]:
        """Return the rendered paths of all nodes, in visiting order."""
        rendered: List[str] = []
        root.visit(lambda node, visit: rendered.append(str(node.get_path())))
        return rendered

    def states(self, root: DiffNode) -> Dict[str, State]:
        """Return a mapping of rendered path to state for all nodes."""
        result: Dict[str, State] = {}

        def record(node: DiffNode, visit: Visit) -> None:
            result[str(node.get_path())] = node.get_state()

        root.visit(record)
        return result

    def assert_consistent(self, root: DiffNode) -> None:
        """Assert that every node is stored in its parent under its own selector.

        Raises:
            AssertionError: On the first inconsistent node
        """
        def check(node: DiffNode, visit: Visit) -> None:
            parent = node.get_parent_node()
            if parent is None:
                return
            stored = parent.get_child(node.get_element_selector())
            assert stored is node, (
                f"Node at {node.get_path()} is not stored in its parent under its selector"
            )

        root.visit(check)

    def _attach_children(self, parent: DiffNode, spec: Mapping[Any, Any]) -> None:
        for key, child_spec in spec.items():
            parent.add_child(self.build_node(key, child_spec))

    @staticmethod
    def _accessor_for(key: Any) -> Accessor:
        if isinstance(key, Accessor):
            return key
        if isinstance(key, str):
            return PropertyAccessor(key)
        raise TypeError(f"Cannot derive an accessor from {key!r}")

    @staticmethod
    def _split(spec: NodeSpec) -> Tuple[State, Mapping[Any, Any]]:
        if isinstance(spec, State):
            return spec, {}
        if isinstance(spec, tuple):
            state, children = spec
            return state, children
        if isinstance(spec, Mapping):
            return State.UNTOUCHED, spec
        raise TypeError(f"Unsupported node specification: {spec!r}")
