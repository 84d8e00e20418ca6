"""DiffTreeLib - Diff trees for object graph comparison.

DiffTreeLib provides the tree that records how two versions ("base" and
"working") of an object graph differ: which parts were added, changed,
removed, left untouched, ignored or found circular.

    from difftreelib import DiffNode, State, PropertyAccessor

    root = DiffNode.new_root_node()
    name = DiffNode(PropertyAccessor("name", str))
    name.set_state(State.CHANGED)
    root.add_child(name)

    root.get_child("name").canonical_set(person, "Bob")

Deciding whether two values differ, and building the tree accordingly, is
the job of a differencing engine; this package is the structure it fills and
the query surface report builders read from.
"""

__version__ = "0.4.0"

from .exceptions import (
    DiffTreeError,
    InvalidArgumentError,
    InvalidStateError,
    PropertyAccessError,
    PropertyReadError,
    PropertyWriteError,
)
from .core import (
    State,
    ElementSelector,
    RootElementSelector,
    PropertyElementSelector,
    CollectionItemElementSelector,
    MapKeyElementSelector,
    NodePath,
    Accessor,
    TypeAwareAccessor,
    CategoryAwareAccessor,
    ExclusionAwareAccessor,
    ComparisonStrategyAwareAccessor,
    PropertyAwareAccessor,
    RootAccessor,
    Visit,
    VisitResult,
    Visitor,
    FunctionVisitor,
    NodePathVisitor,
    CollectingVisitor,
    as_visitor,
    DiffNode,
)
from .accessors import PropertyAccessor, CollectionItemAccessor, MapEntryAccessor
from .config import TraversalConfig, DepthConfig, FilterConfig
from .planning import TraversalPlan
from .api import (
    traverse_tree,
    count_nodes,
    find_nodes,
    get_changed_nodes,
    get_node_paths,
    get_leaf_nodes,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Errors
    "DiffTreeError",
    "InvalidArgumentError",
    "InvalidStateError",
    "PropertyAccessError",
    "PropertyReadError",
    "PropertyWriteError",
    # Core
    "State",
    "ElementSelector",
    "RootElementSelector",
    "PropertyElementSelector",
    "CollectionItemElementSelector",
    "MapKeyElementSelector",
    "NodePath",
    "Accessor",
    "TypeAwareAccessor",
    "CategoryAwareAccessor",
    "ExclusionAwareAccessor",
    "ComparisonStrategyAwareAccessor",
    "PropertyAwareAccessor",
    "RootAccessor",
    "Visit",
    "VisitResult",
    "Visitor",
    "FunctionVisitor",
    "NodePathVisitor",
    "CollectingVisitor",
    "as_visitor",
    "DiffNode",
    # Accessors
    "PropertyAccessor",
    "CollectionItemAccessor",
    "MapEntryAccessor",
    # Config
    "TraversalConfig",
    "DepthConfig",
    "FilterConfig",
    "TraversalPlan",
    # API
    "traverse_tree",
    "count_nodes",
    "find_nodes",
    "get_changed_nodes",
    "get_node_paths",
    "get_leaf_nodes",
    "get_tree_stats",
]
