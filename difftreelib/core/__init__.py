"""Core abstractions for DiffTreeLib.

This module contains the diff tree itself - nodes, their states, the
selectors and paths that address them, the accessors they delegate value
access to, and the visitor protocol used to traverse them.
"""

from .state import State
from .selector import (
    ElementSelector,
    RootElementSelector,
    PropertyElementSelector,
    CollectionItemElementSelector,
    MapKeyElementSelector,
)
from .path import NodePath
from .accessor import (
    Accessor,
    TypeAwareAccessor,
    CategoryAwareAccessor,
    ExclusionAwareAccessor,
    ComparisonStrategyAwareAccessor,
    PropertyAwareAccessor,
    RootAccessor,
)
from .visitor import (
    Visit,
    VisitResult,
    Visitor,
    FunctionVisitor,
    NodePathVisitor,
    CollectingVisitor,
    as_visitor,
)
from .node import DiffNode

__all__ = [
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
]
