"""Accessor abstraction for DiffTreeLib.

An Accessor knows how to read, write and remove the value a DiffNode
represents on a concrete target object. The node itself never inspects
objects - it delegates to its accessor, which keeps the diff tree independent
of the shape of the compared object graph.

Optional capabilities (declared type, property metadata, categories,
exclusion flag, comparison strategy) are declared through capability flags
on the accessor. Nodes ask the flags before using a capability; a missing
capability resolves to a documented default, never to an error.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Set, Type, TypeVar

from .selector import ElementSelector, RootElementSelector

A = TypeVar('A')


class Accessor(ABC):
    """Abstract accessor for the value represented by a node.

    Subclasses must provide the element selector used to key the node among
    its siblings and the three value operations. Equality and hashing of
    accessors define equality of the nodes that use them.
    """

    @abstractmethod
    def get_element_selector(self) -> ElementSelector:
        """Return the selector identifying the accessed element within its parent."""
        pass

    @abstractmethod
    def get(self, target: Any) -> Any:
        """Read the accessed value from the target.

        Args:
            target: Object holding the value (may be None)

        Returns:
            The value, or None if the target does not hold one
        """
        pass

    @abstractmethod
    def set(self, target: Any, value: Any) -> None:
        """Write the accessed value on the target."""
        pass

    @abstractmethod
    def unset(self, target: Any) -> None:
        """Remove the accessed value from the target."""
        pass

    # Capability flags - accessors declare what they support

    def is_root(self) -> bool:
        """Check if this is the distinguished accessor of the tree root."""
        return False

    def supports_type(self) -> bool:
        """Check if the accessor can report the declared type of its value."""
        return False

    def supports_property(self) -> bool:
        """Check if the accessor represents a named property with metadata."""
        return False

    def supports_categories(self) -> bool:
        """Check if the accessor provides categories for its value."""
        return False

    def supports_exclusion(self) -> bool:
        """Check if the accessor carries an exclusion flag."""
        return False

    def supports_comparison_strategy(self) -> bool:
        """Check if the accessor provides a comparison strategy."""
        return False

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.get_element_selector()})"


class TypeAwareAccessor(Accessor):
    """Accessor that knows the declared type of the value it accesses."""

    def supports_type(self) -> bool:
        return True

    @abstractmethod
    def get_type(self) -> Optional[type]:
        pass


class CategoryAwareAccessor(Accessor):
    """Accessor that assigns categories to the value it accesses."""

    def supports_categories(self) -> bool:
        return True

    @abstractmethod
    def get_categories(self) -> Optional[Set[str]]:
        pass


class ExclusionAwareAccessor(Accessor):
    """Accessor that can mark its value as excluded from comparison."""

    def supports_exclusion(self) -> bool:
        return True

    @abstractmethod
    def is_excluded(self) -> bool:
        pass


class ComparisonStrategyAwareAccessor(Accessor):
    """Accessor that supplies the strategy used to compare its values.

    The strategy is opaque to the diff tree; it is handed through to the
    differencing engine.
    """

    def supports_comparison_strategy(self) -> bool:
        return True

    @abstractmethod
    def get_comparison_strategy(self) -> Any:
        pass


class PropertyAwareAccessor(TypeAwareAccessor, CategoryAwareAccessor, ExclusionAwareAccessor):
    """Accessor for a named property that exposes property metadata.

    Annotations are arbitrary marker objects attached to the property
    (for example ``Ignore()`` or ``Identity(field="id")``). They are looked
    up by their type.
    """

    def supports_property(self) -> bool:
        return True

    @abstractmethod
    def get_property_name(self) -> str:
        pass

    @abstractmethod
    def get_annotations(self) -> Set[Any]:
        pass

    def get_annotation(self, annotation_type: Type[A]) -> Optional[A]:
        """Return the first annotation that is an instance of the given type.

        Args:
            annotation_type: Class of the wanted annotation

        Returns:
            The annotation, or None if the property carries none of that type
        """
        for annotation in self.get_annotations():
            if isinstance(annotation, annotation_type):
                return annotation
        return None


class RootAccessor(Accessor):
    """Accessor of the tree root: the root value is the target itself.

    There is exactly one instance. The root value cannot be replaced or
    removed through it, since there is no containing object to write to.
    """

    _instance: Optional['RootAccessor'] = None

    def __new__(cls) -> 'RootAccessor':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_instance(cls) -> 'RootAccessor':
        return cls()

    def is_root(self) -> bool:
        return True

    def get_element_selector(self) -> ElementSelector:
        return RootElementSelector.get_instance()

    def get(self, target: Any) -> Any:
        return target

    def set(self, target: Any, value: Any) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def unset(self, target: Any) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} does not support modification")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RootAccessor)

    def __hash__(self) -> int:
        return hash(RootAccessor)

    def __str__(self) -> str:
        return "root element"

    def __repr__(self) -> str:
        return "RootAccessor()"
