"""Element selectors for DiffTreeLib.

An ElementSelector identifies the position of a node relative to its parent:
"the value of property P", "the collection item equal to X", "the map entry
with key K". Selectors are value objects - they compare by content and hash
consistently, so they can key the children mapping of a DiffNode.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional

from ..exceptions import InvalidArgumentError


class ElementSelector(ABC):
    """Abstract base class for node position identifiers.

    Subclasses must implement equality and hashing by value. Two selectors
    that compare equal address the same child slot of a parent node.
    """

    @abstractmethod
    def to_human_readable_string(self) -> str:
        """Return the form of this selector used when rendering paths.

        Returns:
            str: Short, readable representation (e.g. "name", "[3]", "{key}")
        """
        pass

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        pass

    @abstractmethod
    def __hash__(self) -> int:
        pass

    def __str__(self) -> str:
        return self.to_human_readable_string()


class RootElementSelector(ElementSelector):
    """Selector of the tree root. There is exactly one instance."""

    _instance: Optional['RootElementSelector'] = None

    def __new__(cls) -> 'RootElementSelector':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_instance(cls) -> 'RootElementSelector':
        return cls()

    def to_human_readable_string(self) -> str:
        return ""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RootElementSelector)

    def __hash__(self) -> int:
        return hash(RootElementSelector)

    def __repr__(self) -> str:
        return "RootElementSelector()"


class PropertyElementSelector(ElementSelector):
    """Selects the value of a named property (attribute) of an object."""

    def __init__(self, property_name: str):
        if not property_name:
            raise InvalidArgumentError("property_name must be a non-empty string")
        self.property_name = property_name

    def get_property_name(self) -> str:
        return self.property_name

    def to_human_readable_string(self) -> str:
        return self.property_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyElementSelector):
            return NotImplemented
        return self.property_name == other.property_name

    def __hash__(self) -> int:
        return hash((PropertyElementSelector, self.property_name))

    def __repr__(self) -> str:
        return f"PropertyElementSelector({self.property_name!r})"


def _hash_value(value: Any) -> int:
    # Unhashable values (lists, dicts, ...) share one bucket per type so that
    # equal values always hash alike.
    if isinstance(value, Hashable):
        try:
            return hash(value)
        except TypeError:
            pass
    return hash(type(value).__name__)


class CollectionItemElementSelector(ElementSelector):
    """Selects the item of a collection that is equal to a reference item."""

    def __init__(self, item: Any):
        self.item = item

    def get_item(self) -> Any:
        return self.item

    def to_human_readable_string(self) -> str:
        return f"[{self.item}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollectionItemElementSelector):
            return NotImplemented
        return self.item == other.item

    def __hash__(self) -> int:
        return hash((CollectionItemElementSelector, _hash_value(self.item)))

    def __repr__(self) -> str:
        return f"CollectionItemElementSelector({self.item!r})"


class MapKeyElementSelector(ElementSelector):
    """Selects the entry of a mapping stored under a given key."""

    def __init__(self, key: Any):
        self.key = key

    def get_key(self) -> Any:
        return self.key

    def to_human_readable_string(self) -> str:
        return f"{{{self.key}}}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapKeyElementSelector):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash((MapKeyElementSelector, _hash_value(self.key)))

    def __repr__(self) -> str:
        return f"MapKeyElementSelector({self.key!r})"
