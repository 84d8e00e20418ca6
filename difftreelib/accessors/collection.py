"""Accessor for items of a collection."""

import logging
from collections.abc import Collection, MutableSequence, MutableSet
from typing import Any, Optional

from ..core.accessor import TypeAwareAccessor
from ..core.selector import CollectionItemElementSelector, ElementSelector

logger = logging.getLogger(__name__)


class CollectionItemAccessor(TypeAwareAccessor):
    """Accesses the item of a collection that equals a reference item.

    Items have no stable position in a collection, so they are identified by
    equality with the reference item the differencing engine found.
    Lists keep their order on write: an existing item is replaced in place,
    a missing one is appended.
    """

    def __init__(self, reference_item: Any):
        self.reference_item = reference_item
        self._selector = CollectionItemElementSelector(reference_item)

    def get_element_selector(self) -> ElementSelector:
        return self._selector

    def get_type(self) -> Optional[type]:
        if self.reference_item is None:
            return None
        return type(self.reference_item)

    def get(self, target: Any) -> Any:
        if target is None:
            return None
        for item in _as_collection(target):
            if item == self.reference_item:
                return item
        return None

    def set(self, target: Any, value: Any) -> None:
        if target is None:
            logger.info("Couldn't set collection item %s because the target is None",
                        self._selector)
            return
        if isinstance(target, MutableSequence):
            index = self._index_in(target)
            if index is None:
                target.append(value)
            else:
                target[index] = value
        elif isinstance(target, MutableSet):
            previous = self.get(target)
            if previous is not None:
                target.discard(previous)
            target.add(value)
        else:
            raise TypeError(f"Cannot modify items of {type(target).__name__}")

    def unset(self, target: Any) -> None:
        if target is None:
            return
        if isinstance(target, MutableSequence):
            index = self._index_in(target)
            if index is not None:
                del target[index]
        elif isinstance(target, MutableSet):
            target.discard(self.reference_item)
        else:
            raise TypeError(f"Cannot modify items of {type(target).__name__}")

    def _index_in(self, sequence: MutableSequence) -> Optional[int]:
        for index, item in enumerate(sequence):
            if item == self.reference_item:
                return index
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollectionItemAccessor):
            return NotImplemented
        return self.reference_item == other.reference_item

    def __hash__(self) -> int:
        return hash(self._selector)

    def __repr__(self) -> str:
        return f"CollectionItemAccessor({self.reference_item!r})"


def _as_collection(target: Any) -> Collection:
    if not isinstance(target, Collection) or isinstance(target, (str, bytes)):
        raise TypeError(f"Expected a collection, got {type(target).__name__}")
    return target
