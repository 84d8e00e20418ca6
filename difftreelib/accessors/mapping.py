"""Accessor for entries of a mapping."""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from ..core.accessor import Accessor
from ..core.selector import ElementSelector, MapKeyElementSelector

logger = logging.getLogger(__name__)


class MapEntryAccessor(Accessor):
    """Accesses the value stored under a key of a mapping."""

    def __init__(self, key: Any):
        self.key = key
        self._selector = MapKeyElementSelector(key)

    def get_element_selector(self) -> ElementSelector:
        return self._selector

    def get(self, target: Any) -> Any:
        if target is None:
            return None
        if not isinstance(target, Mapping):
            raise TypeError(f"Expected a mapping, got {type(target).__name__}")
        return target.get(self.key)

    def set(self, target: Any, value: Any) -> None:
        if target is None:
            logger.info("Couldn't set map entry %s because the target is None", self._selector)
            return
        _as_mutable_mapping(target)[self.key] = value

    def unset(self, target: Any) -> None:
        if target is None:
            return
        _as_mutable_mapping(target).pop(self.key, None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapEntryAccessor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self._selector)

    def __repr__(self) -> str:
        return f"MapEntryAccessor({self.key!r})"


def _as_mutable_mapping(target: Any) -> MutableMapping:
    if not isinstance(target, MutableMapping):
        raise TypeError(f"Cannot modify entries of {type(target).__name__}")
    return target
