"""Accessor for named object attributes."""

import logging
from typing import Any, Iterable, Optional, Set

from ..core.accessor import ComparisonStrategyAwareAccessor, PropertyAwareAccessor
from ..core.selector import ElementSelector, PropertyElementSelector
from ..exceptions import PropertyReadError, PropertyWriteError

logger = logging.getLogger(__name__)


class PropertyAccessor(PropertyAwareAccessor, ComparisonStrategyAwareAccessor):
    """Reads and writes a named attribute of a target object.

    Property metadata - declared type, annotations, categories, exclusion
    flag and comparison strategy - is supplied by whoever introspects the
    compared types; this accessor only carries it.

    Example:
        >>> accessor = PropertyAccessor("name", str, categories={"personal"})
        >>> accessor.get(person)
        'Alice'
    """

    def __init__(self,
                 property_name: str,
                 property_type: Optional[type] = None,
                 annotations: Iterable[Any] = (),
                 categories: Optional[Iterable[str]] = None,
                 excluded: bool = False,
                 comparison_strategy: Any = None):
        self._selector = PropertyElementSelector(property_name)
        self.property_name = property_name
        self.property_type = property_type
        self._annotations = list(annotations)
        self._categories = set(categories) if categories is not None else None
        self._excluded = excluded
        self._comparison_strategy = comparison_strategy

    def get_element_selector(self) -> ElementSelector:
        return self._selector

    def get_property_name(self) -> str:
        return self.property_name

    def get_type(self) -> Optional[type]:
        return self.property_type

    def get_annotations(self) -> Set[Any]:
        return set(self._annotations)

    def get_categories(self) -> Optional[Set[str]]:
        if self._categories is None:
            return None
        return set(self._categories)

    def is_excluded(self) -> bool:
        return self._excluded

    def supports_comparison_strategy(self) -> bool:
        return self._comparison_strategy is not None

    def get_comparison_strategy(self) -> Any:
        return self._comparison_strategy

    def get(self, target: Any) -> Any:
        """Read the attribute. Reading from a None target returns None.

        Raises:
            PropertyReadError: If the target has no such attribute, or its
                getter fails
        """
        if target is None:
            return None
        try:
            return getattr(target, self.property_name)
        except Exception as e:
            raise PropertyReadError(self.property_name, target, e) from e

    def set(self, target: Any, value: Any) -> None:
        """Write the attribute. Writing to a None target does nothing.

        Raises:
            PropertyWriteError: If the attribute cannot be written
        """
        if target is None:
            logger.info("Couldn't set new value of property '%s' because the target is None",
                        self.property_name)
            return
        try:
            setattr(target, self.property_name, value)
        except (AttributeError, TypeError) as e:
            raise PropertyWriteError(self.property_name, target, e) from e

    def unset(self, target: Any) -> None:
        """Reset the attribute to None."""
        self.set(target, None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyAccessor):
            return NotImplemented
        return self.property_name == other.property_name

    def __hash__(self) -> int:
        return hash(self._selector)

    def __repr__(self) -> str:
        return f"PropertyAccessor({self.property_name!r})"
