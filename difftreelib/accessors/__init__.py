"""Concrete accessors for common kinds of values.

- PropertyAccessor: named attributes of objects
- CollectionItemAccessor: items of lists, sets and other collections
- MapEntryAccessor: entries of dicts and other mappings
"""

from .property import PropertyAccessor
from .collection import CollectionItemAccessor
from .mapping import MapEntryAccessor

__all__ = [
    'PropertyAccessor',
    'CollectionItemAccessor',
    'MapEntryAccessor',
]
