"""Node paths for DiffTreeLib.

A NodePath is the ordered sequence of ElementSelectors leading from the tree
root to a node. The root itself has the empty path. Paths are immutable once
built; the builder copies the prefix it starts from, so extending a path never
changes a path that was already handed out.
"""

from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .selector import (
    CollectionItemElementSelector,
    ElementSelector,
    MapKeyElementSelector,
    PropertyElementSelector,
)


class NodePath:
    """Immutable sequence of element selectors from the root to a node.

    Example:
        >>> path = NodePath.start_building().property_name("items").collection_item(3).build()
        >>> str(path)
        '/items[3]'
    """

    __slots__ = ('_selectors',)

    def __init__(self, selectors: Sequence[ElementSelector] = ()):
        self._selectors: Tuple[ElementSelector, ...] = tuple(selectors)

    # Construction

    @classmethod
    def with_root(cls) -> 'NodePath':
        """Return the path of the tree root (the empty path)."""
        return cls()

    @classmethod
    def start_building(cls) -> 'NodePath.Builder':
        """Start building a path from the root."""
        return cls.Builder()

    @classmethod
    def start_building_from(cls, path: 'NodePath') -> 'NodePath.Builder':
        """Start building a path that extends an existing one.

        Args:
            path: Prefix of the new path. It is copied, never modified.
        """
        return cls.Builder(path.get_element_selectors())

    class Builder:
        """Append-only builder for NodePath instances."""

        def __init__(self, selectors: Sequence[ElementSelector] = ()):
            self._selectors: List[ElementSelector] = list(selectors)

        def element(self, selector: ElementSelector) -> 'NodePath.Builder':
            self._selectors.append(selector)
            return self

        def property_name(self, *names: str) -> 'NodePath.Builder':
            for name in names:
                self._selectors.append(PropertyElementSelector(name))
            return self

        def collection_item(self, item: Any) -> 'NodePath.Builder':
            self._selectors.append(CollectionItemElementSelector(item))
            return self

        def map_key(self, key: Any) -> 'NodePath.Builder':
            self._selectors.append(MapKeyElementSelector(key))
            return self

        def build(self) -> 'NodePath':
            return NodePath(self._selectors)

    # Queries

    def get_element_selectors(self) -> List[ElementSelector]:
        """Return a copy of the selectors of this path, root first."""
        return list(self._selectors)

    def get_last_element_selector(self) -> Optional[ElementSelector]:
        """Return the selector of the node this path leads to, None for the root."""
        if not self._selectors:
            return None
        return self._selectors[-1]

    def get_parent_path(self) -> Optional['NodePath']:
        """Return the path without its last selector, None for the root."""
        if not self._selectors:
            return None
        return NodePath(self._selectors[:-1])

    def is_root(self) -> bool:
        return not self._selectors

    def matches(self, other: 'NodePath') -> bool:
        """Check if both paths consist of the same selectors in the same order."""
        return self == other

    def is_parent_of(self, other: 'NodePath') -> bool:
        """Check if this path is a strict prefix of another path.

        Note that this means "ancestor of", not only "direct parent of".
        """
        if len(self._selectors) >= len(other._selectors):
            return False
        return other._selectors[:len(self._selectors)] == self._selectors

    def is_child_of(self, other: 'NodePath') -> bool:
        """Check if another path is a strict prefix of this path."""
        return other.is_parent_of(self)

    # Python protocols

    def __len__(self) -> int:
        return len(self._selectors)

    def __iter__(self) -> Iterator[ElementSelector]:
        return iter(self._selectors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodePath):
            return NotImplemented
        return self._selectors == other._selectors

    def __hash__(self) -> int:
        return hash(self._selectors)

    def __lt__(self, other: 'NodePath') -> bool:
        """Order paths by length, shorter (closer to the root) first."""
        if not isinstance(other, NodePath):
            return NotImplemented
        return len(self._selectors) < len(other._selectors)

    def __str__(self) -> str:
        if not self._selectors:
            return "/"
        parts: List[str] = []
        for selector in self._selectors:
            text = selector.to_human_readable_string()
            if isinstance(selector, (CollectionItemElementSelector, MapKeyElementSelector)):
                parts.append(text)
            elif text:
                parts.append("/" + text)
        rendered = "".join(parts)
        if not rendered.startswith("/"):
            rendered = "/" + rendered
        return rendered

    def __repr__(self) -> str:
        return f"NodePath({str(self)!r})"
