"""Tests for the capability-driven queries of DiffNode.

Capabilities an accessor does not declare resolve to defaults (None, empty,
False) and never raise.
"""

import unittest

from difftreelib import (
    CollectionItemAccessor,
    DiffNode,
    MapEntryAccessor,
    PropertyAccessor,
)
from difftreelib.core.accessor import CategoryAwareAccessor
from difftreelib.core.selector import MapKeyElementSelector


class Identity:
    """Marker annotation used in tests."""

    def __init__(self, field):
        self.field = field


class TaggedEntryAccessor(MapEntryAccessor, CategoryAwareAccessor):
    """Map entry accessor that also assigns categories."""

    def __init__(self, key, categories):
        super().__init__(key)
        self._categories = categories

    def get_categories(self):
        return self._categories


class TestPropertyMetadata(unittest.TestCase):

    def test_annotations_of_property_node(self):
        identity = Identity("id")
        node = DiffNode(PropertyAccessor("items", annotations=[identity]))
        self.assertTrue(node.is_property_aware())
        self.assertEqual(node.get_property_annotations(), {identity})
        self.assertIs(node.get_property_annotation(Identity), identity)

    def test_annotations_of_non_property_node(self):
        node = DiffNode(MapEntryAccessor("k"))
        self.assertFalse(node.is_property_aware())
        self.assertEqual(node.get_property_annotations(), set())
        self.assertIsNone(node.get_property_annotation(Identity))

    def test_property_name_inherited_from_nearest_property(self):
        root = DiffNode.new_root_node()
        items = DiffNode(PropertyAccessor("items"), parent_node=root)
        item = DiffNode(CollectionItemAccessor("x"), parent_node=items)
        entry = DiffNode(MapEntryAccessor("k"), parent_node=item)
        self.assertEqual(item.get_property_name(), "items")
        self.assertEqual(entry.get_property_name(), "items")

    def test_property_name_absent_without_property_ancestor(self):
        root = DiffNode.new_root_node()
        entry = DiffNode(MapEntryAccessor("k"), parent_node=root)
        self.assertIsNone(root.get_property_name())
        self.assertIsNone(entry.get_property_name())

    def test_exclusion_and_comparison_strategy(self):
        strategy = object()
        node = DiffNode(PropertyAccessor("a", excluded=True, comparison_strategy=strategy))
        self.assertTrue(node.is_excluded())
        self.assertIs(node.get_comparison_strategy(), strategy)

    def test_defaults_without_capabilities(self):
        node = DiffNode(MapEntryAccessor("k"))
        self.assertFalse(node.is_excluded())
        self.assertIsNone(node.get_comparison_strategy())
        self.assertEqual(node.get_categories(), set())
        self.assertFalse(node.is_root_node())


class TestCategories(unittest.TestCase):
    """Categories accumulate from the root down."""

    def setUp(self):
        self.root = DiffNode.new_root_node()
        self.person = DiffNode(PropertyAccessor("person", categories={"core", "people"}),
                               parent_node=self.root)
        self.tags = DiffNode(TaggedEntryAccessor("tags", {"people", "meta"}),
                             parent_node=self.person)
        self.leaf = DiffNode(MapEntryAccessor("plain"), parent_node=self.tags)

    def test_union_of_ancestors_without_duplicates(self):
        self.assertEqual(self.tags.get_categories(), {"core", "people", "meta"})

    def test_node_without_categories_inherits(self):
        self.assertEqual(self.leaf.get_categories(), {"core", "people", "meta"})

    def test_root_has_no_categories(self):
        self.assertEqual(self.root.get_categories(), set())

    def test_none_categories_from_accessor(self):
        node = DiffNode(PropertyAccessor("a"), parent_node=self.person)
        self.assertEqual(node.get_categories(), {"core", "people"})

    def test_custom_accessor_selector(self):
        self.assertEqual(self.tags.get_element_selector(), MapKeyElementSelector("tags"))
