"""Tests for sealing a finished diff tree against mutation."""

import pytest

from difftreelib import DiffNode, InvalidStateError, NodePath, State
from conftest import make_node


@pytest.fixture
def frozen_tree(sample_tree):
    sample_tree["root"].freeze()
    return sample_tree


def test_freeze_covers_whole_subtree(frozen_tree):
    assert all(node.is_frozen() for node in frozen_tree.values())


def test_new_nodes_are_not_frozen(root):
    assert not root.is_frozen()


def test_frozen_node_rejects_state_change(frozen_tree):
    with pytest.raises(InvalidStateError):
        frozen_tree["z"].set_state(State.ADDED)
    assert frozen_tree["z"].get_state() is State.UNTOUCHED


def test_frozen_node_rejects_children(frozen_tree):
    with pytest.raises(InvalidStateError):
        make_node("late", parent=frozen_tree["x"])
    assert frozen_tree["x"].child_count() == 1


def test_frozen_node_rejects_type_and_circle_markers(frozen_tree):
    node = frozen_tree["y"]
    with pytest.raises(InvalidStateError):
        node.set_type(int)
    with pytest.raises(InvalidStateError):
        node.set_circle_start_path(NodePath.with_root())
    with pytest.raises(InvalidStateError):
        node.set_circle_start_node(frozen_tree["root"])


def test_frozen_detached_node_cannot_be_attached(root):
    node = make_node("a")
    node.freeze()
    with pytest.raises(InvalidStateError):
        root.add_child(node)
    assert node.get_parent_node() is None


def test_freezing_subtree_leaves_ancestors_mutable(sample_tree):
    sample_tree["x"].freeze()
    assert sample_tree["z"].is_frozen()
    assert not sample_tree["root"].is_frozen()
    assert not sample_tree["y"].is_frozen()
    sample_tree["y"].set_state(State.REMOVED)


def test_frozen_tree_is_still_readable(frozen_tree):
    root = frozen_tree["root"]
    assert root.get_child("x") is frozen_tree["x"]
    assert str(frozen_tree["z"].get_path()) == "/x/z"
    assert not root.has_changes()
    seen = []
    root.visit(lambda node, visit: seen.append(node))
    assert len(seen) == 4


def test_error_message_names_path(frozen_tree):
    with pytest.raises(InvalidStateError, match="/x/z"):
        frozen_tree["z"].set_state(State.CHANGED)


def test_freeze_is_idempotent():
    node = DiffNode.new_root_node()
    node.freeze()
    node.freeze()
    assert node.is_frozen()
