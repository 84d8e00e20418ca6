"""Shared pytest configuration and fixtures for DiffTreeLib tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from difftreelib import DiffNode, PropertyAccessor, State


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: tests that process large trees")


def make_node(name, state=State.UNTOUCHED, parent=None, **accessor_kwargs):
    """Create a property node, optionally attached to a parent."""
    node = DiffNode(PropertyAccessor(name, **accessor_kwargs))
    node.set_state(state)
    if parent is not None:
        parent.add_child(node)
    return node


@pytest.fixture
def root():
    return DiffNode.new_root_node()


@pytest.fixture
def sample_tree():
    """Tree used by traversal tests.

    Structure:
    root
    ├── x
    │   └── z
    └── y
    """
    root = DiffNode.new_root_node()
    x = make_node("x", parent=root)
    z = make_node("z", parent=x)
    y = make_node("y", parent=root)
    return {"root": root, "x": x, "y": y, "z": z}
