"""Testing utilities for DiffTreeLib consumers."""

from .fixtures import DiffTreeTestHelper

__all__ = ['DiffTreeTestHelper']
