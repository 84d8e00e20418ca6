"""Exception hierarchy for DiffTreeLib.

All errors raised by the diff tree are programmer or integration errors:
they signal that a caller violated one of the tree's invariants. They are
raised synchronously at the point of violation and never retried.
"""

from typing import Any, Optional


class DiffTreeError(Exception):
    """Base class for all DiffTreeLib errors."""
    pass


class InvalidArgumentError(DiffTreeError, ValueError):
    """Raised when a required argument is missing or an attachment is forbidden.

    Examples: constructing a node without an accessor, setting a ``None``
    state, adding the root node (or a node to itself) as a child, or
    re-attaching a node that already belongs to another parent.
    """
    pass


class InvalidStateError(DiffTreeError, RuntimeError):
    """Raised when an already fixed relationship would be changed.

    This covers replacing the parent of an attached node and any mutation
    of a frozen node.
    """
    pass


class PropertyAccessError(DiffTreeError):
    """Base class for failures while reading or writing a property value."""

    verb = "Accessing"

    def __init__(self, property_name: str, target: Any, cause: Optional[BaseException] = None):
        self.property_name = property_name
        self.target_type = type(target)
        self.cause = cause
        message = (
            f"{self.verb} property '{property_name}' "
            f"of {self.target_type.__name__} failed"
        )
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class PropertyReadError(PropertyAccessError):
    """Raised when a property value cannot be read from its target."""
    verb = "Reading"


class PropertyWriteError(PropertyAccessError):
    """Raised when a property value cannot be written to (or unset on) its target."""
    verb = "Writing"
