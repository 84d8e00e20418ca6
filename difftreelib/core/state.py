"""Lifecycle states of a diff node."""

from enum import Enum


class State(Enum):
    """How the value represented by a node differs between base and working.

    ``UNTOUCHED`` is the default for new nodes and the only state a node
    leaves on its own: it is promoted to ``CHANGED`` when a child with
    changes is attached. Every other transition is made by the differencing
    engine that builds the tree.
    """
    ADDED = "added"             # Value exists only in the working object
    CHANGED = "changed"         # Value differs from the base object
    REMOVED = "removed"         # Value exists only in the base object
    UNTOUCHED = "untouched"     # Value is identical in base and working
    CIRCULAR = "circular"       # Value was already visited higher up
    IGNORED = "ignored"         # Value was not looked at

    def is_change(self) -> bool:
        """Check if this state by itself counts as a change.

        Returns:
            True for ADDED, CHANGED and REMOVED
        """
        return self in _CHANGE_STATES


_CHANGE_STATES = frozenset({State.ADDED, State.CHANGED, State.REMOVED})
