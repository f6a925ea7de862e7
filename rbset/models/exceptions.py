"""
Custom exceptions for the ordered set.

Duplicate inserts and erasing an absent value are not errors; these
exceptions only cover cursor misuse and broken tree invariants.
"""

from typing import Any


class SortedSetError(Exception):
    """Base class for all ordered set errors."""


class EndCursorError(SortedSetError, IndexError):
    """Raised when the end cursor is dereferenced or advanced."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation} the end cursor")


class InvalidCursorError(SortedSetError):
    """
    Raised when a cursor refers to an element that has been erased.

    Cursors on other elements stay valid; only the erased node is detached.
    """

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Cursor on erased element {value!r} is no longer valid")


class ForeignCursorError(SortedSetError, ValueError):
    """Raised when a cursor is passed to a set that does not own it."""

    def __init__(self) -> None:
        super().__init__("Cursor belongs to a different set")


class InvariantViolationError(SortedSetError, AssertionError):
    """
    Raised by invariant checking when the tree shape is corrupt.

    This is a fail-fast error: it means a bug in the balancing code or an
    element ordering that is not a consistent total order.
    """

    def __init__(self, invariant: str, value: Any = None):
        """
        Initialize violation error.

        Args:
            invariant: Description of the violated property.
            value: Element stored at the node where the violation was found.
        """
        self.invariant = invariant
        self.value = value
        if value is None:
            super().__init__(f"Red-Black invariant violated: {invariant}")
        else:
            super().__init__(
                f"Red-Black invariant violated at {value!r}: {invariant}"
            )
