"""
Ordered set of unique elements backed by a Red-Black Tree.

This package provides a sorted collection with:
- insert(value) / erase(value) - O(log N), duplicates and misses are no-ops
- find(value) / lower_bound(value) - O(log N) cursors
- begin() / end() - O(1) cursors on the cached minimum and the sentinel
- Bidirectional cursors that stay valid across unrelated mutations
- Range iteration over [start, end) in either direction
"""

from rbset.models.cursor import Cursor
from rbset.models.exceptions import (
    EndCursorError,
    ForeignCursorError,
    InvalidCursorError,
    InvariantViolationError,
    SortedSetError,
)
from rbset.models.sorted_set import RedBlackSet
from rbset.models.sortedcontainers import RedBlackTree

__all__ = [
    "RedBlackSet",
    "RedBlackTree",
    "Cursor",
    "SortedSetError",
    "EndCursorError",
    "InvalidCursorError",
    "ForeignCursorError",
    "InvariantViolationError",
]
