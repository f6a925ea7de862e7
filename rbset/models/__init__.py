"""
Data models for the ordered set.
"""

from rbset.models.node import Color, Node
from rbset.models.cursor import Cursor
from rbset.models.exceptions import (
    EndCursorError,
    ForeignCursorError,
    InvalidCursorError,
    InvariantViolationError,
    SortedSetError,
)
from rbset.models.sorted_set import RedBlackSet

__all__ = [
    "Color",
    "Node",
    "Cursor",
    "EndCursorError",
    "ForeignCursorError",
    "InvalidCursorError",
    "InvariantViolationError",
    "SortedSetError",
    "RedBlackSet",
]
