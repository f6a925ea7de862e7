"""
RedBlackSet - ordered set of unique elements backed by a Red-Black Tree.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from rbset.interfaces.range_iterable import RangeIterable
from rbset.models.cursor import Cursor
from rbset.models.sortedcontainers.red_black_tree import RedBlackTree

logger = logging.getLogger(__name__)


class RedBlackSet(RangeIterable):
    """
    Ordered set backed by a RedBlackTree.

    Supports:
    - O(log N) insert, erase, find, lower_bound and membership
    - O(1) access to the minimum and maximum through cursors
    - Ascending, descending and range-bounded iteration
    - O(1) swap of the whole contents with another set

    Inserting an element that is already present and erasing one that is
    absent are silent no-ops.
    """

    def __init__(
        self,
        iterable: Iterable[Any] | None = None,
        key: Callable[[Any], Any] | None = None,
    ) -> None:
        """
        Initialize RedBlackSet.

        Args:
            iterable: Optional elements to insert. Duplicates are dropped.
            key: Optional function mapping elements to the values they are
                 ordered by. Two elements with equal keys are duplicates.
        """
        self._tree = RedBlackTree(key=key)

        if iterable is not None:
            for value in iterable:
                self._tree.insert(value)
            logger.debug(f"Built set of {self._tree.size()} elements")

    @property
    def key(self) -> Callable[[Any], Any] | None:
        return self._tree.key

    def insert(self, value: Any) -> tuple[Cursor, bool]:
        """
        Insert an element unless an equal one is already stored.

        Args:
            value: The element to insert.

        Returns:
            A cursor on the stored element and whether it was inserted.
        """
        return self._tree.insert(value)

    def add(self, value: Any) -> None:
        self._tree.insert(value)

    def erase(self, target: Any) -> int:
        """
        Remove an element given by value or by cursor.

        Args:
            target: The element, or a cursor obtained from this set.

        Returns:
            1 if an element was removed, 0 if it was absent or target was
            the end cursor.
        """
        return self._tree.erase(target)

    def discard(self, value: Any) -> None:
        self._tree.erase(value)

    def remove(self, value: Any) -> None:
        """Remove value, raising KeyError if it is not present."""
        if not self._tree.erase(value):
            raise KeyError(value)

    def pop_first(self) -> Any:
        """Remove and return the minimum element."""
        cursor = self._tree.begin()
        if cursor.is_end:
            raise KeyError("pop from an empty set")
        value = cursor.value
        self._tree.erase(cursor)
        return value

    def pop_last(self) -> Any:
        """Remove and return the maximum element."""
        cursor = self._tree.end().retreat()
        if cursor.is_end:
            raise KeyError("pop from an empty set")
        value = cursor.value
        self._tree.erase(cursor)
        return value

    def find(self, value: Any) -> Cursor:
        return self._tree.find(value)

    def lower_bound(self, value: Any) -> Cursor:
        return self._tree.lower_bound(value)

    def upper_bound(self, value: Any) -> Cursor:
        return self._tree.upper_bound(value)

    def begin(self) -> Cursor:
        return self._tree.begin()

    def end(self) -> Cursor:
        return self._tree.end()

    def first(self) -> Any:
        """Return the minimum element. Raises KeyError when empty."""
        if self._tree.empty():
            raise KeyError("first of an empty set")
        return self._tree.begin().value

    def last(self) -> Any:
        """Return the maximum element. Raises KeyError when empty."""
        if self._tree.empty():
            raise KeyError("last of an empty set")
        return self._tree.end().retreat().value

    def size(self) -> int:
        return self._tree.size()

    def empty(self) -> bool:
        return self._tree.empty()

    def clear(self) -> None:
        """Remove every element. Cursors on removed elements become invalid."""
        logger.debug(f"Clearing set of {self._tree.size()} elements")
        self._tree.clear()

    def swap(self, other: "RedBlackSet") -> None:
        """
        Exchange contents with another set in O(1).

        Cursors keep referring to the same elements, which now live in the
        other set.
        """
        if not isinstance(other, RedBlackSet):
            raise TypeError(f"cannot swap with {type(other).__name__}")
        logger.debug(
            f"Swapping sets of {self._tree.size()} and {other._tree.size()} elements"
        )
        self._tree, other._tree = other._tree, self._tree

    def copy(self) -> "RedBlackSet":
        """Return an independent set holding the same elements."""
        logger.debug(f"Copying set of {self._tree.size()} elements")
        return RedBlackSet(self._tree, key=self._tree.key)

    __copy__ = copy

    def check_invariants(self) -> None:
        """Raise InvariantViolationError if the underlying tree is corrupt."""
        self._tree.check_invariants()

    def iterator(
        self, start: Any = None, end: Any = None, reverse: bool = False
    ) -> Iterator[Any]:
        """
        Iterate elements in [start, end).

        Args:
            start: Start element (inclusive). If None, starts from the minimum.
            end: End element (exclusive). If None, iterates to the maximum.
            reverse: Yield the range in descending order.

        Returns:
            Iterator over the elements in the range.
        """
        return self._tree.iterator(start, end, reverse)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._tree)

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self._tree)

    def __contains__(self, value: object) -> bool:
        return self._tree.has(value)

    def __len__(self) -> int:
        return self._tree.size()

    def __bool__(self) -> bool:
        return not self._tree.empty()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RedBlackSet):
            return NotImplemented
        # Elements are equal when neither orders before the other
        less = self._tree._less
        if len(self) != len(other):
            return False
        try:
            return all(
                not less(a, b) and not less(b, a) for a, b in zip(self, other)
            )
        except TypeError:
            # Incomparable elements are never equal
            return False

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(repr(value) for value in self)
        return f"RedBlackSet([{items}])"
