"""
SortedContainer abstract base class for ordered unique-element structures.
"""

from abc import abstractmethod
from typing import Any

from rbset.interfaces.range_iterable import RangeIterable


class SortedContainer(RangeIterable):
    """
    Abstract base class for sorted containers of unique elements.

    Provides O(log N) operations for insert, erase and lookup, and O(1)
    access to both ends through cursors.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - RedBlackTree: sentinel-based Red-Black Tree with cached bounds
    """

    @abstractmethod
    def insert(self, value: Any) -> tuple[Any, bool]:
        """
        Insert an element unless an equal one is already stored.

        Args:
            value: The element to insert.

        Returns:
            A cursor on the stored element and True if it was inserted,
            False if an equal element was already present.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def erase(self, target: Any) -> int:
        """
        Remove an element, given either its value or a cursor on it.

        Args:
            target: The element or a cursor referencing it.

        Returns:
            1 if an element was removed, 0 if it was absent or the cursor
            was the end cursor.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def find(self, value: Any) -> Any:
        """
        Locate an element.

        Args:
            value: The element to look up.

        Returns:
            A cursor on the element, or the end cursor if it is absent.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def lower_bound(self, value: Any) -> Any:
        """
        Locate the first element not less than value.

        Args:
            value: The bound to search for.

        Returns:
            A cursor on the smallest element >= value, or the end cursor.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def upper_bound(self, value: Any) -> Any:
        """
        Locate the first element greater than value.

        Args:
            value: The bound to search for.

        Returns:
            A cursor on the smallest element > value, or the end cursor.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, value: Any) -> bool:
        """
        Check if an element is stored.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def begin(self) -> Any:
        """
        Return a cursor on the minimum element (the end cursor when empty).

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def end(self) -> Any:
        """
        Return the end cursor.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of stored elements.

        Time complexity: O(1)
        """
        pass

    def empty(self) -> bool:
        """
        Return True if no elements are stored.

        Time complexity: O(1)
        """
        return self.size() == 0
