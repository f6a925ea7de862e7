"""
RangeIterable protocol for ordered containers that support range iteration.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any


class RangeIterable(ABC):
    """
    Protocol for data structures that iterate their elements in sorted order.

    Implementations must support:
    - Full ascending iteration via __iter__
    - Full descending iteration via __reversed__
    - Range-bounded iteration via iterator(start, end, reverse)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Return an iterator over all elements in ascending order."""
        pass

    @abstractmethod
    def __reversed__(self) -> Iterator[Any]:
        """Return an iterator over all elements in descending order."""
        pass

    @abstractmethod
    def iterator(
        self, start: Any = None, end: Any = None, reverse: bool = False
    ) -> Iterator[Any]:
        """
        Return an iterator over elements in the specified range.

        Args:
            start: Start element (inclusive). If None, starts from the minimum.
            end: End element (exclusive). If None, iterates to the maximum.
            reverse: Yield the range in descending order.

        Returns:
            Iterator yielding elements in sorted order.
        """
        pass
