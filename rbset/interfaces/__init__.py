"""
Abstract base classes and protocols for the ordered set.
"""

from rbset.interfaces.range_iterable import RangeIterable
from rbset.interfaces.sorted_container import SortedContainer

__all__ = ["RangeIterable", "SortedContainer"]
