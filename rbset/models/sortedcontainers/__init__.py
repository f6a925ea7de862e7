"""
Sorted container implementations for the ordered set.
"""

from rbset.models.sortedcontainers.red_black_tree import RedBlackTree

__all__ = ["RedBlackTree"]
