"""
Node model for the Red-Black Tree.

Every navigation helper takes the tree's sentinel explicitly, so a node never
needs a reference back to the tree that owns it.
"""

from enum import IntEnum
from typing import Any


class Color(IntEnum):
    """Node color for Red-Black Tree."""

    RED = 0
    BLACK = 1


class Node:
    """Node in the Red-Black Tree."""

    __slots__ = ("value", "color", "left", "right", "parent")

    def __init__(
        self,
        value: Any,
        color: Color = Color.RED,
        left: "Node | None" = None,
        right: "Node | None" = None,
        parent: "Node | None" = None,
    ) -> None:
        self.value = value
        self.color = color
        self.left = left
        self.right = right
        self.parent = parent

    @classmethod
    def sentinel(cls) -> "Node":
        """Create a BLACK terminal node whose links point to itself."""
        node = cls(None, Color.BLACK)
        node.left = node.right = node.parent = node
        return node

    @property
    def is_detached(self) -> bool:
        """True once the node has been erased from its tree."""
        return self.parent is None

    def detach(self) -> None:
        self.left = self.right = self.parent = None

    def minimum(self, sentinel: "Node") -> "Node":
        """Leftmost node of the subtree rooted here."""
        node = self
        while node.left is not sentinel:
            node = node.left
        return node

    def maximum(self, sentinel: "Node") -> "Node":
        """Rightmost node of the subtree rooted here."""
        node = self
        while node.right is not sentinel:
            node = node.right
        return node

    def next(self, sentinel: "Node") -> "Node":
        """In-order successor, or the sentinel if this is the maximum."""
        if self.right is not sentinel:
            return self.right.minimum(sentinel)

        child = self
        ancestor = self.parent
        while ancestor is not sentinel and child is ancestor.right:
            child = ancestor
            ancestor = ancestor.parent
        return ancestor

    def prev(self, sentinel: "Node") -> "Node":
        """In-order predecessor, or the sentinel if this is the minimum."""
        if self.left is not sentinel:
            return self.left.maximum(sentinel)

        child = self
        ancestor = self.parent
        while ancestor is not sentinel and child is ancestor.left:
            child = ancestor
            ancestor = ancestor.parent
        return ancestor

    def __repr__(self) -> str:
        return f"Node({self.value!r}, {self.color.name})"
