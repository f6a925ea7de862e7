"""
Cursor - a bidirectional position inside a Red-Black Tree.
"""

from typing import TYPE_CHECKING, Any

from rbset.models.exceptions import EndCursorError, InvalidCursorError
from rbset.models.node import Node

if TYPE_CHECKING:
    from rbset.models.sortedcontainers.red_black_tree import RedBlackTree


class Cursor:
    """
    A (tree, node) pair that walks the tree in sorted order.

    Stepping follows parent/child links from the current node, so a cursor
    keeps no stack and never descends from the root again. The end cursor
    references the tree's sentinel; retreating from it lands on the cached
    maximum.

    Cursors stay valid while other elements are inserted or erased. Once the
    referenced element is erased the cursor raises InvalidCursorError.
    """

    __slots__ = ("_tree", "_node")

    def __init__(self, tree: "RedBlackTree", node: Node) -> None:
        self._tree = tree
        self._node = node

    @property
    def is_end(self) -> bool:
        return self._node is self._tree._sentinel

    @property
    def is_valid(self) -> bool:
        """False once the referenced element has been erased."""
        return not self._node.is_detached

    @property
    def value(self) -> Any:
        """The referenced element."""
        self._check_valid()
        if self.is_end:
            raise EndCursorError("dereference")
        return self._node.value

    def advance(self) -> "Cursor":
        """Move to the next larger element (or to the end) in place."""
        self._check_valid()
        sentinel = self._tree._sentinel
        if self._node is sentinel:
            raise EndCursorError("advance")
        self._node = self._node.next(sentinel)
        return self

    def retreat(self) -> "Cursor":
        """
        Move to the next smaller element in place.

        From the end cursor this moves to the maximum element. Retreating
        from the minimum element reaches the end cursor.
        """
        self._check_valid()
        sentinel = self._tree._sentinel
        if self._node is sentinel:
            self._node = self._tree._tail
        else:
            self._node = self._node.prev(sentinel)
        return self

    def successor(self) -> "Cursor":
        """Return a new cursor one step forward."""
        return self.copy().advance()

    def predecessor(self) -> "Cursor":
        """Return a new cursor one step backward."""
        return self.copy().retreat()

    def copy(self) -> "Cursor":
        return Cursor(self._tree, self._node)

    __copy__ = copy

    def _check_valid(self) -> None:
        if self._node.is_detached:
            raise InvalidCursorError(self._node.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        if self._node.is_detached:
            return f"Cursor(<erased {self._node.value!r}>)"
        if self.is_end:
            return "Cursor(<end>)"
        return f"Cursor({self._node.value!r})"
