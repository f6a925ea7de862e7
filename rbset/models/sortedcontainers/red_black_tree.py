"""
Red-Black Tree implementation for ordered sets of unique elements.

All leaves and the root's parent are one shared BLACK sentinel node, so the
rotation and fix-up code can follow child links without None checks. The
minimum and maximum nodes are cached and maintained on every mutation,
which makes begin() and end().retreat() O(1).
"""

import logging
import operator
from collections.abc import Callable, Iterator
from typing import Any

from rbset.interfaces.sorted_container import SortedContainer
from rbset.models.cursor import Cursor
from rbset.models.exceptions import (
    ForeignCursorError,
    InvalidCursorError,
    InvariantViolationError,
)
from rbset.models.node import Color, Node

logger = logging.getLogger(__name__)


class RedBlackTree(SortedContainer):
    """
    Red-Black Tree implementation of SortedContainer.

    Properties maintained:
    1. Left subtree elements are smaller, right subtree elements larger
    2. Root and sentinel are always black
    3. Red nodes cannot have red children
    4. Every path from a node to a leaf has the same number of black nodes
    5. head is the minimum node and tail the maximum node
    """

    def __init__(self, key: Callable[[Any], Any] | None = None) -> None:
        """
        Initialize an empty tree.

        Args:
            key: Optional function mapping elements to the values they are
                 ordered by. Elements are compared directly when omitted.
        """
        if key is not None and not callable(key):
            raise TypeError(f"key must be callable, got {type(key).__name__}")

        self._key = key
        if key is None:
            self._less: Callable[[Any, Any], bool] = operator.lt
        else:
            self._less = lambda a, b: key(a) < key(b)

        self._sentinel = Node.sentinel()
        self._root = self._sentinel
        self._head = self._sentinel
        self._tail = self._sentinel
        self._size = 0

    @property
    def key(self) -> Callable[[Any], Any] | None:
        return self._key

    def insert(self, value: Any) -> tuple[Cursor, bool]:
        """Insert value unless an equal element exists. O(log N)"""
        less = self._less
        parent = self._sentinel
        current = self._root

        while current is not self._sentinel:
            parent = current
            if less(value, current.value):
                current = current.left
            elif less(current.value, value):
                current = current.right
            else:
                # Already present
                return Cursor(self, current), False

        new_node = Node(
            value,
            Color.RED,
            left=self._sentinel,
            right=self._sentinel,
            parent=parent,
        )

        if self._head is self._sentinel or less(value, self._head.value):
            self._head = new_node
        if self._tail is self._sentinel or less(self._tail.value, value):
            self._tail = new_node

        if parent is self._sentinel:
            self._root = new_node
        elif less(value, parent.value):
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._fix_insert(new_node)
        return Cursor(self, new_node), True

    def erase(self, target: Any) -> int:
        """Remove an element given by value or cursor. O(log N)"""
        if isinstance(target, Cursor):
            if target._tree is not self:
                raise ForeignCursorError()
            node = target._node
            if node.is_detached:
                raise InvalidCursorError(node.value)
        else:
            node = self._find_node(target)

        if node is self._sentinel:
            return 0

        self._delete_node(node)
        return 1

    def find(self, value: Any) -> Cursor:
        """Cursor on value, or the end cursor. O(log N)"""
        return Cursor(self, self._find_node(value))

    def lower_bound(self, value: Any) -> Cursor:
        """Cursor on the first element >= value. O(log N)"""
        return Cursor(self, self._lower_bound_node(value))

    def upper_bound(self, value: Any) -> Cursor:
        """Cursor on the first element > value. O(log N)"""
        less = self._less
        result = self._sentinel
        current = self._root
        while current is not self._sentinel:
            if less(value, current.value):
                result = current
                current = current.left
            else:
                current = current.right
        return Cursor(self, result)

    def has(self, value: Any) -> bool:
        return self._find_node(value) is not self._sentinel

    def begin(self) -> Cursor:
        return Cursor(self, self._head)

    def end(self) -> Cursor:
        return Cursor(self, self._sentinel)

    def size(self) -> int:
        return self._size

    def clear(self) -> None:
        """Erase every node, invalidating all cursors except end cursors."""
        nodes = []
        node = self._head
        while node is not self._sentinel:
            nodes.append(node)
            node = node.next(self._sentinel)

        for node in nodes:
            node.detach()

        self._sentinel.parent = self._sentinel
        self._root = self._sentinel
        self._head = self._sentinel
        self._tail = self._sentinel
        self._size = 0

    def __iter__(self) -> Iterator[Any]:
        return self.iterator()

    def __reversed__(self) -> Iterator[Any]:
        return self.iterator(reverse=True)

    def iterator(
        self, start: Any = None, end: Any = None, reverse: bool = False
    ) -> Iterator[Any]:
        if reverse:
            if end is None:
                cursor = self.end()
            else:
                cursor = self.lower_bound(end)
            cursor.retreat()
        elif start is None:
            cursor = self.begin()
        else:
            cursor = self.lower_bound(start)
        return _RangeIterator(self, cursor, start, end, reverse)

    def _find_node(self, value: Any) -> Node:
        """Find node by value, or the sentinel."""
        less = self._less
        current = self._root
        while current is not self._sentinel:
            if less(value, current.value):
                current = current.left
            elif less(current.value, value):
                current = current.right
            else:
                break
        return current

    def _lower_bound_node(self, value: Any) -> Node:
        less = self._less
        result = self._sentinel
        current = self._root
        while current is not self._sentinel:
            if less(current.value, value):
                current = current.right
            elif less(value, current.value):
                result = current
                current = current.left
            else:
                return current
        return result

    def _fix_insert(self, node: Node) -> None:
        """Fix Red-Black Tree properties after insert."""
        while node.parent.color == Color.RED:
            parent = node.parent
            grandparent = parent.parent

            if parent is grandparent.left:
                uncle = grandparent.right

                if uncle.color == Color.RED:
                    # Case 1: Uncle is red
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grandparent.color = Color.RED
                    node = grandparent
                else:
                    if node is parent.right:
                        # Case 2: Node is an inner child
                        node = parent
                        self._rotate_left(node)

                    # Case 3: Node is an outer child
                    node.parent.color = Color.BLACK
                    node.parent.parent.color = Color.RED
                    self._rotate_right(node.parent.parent)
            else:
                uncle = grandparent.left

                if uncle.color == Color.RED:
                    parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    grandparent.color = Color.RED
                    node = grandparent
                else:
                    if node is parent.left:
                        node = parent
                        self._rotate_right(node)

                    node.parent.color = Color.BLACK
                    node.parent.parent.color = Color.RED
                    self._rotate_left(node.parent.parent)

        self._root.color = Color.BLACK

    def _rotate_left(self, node: Node) -> None:
        """Left rotation."""
        right_child = node.right

        node.right = right_child.left
        if right_child.left is not self._sentinel:
            right_child.left.parent = node

        right_child.parent = node.parent

        if node.parent is self._sentinel:
            self._root = right_child
        elif node is node.parent.left:
            node.parent.left = right_child
        else:
            node.parent.right = right_child

        right_child.left = node
        node.parent = right_child

    def _rotate_right(self, node: Node) -> None:
        """Right rotation."""
        left_child = node.left

        node.left = left_child.right
        if left_child.right is not self._sentinel:
            left_child.right.parent = node

        left_child.parent = node.parent

        if node.parent is self._sentinel:
            self._root = left_child
        elif node is node.parent.right:
            node.parent.right = left_child
        else:
            node.parent.left = left_child

        left_child.right = node
        node.parent = left_child

    def _transplant(self, node: Node, child: Node) -> None:
        """Replace node with child in tree. child may be the sentinel."""
        if node.parent is self._sentinel:
            self._root = child
        elif node is node.parent.left:
            node.parent.left = child
        else:
            node.parent.right = child

        child.parent = node.parent

    def _delete_node(self, node: Node) -> None:
        """Delete a node from the tree."""
        sentinel = self._sentinel

        if self._head is node:
            self._head = node.next(sentinel)
        if self._tail is node:
            self._tail = node.prev(sentinel)

        removed_color = node.color
        if node.left is sentinel:
            child = node.right
            self._transplant(node, node.right)
        elif node.right is sentinel:
            child = node.left
            self._transplant(node, node.left)
        else:
            # Node has two children - move its successor into its place.
            # The successor node itself is relinked, so cursors on it stay valid.
            successor = node.right.minimum(sentinel)
            removed_color = successor.color
            child = successor.right

            if successor.parent is node:
                child.parent = successor
            else:
                self._transplant(successor, successor.right)
                successor.right = node.right
                successor.right.parent = successor

            self._transplant(node, successor)
            successor.left = node.left
            successor.left.parent = successor
            successor.color = node.color

        if removed_color == Color.BLACK:
            self._fix_delete(child)

        # Splicing may have pointed the sentinel's parent at a real node
        sentinel.parent = sentinel
        self._size -= 1
        node.detach()

    def _fix_delete(self, node: Node) -> None:
        """Fix Red-Black Tree properties after deleting a black node."""
        while node is not self._root and node.color == Color.BLACK:
            if node is node.parent.left:
                sibling = node.parent.right

                if sibling.color == Color.RED:
                    # Case 1: Sibling is red
                    sibling.color = Color.BLACK
                    node.parent.color = Color.RED
                    self._rotate_left(node.parent)
                    sibling = node.parent.right

                if (
                    sibling.left.color == Color.BLACK
                    and sibling.right.color == Color.BLACK
                ):
                    # Case 2: Both of sibling's children are black
                    sibling.color = Color.RED
                    node = node.parent
                else:
                    if sibling.right.color == Color.BLACK:
                        # Case 3: Far child is black, near child is red
                        sibling.left.color = Color.BLACK
                        sibling.color = Color.RED
                        self._rotate_right(sibling)
                        sibling = node.parent.right

                    # Case 4: Far child is red
                    sibling.color = node.parent.color
                    node.parent.color = Color.BLACK
                    sibling.right.color = Color.BLACK
                    self._rotate_left(node.parent)
                    node = self._root
            else:
                sibling = node.parent.left

                if sibling.color == Color.RED:
                    sibling.color = Color.BLACK
                    node.parent.color = Color.RED
                    self._rotate_right(node.parent)
                    sibling = node.parent.left

                if (
                    sibling.right.color == Color.BLACK
                    and sibling.left.color == Color.BLACK
                ):
                    sibling.color = Color.RED
                    node = node.parent
                else:
                    if sibling.left.color == Color.BLACK:
                        sibling.right.color = Color.BLACK
                        sibling.color = Color.RED
                        self._rotate_left(sibling)
                        sibling = node.parent.left

                    sibling.color = node.parent.color
                    node.parent.color = Color.BLACK
                    sibling.left.color = Color.BLACK
                    self._rotate_right(node.parent)
                    node = self._root

        node.color = Color.BLACK

    def check_invariants(self) -> None:
        """
        Verify the Red-Black properties and the cached bounds.

        Walks the whole tree. Raises InvariantViolationError describing
        the first violation found.
        """
        sentinel = self._sentinel

        if sentinel.color != Color.BLACK:
            self._violation("sentinel is not black")
        if not (sentinel.left is sentinel and sentinel.right is sentinel):
            self._violation("sentinel children do not point to itself")
        if sentinel.parent is not sentinel:
            self._violation("sentinel parent does not point to itself")

        if self._root is sentinel:
            if self._size != 0:
                self._violation(f"empty tree reports size {self._size}")
            if self._head is not sentinel or self._tail is not sentinel:
                self._violation("empty tree has cached bounds")
            return

        if self._root.color != Color.BLACK:
            self._violation("root is not black", self._root.value)
        if self._root.parent is not sentinel:
            self._violation("root parent is not the sentinel", self._root.value)

        count = self._check_subtree(self._root)[1]
        if count != self._size:
            self._violation(f"size is {self._size} but tree holds {count} nodes")

        if self._head is not self._root.minimum(sentinel):
            self._violation("head is not the minimum node", self._head.value)
        if self._tail is not self._root.maximum(sentinel):
            self._violation("tail is not the maximum node", self._tail.value)

    def _check_subtree(self, node: Node) -> tuple[int, int]:
        """Return (black height, node count) of the subtree rooted at node."""
        sentinel = self._sentinel
        if node is sentinel:
            return 1, 0

        if node.color == Color.RED:
            if node.left.color == Color.RED or node.right.color == Color.RED:
                self._violation("red node has a red child", node.value)

        for child in (node.left, node.right):
            if child is not sentinel and child.parent is not node:
                self._violation("child does not link back to parent", child.value)

        # Strict ordering against the neighbours in sorted order covers the
        # whole subtree, not just direct children
        prev = node.prev(sentinel)
        if prev is not sentinel and not self._less(prev.value, node.value):
            self._violation("elements out of order", node.value)

        left_height, left_count = self._check_subtree(node.left)
        right_height, right_count = self._check_subtree(node.right)

        if left_height != right_height:
            self._violation("black height mismatch", node.value)

        height = left_height + (1 if node.color == Color.BLACK else 0)
        return height, left_count + right_count + 1

    def _violation(self, invariant: str, value: Any = None) -> None:
        error = InvariantViolationError(invariant, value)
        logger.error(str(error))
        raise error


class _RangeIterator(Iterator[Any]):
    """Iterator for range queries on Red-Black Tree."""

    def __init__(
        self,
        tree: RedBlackTree,
        cursor: Cursor,
        start: Any,
        end: Any,
        reverse: bool,
    ) -> None:
        self._less = tree._less
        self._cursor = cursor
        self._start = start
        self._end = end
        self._reverse = reverse
        self._started = False
        self._done = False

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if self._done:
            raise StopIteration

        cursor = self._cursor
        if self._started:
            if self._reverse:
                cursor.retreat()
            else:
                cursor.advance()
        self._started = True

        if cursor.is_end:
            self._done = True
            raise StopIteration

        value = cursor.value

        # Check bounds
        if self._reverse:
            if self._start is not None and self._less(value, self._start):
                self._done = True
                raise StopIteration
        elif self._end is not None and not self._less(value, self._end):
            self._done = True
            raise StopIteration

        return value
