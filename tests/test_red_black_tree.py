"""
Tests for the RedBlackTree engine: insertion, deletion, lookup and balance.
"""

import pytest

from rbset.models.exceptions import InvariantViolationError
from rbset.models.node import Color
from rbset.models.sortedcontainers import RedBlackTree


def black_height(tree):
    """Count black nodes from the root down its left spine, sentinel included."""
    height = 1
    node = tree._root
    while node is not tree._sentinel:
        if node.color == Color.BLACK:
            height += 1
        node = node.left
    return height


class TestInsert:
    """Tests for insertion and the insert fix-up."""

    def test_insert_into_empty(self, tree):
        """Test the first element becomes a black root and both bounds."""
        cursor, inserted = tree.insert(10)

        assert inserted
        assert cursor.value == 10
        assert tree.size() == 1
        assert tree._root.color == Color.BLACK
        assert tree.begin() == cursor
        assert tree.end().retreat() == cursor
        tree.check_invariants()

    def test_duplicate_insert_is_noop(self, tree):
        """Test inserting an existing element leaves the tree unchanged."""
        first, _ = tree.insert(10)
        tree.insert(5)
        cursor, inserted = tree.insert(10)

        assert not inserted
        assert cursor == first
        assert tree.size() == 2
        assert list(tree) == [5, 10]

    def test_red_uncle_recolors(self, tree):
        """Test a red uncle is recolored instead of rotating."""
        for value in (10, 5, 15):
            tree.insert(value)
        tree.insert(1)

        root = tree._root
        assert root.value == 10
        assert root.color == Color.BLACK
        assert root.left.color == Color.BLACK
        assert root.right.color == Color.BLACK
        assert root.left.left.color == Color.RED
        tree.check_invariants()

    def test_outer_child_rotates_once(self, tree):
        """Test a left-left chain is fixed by one right rotation."""
        for value in (30, 20, 10):
            tree.insert(value)

        root = tree._root
        assert root.value == 20
        assert root.left.value == 10
        assert root.right.value == 30
        assert root.left.color == Color.RED
        assert root.right.color == Color.RED
        tree.check_invariants()

    def test_inner_child_rotates_twice(self, tree):
        """Test a left-right chain is straightened then rotated."""
        for value in (30, 10, 20):
            tree.insert(value)

        assert tree._root.value == 20
        assert tree._root.left.value == 10
        assert tree._root.right.value == 30
        tree.check_invariants()

    def test_mirror_inner_child(self, tree):
        """Test a right-left chain is straightened then rotated."""
        for value in (10, 30, 20):
            tree.insert(value)

        assert tree._root.value == 20
        tree.check_invariants()

    def test_ascending_inserts_stay_balanced(self, tree):
        """Test sorted input does not degrade into a list."""
        for value in range(1024):
            tree.insert(value)

        tree.check_invariants()
        assert tree.size() == 1024
        # Black height is at most log2(n + 1), plus the sentinel
        assert black_height(tree) <= 12

    def test_bounds_tracked_on_insert(self, tree):
        """Test head and tail follow new extremes."""
        for value in (50, 40, 60, 10, 90, 45):
            tree.insert(value)

        assert tree.begin().value == 10
        assert tree.end().retreat().value == 90


class TestErase:
    """Tests for deletion and the delete fix-up."""

    def test_erase_absent_is_noop(self, scenario_tree):
        """Test erasing a missing element removes nothing."""
        assert scenario_tree.erase(6) == 0
        assert scenario_tree.size() == 7

    def test_erase_end_cursor_is_noop(self, scenario_tree):
        """Test erasing through the end cursor removes nothing."""
        assert scenario_tree.erase(scenario_tree.end()) == 0
        assert scenario_tree.size() == 7

    def test_erase_leaf(self, scenario_tree):
        """Test removing a node without children."""
        assert scenario_tree.erase(4) == 1
        assert list(scenario_tree) == [1, 3, 5, 7, 8, 9]
        scenario_tree.check_invariants()

    def test_erase_node_with_two_children(self, scenario_tree):
        """Test removing the root, which has two children."""
        assert scenario_tree.erase(5) == 1
        assert list(scenario_tree) == [1, 3, 4, 7, 8, 9]
        assert scenario_tree._root.value == 7
        scenario_tree.check_invariants()

    def test_erase_by_cursor(self, scenario_tree):
        """Test removing the element a cursor references."""
        assert scenario_tree.erase(scenario_tree.find(8)) == 1
        assert not scenario_tree.has(8)
        scenario_tree.check_invariants()

    def test_erase_minimum_updates_head(self, scenario_tree):
        """Test begin() moves to the successor of an erased minimum."""
        scenario_tree.erase(1)

        assert scenario_tree.begin().value == 3
        scenario_tree.check_invariants()

    def test_erase_maximum_updates_tail(self, scenario_tree):
        """Test end().retreat() moves to the predecessor of an erased maximum."""
        scenario_tree.erase(9)

        assert scenario_tree.end().retreat().value == 8
        scenario_tree.check_invariants()

    def test_erase_everything(self, scenario_tree):
        """Test erasing every element leaves a valid empty tree."""
        for value in (5, 3, 8, 1, 4, 7, 9):
            scenario_tree.erase(value)
            scenario_tree.check_invariants()

        assert scenario_tree.size() == 0
        assert scenario_tree.empty()
        assert scenario_tree.begin() == scenario_tree.end()

    def test_erase_black_leaves(self, tree):
        """Test removing black leaves exercises every sibling case."""
        for value in range(1, 64):
            tree.insert(value)

        # Remove from both sides of the root so both mirrors run
        for value in list(range(1, 64, 3)) + list(range(62, 1, -4)):
            tree.erase(value)
            tree.check_invariants()

    def test_sentinel_restored_after_erase(self, scenario_tree):
        """Test the sentinel's parent link points back to itself."""
        scenario_tree.erase(1)
        sentinel = scenario_tree._sentinel

        assert sentinel.parent is sentinel
        assert sentinel.color == Color.BLACK


class TestLookup:
    """Tests for find, lower_bound, upper_bound and has."""

    def test_find(self, scenario_tree):
        """Test find returns a cursor on present elements only."""
        assert scenario_tree.find(7).value == 7
        assert scenario_tree.find(6) == scenario_tree.end()

    def test_lower_bound(self, scenario_tree):
        """Test lower_bound finds the smallest element not less than value."""
        assert scenario_tree.lower_bound(6).value == 7
        assert scenario_tree.lower_bound(7).value == 7
        assert scenario_tree.lower_bound(0).value == 1
        assert scenario_tree.lower_bound(10) == scenario_tree.end()

    def test_upper_bound(self, scenario_tree):
        """Test upper_bound finds the smallest element greater than value."""
        assert scenario_tree.upper_bound(7).value == 8
        assert scenario_tree.upper_bound(6).value == 7
        assert scenario_tree.upper_bound(9) == scenario_tree.end()

    def test_lower_bound_matches_reference(self, tree):
        """Test lower_bound against a brute-force search."""
        stored = list(range(0, 41, 2))
        for value in stored:
            tree.insert(value)

        for probe in range(-3, 45):
            expected = [v for v in stored if v >= probe]
            cursor = tree.lower_bound(probe)
            if expected:
                assert cursor.value == expected[0]
                assert (tree.find(probe) == cursor) == (probe in stored)
            else:
                # Past the maximum both searches land on the end cursor
                assert cursor == tree.end()
                assert tree.find(probe) == tree.end()

    def test_has(self, scenario_tree):
        """Test membership checks."""
        assert scenario_tree.has(1)
        assert not scenario_tree.has(2)

    def test_lookups_on_empty_tree(self, tree):
        """Test lookups on an empty tree return the end cursor."""
        assert tree.find(1) == tree.end()
        assert tree.lower_bound(1) == tree.end()
        assert tree.upper_bound(1) == tree.end()
        assert tree.begin() == tree.end()


class TestIteration:
    """Tests for ordered and range iteration."""

    def test_iteration(self, scenario_tree):
        """Test ascending and descending iteration."""
        assert list(scenario_tree) == [1, 3, 4, 5, 7, 8, 9]
        assert list(reversed(scenario_tree)) == [9, 8, 7, 5, 4, 3, 1]

    def test_range_iteration(self, scenario_tree):
        """Test [start, end) iteration in both directions."""
        assert list(scenario_tree.iterator(3, 8)) == [3, 4, 5, 7]
        assert list(scenario_tree.iterator(3, 8, reverse=True)) == [7, 5, 4, 3]
        assert list(scenario_tree.iterator(start=6)) == [7, 8, 9]
        assert list(scenario_tree.iterator(end=4)) == [1, 3]
        assert list(scenario_tree.iterator(end=4, reverse=True)) == [3, 1]

    def test_empty_ranges(self, scenario_tree):
        """Test inverted and out-of-range bounds yield nothing."""
        assert list(scenario_tree.iterator(8, 3)) == []
        assert list(scenario_tree.iterator(8, 3, reverse=True)) == []
        assert list(scenario_tree.iterator(10, 20)) == []
        assert list(RedBlackTree().iterator(reverse=True)) == []

    def test_exhausted_iterator_stays_exhausted(self, scenario_tree):
        """Test next() keeps raising StopIteration after the end."""
        iterator = scenario_tree.iterator(8)
        assert list(iterator) == [8, 9]
        scenario_tree.insert(10)
        assert list(iterator) == []


class TestInvariants:
    """Tests for invariant checking and randomized balance."""

    def test_scenario(self, scenario_tree):
        """Test the documented insert/lookup/erase walkthrough."""
        assert list(scenario_tree) == [1, 3, 4, 5, 7, 8, 9]
        assert scenario_tree.find(6) == scenario_tree.end()
        assert scenario_tree.lower_bound(6).value == 7

        scenario_tree.erase(5)
        assert list(scenario_tree) == [1, 3, 4, 7, 8, 9]
        scenario_tree.check_invariants()

        assert scenario_tree.begin().value == 1
        scenario_tree.erase(1)
        assert scenario_tree.begin().value == 3
        scenario_tree.check_invariants()

    def test_detects_red_root(self, scenario_tree, caplog):
        """Test a red root is reported and logged."""
        scenario_tree._root.color = Color.RED

        with pytest.raises(InvariantViolationError, match="root is not black"):
            scenario_tree.check_invariants()
        assert "root is not black" in caplog.text

    def test_detects_red_red(self, scenario_tree):
        """Test a red node with a red child is reported."""
        node = scenario_tree.find(3)._node
        node.color = Color.RED
        node.left.color = Color.RED

        with pytest.raises(InvariantViolationError):
            scenario_tree.check_invariants()

    def test_detects_black_height_mismatch(self, scenario_tree):
        """Test recoloring a single leaf breaks black height."""
        leaf = scenario_tree.find(9)._node
        leaf.color = Color.BLACK if leaf.color == Color.RED else Color.RED
        leaf.parent.color = Color.BLACK

        with pytest.raises(InvariantViolationError):
            scenario_tree.check_invariants()

    def test_detects_stale_head(self, scenario_tree):
        """Test a wrong cached minimum is reported."""
        scenario_tree._head = scenario_tree.find(3)._node

        with pytest.raises(InvariantViolationError, match="head"):
            scenario_tree.check_invariants()

    def test_random_operations_against_set(self, tree, rng):
        """Test random inserts and erases against a Python set."""
        reference = set()

        for _ in range(2000):
            value = rng.randrange(150)
            if rng.random() < 0.6:
                _, inserted = tree.insert(value)
                assert inserted == (value not in reference)
                reference.add(value)
            else:
                assert tree.erase(value) == (1 if value in reference else 0)
                reference.discard(value)

            tree.check_invariants()
            assert tree.size() == len(reference)

        assert list(tree) == sorted(reference)
        assert list(reversed(tree)) == sorted(reference, reverse=True)

    def test_clear(self, scenario_tree):
        """Test clear empties the tree and invalidates cursors."""
        cursor = scenario_tree.find(4)
        scenario_tree.clear()

        assert scenario_tree.size() == 0
        assert not cursor.is_valid
        scenario_tree.check_invariants()

        scenario_tree.insert(2)
        assert list(scenario_tree) == [2]
        scenario_tree.check_invariants()


class TestKeyFunction:
    """Tests for ordering through a key function."""

    def test_key_orders_elements(self):
        """Test elements are ordered and deduplicated by key."""
        tree = RedBlackTree(key=str.lower)
        for word in ("banana", "Apple", "cherry"):
            tree.insert(word)

        _, inserted = tree.insert("APPLE")

        assert not inserted
        assert list(tree) == ["Apple", "banana", "cherry"]
        assert tree.find("apple").value == "Apple"
        tree.check_invariants()

    def test_key_must_be_callable(self):
        """Test a non-callable key is rejected."""
        with pytest.raises(TypeError):
            RedBlackTree(key="name")
