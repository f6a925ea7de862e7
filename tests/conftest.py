"""
Shared pytest fixtures for ordered set tests.
"""

import random

import pytest

from rbset.models.node import Color, Node
from rbset.models.sorted_set import RedBlackSet
from rbset.models.sortedcontainers import RedBlackTree

SCENARIO_VALUES = [5, 3, 8, 1, 4, 7, 9]


@pytest.fixture
def tree():
    """Provide a fresh RedBlackTree instance."""
    return RedBlackTree()


@pytest.fixture
def scenario_tree():
    """Provide a tree built from 5, 3, 8, 1, 4, 7, 9 in that order."""
    tree = RedBlackTree()
    for value in SCENARIO_VALUES:
        tree.insert(value)
    return tree


@pytest.fixture
def scenario_set():
    """Provide a set built from 5, 3, 8, 1, 4, 7, 9 in that order."""
    return RedBlackSet(SCENARIO_VALUES)


@pytest.fixture
def rng():
    """Provide a seeded random generator for reproducible stress runs."""
    return random.Random(12345)


@pytest.fixture
def linked_nodes():
    """
    Provide a hand-linked subtree and its sentinel:

            4
          /   \\
         2     6
        / \\     \\
       1   3     7
    """
    sentinel = Node.sentinel()
    nodes = {v: Node(v, Color.BLACK, sentinel, sentinel, sentinel) for v in (1, 2, 3, 4, 6, 7)}

    def link(parent, left=None, right=None):
        if left is not None:
            nodes[parent].left = nodes[left]
            nodes[left].parent = nodes[parent]
        if right is not None:
            nodes[parent].right = nodes[right]
            nodes[right].parent = nodes[parent]

    link(4, 2, 6)
    link(2, 1, 3)
    link(6, None, 7)
    return nodes, sentinel
