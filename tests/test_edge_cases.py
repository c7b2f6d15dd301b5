"""Unit tests for edge cases and error handling in KeyCrawler.

Tests unusual value graphs, error conditions, and boundary cases
that might occur in real-world usage.
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from keycrawler import (
    KeyCrawler,
    KeyCrawlerError,
    TraversalDepthError,
    count_values,
    get_value_at,
)
from keycrawler.core import BreadthFirstSearch, DepthFirstSearch
from keycrawler.testing import TraversalRecorder


def build_nested_list(depth):
    root = []
    current = root
    for _ in range(depth):
        child = []
        current.append(child)
        current = child
    return root


class TestEmptyStructures(unittest.TestCase):
    """Test handling of empty and missing values."""

    def test_empty_containers(self):
        """Empty containers are visited but have no children."""
        for value in ([], {}, ()):
            recorder = TraversalRecorder()
            DepthFirstSearch().traverse(value, recorder)
            self.assertEqual(len(recorder), 1)

    def test_none_root(self):
        recorder = TraversalRecorder()
        BreadthFirstSearch().traverse(None, recorder)
        self.assertEqual(recorder.targets, [None])

    def test_none_values_are_visited(self):
        recorder = TraversalRecorder()
        DepthFirstSearch().traverse({'a': None}, recorder)
        self.assertEqual(recorder.paths, [(), ('a',)])
        self.assertIsNone(recorder.targets[1])

    def test_route_through_none(self):
        self.assertIsNone(get_value_at({'a': None}, ['a', 'b']))


class TestUnusualValues(unittest.TestCase):
    """Test graphs made of plain objects and mixed containers."""

    def test_plain_objects(self):
        class Node:
            def __init__(self, name, child=None):
                self.name = name
                self.child = child

        tree = Node('root', Node('leaf'))
        routes = KeyCrawler().search(tree, lambda state: state.route.target == 'leaf').results
        self.assertEqual(routes[0].path, ['child', 'name'])

    def test_strings_are_not_iterated(self):
        self.assertEqual(count_values(['abc']), 2)

    def test_functions_are_primitive(self):
        self.assertEqual(count_values({'f': len}), 2)

    def test_non_string_mapping_keys(self):
        routes = KeyCrawler().search({1: 'one', (2, 3): 'pair'},
                                     lambda state: state.route.target == 'pair').results
        self.assertEqual(routes[0].path, [(2, 3)])

    def test_equal_but_distinct_objects_are_both_visited(self):
        recorder = TraversalRecorder()
        DepthFirstSearch().traverse([{'v': 1}, {'v': 1}], recorder)
        self.assertEqual(recorder.primitive_values(), [1, 1])


class TestDepthLimits(unittest.TestCase):
    """Test very deeply nested values."""

    def setUp(self):
        self.depth = sys.getrecursionlimit() * 2
        self.deep = build_nested_list(self.depth)

    def test_depth_first_raises_depth_error(self):
        with self.assertLogs('keycrawler.core.traverser', level='WARNING'):
            with self.assertRaises(TraversalDepthError) as context:
                DepthFirstSearch().traverse(self.deep)
        self.assertGreater(context.exception.depth, 0)
        self.assertIsInstance(context.exception, RecursionError)
        self.assertIsInstance(context.exception, KeyCrawlerError)

    def test_breadth_first_handles_deep_values(self):
        state = BreadthFirstSearch().traverse(self.deep)
        self.assertEqual(len(state.visited), self.depth + 1)

    def test_route_creation_handles_deep_values(self):
        route = KeyCrawler().create_route_from(self.deep, [0] * self.depth)
        self.assertEqual(route.target, [])
        self.assertEqual(len(route.vertices), self.depth)


if __name__ == '__main__':
    unittest.main()
