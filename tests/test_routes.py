"""Tests for traversal routes, states and the visited set."""

from keycrawler.core import (
    KeyCrawler,
    VisitedSet,
    clone_route,
    create_root_route,
    create_root_state,
    get_route_values,
)
from keycrawler.testing import make_sample_tree


def test_root_route_targets_root():
    tree = make_sample_tree()
    route = create_root_route(tree)
    assert route.path == []
    assert route.vertices == []
    assert route.target is tree


def test_clone_route_copies_lists_and_shares_target():
    tree = make_sample_tree()
    route = KeyCrawler().create_route_from(tree, ['children', 0])
    cloned = clone_route(route)

    cloned.path.append('value')
    cloned.vertices.pop()

    assert route.path == ['children', 0]
    assert len(route.vertices) == 2
    assert cloned.target is route.target


def test_route_values_start_at_root():
    tree = make_sample_tree()
    route = KeyCrawler().create_route_from(tree, ['children', 0])
    values = get_route_values(route)
    assert values[0] is tree
    assert values[1] is tree['children']
    assert values[2] is tree['children'][0]


def test_empty_route_is_truthy():
    assert create_root_route(None)


class TestVisitedSet:

    def test_membership_is_by_identity(self):
        visited = VisitedSet()
        first = {'value': 1}
        twin = {'value': 1}
        visited.add(first)
        assert first in visited
        assert twin not in visited
        assert len(visited) == 1

    def test_adding_twice_keeps_one_entry(self):
        visited = VisitedSet()
        item = []
        visited.add(item)
        visited.add(item)
        assert len(visited) == 1
        assert list(visited) == [item]


def test_root_state_defaults():
    state = create_root_state({'a': 1})
    assert not state.completed
    assert not state.skip_iteration
    assert state.route_queue is None
    assert len(state.visited) == 0
    assert state.depth == 0
