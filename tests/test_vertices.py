"""Tests for the basic vertex types and the vertex factory."""

import pytest

from keycrawler.core import (
    ArrayVertex,
    DefinedObjectVertex,
    ObjectVertex,
    PrimitiveVertex,
    ValueVertexFactory,
    get_wrapped_index,
    is_array,
    is_object,
)


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class Slotted:
    __slots__ = ('x',)

    def __init__(self, x):
        self.x = x


def collect_pairs(vertex):
    keys = list(vertex.key_provider)
    return keys, [vertex.get_key_value(key) for key in keys]


def tree_node_rule(value):
    if isinstance(value, dict) and 'children' in value:
        return DefinedObjectVertex(value, ['children'])
    return None


class TestArrayVertex:
    """Lists and tuples are keyed by index."""

    def test_iterates_over_indices(self):
        keys, values = collect_pairs(ArrayVertex(['a', 'b']))
        assert keys == [0, 1]
        assert values == ['a', 'b']

    def test_tuples_are_supported(self):
        keys, values = collect_pairs(ArrayVertex(('x', 'y', 'z')))
        assert keys == [0, 1, 2]
        assert values == ['x', 'y', 'z']

    def test_missing_index_gives_none(self):
        vertex = ArrayVertex(['a', 'b'])
        assert vertex.get_key_value(2) is None
        assert vertex.get_key_value('nope') is None

    def test_key_lookup_does_not_wrap_negative_indices(self):
        vertex = ArrayVertex(['a', 'b'])
        assert vertex.get_key_value(-1) is None

    def test_indexed_key_wraps_negative_indices(self):
        vertex = ArrayVertex(['a', 'b', 'c'])
        assert vertex.get_indexed_key(-1) == 2
        assert vertex.get_indexed_key(-3) == 0
        assert vertex.get_indexed_key(-4) is None
        assert vertex.get_indexed_key(3) is None

    def test_key_index(self):
        vertex = ArrayVertex(['a', 'b'])
        assert vertex.get_key_index(1) == 1
        assert vertex.get_key_index(5) is None


class TestObjectVertex:
    """Mappings use their keys, plain objects their instance attributes."""

    def test_iterates_over_mapping_keys(self):
        keys, values = collect_pairs(ObjectVertex({'x': 1, 'y': 2}))
        assert keys == ['x', 'y']
        assert values == [1, 2]

    def test_iterates_over_instance_attributes(self):
        keys, values = collect_pairs(ObjectVertex(Point(3, 4)))
        assert keys == ['x', 'y']
        assert values == [3, 4]

    def test_object_without_dict_has_no_keys(self):
        assert list(ObjectVertex(Slotted(1)).key_provider) == []

    def test_missing_key_gives_none(self):
        assert ObjectVertex({'x': 1}).get_key_value('y') is None
        assert ObjectVertex(Point(1, 2)).get_key_value('z') is None

    def test_unhashable_key_gives_none(self):
        assert ObjectVertex({'x': 1}).get_key_value(['x']) is None

    def test_negative_index_counts_from_end(self):
        vertex = ObjectVertex({'x': 10, 'y': 20})
        assert vertex.get_indexed_key(-1) == vertex.get_indexed_key(1) == 'y'
        assert vertex.get_indexed_key(2) is None
        assert vertex.get_indexed_key(-3) is None

    def test_key_index(self):
        vertex = ObjectVertex({'x': 10, 'y': 20})
        assert vertex.get_key_index('y') == 1
        assert vertex.get_key_index('z') is None

    def test_key_provider_is_fresh_on_each_access(self):
        vertex = ObjectVertex({'x': 1, 'y': 2})
        abandoned = vertex.key_provider
        next(abandoned)
        assert list(vertex.key_provider) == ['x', 'y']


class TestDefinedObjectVertex:
    """Only the listed keys are visited."""

    def test_only_iterates_over_listed_keys(self):
        source = {'value': 0, 'child': {'value': 1}}
        keys, values = collect_pairs(DefinedObjectVertex(source, ['child']))
        assert keys == ['child']
        assert values == [{'value': 1}]

    def test_skips_listed_keys_the_value_lacks(self):
        vertex = DefinedObjectVertex({'content': 'A'}, ['content', 'children'])
        assert list(vertex.key_provider) == ['content']
        assert vertex.get_key_index('children') is None

    def test_follows_listed_order(self):
        vertex = DefinedObjectVertex({'a': 1, 'b': 2}, ['b', 'a'])
        assert list(vertex.key_provider) == ['b', 'a']
        assert vertex.get_indexed_key(-1) == 'a'

    def test_works_with_plain_objects(self):
        vertex = DefinedObjectVertex(Point(1, 2), ['y', 'z'])
        assert list(vertex.key_provider) == ['y']


def test_primitive_vertex_is_terminal():
    vertex = PrimitiveVertex('text')
    assert not vertex.is_keyed()
    assert vertex.value == 'text'


@pytest.mark.parametrize("index,length,clamped,expected", [
    (1, 3, False, 1),
    (-1, 3, False, 2),
    (5, 3, False, 5),
    (-5, 3, False, -2),
    (5, 3, True, 2),
    (-5, 3, True, 0),
])
def test_get_wrapped_index(index, length, clamped, expected):
    assert get_wrapped_index(index, length, clamped) == expected


@pytest.mark.parametrize("value,expected", [
    (None, False),
    ('text', False),
    (b'bytes', False),
    (3, False),
    (2.5, False),
    (True, False),
    (len, False),
    ([], True),
    ({}, True),
    (Point(0, 0), True),
])
def test_is_object(value, expected):
    assert is_object(value) is expected


def test_is_array():
    assert is_array([1])
    assert is_array((1,))
    assert not is_array({'a': 1})
    assert not is_array('abc')


class TestValueVertexFactory:

    def test_produces_array_vertex_for_lists(self):
        assert isinstance(ValueVertexFactory([tree_node_rule]).create_vertex([]), ArrayVertex)

    def test_produces_object_vertex_for_objects(self):
        assert isinstance(ValueVertexFactory([tree_node_rule]).create_vertex({}), ObjectVertex)

    def test_produces_primitive_vertex_for_primitives(self):
        factory = ValueVertexFactory()
        for value in ('text', 3, None, 1.5):
            assert isinstance(factory.create_vertex(value), PrimitiveVertex)

    def test_follows_rules_for_special_objects(self):
        vertex = ValueVertexFactory([tree_node_rule]).create_vertex({'children': []})
        assert isinstance(vertex, DefinedObjectVertex)

    def test_first_matching_rule_wins(self):
        def first(value):
            return DefinedObjectVertex(value, ['a'])

        def second(value):
            return DefinedObjectVertex(value, ['b'])

        vertex = ValueVertexFactory([first, second]).create_vertex({'a': 1, 'b': 2})
        assert list(vertex.key_provider) == ['a']

    def test_rules_are_not_consulted_for_arrays(self):
        seen = []

        def rule(value):
            seen.append(value)
            return None

        ValueVertexFactory([rule]).create_vertex([1, 2])
        assert seen == []

    def test_factories_do_not_share_rules(self):
        first = ValueVertexFactory()
        second = ValueVertexFactory()
        first.object_rules.append(tree_node_rule)
        assert second.object_rules == []
