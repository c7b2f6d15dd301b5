"""Vertex abstractions for KeyCrawler.

A vertex wraps a single value and describes how to reach the values
connected to it. Keyed vertices expose those connections through keys,
much like edges, though the thing a key leads to need not be another
vertex. Navigation logic lives here so that traversal strategies can walk
lists, mappings, plain objects or custom structures uniformly.
"""

import types
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Hashable, Iterator, List, Optional, Sequence


# Values of these types are always wrapped in a PrimitiveVertex.
PRIMITIVE_TYPES = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    bool,
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)

ARRAY_TYPES = (list, tuple)


def is_object(value: Any) -> bool:
    """Check if a value can have keyed children (not None, not a primitive)."""
    return value is not None and not isinstance(value, PRIMITIVE_TYPES)


def is_array(value: Any) -> bool:
    """Check if a value should be treated as an indexed collection."""
    return isinstance(value, ARRAY_TYPES)


def get_wrapped_index(index: int, length: int, clamped: bool = False) -> int:
    """Convert a negative index to a position counted from the end.

    Non-negative indices are returned unchanged. Unless ``clamped`` is set,
    the result may still be out of range, which callers treat as invalid.

    Args:
        index: Zero-based position, negative values count from the end
        length: Number of items in the collection
        clamped: Limit the result to ``[0, length - 1]``

    Returns:
        The resolved position
    """
    if index < 0:
        index = length + index
    if clamped:
        if index >= length:
            index = length - 1
        if index < 0:
            index = 0
    return index


def _item_at(items: Sequence[Any], index: int) -> Optional[Any]:
    if 0 <= index < len(items):
        return items[index]
    return None


class ValueVertex(ABC):
    """Generic wrapper for a data value.

    Subclasses declare whether they support key based navigation through
    ``is_keyed``. Traversal code uses that capability query instead of
    probing for attributes.
    """

    def __init__(self, value: Any):
        self._value = value

    @property
    def value(self) -> Any:
        """Data the vertex represents."""
        return self._value

    def is_keyed(self) -> bool:
        """Check if this vertex exposes keyed connections.

        Returns:
            True if the vertex implements the KeyValueVertex interface
        """
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._value!r})"


class PrimitiveVertex(ValueVertex):
    """Terminal vertex for values without children."""


class KeyValueVertex(ValueVertex):
    """Vertex with a set of one-way keyed connections to other values.

    Each connection has its own unique key. ``key_provider`` returns a fresh
    iterator on every access so callers can abandon an iteration midway
    without affecting later ones.
    """

    def is_keyed(self) -> bool:
        return True

    @property
    def key_provider(self) -> Iterator[Hashable]:
        """Iterator over all of the vertex's keys."""
        return self.create_key_iterator()

    @abstractmethod
    def create_key_iterator(self) -> Iterator[Hashable]:
        """Create a new iterator over the wrapped value's keys."""
        pass

    @abstractmethod
    def get_key_value(self, key: Hashable) -> Optional[Any]:
        """Retrieve the value associated with a key.

        Args:
            key: Identifier the target value is linked to

        Returns:
            The associated value or None if there's no such value
        """
        pass

    def get_indexed_key(self, index: int) -> Optional[Hashable]:
        """Find the n-th key of the wrapped value.

        Args:
            index: Zero-based position of the key, negative values count
                from the end

        Returns:
            The key at that position or None if the position is out of range
        """
        keys = list(self.key_provider)
        return _item_at(keys, get_wrapped_index(index, len(keys)))

    def get_key_index(self, key: Hashable) -> Optional[int]:
        """Find the zero-based position of a key within the iteration order.

        Args:
            key: Key to be found

        Returns:
            Position of the key or None if it isn't one of the vertex's keys
        """
        for position, candidate in enumerate(self.key_provider):
            if candidate == key:
                return position
        return None


class ArrayVertex(KeyValueVertex):
    """Vertex for lists and tuples, keyed by item index."""

    def create_key_iterator(self) -> Iterator[int]:
        yield from range(len(self._value))

    def get_indexed_key(self, index: int) -> Optional[int]:
        position = get_wrapped_index(index, len(self._value))
        if 0 <= position < len(self._value):
            return position
        return None

    def get_key_value(self, key: Hashable) -> Optional[Any]:
        try:
            index = int(key)
        except (TypeError, ValueError):
            return None
        return _item_at(self._value, index)

    def get_key_index(self, key: Hashable) -> Optional[int]:
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self._value):
                return key
        return None


class ObjectVertex(KeyValueVertex):
    """Vertex for mappings and plain objects.

    Mappings are keyed by their own keys in iteration order. Other objects
    are keyed by the attribute names in their instance ``__dict__``; objects
    without one (slots, builtins) have no keys.
    """

    def _own_keys(self) -> List[Hashable]:
        if isinstance(self._value, Mapping):
            return list(self._value.keys())
        try:
            return list(vars(self._value).keys())
        except TypeError:
            return []

    def create_key_iterator(self) -> Iterator[Hashable]:
        yield from self._own_keys()

    def get_key_value(self, key: Hashable) -> Optional[Any]:
        if isinstance(self._value, Mapping):
            try:
                return self._value.get(key)
            except TypeError:
                # Unhashable key
                return None
        if isinstance(key, str):
            return getattr(self._value, key, None)
        return None


class DefinedObjectVertex(ObjectVertex):
    """Object vertex restricted to an explicit, ordered list of keys.

    Only listed keys the wrapped value actually defines are iterated, in
    the order given by ``keys``.
    """

    def __init__(self, value: Any, keys: Sequence[Hashable]):
        super().__init__(value)
        self.keys: List[Hashable] = list(keys)

    def _defined_keys(self) -> List[Hashable]:
        if isinstance(self._value, Mapping):
            return [key for key in self.keys if key in self._value]
        return [
            key for key in self.keys
            if isinstance(key, str) and hasattr(self._value, key)
        ]

    def create_key_iterator(self) -> Iterator[Hashable]:
        yield from self._defined_keys()

    def get_key_index(self, key: Hashable) -> Optional[int]:
        try:
            return self._defined_keys().index(key)
        except ValueError:
            return None
