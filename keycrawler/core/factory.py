"""Vertex creation for KeyCrawler.

The factory decides which vertex wraps a given value. Callers can plug in
domain specific vertices through an ordered list of object rules without
modifying the traversal code.
"""

from typing import Any, Callable, List, Optional, Sequence

from .vertex import (
    ArrayVertex,
    ObjectVertex,
    PrimitiveVertex,
    ValueVertex,
    is_array,
    is_object,
)

# A rule returns a vertex for values it knows how to handle, None otherwise.
VertexFactoryCallback = Callable[[Any], Optional[ValueVertex]]


class ValueVertexFactory:
    """Wraps values in an appropriate vertex given a set of rules.

    Attributes:
        object_rules: Rules for objects requiring special handling, in order
            of descending priority
    """

    def __init__(self, object_rules: Optional[Sequence[VertexFactoryCallback]] = None):
        """Initialize the factory.

        Args:
            object_rules: Rules used for special object types
        """
        self.object_rules: List[VertexFactoryCallback] = list(object_rules or [])

    def create_vertex(self, source: Any) -> ValueVertex:
        """Create a vertex for the provided value.

        Non-objects become primitive vertices and lists/tuples become array
        vertices. Anything else goes through the object rules, falling back
        to a plain object vertex if none of them match.

        Args:
            source: Value to be wrapped

        Returns:
            Vertex wrapping the value
        """
        if not is_object(source):
            return PrimitiveVertex(source)
        if is_array(source):
            return ArrayVertex(source)
        for rule in self.object_rules:
            vertex = rule(source)
            if vertex is not None:
                return vertex
        return ObjectVertex(source)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rules={len(self.object_rules)})"
