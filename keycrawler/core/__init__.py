"""Core abstractions for KeyCrawler.

This package contains the vertex model, the route/state model, the
traversal strategies and the KeyCrawler facade built from them.
"""

from .vertex import (
    ValueVertex,
    KeyValueVertex,
    PrimitiveVertex,
    ArrayVertex,
    ObjectVertex,
    DefinedObjectVertex,
    get_wrapped_index,
    is_object,
    is_array,
)
from .lookup import (
    PropertyCallRequest,
    KeyedPathResult,
    ValueLookupVertex,
    MapVertex,
    DOMNodeVertex,
    execute_property_call,
    resolve_property_request,
    resolve_property_lookup,
    expand_nested_value_path,
    collapse_nested_value_path,
)
from .factory import ValueVertexFactory, VertexFactoryCallback
from .routes import (
    TraversalRoute,
    TraversalState,
    VisitedSet,
    create_root_route,
    create_root_state,
    clone_route,
    get_route_values,
)
from .traverser import (
    TraversalStrategy,
    DepthFirstSearch,
    BreadthFirstSearch,
    create_strategy,
)
from .crawler import KeyCrawler, SearchResponse, set_child_value

__all__ = [
    # Vertices
    'ValueVertex',
    'KeyValueVertex',
    'PrimitiveVertex',
    'ArrayVertex',
    'ObjectVertex',
    'DefinedObjectVertex',
    'get_wrapped_index',
    'is_object',
    'is_array',
    'PropertyCallRequest',
    'KeyedPathResult',
    'ValueLookupVertex',
    'MapVertex',
    'DOMNodeVertex',
    'execute_property_call',
    'resolve_property_request',
    'resolve_property_lookup',
    'expand_nested_value_path',
    'collapse_nested_value_path',
    'ValueVertexFactory',
    'VertexFactoryCallback',
    # Routes
    'TraversalRoute',
    'TraversalState',
    'VisitedSet',
    'create_root_route',
    'create_root_state',
    'clone_route',
    'get_route_values',
    # Traversal
    'TraversalStrategy',
    'DepthFirstSearch',
    'BreadthFirstSearch',
    'create_strategy',
    'KeyCrawler',
    'SearchResponse',
    'set_child_value',
]
