"""KeyCrawler - Key-based traversal of arbitrary value graphs.

KeyCrawler walks nested data (dicts, lists, plain objects, DOM nodes or
anything a vertex rule can describe) by the keys that lead from one value
to the next, and records how each value was reached as a route.

Getting started:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Functional:
    from keycrawler import find_routes, collect_values

Object-oriented:
    from keycrawler import KeyCrawler, CrawlerConfig
    crawler = KeyCrawler.from_config(CrawlerConfig.breadth_first())
━━━━━━━━━━━━━━━━━━━━━━━━━━

Strategy names for configuration live in ``keycrawler.config``; the
top-level ``TraversalStrategy`` is the base class strategies implement.
"""

__version__ = "0.1.0"

from .errors import KeyCrawlerError, ConfigurationError, TraversalDepthError
from .config import CrawlerConfig, SearchOrder
from .core import (
    ValueVertex,
    KeyValueVertex,
    PrimitiveVertex,
    ArrayVertex,
    ObjectVertex,
    DefinedObjectVertex,
    PropertyCallRequest,
    ValueLookupVertex,
    MapVertex,
    DOMNodeVertex,
    resolve_property_lookup,
    ValueVertexFactory,
    TraversalRoute,
    TraversalState,
    create_root_route,
    create_root_state,
    clone_route,
    get_route_values,
    TraversalStrategy,
    DepthFirstSearch,
    BreadthFirstSearch,
    create_strategy,
    KeyCrawler,
    SearchResponse,
)
from .content import (
    ContentCrawler,
    IndexedContentTreeCrawler,
    SearchPathResolver,
    PropertySearchFactory,
    LinearTreeNavigator,
)
from .api import (
    traverse_values,
    collect_values,
    find_routes,
    find_first_route,
    map_value,
    get_value_at,
    count_values,
)

__all__ = [
    "__version__",
    # Errors and configuration
    "KeyCrawlerError",
    "ConfigurationError",
    "TraversalDepthError",
    "CrawlerConfig",
    "SearchOrder",
    # Vertices
    "ValueVertex",
    "KeyValueVertex",
    "PrimitiveVertex",
    "ArrayVertex",
    "ObjectVertex",
    "DefinedObjectVertex",
    "PropertyCallRequest",
    "ValueLookupVertex",
    "MapVertex",
    "DOMNodeVertex",
    "resolve_property_lookup",
    "ValueVertexFactory",
    # Traversal
    "TraversalRoute",
    "TraversalState",
    "create_root_route",
    "create_root_state",
    "clone_route",
    "get_route_values",
    "TraversalStrategy",
    "DepthFirstSearch",
    "BreadthFirstSearch",
    "create_strategy",
    "KeyCrawler",
    "SearchResponse",
    # Content trees
    "ContentCrawler",
    "IndexedContentTreeCrawler",
    "SearchPathResolver",
    "PropertySearchFactory",
    "LinearTreeNavigator",
    # Functional API
    "traverse_values",
    "collect_values",
    "find_routes",
    "find_first_route",
    "map_value",
    "get_value_at",
    "count_values",
]
