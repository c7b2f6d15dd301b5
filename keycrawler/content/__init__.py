"""Content tree support for KeyCrawler.

Vertices, crawlers, search path resolution and linear navigation for
nested ``{"content": ..., "children": [...]}`` page trees.
"""

from .nodes import (
    is_content_node,
    ContentNodeVertex,
    get_valid_content_node_vertex,
    IndexedNodeVertex,
    get_valid_indexed_node_vertex,
    ContentCrawler,
    IndexedContentTreeCrawler,
)
from .search import (
    SearchPathResolver,
    SearchTermCallbackFactory,
    PropertySearchFactory,
)
from .navigation import LinearTreeNavigator

__all__ = [
    'is_content_node',
    'ContentNodeVertex',
    'get_valid_content_node_vertex',
    'IndexedNodeVertex',
    'get_valid_indexed_node_vertex',
    'ContentCrawler',
    'IndexedContentTreeCrawler',
    'SearchPathResolver',
    'SearchTermCallbackFactory',
    'PropertySearchFactory',
    'LinearTreeNavigator',
]
