"""Content tree vertices and crawlers.

A content tree is a nested structure of nodes shaped like::

    {"content": ..., "children": [{"content": ...}, ...]}

Pages add optional ``id``, ``title`` and ``localName`` entries. The
vertices here tell the crawler which parts of such a node count as its
children.
"""

from collections.abc import Mapping
from typing import Any, Optional

from ..core.crawler import KeyCrawler
from ..core.factory import ValueVertexFactory
from ..core.lookup import KEY_ALIAS, ValueLookupVertex
from ..core.traverser import TraversalStrategy
from ..core.vertex import DefinedObjectVertex, ValueVertex


def is_content_node(source: Any) -> bool:
    """Check if a value looks like a content node (has a ``content`` entry)."""
    if isinstance(source, Mapping):
        return 'content' in source
    return hasattr(source, 'content')


class ContentNodeVertex(DefinedObjectVertex):
    """Traverses through the content and children of a content node."""

    def __init__(self, source: Any):
        super().__init__(source, ['content', 'children'])


def get_valid_content_node_vertex(source: Any) -> Optional[ValueVertex]:
    """Vertex factory rule producing ContentNodeVertex for content nodes."""
    if is_content_node(source):
        return ContentNodeVertex(source)
    return None


class IndexedNodeVertex(ValueLookupVertex):
    """Traverses through a content node's children by child index."""

    def __init__(self, source: Any):
        super().__init__(source, ['children', KEY_ALIAS])


def get_valid_indexed_node_vertex(source: Any) -> Optional[ValueVertex]:
    """Vertex factory rule producing IndexedNodeVertex for content nodes."""
    if is_content_node(source):
        return IndexedNodeVertex(source)
    return None


class ContentCrawler(KeyCrawler):
    """Crawls through the children and contents of each node in a content tree."""

    def __init__(self, strategy: Optional[TraversalStrategy] = None):
        super().__init__(strategy, ValueVertexFactory([get_valid_content_node_vertex]))


class IndexedContentTreeCrawler(KeyCrawler):
    """Crawls through the children of each content node by the child's index.

    Routes produced by this crawler are lists of integers, one per level,
    once the top level collection has been entered.
    """

    def __init__(self, strategy: Optional[TraversalStrategy] = None):
        super().__init__(strategy, ValueVertexFactory([get_valid_indexed_node_vertex]))
