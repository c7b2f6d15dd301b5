"""Linear navigation through content trees.

Lets callers step forwards and backwards through a tree as though it had
been flattened by a preorder depth-first traversal, the order pages are
read in.
"""

from typing import Any, Hashable, Optional

from ..core.crawler import KeyCrawler
from ..core.routes import TraversalRoute, clone_route


def _as_index(key: Hashable) -> Optional[int]:
    if isinstance(key, bool):
        return None
    try:
        return int(key)
    except (TypeError, ValueError):
        return None


class LinearTreeNavigator:
    """Moves between tree nodes in preorder depth-first order.

    Attributes:
        crawler: Key crawler that decides what a node's children are
    """

    def __init__(self, crawler: KeyCrawler):
        self.crawler = crawler

    def get_first_node_route(self, source: Any) -> TraversalRoute:
        """Get the route to the first item of the top level collection."""
        return self.crawler.create_route_from(source, [0])

    def get_last_node_route(self, source: Any) -> TraversalRoute:
        """Get the route to the last node a preorder traversal would visit."""
        route = self.crawler.create_route_from(source, [])
        self.go_to_last_descendant(route)
        return route

    def go_to_next_node(self, route: TraversalRoute) -> None:
        """Advance a route to the next node in preorder.

        Tries the first child, then the next sibling, then the next sibling
        of each ancestor in turn. Past the last node the route ends up with
        an empty path and a None target.

        Args:
            route: Route to be modified in place
        """
        initial_depth = len(route.path)
        self.crawler.extend_route_by_indices(route, [0])
        if len(route.path) > initial_depth:
            return

        while route.path:
            last = len(route.path) - 1
            vertex = route.vertices[last] if last < len(route.vertices) else None
            if vertex is None or not vertex.is_keyed():
                break
            child_index = _as_index(route.path[last])
            if child_index is None:
                break
            sibling_key = vertex.get_indexed_key(child_index + 1)
            if sibling_key is not None:
                route.target = vertex.get_key_value(sibling_key)
                if route.target is not None:
                    route.path[last] = sibling_key
                    return
            # No sibling left, so check the parent's siblings next
            self.crawler.revert_route(route)

        route.target = None

    def get_next_node_route(self, route: TraversalRoute) -> TraversalRoute:
        """Get a copy of the route advanced to the next node."""
        cloned = clone_route(route)
        self.go_to_next_node(cloned)
        return cloned

    def go_to_previous_node(self, route: TraversalRoute) -> None:
        """Move a route back to the previous node in preorder.

        A first child steps up to its parent; any other node steps to the
        last descendant of its previous sibling. Reverting past the first
        node leaves an empty path and a None target.

        Args:
            route: Route to be modified in place
        """
        if not route.path:
            return
        last_index = _as_index(route.path[-1])
        if last_index is None:
            return
        if last_index == 0:
            self.crawler.revert_route(route)
            if not route.path:
                route.target = None
        else:
            self.crawler.revert_route(route)
            self.crawler.extend_route(route, [last_index - 1])
            self.go_to_last_descendant(route)

    def get_previous_node_route(self, route: TraversalRoute) -> TraversalRoute:
        """Get a copy of the route moved back to the previous node."""
        cloned = clone_route(route)
        self.go_to_previous_node(cloned)
        return cloned

    def go_to_last_descendant(self, route: TraversalRoute) -> None:
        """Advance a route to the last node within its current node."""
        while True:
            prior_depth = len(route.path)
            self.crawler.extend_route_by_indices(route, [-1])
            if len(route.path) <= prior_depth:
                break
