"""Search path resolution.

A search path is a list of terms where each term refers to a descendant
of whatever the previous term matched, e.g. ``[{"key": "id", "value":
"intro"}, 1]`` means "the second child of the node whose id is intro".
Terms are resolved by an ordered list of rules; the first rule that
claims a term handles it.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Hashable, List, Optional, Sequence, Union

from ..core.crawler import SearchResponse
from ..core.factory import ValueVertexFactory
from ..core.routes import TraversalState, VisitedSet, clone_route, create_root_state
from ..core.traverser import DepthFirstSearch
from ..core.vertex import is_array, is_object

logger = logging.getLogger(__name__)

SearchTerm = Union[Mapping, Hashable]
VisitCallback = Callable[[TraversalState], None]

# Returns True if the rule knows how to handle the term.
SearchTermCallback = Callable[[TraversalState, SearchTerm, VisitCallback], bool]

# Turns a term into a state check, or None if the term doesn't apply.
SearchCheckCallback = Callable[[SearchTerm], Optional[Callable[[TraversalState], bool]]]


class SearchPathResolver:
    """Finds routes to nodes matching a series of search terms.

    Attributes:
        term_rules: Callbacks used to resolve each term, in priority order
    """

    def __init__(self, term_rules: Optional[Sequence[SearchTermCallback]] = None):
        self.term_rules: List[SearchTermCallback] = list(term_rules or [])

    def resolve(self,
                context: Any,
                path: Sequence[SearchTerm],
                max_results: float = math.inf) -> SearchResponse:
        """Retrieve the routes of every node matching the search path.

        Args:
            context: Collection to search
            path: Search terms to apply, one per step
            max_results: Stop once this many matches are found

        Returns:
            Matching routes and the final search state
        """
        search = SearchResponse(state=create_root_state(context), results=[])
        self.extend_search(search, list(path), max_results)
        logger.debug("Resolved %d search term(s) to %d result(s)", len(path), len(search.results))
        return search

    def extend_search(self,
                      search: SearchResponse,
                      steps: Sequence[SearchTerm],
                      max_results: float = math.inf) -> None:
        """Resolve the remaining steps of a search path from the current state.

        Each term gets a fresh visited set so that nodes seen while matching
        an earlier term can still match a later one.
        """
        if not steps:
            return
        step = steps[0]
        substeps = steps[1:]

        def visit(state: TraversalState) -> None:
            if substeps:
                self.extend_search(search, substeps, max_results)
            else:
                search.results.append(clone_route(state.route))
                if len(search.results) >= max_results:
                    state.completed = True

        previously_visited = search.state.visited
        search.state.visited = VisitedSet()
        try:
            for rule in self.term_rules:
                if rule(search.state, step, visit):
                    break
            else:
                logger.debug("No search rule claimed term %r", step)
        finally:
            search.state.visited = previously_visited


class SearchTermCallbackFactory:
    """Generates search term rules.

    Attributes:
        vertex_factory: Provides vertices to traversal functions
        depth_first_search: Provides the underlying traversal
    """

    def __init__(self, vertex_factory: Optional[ValueVertexFactory] = None):
        self.vertex_factory = vertex_factory if vertex_factory is not None else ValueVertexFactory()
        self.depth_first_search = DepthFirstSearch()

    def get_search_callback(self,
                            get_check: SearchCheckCallback,
                            shallow: bool = False) -> SearchTermCallback:
        """Create a rule that searches the current node and its descendants.

        Every node passing the term's check is relayed to ``visit``.

        Args:
            get_check: Produces a state check when the term meets its criteria
            shallow: Don't search inside the descendants of a matching node

        Returns:
            SearchTermCallback
        """
        def search_callback(state: TraversalState,
                            term: SearchTerm,
                            visit: VisitCallback) -> bool:
            check = get_check(term)
            if check is None:
                return False

            def on_value(current: TraversalState) -> None:
                if check(current):
                    visit(current)
                    if shallow:
                        current.skip_iteration = True

            self.depth_first_search.extend_traversal(state, on_value, self.vertex_factory)
            return True

        return search_callback

    def get_key_callback(self) -> SearchTermCallback:
        """Create a rule that treats the term as a key, as per ``resolve_key``."""
        return self.resolve_key

    def resolve_key(self,
                    state: TraversalState,
                    term: SearchTerm,
                    visit: VisitCallback) -> bool:
        """Treat the term as a key into the current node's children.

        Any key the node defines is visited, even one holding None. The
        route is restored once ``visit`` returns, so enclosing searches
        carry on from where they were.

        Args:
            state: Current traversal state
            term: Search term to use
            visit: Called with the state positioned on the matching child

        Returns:
            True if the term is a valid key (not a mapping)
        """
        if isinstance(term, Mapping):
            return False
        route = state.route
        target = route.target
        if not is_object(target):
            return True
        vertex = self.vertex_factory.create_vertex(target)
        if not vertex.is_keyed():
            return True
        if vertex.get_key_index(term) is None:
            return True
        value = vertex.get_key_value(term)
        route.vertices.append(vertex)
        route.path.append(term)
        route.target = value
        visit(state)
        if not state.completed:
            route.vertices.pop()
            route.path.pop()
            route.target = target
        return True

    def get_property_item_at_callback(self, properties: Sequence[str]) -> SearchTermCallback:
        """Create a rule that treats integer terms as an index into a list property."""
        def item_at_callback(state: TraversalState,
                             term: SearchTerm,
                             visit: VisitCallback) -> bool:
            return self.resolve_property_item_at(properties, state, term, visit)

        return item_at_callback

    def resolve_property_item_at(self,
                                 properties: Sequence[str],
                                 state: TraversalState,
                                 term: SearchTerm,
                                 visit: VisitCallback) -> bool:
        """Visit the indexed item of the first list property found.

        Negative indices count from the end of the list, stopping at 0.
        Indices past the end still visit, with a None target.

        Args:
            properties: Property names to check for a list, in order
            state: Current traversal state
            term: Search term to use
            visit: Called with the state positioned on the item

        Returns:
            True if the rule applies
        """
        if not isinstance(term, int) or isinstance(term, bool):
            return False
        route = state.route
        target = route.target
        if not is_object(target) or is_array(target):
            return False
        for name in properties:
            if isinstance(target, Mapping):
                collection = target.get(name)
            else:
                collection = getattr(target, name, None)
            if not is_array(collection):
                continue
            index = term if term >= 0 else max(0, len(collection) + term)
            route.vertices.extend([
                self.vertex_factory.create_vertex(target),
                self.vertex_factory.create_vertex(collection),
            ])
            route.path.extend([name, index])
            route.target = collection[index] if index < len(collection) else None
            visit(state)
            if not state.completed:
                del route.vertices[-2:]
                del route.path[-2:]
                route.target = target
            return True
        return False


class PropertySearchFactory(SearchTermCallbackFactory):
    """Generates rules that search for nodes with a given property value."""

    def get_property_check_for(self, term: SearchTerm) -> Optional[Callable[[TraversalState], bool]]:
        """Create a property check if the term is a ``{"key", "value"}`` pair.

        Args:
            term: Search term to use

        Returns:
            State check, or None if the term isn't a key value pair
        """
        if not isinstance(term, Mapping) or 'key' not in term:
            return None
        key = str(term['key'])
        expected = term.get('value')

        def check(state: TraversalState) -> bool:
            target = state.route.target
            if isinstance(target, Mapping):
                return key in target and target[key] == expected
            if is_object(target) and not is_array(target):
                return hasattr(target, key) and getattr(target, key) == expected
            return False

        return check

    def get_property_search(self, shallow: bool = False) -> SearchTermCallback:
        """Create a rule relaying a match for each node with the term's property value."""
        return self.get_search_callback(self.get_property_check_for, shallow)
