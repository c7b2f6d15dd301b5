"""KeyCrawler facade.

The KeyCrawler pairs a traversal strategy with a vertex factory and offers
traversal, searching, structure mapping and route algebra on top of them.
All key lookups go through the configured factory, so raw traversal and
route manipulation always agree on what a value's children are.
"""

import logging
import math
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from ..config import CrawlerConfig, TraversalStrategy as StrategyName
from ..errors import ConfigurationError
from .factory import ValueVertexFactory
from .routes import (
    TraversalRoute,
    TraversalState,
    clone_route,
    create_root_route,
)
from .traverser import DepthFirstSearch, TraversalCallback, TraversalStrategy, create_strategy
from .vertex import is_object

logger = logging.getLogger(__name__)

SearchPredicate = Callable[[TraversalState], Any]
SetChildCallback = Callable[[Any, Hashable, Any], None]


@dataclass
class SearchResponse:
    """All matching routes found during a traversal.

    Attributes:
        state: Ending state of the traversal
        results: Snapshot of every matching route, in discovery order
    """
    state: TraversalState
    results: List[TraversalRoute] = field(default_factory=list)


def set_child_value(target: Any, key: Hashable, value: Any) -> None:
    """Default setter used when linking mapped children to their parent.

    Lists accept integer-like keys, growing as needed; non numeric keys are
    ignored. Mutable mappings use item assignment and other objects get an
    attribute for string keys. Immutable containers are left untouched.

    Args:
        target: Object to be modified
        key: Property name or index to use
        value: Value to assign
    """
    if isinstance(target, list):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return
        if index < 0:
            return
        if index >= len(target):
            target.extend([None] * (index + 1 - len(target)))
        target[index] = value
    elif isinstance(target, MutableMapping):
        target[key] = value
    elif isinstance(key, str) and hasattr(target, '__dict__'):
        setattr(target, key, value)


class KeyCrawler:
    """Performs graph traversals with a particular set of settings.

    Also provides transformations on the resulting routes: creating,
    extending and reverting them.

    Attributes:
        traversal_strategy: Approach used by traversal calls
        vertex_factory: Provides vertices during traversal and route extension
        max_results: Result cap used by searches that don't give their own
    """

    def __init__(self,
                 strategy: Optional[TraversalStrategy] = None,
                 converter: Optional[ValueVertexFactory] = None,
                 max_results: float = math.inf):
        """Initialize the crawler.

        Args:
            strategy: Strategy used for traversal (default preorder DFS)
            converter: Decides how vertices are created
            max_results: Default cap on search results
        """
        self.traversal_strategy = strategy if strategy is not None else DepthFirstSearch()
        self.vertex_factory = converter if converter is not None else ValueVertexFactory()
        self.max_results = max_results

    @classmethod
    def from_config(cls, config: CrawlerConfig) -> 'KeyCrawler':
        """Build a crawler from a validated configuration.

        Args:
            config: Crawler configuration

        Returns:
            New KeyCrawler

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        errors = config.validate()
        if errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}")
        if config.strategy == StrategyName.CUSTOM:
            strategy = config.custom_strategy
        else:
            strategy = create_strategy(config.strategy)
        return cls(strategy, ValueVertexFactory(config.object_rules), config.max_results)

    def traverse(self, root: Any, callback: TraversalCallback) -> TraversalState:
        """Visit every value connected to the root with the crawler's strategy.

        Args:
            root: Start point for the traversal
            callback: Function applied to each value visited

        Returns:
            Final traversal state
        """
        return self.traversal_strategy.traverse(root, callback, self.vertex_factory)

    def search(self,
               root: Any,
               predicate: SearchPredicate,
               max_results: Optional[float] = None) -> SearchResponse:
        """Find connected values matching a predicate.

        Args:
            root: Start point for the search
            predicate: Returns a truthy value for matching states
            max_results: Stop the traversal once this many matches are
                found (defaults to the crawler's max_results)

        Returns:
            Matching routes and the final traversal state
        """
        if max_results is None:
            max_results = self.max_results
        results: List[TraversalRoute] = []

        def collect(state: TraversalState) -> None:
            if predicate(state):
                results.append(clone_route(state.route))
                if len(results) >= max_results:
                    state.completed = True

        state = self.traversal_strategy.traverse(root, collect, self.vertex_factory)
        logger.debug("Search found %d result(s) after visiting %d object(s)",
                     len(results), len(state.visited))
        return SearchResponse(state=state, results=results)

    def map_value(self,
                  source: Any,
                  get_value_for: Callable[[TraversalState], Any],
                  add_child: SetChildCallback = set_child_value) -> Any:
        """Convert a value and its descendants to another structure.

        Each visited value is converted with ``get_value_for``; the result is
        attached to its parent's converted value through ``add_child`` as
        long as that converted parent is itself an object.

        Args:
            source: Value to be converted
            get_value_for: Conversion applied to each value visited
            add_child: Links a converted child to its converted parent

        Returns:
            The converted root value
        """
        # id(original) -> (original, converted); the original keeps the id valid
        converted: Dict[int, Tuple[Any, Any]] = {}

        def convert(state: TraversalState) -> None:
            route = state.route
            value = get_value_for(state)
            converted[id(route.target)] = (route.target, value)
            if not route.path or not route.vertices:
                return
            parent = converted.get(id(route.vertices[-1].value))
            if parent is None:
                return
            parent_value = parent[1]
            if is_object(parent_value):
                add_child(parent_value, route.path[-1], value)

        self.traversal_strategy.traverse(source, convert, self.vertex_factory)
        entry = converted.get(id(source))
        return entry[1] if entry is not None else None

    def create_route_from(self, root: Any, path: Sequence[Hashable]) -> TraversalRoute:
        """Build a route from a root value along the provided keys.

        Args:
            root: Value the route initially targets
            path: Key to use for each step

        Returns:
            The resulting route, possibly shorter than ``path``
        """
        route = create_root_route(root)
        self.extend_route(route, path)
        return route

    def extend_route(self, route: TraversalRoute, steps: Sequence[Hashable]) -> None:
        """Move further along a route using additional keys.

        Extension stops at the first value that can't be navigated; the
        remaining steps are dropped.

        Args:
            route: Route to be modified in place
            steps: Keys used to extend the route
        """
        for key in steps:
            if not is_object(route.target):
                break
            vertex = self.vertex_factory.create_vertex(route.target)
            if not vertex.is_keyed():
                break
            route.path.append(key)
            route.vertices.append(vertex)
            route.target = vertex.get_key_value(key)

    def extend_route_by_indices(self, route: TraversalRoute, indices: Sequence[int]) -> None:
        """Move further along a route using the position of each next key.

        Negative indices count from the end of the current value's keys.
        Extension stops at the first invalid index.

        Args:
            route: Route to be modified in place
            indices: Zero-based key positions for each step
        """
        for index in indices:
            if not is_object(route.target):
                break
            vertex = self.vertex_factory.create_vertex(route.target)
            if not vertex.is_keyed():
                break
            key = vertex.get_indexed_key(index)
            if key is None:
                break
            route.path.append(key)
            route.vertices.append(vertex)
            route.target = vertex.get_key_value(key)

    def revert_route(self, route: TraversalRoute, num_steps: int = 1) -> None:
        """Roll a route back a number of steps.

        The new target is the value of the vertex at the new end of the
        route. Since the root is never stored in a route, a route reverted
        past its first vertex ends up targeting None.

        Args:
            route: Route to be modified in place
            num_steps: How many steps to undo
        """
        if num_steps <= 0:
            return
        target_length = max(0, len(route.path) - num_steps)
        if len(route.vertices) > target_length:
            route.target = route.vertices[target_length].value
        else:
            route.target = None
        del route.path[target_length:]
        del route.vertices[target_length:]

    def get_subroute(self, route: TraversalRoute, steps: Sequence[Hashable]) -> TraversalRoute:
        """Copy a route and extend the copy with additional keys."""
        subroute = clone_route(route)
        self.extend_route(subroute, steps)
        return subroute

    def get_child_route(self, route: TraversalRoute, index: int) -> TraversalRoute:
        """Copy a route and extend the copy to the child at a key position.

        Usually used when navigating trees to get the first (0) or last (-1)
        branch of a node.
        """
        subroute = clone_route(route)
        self.extend_route_by_indices(subroute, [index])
        return subroute

    def get_parent_route(self, route: TraversalRoute, num_steps: int = 1) -> TraversalRoute:
        """Copy a route and revert the copy by a number of steps."""
        subroute = clone_route(route)
        self.revert_route(subroute, num_steps)
        return subroute

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(strategy={self.traversal_strategy!r}, "
                f"factory={self.vertex_factory!r})")
