"""Route and state tracking for KeyCrawler traversals.

A route records how a value was reached from the traversal root: the key
used at each step, the vertex that produced each key and the value
reached at the end. The traversal state wraps the current route with the
bookkeeping a strategy needs (visited objects, completion and skip flags).
"""

from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Hashable, Iterator, List, Optional
from collections import deque

from .vertex import KeyValueVertex


@dataclass
class TraversalRoute:
    """Path from a root value to a target value.

    ``vertices[i]`` is the vertex of the value that ``path[i]`` was looked
    up on, so both lists always have the same length. A route with an
    empty path targets the root itself.

    Attributes:
        path: Key used for each transition
        vertices: Vertices passed through to reach the target
        target: Value reached at the end of the route
    """
    path: List[Hashable] = field(default_factory=list)
    vertices: List[KeyValueVertex] = field(default_factory=list)
    target: Any = None


def create_root_route(root: Any) -> TraversalRoute:
    """Create a route that targets the provided value.

    Args:
        root: Value the route initially targets

    Returns:
        Route with an empty path
    """
    return TraversalRoute(path=[], vertices=[], target=root)


def clone_route(source: TraversalRoute) -> TraversalRoute:
    """Copy a route with its own lists but referring to the same objects.

    Args:
        source: Route to be copied

    Returns:
        The new route
    """
    return TraversalRoute(
        path=list(source.path),
        vertices=list(source.vertices),
        target=source.target,
    )


def get_route_values(source: TraversalRoute) -> List[Any]:
    """Retrieve every value visited along a route, root first."""
    values = [vertex.value for vertex in source.vertices]
    values.append(source.target)
    return values


_MISSING = object()


class VisitedSet:
    """Identity based collection of the objects a traversal has visited.

    Membership is decided by ``is`` rather than equality so that equal but
    distinct objects are still visited separately. Objects are kept alive
    for the lifetime of the set, which keeps their ids stable.
    """

    def __init__(self):
        self._items: Dict[int, Any] = {}

    def add(self, item: Any) -> None:
        self._items[id(item)] = item

    def __contains__(self, item: Any) -> bool:
        return self._items.get(id(item), _MISSING) is item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def __repr__(self) -> str:
        return f"VisitedSet(size={len(self._items)})"


@dataclass
class TraversalState:
    """State of an ongoing or completed traversal.

    Attributes:
        route: Path from the root to the current value
        visited: Objects already visited, used to avoid circular references
        completed: Set to end the traversal; never reset once set
        skip_iteration: One-shot signal to skip the current value's keys
        route_queue: Routes waiting to be processed (breadth-first only)
    """
    route: TraversalRoute
    visited: VisitedSet = field(default_factory=VisitedSet)
    completed: bool = False
    skip_iteration: bool = False
    route_queue: Optional[Deque[TraversalRoute]] = None

    @property
    def depth(self) -> int:
        """Number of steps between the root and the current value."""
        return len(self.route.path)


def create_root_state(root: Any) -> TraversalState:
    """Create a fresh traversal state starting at the provided value.

    Args:
        root: Value the traversal initially targets

    Returns:
        New TraversalState
    """
    return TraversalState(route=create_root_route(root))


def create_route_queue(*routes: TraversalRoute) -> Deque[TraversalRoute]:
    """Create a queue for breadth-first traversal, seeded with routes."""
    return deque(routes)
