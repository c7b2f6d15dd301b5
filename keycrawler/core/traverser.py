"""Traversal strategies for KeyCrawler.

Strategies implement the algorithms for walking every value reachable
from a root. They work with any ValueVertexFactory, making them universal
across value types. Both strategies report values through a callback that
receives the live TraversalState; callbacks steer the traversal by setting
``state.completed`` or ``state.skip_iteration``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from ..config import SearchOrder, TraversalStrategy as StrategyName, parse_strategy
from ..errors import ConfigurationError, TraversalDepthError
from .factory import ValueVertexFactory
from .routes import (
    TraversalRoute,
    TraversalState,
    create_root_state,
    create_route_queue,
)
from .vertex import is_object

logger = logging.getLogger(__name__)

TraversalCallback = Callable[[TraversalState], None]


class TraversalStrategy(ABC):
    """Abstract base class for traversal strategies.

    A strategy can start a traversal from scratch (``traverse``) or keep
    processing a state created elsewhere (``extend_traversal``), which is
    how nested searches reuse an outer traversal's route.
    """

    @abstractmethod
    def traverse(self,
                 root: Any,
                 callback: Optional[TraversalCallback] = None,
                 converter: Optional[ValueVertexFactory] = None) -> TraversalState:
        """Visit all values directly or indirectly connected to the root.

        Args:
            root: Start point for the traversal
            callback: Function applied to each value visited
            converter: Vertex factory used while traversing

        Returns:
            Final traversal state, always marked completed
        """
        pass

    @abstractmethod
    def extend_traversal(self,
                         state: TraversalState,
                         callback: Optional[TraversalCallback] = None,
                         converter: Optional[ValueVertexFactory] = None) -> None:
        """Continue processing an already initialized traversal state.

        Args:
            state: Traversal state to be processed
            callback: Function applied to each value visited
            converter: Vertex factory used while traversing
        """
        pass


class DepthFirstSearch(TraversalStrategy):
    """Depth-first traversal strategy.

    Recursively processes a value's descendants before moving on to its
    siblings. The ``order`` decides whether the callback runs before
    (preorder) or after (postorder) a value's descendants.

    A single route is shared by the whole traversal: keys are pushed when
    descending and popped when returning. Callbacks that keep a route must
    copy it first.
    """

    def __init__(self, order: SearchOrder = SearchOrder.PREORDER):
        self.order = order

    def traverse(self,
                 root: Any,
                 callback: Optional[TraversalCallback] = None,
                 converter: Optional[ValueVertexFactory] = None) -> TraversalState:
        state = create_root_state(root)
        self._run_guarded(state, lambda: self.extend_traversal(state, callback, converter))
        state.completed = True
        logger.debug("Depth-first traversal finished after visiting %d object(s)", len(state.visited))
        return state

    def extend_traversal(self,
                         state: TraversalState,
                         callback: Optional[TraversalCallback] = None,
                         converter: Optional[ValueVertexFactory] = None) -> None:
        if self.order == SearchOrder.PREORDER:
            self.extend_phased_traversal(state, callback, None, converter)
        else:
            self.extend_phased_traversal(state, None, callback, converter)

    def start_phased_traversal(self,
                               root: Any,
                               pre_iterate: Optional[TraversalCallback] = None,
                               post_iterate: Optional[TraversalCallback] = None,
                               converter: Optional[ValueVertexFactory] = None) -> TraversalState:
        """Traverse with separate callbacks before and after each value's descendants.

        Args:
            root: Start point for the traversal
            pre_iterate: Called when a value is first reached
            post_iterate: Called once all of a value's descendants are done
            converter: Vertex factory used while traversing

        Returns:
            Final traversal state, always marked completed
        """
        state = create_root_state(root)
        self._run_guarded(
            state,
            lambda: self.extend_phased_traversal(state, pre_iterate, post_iterate, converter),
        )
        state.completed = True
        return state

    def extend_phased_traversal(self,
                                state: TraversalState,
                                pre_iterate: Optional[TraversalCallback] = None,
                                post_iterate: Optional[TraversalCallback] = None,
                                converter: Optional[ValueVertexFactory] = None) -> None:
        """Process the state's current target and, recursively, its descendants.

        Already visited objects are skipped without any callback, which only
        cuts off that branch.
        """
        if state.completed:
            return
        if converter is None:
            converter = ValueVertexFactory()

        target = state.route.target
        if not is_object(target):
            if pre_iterate is not None:
                pre_iterate(state)
                if state.completed:
                    return
            if post_iterate is not None:
                post_iterate(state)
            return

        if target in state.visited:
            return
        state.visited.add(target)

        if pre_iterate is not None:
            pre_iterate(state)
            if state.completed:
                return

        if state.skip_iteration:
            state.skip_iteration = False
        else:
            vertex = converter.create_vertex(target)
            if vertex.is_keyed():
                route = state.route
                route.vertices.append(vertex)
                for key in vertex.key_provider:
                    route.path.append(key)
                    route.target = vertex.get_key_value(key)
                    self.extend_phased_traversal(state, pre_iterate, post_iterate, converter)
                    if state.completed:
                        return
                    route.path.pop()
                route.vertices.pop()
                route.target = target

        if post_iterate is not None:
            post_iterate(state)

    def _run_guarded(self, state: TraversalState, run: Callable[[], None]) -> None:
        try:
            run()
        except RecursionError as error:
            if isinstance(error, TraversalDepthError):
                raise
            depth = len(state.route.path)
            logger.warning("Depth-first traversal exceeded the recursion limit at depth %d", depth)
            raise TraversalDepthError(
                f"Value graph nests too deeply for depth-first traversal (depth {depth})",
                depth=depth,
            ) from error

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self.order.value})"


class BreadthFirstSearch(TraversalStrategy):
    """Breadth-first (level-order) traversal strategy.

    Processes every value a certain number of steps from the root before
    moving to the next layer. Pending routes wait in ``state.route_queue``;
    each one carries its own copy of the path since routes from different
    levels are interleaved.

    Reaching an already visited object ends the whole traversal, unlike
    DepthFirstSearch which only skips that branch.
    """

    def traverse(self,
                 root: Any,
                 callback: Optional[TraversalCallback] = None,
                 converter: Optional[ValueVertexFactory] = None) -> TraversalState:
        state = create_root_state(root)
        state.route_queue = create_route_queue(state.route)
        self.extend_traversal(state, callback, converter)
        state.completed = True
        logger.debug("Breadth-first traversal finished after visiting %d object(s)", len(state.visited))
        return state

    def extend_traversal(self,
                         state: TraversalState,
                         callback: Optional[TraversalCallback] = None,
                         converter: Optional[ValueVertexFactory] = None) -> None:
        if state.completed or state.route_queue is None:
            return
        if converter is None:
            converter = ValueVertexFactory()

        queue = state.route_queue
        while queue:
            state.route = queue.popleft()
            target = state.route.target
            if not is_object(target):
                if callback is not None:
                    callback(state)
                    if state.completed:
                        return
                continue

            if target in state.visited:
                logger.debug("Breadth-first traversal stopped at repeated object %r", state.route.path)
                return
            state.visited.add(target)

            if callback is not None:
                callback(state)
                if state.completed:
                    return

            if state.skip_iteration:
                state.skip_iteration = False
                continue

            vertex = converter.create_vertex(target)
            if not vertex.is_keyed():
                continue
            for key in vertex.key_provider:
                subroute = TraversalRoute(
                    path=list(state.route.path),
                    vertices=list(state.route.vertices),
                    target=vertex.get_key_value(key),
                )
                subroute.path.append(key)
                subroute.vertices.append(vertex)
                queue.append(subroute)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def create_strategy(strategy: Union[StrategyName, str]) -> TraversalStrategy:
    """Create a strategy instance by name.

    Args:
        strategy: TraversalStrategy value or one of its aliases
            (bfs, dfs_pre, dfs_post, preorder, postorder, ...)

    Returns:
        TraversalStrategy instance

    Raises:
        ConfigurationError: If the strategy name is not recognized or
            names a custom strategy, which has no built-in implementation
    """
    name = parse_strategy(strategy)
    if name == StrategyName.BREADTH_FIRST:
        return BreadthFirstSearch()
    if name == StrategyName.DEPTH_FIRST_PRE:
        return DepthFirstSearch()
    if name == StrategyName.DEPTH_FIRST_POST:
        return DepthFirstSearch(SearchOrder.POSTORDER)
    raise ConfigurationError(f"No built-in traversal strategy for {name.value!r}")
