"""High-level API for KeyCrawler.

This module provides simple, functional interfaces for common crawling
operations. These functions wrap the object-oriented KeyCrawler API for
ease of use in simple cases.
"""

import math
from typing import Any, Callable, Hashable, Iterator, List, Optional, Sequence, Tuple, Union

from .config import CrawlerConfig, TraversalStrategy, parse_strategy
from .core.crawler import KeyCrawler, set_child_value
from .core.routes import TraversalRoute, TraversalState
from .core.traverser import TraversalStrategy as StrategyBase

StrategyArg = Union[TraversalStrategy, str, StrategyBase]
ObjectRule = Callable[[Any], Any]


def traverse_values(
    root: Any,
    strategy: StrategyArg = TraversalStrategy.DEPTH_FIRST_PRE,
    object_rules: Optional[Sequence[ObjectRule]] = None,
) -> Iterator[Tuple[Tuple[Hashable, ...], Any]]:
    """Simple interface for visiting every value connected to a root.

    The traversal runs to completion before the first item is yielded, so
    modifying the structure while iterating is safe.

    Args:
        root: Start point for the traversal
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, or an instance)
        object_rules: Vertex factory rules for special object types

    Yields:
        Tuples of (path, value), the path being the keys from the root

    Example:
        >>> for path, value in traverse_values({'a': [1, 2]}):
        ...     print(path, value)
    """
    visited: List[Tuple[Tuple[Hashable, ...], Any]] = []

    def record(state: TraversalState) -> None:
        visited.append((tuple(state.route.path), state.route.target))

    _build_crawler(strategy, object_rules).traverse(root, record)
    yield from visited


def collect_values(
    root: Any,
    predicate: Optional[Callable[[Any], bool]] = None,
    **kwargs
) -> List[Any]:
    """Collect connected values, optionally only those matching a predicate.

    Args:
        root: Start point for the traversal
        predicate: Called with each value; values returning False are left out
        **kwargs: Traversal options (see traverse_values)

    Returns:
        Values in visiting order

    Example:
        >>> collect_values({'a': 1, 'b': [2, 3]}, lambda v: isinstance(v, int))
        [1, 2, 3]
    """
    return [
        value for _, value in traverse_values(root, **kwargs)
        if predicate is None or predicate(value)
    ]


def find_routes(
    root: Any,
    predicate: Callable[[Any], bool],
    max_results: Optional[float] = None,
    strategy: StrategyArg = TraversalStrategy.DEPTH_FIRST_PRE,
    object_rules: Optional[Sequence[ObjectRule]] = None,
) -> List[TraversalRoute]:
    """Find routes to every value matching a predicate.

    Args:
        root: Start point for the search
        predicate: Called with each value; True marks a match
        max_results: Stop once this many matches are found
        strategy: Traversal strategy (see traverse_values)
        object_rules: Vertex factory rules for special object types

    Returns:
        Matching routes in discovery order

    Example:
        >>> routes = find_routes({'a': {'b': 'x'}}, lambda v: v == 'x')
        >>> routes[0].path
        ['a', 'b']
    """
    crawler = _build_crawler(strategy, object_rules)
    limit = math.inf if max_results is None else max_results
    response = crawler.search(root, lambda state: predicate(state.route.target), limit)
    return response.results


def find_first_route(
    root: Any,
    predicate: Callable[[Any], bool],
    **kwargs
) -> Optional[TraversalRoute]:
    """Find the route to the first value matching a predicate.

    Args:
        root: Start point for the search
        predicate: Called with each value; True marks a match
        **kwargs: Traversal options (see find_routes)

    Returns:
        The first matching route, or None if nothing matched
    """
    kwargs['max_results'] = 1
    results = find_routes(root, predicate, **kwargs)
    return results[0] if results else None


def map_value(
    source: Any,
    convert: Callable[[Any], Any],
    add_child: Callable[[Any, Hashable, Any], None] = set_child_value,
    object_rules: Optional[Sequence[ObjectRule]] = None,
) -> Any:
    """Convert a value and everything connected to it.

    Args:
        source: Value to be converted
        convert: Called with each original value, returns its replacement
        add_child: Links a converted child to its converted parent
        object_rules: Vertex factory rules for special object types

    Returns:
        The converted source

    Example:
        >>> map_value({'a': [1, 2]}, lambda v: {} if isinstance(v, dict) else
        ...           [] if isinstance(v, list) else v * 10)
        {'a': [10, 20]}
    """
    crawler = _build_crawler(TraversalStrategy.DEPTH_FIRST_PRE, object_rules)
    return crawler.map_value(source, lambda state: convert(state.route.target), add_child)


def get_value_at(
    root: Any,
    path: Sequence[Hashable],
    default: Any = None,
    object_rules: Optional[Sequence[ObjectRule]] = None,
) -> Any:
    """Look up the value at the end of a key path.

    Args:
        root: Value the path starts from
        path: Keys to follow
        default: Returned when the path can't be followed to the end
        object_rules: Vertex factory rules for special object types

    Returns:
        The value reached, or default

    Example:
        >>> get_value_at({'a': [{'b': 1}]}, ['a', 0, 'b'])
        1
    """
    crawler = _build_crawler(TraversalStrategy.DEPTH_FIRST_PRE, object_rules)
    route = crawler.create_route_from(root, path)
    if len(route.path) < len(path) or route.target is None:
        return default
    return route.target


def count_values(root: Any, **kwargs) -> int:
    """Count the values connected to a root, the root included.

    Args:
        root: Start point for the traversal
        **kwargs: Traversal options (see traverse_values)

    Returns:
        Number of values visited
    """
    count = 0
    for _ in traverse_values(root, **kwargs):
        count += 1
    return count


# Helper functions

def _build_crawler(strategy: StrategyArg,
                   object_rules: Optional[Sequence[ObjectRule]]) -> KeyCrawler:
    """Build a KeyCrawler from functional API arguments."""
    if isinstance(strategy, StrategyBase):
        config = CrawlerConfig(strategy=TraversalStrategy.CUSTOM, custom_strategy=strategy)
    else:
        config = CrawlerConfig(strategy=parse_strategy(strategy))
    config.object_rules = list(object_rules or [])
    return KeyCrawler.from_config(config)
