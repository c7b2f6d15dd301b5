"""Configuration system for KeyCrawler.

This module defines how users describe the crawler they want: which
traversal strategy to use, which special-case vertex rules apply to
objects and how many search results to collect by default.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Union

from .errors import ConfigurationError


class SearchOrder(Enum):
    """When a depth-first search reports a value.

    PREORDER visits a value before its descendants, POSTORDER after them.
    """
    PREORDER = "preorder"
    POSTORDER = "postorder"


class TraversalStrategy(Enum):
    """How to traverse the value graph."""
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    CUSTOM = "custom"               # User-supplied strategy instance


# Names accepted wherever a strategy can be given as a string
STRATEGY_ALIASES = {
    'bfs': TraversalStrategy.BREADTH_FIRST,
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
    'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'preorder': TraversalStrategy.DEPTH_FIRST_PRE,
    'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
    'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
    'postorder': TraversalStrategy.DEPTH_FIRST_POST,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum.

    Args:
        strategy: Strategy as enum or one of STRATEGY_ALIASES (any case)

    Returns:
        TraversalStrategy enum value

    Raises:
        ConfigurationError: If the name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in STRATEGY_ALIASES:
        return STRATEGY_ALIASES[strategy_lower]

    raise ConfigurationError(
        f"Unknown traversal strategy: {strategy}. "
        f"Choose from: {', '.join(STRATEGY_ALIASES.keys())}"
    )


@dataclass
class CrawlerConfig:
    """Complete configuration for a KeyCrawler.

    Attributes:
        strategy: Traversal algorithm to use
        custom_strategy: Strategy instance, required when strategy is CUSTOM
        object_rules: Vertex factory rules for special object types, in
            order of descending priority
        max_results: Default cap on search results
    """

    strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST_PRE
    custom_strategy: Optional[Any] = None
    object_rules: List[Callable[[Any], Any]] = field(default_factory=list)
    max_results: float = math.inf

    @classmethod
    def depth_first(cls, object_rules: Optional[List[Callable[[Any], Any]]] = None) -> 'CrawlerConfig':
        """Create config for preorder depth-first crawling."""
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_PRE,
            object_rules=list(object_rules or []),
        )

    @classmethod
    def postorder(cls, object_rules: Optional[List[Callable[[Any], Any]]] = None) -> 'CrawlerConfig':
        """Create config for postorder depth-first crawling.

        Postorder is the natural fit for aggregation, since every value is
        reported after all of its descendants.
        """
        return cls(
            strategy=TraversalStrategy.DEPTH_FIRST_POST,
            object_rules=list(object_rules or []),
        )

    @classmethod
    def breadth_first(cls, object_rules: Optional[List[Callable[[Any], Any]]] = None) -> 'CrawlerConfig':
        """Create config for breadth-first crawling."""
        return cls(
            strategy=TraversalStrategy.BREADTH_FIRST,
            object_rules=list(object_rules or []),
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.strategy, TraversalStrategy):
            errors.append(f"strategy must be a TraversalStrategy, got {self.strategy!r}")

        if self.strategy == TraversalStrategy.CUSTOM and self.custom_strategy is None:
            errors.append("custom_strategy required when strategy is CUSTOM")

        if self.max_results is None or self.max_results < 1:
            errors.append("max_results must be at least 1")

        for rule in self.object_rules:
            if not callable(rule):
                errors.append(f"object rule {rule!r} is not callable")

        return errors
