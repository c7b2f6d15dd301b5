"""Exceptions raised by KeyCrawler.

Navigation itself never raises: missing keys and out of range indices
simply produce None targets or shorter routes. These exceptions cover
programmer errors and resource limits only.
"""

from typing import Optional


class KeyCrawlerError(Exception):
    """Base class for all KeyCrawler errors."""
    pass


class ConfigurationError(KeyCrawlerError, ValueError):
    """Raised when a crawler configuration is invalid."""
    pass


class TraversalDepthError(KeyCrawlerError, RecursionError):
    """Raised when a depth-first traversal nests deeper than the interpreter allows.

    Attributes:
        depth: Length of the route when the limit was hit, if known
    """

    def __init__(self, message: str, depth: Optional[int] = None):
        super().__init__(message)
        self.depth = depth
