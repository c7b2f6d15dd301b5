"""Testing utilities for KeyCrawler consumers."""

from .fixtures import (
    TraversalRecorder,
    make_sample_tree,
    make_content_tree,
    make_cyclic_tree,
)

__all__ = [
    'TraversalRecorder',
    'make_sample_tree',
    'make_content_tree',
    'make_cyclic_tree',
]
