"""Test fixtures for KeyCrawler consumers.

These fixtures provide sample value graphs and a callback recorder so
that projects building vertex rules or strategies on top of KeyCrawler
can verify traversal behaviour without hand-writing the bookkeeping.
"""

from typing import Any, Dict, Hashable, List, Tuple

from ..core.routes import TraversalState


def make_sample_tree() -> Dict[str, Any]:
    """Build a small three level tree of ``{"value", "children"}`` nodes.

    Preorder values: root, a, a1, a2, b, c, c1, c2, c3.
    """
    return {
        'value': 'root',
        'children': [
            {
                'value': 'a',
                'children': [
                    {'value': 'a1'},
                    {'value': 'a2'},
                ],
            },
            {'value': 'b'},
            {
                'value': 'c',
                'children': [
                    {'value': 'c1'},
                    {'value': 'c2'},
                    {'value': 'c3'},
                ],
            },
        ],
    }


def make_content_tree() -> List[Dict[str, Any]]:
    """Build a top level list of content nodes, two of them with children.

    Preorder index routes: [0], [1], [1, 0], [1, 1], [2], [2, 0], [2, 1].
    """
    return [
        {'content': 'A'},
        {
            'content': 'B',
            'children': [
                {'content': 'B1'},
                {'content': 'B2'},
            ],
        },
        {
            'content': 'C',
            'children': [
                {'content': 'C1'},
                {'content': 'C2'},
            ],
        },
    ]


def make_cyclic_tree() -> Dict[str, Any]:
    """Build a node whose children include the node itself."""
    node: Dict[str, Any] = {'value': 'loop', 'children': []}
    node['children'].append(node)
    return node


class TraversalRecorder:
    """Traversal callback that records what it was called with.

    Example:
        recorder = TraversalRecorder()
        DepthFirstSearch().traverse(tree, recorder)
        assert recorder.node_values() == ['root', 'a', ...]

    Attributes:
        paths: Route path at each call, as a tuple
        targets: Route target at each call
        skip_objects: Set skip_iteration whenever an object is visited
        stop_after: Set completed once this many calls were recorded
    """

    def __init__(self, skip_objects: bool = False, stop_after: int = 0):
        self.paths: List[Tuple[Hashable, ...]] = []
        self.targets: List[Any] = []
        self.skip_objects = skip_objects
        self.stop_after = stop_after

    def __call__(self, state: TraversalState) -> None:
        self.paths.append(tuple(state.route.path))
        self.targets.append(state.route.target)
        if self.skip_objects and isinstance(state.route.target, (dict, list)):
            state.skip_iteration = True
        if self.stop_after and len(self.targets) >= self.stop_after:
            state.completed = True

    def __len__(self) -> int:
        return len(self.targets)

    def node_values(self, key: str = 'value') -> List[Any]:
        """Return the ``key`` entry of every recorded dict that has one."""
        return [
            target[key] for target in self.targets
            if isinstance(target, dict) and key in target
        ]

    def primitive_values(self) -> List[Any]:
        """Return every recorded target that isn't a dict or list."""
        return [
            target for target in self.targets
            if not isinstance(target, (dict, list))
        ]

    def reset(self) -> None:
        """Forget everything recorded so far."""
        self.paths.clear()
        self.targets.clear()
