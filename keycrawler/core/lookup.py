"""Indirect access vertices for KeyCrawler.

Some structures don't store their children directly: a tree node might
keep them under ``node["children"]``, a mapping type might only expose
them through ``get`` and a DOM node through ``childNodes``. The vertices
here derive their keys by walking a *path template*, a list of lookup
steps where one step (or call argument) is a placeholder for the key.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Hashable,
    Iterator,
    List,
    Optional,
    Sequence,
    Union,
)

from .vertex import KeyValueVertex, ValueVertex, is_array, is_object

# Upper bound when probing call requests for keys.
MAX_PROBED_KEYS = 2 ** 31

KEY_ALIAS = "$key"


@dataclass
class PropertyCallRequest:
    """Describes a call to a named method of the looked up object.

    Attributes:
        name: Attribute name of the method to be executed
        args: Positional arguments to pass when the method is executed
    """
    name: str
    args: List[Any] = field(default_factory=list)


PropertyLookupStep = Union[Hashable, PropertyCallRequest]


@dataclass
class KeyedPathResult:
    """Pairs an extracted property path with the key it refers to."""
    key: Hashable
    path: List[PropertyLookupStep]


def execute_property_call(context: Any, request: PropertyCallRequest) -> Optional[Any]:
    """Call a named method of an object.

    Args:
        context: Object whose method should be called
        request: Method name and arguments

    Returns:
        The call's result, or None if the object has no such method or
        the call found nothing at the requested key or index
    """
    method = getattr(context, request.name, None)
    if not callable(method):
        return None
    try:
        return method(*request.args)
    except LookupError:
        return None


def resolve_property_request(source: Any, request: PropertyLookupStep) -> Optional[Any]:
    """Get a property value or call an accessor to retrieve one.

    Mappings are looked up by key, lists and tuples by integer index and
    other objects by attribute name.

    Args:
        source: Object to get the value from
        request: Property name/index or a call request

    Returns:
        The retrieved value, or None if the request doesn't apply
    """
    if isinstance(request, PropertyCallRequest):
        return execute_property_call(source, request)
    if isinstance(source, Mapping):
        try:
            return source.get(request)
        except TypeError:
            return None
    if is_array(source):
        if isinstance(request, int) and 0 <= request < len(source):
            return source[request]
        return None
    if isinstance(request, str):
        return getattr(source, request, None)
    return None


def resolve_property_lookup(source: Any, steps: Sequence[PropertyLookupStep]) -> Optional[Any]:
    """Get a nested property value by applying each lookup step in turn.

    Args:
        source: Object to start the lookup from
        steps: Steps to perform as we move into the object's contents

    Returns:
        The retrieved value, or None if any intermediate value is missing
        or can't hold properties
    """
    if not steps:
        return source
    target = source
    for step in steps[:-1]:
        value = resolve_property_request(target, step)
        if not is_object(value):
            return None
        target = value
    return resolve_property_request(target, steps[-1])


CreateIteratorCallback = Callable[[Any], Iterator[Hashable]]


class ValueLookupVertex(KeyValueVertex):
    """Vertex for values whose children sit behind a nested property path.

    A typical example is a tree node whose branches are stored in its
    ``children`` property: ``ValueLookupVertex(node, ["children", "$key"])``.

    Attributes:
        path_template: Lookup steps with the key alias marking the key
        key_alias: Value treated as a key reference inside the template
    """

    def __init__(self,
                 value: Any,
                 path: Sequence[PropertyLookupStep],
                 alias: str = KEY_ALIAS,
                 callback: Optional[CreateIteratorCallback] = None):
        """Initialize the vertex.

        Args:
            value: Value to be wrapped
            path: Path template used to reach each key's value
            alias: Placeholder standing in for the key within the template
            callback: Optional function producing a key iterator for the
                value; by default keys are inferred from the template
        """
        super().__init__(value)
        self.path_template: List[PropertyLookupStep] = list(path)
        self.key_alias = alias
        self._key_callback = callback

    def create_key_iterator(self) -> Iterator[Hashable]:
        if self._key_callback is not None:
            return self._key_callback(self._value)
        return self.create_default_key_iterator()

    def create_default_key_iterator(self) -> Iterator[Hashable]:
        """Infer keys by walking the path template.

        Works best when the key reference is a step of its own. When the key
        is a call argument, keys are probed by counting up from 0 until the
        call returns None.
        """
        if not is_object(self._value):
            return
        target = self._value
        for step in self.path_template:
            if isinstance(step, PropertyCallRequest):
                if self.key_alias in step.args:
                    key_position = step.args.index(self.key_alias)
                    probe = PropertyCallRequest(step.name, list(step.args))
                    for index in range(MAX_PROBED_KEYS):
                        probe.args[key_position] = index
                        if execute_property_call(target, probe) is None:
                            return
                        yield index
                    return
                value = execute_property_call(target, step)
            else:
                if step == self.key_alias:
                    if is_array(target):
                        yield from range(len(target))
                    elif isinstance(target, Mapping):
                        yield from list(target.keys())
                    else:
                        try:
                            yield from list(vars(target).keys())
                        except TypeError:
                            pass
                    return
                value = resolve_property_request(target, step)
            if not is_object(value):
                return
            target = value

    def get_key_value(self, key: Hashable) -> Optional[Any]:
        if not is_object(self._value):
            return None
        return resolve_property_lookup(self._value, self.get_value_path(key))

    def get_value_path(self, key: Hashable) -> List[PropertyLookupStep]:
        """Generate the full lookup path for a key from the template.

        Args:
            key: Key to substitute for the alias

        Returns:
            Lookup steps leading to the key's value
        """
        path: List[PropertyLookupStep] = []
        for step in self.path_template:
            if isinstance(step, PropertyCallRequest):
                args = [key if arg == self.key_alias else arg for arg in step.args]
                path.append(PropertyCallRequest(step.name, args))
            else:
                path.append(key if step == self.key_alias else step)
        return path

    def validate_value_path(self,
                            source: Sequence[PropertyLookupStep],
                            start_position: int = 0) -> Optional[KeyedPathResult]:
        """Check if a property path matches the template at a given position.

        Args:
            source: Path to be evaluated
            start_position: Index within the path to start the comparison

        Returns:
            The matching subpath and its key, or None if there's no match
        """
        key: Optional[Hashable] = None
        path: List[PropertyLookupStep] = []
        for offset, step in enumerate(self.path_template):
            position = start_position + offset
            if position >= len(source):
                return None
            source_step = source[position]
            if isinstance(step, PropertyCallRequest):
                if (not isinstance(source_step, PropertyCallRequest)
                        or source_step.name != step.name):
                    return None
                for arg_index, arg in enumerate(step.args):
                    if arg != self.key_alias:
                        continue
                    if arg_index >= len(source_step.args):
                        return None
                    source_arg = source_step.args[arg_index]
                    if not isinstance(source_arg, (str, int)):
                        return None
                    if key is None:
                        key = source_arg
                    elif source_arg != key:
                        return None
            elif step == self.key_alias:
                if isinstance(source_step, PropertyCallRequest):
                    return None
                if key is None:
                    key = source_step
                elif source_step != key:
                    return None
            elif isinstance(source_step, PropertyCallRequest) or source_step != step:
                return None
            path.append(source_step)
        if key is None:
            return None
        return KeyedPathResult(key=key, path=path)


def expand_nested_value_path(vertices: Sequence[ValueVertex],
                             keys: Sequence[Hashable]) -> Optional[List[PropertyLookupStep]]:
    """Convert a vertex key path into a full property lookup path.

    Args:
        vertices: Vertices that produced each key
        keys: Key path to be expanded

    Returns:
        The resulting property path, or None if a vertex is missing
    """
    results: List[PropertyLookupStep] = []
    for index, key in enumerate(keys):
        if index >= len(vertices) or vertices[index] is None:
            return None
        vertex = vertices[index]
        if isinstance(vertex, ValueLookupVertex):
            results.extend(vertex.get_value_path(key))
        else:
            results.append(key)
    return results


def collapse_nested_value_path(vertices: Sequence[ValueVertex],
                               path: Sequence[PropertyLookupStep]) -> Optional[List[Hashable]]:
    """Work out the keys that were used to build a full property lookup path.

    Args:
        vertices: Vertices that produced each key
        path: Property path to be evaluated

    Returns:
        The expected keys, or None if the path doesn't fit the vertices
    """
    results: List[Hashable] = []
    position = 0
    for vertex in vertices:
        if isinstance(vertex, ValueLookupVertex):
            validation = vertex.validate_value_path(path, position)
            if validation is None:
                return None
            results.append(validation.key)
            position += len(validation.path)
        else:
            if position >= len(path):
                return None
            step = path[position]
            if isinstance(step, PropertyCallRequest):
                return None
            results.append(step)
            position += 1
    return results


def _iterate_mapping_keys(value: Mapping) -> Iterator[Hashable]:
    yield from list(value.keys())


class MapVertex(ValueLookupVertex):
    """Key value handling for mappings, through their ``get`` method."""

    def __init__(self, value: Mapping):
        super().__init__(
            value,
            [PropertyCallRequest("get", [KEY_ALIAS])],
            KEY_ALIAS,
            _iterate_mapping_keys,
        )

    def get_key_value(self, key: Hashable) -> Optional[Any]:
        try:
            return self._value.get(key)
        except TypeError:
            return None


def _iterate_child_node_indices(value: Any) -> Iterator[int]:
    yield from range(len(value.childNodes))


class DOMNodeVertex(ValueLookupVertex):
    """Key value handling for ``xml.dom`` nodes, keyed by child node index."""

    def __init__(self, value: Any):
        super().__init__(
            value,
            ["childNodes", KEY_ALIAS],
            KEY_ALIAS,
            _iterate_child_node_indices,
        )

    def get_key_value(self, key: Hashable) -> Optional[Any]:
        try:
            index = int(key)
        except (TypeError, ValueError):
            return None
        child_nodes = self._value.childNodes
        if 0 <= index < len(child_nodes):
            return child_nodes[index]
        return None
