"""
Container capabilities shared by plain Python structures and pyrsistent
persistent structures.

The denormalization walker only reads and writes values through these helpers,
so it never needs to know which container discipline a given value follows:
plain dicts and lists are updated in place, ``PMap`` / ``PVector`` values are
updated by returning a new value.
"""

import copy
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Hashable, Iterator, Tuple

from cytoolz import get_in as _get_in
from pyrsistent import PMap, PVector

from denormalizer.core.types import Path

# Returned by get_in when nothing lives at the requested path. Distinct from
# None so that explicit nulls survive.
MISSING = object()


def is_persistent(value: Any) -> bool:
    return isinstance(value, (PMap, PVector))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    """True for array-like values. Strings and bytes are scalars here."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def get_in(container: Any, path: Path, default: Any = MISSING) -> Any:
    """
    Read the value at ``path`` inside ``container``.

    Works uniformly across dicts, lists, tuples, PMaps and PVectors. Any
    missing key, out of range index or non-container along the way yields
    ``default``.

    Examples:
        get_in({"a": [{"b": 1}]}, ["a", 0, "b"]) -> 1
        get_in(freeze({"a": {"b": 1}}), ["a", "b"]) -> 1
        get_in({"a": None}, ["a", "b"]) -> MISSING
    """
    return _get_in(list(path), container, default)


def set_in(container: Any, path: Path, value: Any) -> Any:
    """
    Set ``value`` at ``path`` and return the updated container.

    Plain containers are mutated and the same object is returned. Persistent
    containers are left untouched and a new container is returned. Mixed
    nesting (a plain dict inside a PMap, or the reverse) is handled level by
    level.

    Args:
        container: The container to update.
        path: Keys/indices leading to the slot. Every intermediate slot must exist.
        value: The value to store.

    Returns:
        The updated container.
    """
    if not path:
        return value
    key, rest = path[0], path[1:]
    if rest:
        value = set_in(container[key], rest, value)
    if is_persistent(container):
        return container.set(key, value)
    container[key] = value
    return container


def shallow_copy(value: Any) -> Any:
    """Copy a plain container one level deep. Persistent values are returned as is."""
    if is_persistent(value):
        return value
    return copy.copy(value)


def iter_items(container: Any) -> Iterator[Tuple[Hashable, Any]]:
    """Yield ``(key, item)`` pairs: indices for sequences, keys for mappings."""
    if is_mapping(container):
        return iter(container.items())
    return enumerate(container)


def map_items(container: Any, fn: Callable[[Hashable, Any], Any]) -> Any:
    """
    Apply ``fn(key, item)`` to every item and return a container of the same
    family: list stays list, tuple stays tuple, dict stays dict, PVector stays
    PVector and PMap stays PMap. The input container is not modified.
    """
    if is_persistent(container):
        evolver = container.evolver()
        for key, item in iter_items(container):
            evolver[key] = fn(key, item)
        return evolver.persistent()

    if isinstance(container, tuple):
        return tuple(fn(index, item) for index, item in enumerate(container))

    result = copy.copy(container)
    for key, item in iter_items(container):
        result[key] = fn(key, item)
    return result
