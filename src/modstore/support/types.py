"""Structural type predicates and ordered iteration over lists and mappings."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
import inspect
from types import MethodType
from typing import Any


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_callable(value: Any) -> bool:
    # Classes are callable but never valid as getters, setters or handlers.
    return callable(value) and not isinstance(value, type)


def is_plain_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_list_like(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def iter_entries(source: Any) -> Iterator[tuple[Any, Any]]:
    """Yield ``(key, value)`` pairs in order.

    Lists and tuples yield ``(index, item)``; mappings yield their items in
    insertion order. Anything else yields nothing.
    """
    if is_list_like(source):
        yield from enumerate(source)
    elif is_plain_mapping(source):
        yield from source.items()


def find_index(items: list[Any], predicate: Callable[[Any], bool]) -> int:
    """Return the index of the first item matching ``predicate`` or ``-1``."""
    for index, item in enumerate(items):
        if predicate(item):
            return index
    return -1


def accepts_positional(func: Callable[..., Any], count: int, *, at_least: bool = False) -> bool:
    """Return True when ``func`` can be called with ``count`` positional arguments.

    With ``at_least`` the callable may require further arguments after them.

    Callables without an introspectable signature (some builtins) are assumed
    to be compatible.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        if at_least:
            signature.bind_partial(*([None] * count))
        else:
            signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


def same_callback(registered: Any, candidate: Any) -> bool:
    """Return True when two subscriber callbacks denote the same handler.

    Callbacks match by identity. Bound methods are recreated on every
    attribute access, so they match when they wrap the same function and
    the same receiver.
    """
    if registered is candidate:
        return True
    return isinstance(candidate, MethodType) and registered == candidate
