"""Deep path parsing and resolution.

Usage:
    to_path("user.tags[0]")          # ["user", "tags", "0"]
    to_path('a["b.c"]')              # ["a", "b.c"]
    get_path(root, "user.name", "?")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import re
from typing import Any

from .types import is_string

# Anything that isn't a dot or bracket, a bracketed expression or quoted
# string, or the empty gap between consecutive separators.
_PROP_NAME = re.compile(
    r"[^.\[\]]+"
    r"|\[(?:([^\"'][^\[]*)|([\"'])((?:(?!\2)[^\\]|\\.)*?)\2)\]"
    r"|(?=(?:\.|\[\])(?:\.|\[\]|$))"
)
_ESCAPE_CHAR = re.compile(r"\\(\\)?")
_DEEP_PROP = re.compile(r"\.|\[(?:[^\[\]]*|([\"'])(?:(?!\1)[^\\]|\\.)*?\1)\]")
_PLAIN_PROP = re.compile(r"^\w*$")

_MISSING = object()


def _string_to_path(value: str) -> list[str]:
    result: list[str] = []
    if value.startswith("."):
        result.append("")
    for match in _PROP_NAME.finditer(value):
        expression, quote, quoted = match.group(1, 2, 3)
        if quote:
            key = _ESCAPE_CHAR.sub(r"\1", quoted)
        elif expression:
            key = expression.strip()
        else:
            key = match.group(0)
        result.append(key)
    return result


def to_path(value: Any) -> list[str]:
    """Split a path string into segments; non-strings give ``[]``."""
    if not is_string(value):
        return []
    return _string_to_path(value)


def _is_key(value: str, root: Any) -> bool:
    if _PLAIN_PROP.match(value) or not _DEEP_PROP.search(value):
        return True
    return _lookup(root, value) is not _MISSING


def _lookup(container: Any, segment: Any) -> Any:
    """Return ``container[segment]`` or ``_MISSING`` when absent."""
    if isinstance(container, Mapping):
        try:
            return container[segment]
        except (KeyError, TypeError):
            return _MISSING
    if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
        try:
            return container[int(segment)]
        except (IndexError, TypeError, ValueError):
            return _MISSING
    if not is_string(segment) or not segment:
        return _MISSING
    return getattr(container, segment, _MISSING)


def get_path(root: Any, path: Any, default: Any = None) -> Any:
    """Resolve ``path`` against ``root``.

    ``None`` part-way along the path, a missing segment, or an empty path all
    resolve to ``default``. A ``None`` at the end of the path is returned
    as-is.
    """
    if root is None:
        return default
    if is_string(path):
        segments = [path] if _is_key(path, root) else _string_to_path(path)
    elif isinstance(path, (list, tuple)):
        segments = list(path)
    else:
        segments = [path]

    current = root
    index = 0
    while current is not None and current is not _MISSING and index < len(segments):
        current = _lookup(current, segments[index])
        index += 1

    if index and index == len(segments) and current is not _MISSING:
        return current
    return default
