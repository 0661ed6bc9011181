"""Equality used to decide whether a write really changed a value.

Numbers follow same-value semantics: ``NaN`` equals ``NaN`` and ``0.0`` is
distinct from ``-0.0``. Mutable containers compare by identity first and then
one level deep, element by element.
"""

from __future__ import annotations

from collections.abc import Mapping
import math
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def is_same_value(left: Any, right: Any) -> bool:
    """Strict value identity for scalars, object identity for containers."""
    if _is_number(left) and _is_number(right):
        if isinstance(left, float) and isinstance(right, float):
            if math.isnan(left) and math.isnan(right):
                return True
        if left == 0 and right == 0:
            return math.copysign(1.0, left) == math.copysign(1.0, right)
        return left == right
    if left is right:
        return True
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    if _is_container(left) or _is_container(right):
        return False
    try:
        return bool(left == right)
    except Exception:  # noqa: BLE001 - foreign __eq__ implementations may raise.
        return False


def is_shallow_equal(left: Any, right: Any) -> bool:
    """Compare two values one level deep using :func:`is_same_value`."""
    if is_same_value(left, right):
        return True
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if len(left) != len(right):
            return False
        for key, value in left.items():
            if key not in right or not is_same_value(value, right[key]):
                return False
        return True
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if type(left) is not type(right) or len(left) != len(right):
            return False
        return all(is_same_value(a, b) for a, b in zip(left, right))
    return False
