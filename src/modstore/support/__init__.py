"""Generic helpers shared by the store core: predicates, equality and paths."""

from __future__ import annotations

from .equality import is_same_value, is_shallow_equal
from .paths import get_path, to_path
from .types import (
    accepts_positional,
    find_index,
    is_callable,
    is_plain_mapping,
    is_string,
    iter_entries,
    same_callback,
)

__all__ = [
    "accepts_positional",
    "find_index",
    "get_path",
    "is_callable",
    "is_plain_mapping",
    "is_same_value",
    "is_shallow_equal",
    "is_string",
    "iter_entries",
    "same_callback",
    "to_path",
]
