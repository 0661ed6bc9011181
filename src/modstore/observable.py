"""Dictionary that lets individual keys be intercepted by value cells.

State values that are mappings are stored as :class:`ObservableDict` so that a
nested path such as ``"profile.name"`` or ``"items[0].name"`` can be watched
the same way a top-level field is.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any

from .cell import Accessor


class ObservableDict(dict):
    """A ``dict`` whose keys can carry accessors.

    Reads and writes through ``[]``, ``get``, ``update`` and ``setdefault``
    route through an installed accessor when one exists; otherwise they hit
    the underlying storage directly. A key may carry an accessor before it is
    first assigned; it stays absent until then.
    """

    __slots__ = ("_accessors",)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__()
        self._accessors: dict[Any, Accessor] = {}
        for key, value in dict(*args, **kwargs).items():
            dict.__setitem__(self, key, to_observable(value))

    # -- field host protocol -------------------------------------------------

    def _get_accessor(self, key: Any) -> Accessor | None:
        accessor = self._accessors.get(key)
        if accessor is not None:
            return accessor
        if not dict.__contains__(self, key):
            return None
        return self._storage_accessor(key)

    def _set_accessor(self, key: Any, accessor: Accessor) -> None:
        self._accessors[key] = accessor

    def _storage_accessor(self, key: Any) -> Accessor:
        return Accessor(
            get=lambda: dict.get(self, key),
            set=lambda value: dict.__setitem__(self, key, to_observable(value)),
        )

    # -- dict surface --------------------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        accessor = self._accessors.get(key)
        if accessor is not None and dict.__contains__(self, key):
            return accessor.get() if accessor.get is not None else None
        return dict.__getitem__(self, key)

    def __setitem__(self, key: Any, value: Any) -> None:
        accessor = self._accessors.get(key)
        if accessor is None:
            dict.__setitem__(self, key, to_observable(value))
            return
        if not dict.__contains__(self, key):
            dict.__setitem__(self, key, None)
        if accessor.set is not None:
            accessor.set(value)

    def __delitem__(self, key: Any) -> None:
        # A watched key that is deleted and re-added starts as plain storage.
        self._accessors.pop(key, None)
        dict.__delitem__(self, key)

    def get(self, key: Any, default: Any = None) -> Any:
        if key in self:
            return self[key]
        return default

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def update(self, *args: Any, **kwargs: Any) -> None:
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def pop(self, key: Any, *default: Any) -> Any:
        self._accessors.pop(key, None)
        return dict.pop(self, key, *default)

    def clear(self) -> None:
        self._accessors.clear()
        dict.clear(self)

    def copy(self) -> ObservableDict:
        return ObservableDict(dict.copy(self))

    # Copies start without accessors; installed cells belong to the source.
    def __copy__(self) -> ObservableDict:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> ObservableDict:
        clone = ObservableDict()
        memo[id(self)] = clone
        for key, value in dict.items(self):
            dict.__setitem__(clone, deepcopy(key, memo), deepcopy(value, memo))
        return clone

    def __reduce__(self) -> tuple[Any, ...]:
        return (ObservableDict, (dict.copy(self),))

    def __repr__(self) -> str:
        return f"ObservableDict({dict.copy(self)!r})"


def to_observable(value: Any) -> Any:
    """Convert plain mappings (recursively) into :class:`ObservableDict`.

    Lists are converted in place so callers keep their reference; tuples are
    rebuilt only when one of their items changes.
    """
    if isinstance(value, ObservableDict):
        return value
    if isinstance(value, Mapping):
        return ObservableDict(value)
    if isinstance(value, list):
        for index, item in enumerate(value):
            converted = to_observable(item)
            if converted is not item:
                value[index] = converted
        return value
    if isinstance(value, tuple) and not hasattr(value, "_fields"):
        items = tuple(to_observable(item) for item in value)
        if any(new is not old for new, old in zip(items, value)):
            return items
    return value
