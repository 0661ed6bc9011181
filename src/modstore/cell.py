"""Reactive value cells and the accessor protocol they plug into.

A *field host* (a :class:`~modstore.store.Store` or an
:class:`~modstore.observable.ObservableDict`) keeps one :class:`Accessor` per
field. Installing a :class:`ValueCell` over an existing accessor wraps it: the
old get/set pair is preserved and the cell only adds change detection and a
notification callback.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import Any, Protocol

from .support.equality import is_shallow_equal

LOGGER = logging.getLogger(__name__)

Getter = Callable[[], Any]
Setter = Callable[[Any], None]
Notify = Callable[[Any], None]


@dataclass
class Accessor:
    """Read/write pair for one field of a host."""

    get: Getter | None = None
    set: Setter | None = None
    configurable: bool = True


class FieldHost(Protocol):
    def _get_accessor(self, key: str) -> Accessor | None: ...

    def _set_accessor(self, key: str, accessor: Accessor) -> None: ...


def is_field_host(value: Any) -> bool:
    return callable(getattr(value, "_get_accessor", None)) and callable(
        getattr(value, "_set_accessor", None)
    )


class ValueCell:
    """Observable value with optional preserved getter/setter.

    Writes equal to the current value (shallow, same-value semantics) are
    ignored. A preserved getter without a preserved setter makes the cell
    read-only. ``notify(old_value)`` runs once per applied write, after the
    value has changed.
    """

    __slots__ = ("_value", "_getter", "_setter", "_notify")

    def __init__(
        self,
        value: Any = None,
        notify: Notify | None = None,
        *,
        getter: Getter | None = None,
        setter: Setter | None = None,
    ) -> None:
        self._value = value
        self._notify = notify
        self._getter = getter
        self._setter = setter

    def get(self) -> Any:
        if self._getter is not None:
            return self._getter()
        return self._value

    def set(self, new_value: Any) -> None:
        old_value = self.get()
        if is_shallow_equal(new_value, old_value):
            return
        if self._getter is not None and self._setter is None:
            return
        if self._setter is not None:
            self._setter(new_value)
        else:
            self._value = new_value
        if self._notify is not None:
            self._notify(old_value)

    def as_accessor(self) -> Accessor:
        return Accessor(get=self.get, set=self.set, configurable=True)

    def __repr__(self) -> str:
        return f"ValueCell({self.get()!r})"


def install_cell(
    target: FieldHost,
    key: str,
    initial_value: Any = None,
    notify: Notify | None = None,
    *,
    coerce: Callable[[Any], Any] | None = None,
) -> ValueCell | None:
    """Intercept ``key`` on ``target`` with a :class:`ValueCell`.

    Returns the installed cell, or ``None`` when the existing accessor is not
    configurable. ``coerce`` converts values before they are stored in the
    cell's own slot; it is not applied when writes go to a preserved setter.
    """
    existing = target._get_accessor(key)
    if existing is not None and not existing.configurable:
        LOGGER.debug(
            "cell.install.skipped",
            extra={"event": "cell.install.skipped", "key": key},
        )
        return None

    getter = existing.get if existing is not None else None
    setter = existing.set if existing is not None else None
    cell: ValueCell
    if getter is None and setter is None and coerce is not None:
        cell = _CoercingCell(coerce(initial_value), notify, coerce)
    else:
        cell = ValueCell(initial_value, notify, getter=getter, setter=setter)
    target._set_accessor(key, cell.as_accessor())
    return cell


class _CoercingCell(ValueCell):
    """Cell that converts written values before storing them."""

    __slots__ = ("_coerce",)

    def __init__(self, value: Any, notify: Notify | None, coerce: Callable[[Any], Any]) -> None:
        super().__init__(value, notify)
        self._coerce = coerce

    def set(self, new_value: Any) -> None:
        old_value = self._value
        if is_shallow_equal(new_value, old_value):
            return
        self._value = self._coerce(new_value)
        if self._notify is not None:
            self._notify(old_value)
