"""Live store built from one module definition.

Usage:
    def inc(self, step=1):
        self.count += step

    counter = Store({"name": "counter", "state": {"count": 0}, "method": {"inc": inc}})
    counter.inc()
    counter.count  # 1

Fields are exposed as plain attributes. Each one is backed by an
:class:`~modstore.cell.Accessor`: getter/setter pairs and methods get a fixed
read-only accessor, state entries get a :class:`~modstore.cell.ValueCell`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import logging
from types import MethodType
from typing import Any

from .cell import Accessor, install_cell
from .definition import ModuleDefinition
from .diagnostics import DiagnosticSink, resolve_sink
from .events.bus import EventBus
from .exceptions import StoreClosedError
from .fields import FieldDeclaration, FieldKind, plan_fields
from .observable import to_observable
from .watch import WatchCallback, WatchRegistry

LOGGER = logging.getLogger(__name__)


class Store:
    """Composed state, getter/setter, method and event surface of one module."""

    __slots__ = (
        "_name",
        "_namespace",
        "_sink",
        "_fields",
        "_event_names",
        "_state_keys",
        "_events",
        "_watches",
        "_sealed",
    )

    def __init__(
        self,
        definition: ModuleDefinition | Mapping[str, Any],
        namespace: Any = None,
        *,
        sink: DiagnosticSink | None = None,
        reserved: Iterable[str] = (),
    ) -> None:
        if not isinstance(definition, ModuleDefinition):
            definition = ModuleDefinition.model_validate(definition)

        self._name = definition.name
        self._namespace = namespace
        self._sink = resolve_sink(sink)
        self._fields: dict[str, Accessor] = {}
        self._sealed = False

        self._event_names = frozenset(definition.event)
        self._events = EventBus(self._event_names, sink=self._sink, owner=self._name)

        plan = plan_fields(definition, STORE_API | frozenset(reserved), sink=self._sink)
        for declaration in plan.fields.values():
            self._install(declaration)
        self._state_keys = plan.names(FieldKind.STATE)

        self._watches = WatchRegistry(
            self, lambda: self._namespace, sink=self._sink, owner=self._name
        )
        LOGGER.debug(
            "store.created",
            extra={
                "event": "store.created",
                "store": self._name,
                "fields": list(self._fields),
            },
        )

    def _install(self, declaration: FieldDeclaration) -> None:
        if declaration.kind is FieldKind.ACCESSOR:
            getter, setter = declaration.getter, declaration.setter
            self._fields[declaration.name] = Accessor(
                get=(lambda: getter(self)) if getter is not None else None,
                set=(lambda value: setter(self, value)) if setter is not None else None,
                configurable=False,
            )
        elif declaration.kind is FieldKind.METHOD:
            method = declaration.method
            self._fields[declaration.name] = Accessor(
                get=lambda: MethodType(method, self), configurable=False
            )
        else:
            install_cell(self, declaration.name, declaration.initial, coerce=to_observable)

    # -- field host protocol -------------------------------------------------

    def _get_accessor(self, key: str) -> Accessor | None:
        return self._fields.get(key)

    def _set_accessor(self, key: str, accessor: Accessor) -> None:
        self._fields[key] = accessor

    def _seal(self) -> None:
        self._sealed = True

    # -- attribute access ----------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        accessor = self._fields.get(name)
        if accessor is None:
            raise AttributeError(f"Module ({self._name}) has no field {name!r}")
        return accessor.get() if accessor.get is not None else None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in Store.__slots__:
            object.__setattr__(self, name, value)
            return
        accessor = self._fields.get(name)
        if accessor is not None:
            # Fields without a setter are read-only; writes are dropped.
            if accessor.set is not None:
                accessor.set(value)
            return
        if self._sealed or name in STORE_API or name.startswith("_"):
            raise StoreClosedError(
                f"Module ({self._name}) is closed, cannot add field {name!r}"
            )
        install_cell(self, name, value, coerce=to_observable)

    def __delattr__(self, name: str) -> None:
        if self._sealed or name not in self._fields:
            raise StoreClosedError(f"Module ({self._name}) cannot remove field {name!r}")
        del self._fields[name]

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._fields))

    def __repr__(self) -> str:
        return f"Store(name={self._name!r}, fields={list(self._fields)!r})"

    # -- public surface ------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def namespace(self) -> Any:
        """Shared cross-module namespace, looked up at access time."""
        return self._namespace

    @property
    def event(self) -> frozenset[str]:
        return self._event_names

    @property
    def state(self) -> tuple[str, ...]:
        return self._state_keys

    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def on(self, name: str, callback: Callable[..., Any], context: Any = None) -> None:
        self._events.on(name, callback, context)

    def off(self, name: str, callback: Callable[..., Any] | None = None) -> None:
        self._events.off(name, callback)

    def emit(self, name: str, *args: Any) -> None:
        self._events.emit(name, *args)

    def watch(self, path: str, callback: WatchCallback, context: Any = None) -> None:
        """Call ``callback(new_value, old_value, namespace)`` when ``path`` changes.

        ``path`` is a field name or a nested path into a mapping state value,
        e.g. ``"profile.name"``. Writes of an equal value do not notify.
        Registering the same callback twice for one path has no effect.
        """
        self._watches.watch(path, callback, context)

    def unwatch(self, path: str, callback: WatchCallback | None = None) -> None:
        self._watches.unwatch(path, callback)

    def notify(self, path: str) -> None:
        """Re-deliver the current value of a watched path to its subscribers."""
        self._watches.notify(path)


STORE_API = frozenset(name for name in dir(Store) if not name.startswith("_"))
