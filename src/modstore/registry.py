"""Assemble stores into one shared, cross-referenceable namespace.

Usage:
    namespace = init_store([
        {"name": "counter", "state": {"count": 0}, "method": {"inc": inc}},
        {"name": "audit", "state": {"log": []}},
    ])
    namespace.counter.inc()
    namespace["audit"].log

Every store holds the namespace object itself, not a snapshot, so a store
built early can reach modules registered after it once construction is done.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
from typing import Any

from pydantic import ValidationError

from .config import Config, StoreConfig
from .definition import ModuleDefinition, has_name, raw_name
from .diagnostics import DiagnosticSink, resolve_sink
from .store import Store
from .support.types import iter_entries

LOGGER = logging.getLogger(__name__)


class Namespace(Mapping[str, Store]):
    """Read-only mapping of module name to store, with attribute access."""

    __slots__ = ("_stores",)

    def __init__(self) -> None:
        object.__setattr__(self, "_stores", {})

    def _register(self, name: str, store: Store) -> None:
        self._stores[name] = store

    def __getitem__(self, name: str) -> Store:
        return self._stores[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._stores)

    def __len__(self) -> int:
        return len(self._stores)

    def __getattr__(self, name: str) -> Store:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._stores[name]
        except KeyError:
            raise AttributeError(f"No module named {name!r} in namespace") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError("Namespace is read-only; register modules through init_store().")

    def __delattr__(self, name: str) -> None:
        raise TypeError("Namespace is read-only.")

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._stores))

    def __repr__(self) -> str:
        return f"Namespace({list(self._stores)!r})"


def _store_config(config: Config | Mapping[str, Any] | None) -> StoreConfig:
    if config is None:
        return StoreConfig()
    if isinstance(config, Config):
        return config.store
    return StoreConfig.model_validate(config.get("store", {}))


class ModuleRegistry:
    """Build stores from module definitions in caller order.

    Definitions without a name, with a name already registered, or with an
    invalid shape are skipped with a diagnostic.
    """

    def __init__(
        self,
        sink: DiagnosticSink | None = None,
        config: Config | Mapping[str, Any] | None = None,
    ) -> None:
        self._config = _store_config(config)
        self._sink = resolve_sink(sink, level=self._config.diagnostic_level)
        self.namespace = Namespace()

    def init(self, definitions: Any) -> Namespace:
        for position, raw in iter_entries(definitions):
            self.register(raw, position)
        return self.namespace

    def register(self, raw: Any, position: Any = None) -> Store | None:
        if not has_name(raw):
            self._sink(f"Module registration failed ({position}), missing required field: name")
            return None
        name = raw_name(raw)
        if isinstance(name, str) and name in self.namespace:
            self._sink(f"Module registration failed, duplicate module name: name={name}")
            return None

        try:
            definition = (
                raw if isinstance(raw, ModuleDefinition) else ModuleDefinition.model_validate(raw)
            )
        except ValidationError as exc:
            self._sink(f"Module registration failed ({position}), invalid definition: {exc}")
            return None
        if definition.name in self.namespace:
            self._sink(
                f"Module registration failed, duplicate module name: name={definition.name}"
            )
            return None

        store = Store(
            definition,
            self.namespace,
            sink=self._sink,
            reserved=self._config.extra_reserved_keywords,
        )
        self.namespace._register(definition.name, store)
        if self._config.seal_stores:
            store._seal()
        LOGGER.info(
            "registry.module.registered",
            extra={"event": "registry.module.registered", "store": definition.name},
        )
        return store


def init_store(
    definitions: Any,
    *,
    sink: DiagnosticSink | None = None,
    config: Config | Mapping[str, Any] | None = None,
) -> Namespace:
    """Build every module in ``definitions`` and return the shared namespace.

    ``definitions`` is a list of module definitions or a mapping whose values
    are module definitions; its order decides which duplicate wins.
    """
    return ModuleRegistry(sink=sink, config=config).init(definitions)
