"""Top-level package for modstore, an in-process reactive module store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .cell import ValueCell
    from .config import load_config
    from .definition import ModuleDefinition
    from .diagnostics import DiagnosticSink, LoggingSink
    from .exceptions import ConfigValidationError, ModStoreError, StoreClosedError
    from .logging_utils import configure_logging
    from .observable import ObservableDict
    from .registry import ModuleRegistry, Namespace, init_store
    from .store import Store

__all__ = [
    "ConfigValidationError",
    "DiagnosticSink",
    "LoggingSink",
    "ModStoreError",
    "ModuleDefinition",
    "ModuleRegistry",
    "Namespace",
    "ObservableDict",
    "Store",
    "StoreClosedError",
    "ValueCell",
    "configure_logging",
    "init_store",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols so importing the package stays cheap."""
    if name in {"init_store", "ModuleRegistry", "Namespace"}:
        from .registry import ModuleRegistry, Namespace, init_store

        return {
            "init_store": init_store,
            "ModuleRegistry": ModuleRegistry,
            "Namespace": Namespace,
        }[name]
    if name == "Store":
        from .store import Store

        return Store
    if name == "ModuleDefinition":
        from .definition import ModuleDefinition

        return ModuleDefinition
    if name == "ValueCell":
        from .cell import ValueCell

        return ValueCell
    if name == "ObservableDict":
        from .observable import ObservableDict

        return ObservableDict
    if name in {"DiagnosticSink", "LoggingSink"}:
        from .diagnostics import DiagnosticSink, LoggingSink

        return {"DiagnosticSink": DiagnosticSink, "LoggingSink": LoggingSink}[name]
    if name in {"ConfigValidationError", "ModStoreError", "StoreClosedError"}:
        from .exceptions import ConfigValidationError, ModStoreError, StoreClosedError

        return {
            "ConfigValidationError": ConfigValidationError,
            "ModStoreError": ModStoreError,
            "StoreClosedError": StoreClosedError,
        }[name]
    if name == "load_config":
        from .config import load_config

        return load_config
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
