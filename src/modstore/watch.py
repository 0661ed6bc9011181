"""Path-based change subscriptions for a store.

Usage:
    def on_count(new_value, old_value, namespace):
        print(f"count {old_value} -> {new_value}, total={namespace.stats.total}")

    counter.watch("count", on_count)
    counter.watch("profile.name", on_name)

Callbacks run synchronously on the writer's stack, once per real change, in
subscription order. A single-field watch fires on each write; notifying once
for a group of fields is left to the caller, who can re-trigger a watched path
explicitly with :meth:`WatchRegistry.notify`.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from .cell import FieldHost, install_cell, is_field_host
from .diagnostics import DiagnosticSink, resolve_sink
from .events.bus import Subscriber
from .observable import ObservableDict
from .support.paths import get_path, to_path
from .support.types import (
    accepts_positional,
    find_index,
    is_callable,
    is_string,
    same_callback,
)

LOGGER = logging.getLogger(__name__)

WatchCallback = Callable[[Any, Any, Any], Any]


def _read(container: FieldHost, key: str) -> Any:
    accessor = container._get_accessor(key)
    if accessor is None or accessor.get is None:
        return None
    return accessor.get()


class WatchRegistry:
    """Map watched path strings to subscribers and install cells on demand.

    Cells are installed on the first subscription to a path and stay in place
    afterwards; a path whose subscribers were all removed simply notifies
    nobody.
    """

    def __init__(
        self,
        host: FieldHost,
        namespace: Callable[[], Any],
        sink: DiagnosticSink | None = None,
        owner: str | None = None,
    ) -> None:
        self._host = host
        self._namespace = namespace
        self._sink = resolve_sink(sink)
        self._owner = owner
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._targets: dict[str, tuple[FieldHost, str]] = {}

    def watch(self, path: str, callback: WatchCallback, context: Any = None) -> None:
        if not is_string(path) or not path:
            self._sink(
                f"Module ({self._owner}): watch path is required and must be a non-empty string"
            )
            return
        if not is_callable(callback):
            self._sink(f"Module ({self._owner}): watch callback must be callable")
            return
        arity = 3 if context is None else 4
        if not accepts_positional(callback, arity):
            self._sink(
                f"Module ({self._owner}): watch callback {callback!r} must accept "
                "(new_value, old_value, namespace)"
            )
            return

        if path in self._targets:
            subscribers = self._subscribers.setdefault(path, [])
            index = find_index(
                subscribers, lambda item: same_callback(item.callback, callback)
            )
            if index == -1:
                subscribers.append(Subscriber(callback, context))
            return

        target = self._resolve_target(path)
        if target is None:
            return
        container, key = target

        cell = install_cell(
            container, key, notify=lambda old_value: self._dispatch(path, old_value)
        )
        if cell is None:
            self._sink(
                f"Module ({self._owner}): field {path!r} is a getter/setter or method "
                "declaration and cannot be watched"
            )
            return

        self._targets[path] = (container, key)
        self._subscribers[path] = [Subscriber(callback, context)]
        LOGGER.debug(
            "watch.installed",
            extra={"event": "watch.installed", "store": self._owner, "path": path},
        )

    def unwatch(self, path: str, callback: WatchCallback | None = None) -> None:
        subscribers = self._subscribers.get(path)
        if subscribers is None:
            return
        if callback is None:
            subscribers.clear()
            return
        index = find_index(
            subscribers, lambda item: same_callback(item.callback, callback)
        )
        if index != -1:
            del subscribers[index]

    def notify(self, path: str) -> None:
        """Re-deliver the current value of ``path`` to its subscribers."""
        target = self._targets.get(path)
        if target is None:
            return
        container, key = target
        current = _read(container, key)
        self._fan_out(path, current, current)

    def subscribers(self, path: str) -> tuple[WatchCallback, ...]:
        return tuple(item.callback for item in self._subscribers.get(path, ()))

    def _resolve_target(self, path: str) -> tuple[FieldHost, str] | None:
        segments = to_path(path)
        if not segments:
            self._sink(f"Module ({self._owner}): watch path {path!r} has no segments")
            return None

        key = segments[-1]
        container: Any = self._host
        if len(segments) > 1:
            parents = segments[:-1]
            container = get_path(self._host, parents)
            if not is_field_host(container):
                self._sink(
                    f"Module ({self._owner}): state[{']['.join(parents)}] is not an "
                    "object and cannot be watched"
                )
                return None

        if container._get_accessor(key) is None:
            if isinstance(container, ObservableDict):
                # Nested keys may be watched before they are first assigned.
                container._set_accessor(key, container._storage_accessor(key))
                return container, key
            self._sink(
                f"Module ({self._owner}): cannot watch {path!r}, field {key!r} does not exist"
            )
            return None
        return container, key

    def _dispatch(self, path: str, old_value: Any) -> None:
        container, key = self._targets[path]
        self._fan_out(path, _read(container, key), old_value)

    def _fan_out(self, path: str, new_value: Any, old_value: Any) -> None:
        namespace = self._namespace()
        for subscriber in list(self._subscribers.get(path, ())):
            subscriber.invoke(new_value, old_value, namespace)
