"""Per-store event bus for declared event names.

Usage:
    bus = EventBus({"saved"}, sink=messages.append)

    def on_saved(path):
        print(f"Saved: {path}")

    bus.on("saved", on_saved)
    bus.emit("saved", "/tmp/state.json")
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import logging
from typing import Any

from ..diagnostics import DiagnosticSink, resolve_sink
from ..support.types import find_index, is_callable, is_string, same_callback

LOGGER = logging.getLogger(__name__)


@dataclass
class Subscriber:
    """A callback and the optional context passed to it as first argument."""

    callback: Callable[..., Any]
    context: Any = None

    def invoke(self, *args: Any) -> Any:
        if self.context is None:
            return self.callback(*args)
        return self.callback(self.context, *args)


class EventBus:
    """Synchronous publish/subscribe restricted to a fixed set of event names.

    Subscriptions and emissions for undeclared names are ignored. A failing
    subscriber is reported to the diagnostic sink and does not stop the
    remaining subscribers from running.
    """

    def __init__(
        self,
        declared: Iterable[str],
        sink: DiagnosticSink | None = None,
        owner: str | None = None,
    ) -> None:
        self._declared = frozenset(name for name in declared if is_string(name))
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._sink = resolve_sink(sink)
        self._owner = owner

    @property
    def declared(self) -> frozenset[str]:
        return self._declared

    def on(self, name: str, callback: Callable[..., Any], context: Any = None) -> None:
        """Subscribe ``callback`` to the declared event ``name``.

        Args:
            name: Declared event name
            callback: Called with the emitted arguments
            context: Optional receiver passed before the emitted arguments
        """
        if name not in self._declared or not is_callable(callback):
            return
        self._subscribers.setdefault(name, []).append(Subscriber(callback, context))
        LOGGER.debug(
            "event.subscribed",
            extra={"event": "event.subscribed", "store": self._owner, "event_name": name},
        )

    def off(self, name: str, callback: Callable[..., Any] | None = None) -> None:
        """Remove one subscription by callback identity, or all for ``name``."""
        if name not in self._subscribers:
            return
        if callback is None:
            del self._subscribers[name]
            return
        subscribers = self._subscribers[name]
        index = find_index(
            subscribers, lambda item: same_callback(item.callback, callback)
        )
        if index != -1:
            del subscribers[index]

    def emit(self, name: str, *args: Any) -> None:
        """Call every subscriber of ``name`` in registration order."""
        if name not in self._declared:
            return
        subscribers = list(self._subscribers.get(name, ()))
        if not subscribers:
            LOGGER.debug(
                "event.no_subscribers",
                extra={"event": "event.no_subscribers", "store": self._owner, "event_name": name},
            )
            return

        for subscriber in subscribers:
            try:
                subscriber.invoke(*args)
            except Exception as exc:  # noqa: BLE001 - one subscriber must not break emission.
                self._sink(
                    f"Module ({self._owner}): subscriber {subscriber.callback!r} for "
                    f"event {name!r} failed: {type(exc).__name__}: {exc}"
                )

    def subscribers(self, name: str) -> tuple[Callable[..., Any], ...]:
        return tuple(item.callback for item in self._subscribers.get(name, ()))
