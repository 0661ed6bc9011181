"""Pluggable sink for store diagnostics.

Misuse of the store API (duplicate module names, colliding fields, malformed
watch arguments...) is never raised. It is reported through a sink instead:
any callable accepting a single message string.

Usage:
    messages: list[str] = []
    namespace = init_store(modules, sink=messages.append)
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Protocol

LOGGER = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    def __call__(self, message: str) -> None: ...


class LoggingSink:
    """Default sink forwarding diagnostics to the ``modstore.diagnostics`` logger."""

    def __init__(
        self, logger: logging.Logger | None = None, level: int | str = logging.ERROR
    ) -> None:
        self._logger = logger or LOGGER
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
        self._level = level if isinstance(level, int) else logging.ERROR

    @property
    def level(self) -> int:
        return self._level

    def __call__(self, message: str) -> None:
        self._logger.log(
            self._level,
            message,
            extra={"event": "store.diagnostic"},
        )


def resolve_sink(sink: Callable[[str], None] | None, level: int | str = logging.ERROR) -> DiagnosticSink:
    """Return ``sink`` or a :class:`LoggingSink` when none is supplied."""
    if sink is None:
        return LoggingSink(level=level)
    if not callable(sink):
        raise TypeError(f"Diagnostic sink must be callable, got {type(sink).__name__}.")
    return sink
