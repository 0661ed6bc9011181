"""Tests for the declared-event bus."""

from __future__ import annotations

from typing import Any
import unittest

from modstore.events.bus import EventBus


class EventBusTests(unittest.TestCase):
    """Validate subscription, removal and failure-isolated dispatch."""

    def setUp(self) -> None:
        self.messages: list[str] = []
        self.bus = EventBus(["saved", "loaded"], sink=self.messages.append, owner="demo")

    def test_emit_calls_subscribers_in_order_with_arguments(self) -> None:
        calls: list[Any] = []
        self.bus.on("saved", lambda *args: calls.append(("first", args)))
        self.bus.on("saved", lambda *args: calls.append(("second", args)))
        self.bus.emit("saved", "/tmp/a", 3)
        self.assertEqual(calls, [("first", ("/tmp/a", 3)), ("second", ("/tmp/a", 3))])

    def test_undeclared_event_delivers_to_nobody(self) -> None:
        calls: list[Any] = []
        self.bus.on("deleted", calls.append)
        self.bus.emit("deleted", 1)
        self.assertEqual(calls, [])
        self.assertEqual(self.bus.subscribers("deleted"), ())

    def test_non_callable_subscriber_is_ignored(self) -> None:
        self.bus.on("saved", "not callable")  # type: ignore[arg-type]
        self.assertEqual(self.bus.subscribers("saved"), ())

    def test_off_without_callback_clears_event(self) -> None:
        calls: list[Any] = []
        self.bus.on("saved", calls.append)
        self.bus.on("saved", calls.append)
        self.bus.off("saved")
        self.bus.emit("saved", 1)
        self.assertEqual(calls, [])

    def test_off_with_callback_removes_first_match_only(self) -> None:
        calls: list[Any] = []
        self.bus.on("saved", calls.append)
        self.bus.on("saved", calls.append)
        self.bus.off("saved", calls.append)
        self.bus.emit("saved", 1)
        self.assertEqual(calls, [1])

    def test_off_matches_by_identity_and_bound_method(self) -> None:
        calls: list[Any] = []

        class Handler:
            def __init__(self, label: str) -> None:
                self.label = label

            def __eq__(self, other: object) -> bool:
                return isinstance(other, Handler) and other.label == self.label

            __hash__ = None  # type: ignore[assignment]

            def __call__(self, *args: Any) -> None:
                calls.append((self.label, args))

            def record(self, *args: Any) -> None:
                calls.append(("bound", args))

        first, second = Handler("a"), Handler("a")
        self.bus.on("saved", first)
        self.bus.on("saved", second)
        self.bus.on("saved", first.record)
        self.bus.off("saved", second)
        self.bus.off("saved", first.record)
        self.assertEqual(self.bus.subscribers("saved"), (first,))
        self.bus.emit("saved", 1)
        self.assertEqual(calls, [("a", (1,))])

    def test_off_unknown_event_is_noop(self) -> None:
        self.bus.off("loaded")
        self.bus.off("missing", print)
        self.assertEqual(self.messages, [])

    def test_failing_subscriber_does_not_stop_emission(self) -> None:
        calls: list[Any] = []

        def boom(*_args: Any) -> None:
            raise RuntimeError("boom")

        self.bus.on("saved", boom)
        self.bus.on("saved", calls.append)
        self.bus.emit("saved", "payload")

        self.assertEqual(calls, ["payload"])
        self.assertEqual(len(self.messages), 1)
        self.assertIn("RuntimeError: boom", self.messages[0])
        self.assertIn("saved", self.messages[0])

    def test_context_is_passed_as_first_argument(self) -> None:
        received: list[Any] = []
        marker = object()
        self.bus.on("loaded", lambda ctx, value: received.append((ctx, value)), marker)
        self.bus.emit("loaded", 7)
        self.assertEqual(received, [(marker, 7)])

    def test_declared_names_are_frozen(self) -> None:
        bus = EventBus(["a", 1, "b"])  # type: ignore[list-item]
        self.assertEqual(bus.declared, frozenset({"a", "b"}))

    def test_default_sink_logs_failures(self) -> None:
        bus = EventBus(["tick"], owner="clock")

        def boom() -> None:
            raise ValueError("bad tick")

        bus.on("tick", boom)
        with self.assertLogs("modstore.diagnostics", level="ERROR") as logs:
            bus.emit("tick")
        self.assertTrue(any("bad tick" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
