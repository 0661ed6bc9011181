"""Tests for assembling stores into the shared namespace."""

from __future__ import annotations

from typing import Any
import unittest

from modstore.config import Config, StoreConfig
from modstore.definition import ModuleDefinition
from modstore.exceptions import StoreClosedError
from modstore.registry import ModuleRegistry, Namespace, init_store
from modstore.store import Store


def inc(self: Store) -> None:
    self.count += 1


class InitStoreTests(unittest.TestCase):
    """Validate module registration, duplicates and cross-module lookups."""

    def setUp(self) -> None:
        self.messages: list[str] = []

    def test_counter_end_to_end(self) -> None:
        namespace = init_store(
            [{"name": "counter", "state": {"count": 0}, "method": {"inc": inc}}],
            sink=self.messages.append,
        )
        self.assertEqual(namespace.counter.count, 0)
        namespace.counter.inc()
        self.assertEqual(namespace.counter.count, 1)
        self.assertEqual(self.messages, [])

    def test_duplicate_module_name_keeps_first(self) -> None:
        namespace = init_store(
            [
                {"name": "x", "state": {"a": 1}},
                {"name": "x", "state": {"b": 2}},
            ],
            sink=self.messages.append,
        )
        self.assertEqual(list(namespace), ["x"])
        self.assertEqual(namespace["x"].a, 1)
        self.assertNotIn("b", namespace["x"].fields())
        self.assertEqual(len(self.messages), 1)
        self.assertIn("duplicate module name: name=x", self.messages[0])

    def test_missing_name_reports_position(self) -> None:
        namespace = init_store(
            [{"state": {"a": 1}}, {"name": "ok"}], sink=self.messages.append
        )
        self.assertEqual(list(namespace), ["ok"])
        self.assertIn("(0)", self.messages[0])
        self.assertIn("missing required field: name", self.messages[0])

    def test_mapping_input_uses_key_order_and_reports_keys(self) -> None:
        namespace = init_store(
            {
                "second": {"name": "b"},
                "first": {"name": "a"},
                "broken": {"state": {}},
            },
            sink=self.messages.append,
        )
        self.assertEqual(list(namespace), ["b", "a"])
        self.assertIn("(broken)", self.messages[0])

    def test_invalid_definition_is_skipped(self) -> None:
        namespace = init_store(
            [{"name": "bad", "state": 5}, {"name": 7}, {"name": "good"}],
            sink=self.messages.append,
        )
        self.assertEqual(list(namespace), ["good"])
        self.assertEqual(len(self.messages), 2)
        self.assertTrue(all("invalid definition" in m for m in self.messages))

    def test_non_collection_input_yields_empty_namespace(self) -> None:
        namespace = init_store(None, sink=self.messages.append)
        self.assertEqual(len(namespace), 0)

    def test_module_definition_models_are_accepted(self) -> None:
        namespace = init_store(
            [ModuleDefinition(name="model", state={"v": 1})], sink=self.messages.append
        )
        self.assertEqual(namespace.model.v, 1)

    def test_late_bound_reference_to_later_module(self) -> None:
        def total(self: Store) -> int:
            return self.namespace.prices.unit * self.qty

        namespace = init_store(
            [
                {"name": "cart", "state": {"qty": 3}, "getter": {"total": total}},
                {"name": "prices", "state": {"unit": 5}},
            ],
            sink=self.messages.append,
        )
        self.assertEqual(namespace.cart.total, 15)
        namespace.prices.unit = 2
        self.assertEqual(namespace.cart.total, 6)

    def test_every_store_shares_the_same_namespace(self) -> None:
        namespace = init_store([{"name": "a"}, {"name": "b"}], sink=self.messages.append)
        self.assertIs(namespace.a.namespace, namespace)
        self.assertIs(namespace.b.namespace, namespace)

    def test_registered_stores_are_closed(self) -> None:
        namespace = init_store(
            [{"name": "a", "state": {"v": 1}}], sink=self.messages.append
        )
        with self.assertRaises(StoreClosedError):
            namespace.a.extra = 1
        namespace.a.v = 2
        self.assertEqual(namespace.a.v, 2)

    def test_namespace_is_read_only(self) -> None:
        namespace = init_store([{"name": "a"}], sink=self.messages.append)
        with self.assertRaises(TypeError):
            namespace.b = None  # type: ignore[misc]
        with self.assertRaises(TypeError):
            namespace["b"] = None  # type: ignore[index]
        with self.assertRaises(AttributeError):
            _ = namespace.missing

    def test_default_sink_logs_diagnostics(self) -> None:
        with self.assertLogs("modstore.diagnostics", level="ERROR") as logs:
            init_store([{"name": "x"}, {"name": "x"}])
        self.assertTrue(any("duplicate module name" in line for line in logs.output))


class RegistryConfigTests(unittest.TestCase):
    """Validate store policy taken from configuration."""

    def test_unsealed_stores_accept_new_fields(self) -> None:
        config = Config(store=StoreConfig(seal_stores=False))
        namespace = init_store([{"name": "a"}], config=config, sink=lambda message: None)
        namespace.a.extra = 1
        self.assertEqual(namespace.a.extra, 1)

    def test_extra_reserved_keywords_from_config_dict(self) -> None:
        messages: list[str] = []
        config = {"store": {"extra_reserved_keywords": ["id"]}}
        namespace = init_store(
            [{"name": "a", "state": {"id": 1, "ok": 2}}], config=config, sink=messages.append
        )
        self.assertEqual(namespace.a.fields(), ("ok",))
        self.assertEqual(len(messages), 1)

    def test_diagnostic_level_controls_default_sink(self) -> None:
        config = Config(store=StoreConfig(diagnostic_level="WARNING"))
        with self.assertLogs("modstore.diagnostics", level="WARNING") as logs:
            init_store([{"name": "x"}, {"name": "x"}], config=config)
        self.assertTrue(all(line.startswith("WARNING") for line in logs.output))

    def test_registry_returns_stores_from_register(self) -> None:
        registry = ModuleRegistry(sink=lambda message: None)
        store = registry.register({"name": "solo"})
        self.assertIsInstance(store, Store)
        self.assertIsInstance(registry.namespace, Namespace)
        self.assertIsNone(registry.register({"name": "solo"}))


if __name__ == "__main__":
    unittest.main()
