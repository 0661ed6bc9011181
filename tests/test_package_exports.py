"""Tests for top-level package lazy exports."""

from __future__ import annotations

import unittest

import modstore


class PackageExportTests(unittest.TestCase):
    """Ensure __getattr__ and exported symbols behave as expected."""

    def test_lazy_exports_resolve_known_symbols(self) -> None:
        self.assertTrue(callable(modstore.init_store))
        self.assertTrue(callable(modstore.load_config))
        self.assertTrue(callable(modstore.configure_logging))
        for name in modstore.__all__:
            self.assertIsNotNone(getattr(modstore, name))

    def test_init_store_from_package(self) -> None:
        namespace = modstore.init_store([{"name": "a", "state": {"v": 1}}])
        self.assertIsInstance(namespace, modstore.Namespace)
        self.assertIsInstance(namespace.a, modstore.Store)

    def test_unknown_symbol_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(modstore, "THIS_DOES_NOT_EXIST")


if __name__ == "__main__":
    unittest.main()
