"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from modstore.exceptions import ConfigValidationError, ModStoreError, StoreClosedError


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(ConfigValidationError, ModStoreError))
        self.assertTrue(issubclass(StoreClosedError, ModStoreError))

    def test_closed_store_error_is_attribute_error(self) -> None:
        self.assertTrue(issubclass(StoreClosedError, AttributeError))


if __name__ == "__main__":
    unittest.main()
