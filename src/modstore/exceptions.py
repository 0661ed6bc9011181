"""Exception hierarchy for modstore.

Store misuse is reported through the diagnostic sink, not raised. These
exceptions cover configuration loading and Python object-level violations such
as adding attributes to a closed store.
"""

from __future__ import annotations


class ModStoreError(RuntimeError):
    """Base class for all modstore errors."""


class ConfigValidationError(ModStoreError):
    """Raised when configuration cannot be validated safely."""


class StoreClosedError(ModStoreError, AttributeError):
    """Raised when adding or removing top-level fields of a closed store."""
