"""Validated shape of a module definition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModuleDefinition(BaseModel):
    """Declarations used to build one store.

    ``getter`` functions receive the store, ``setter`` functions receive the
    store and the written value, ``method`` functions receive the store
    followed by the call arguments.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    state: dict[str, Any] = Field(default_factory=dict)
    getter: dict[str, Any] = Field(default_factory=dict)
    setter: dict[str, Any] = Field(default_factory=dict)
    method: dict[str, Any] = Field(default_factory=dict)
    event: tuple[str, ...] = ()

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Module name must be a string.")
        normalized = value.strip()
        if not normalized:
            raise ValueError("Module name must not be empty.")
        return normalized

    @field_validator("state", "getter", "setter", "method", mode="before")
    @classmethod
    def _validate_section(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("Section must be a mapping of field name -> value.")
        for key in value:
            if not isinstance(key, str):
                raise ValueError(f"Field names must be strings, got {key!r}.")
        return dict(value)

    @field_validator("event", mode="before")
    @classmethod
    def _normalize_events(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("event must be a list of event names.")
        # Non-string entries are ignored rather than rejected.
        names: list[str] = []
        for item in value:
            if isinstance(item, str) and item not in names:
                names.append(item)
        return tuple(names)


def has_name(raw: Any) -> bool:
    """Return True when a raw definition carries a ``name`` entry."""
    if isinstance(raw, ModuleDefinition):
        return True
    return isinstance(raw, Mapping) and "name" in raw


def raw_name(raw: Any) -> Any:
    if isinstance(raw, ModuleDefinition):
        return raw.name
    return raw.get("name") if isinstance(raw, Mapping) else None
