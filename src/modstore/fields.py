"""Claim pass deciding which declaration owns each field name.

Sources are visited in a fixed order: getter/setter pairs, then state, then
methods. The first source to claim a name keeps it; later claims and reserved
names are dropped with a diagnostic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .definition import ModuleDefinition
from .diagnostics import DiagnosticSink
from .support.types import accepts_positional, is_callable

RESERVED_KEYWORDS = frozenset({"event", "state"})


class FieldKind(str, Enum):
    """Declaration source of a store field."""

    ACCESSOR = "accessor"
    METHOD = "method"
    STATE = "state"


@dataclass(frozen=True)
class FieldDeclaration:
    name: str
    kind: FieldKind
    getter: Callable[..., Any] | None = None
    setter: Callable[..., Any] | None = None
    method: Callable[..., Any] | None = None
    initial: Any = None


@dataclass
class FieldPlan:
    """Ordered registry of accepted fields plus the diagnostics emitted."""

    fields: dict[str, FieldDeclaration] = field(default_factory=dict)
    diagnostics: list[str] = field(default_factory=list)

    def kinds(self) -> dict[str, FieldKind]:
        return {name: item.kind for name, item in self.fields.items()}

    def names(self, kind: FieldKind) -> tuple[str, ...]:
        return tuple(name for name, item in self.fields.items() if item.kind is kind)


class _Planner:
    def __init__(self, owner: str, reserved: frozenset[str], sink: DiagnosticSink | None):
        self.owner = owner
        self.reserved = reserved
        self.sink = sink
        self.plan = FieldPlan()

    def report(self, message: str) -> None:
        self.plan.diagnostics.append(message)
        if self.sink is not None:
            self.sink(message)

    def available(self, name: str) -> bool:
        if name in self.plan.fields:
            self.report(
                f"Module ({self.owner}) declares duplicate field (key = {name}), "
                "check state, getter, setter, method"
            )
            return False
        if name in self.reserved or name.startswith("_"):
            self.report(
                f"Module ({self.owner}): {name!r} is reserved on store objects "
                f"({', '.join(sorted(self.reserved))}) and cannot be declared"
            )
            return False
        return True

    def claim(self, declaration: FieldDeclaration) -> None:
        if self.available(declaration.name):
            self.plan.fields[declaration.name] = declaration

    def callable_or_report(
        self, section: str, name: str, func: Any, arity: int, at_least: bool = False
    ) -> Callable[..., Any] | None:
        if not is_callable(func):
            self.report(f"Module ({self.owner}): {section}[{name!r}] is not callable, skipped")
            return None
        if not accepts_positional(func, arity, at_least=at_least):
            self.report(
                f"Module ({self.owner}): {section}[{name!r}] must accept "
                f"{'at least ' if at_least else ''}{arity} positional argument(s), skipped"
            )
            return None
        return func


def plan_fields(
    definition: ModuleDefinition,
    reserved: Iterable[str] = RESERVED_KEYWORDS,
    sink: DiagnosticSink | None = None,
) -> FieldPlan:
    """Build the field registry for ``definition``.

    ``reserved`` names (always including ``event`` and ``state``) and names
    starting with an underscore cannot be declared.
    """
    planner = _Planner(definition.name, frozenset(reserved) | RESERVED_KEYWORDS, sink)

    pairs: dict[str, dict[str, Callable[..., Any]]] = {}
    for name, func in definition.getter.items():
        checked = planner.callable_or_report("getter", name, func, 1)
        if checked is not None:
            pairs.setdefault(name, {})["get"] = checked
    for name, func in definition.setter.items():
        checked = planner.callable_or_report("setter", name, func, 2)
        if checked is not None:
            pairs.setdefault(name, {})["set"] = checked
    for name, entry in pairs.items():
        planner.claim(
            FieldDeclaration(
                name, FieldKind.ACCESSOR, getter=entry.get("get"), setter=entry.get("set")
            )
        )

    for name, value in definition.state.items():
        planner.claim(FieldDeclaration(name, FieldKind.STATE, initial=value))

    for name, func in definition.method.items():
        if not planner.available(name):
            continue
        checked = planner.callable_or_report("method", name, func, 1, at_least=True)
        if checked is not None:
            planner.plan.fields[name] = FieldDeclaration(name, FieldKind.METHOD, method=checked)

    return planner.plan
