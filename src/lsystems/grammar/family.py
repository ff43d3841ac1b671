"""Families: named vocabularies shared by several systems.

A family describes the symbols an interpretation understands and owns the
single :class:`SymbolTable` that every member system uses, so identical
names map to identical codes across the family.
"""

from __future__ import annotations

# Standard library
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum

# Local libraries
from lsystems.errors import InvalidSettingsError
from lsystems.grammar.symbols import SymbolTable, validate_name


class SymbolKind(Enum):
    TERMINAL = "terminal"  # never rewritten by the family's own grammars
    PRODUCTION = "production"  # expected to appear as a predecessor


@dataclass(frozen=True)
class SymbolDescription:
    name: str
    kind: SymbolKind
    description: str | None = None


@dataclass
class SystemFamily:
    name: str
    descriptions: dict[str, SymbolDescription] = field(default_factory=dict)
    table: SymbolTable = field(default_factory=SymbolTable)

    @classmethod
    def define(cls, name: str) -> SystemFamily:
        if not name.strip():
            msg = "family name cannot be empty"
            raise InvalidSettingsError(msg)
        return cls(name=name)

    def _describe(self, name: str, kind: SymbolKind, description: str | None) -> SystemFamily:
        validate_name(name)
        if name in self.descriptions:
            msg = f"symbol {name!r} is already described in family {self.name!r}"
            raise InvalidSettingsError(msg)
        self.descriptions[name] = SymbolDescription(name, kind, description)
        self.table.intern(name)
        return self

    def with_terminal(self, name: str, description: str | None = None) -> SystemFamily:
        return self._describe(name, SymbolKind.TERMINAL, description)

    def with_production(self, name: str, description: str | None = None) -> SystemFamily:
        return self._describe(name, SymbolKind.PRODUCTION, description)

    def symbols(self) -> Iterator[SymbolDescription]:
        return iter(self.descriptions.values())

    def terminals(self) -> Iterator[SymbolDescription]:
        return (d for d in self.descriptions.values() if d.kind is SymbolKind.TERMINAL)

    def productions(self) -> Iterator[SymbolDescription]:
        return (d for d in self.descriptions.values() if d.kind is SymbolKind.PRODUCTION)


# --- Process-wide registry ---

_REGISTRY: dict[str, SystemFamily] = {}
_REGISTRY_LOCK = threading.Lock()


def register(family: SystemFamily) -> SystemFamily:
    with _REGISTRY_LOCK:
        if family.name in _REGISTRY:
            msg = f"family {family.name!r} has already been registered"
            raise InvalidSettingsError(msg)
        _REGISTRY[family.name] = family
    return family


def get_family(name: str) -> SystemFamily | None:
    with _REGISTRY_LOCK:
        return _REGISTRY.get(name)


def family_exists(name: str) -> bool:
    with _REGISTRY_LOCK:
        return name in _REGISTRY


def get_or_init_family(name: str, default: Callable[[], SystemFamily]) -> SystemFamily:
    """Return the registered family, building and registering it on first use."""
    with _REGISTRY_LOCK:
        family = _REGISTRY.get(name)
        if family is None:
            family = default()
            _REGISTRY[name] = family
    return family


def unregister(name: str) -> SystemFamily | None:
    with _REGISTRY_LOCK:
        return _REGISTRY.pop(name, None)


def abop_family() -> SystemFamily:
    """Turtle vocabulary from *The Algorithmic Beauty of Plants*."""
    return (
        SystemFamily.define("ABOP")
        .with_terminal("[", "Start a branch")
        .with_terminal("]", "Finish a branch")
        .with_terminal("+", "Turn the turtle left by delta")
        .with_terminal("-", "Turn the turtle right by delta")
        .with_production("F", "Move forward, drawing a line")
        .with_production("f", "Move forward without drawing")
        .with_production("Forward", "Move forward, drawing a line")
        .with_production("Move", "Move forward without drawing")
        .with_production("X", "A growth point for the plant or branch")
    )
