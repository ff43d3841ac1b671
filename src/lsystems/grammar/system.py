"""The ``System`` façade: one rule set on top of a (possibly shared) symbol table.

Py Ver:     3.12
Status:     Stable

Notes
-----
    * Systems built from the same ``SymbolTable`` form a family: they share
      names and codes but keep independent rule sets.
    * Registration (``add_production``) mutates shared state and is
      serialised by locks. ``derive`` snapshots the rules once under a read
      lock and then runs without touching shared state, so many derivations
      can run side by side.
    * Errors abort the whole call. The axiom passed in is never modified.

References
----------
    [1] https://en.wikipedia.org/wiki/L-system
"""

from __future__ import annotations

# Standard library
from collections.abc import Iterable
from typing import TYPE_CHECKING

# Third-party libraries
import numpy as np
from pydantic import Field

# Local libraries
from lsystems.errors import InvalidSettingsError, UnknownSymbolError
from lsystems.grammar import derivation, parser
from lsystems.grammar.locks import UNSET
from lsystems.grammar.productions import Production, ProductionStore
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.symbols import Symbol, SymbolTable
from lsystems.parameters import SettingsModel, TieBreak, config

if TYPE_CHECKING:
    from lsystems.grammar.family import SystemFamily


class RunSettings(SettingsModel):
    """How a derivation is run."""

    iterations: int = Field(default_factory=lambda: config.default_iterations, ge=0)
    rng_seed: int | None = Field(default=None, ge=0)

    @classmethod
    def for_iterations(cls, iterations: int, rng_seed: int | None = None) -> RunSettings:
        return cls(iterations=iterations, rng_seed=rng_seed)


class System:
    def __init__(
        self,
        table: SymbolTable | None = None,
        *,
        tie_break: TieBreak | None = None,
        lock_timeout: float | None | object = UNSET,
    ) -> None:
        self._table = SymbolTable(lock_timeout) if table is None else table
        self._store = ProductionStore(
            self._table,
            tie_break=tie_break,
            lock_timeout=lock_timeout,
        )

    @classmethod
    def of_family(cls, family: SystemFamily | str, **kwargs) -> System:
        """A new system on the family's shared table, vocabulary pre-interned."""
        from lsystems.grammar.family import get_family

        if isinstance(family, str):
            name, family = family, get_family(family)
            if family is None:
                msg = f"family {name!r} has not been registered"
                raise InvalidSettingsError(msg)
        system = cls(family.table, **kwargs)
        for description in family.symbols():
            system.add_symbol(description.name)
        return system

    def sibling(self, **kwargs) -> System:
        """A new, empty rule set sharing this system's symbol table."""
        kwargs.setdefault("tie_break", self._store.tie_break)
        return System(self._table, **kwargs)

    @property
    def table(self) -> SymbolTable:
        return self._table

    @property
    def store(self) -> ProductionStore:
        return self._store

    @property
    def tie_break(self) -> TieBreak:
        return self._store.tie_break

    # --- Symbols ---

    def add_symbol(self, name: str) -> Symbol:
        return self._table.intern(name)

    def get_symbol(self, name: str) -> Symbol | None:
        return self._table.get(name)

    def symbol_len(self) -> int:
        return len(self._table)

    def parse_prod_string(self, text: str) -> ProductionString:
        return parser.parse_prod_string(self._table, text)

    # --- Productions ---

    def add_production(self, production: Production | str) -> Production:
        """Register a rule. Text is parsed first, interning its symbols."""
        if isinstance(production, str):
            production = parser.parse_production(self._table, production)
        return self._store.add(production)

    def parse_production(self, text: str) -> Production:
        return self.add_production(text)

    def add_productions(self, productions: Iterable[Production | str]) -> list[Production]:
        return [self.add_production(production) for production in productions]

    def production_len(self) -> int:
        return len(self._store)

    def productions(self) -> list[Production]:
        return list(self._store)

    # --- Derivation ---

    def _check_string(self, string: ProductionString) -> None:
        for index, symbol in enumerate(string):
            if not self._table.contains(symbol):
                msg = (
                    f"symbol {symbol.name!r} at position {index} "
                    "is not part of this system's table"
                )
                raise UnknownSymbolError(msg)

    def derive_once(
        self,
        string: ProductionString,
        rng: np.random.Generator | None = None,
    ) -> ProductionString:
        self._check_string(string)
        rng = np.random.default_rng() if rng is None else rng
        return derivation.derive_step(string, self._store.snapshot(), rng)

    def derive(
        self,
        axiom: ProductionString,
        settings: RunSettings | int | None = None,
    ) -> ProductionString:
        """Rewrite ``axiom`` ``settings.iterations`` times.

        Parameters
        ----------
        axiom : ProductionString
            Starting string; returned unchanged for zero iterations.
        settings : RunSettings | int | None
            Iteration count and optional RNG seed. A bare ``int`` is taken as
            the iteration count; ``None`` uses the configured defaults.

        Returns
        -------
        ProductionString
            The final generation.
        """
        if settings is None:
            settings = RunSettings()
        elif isinstance(settings, int):
            settings = RunSettings(iterations=settings)

        self._check_string(axiom)
        if settings.iterations == 0:
            return axiom

        rng = np.random.default_rng(settings.rng_seed)
        rules = self._store.snapshot()
        return derivation.derive(axiom, rules, settings.iterations, rng)

    def __repr__(self) -> str:
        return (
            f"System({self.symbol_len()} symbols, "
            f"{self.production_len()} productions, tie_break={self.tie_break.value})"
        )
