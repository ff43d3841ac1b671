"""Rewrite rules and the store that answers "which rules apply here".

Notes
-----
    * Productions are plain data. Applicability is decided by
      :meth:`Production.matches_context`, not by subclassing.
    * Rules sharing a predecessor and context are alternatives; the store
      never replaces a rule.
    * Among matching rules, the one with the longest context wins. Equal
      specificity is resolved by :class:`~lsystems.parameters.TieBreak`.

References
----------
    [1] P. Prusinkiewicz, A. Lindenmayer, The Algorithmic Beauty of Plants,
        ch. 1.7 (stochastic) and 1.8 (context-sensitive L-systems).
"""

from __future__ import annotations

# Standard library
import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeAlias

# Local libraries
from lsystems.errors import InvalidSettingsError, ParsingError, UnknownSymbolError
from lsystems.grammar.locks import UNSET, ReadWriteLock
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.symbols import ARROW, LEFT_MARK, RIGHT_MARK, Symbol, SymbolTable
from lsystems.parameters import TieBreak, config

Context: TypeAlias = tuple[Symbol, ...]


def _as_context(value: Iterable[Symbol] | None, side: str) -> Context | None:
    if value is None:
        return None
    context = tuple(value)
    for symbol in context:
        if not isinstance(symbol, Symbol):
            msg = f"{side} context must hold symbols, found {symbol!r}"
            raise ParsingError(msg)
    return context or None


@dataclass(frozen=True)
class Production:
    """``left < predecessor > right -> successor`` with a selection weight."""

    predecessor: Symbol
    successor: tuple[Symbol, ...] = ()
    left_context: Context | None = None
    right_context: Context | None = None
    weight: float = 1.0

    def __post_init__(self) -> None:
        if not isinstance(self.predecessor, Symbol):
            msg = f"predecessor must be a symbol, not {self.predecessor!r}"
            raise ParsingError(msg)
        successor = tuple(self.successor)
        for symbol in successor:
            if not isinstance(symbol, Symbol):
                msg = f"successor must hold symbols, found {symbol!r}"
                raise ParsingError(msg)
        object.__setattr__(self, "successor", successor)
        object.__setattr__(self, "left_context", _as_context(self.left_context, "left"))
        object.__setattr__(self, "right_context", _as_context(self.right_context, "right"))

        try:
            weight = float(self.weight)
        except (TypeError, ValueError) as exc:
            msg = f"weight must be a number, not {self.weight!r}"
            raise InvalidSettingsError(msg) from exc
        if not math.isfinite(weight) or weight < 0:
            msg = f"weight must be finite and non-negative, got {weight}"
            raise InvalidSettingsError(msg)
        object.__setattr__(self, "weight", weight)

    @property
    def specificity(self) -> int:
        return len(self.left_context or ()) + len(self.right_context or ())

    @property
    def is_context_free(self) -> bool:
        return self.specificity == 0

    def symbols(self) -> Iterator[Symbol]:
        """Every symbol this rule references."""
        yield self.predecessor
        yield from self.left_context or ()
        yield from self.right_context or ()
        yield from self.successor

    def matches_context(
        self,
        left_window: Sequence[Symbol],
        right_window: Sequence[Symbol],
    ) -> bool:
        """Left context must end ``left_window``, right context must start ``right_window``."""
        if self.left_context is not None:
            size = len(self.left_context)
            if len(left_window) < size or tuple(left_window[-size:]) != self.left_context:
                return False
        if self.right_context is not None:
            size = len(self.right_context)
            if len(right_window) < size or tuple(right_window[:size]) != self.right_context:
                return False
        return True

    def matches(self, string: ProductionString, index: int) -> bool:
        """True iff this rule applies to ``string[index]``."""
        if not 0 <= index < len(string) or string[index] != self.predecessor:
            return False
        symbols = string.symbols
        return self.matches_context(symbols[:index], symbols[index + 1 :])

    def __str__(self) -> str:
        head = [self.predecessor.name]
        if self.left_context:
            head = [*(s.name for s in self.left_context), LEFT_MARK, *head]
        if self.right_context:
            head = [*head, RIGHT_MARK, *(s.name for s in self.right_context)]
        body = [s.name for s in self.successor]
        if self.weight != 1.0:
            body.insert(0, repr(self.weight))
        return " ".join([*head, ARROW, *body])


def select_candidates(
    rules: Sequence[Production],
    left_window: Sequence[Symbol],
    right_window: Sequence[Symbol],
    tie_break: TieBreak,
) -> tuple[Production, ...]:
    """Matching rules of the highest specificity, in registration order."""
    matching = [rule for rule in rules if rule.matches_context(left_window, right_window)]
    if not matching:
        return ()
    best = max(rule.specificity for rule in matching)
    top = tuple(rule for rule in matching if rule.specificity == best)
    match tie_break:
        case TieBreak.LATEST:
            return top[-1:]
        case TieBreak.EARLIEST:
            return top[:1]
        case _:
            return top


class RuleIndex:
    """Read-only view of a store's rules at one moment.

    A derivation works against one of these, so it needs no locks and is
    unaffected by rules registered while it runs.
    """

    def __init__(
        self,
        rules: Mapping[Symbol, Sequence[Production]],
        tie_break: TieBreak = TieBreak.POOL,
    ) -> None:
        self._rules = {symbol: tuple(found) for symbol, found in rules.items()}
        self._windows = {
            symbol: (
                max(len(rule.left_context or ()) for rule in found),
                max(len(rule.right_context or ()) for rule in found),
            )
            for symbol, found in self._rules.items()
            if found
        }
        self.tie_break = tie_break

    def context_window(self, predecessor: Symbol) -> tuple[int, int]:
        """Longest left and right context declared for ``predecessor``."""
        return self._windows.get(predecessor, (0, 0))

    def rules_for(self, predecessor: Symbol) -> tuple[Production, ...]:
        return self._rules.get(predecessor, ())

    def match_candidates(
        self,
        predecessor: Symbol,
        left_window: Sequence[Symbol],
        right_window: Sequence[Symbol],
    ) -> tuple[Production, ...]:
        return select_candidates(
            self.rules_for(predecessor),
            left_window,
            right_window,
            self.tie_break,
        )

    def __len__(self) -> int:
        return sum(len(found) for found in self._rules.values())


class ProductionStore:
    """Thread-safe rule storage bound to one :class:`SymbolTable`.

    ``add`` takes the store lock exclusively, queries take it shared. A lock
    that cannot be acquired in time raises ``LockingError``.
    """

    def __init__(
        self,
        table: SymbolTable,
        tie_break: TieBreak | None = None,
        lock_timeout: float | None | object = UNSET,
    ) -> None:
        self.table = table
        self.tie_break = config.tie_break if tie_break is None else tie_break
        self._lock = ReadWriteLock("production store", timeout=lock_timeout)
        self._rules: dict[Symbol, list[Production]] = {}
        self._windows: dict[Symbol, tuple[int, int]] = {}

    def add(self, production: Production) -> Production:
        """Register ``production`` as an additional alternative.

        Raises
        ------
        UnknownSymbolError
            If any referenced symbol was not issued by the bound table. Rules
            built against another table are a programming error and are
            always rejected here.
        """
        for symbol in production.symbols():
            if not self.table.contains(symbol):
                known = self.table.name_of(symbol.code)
                if known is None:
                    msg = f"symbol {symbol.name!r} (code {symbol.code}) is not in this table"
                else:
                    msg = (
                        f"symbol {symbol.name!r} (code {symbol.code}) belongs to another "
                        f"table; here code {symbol.code} is {known!r}"
                    )
                raise UnknownSymbolError(msg)

        left = len(production.left_context or ())
        right = len(production.right_context or ())
        with self._lock.write():
            self._rules.setdefault(production.predecessor, []).append(production)
            old_left, old_right = self._windows.get(production.predecessor, (0, 0))
            self._windows[production.predecessor] = (max(old_left, left), max(old_right, right))
        return production

    def context_window(self, predecessor: Symbol) -> tuple[int, int]:
        with self._lock.read():
            return self._windows.get(predecessor, (0, 0))

    def rules_for(self, predecessor: Symbol) -> tuple[Production, ...]:
        with self._lock.read():
            return tuple(self._rules.get(predecessor, ()))

    def match_candidates(
        self,
        predecessor: Symbol,
        left_window: Sequence[Symbol],
        right_window: Sequence[Symbol],
    ) -> tuple[Production, ...]:
        """Rules that apply to ``predecessor`` between the two windows."""
        return select_candidates(
            self.rules_for(predecessor),
            left_window,
            right_window,
            self.tie_break,
        )

    def snapshot(self) -> RuleIndex:
        with self._lock.read():
            return RuleIndex(self._rules, self.tie_break)

    def __len__(self) -> int:
        with self._lock.read():
            return sum(len(found) for found in self._rules.values())

    def __iter__(self) -> Iterator[Production]:
        with self._lock.read():
            rules = [rule for found in self._rules.values() for rule in found]
        return iter(rules)
