"""The rewriting algorithm: one parallel pass over a string, repeated ``n`` times.

Notes
-----
    * Every symbol of the input is rewritten "at once": rules look at the
      input string only, never at output produced earlier in the same pass.
    * A symbol with no applicable rule copies itself (identity rule).
    * Several equally specific rules are sampled by weight from a numpy
      ``Generator`` supplied by the caller, so seeded runs are reproducible.
"""

from __future__ import annotations

# Standard library
from collections.abc import Sequence
from typing import Protocol

# Third-party libraries
import numpy as np

# Local libraries
from lsystems.errors import InvalidSettingsError
from lsystems.grammar.productions import Production
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.symbols import Symbol


class RuleSource(Protocol):
    """Anything that can answer rule queries (a store or a snapshot of one)."""

    def context_window(self, predecessor: Symbol) -> tuple[int, int]: ...

    def match_candidates(
        self,
        predecessor: Symbol,
        left_window: Sequence[Symbol],
        right_window: Sequence[Symbol],
    ) -> tuple[Production, ...]: ...


def choose_weighted(
    candidates: Sequence[Production],
    rng: np.random.Generator,
) -> Production:
    """Pick one rule with probability proportional to its weight.

    A uniform draw in ``[0, total)`` selects the first candidate whose
    cumulative weight exceeds it.
    """
    cumulative = np.cumsum([rule.weight for rule in candidates])
    total = float(cumulative[-1])
    if total <= 0:
        msg = (
            f"alternatives for {candidates[0].predecessor.name!r} "
            "have a total weight of zero"
        )
        raise InvalidSettingsError(msg)
    draw = rng.random() * total
    index = int(np.searchsorted(cumulative, draw, side="right"))
    return candidates[min(index, len(candidates) - 1)]


def rewrite(
    symbol: Symbol,
    candidates: Sequence[Production],
    rng: np.random.Generator,
) -> tuple[Symbol, ...]:
    if not candidates:
        return (symbol,)
    if len(candidates) == 1:
        return candidates[0].successor
    return choose_weighted(candidates, rng).successor


def derive_step(
    string: ProductionString,
    rules: RuleSource,
    rng: np.random.Generator,
) -> ProductionString:
    """Rewrite every symbol of ``string`` once and return the new generation."""
    symbols = string.symbols
    output: list[Symbol] = []
    for index, symbol in enumerate(symbols):
        left_size, right_size = rules.context_window(symbol)
        left = symbols[max(0, index - left_size) : index]
        right = symbols[index + 1 : index + 1 + right_size]
        candidates = rules.match_candidates(symbol, left, right)
        output.extend(rewrite(symbol, candidates, rng))
    return ProductionString(output)


def derive(
    axiom: ProductionString,
    rules: RuleSource,
    iterations: int,
    rng: np.random.Generator,
) -> ProductionString:
    """Apply :func:`derive_step` ``iterations`` times, threading one RNG."""
    if iterations < 0:
        msg = f"iterations must be non-negative, got {iterations}"
        raise InvalidSettingsError(msg)
    current = axiom
    for _ in range(iterations):
        current = derive_step(current, rules, rng)
    return current
