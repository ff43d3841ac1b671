"""Test: the rewriting algorithm."""

import numpy as np
import pytest

from lsystems.errors import InvalidSettingsError
from lsystems.grammar.derivation import choose_weighted, derive, derive_step, rewrite
from lsystems.grammar.parser import parse_prod_string, parse_production
from lsystems.grammar.productions import Production, ProductionStore
from lsystems.grammar.symbols import SymbolTable


def _store(table: SymbolTable, *rules: str) -> ProductionStore:
    store = ProductionStore(table)
    for text in rules:
        store.add(parse_production(table, text))
    return store


class TestDeriveStep:
    """Tests for a single parallel rewriting pass."""

    def test_identity_for_symbols_without_rules(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test that unmatched symbols copy themselves."""
        store = _store(table, "X -> F F")
        string = parse_prod_string(table, "+ X -")

        assert str(derive_step(string, store, rng)) == "+ F F -"

    def test_rules_read_the_input_only(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test that context is taken from the old generation, not the new one."""
        store = _store(table, "A -> B", "A < B -> C")
        string = parse_prod_string(table, "A B")

        assert str(derive_step(string, store, rng)) == "B C"

    def test_empty_successor_erases(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test that a rule with an empty body removes the symbol."""
        store = _store(table, "X ->")

        assert str(derive_step(parse_prod_string(table, "F X F"), store, rng)) == "F F"

    def test_context_window_at_string_edges(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test that windows are clipped at both ends of the string."""
        store = _store(table, "X -> A", "F F < X > F F -> B")

        result = derive_step(parse_prod_string(table, "F X F F X"), store, rng)

        assert str(result) == "F A F F A"

    def test_input_is_not_modified(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test that a step returns a new string and leaves the input alone."""
        store = _store(table, "X -> F X")
        string = parse_prod_string(table, "X")

        result = derive_step(string, store, rng)

        assert str(string) == "X"
        assert result is not string


class TestDerive:
    """Tests for repeated derivation."""

    def test_zero_iterations(self, table: SymbolTable, rng: np.random.Generator) -> None:
        """Test that zero iterations return the axiom."""
        store = _store(table, "X -> F")
        axiom = parse_prod_string(table, "X")

        assert derive(axiom, store, 0, rng) == axiom

    def test_negative_iterations(self, table: SymbolTable, rng: np.random.Generator) -> None:
        """Test that a negative iteration count is invalid."""
        store = _store(table, "X -> F")

        with pytest.raises(InvalidSettingsError):
            derive(parse_prod_string(table, "X"), store, -1, rng)

    def test_algae_lengths_follow_fibonacci(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test Lindenmayer's algae grammar grows by Fibonacci numbers."""
        store = _store(table, "A -> A B", "B -> A")
        axiom = parse_prod_string(table, "A")

        lengths = [len(derive(axiom, store, n, rng)) for n in range(7)]

        assert lengths == [1, 2, 3, 5, 8, 13, 21]
        assert str(derive(axiom, store, 4, rng)) == "A B A A B A B A"


class TestWeightedChoice:
    """Tests for stochastic selection among alternatives."""

    def test_single_candidate_is_used(self, table: SymbolTable, rng: np.random.Generator) -> None:
        """Test that one candidate is used without drawing."""
        rule = parse_production(table, "X -> A")

        assert rewrite(table.intern("X"), (rule,), rng) == rule.successor

    def test_no_candidate_is_identity(self, table: SymbolTable, rng: np.random.Generator) -> None:
        """Test the identity rule."""
        x = table.intern("X")

        assert rewrite(x, (), rng) == (x,)

    def test_zero_weight_is_never_chosen(
        self,
        table: SymbolTable,
        rng: np.random.Generator,
    ) -> None:
        """Test that an alternative with weight zero is never picked."""
        never = parse_production(table, "X -> 0 A")
        always = parse_production(table, "X -> B")

        picks = {choose_weighted((never, always), rng).successor[0].name for _ in range(200)}

        assert picks == {"B"}

    def test_all_zero_weights_raise(self, table: SymbolTable, rng: np.random.Generator) -> None:
        """Test that alternatives with no total weight cannot be sampled."""
        x = table.intern("X")
        rules = (Production(x, weight=0), Production(x, weight=0))

        with pytest.raises(InvalidSettingsError):
            choose_weighted(rules, rng)

    def test_weights_are_respected(self, table: SymbolTable, rng: np.random.Generator) -> None:
        """Test that a 1:3 split is drawn about 25% / 75% of the time."""
        low = parse_production(table, "X -> A")
        high = parse_production(table, "X -> 3 B")

        trials = 4000
        hits = sum(choose_weighted((low, high), rng) is high for _ in range(trials))

        assert hits / trials == pytest.approx(0.75, abs=0.03)
