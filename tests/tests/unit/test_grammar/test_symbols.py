"""Test: symbol interning and shared tables."""

import threading

import pytest

from lsystems.errors import ParsingError
from lsystems.grammar.symbols import Symbol, SymbolTable, validate_name
from lsystems.grammar.system import System


class TestIntern:
    """Tests for SymbolTable.intern."""

    def test_codes_start_at_zero_and_increase(self, table: SymbolTable) -> None:
        """Test that new names get consecutive codes in first-seen order."""
        codes = [table.intern(name).code for name in ("F", "X", "+")]

        assert codes == [0, 1, 2]

    def test_same_name_same_code(self, table: SymbolTable) -> None:
        """Test that interning a name twice returns the same symbol."""
        first = table.intern("F")
        second = table.intern("F")

        assert first == second
        assert first.code == second.code
        assert len(table) == 1

    def test_lookups(self, table: SymbolTable) -> None:
        """Test code_of, name_of and get for known and unknown entries."""
        symbol = table.intern("Forward")

        assert table.code_of("Forward") == symbol.code
        assert table.name_of(symbol.code) == "Forward"
        assert table.get("Forward") == symbol
        assert table.code_of("Missing") is None
        assert table.name_of(99) is None
        assert table.get("Missing") is None

    def test_iteration_is_in_code_order(self, table: SymbolTable) -> None:
        """Test that iterating a table yields its symbols by code."""
        for name in ("b", "a", "c"):
            table.intern(name)

        assert [s.name for s in table] == ["b", "a", "c"]

    @pytest.mark.parametrize(
        "name",
        ["", " ", "F F", "a(b)", "->", "a->b", "->x", "<", ">", "1", "-2.5", "nan"],
    )
    def test_invalid_names_raise_parsing_error(self, table: SymbolTable, name: str) -> None:
        """Test that names the rule syntax cannot carry are rejected."""
        with pytest.raises(ParsingError):
            table.intern(name)

        assert len(table) == 0

    def test_non_string_name_raises(self) -> None:
        """Test that only strings are accepted as names."""
        with pytest.raises(ParsingError):
            validate_name(3)


class TestSymbolValue:
    """Tests for Symbol equality and text form."""

    def test_equality_uses_code_only(self) -> None:
        """Test that two symbols with the same code compare equal."""
        assert Symbol(1, "A") == Symbol(1, "B")
        assert hash(Symbol(1, "A")) == hash(Symbol(1, "B"))
        assert Symbol(1, "A") != Symbol(2, "A")

    def test_str_is_name(self) -> None:
        """Test that str() gives the symbol name."""
        assert str(Symbol(0, "Forward")) == "Forward"


class TestContains:
    """Tests for table membership checks."""

    def test_issued_symbol_is_contained(self, table: SymbolTable) -> None:
        """Test that a symbol issued by the table is recognised."""
        symbol = table.intern("X")

        assert table.contains(symbol)
        assert symbol in table
        assert "X" in table

    def test_foreign_symbol_is_not_contained(self, table: SymbolTable) -> None:
        """Test that a symbol with a matching code but another name is foreign."""
        table.intern("X")
        other = SymbolTable()
        foreign = other.intern("Y")

        assert foreign.code == 0
        assert not table.contains(foreign)
        assert 42 not in table


class TestSharedTable:
    """Tests for tables shared across a family of systems."""

    def test_systems_on_one_table_agree_on_codes(self, table: SymbolTable) -> None:
        """Test that two systems sharing a table intern names identically."""
        first = System(table)
        second = System(table)

        a = first.add_symbol("A")
        b = second.add_symbol("B")

        assert second.add_symbol("A") == a
        assert first.get_symbol("B") == b
        assert first.symbol_len() == second.symbol_len() == 2

    def test_rule_sets_stay_independent(self, table: SymbolTable) -> None:
        """Test that sharing a table does not share productions."""
        first = System(table)
        second = first.sibling()

        first.add_production("X -> F F")

        assert first.production_len() == 1
        assert second.production_len() == 0
        assert second.table is first.table

    def test_concurrent_interning_is_consistent(self, table: SymbolTable) -> None:
        """Test that many threads interning overlapping names agree on every code."""
        names = [f"S{i}" for i in range(50)]
        results: list[dict[str, int]] = []
        lock = threading.Lock()

        def worker() -> None:
            seen = {name: table.intern(name).code for name in names}
            with lock:
                results.append(seen)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(result == results[0] for result in results)
        assert sorted(results[0].values()) == list(range(50))
        assert len(table) == 50
