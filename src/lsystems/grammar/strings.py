"""Immutable strings of symbols: axioms and derived generations."""

from __future__ import annotations

# Standard library
from collections.abc import Iterable, Iterator
from typing import overload

# Local libraries
from lsystems.grammar.symbols import Symbol


class ProductionString:
    """An ordered, immutable sequence of :class:`Symbol`.

    ``str()`` gives the names separated by single spaces, which is the text
    form :func:`lsystems.grammar.parser.parse_prod_string` reads back.
    """

    __slots__ = ("_symbols",)

    def __init__(self, symbols: Iterable[Symbol] = ()) -> None:
        self._symbols: tuple[Symbol, ...] = tuple(symbols)

    @classmethod
    def empty(cls) -> ProductionString:
        return cls()

    @property
    def symbols(self) -> tuple[Symbol, ...]:
        return self._symbols

    def codes(self) -> tuple[int, ...]:
        return tuple(symbol.code for symbol in self._symbols)

    def is_empty(self) -> bool:
        return not self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    @overload
    def __getitem__(self, index: int) -> Symbol: ...

    @overload
    def __getitem__(self, index: slice) -> ProductionString: ...

    def __getitem__(self, index: int | slice) -> Symbol | ProductionString:
        if isinstance(index, slice):
            return ProductionString(self._symbols[index])
        return self._symbols[index]

    def __add__(self, other: object) -> ProductionString:
        if isinstance(other, ProductionString):
            return ProductionString(self._symbols + other._symbols)
        if isinstance(other, Symbol):
            return ProductionString((*self._symbols, other))
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProductionString):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __str__(self) -> str:
        return " ".join(symbol.name for symbol in self._symbols)

    def __repr__(self) -> str:
        return f"ProductionString({str(self)!r})"
