"""Symbols and the tables that intern them.

Notes
-----
    * A table hands out small integer codes, starting at 0, in the order names
      are first seen. Codes are never reused or renumbered.
    * One table may be shared by several systems (a "family"); every system
      holding it sees the same name -> code mapping.
    * Reads take the table lock shared, interning takes it exclusively.
"""

from __future__ import annotations

# Standard library
from collections.abc import Iterator
from dataclasses import dataclass, field

# Local libraries
from lsystems.errors import ParsingError
from lsystems.grammar.locks import UNSET, ReadWriteLock

ARROW = "->"
LEFT_MARK = "<"
RIGHT_MARK = ">"


@dataclass(frozen=True, order=False)
class Symbol:
    """An interned name. Equality and hashing only look at ``code``."""

    code: int
    name: str = field(compare=False)

    def __str__(self) -> str:
        return self.name


def validate_name(name: object) -> str:
    """Return ``name`` if it is usable as a symbol name, else raise."""
    if not isinstance(name, str):
        msg = f"symbol names must be strings, not {type(name).__name__}"
        raise ParsingError(msg)
    if not name:
        msg = "symbol names cannot be empty"
        raise ParsingError(msg)
    if any(ch.isspace() for ch in name):
        msg = f"symbol name {name!r} contains whitespace"
        raise ParsingError(msg)
    if "(" in name or ")" in name:
        msg = f"symbol name {name!r} contains parentheses"
        raise ParsingError(msg)
    if ARROW in name:
        msg = f"symbol name {name!r} contains the reserved {ARROW!r}"
        raise ParsingError(msg)
    if name in (LEFT_MARK, RIGHT_MARK):
        msg = f"{name!r} marks a context and cannot be a symbol"
        raise ParsingError(msg)
    try:
        float(name)
    except ValueError:
        return name
    msg = f"symbol name {name!r} is a number"
    raise ParsingError(msg)


class SymbolTable:
    def __init__(self, lock_timeout: float | None | object = UNSET) -> None:
        self._lock = ReadWriteLock("symbol table", timeout=lock_timeout)
        self._codes: dict[str, int] = {}
        self._names: dict[int, str] = {}
        self._next_code = 0

    def intern(self, name: str) -> Symbol:
        """Return the symbol for ``name``, allocating a new code if needed."""
        name = validate_name(name)
        with self._lock.read():
            code = self._codes.get(name)
        if code is not None:
            return Symbol(code, name)

        with self._lock.write():
            # Another writer may have interned it between the two locks
            code = self._codes.get(name)
            if code is None:
                code = self._next_code
                self._next_code += 1
                self._codes[name] = code
                self._names[code] = name
        return Symbol(code, name)

    def code_of(self, name: str) -> int | None:
        with self._lock.read():
            return self._codes.get(name)

    def name_of(self, code: int) -> str | None:
        with self._lock.read():
            return self._names.get(code)

    def get(self, name: str) -> Symbol | None:
        """Look up an existing symbol without interning."""
        code = self.code_of(name)
        return None if code is None else Symbol(code, name)

    def contains(self, symbol: Symbol) -> bool:
        """True iff ``symbol`` was issued by this table."""
        return self.name_of(symbol.code) == symbol.name

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Symbol):
            return self.contains(item)
        if isinstance(item, str):
            return self.code_of(item) is not None
        return False

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._codes)

    def __iter__(self) -> Iterator[Symbol]:
        with self._lock.read():
            items = sorted(self._names.items())
        return iter([Symbol(code, name) for code, name in items])

    def __repr__(self) -> str:
        return f"SymbolTable({len(self)} symbols)"
