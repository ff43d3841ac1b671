"""Turning grammar text into symbols and productions.

The syntax is whitespace separated::

    X -> F + [ [ X ] - X ] - F [ - F X ] + X     context-free
    F < X > F -> B                               context-sensitive
    X -> 0.25 A                                  weighted alternative
    X ->                                         rewrite to the empty string

Every name is checked with :func:`~lsystems.grammar.symbols.validate_name`
before any is interned, so malformed names surface as
:class:`~lsystems.errors.ParsingError` and leave the table untouched.
"""

from __future__ import annotations

# Standard library
import math

# Local libraries
from lsystems.errors import ParsingError
from lsystems.grammar.productions import Production
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.symbols import (
    ARROW,
    LEFT_MARK,
    RIGHT_MARK,
    Symbol,
    SymbolTable,
    validate_name,
)


def parse_prod_string(table: SymbolTable, text: str) -> ProductionString:
    """Intern every whitespace separated name of ``text``."""
    names = [validate_name(name) for name in text.split()]
    return ProductionString(table.intern(name) for name in names)


def _parse_weight(term: str) -> float | None:
    try:
        weight = float(term)
    except ValueError:
        return None
    if not math.isfinite(weight):
        msg = f"weight {term!r} is not a finite number"
        raise ParsingError(msg)
    return weight


def _split_head(text: str) -> tuple[list[str] | None, str, list[str] | None]:
    terms = text.split()
    if not terms:
        msg = "production has no head"
        raise ParsingError(msg)

    left: list[str] | None = None
    right: list[str] | None = None
    if terms.count(LEFT_MARK) > 1 or terms.count(RIGHT_MARK) > 1:
        msg = f"head {text.strip()!r} has more than one context marker on a side"
        raise ParsingError(msg)
    if LEFT_MARK in terms:
        split = terms.index(LEFT_MARK)
        left, terms = terms[:split], terms[split + 1 :]
        if not left:
            msg = f"head {text.strip()!r} has an empty left context"
            raise ParsingError(msg)
    if RIGHT_MARK in terms:
        split = terms.index(RIGHT_MARK)
        terms, right = terms[:split], terms[split + 1 :]
        if not right:
            msg = f"head {text.strip()!r} has an empty right context"
            raise ParsingError(msg)
    if RIGHT_MARK in (left or ()):
        msg = f"head {text.strip()!r} has '>' before '<'"
        raise ParsingError(msg)

    if len(terms) != 1:
        msg = f"head {text.strip()!r} should name exactly one predecessor, found {len(terms)}"
        raise ParsingError(msg)
    return left, terms[0], right


def _split_body(text: str) -> tuple[float, list[str]]:
    terms = text.split()
    weight = 1.0
    if terms:
        parsed = _parse_weight(terms[0])
        if parsed is not None:
            weight = parsed
            terms = terms[1:]
    return weight, terms


def _intern_all(table: SymbolTable, names: list[str] | None) -> tuple[Symbol, ...] | None:
    if names is None:
        return None
    return tuple(table.intern(name) for name in names)


def parse_production_head(
    table: SymbolTable,
    text: str,
) -> tuple[tuple[Symbol, ...] | None, Symbol, tuple[Symbol, ...] | None]:
    """Split ``left < X > right`` into its three parts."""
    left, predecessor, right = _split_head(text)
    for name in [*(left or ()), predecessor, *(right or ())]:
        validate_name(name)
    return _intern_all(table, left), table.intern(predecessor), _intern_all(table, right)


def parse_production_body(table: SymbolTable, text: str) -> tuple[float, tuple[Symbol, ...]]:
    """Split ``[weight] symbols...`` into weight and successor."""
    weight, names = _split_body(text)
    for name in names:
        validate_name(name)
    return weight, _intern_all(table, names)


def parse_production(table: SymbolTable, text: str) -> Production:
    """Parse one rule, interning its names into ``table``.

    The whole rule is checked before anything is interned, so a rejected
    rule leaves ``table`` as it was.
    """
    text = text.strip()
    if not text:
        msg = "production text is empty"
        raise ParsingError(msg)
    head, arrow, body = text.partition(ARROW)
    if not arrow:
        msg = f"not a production (missing {ARROW!r}): {text!r}"
        raise ParsingError(msg)

    left, predecessor, right = _split_head(head)
    weight, successor = _split_body(body)
    for name in [*(left or ()), predecessor, *(right or ()), *successor]:
        validate_name(name)

    return Production(
        predecessor=table.intern(predecessor),
        successor=_intern_all(table, successor),
        left_context=_intern_all(table, left),
        right_context=_intern_all(table, right),
        weight=weight,
    )
