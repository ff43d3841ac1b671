"""Error types raised by the grammar engine and the turtle interpreter.

Every error carries an :class:`ErrorKind` so callers (the CLI, a rendering
harness) can translate failures into messages or exit codes without matching
on class names. Each class also derives from the closest builtin exception,
so ``except ValueError`` style handling keeps working.
"""

# Standard library
from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Categories of failure."""

    LOCKING = "locking"
    IO = "io"
    PARSING = "parsing"
    UNKNOWN_SYMBOL = "unknown_symbol"
    STACK_UNDERFLOW = "stack_underflow"
    INVALID_SETTINGS = "invalid_settings"


class LSystemError(Exception):
    """Base class for all library errors."""

    kind: ClassVar[ErrorKind]


class LockingError(LSystemError, RuntimeError):
    """A lock on shared grammar state could not be acquired in time."""

    kind = ErrorKind.LOCKING


class IoError(LSystemError, OSError):
    """An external read failed (pass-through of an ``OSError``)."""

    kind = ErrorKind.IO


class ParsingError(LSystemError, ValueError):
    """Malformed symbol, production or plant text."""

    kind = ErrorKind.PARSING


class UnknownSymbolError(LSystemError, LookupError):
    """A symbol is absent from the table it is used with."""

    kind = ErrorKind.UNKNOWN_SYMBOL


class StackUnderflowError(LSystemError, IndexError):
    """A branch was closed without a matching open branch."""

    kind = ErrorKind.STACK_UNDERFLOW

    def __init__(self, msg: str, index: int | None = None) -> None:
        super().__init__(msg)
        self.index = index


class InvalidSettingsError(LSystemError, ValueError):
    """Settings or weights outside their valid range."""

    kind = ErrorKind.INVALID_SETTINGS
