"""Turtle interpretation of derived strings into 2D paths.

Py Ver:     3.12
Status:     Stable

Notes
-----
    * Branches (``[`` ... ``]``) are handled with an explicit state stack, so
      deeply nested brackets cannot exhaust the call stack.
    * ``]`` with nothing to restore raises ``StackUnderflowError``; no partial
      path is returned.
    * The interpreter keeps no state between calls and may be shared freely
      across threads.

References
----------
    [1] P. Prusinkiewicz, A. Lindenmayer, The Algorithmic Beauty of Plants,
        ch. 1.3 (turtle interpretation) and 1.6 (branching structures).
    [2] https://en.wikipedia.org/wiki/Turtle_graphics
"""

from __future__ import annotations

# Standard library
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Third-party libraries
from pydantic import Field, field_validator

# Local libraries
from lsystems.errors import InvalidSettingsError, StackUnderflowError
from lsystems.geometry.primitives import Edge, Path, Point, Vector
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.symbols import Symbol
from lsystems.parameters import SettingsModel


class TurtleAction(Enum):
    MOVE_DRAW = "move_draw"
    MOVE_NO_DRAW = "move_no_draw"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    PUSH = "push"
    POP = "pop"
    IGNORE = "ignore"


def default_actions() -> dict[str, TurtleAction]:
    """ABOP conventions, plus the long names used by plant files."""
    return {
        "F": TurtleAction.MOVE_DRAW,
        "f": TurtleAction.MOVE_NO_DRAW,
        "Forward": TurtleAction.MOVE_DRAW,
        "Move": TurtleAction.MOVE_NO_DRAW,
        "+": TurtleAction.TURN_LEFT,
        "-": TurtleAction.TURN_RIGHT,
        "[": TurtleAction.PUSH,
        "]": TurtleAction.POP,
    }


class InterpretationSettings(SettingsModel):
    """How symbols move the turtle.

    ``symbol_action`` is keyed by symbol name (``Symbol`` keys are accepted
    and converted). Names without an entry are ignored.
    """

    delta: float = Field(default=22.5, allow_inf_nan=False)
    step_length: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    symbol_action: dict[str, TurtleAction] = Field(default_factory=default_actions)
    start_position: Point = Field(default_factory=Point.origin)
    start_heading: Vector = Field(default_factory=Vector.up)

    @field_validator("symbol_action", mode="before")
    @classmethod
    def _symbol_keys_to_names(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                (key.name if isinstance(key, Symbol) else key): action
                for key, action in value.items()
            }
        return value

    @field_validator("start_position")
    @classmethod
    def _finite_position(cls, value: Point) -> Point:
        if not (math.isfinite(value.x) and math.isfinite(value.y)):
            msg = "start position must be finite"
            raise ValueError(msg)
        return value

    @field_validator("start_heading")
    @classmethod
    def _unit_heading(cls, value: Vector) -> Vector:
        if not (math.isfinite(value.dx) and math.isfinite(value.dy)) or value.norm() == 0:
            msg = "start heading must be a finite, non-zero vector"
            raise ValueError(msg)
        return value.normalized()

    def action_for(self, symbol: Symbol | str) -> TurtleAction:
        name = symbol.name if isinstance(symbol, Symbol) else symbol
        return self.symbol_action.get(name, TurtleAction.IGNORE)

    def with_actions(self, **overrides: TurtleAction) -> InterpretationSettings:
        """Copy with some name -> action entries replaced."""
        actions = {**self.symbol_action, **overrides}
        return InterpretationSettings(**{**dict(self), "symbol_action": actions})


@dataclass(frozen=True, slots=True)
class TurtleState:
    position: Point
    heading: Vector


class TurtleInterpreter:
    """Stack machine turning a symbol string into a :class:`Path`."""

    def __init__(self, settings: InterpretationSettings | None = None) -> None:
        self.settings = InterpretationSettings() if settings is None else settings

    def interpret(
        self,
        string: ProductionString,
        settings: InterpretationSettings | None = None,
        start: TurtleState | None = None,
    ) -> Path:
        settings = self.settings if settings is None else settings
        if start is None:
            start = TurtleState(settings.start_position, settings.start_heading)

        position, heading = start.position, start.heading
        if not (math.isfinite(heading.dx) and math.isfinite(heading.dy)):
            msg = f"start heading {heading} is not finite"
            raise InvalidSettingsError(msg)
        try:
            heading = heading.normalized()
        except ValueError as exc:
            msg = f"start heading {heading} has no direction"
            raise InvalidSettingsError(msg) from exc

        step = settings.step_length
        delta = settings.delta
        actions = settings.symbol_action

        edges: list[Edge] = []
        stack: list[TurtleState] = []
        for index, symbol in enumerate(string):
            match actions.get(symbol.name, TurtleAction.IGNORE):
                case TurtleAction.MOVE_DRAW:
                    target = position + heading * step
                    edges.append(Edge(position, target))
                    position = target
                case TurtleAction.MOVE_NO_DRAW:
                    position = position + heading * step
                case TurtleAction.TURN_LEFT:
                    heading = heading.rotate(delta)
                case TurtleAction.TURN_RIGHT:
                    heading = heading.rotate(-delta)
                case TurtleAction.PUSH:
                    stack.append(TurtleState(position, heading))
                case TurtleAction.POP:
                    if not stack:
                        msg = f"unmatched branch close {symbol.name!r} at position {index}"
                        raise StackUnderflowError(msg, index=index)
                    state = stack.pop()
                    position, heading = state.position, state.heading
                case TurtleAction.IGNORE:
                    pass

        return Path(edges)


def interpret(
    string: ProductionString,
    settings: InterpretationSettings | None = None,
) -> Path:
    """Interpret ``string`` with a throwaway :class:`TurtleInterpreter`."""
    return TurtleInterpreter(settings).interpret(string)
