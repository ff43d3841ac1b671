"""Reading grammars written in the "plant" format.

Example of the format (figure 1.24d of ABOP)::

    # Comments start with a hash
    n = 7            # number of derivation iterations
    delta = 20       # turn angle in degrees (alias: d)
    step = 1.0       # optional step length
    seed = 3         # optional RNG seed for stochastic grammars

    initial: X
    X -> F [ + X ] F [ - X ] + X
    F -> F F

The result is an ABOP-family :class:`~lsystems.grammar.system.System` with
the productions registered, the parsed axiom, and the run and interpretation
settings the file asks for.
"""

from __future__ import annotations

# Standard library
from pathlib import Path
from typing import NamedTuple

# Local libraries
from lsystems.errors import IoError, ParsingError
from lsystems.grammar.family import abop_family, get_or_init_family
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.system import RunSettings, System
from lsystems.interpretation.turtle import InterpretationSettings
from lsystems.parameters import config

COMMENT = "#"
INITIAL = "initial:"


class Plant(NamedTuple):
    system: System
    axiom: ProductionString
    run_settings: RunSettings
    interpretation: InterpretationSettings


def _strip_comment(line: str) -> str:
    return line.split(COMMENT, 1)[0].strip()


def _number(key: str, value: str, line_no: int, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        msg = f"line {line_no}: {key} expects a {cast.__name__}, got {value!r}"
        raise ParsingError(msg) from exc


def parse_plant(text: str) -> Plant:
    if not text.strip():
        msg = "plant text is empty"
        raise ParsingError(msg)

    system = System.of_family(get_or_init_family("ABOP", abop_family))
    iterations = config.default_iterations
    seed: int | None = None
    delta = 22.5
    step = 1.0
    initial: str | None = None
    productions = 0

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw)
        if not line:
            continue

        if line.startswith(INITIAL):
            if initial is not None:
                msg = f"line {line_no}: the initial axiom is given twice"
                raise ParsingError(msg)
            initial = line[len(INITIAL) :].strip()
            continue

        if "=" in line and "->" not in line:
            key, _, value = (part.strip() for part in line.partition("="))
            match key:
                case "n" | "N":
                    iterations = int(_number(key, value, line_no, int))
                case "d" | "D" | "delta":
                    delta = float(_number(key, value, line_no, float))
                case "step":
                    step = float(_number(key, value, line_no, float))
                case "seed":
                    seed = int(_number(key, value, line_no, int))
                case _:
                    msg = f"line {line_no}: unrecognised setting {key!r}"
                    raise ParsingError(msg)
            continue

        try:
            system.add_production(line)
        except ParsingError as exc:
            msg = f"line {line_no}: {exc}"
            raise ParsingError(msg) from exc
        productions += 1

    if productions == 0:
        msg = "no productions have been supplied"
        raise ParsingError(msg)
    if not initial:
        msg = "no initial axiom has been supplied"
        raise ParsingError(msg)

    return Plant(
        system=system,
        axiom=system.parse_prod_string(initial),
        run_settings=RunSettings(iterations=iterations, rng_seed=seed),
        interpretation=InterpretationSettings(delta=delta, step_length=step),
    )


def load_plant(path: Path | str) -> Plant:
    """Read and parse a plant file.

    Read failures become ``IoError``, undecodable bytes become ``ParsingError``.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"unable to read plant file {path}: {exc.strerror or exc}"
        raise IoError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"plant file {path} is not valid UTF-8: {exc.reason} at byte {exc.start}"
        raise ParsingError(msg) from exc
    return parse_plant(text)
