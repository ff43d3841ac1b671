"""L-system grammars, derivation and turtle interpretation.

Graph export (``lsystems.interpretation.graph``), plotting
(``lsystems.interpretation.plotting``) and the command line are imported
from their own modules so the core stays light.
"""

# Local libraries
from lsystems.errors import (
    ErrorKind,
    InvalidSettingsError,
    IoError,
    LockingError,
    LSystemError,
    ParsingError,
    StackUnderflowError,
    UnknownSymbolError,
)
from lsystems.geometry.primitives import Bounds, Edge, Path, Point, Vector
from lsystems.grammar.family import (
    SystemFamily,
    abop_family,
    family_exists,
    get_family,
    get_or_init_family,
    register,
)
from lsystems.grammar.productions import Production, ProductionStore
from lsystems.grammar.strings import ProductionString
from lsystems.grammar.symbols import Symbol, SymbolTable
from lsystems.grammar.system import RunSettings, System
from lsystems.interpretation.plant import Plant, load_plant, parse_plant
from lsystems.interpretation.svg import path_to_svg
from lsystems.interpretation.turtle import (
    InterpretationSettings,
    TurtleAction,
    TurtleInterpreter,
    interpret,
)
from lsystems.parameters import LSystemsConfig, TieBreak, config

__version__ = "0.1.0"

__all__ = [
    "Bounds",
    "Edge",
    "ErrorKind",
    "InterpretationSettings",
    "InvalidSettingsError",
    "IoError",
    "LSystemError",
    "LSystemsConfig",
    "LockingError",
    "ParsingError",
    "Path",
    "Plant",
    "Point",
    "Production",
    "ProductionStore",
    "ProductionString",
    "RunSettings",
    "StackUnderflowError",
    "Symbol",
    "SymbolTable",
    "System",
    "SystemFamily",
    "TieBreak",
    "TurtleAction",
    "TurtleInterpreter",
    "UnknownSymbolError",
    "Vector",
    "abop_family",
    "config",
    "family_exists",
    "get_family",
    "get_or_init_family",
    "interpret",
    "load_plant",
    "parse_plant",
    "path_to_svg",
    "register",
]
