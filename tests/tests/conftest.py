"""Shared fixtures for the unit tests."""

from pathlib import Path

import matplotlib
import numpy as np
import pytest

from lsystems.grammar.symbols import SymbolTable
from lsystems.grammar.system import System

# Plots in tests are always written to files
matplotlib.use("Agg")

REPO_ROOT = Path(__file__).resolve().parents[2]
PLANTS = REPO_ROOT / "examples" / "plants"

BUSH = """\
# ABOP figure 1.24d
n = 3
delta = 20
initial: X
X -> F [ + X ] F [ - X ] + X
F -> F F
"""


@pytest.fixture
def table() -> SymbolTable:
    """A fresh symbol table."""
    return SymbolTable()


@pytest.fixture
def system(table: SymbolTable) -> System:
    """A system with no productions on a fresh table."""
    return System(table)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so stochastic tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def bush_text() -> str:
    """A small bracketed plant file."""
    return BUSH


@pytest.fixture
def bush_file(tmp_path: Path, bush_text: str) -> Path:
    """``bush_text`` written to a temporary plant file."""
    path = tmp_path / "bush.plant"
    path.write_text(bush_text, encoding="utf-8")
    return path


@pytest.fixture
def plants_dir() -> Path:
    """Directory holding the example plant files."""
    return PLANTS
