"""Test: the plant file format."""

from pathlib import Path

import pytest

from lsystems.errors import InvalidSettingsError, IoError, ParsingError
from lsystems.grammar.family import abop_family, get_or_init_family
from lsystems.interpretation.plant import load_plant, parse_plant
from lsystems.interpretation.turtle import TurtleInterpreter
from lsystems.parameters import config


class TestParsePlant:
    """Tests for parse_plant."""

    def test_settings_and_rules(self, bush_text: str) -> None:
        """Test that settings, axiom and productions are all read."""
        plant = parse_plant(bush_text)

        assert plant.run_settings.iterations == 3
        assert plant.run_settings.rng_seed is None
        assert plant.interpretation.delta == 20.0
        assert plant.interpretation.step_length == 1.0
        assert str(plant.axiom) == "X"
        assert plant.system.production_len() == 2

    def test_system_belongs_to_abop_family(self, bush_text: str) -> None:
        """Test that plants share the ABOP family table."""
        plant = parse_plant(bush_text)
        family = get_or_init_family("ABOP", abop_family)

        assert plant.system.table is family.table

    def test_aliases_step_and_seed(self) -> None:
        """Test the alternative keys and optional settings."""
        plant = parse_plant("N = 2\nd = 45\nstep = 0.5\nseed = 9\ninitial: F\nF -> F F")

        assert plant.run_settings.iterations == 2
        assert plant.run_settings.rng_seed == 9
        assert plant.interpretation.delta == 45.0
        assert plant.interpretation.step_length == 0.5

    def test_default_iterations(self) -> None:
        """Test that a missing n uses the configured default."""
        plant = parse_plant("initial: F\nF -> F F")

        assert plant.run_settings.iterations == config.default_iterations

    def test_comments_and_blank_lines(self) -> None:
        """Test that comments are stripped wherever they start."""
        plant = parse_plant("\n# header\n  n = 1   # one step\n\ninitial: F # axiom\nF -> F F # double\n")

        assert str(plant.axiom) == "F"
        assert str(plant.system.derive(plant.axiom, plant.run_settings)) == "F F"

    def test_derive_and_draw(self, bush_text: str) -> None:
        """Test the full pipeline from text to a path."""
        plant = parse_plant(bush_text)

        derived = plant.system.derive(plant.axiom, plant.run_settings)
        path = TurtleInterpreter(plant.interpretation).interpret(derived)

        assert len(path) == derived.symbols.count(plant.system.get_symbol("F"))
        assert len(path) > 0

    @pytest.mark.parametrize(
        ("text", "match"),
        [
            ("", "empty"),
            ("n = 2\ninitial: F", "no productions"),
            ("n = 2\nF -> F F", "no initial"),
            ("initial: F\ninitial: F\nF -> F", "twice"),
            ("colour = red\ninitial: F\nF -> F", "unrecognised"),
            ("n = two\ninitial: F\nF -> F", "expects a int"),
            ("initial: F\nF F F", "line 2"),
        ],
    )
    def test_malformed_plants(self, text: str, match: str) -> None:
        """Test that malformed files raise ParsingError with a useful message."""
        with pytest.raises(ParsingError, match=match):
            parse_plant(text)

    def test_invalid_values(self) -> None:
        """Test that well-formed but invalid numbers are invalid settings."""
        with pytest.raises(InvalidSettingsError):
            parse_plant("step = 0\ninitial: F\nF -> F")
        with pytest.raises(InvalidSettingsError):
            parse_plant("n = -1\ninitial: F\nF -> F")


class TestLoadPlant:
    """Tests for load_plant."""

    def test_load_file(self, bush_file: Path) -> None:
        """Test reading a plant from disk."""
        plant = load_plant(bush_file)

        assert plant.run_settings.iterations == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that read failures become IoError."""
        with pytest.raises(IoError):
            load_plant(tmp_path / "missing.plant")

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Test that bytes which are not UTF-8 become ParsingError."""
        plant = tmp_path / "latin.plant"
        plant.write_bytes(b"initial: X\nX -> \xff\xfe F\n")

        with pytest.raises(ParsingError, match="not valid UTF-8"):
            load_plant(plant)

    def test_example_plants_parse(self, plants_dir: Path) -> None:
        """Test that every shipped example is a valid plant."""
        files = sorted(plants_dir.glob("*.plant"))

        assert files
        for file in files:
            plant = load_plant(file)
            assert plant.system.production_len() > 0
