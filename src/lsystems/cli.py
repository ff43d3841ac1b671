"""Command line front end.

Usage
-----
    lsystem derive plants/bush.plant -o bush.svg
    lsystem derive plants/bush.plant -o bush --format json
    lsystem -v derive plants/weed.plant -o weed.png --format png
    lsystem describe

Notes
-----
    * This is the only place that prints. Library errors are shown in red
      on stderr and turned into exit code 1.
"""

from __future__ import annotations

# Standard library
import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

# Third-party libraries
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.traceback import install

# Local libraries
from lsystems.errors import IoError, LSystemError
from lsystems.grammar.family import abop_family, get_or_init_family
from lsystems.interpretation.graph import graph_to_json, path_to_digraph
from lsystems.interpretation.plant import load_plant
from lsystems.interpretation.plotting import draw_path
from lsystems.interpretation.svg import path_to_svg
from lsystems.interpretation.turtle import TurtleInterpreter
from lsystems.parameters import config

# Global constants
FORMATS = ("svg", "json", "text", "png")
SUFFIXES = {"svg": ".svg", "png": ".png"}

# Global functions
install(width=180)
console = Console()
err_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lsystem",
        description="Derive and draw L-systems.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each stage of the run",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    derive_parser = subparsers.add_parser(
        "derive",
        help="Derive a plant file and write the result",
    )
    derive_parser.add_argument("file", type=Path, help="Plant file to read")
    derive_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Output file",
    )
    derive_parser.add_argument(
        "--width",
        type=int,
        default=config.svg_width,
        help="SVG canvas width",
    )
    derive_parser.add_argument(
        "--height",
        type=int,
        default=config.svg_height,
        help="SVG canvas height",
    )
    derive_parser.add_argument(
        "--format",
        choices=FORMATS,
        default="svg",
        help="Output format (default: svg)",
    )

    subparsers.add_parser("describe", help="List the ABOP family vocabulary")
    return parser


def output_path(output: Path, fmt: str) -> Path:
    """Force the extension expected by image formats."""
    suffix = SUFFIXES.get(fmt)
    if suffix is None or output.suffix == suffix:
        return output
    return output.with_suffix(suffix)


def run_derive(args: argparse.Namespace) -> Path:
    plant = load_plant(args.file)
    if args.verbose:
        console.log(f"Loaded {args.file}: {plant.system!r}")

    derived = plant.system.derive(plant.axiom, plant.run_settings)
    if args.verbose:
        console.log(
            f"Derived {len(derived)} symbols in "
            f"{plant.run_settings.iterations} iterations",
        )

    target = output_path(args.output, args.format)
    if args.format == "text":
        _write(target, f"{derived}\n")
        return target

    path = TurtleInterpreter(plant.interpretation).interpret(derived)
    if args.verbose:
        console.log(f"Interpreted into {len(path)} edges")

    match args.format:
        case "svg":
            _write(target, path_to_svg(path, width=args.width, height=args.height))
        case "json":
            _write(target, graph_to_json(path_to_digraph(path)))
        case "png":
            draw_path(path, title=args.file.stem, save_file=target)
    return target


def _write(target: Path, text: str) -> None:
    try:
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        msg = f"unable to write {target}: {exc.strerror or exc}"
        raise IoError(msg) from exc


def describe_table() -> Table:
    family = get_or_init_family("ABOP", abop_family)
    table = Table(title=f"{family.name} family")
    table.add_column("Symbol", style="bold cyan")
    table.add_column("Kind")
    table.add_column("Description")
    for description in family.symbols():
        table.add_row(
            escape(description.name),
            description.kind.value,
            description.description or "",
        )
    return table


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.command == "derive":
            target = run_derive(args)
            console.print(f"[green]Wrote[/green] {escape(str(target))}")
        else:
            console.print(describe_table())
    except LSystemError as exc:
        err_console.print(f"[bold red]{exc.kind.value} error:[/bold red] {escape(str(exc))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
