"""SVG text for turtle paths.

The drawing is fitted to the canvas: the path's bounding box is centred and
uniformly scaled, and the y axis is flipped so "up" in turtle space is up on
screen. Only the document text is produced; writing it anywhere is up to
the caller.

References
----------
    [1] https://developer.mozilla.org/en-US/docs/Web/SVG/Tutorial/Paths
"""

from __future__ import annotations

# Standard library
from xml.sax.saxutils import quoteattr

# Local libraries
from lsystems.errors import InvalidSettingsError
from lsystems.geometry.primitives import Path, Point
from lsystems.parameters import config

SVG_NS = "http://www.w3.org/2000/svg"


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def polyline_data(points: list[Point]) -> str:
    """``d`` attribute for one polyline: a move followed by line segments."""
    first, *rest = points
    parts = [f"M{_fmt(first.x)} {_fmt(first.y)}"]
    parts.extend(f"L{_fmt(p.x)} {_fmt(p.y)}" for p in rest)
    return " ".join(parts)


def fit_transform(path: Path, width: int, height: int) -> str:
    """``transform`` attribute mapping the path's bounds onto the canvas."""
    bounds = path.bounds()
    if bounds is None:
        return ""
    scales = [
        size / extent
        for size, extent in ((width, bounds.width), (height, bounds.height))
        if extent > 0
    ]
    scale = min(scales) if scales else 1.0
    center = bounds.center
    return (
        f"translate({_fmt(width / 2)} {_fmt(height / 2)}) "
        f"scale({_fmt(scale)} {_fmt(-scale)}) "
        f"translate({_fmt(-center.x)} {_fmt(-center.y)})"
    )


def path_to_svg(
    path: Path,
    width: int | None = None,
    height: int | None = None,
    stroke: str | None = None,
    stroke_width: float | None = None,
) -> str:
    width = config.svg_width if width is None else width
    height = config.svg_height if height is None else height
    stroke = config.svg_stroke if stroke is None else stroke
    stroke_width = config.svg_stroke_width if stroke_width is None else stroke_width
    if width <= 0 or height <= 0:
        msg = f"canvas must have a positive size, got {width}x{height}"
        raise InvalidSettingsError(msg)

    elements = [
        f'<path d="{polyline_data(points)}"/>' for points in path.polylines()
    ]
    group_attrs = [
        f"stroke={quoteattr(stroke)}",
        f'stroke-width="{_fmt(stroke_width)}"',
        'fill="none"',
        'vector-effect="non-scaling-stroke"',
    ]
    transform = fit_transform(path, width, height)
    if transform:
        group_attrs.append(f'transform="{transform}"')

    return (
        f'<svg version="1.1" width="{width}" height="{height}" xmlns="{SVG_NS}">'
        f"<g {' '.join(group_attrs)}>"
        f"{''.join(elements)}"
        "</g></svg>"
    )
