"""Basic 2D geometry for turtle output.

Py Ver:     3.12
Status:     Stable

Notes
-----
    * ``Point`` and ``Vector`` are immutable; arithmetic returns new values.
    * Angles are in degrees, positive is counter-clockwise.
    * A ``Path`` is a fresh, ordered, read-only sequence of edges.
"""

from __future__ import annotations

# Standard library
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload

# Third-party libraries
import numpy as np
import numpy.typing as npt

# Global constants
EPS = 1e-9


@dataclass(frozen=True, slots=True)
class Vector:
    dx: float
    dy: float

    @classmethod
    def zero(cls) -> Vector:
        return cls(0.0, 0.0)

    @classmethod
    def up(cls) -> Vector:
        return cls(0.0, 1.0)

    @classmethod
    def from_angle(cls, degrees: float, length: float = 1.0) -> Vector:
        theta = math.radians(degrees)
        return cls(length * math.cos(theta), length * math.sin(theta))

    def norm(self) -> float:
        return math.hypot(self.dx, self.dy)

    def normalized(self) -> Vector:
        norm = self.norm()
        if norm < EPS:
            msg = "cannot normalise a zero-length vector"
            raise ValueError(msg)
        return Vector(self.dx / norm, self.dy / norm)

    def dot(self, other: Vector) -> float:
        return self.dx * other.dx + self.dy * other.dy

    def rotate(self, degrees: float) -> Vector:
        """Rotate counter-clockwise by ``degrees``."""
        theta = math.radians(degrees)
        cos, sin = math.cos(theta), math.sin(theta)
        return Vector(cos * self.dx - sin * self.dy, sin * self.dx + cos * self.dy)

    def angle(self) -> float:
        """Heading in degrees, counter-clockwise from the positive x axis."""
        return math.degrees(math.atan2(self.dy, self.dx))

    def __add__(self, other: object) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.dx + other.dx, self.dy + other.dy)
        return NotImplemented

    def __sub__(self, other: object) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.dx - other.dx, self.dy - other.dy)
        return NotImplemented

    def __neg__(self) -> Vector:
        return Vector(-self.dx, -self.dy)

    def __mul__(self, scale: float) -> Vector:
        if isinstance(scale, (int, float)):
            return Vector(self.dx * scale, self.dy * scale)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> Vector:
        if isinstance(scale, (int, float)):
            return Vector(self.dx / scale, self.dy / scale)
        return NotImplemented


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float

    @classmethod
    def origin(cls) -> Point:
        return cls(0.0, 0.0)

    def __add__(self, other: object) -> Point:
        if isinstance(other, Vector):
            return Point(self.x + other.dx, self.y + other.dy)
        return NotImplemented

    @overload
    def __sub__(self, other: Point) -> Vector: ...

    @overload
    def __sub__(self, other: Vector) -> Point: ...

    def __sub__(self, other: object) -> Point | Vector:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        if isinstance(other, Vector):
            return Point(self.x - other.dx, self.y - other.dy)
        return NotImplemented

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: Point, tol: float = EPS) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True, slots=True)
class Edge:
    start: Point
    end: Point

    @property
    def vector(self) -> Vector:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


@dataclass(frozen=True, slots=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)


class Path(Sequence[Edge]):
    """Edges in the order they were drawn."""

    __slots__ = ("_edges",)

    def __init__(self, edges: Iterable[Edge] = ()) -> None:
        self._edges: tuple[Edge, ...] = tuple(edges)

    @overload
    def __getitem__(self, index: int) -> Edge: ...

    @overload
    def __getitem__(self, index: slice) -> Path: ...

    def __getitem__(self, index: int | slice) -> Edge | Path:
        if isinstance(index, slice):
            return Path(self._edges[index])
        return self._edges[index]

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._edges == other._edges

    def __hash__(self) -> int:
        return hash(self._edges)

    def __repr__(self) -> str:
        return f"Path({len(self._edges)} edges)"

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    def total_length(self) -> float:
        return sum(edge.length for edge in self._edges)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Edges as an ``(n, 2, 2)`` array of ``[[x0, y0], [x1, y1]]``."""
        if not self._edges:
            return np.empty((0, 2, 2), dtype=np.float64)
        return np.array(
            [[[e.start.x, e.start.y], [e.end.x, e.end.y]] for e in self._edges],
            dtype=np.float64,
        )

    def bounds(self) -> Bounds | None:
        if not self._edges:
            return None
        coords = self.to_array().reshape(-1, 2)
        low = coords.min(axis=0)
        high = coords.max(axis=0)
        return Bounds(float(low[0]), float(low[1]), float(high[0]), float(high[1]))

    def polylines(self) -> list[list[Point]]:
        """Maximal runs of edges where each one starts where the previous ended."""
        lines: list[list[Point]] = []
        for edge in self._edges:
            if lines and lines[-1][-1].is_close(edge.start):
                lines[-1].append(edge.end)
            else:
                lines.append([edge.start, edge.end])
        return lines

    def points(self) -> list[Point]:
        """Distinct end points in first-seen order."""
        seen: dict[Point, None] = {}
        for edge in self._edges:
            seen.setdefault(edge.start)
            seen.setdefault(edge.end)
        return list(seen)
