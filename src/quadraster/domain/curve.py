"""Core geometric types for curve representation.

This module defines the fundamental geometric types consumed by the rasterizer:
- Point: A 2D point in curve space
- QuadraticSegment: One quadratic Bezier arc (start, control, end)
- CurveSet: The immutable collection of segments rendered in one pass
- BoundingBox: Axis-aligned extent of a curve set
- SampleAxis: Enum selecting the scan axis of a coverage ray
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import numpy as np
import numpy.typing as npt


class SampleAxis(Enum):
    """Scan axis of a coverage ray.

    - HORIZONTAL: the ray runs along +x, crossings are solved in y
    - VERTICAL: the ray runs along +y, crossings are solved in x
    """

    HORIZONTAL = auto()
    VERTICAL = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D curve space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate (font units or unit-square units)
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def midpoint(self, other: "Point") -> "Point":
        """Return the float midpoint between this point and another."""
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class QuadraticSegment:
    """A quadratic Bezier arc.

    The arc is B(t) = p1 (1-t)^2 + 2 p2 t (1-t) + p3 t^2 for t in [0, 1].
    Straight lines are stored as degenerate arcs whose control point is the
    midpoint of the endpoints, so one solver handles lines and curves.

    Attributes:
        p1: Start point
        p2: Control point
        p3: End point
    """

    p1: Point
    p2: Point
    p3: Point

    @classmethod
    def from_line(cls, start: Point, end: Point) -> "QuadraticSegment":
        """Build a degenerate segment representing a straight line."""
        return cls(start, start.midpoint(end), end)

    def points(self) -> tuple[Point, Point, Point]:
        """Return the defining points in order."""
        return (self.p1, self.p2, self.p3)

    def reversed(self) -> "QuadraticSegment":
        """Return the same arc traversed in the opposite direction."""
        return QuadraticSegment(self.p3, self.p2, self.p1)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "p1": self.p1.to_dict(),
            "p2": self.p2.to_dict(),
            "p3": self.p3.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuadraticSegment":
        """Deserialize from dictionary."""
        return cls(
            p1=Point.from_dict(data["p1"]),
            p2=Point.from_dict(data["p2"]),
            p3=Point.from_dict(data["p3"]),
        )

    def __str__(self) -> str:
        return (
            f"({self.p1.x}, {self.p1.y}), ({self.p2.x}, {self.p2.y}), "
            f"({self.p3.x}, {self.p3.y})"
        )


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Smallest x coordinate
        min_y: Smallest y coordinate
        max_x: Largest x coordinate
        max_y: Largest y coordinate
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> "BoundingBox":
        """Return the identity box for folds (contains nothing)."""
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @property
    def is_empty(self) -> bool:
        """True if no point has been included yet."""
        return self.min_x > self.max_x or self.min_y > self.max_y

    def include(self, *points: Point) -> "BoundingBox":
        """Return a box enlarged to contain the given points."""
        if not points:
            return self
        return BoundingBox(
            min(self.min_x, *(p.x for p in points)),
            min(self.min_y, *(p.y for p in points)),
            max(self.max_x, *(p.x for p in points)),
            max(self.max_y, *(p.y for p in points)),
        )

    @property
    def origin(self) -> Point:
        """Lower-left corner."""
        return Point(self.min_x, self.min_y)

    @property
    def pixel_width(self) -> int:
        """Image width covering the box, one pixel per curve unit.

        Both bounds are truncated toward zero before subtracting.
        """
        if self.is_empty:
            return 0
        return int(self.max_x) - int(self.min_x)

    @property
    def pixel_height(self) -> int:
        """Image height covering the box, one pixel per curve unit."""
        if self.is_empty:
            return 0
        return int(self.max_y) - int(self.min_y)

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True, slots=True)
class CurveSet:
    """Immutable ordered collection of quadratic segments for one render.

    Segment order is preserved for determinism but carries no meaning: every
    segment contributes to coverage independently, and contours are never
    required to close.

    Attributes:
        segments: The quadratic segments
    """

    segments: tuple[QuadraticSegment, ...] = ()

    @classmethod
    def of(cls, segments: Iterable[QuadraticSegment]) -> "CurveSet":
        """Build a curve set from any iterable of segments."""
        return cls(tuple(segments))

    @classmethod
    def from_points(
        cls, triples: Iterable[tuple[tuple[float, float], ...]]
    ) -> "CurveSet":
        """Build a curve set from ((x1, y1), (x2, y2), (x3, y3)) triples."""
        segments = []
        for p1, p2, p3 in triples:
            segments.append(QuadraticSegment(Point(*p1), Point(*p2), Point(*p3)))
        return cls(tuple(segments))

    def __iter__(self) -> Iterator[QuadraticSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def reversed_winding(self) -> "CurveSet":
        """Return the curve set with every segment traversed backwards."""
        return CurveSet(tuple(segment.reversed() for segment in self.segments))

    def bounding_box(self) -> BoundingBox:
        """Bounding box over all defining points, control points included."""
        box = BoundingBox.empty()
        for segment in self.segments:
            box = box.include(*segment.points())
        return box

    def as_array(self) -> npt.NDArray[np.float64]:
        """Return the segments as an (N, 3, 2) float array."""
        if not self.segments:
            return np.zeros((0, 3, 2), dtype=np.float64)
        return np.array(
            [[p.to_tuple() for p in segment.points()] for segment in self.segments],
            dtype=np.float64,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"segments": [segment.to_dict() for segment in self.segments]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurveSet":
        """Deserialize from dictionary."""
        return cls(tuple(QuadraticSegment.from_dict(s) for s in data["segments"]))
