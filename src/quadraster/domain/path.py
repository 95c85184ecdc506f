"""Path operations and decomposed outlines.

A glyph outline is decomposed into a finite stream of path operations, which
is then folded into an immutable Outline. The operation vocabulary mirrors the
events of a font outline decomposer: move, line, quadratic, cubic and close.
"""

from dataclasses import dataclass

from quadraster.domain.curve import BoundingBox, CurveSet, Point


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new contour at `to`."""

    to: Point


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight line from the current point to `to`."""

    to: Point


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic Bezier from the current point through `control` to `to`."""

    control: Point
    to: Point


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier from the current point to `to`.

    Observed during decomposition but never rasterized.
    """

    control1: Point
    control2: Point
    to: Point


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current contour."""


PathOp = MoveTo | LineTo | QuadTo | CubicTo | ClosePath


@dataclass(frozen=True, slots=True)
class Outline:
    """Result of folding a path operation stream.

    Attributes:
        curves: Quadratic segments ready for rasterization
        bbox: Extent of every point that entered the curve set
        dropped_cubics: Number of cubic segments that were skipped
        name: Glyph name (empty for anonymous outlines)
    """

    curves: CurveSet
    bbox: BoundingBox
    dropped_cubics: int = 0
    name: str = ""

    def is_empty(self) -> bool:
        """True if the outline produced no segments."""
        return len(self.curves) == 0
