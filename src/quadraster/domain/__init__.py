"""Domain models for quadraster.

This module contains the data the rasterizer consumes. All models are:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (parallel band rendering)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D point in curve space
- QuadraticSegment: One quadratic Bezier arc
- CurveSet: The segments of one render
- BoundingBox: Extent of a curve set
- Outline: A decomposed glyph (curve set, bounding box, dropped cubics)
- MoveTo, LineTo, QuadTo, CubicTo, ClosePath: Path operations
"""

from quadraster.domain.curve import (
    BoundingBox,
    CurveSet,
    Point,
    QuadraticSegment,
    SampleAxis,
)
from quadraster.domain.path import (
    ClosePath,
    CubicTo,
    LineTo,
    MoveTo,
    Outline,
    PathOp,
    QuadTo,
)

__all__: list[str] = [
    # Enums
    "SampleAxis",
    # Core types
    "Point",
    "QuadraticSegment",
    "CurveSet",
    "BoundingBox",
    "Outline",
    # Path operations
    "PathOp",
    "MoveTo",
    "LineTo",
    "QuadTo",
    "CubicTo",
    "ClosePath",
]
