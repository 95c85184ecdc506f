"""Glyph outline decomposition.

This module turns fonttools glyphs into curve sets in two steps:

1. decompose() draws the glyph into a pen and yields a finite stream of
   path operations (MoveTo, LineTo, QuadTo, CubicTo, ClosePath).
2. fold_outline() reduces that stream with a stateless step function into an
   immutable Outline (curve set, bounding box, dropped cubic count).

Lines become degenerate quadratics whose control point is the midpoint of the
endpoints. Cubic segments are counted and skipped: only quadratic outlines
are rasterized.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Any

import structlog
from fontTools.pens.basePen import BasePen

from quadraster.domain import (
    BoundingBox,
    ClosePath,
    CubicTo,
    CurveSet,
    LineTo,
    MoveTo,
    Outline,
    PathOp,
    Point,
    QuadraticSegment,
    QuadTo,
)


def _point(pt: tuple[float, float]) -> Point:
    return Point(float(pt[0]), float(pt[1]))


class PathOpPen(BasePen):
    """Pen recording drawing calls as path operations.

    BasePen splits TrueType runs of consecutive off-curve points into single
    quadratic steps (including contours with no on-curve point) and draws
    components through the glyph set, so every recorded QuadTo is one arc.
    """

    def __init__(self, glyphSet: Any = None) -> None:  # noqa: N803
        super().__init__(glyphSet)
        self.ops: list[PathOp] = []

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.ops.append(MoveTo(_point(pt)))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.ops.append(LineTo(_point(pt)))

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.ops.append(QuadTo(_point(pt1), _point(pt2)))

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.ops.append(CubicTo(_point(pt1), _point(pt2), _point(pt3)))

    def _closePath(self) -> None:
        self.ops.append(ClosePath())


def decompose(glyph: Any, glyph_set: Any = None) -> Iterator[PathOp]:
    """Yield the path operations of a fonttools glyph.

    Args:
        glyph: Any object with a draw(pen) method (e.g. a GlyphSet entry)
        glyph_set: Glyph set used to resolve components

    Yields:
        Path operations in drawing order
    """
    log = structlog.get_logger(__name__)
    pen = PathOpPen(glyph_set)
    glyph.draw(pen)

    for op in pen.ops:
        log.debug("Path op", op=str(op))
        yield op


# Segments are chained as (segment, previous) pairs so each step appends
# without copying; fold_outline unwinds the chain once.
_Chain = tuple[QuadraticSegment, "_Chain"] | None


@dataclass(frozen=True, slots=True)
class _FoldState:
    chain: _Chain = None
    bbox: BoundingBox = field(default_factory=BoundingBox.empty)
    current: Point | None = None
    start: Point | None = None
    dropped_cubics: int = 0


def _require_current(state: _FoldState, op: PathOp) -> Point:
    if state.current is None:
        raise ValueError(f"{type(op).__name__} without a current point")
    return state.current


def _unwind(chain: _Chain) -> tuple[QuadraticSegment, ...]:
    segments: list[QuadraticSegment] = []
    while chain is not None:
        segment, chain = chain
        segments.append(segment)
    return tuple(reversed(segments))


def _step(state: _FoldState, op: PathOp) -> _FoldState:
    """Apply one path operation to the fold state."""
    if isinstance(op, MoveTo):
        return replace(state, bbox=state.bbox.include(op.to), current=op.to, start=op.to)

    if isinstance(op, LineTo):
        current = _require_current(state, op)
        return replace(
            state,
            chain=(QuadraticSegment.from_line(current, op.to), state.chain),
            bbox=state.bbox.include(op.to),
            current=op.to,
        )

    if isinstance(op, QuadTo):
        current = _require_current(state, op)
        return replace(
            state,
            chain=(QuadraticSegment(current, op.control, op.to), state.chain),
            bbox=state.bbox.include(op.control, op.to),
            current=op.to,
        )

    if isinstance(op, CubicTo):
        _require_current(state, op)
        return replace(state, current=op.to, dropped_cubics=state.dropped_cubics + 1)

    if isinstance(op, ClosePath):
        chain = state.chain
        # fonttools leaves the closing line implicit.
        if state.current is not None and state.start is not None and state.current != state.start:
            chain = (QuadraticSegment.from_line(state.current, state.start), chain)
        return replace(state, chain=chain, current=None, start=None)

    raise TypeError(f"Unknown path operation: {op!r}")


def fold_outline(ops: Iterable[PathOp], name: str = "") -> Outline:
    """Reduce path operations into an immutable outline.

    Cubic segments are not rasterized; when the stream contains any, a
    warning with their count is logged.

    Args:
        ops: Path operations in drawing order
        name: Glyph name recorded on the outline

    Returns:
        Outline with the quadratic curve set, its bounding box (control
        points included, cubic points excluded) and the dropped cubic count

    Raises:
        ValueError: If a drawing operation precedes any MoveTo
    """
    state = reduce(_step, ops, _FoldState())

    if state.dropped_cubics:
        structlog.get_logger(__name__).warning(
            "Cubic segments dropped",
            glyph=name,
            count=state.dropped_cubics,
        )

    return Outline(
        curves=CurveSet(_unwind(state.chain)),
        bbox=state.bbox,
        dropped_cubics=state.dropped_cubics,
        name=name,
    )
