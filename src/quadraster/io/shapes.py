"""Literal shape definitions in the unit square.

Shapes here are rendered with normalized sampling, where the output image
spans [0, 1] on both axes.
"""

from collections.abc import Callable

from quadraster.domain import CurveSet


def reference_blobs() -> CurveSet:
    """Two closed blobs inside [0.3, 0.3]-[0.95, 0.7].

    A lens bounded by two quadratics and a thin rectangle of four segments
    whose horizontal edges use off-center control points.
    """
    return CurveSet.from_points(
        [
            ((0.3, 0.3), (0.5, 0.5), (0.3, 0.7)),
            ((0.3, 0.7), (1.0, 0.5), (0.3, 0.3)),
            ((0.9, 0.3), (0.9, 0.5), (0.9, 0.7)),
            ((0.9, 0.7), (0.93, 0.7), (0.95, 0.7)),
            ((0.95, 0.7), (0.95, 0.5), (0.95, 0.3)),
            ((0.95, 0.3), (0.93, 0.3), (0.9, 0.3)),
        ]
    )


def unit_diamond() -> CurveSet:
    """A diamond centered in the unit square, built from straight lines."""
    return CurveSet.from_points(
        [
            ((0.5, 0.1), (0.7, 0.3), (0.9, 0.5)),
            ((0.9, 0.5), (0.7, 0.7), (0.5, 0.9)),
            ((0.5, 0.9), (0.3, 0.7), (0.1, 0.5)),
            ((0.1, 0.5), (0.3, 0.3), (0.5, 0.1)),
        ]
    )


SHAPES: dict[str, Callable[[], CurveSet]] = {
    "blobs": reference_blobs,
    "diamond": unit_diamond,
}
