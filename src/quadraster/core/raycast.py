"""Single-axis coverage rays against quadratic Bezier segments.

This module computes the signed coverage contribution of a whole curve set
along one scan axis at one sample point. A ray leaves the sample along +x
(horizontal axis) or +y (vertical axis). Every segment crossing the ray's line
contributes a softened value instead of a hard 0/1 count: the crossing's
offset along the ray, measured in pixels, is shifted by half a pixel and
clamped to [0, 1]. Crossings far ahead of the sample add a full +-1, crossings
behind it add nothing, and crossings within a pixel add a fraction. That
fraction is the anti-aliasing.

Crossing classification uses a 16-entry lookup table indexed by the sign
pattern of the segment's three points along the crossing axis. The table
selects which of the two quadratic roots are genuine crossings and with which
orientation, without testing the roots against [0, 1].

All functions accept numpy arrays of sample coordinates and broadcast over
them; the scalar API is the 0-d case.

Example:
    >>> from quadraster.domain import CurveSet, Point, SampleAxis
    >>> line = CurveSet.from_points([((1.0, 1.0), (1.0, 0.5), (1.0, 0.0))])
    >>> trace(line, Point(1.0, 0.5), scale=100.0, axis=SampleAxis.HORIZONTAL)
    0.5
"""

from typing import NamedTuple

import numpy as np
import numpy.typing as npt

from quadraster.domain import CurveSet, Point, SampleAxis

ArrayLike = float | npt.NDArray[np.float64]

# Below this magnitude the quadratic coefficient is treated as zero and the
# root falls back to the linear solution.
LINEAR_EPSILON = 1e-4

# Flag bits stored in CROSSING_TABLE entries.
ASCENDING = 1
DESCENDING = 2

# Entry i is (0x2E74 >> i) & 3. Only even indices are reachable:
#   code  y1>0 y2>0 y3>0   t1  t2
#     0    -    -    -     -   -
#     2    x    -    -     x   -
#     4    -    x    -     x   x
#     6    x    x    -     x   -
#     8    -    -    x     -   x
#    10    x    -    x     x   x
#    12    -    x    x     -   x
#    14    x    x    x     -   -
CROSSING_TABLE: tuple[int, ...] = (
    0, 2, 1, 2, 3, 3, 1, 0,
    2, 3, 3, 1, 2, 1, 0, 0,
)

_CROSSING_LOOKUP = np.array(CROSSING_TABLE, dtype=np.uint8)


class Crossings(NamedTuple):
    """Roots of one segment against one ray.

    Attributes:
        t1: Root checked by the ASCENDING flag
        t2: Root checked by the DESCENDING flag
        flags: Bitwise OR of ASCENDING/DESCENDING for the valid roots
    """

    t1: ArrayLike
    t2: ArrayLike
    flags: int | npt.NDArray[np.uint8]


def sign_code(y1: ArrayLike, y2: ArrayLike, y3: ArrayLike) -> npt.NDArray[np.intp]:
    """Encode the sign pattern of a segment along the crossing axis.

    Uses a strictly-positive test, so the low bit is never set.

    Returns:
        2*[y1 > 0] + 4*[y2 > 0] + 8*[y3 > 0]
    """
    return (
        2 * (np.asarray(y1) > 0.0).astype(np.intp)
        + 4 * (np.asarray(y2) > 0.0).astype(np.intp)
        + 8 * (np.asarray(y3) > 0.0).astype(np.intp)
    )


def crossing_flags(code: int | npt.NDArray[np.intp]) -> int | npt.NDArray[np.uint8]:
    """Look up the valid-root flags for a sign code."""
    return _CROSSING_LOOKUP[code]


def eval_quadratic(
    v1: ArrayLike, v2: ArrayLike, v3: ArrayLike, t: ArrayLike
) -> ArrayLike:
    """Evaluate one coordinate of a quadratic Bezier at parameter t."""
    it = 1.0 - t
    return it * it * v1 + 2.0 * t * it * v2 + t * t * v3


def _roots(
    a: float, b: float, c: ArrayLike, epsilon: float
) -> tuple[ArrayLike, ArrayLike] | None:
    """Solve a*t^2 - 2*b*t + c = 0.

    Returns None when the segment is flat along the crossing axis, which
    means it runs parallel to the ray and cannot cross it.
    """
    if abs(a) < epsilon:
        if abs(b) < epsilon:
            return None
        t = c / (2.0 * b)
        return t, t

    root = np.sqrt(np.maximum(b * b - a * c, 0.0))
    return (b - root) / a, (b + root) / a


def solve_crossings(
    y1: ArrayLike,
    y2: ArrayLike,
    y3: ArrayLike,
    *,
    epsilon: float = LINEAR_EPSILON,
    coefficients: tuple[float, float] | None = None,
) -> Crossings:
    """Find the crossing parameters of a segment with the line y = 0.

    Args:
        y1: Start point height relative to the sample
        y2: Control point height relative to the sample
        y3: End point height relative to the sample
        epsilon: Threshold below which a coefficient counts as zero
        coefficients: Precomputed (a, b). Both are differences of heights,
            so grid callers compute them once from curve-space coordinates.

    Returns:
        Crossings with both roots and the lookup-table flags. A segment
        parallel to the ray yields NaN roots and no flags.
    """
    if coefficients is None:
        a, b = float(y1 - 2.0 * y2 + y3), float(y1 - y2)
    else:
        a, b = coefficients

    roots = _roots(a, b, y1, epsilon)
    if roots is None:
        return Crossings(float("nan"), float("nan"), 0)
    return Crossings(roots[0], roots[1], crossing_flags(sign_code(y1, y2, y3)))


def _segment_coverage(
    ray: tuple[ArrayLike, ArrayLike, ArrayLike],
    crossings: Crossings,
    scale: float,
) -> ArrayLike:
    if not np.any(crossings.flags):
        return 0.0

    x1, x2, x3 = ray
    r1 = np.clip(eval_quadratic(x1, x2, x3, crossings.t1) * scale + 0.5, 0.0, 1.0)
    r2 = np.clip(eval_quadratic(x1, x2, x3, crossings.t2) * scale + 0.5, 0.0, 1.0)

    return (
        np.where(crossings.flags & ASCENDING, r1, 0.0)
        - np.where(crossings.flags & DESCENDING, r2, 0.0)
    )


def trace_grid(
    curves: CurveSet,
    xs: ArrayLike,
    ys: ArrayLike,
    scale: float,
    axis: SampleAxis = SampleAxis.HORIZONTAL,
    *,
    epsilon: float = LINEAR_EPSILON,
) -> npt.NDArray[np.float64]:
    """Trace coverage rays from many sample points at once.

    Args:
        curves: Segments to test against
        xs: Sample x coordinates (broadcast against ys)
        ys: Sample y coordinates
        scale: Pixels per curve unit along the ray
        axis: Scan axis of the ray
        epsilon: Threshold for the linear root fallback

    Returns:
        Signed, unclamped coverage per sample (broadcast shape of xs, ys)
    """
    xs, ys = np.broadcast_arrays(
        np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
    )
    coverage = np.zeros(xs.shape, dtype=np.float64)

    for segment in curves:
        p1, p2, p3 = segment.points()

        if axis is SampleAxis.VERTICAL:
            ray = (p1.y - ys, p2.y - ys, p3.y - ys)
            cross = (p1.x - xs, p2.x - xs, p3.x - xs)
            c1, c2, c3 = p1.x, p2.x, p3.x
        else:
            ray = (p1.x - xs, p2.x - xs, p3.x - xs)
            cross = (p1.y - ys, p2.y - ys, p3.y - ys)
            c1, c2, c3 = p1.y, p2.y, p3.y

        # a and b do not depend on the sample position.
        crossings = solve_crossings(
            *cross, epsilon=epsilon, coefficients=(c1 - 2.0 * c2 + c3, c1 - c2)
        )
        coverage += _segment_coverage(ray, crossings, scale)

    return coverage


def trace(
    curves: CurveSet,
    sample: Point,
    scale: float,
    axis: SampleAxis = SampleAxis.HORIZONTAL,
    *,
    epsilon: float = LINEAR_EPSILON,
) -> float:
    """Trace one coverage ray from a sample point.

    Args:
        curves: Segments to test against
        sample: Ray origin in curve space
        scale: Pixels per curve unit along the ray
        axis: Scan axis of the ray
        epsilon: Threshold for the linear root fallback

    Returns:
        Signed, unclamped coverage. Its magnitude approaches the winding
        number of the sample; the caller clamps.
    """
    return float(trace_grid(curves, sample.x, sample.y, scale, axis, epsilon=epsilon))
