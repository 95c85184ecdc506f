"""Dual-axis coverage compositing.

A single ray measures coverage exactly only for edges perpendicular to it.
Averaging a horizontal and a vertical ray approximates area coverage for
arbitrary edge orientations without polygon clipping or supersampling.
"""

import numpy as np
import numpy.typing as npt

from quadraster.core.raycast import LINEAR_EPSILON, ArrayLike, trace_grid
from quadraster.domain import CurveSet, Point, SampleAxis


def composite_grid(
    curves: CurveSet,
    xs: ArrayLike,
    ys: ArrayLike,
    scale_h: float,
    scale_v: float,
    *,
    epsilon: float = LINEAR_EPSILON,
) -> npt.NDArray[np.float64]:
    """Combine horizontal and vertical coverage for many samples.

    Args:
        curves: Segments to rasterize
        xs: Sample x coordinates
        ys: Sample y coordinates
        scale_h: Pixels per curve unit for the horizontal ray
        scale_v: Pixels per curve unit for the vertical ray
        epsilon: Threshold for the linear root fallback

    Returns:
        Coverage in [0, 1] per sample
    """
    coverage_h = trace_grid(curves, xs, ys, scale_h, SampleAxis.HORIZONTAL, epsilon=epsilon)
    coverage_v = trace_grid(curves, xs, ys, scale_v, SampleAxis.VERTICAL, epsilon=epsilon)

    coverage_h = np.minimum(np.abs(coverage_h), 1.0)
    coverage_v = np.minimum(np.abs(coverage_v), 1.0)
    return (coverage_h + coverage_v) / 2.0


def composite(
    curves: CurveSet,
    sample: Point,
    scale_h: float,
    scale_v: float,
    *,
    epsilon: float = LINEAR_EPSILON,
) -> float:
    """Estimate the coverage of the pixel at one sample point."""
    return float(composite_grid(curves, sample.x, sample.y, scale_h, scale_v, epsilon=epsilon))
