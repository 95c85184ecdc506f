"""Core coverage algorithms for quadraster.

This module contains the core algorithms for:

- Single-axis coverage rays (root solving, sign-pattern lookup, softened
  crossing accumulation)
- Dual-axis coverage compositing
- Pixel-grid rasterization and color mapping

All functions are:
- Stateless (safe for use in worker processes)
- Vectorized over numpy arrays of sample points

Key functions:
- trace / trace_grid: Signed coverage of one ray
- composite / composite_grid: Pixel coverage in [0, 1]
- colorize: Coverage to tinted RGBA
- render_band: Picklable band renderer

Key classes:
- Rasterizer: Renders curve sets and outlines to coverage buffers
"""

from quadraster.core.compositor import composite, composite_grid
from quadraster.core.rasterizer import (
    Rasterizer,
    colorize,
    render_band,
    sample_coordinates,
)
from quadraster.core.raycast import (
    ASCENDING,
    CROSSING_TABLE,
    DESCENDING,
    LINEAR_EPSILON,
    Crossings,
    crossing_flags,
    eval_quadratic,
    sign_code,
    solve_crossings,
    trace,
    trace_grid,
)

__all__ = [
    # Constants
    "ASCENDING",
    "CROSSING_TABLE",
    "DESCENDING",
    "LINEAR_EPSILON",
    # Ray casting
    "Crossings",
    "crossing_flags",
    "eval_quadratic",
    "sign_code",
    "solve_crossings",
    "trace",
    "trace_grid",
    # Compositing
    "composite",
    "composite_grid",
    # Rasterization
    "Rasterizer",
    "colorize",
    "render_band",
    "sample_coordinates",
]
