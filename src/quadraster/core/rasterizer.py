"""Pixel-grid rasterization of curve sets.

This module drives the coverage compositor over an output pixel grid and maps
the resulting coverage buffer to RGBA pixels.

Key components:
- sample_coordinates: Curve-space sample positions for a range of rows
- render_band: Top-level picklable function rendering a band of rows
- colorize: Coverage to tinted RGBA conversion
- Rasterizer: Orchestrates serial or band-parallel rendering
"""

import os
import time
import traceback
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

import numpy as np
import numpy.typing as npt
import structlog

from quadraster.config import RenderConfig, SampleMapping
from quadraster.core.compositor import composite_grid
from quadraster.core.raycast import LINEAR_EPSILON
from quadraster.domain import CurveSet, Outline, Point
from quadraster.exceptions import EmptyOutlineError, RenderError
from quadraster.utils import RenderLogger, RenderStats


def sample_coordinates(
    width: int,
    height: int,
    row_start: int,
    row_stop: int,
    mapping: SampleMapping,
    origin: Point,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Compute curve-space sample positions for sample rows [row_start, row_stop).

    Args:
        width: Output width in pixels
        height: Output height in pixels
        row_start: First sample row
        row_stop: One past the last sample row
        mapping: Pixel to curve-space mapping
        origin: Offset added to every sample

    Returns:
        Tuple of (xs, ys) arrays of shape (row_stop - row_start, width)
    """
    cols = np.arange(width, dtype=np.float64)
    rows = np.arange(row_start, row_stop, dtype=np.float64)

    if mapping is SampleMapping.NORMALIZED:
        cols = cols / width
        rows = rows / height

    xs, ys = np.meshgrid(cols + origin.x, rows + origin.y)
    return xs, ys


def render_band(
    curves_dict: dict[str, Any],
    width: int,
    height: int,
    row_start: int,
    row_stop: int,
    mapping: str,
    origin: tuple[float, float],
    scale: tuple[float, float],
    epsilon: float = LINEAR_EPSILON,
) -> npt.NDArray[np.float64]:
    """Render coverage for a band of sample rows.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Rows are in sample order: row 0 is the smallest curve-space y.

    Args:
        curves_dict: Serialized curve set (from CurveSet.to_dict())
        width: Output width in pixels
        height: Output height in pixels
        row_start: First sample row
        row_stop: One past the last sample row
        mapping: SampleMapping value
        origin: Sample offset as (x, y)
        scale: Ray scale as (horizontal, vertical)
        epsilon: Threshold for the linear root fallback

    Returns:
        Coverage array of shape (row_stop - row_start, width)
    """
    curves = CurveSet.from_dict(curves_dict)
    xs, ys = sample_coordinates(
        width, height, row_start, row_stop, SampleMapping(mapping), Point(*origin)
    )
    return composite_grid(curves, xs, ys, scale[0], scale[1], epsilon=epsilon)


def colorize(
    coverage: npt.NDArray[np.float64],
    tint: tuple[int, int, int] = (255, 128, 64),
) -> npt.NDArray[np.uint8]:
    """Map coverage to opaque tinted RGBA pixels.

    Each color channel is tint * coverage, truncated; alpha is always 255.

    Args:
        coverage: Coverage buffer of shape (H, W) in [0, 1]
        tint: RGB color at full coverage

    Returns:
        Pixel buffer of shape (H, W, 4) with dtype uint8
    """
    rgb = (coverage[..., np.newaxis] * np.asarray(tint, dtype=np.float64)).astype(np.uint8)
    alpha = np.full(coverage.shape + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)


class Rasterizer:
    """Renders curve sets into coverage buffers.

    The rasterizer owns the output buffer until it is returned. Pixels are
    independent, so the grid may be split into bands rendered in worker
    processes; bands write disjoint rows.

    Example:
        rasterizer = Rasterizer(RenderConfig(width=800, height=800))
        coverage = rasterizer.render(curves, Point(0.0, 0.0), 800, 800)
        pixels = rasterizer.colorize(coverage)
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        max_workers: int | None = 1,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the rasterizer.

        Args:
            config: Render settings (defaults if None)
            max_workers: Worker processes for band rendering (1 = in-process,
                None = one per CPU)
            logger: Structured logger (module default if None)
        """
        self.config = config or RenderConfig()
        self.max_workers = max_workers
        self.logger = logger or structlog.get_logger("quadraster")
        self.render_logger = RenderLogger(self.logger)

    @property
    def stats(self) -> RenderStats:
        """Statistics of the most recent render."""
        return self.render_logger.stats

    def render(
        self,
        curves: CurveSet,
        origin_offset: Point,
        width: int,
        height: int,
        *,
        mapping: SampleMapping | None = None,
        scale: tuple[float, float] | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render the coverage buffer of a curve set.

        Args:
            curves: Segments to rasterize
            origin_offset: Offset added to every sample point
            width: Output width in pixels
            height: Output height in pixels
            mapping: Pixel to curve-space mapping (config default if None)
            scale: Ray scale (config default, else (width, height))

        Returns:
            Coverage array of shape (height, width). With GLYPH mapping row 0
            holds the largest curve-space y.

        Raises:
            ValueError: If width or height is not positive
            RenderError: If a worker process fails
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Output size must be positive, got {width}x{height}")

        mapping = mapping or self.config.mapping
        scale = scale or self.config.scale or (float(width), float(height))
        workers = self._resolve_workers(height)

        self.render_logger.log_render_start(width, height, len(curves), workers)

        args = (
            width,
            height,
            mapping.value,
            origin_offset.to_tuple(),
            (float(scale[0]), float(scale[1])),
            self.config.linear_epsilon,
        )

        if workers == 1:
            coverage = self._render_serial(curves, *args)
        else:
            coverage = self._render_parallel(curves, workers, *args)

        if mapping is SampleMapping.GLYPH:
            coverage = np.ascontiguousarray(coverage[::-1])

        self.render_logger.log_render_complete(
            covered_pixels=int(np.count_nonzero(coverage > 0.0)),
            full_pixels=int(np.count_nonzero(coverage >= 1.0)),
        )
        return coverage

    def render_outline(self, outline: Outline) -> npt.NDArray[np.float64]:
        """Render a decomposed glyph in font units.

        The image spans the outline's bounding box with one pixel per font
        unit, sampled with GLYPH mapping from the box's lower-left corner.

        Raises:
            EmptyOutlineError: If the outline has no segments or its bounding
                box is narrower than a pixel
        """
        bbox = outline.bbox
        if outline.is_empty() or bbox.pixel_width <= 0 or bbox.pixel_height <= 0:
            raise EmptyOutlineError(outline.name or "<anonymous>")

        coverage = self.render(
            outline.curves,
            bbox.origin,
            bbox.pixel_width,
            bbox.pixel_height,
            mapping=SampleMapping.GLYPH,
        )
        self.render_logger.log_dropped_cubics(outline.name, outline.dropped_cubics)
        return coverage

    def colorize(self, coverage: npt.NDArray[np.float64]) -> npt.NDArray[np.uint8]:
        """Map a coverage buffer to RGBA with the configured tint."""
        return colorize(coverage, self.config.tint)

    def _resolve_workers(self, height: int) -> int:
        workers = self.max_workers if self.max_workers is not None else os.cpu_count() or 1
        return max(1, min(workers, height))

    def _render_serial(
        self,
        curves: CurveSet,
        width: int,
        height: int,
        mapping: str,
        origin: tuple[float, float],
        scale: tuple[float, float],
        epsilon: float,
    ) -> npt.NDArray[np.float64]:
        start = time.time()
        xs, ys = sample_coordinates(
            width, height, 0, height, SampleMapping(mapping), Point(*origin)
        )
        coverage = composite_grid(curves, xs, ys, scale[0], scale[1], epsilon=epsilon)
        self.render_logger.log_band_complete(0, height, (time.time() - start) * 1000)
        return coverage

    def _render_parallel(
        self,
        curves: CurveSet,
        workers: int,
        width: int,
        height: int,
        mapping: str,
        origin: tuple[float, float],
        scale: tuple[float, float],
        epsilon: float,
    ) -> npt.NDArray[np.float64]:
        coverage = np.zeros((height, width), dtype=np.float64)
        curves_dict = curves.to_dict()
        bounds = np.linspace(0, height, workers + 1).astype(int)
        bands = [
            (int(lo), int(hi)) for lo, hi in zip(bounds[:-1], bounds[1:]) if hi > lo
        ]

        pending: dict = {}
        with ProcessPoolExecutor(max_workers=workers) as executor:
            for row_start, row_stop in bands:
                future = executor.submit(
                    render_band,
                    curves_dict,
                    width,
                    height,
                    row_start,
                    row_stop,
                    mapping,
                    origin,
                    scale,
                    epsilon,
                )
                pending[future] = (row_start, row_stop, time.time())

            for future in as_completed(pending):
                row_start, row_stop, submitted = pending[future]
                try:
                    coverage[row_start:row_stop] = future.result()
                except Exception as e:
                    self.render_logger.log_render_error(e, traceback.format_exc())
                    raise RenderError(f"Band {row_start}-{row_stop} failed: {e}") from e
                self.render_logger.log_band_complete(
                    row_start, row_stop, (time.time() - submitted) * 1000
                )

        return coverage
