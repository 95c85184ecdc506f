"""Unit tests for pixel-grid rasterization."""

import numpy as np
import pytest

from quadraster.config import RenderConfig, SampleMapping
from quadraster.core.compositor import composite_grid
from quadraster.core.rasterizer import Rasterizer, colorize, render_band, sample_coordinates
from quadraster.domain import BoundingBox, CurveSet, Outline, Point
from quadraster.exceptions import EmptyOutlineError
from quadraster.io.shapes import reference_blobs


class TestSampleCoordinates:
    """Tests for sample_coordinates function."""

    def test_glyph_mapping_uses_integer_offsets(self) -> None:
        """Test glyph samples sit at integer positions plus the origin."""
        xs, ys = sample_coordinates(3, 2, 0, 2, SampleMapping.GLYPH, Point(10.0, -5.0))
        np.testing.assert_array_equal(xs, [[10, 11, 12], [10, 11, 12]])
        np.testing.assert_array_equal(ys, [[-5, -5, -5], [-4, -4, -4]])

    def test_normalized_mapping_divides_by_size(self) -> None:
        """Test normalized samples span [0, 1)."""
        xs, ys = sample_coordinates(4, 2, 0, 2, SampleMapping.NORMALIZED, Point(0.0, 0.0))
        np.testing.assert_array_equal(xs[0], [0.0, 0.25, 0.5, 0.75])
        np.testing.assert_array_equal(ys[:, 0], [0.0, 0.5])

    def test_row_range(self) -> None:
        """Test a band covers only its own rows."""
        xs, ys = sample_coordinates(5, 10, 3, 6, SampleMapping.GLYPH, Point(0.0, 0.0))
        assert xs.shape == (3, 5)
        np.testing.assert_array_equal(ys[:, 0], [3, 4, 5])


class TestColorize:
    """Tests for colorize function."""

    def test_tint_scaled_by_coverage(self) -> None:
        """Test channels are tint times coverage, truncated, with opaque alpha."""
        pixels = colorize(np.array([[0.0, 0.5, 1.0]]))
        assert pixels.dtype == np.uint8
        assert pixels.shape == (1, 3, 4)
        np.testing.assert_array_equal(
            pixels[0], [[0, 0, 0, 255], [127, 64, 32, 255], [255, 128, 64, 255]]
        )

    def test_custom_tint(self) -> None:
        """Test a custom tint color."""
        pixels = colorize(np.ones((2, 2)), tint=(10, 20, 30))
        np.testing.assert_array_equal(pixels[1, 1], [10, 20, 30, 255])


class TestRasterizer:
    """Tests for Rasterizer class."""

    def test_output_shape(self) -> None:
        """Test coverage buffer is (height, width)."""
        coverage = Rasterizer().render(reference_blobs(), Point(0.0, 0.0), 40, 30)
        assert coverage.shape == (30, 40)

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-1, 5)])
    def test_invalid_size(self, width: int, height: int) -> None:
        """Test non-positive output sizes are rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            Rasterizer().render(reference_blobs(), Point(0.0, 0.0), width, height)

    def test_glyph_mapping_flips_rows(self, square: CurveSet) -> None:
        """Test glyph renders put the largest y in the first row."""
        rasterizer = Rasterizer(RenderConfig(scale=(1.0, 1.0)))
        coverage = rasterizer.render(
            square, Point(0.0, -10.0), 20, 20, mapping=SampleMapping.GLYPH
        )

        xs, ys = sample_coordinates(20, 20, 0, 20, SampleMapping.GLYPH, Point(0.0, -10.0))
        unflipped = composite_grid(square, xs, ys, 1.0, 1.0)
        np.testing.assert_array_equal(coverage, unflipped[::-1])

        # The square occupies y in [0, 10], the upper half of the image.
        assert coverage[5, 5] == 1.0
        assert coverage[15, 5] == 0.0

    def test_normalized_mapping_keeps_rows(self) -> None:
        """Test normalized renders keep sample row order."""
        curves = reference_blobs()
        coverage = Rasterizer().render(curves, Point(0.0, 0.0), 32, 32)
        xs, ys = sample_coordinates(32, 32, 0, 32, SampleMapping.NORMALIZED, Point(0.0, 0.0))
        np.testing.assert_array_equal(coverage, composite_grid(curves, xs, ys, 32.0, 32.0))

    def test_scale_defaults_to_output_size(self) -> None:
        """Test the default ray scale equals the output size."""
        curves = reference_blobs()
        default = Rasterizer().render(curves, Point(0.0, 0.0), 48, 24)
        explicit = Rasterizer().render(curves, Point(0.0, 0.0), 48, 24, scale=(48.0, 24.0))
        np.testing.assert_array_equal(default, explicit)

    def test_parallel_matches_serial(self) -> None:
        """Test band-parallel rendering equals in-process rendering."""
        curves = reference_blobs()
        serial = Rasterizer(max_workers=1).render(curves, Point(0.0, 0.0), 64, 64)
        parallel = Rasterizer(max_workers=3).render(curves, Point(0.0, 0.0), 64, 64)
        np.testing.assert_array_equal(serial, parallel)

    def test_render_band_matches_rows(self) -> None:
        """Test one band reproduces the same rows of a full render."""
        curves = reference_blobs()
        full = Rasterizer().render(curves, Point(0.0, 0.0), 32, 32)
        band = render_band(
            curves.to_dict(), 32, 32, 10, 20, "normalized", (0.0, 0.0), (32.0, 32.0)
        )
        np.testing.assert_array_equal(band, full[10:20])

    def test_stats_recorded(self) -> None:
        """Test render statistics are tracked."""
        rasterizer = Rasterizer()
        coverage = rasterizer.render(reference_blobs(), Point(0.0, 0.0), 50, 40)

        stats = rasterizer.stats
        assert stats.pixel_count == 2000
        assert stats.segment_count == 6
        assert stats.covered_pixels == int(np.count_nonzero(coverage))
        assert stats.full_pixels <= stats.covered_pixels
        assert stats.end_time is not None

    def test_render_outline_sizes_from_bbox(self, square: CurveSet) -> None:
        """Test outline renders span the bounding box in whole units."""
        outline = Outline(curves=square, bbox=square.bounding_box(), name="square")
        coverage = Rasterizer().render_outline(outline)
        assert coverage.shape == (10, 10)

    def test_render_outline_starts_at_bbox_origin(self, square: CurveSet) -> None:
        """Test an outline away from the origin renders like one at the origin."""
        shifted = CurveSet.from_points(
            [
                tuple((p.x + 100, p.y + 50) for p in segment.points())
                for segment in square
            ]
        )
        rasterizer = Rasterizer()
        at_origin = rasterizer.render_outline(
            Outline(curves=square, bbox=square.bounding_box(), name="a")
        )
        moved = rasterizer.render_outline(
            Outline(curves=shifted, bbox=shifted.bounding_box(), name="b")
        )
        np.testing.assert_array_equal(moved, at_origin)

    def test_render_outline_rejects_empty(self) -> None:
        """Test outlines without segments cannot be rendered."""
        outline = Outline(curves=CurveSet(), bbox=BoundingBox.empty(), name="space")
        with pytest.raises(EmptyOutlineError, match="space"):
            Rasterizer().render_outline(outline)

    def test_render_outline_rejects_flat_bbox(self) -> None:
        """Test outlines thinner than a pixel cannot be rendered."""
        curves = CurveSet.from_points([((0, 0), (5, 0.2), (10, 0.4))])
        outline = Outline(curves=curves, bbox=curves.bounding_box(), name="hairline")
        with pytest.raises(EmptyOutlineError):
            Rasterizer().render_outline(outline)

    def test_render_outline_records_dropped_cubics(self, square: CurveSet) -> None:
        """Test dropped cubic counts reach the render statistics."""
        outline = Outline(
            curves=square, bbox=square.bounding_box(), dropped_cubics=2, name="mixed"
        )
        rasterizer = Rasterizer()
        rasterizer.render_outline(outline)
        assert rasterizer.stats.dropped_cubics == 2

    def test_colorize_uses_config_tint(self) -> None:
        """Test the rasterizer applies its configured tint."""
        rasterizer = Rasterizer(RenderConfig(tint=(0, 255, 0)))
        pixels = rasterizer.colorize(np.array([[1.0]]))
        np.testing.assert_array_equal(pixels[0, 0], [0, 255, 0, 255])
