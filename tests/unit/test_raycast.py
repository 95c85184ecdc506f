"""Unit tests for single-axis coverage rays."""

import math

import numpy as np
import pytest

from quadraster.core.raycast import (
    ASCENDING,
    CROSSING_TABLE,
    DESCENDING,
    crossing_flags,
    eval_quadratic,
    sign_code,
    solve_crossings,
    trace,
    trace_grid,
)
from quadraster.domain import CurveSet, Point, QuadraticSegment, SampleAxis


def vertical_line(x: float, y_from: float, y_to: float) -> CurveSet:
    return CurveSet.of([QuadraticSegment.from_line(Point(x, y_from), Point(x, y_to))])


def horizontal_line(y: float, x_from: float, x_to: float) -> CurveSet:
    return CurveSet.of([QuadraticSegment.from_line(Point(x_from, y), Point(x_to, y))])


class TestCrossingTable:
    """Tests for the sign-pattern lookup table."""

    def test_table_matches_packed_literal(self) -> None:
        """Test each entry equals the two bits of 0x2E74 at its index."""
        assert list(CROSSING_TABLE) == [(0x2E74 >> i) & 3 for i in range(16)]

    @pytest.mark.parametrize(
        ("signs", "expected"),
        [
            ((False, False, False), 0),
            ((True, False, False), ASCENDING),
            ((False, True, False), ASCENDING | DESCENDING),
            ((True, True, False), ASCENDING),
            ((False, False, True), DESCENDING),
            ((True, False, True), ASCENDING | DESCENDING),
            ((False, True, True), DESCENDING),
            ((True, True, True), 0),
        ],
    )
    def test_reachable_codes(self, signs: tuple[bool, bool, bool], expected: int) -> None:
        """Test the flags of all eight reachable sign patterns."""
        heights = [1.0 if positive else -1.0 for positive in signs]
        code = int(sign_code(*heights))
        assert code % 2 == 0
        assert int(crossing_flags(code)) == expected

    def test_zero_is_not_positive(self) -> None:
        """Test a point exactly on the ray counts as non-positive."""
        assert int(sign_code(0.0, 0.0, 0.0)) == 0

    def test_sign_code_vectorized(self) -> None:
        """Test sign codes broadcast over arrays."""
        codes = sign_code(np.array([1.0, -1.0]), 0.5, np.array([-1.0, 1.0]))
        np.testing.assert_array_equal(codes, [6, 12])


class TestSolveCrossings:
    """Tests for root solving."""

    def test_eval_quadratic(self) -> None:
        """Test quadratic evaluation at the parameter endpoints and middle."""
        assert eval_quadratic(0.0, 4.0, 2.0, 0.0) == 0.0
        assert eval_quadratic(0.0, 4.0, 2.0, 1.0) == 2.0
        assert eval_quadratic(0.0, 4.0, 2.0, 0.5) == 2.5

    def test_quadratic_roots(self) -> None:
        """Test an arch crossing the ray twice yields both roots."""
        # y(t) = -1 + 6t(1-t): crosses zero at t = 0.5 +- sqrt(3)/6
        crossings = solve_crossings(-1.0, 2.0, -1.0)
        assert crossings.t1 == pytest.approx(0.5 + math.sqrt(3) / 6)
        assert crossings.t2 == pytest.approx(0.5 - math.sqrt(3) / 6)
        assert int(crossings.flags) == ASCENDING | DESCENDING

    def test_linear_fallback_single_root(self) -> None:
        """Test a straight segment yields one root through the fallback."""
        crossings = solve_crossings(1.0, 0.0, -1.0)
        assert crossings.t1 == pytest.approx(0.5)
        assert crossings.t1 == crossings.t2
        assert int(crossings.flags) == ASCENDING

    def test_linear_fallback_root_is_translation_invariant(self) -> None:
        """Test shifting the sample keeps the root on the same point."""
        for shift in (0.0, 0.25, 0.6):
            y1, y2, y3 = 2.0 - shift, 1.0 - shift, 0.0 - shift
            crossings = solve_crossings(y1, y2, y3)
            assert eval_quadratic(y1, y2, y3, crossings.t1) == pytest.approx(0.0)
            assert int(crossings.flags) == ASCENDING

    def test_near_linear_below_epsilon(self) -> None:
        """Test a tiny curvature still routes to the linear fallback."""
        crossings = solve_crossings(1.0, 0.0 + 2e-5, -1.0)
        assert crossings.t1 == crossings.t2

    def test_parallel_segment_has_no_crossing(self) -> None:
        """Test a segment flat along the crossing axis reports nothing."""
        crossings = solve_crossings(0.5, 0.5, 0.5)
        assert math.isnan(crossings.t1)
        assert crossings.flags == 0

    def test_negative_discriminant_is_clamped(self) -> None:
        """Test an arch that misses the ray produces finite roots."""
        crossings = solve_crossings(-1.0, -0.5, -1.0)
        assert math.isfinite(crossings.t1)
        assert math.isfinite(crossings.t2)
        assert int(crossings.flags) == 0

    @pytest.mark.parametrize("heights", [(-1.0, 2.0, -1.0), (2.0, 1.0, 0.0), (0.5, 0.5, 0.5)])
    def test_grid_matches_scalar(self, heights: tuple[float, float, float]) -> None:
        """Test array heights with precomputed coefficients solve like scalars."""
        c1, c2, c3 = heights
        shifts = np.array([-0.5, 0.0, 0.3, 0.9])
        grid = solve_crossings(
            c1 - shifts, c2 - shifts, c3 - shifts, coefficients=(c1 - 2.0 * c2 + c3, c1 - c2)
        )

        flags = np.broadcast_to(grid.flags, shifts.shape)
        for i, shift in enumerate(shifts):
            scalar = solve_crossings(c1 - shift, c2 - shift, c3 - shift)
            assert int(flags[i]) == int(scalar.flags)
            if scalar.flags:
                assert grid.t1[i] == pytest.approx(scalar.t1)
                assert grid.t2[i] == pytest.approx(scalar.t2)


class TestTrace:
    """Tests for single-ray coverage."""

    def test_edge_through_sample_gives_half(self) -> None:
        """Test a crossing exactly at the sample contributes 0.5."""
        line = CurveSet.from_points([((1.0, 1.0), (1.0, 0.5), (1.0, 0.0))])
        assert trace(line, Point(1.0, 0.5), scale=100.0) == pytest.approx(0.5)

    @pytest.mark.parametrize("offset", [0.001, -0.002, 0.004])
    def test_softened_crossing_formula(self, offset: float) -> None:
        """Test pre-clamp coverage is 0.5 + offset * scale."""
        scale = 100.0
        down = vertical_line(1.0 + offset, 1.0, 0.0)
        up = vertical_line(1.0 + offset, 0.0, 1.0)
        sample = Point(1.0, 0.5)

        assert trace(down, sample, scale) == pytest.approx(0.5 + offset * scale)
        assert trace(up, sample, scale) == pytest.approx(-(0.5 + offset * scale))

    def test_crossings_clamp_to_unit(self) -> None:
        """Test distant crossings contribute a full unit or nothing."""
        line = vertical_line(5.0, 1.0, 0.0)
        assert trace(line, Point(1.0, 0.5), scale=100.0) == 1.0
        assert trace(line, Point(9.0, 0.5), scale=100.0) == 0.0

    def test_parallel_segment_contributes_nothing(self) -> None:
        """Test a segment parallel to the ray is skipped."""
        line = horizontal_line(0.5, 0.0, 2.0)
        assert trace(line, Point(1.0, 0.5), scale=100.0) == 0.0

    def test_vertical_axis(self) -> None:
        """Test the vertical ray crosses horizontal edges."""
        line = horizontal_line(2.0, 1.0, 0.0)
        coverage = trace(line, Point(0.5, 0.0), scale=100.0, axis=SampleAxis.VERTICAL)
        assert abs(coverage) == 1.0

    def test_sign_flips_with_winding(self, square: CurveSet) -> None:
        """Test reversing the contour negates each axis accumulation."""
        sample = Point(9.7, 3.0)
        for axis in SampleAxis:
            forward = trace(square, sample, 1.0, axis)
            backward = trace(square.reversed_winding(), sample, 1.0, axis)
            assert backward == pytest.approx(-forward)

    def test_trace_grid_matches_trace(self, square: CurveSet) -> None:
        """Test the vectorized ray agrees with the scalar ray."""
        xs = np.array([[2.0, 5.0], [9.6, 11.0]])
        ys = np.array([[5.0, 0.2], [4.0, 5.0]])
        grid = trace_grid(square, xs, ys, 1.0)
        for index in np.ndindex(xs.shape):
            sample = Point(float(xs[index]), float(ys[index]))
            assert grid[index] == pytest.approx(trace(square, sample, 1.0))
