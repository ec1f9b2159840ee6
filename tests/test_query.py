"""Tests for arc-length queries.

Covers:
    - Endpoint exactness in both directions
    - Out-of-range inputs return None
    - Monotonicity of t → s
    - Round trips t → s → t'
    - Boundary tie-break (values on a shared boundary go right)
    - Degenerate leaves
    - Vectorised helpers (NaN for out-of-range)
    - Tighter tolerance never worsens the interpolation error

Run:
    pytest tests/test_query.py -v
"""

import math

import numpy as np
import pytest

from src.arc_length import (
    ArcLengthParameterization,
    Interior,
    Leaf,
    arc_length,
    build,
    build_fixed_height,
    from_parameter_value,
    from_parameter_values,
    interpolate,
    to_parameter_value,
    to_parameter_values,
)
from src.curves import CubicBezierAdapter, EllipticalArcAdapter, LineSegmentAdapter


@pytest.fixture
def ellipse_tree(half_ellipse):
    return build(EllipticalArcAdapter(), 1e-4, half_ellipse)


@pytest.fixture
def bezier_tree(s_bend):
    return build(CubicBezierAdapter(), 1e-3, s_bend)


def _manual_tree() -> ArcLengthParameterization:
    """Two leaves sharing the boundary (s=1, t=0.5); total length 3."""
    return ArcLengthParameterization(
        Interior(0.0, Leaf(0.0, 0.0, 1.0, 0.5), Leaf(1.0, 0.5, 3.0, 1.0)),
        tolerance=0.0,
    )


class TestInterpolate:
    def test_exact_endpoints(self) -> None:
        assert interpolate(0.1, 0.7, 0.0) == 0.1
        assert interpolate(0.1, 0.7, 1.0) == 0.7
        assert interpolate(1.0 / 3.0, 2.0 / 3.0, 1.0) == 2.0 / 3.0

    def test_midpoint(self) -> None:
        assert interpolate(2.0, 4.0, 0.5) == 3.0
        assert interpolate(0.0, 10.0, 0.25) == 2.5


class TestLineScenario:
    def test_half_parameter_is_half_length(self, ruler) -> None:
        p = build(LineSegmentAdapter(), 1e-6, ruler)
        assert from_parameter_value(p, 0.5) == 5.0
        assert to_parameter_value(p, 5.0) == 0.5
        assert arc_length(p) == 10.0


class TestEndpoints:
    @pytest.mark.parametrize("tree_name", ["ellipse_tree", "bezier_tree"])
    def test_exact(self, request, tree_name) -> None:
        p = request.getfixturevalue(tree_name)
        total = arc_length(p)
        assert from_parameter_value(p, 0.0) == 0.0
        assert from_parameter_value(p, 1.0) == total
        assert to_parameter_value(p, 0.0) == 0.0
        assert to_parameter_value(p, total) == 1.0

    def test_fixed_height_exact(self, half_ellipse) -> None:
        p = build_fixed_height(EllipticalArcAdapter(), 1e-2, half_ellipse)
        assert from_parameter_value(p, 1.0) == arc_length(p)
        assert to_parameter_value(p, arc_length(p)) == 1.0


class TestOutOfRange:
    def test_length_out_of_range(self, ellipse_tree) -> None:
        total = arc_length(ellipse_tree)
        assert to_parameter_value(ellipse_tree, -1.0) is None
        assert to_parameter_value(ellipse_tree, total + 1.0) is None
        assert to_parameter_value(ellipse_tree, math.nan) is None

    def test_parameter_out_of_range(self, ellipse_tree) -> None:
        assert from_parameter_value(ellipse_tree, -0.01) is None
        assert from_parameter_value(ellipse_tree, 1.01) is None
        assert from_parameter_value(ellipse_tree, math.nan) is None


class TestShape:
    @pytest.mark.parametrize("tree_name", ["ellipse_tree", "bezier_tree"])
    def test_monotone(self, request, tree_name) -> None:
        p = request.getfixturevalue(tree_name)
        lengths = [from_parameter_value(p, t) for t in np.linspace(0.0, 1.0, 501)]
        assert all(a <= b for a, b in zip(lengths, lengths[1:]))

    @pytest.mark.parametrize("tree_name", ["ellipse_tree", "bezier_tree"])
    def test_round_trip(self, request, tree_name) -> None:
        p = request.getfixturevalue(tree_name)
        for t in np.linspace(0.0, 1.0, 257):
            s = from_parameter_value(p, float(t))
            assert to_parameter_value(p, s) == pytest.approx(float(t), abs=1e-12)

    def test_matches_reference(self, half_ellipse, ellipse_tree, reference_cumulative) -> None:
        reference = reference_cumulative(half_ellipse, n=400)
        for i in range(0, 401, 8):
            s = from_parameter_value(ellipse_tree, i / 400)
            assert s == pytest.approx(reference[i].item(), abs=1e-3)


class TestTieBreak:
    def test_boundary_routes_right(self) -> None:
        p = _manual_tree()
        assert to_parameter_value(p, 1.0) == 0.5
        assert from_parameter_value(p, 0.5) == 1.0

    def test_interpolates_within_leaves(self) -> None:
        p = _manual_tree()
        assert to_parameter_value(p, 0.5) == 0.25
        assert to_parameter_value(p, 2.0) == 0.75
        assert from_parameter_value(p, 0.75) == 2.0

    def test_round_trip_at_boundary_is_stable(self) -> None:
        p = _manual_tree()
        s = from_parameter_value(p, 0.5)
        assert to_parameter_value(p, s) == 0.5
        t = to_parameter_value(p, 1.0)
        assert from_parameter_value(p, t) == 1.0


class TestDegenerateLeaves:
    def test_zero_length_curve(self) -> None:
        p = ArcLengthParameterization(Leaf(0.0, 0.0, 0.0, 1.0), tolerance=1e-6)
        assert to_parameter_value(p, 0.0) == 0.0
        assert from_parameter_value(p, 0.5) == 0.0
        assert to_parameter_value(p, 1e-9) is None

    def test_zero_width_leaf(self) -> None:
        p = ArcLengthParameterization(Leaf(0.0, 0.5, 2.0, 0.5), tolerance=1e-6)
        assert from_parameter_value(p, 0.5) == 0.0


class TestVectorised:
    def test_to_parameter_values(self, ruler) -> None:
        p = build(LineSegmentAdapter(), 1e-6, ruler)
        result = to_parameter_values(p, [-1.0, 0.0, 2.5, 10.0, 11.0])
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [np.nan, 0.0, 0.25, 1.0, np.nan])

    def test_from_parameter_values(self, ruler) -> None:
        p = build(LineSegmentAdapter(), 1e-6, ruler)
        result = from_parameter_values(p, np.array([-0.5, 0.0, 0.5, 1.0, 1.5]))
        np.testing.assert_array_equal(result, [np.nan, 0.0, 5.0, 10.0, np.nan])

    def test_matches_scalar(self, bezier_tree) -> None:
        params = np.linspace(0.0, 1.0, 33)
        lengths = from_parameter_values(bezier_tree, params)
        for t, s in zip(params, lengths):
            assert s == from_parameter_value(bezier_tree, float(t))


class TestToleranceConvergence:
    def test_tighter_tolerance_not_worse(self, half_ellipse, reference_cumulative) -> None:
        reference = reference_cumulative(half_ellipse, n=400).numpy()
        params = np.linspace(0.0, 1.0, 401)

        errors = []
        for tolerance in (1e-1, 1e-2, 1e-4):
            p = build(EllipticalArcAdapter(), tolerance, half_ellipse)
            errors.append(np.max(np.abs(from_parameter_values(p, params) - reference)))

        assert errors[1] <= errors[0]
        assert errors[2] <= errors[1]
        assert errors[2] < 1e-3
