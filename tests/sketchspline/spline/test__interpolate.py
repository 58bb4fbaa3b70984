"""Tests for least squares spline fitting."""

import math

import pytest
import torch

from sketchspline import InvalidInputError, SingularMatrixWarning
from sketchspline.geometry import Point, Range, shift_time_to_zero
from sketchspline.spline import DegreeError, KnotError, SplineCurve, interpolate


def _peak():
    return [Point.create(0.0, 0.0, 0.0), Point.create(1.0, 1.0, 1.0), Point.create(2.0, 0.0, 2.0)]


def _line(n_points=21):
    times = [i / (n_points - 1) for i in range(n_points)]
    return [Point.create(t, 2.0 * t + 1.0, t) for t in times]


class TestInterpolate:
    """Tests for interpolate."""

    def test_linear_through_three_points(self):
        """Degree 1 with one knot per sample passes through the samples."""
        curve = interpolate(_peak(), degree=1, knot_interval=1.0)

        assert isinstance(curve, SplineCurve)
        assert curve.degree == 1
        assert curve.range == Range(0.0, 2.0)
        torch.testing.assert_close(
            curve.knots, torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64)
        )

        for fitted, sample in zip(curve.control_points, _peak()):
            assert fitted.x == pytest.approx(sample.x)
            assert fitted.y == pytest.approx(sample.y)
            assert fitted.time == 0.0

        middle = curve.evaluate(1.0)
        assert middle.x == pytest.approx(1.0)
        assert middle.y == pytest.approx(1.0)
        assert middle.time == 1.0

    def test_linear_round_trip(self):
        """Degree 1 with a knot at every sample time reproduces the samples."""
        times = [0.0, 1.0, 2.0, 3.0, 4.0]
        points = [Point.create(math.sin(t), math.cos(t), t) for t in times]

        curve = interpolate(points, degree=1, knot_interval=1.0)

        for p in points:
            q = curve.evaluate(p.time)
            assert q.x == pytest.approx(p.x)
            assert q.y == pytest.approx(p.y)

    def test_cubic_reproduces_line(self):
        """Samples on a straight line are fitted exactly by a cubic spline."""
        curve = interpolate(_line(), degree=3, knot_interval=0.25)

        for t in [0.0, 0.3, 0.55, 1.0]:
            point = curve.evaluate(t)
            assert point.x == pytest.approx(t, abs=1e-8)
            assert point.y == pytest.approx(2.0 * t + 1.0, abs=1e-8)

    def test_control_point_count(self):
        curve = interpolate(_line(), degree=3, knot_interval=0.25)

        # 4 intervals, 2 * 3 - 1 extra knots
        assert curve.knots.shape == (9,)
        assert len(curve.control_points) == 9 - 3 + 1

    def test_first_sample(self):
        """The curve starts at the first sample's time."""
        points = shift_time_to_zero(
            [Point.create(float(i), float(i * i), 10.0 + 0.1 * i) for i in range(12)]
        )

        curve = interpolate(points, degree=2, knot_interval=0.25)

        assert curve.range.start == 0.0
        assert curve.range.end == pytest.approx(1.1)
        assert curve.evaluate(curve.range.start).time == 0.0

    def test_default_knot_interval(self):
        """Cubic with 0.1 knot spacing when nothing else is given."""
        curve = interpolate(_line())

        assert curve.degree == 3
        torch.testing.assert_close(
            torch.diff(curve.knots),
            torch.full((curve.knots.shape[0] - 1,), 0.1, dtype=torch.float64),
        )

    def test_explicit_knots(self):
        """Explicit knots give the same curve as the equivalent interval."""
        from_knots = interpolate(_peak(), degree=1, knots=[0.0, 1.0, 2.0])
        from_interval = interpolate(_peak(), degree=1, knot_interval=1.0)

        assert from_knots == from_interval

    def test_explicit_knot_tensor(self):
        knots = torch.tensor([-0.5, 0.0, 0.5, 1.0, 1.5], dtype=torch.float64)

        curve = interpolate(_line(), degree=2, knots=knots)

        assert len(curve.control_points) == 4
        assert curve.evaluate(0.5).y == pytest.approx(2.0, abs=1e-8)

    def test_singular_returns_none(self):
        """A control point without samples in its support cannot be fitted."""
        points = [Point.create(0.0, 0.0, 0.0), Point.create(1.0, 1.0, 0.5), Point.create(2.0, 0.0, 3.0)]

        with pytest.warns(SingularMatrixWarning):
            assert interpolate(points, degree=1, knots=[0.0, 1.0, 2.0, 3.0]) is None


class TestInterpolateValidation:
    """Tests for interpolate argument checks."""

    def test_degree(self):
        with pytest.raises(DegreeError):
            interpolate(_peak(), degree=0, knot_interval=1.0)

    def test_interval_and_knots(self):
        with pytest.raises(InvalidInputError):
            interpolate(_peak(), degree=1, knot_interval=1.0, knots=[0.0, 1.0, 2.0])

    @pytest.mark.parametrize("interval", [0.0, -1.0, math.nan, math.inf])
    def test_knot_interval(self, interval):
        with pytest.raises(InvalidInputError):
            interpolate(_peak(), degree=1, knot_interval=interval)

    @pytest.mark.parametrize(
        "points",
        [
            None,
            [],
            [Point.create(0.0, 0.0, 0.0)],
            [Point.create(0.0, 0.0, 0.0), None],
            [Point.create(0.0, 0.0, 0.0), Point.create(1.0, 1.0, 0.0)],
            [Point.create(0.0, 0.0, 1.0), Point.create(1.0, 1.0, 0.0)],
            [Point(0.0, 0.0, 0.0), Point(1.0, 1.0, math.nan)],
        ],
    )
    def test_points(self, points):
        """Too few samples, missing samples and unordered times are rejected."""
        with pytest.raises(InvalidInputError):
            interpolate(points, degree=1, knot_interval=1.0)

    def test_too_few_knots(self):
        with pytest.raises(KnotError):
            interpolate(_peak(), degree=2, knots=[0.0, 1.0, 2.0])

    def test_knots_do_not_cover_points(self):
        with pytest.raises(KnotError):
            interpolate(_peak(), degree=1, knots=[0.5, 1.0, 2.0])

    def test_invalid_knots(self):
        with pytest.raises(KnotError):
            interpolate(_peak(), degree=1, knots=[0.0, 2.0, 1.0])
