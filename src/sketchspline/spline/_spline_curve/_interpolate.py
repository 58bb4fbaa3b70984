import math
from typing import List, Optional, Sequence, Tuple, Union

from torch import Tensor

from sketchspline._exceptions import InvalidInputError
from sketchspline.geometry import Point, Range
from sketchspline.linear_algebra import Matrix
from sketchspline.optimization import least_squares

from .._degree_error import DegreeError
from .._knot_error import KnotError
from ._knots import create_knots, knot_values
from ._spline_curve import SplineCurve
from ._weight_matrix import weight_matrix

DEFAULT_KNOT_INTERVAL = 0.1


def interpolate(
    points: Sequence[Point],
    degree: int = 3,
    knot_interval: Optional[float] = None,
    *,
    knots: Optional[Union[Sequence[float], Tensor]] = None,
) -> Optional[SplineCurve]:
    """
    Fit a spline curve through time-stamped points by least squares.

    Parameters
    ----------
    points : sequence of Point
        At least two samples with finite, strictly increasing times.
    degree : int, optional
        Spline degree. Default is 3 (cubic).
    knot_interval : float, optional
        Spacing of a generated uniform knot vector (see
        :func:`create_knots`). Mutually exclusive with ``knots``. Default is
        0.1 when ``knots`` is not given either.
    knots : sequence of float or Tensor, optional
        Explicit knot vector with more than ``2 * degree - 1`` entries whose
        valid span covers the points' times.

    Returns
    -------
    SplineCurve or None
        Curve on the range ``[points[0].time, points[-1].time]``, or
        ``None`` if the least squares system is singular (for example when
        some control point has no sample inside its support). Retrying with
        fewer knots or a lower degree usually helps.

    Raises
    ------
    InvalidInputError
        If both ``knot_interval`` and ``knots`` are given, if
        ``knot_interval`` is not positive and finite, or if the points are
        missing, too few, or not strictly increasing in time.
    DegreeError
        If ``degree < 1``.
    KnotError
        If ``knots`` is invalid or too short.

    Examples
    --------
    >>> points = [Point.create(0, 0, 0), Point.create(1, 1, 1), Point.create(2, 0, 2)]
    >>> curve = interpolate(points, degree=1, knot_interval=1.0)
    >>> curve.evaluate(1.0)
    Point(x=1.000, y=1.000, time=1.000)
    """
    if degree < 1:
        raise DegreeError(f"Degree must be at least 1, got {degree}")

    if knot_interval is not None and knots is not None:
        raise InvalidInputError("Cannot specify both knot_interval and knots")

    if knots is not None:
        values = knot_values(knots)
        if len(values) <= 2 * degree - 1:
            raise KnotError(
                f"Need more than {2 * degree - 1} knots for degree {degree}, got {len(values)}"
            )
    else:
        if knot_interval is None:
            knot_interval = DEFAULT_KNOT_INTERVAL
        if not math.isfinite(knot_interval) or knot_interval <= 0.0:
            raise InvalidInputError(
                f"knot_interval must be positive and finite, got {knot_interval}"
            )

    samples = _check_points(points)
    domain = Range.create(samples[0].time, samples[-1].time)

    if knots is None:
        values = create_knots(domain, degree, knot_interval).tolist()
    elif domain.start < values[degree - 1] or values[-degree] < domain.end:
        raise KnotError(
            f"Knots span [{values[degree - 1]}, {values[-degree]}] does not "
            f"cover the points' range {domain}"
        )

    weights = weight_matrix(samples, degree, values)

    control_points = _fit_control_points(weights, samples)
    if control_points is None:
        return None

    return SplineCurve.create(degree, control_points, values, domain)


def _check_points(points: Sequence[Point]) -> List[Point]:
    if points is None:
        raise InvalidInputError("points is None")

    points = list(points)
    if any(p is None for p in points):
        raise InvalidInputError("points contains None")
    if len(points) < 2:
        raise InvalidInputError(f"Need at least 2 points, got {len(points)}")

    previous = -math.inf
    for p in points:
        if not math.isfinite(p.time):
            raise InvalidInputError(f"Point time must be finite, got {p.time}")
        if p.time <= previous:
            raise InvalidInputError(
                f"Point times must be strictly increasing, got {p.time} after {previous}"
            )
        previous = p.time

    return points


def _fit_control_points(
    weights: Matrix, samples: Sequence[Point]
) -> Optional[Tuple[Point, ...]]:
    coordinates = Matrix.create([[p.x, p.y] for p in samples])

    solution = least_squares(weights, coordinates)
    if solution is None:
        return None

    return tuple(Point.create(x, y) for x, y in solution.elements())
