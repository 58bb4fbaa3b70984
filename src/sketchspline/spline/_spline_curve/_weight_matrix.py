from typing import List, Sequence, Union

import torch
from torch import Tensor

from sketchspline.geometry import Point
from sketchspline.linear_algebra import Matrix

from .._degree_error import DegreeError
from .._knot_error import KnotError
from ._knots import knot_values


def weight_matrix(
    points: Sequence[Point],
    degree: int,
    knots: Union[Sequence[float], Tensor],
) -> Matrix:
    """
    Basis-function (design) matrix of a spline at the points' times.

    Parameters
    ----------
    points : sequence of Point
        Samples; only their ``time`` is used.
    degree : int
        Spline degree, at least 1.
    knots : sequence of float or Tensor
        Non-decreasing knot vector of length ``n_control + degree - 1``.

    Returns
    -------
    Matrix
        Shape ``(len(points), len(knots) - degree + 1)``. Entry ``(i, j)`` is
        the weight of control point ``j`` at the time of point ``i``.

    Raises
    ------
    DegreeError
        If ``degree < 1``.
    KnotError
        If the knot vector is invalid or has no more than ``2 * degree - 1``
        entries.

    Notes
    -----
    The knot vector omits the outermost knot at each end of the usual
    ``n_control + degree + 1`` layout, so the weight of control point ``j``
    is the Cox-de Boor basis function over ``knots[j - 1], ..., knots[j + degree]``:

    .. code-block:: text

        N_j,0(t) = 1 if knots[j-1] <= t < knots[j] else 0
        N_j,p(t) = (t - knots[j-1]) / (knots[j+p-1] - knots[j-1]) * N_j,p-1(t)
                 + (knots[j+p] - t) / (knots[j+p] - knots[j]) * N_j+1,p-1(t)

    For the first control point the left term refers to a knot that is not
    stored and is dropped; likewise the right term for the last control
    point. Zero denominators (repeated knots) zero their term.

    The indicator of the last non-empty span of the valid range is closed
    on the right, so a sample at the end of the range gets full weight. The
    spans after it leave that end point out.
    """
    if degree < 1:
        raise DegreeError(f"Degree must be at least 1, got {degree}")

    values = knot_values(knots)
    if len(values) <= 2 * degree - 1:
        raise KnotError(
            f"Need more than {2 * degree - 1} knots for degree {degree}, got {len(values)}"
        )

    times = torch.tensor([p.time for p in points], dtype=torch.float64)
    last_span = _last_span(values, degree)

    columns = [
        _basis(values, degree, j, times, last_span)
        for j in range(len(values) - degree + 1)
    ]

    return Matrix.create(torch.stack(columns, dim=1))


def _last_span(knots: List[float], degree: int) -> int:
    # Index j of the degree-0 indicator over [knots[j-1], knots[j]).
    upper = len(knots) - degree
    for j in range(upper, degree - 1, -1):
        if knots[j - 1] < knots[j]:
            return j
    return upper


def _basis(
    knots: List[float],
    degree: int,
    index: int,
    times: Tensor,
    last_span: int,
) -> Tensor:
    knot_count = len(knots)

    # First control point: no left blend
    if index == 0:
        coefficient = _ratio(
            knots[index + degree] - times,
            knots[index + degree] - knots[index],
        )
        return coefficient * _basis(knots, degree - 1, index + 1, times, last_span)

    # Last control point: no right blend
    if index == knot_count - degree:
        coefficient = _ratio(
            times - knots[index - 1],
            knots[index + degree - 1] - knots[index - 1],
        )
        return coefficient * _basis(knots, degree - 1, index, times, last_span)

    if degree == 0:
        inside = (times >= knots[index - 1]) & (times < knots[index])
        # The end of the valid range belongs to the last span only
        at_end = times == knots[last_span]
        if index == last_span:
            inside = inside | at_end
        elif index > last_span:
            inside = inside & ~at_end
        return inside.to(dtype=torch.float64)

    left = _ratio(
        times - knots[index - 1],
        knots[index + degree - 1] - knots[index - 1],
    )
    right = _ratio(
        knots[index + degree] - times,
        knots[index + degree] - knots[index],
    )

    return left * _basis(knots, degree - 1, index, times, last_span) + right * _basis(
        knots, degree - 1, index + 1, times, last_span
    )


def _ratio(numerator: Tensor, denominator: float) -> Tensor:
    if denominator == 0.0:
        return torch.zeros_like(numerator)
    return numerator / denominator
