import math
from typing import List, Sequence, Union

import torch
from torch import Tensor

from sketchspline._exceptions import InvalidInputError
from sketchspline.geometry import Range

from .._degree_error import DegreeError
from .._knot_error import KnotError


def create_knots(domain: Range, degree: int, knot_interval: float) -> Tensor:
    r"""
    Uniform knot vector covering a parameter range.

    Parameters
    ----------
    domain : Range
        Range the curve must be defined on.
    degree : int
        Spline degree, at least 1.
    knot_interval : float
        Target spacing between knots. The range is split into
        ``ceil(length / knot_interval)`` equal intervals, so the actual
        spacing is at most ``knot_interval``.

    Returns
    -------
    knots : Tensor
        Float64 knot vector of length ``n_intervals + 2 * degree - 1``.

    Notes
    -----
    Knot ``i`` sits at

    .. math::

        (1 - w_i) s + w_i e, \qquad w_i = \frac{i - p + 1}{n}

    for start :math:`s`, end :math:`e`, degree :math:`p` and :math:`n`
    intervals. The ``degree - 1`` knots on either side of the range continue
    the uniform spacing past the ends instead of repeating the end values.
    """
    if degree < 1:
        raise DegreeError(f"Degree must be at least 1, got {degree}")
    if not math.isfinite(knot_interval) or knot_interval <= 0.0:
        raise InvalidInputError(
            f"knot_interval must be positive and finite, got {knot_interval}"
        )

    n_intervals = math.ceil(domain.length / knot_interval)
    if n_intervals < 1:
        raise InvalidInputError(
            f"Range {domain} is too short to place knots on"
        )

    i = torch.arange(n_intervals + 2 * degree - 1, dtype=torch.float64)
    w = (i - degree + 1) / n_intervals

    return (1.0 - w) * domain.start + w * domain.end


def knot_values(knots: Union[Sequence[float], Tensor]) -> List[float]:
    """Validated knot vector as a list of floats.

    Raises
    ------
    KnotError
        If the knots are not one-dimensional, contain NaN or infinity, or
        decrease anywhere.
    """
    if knots is None:
        raise KnotError("knots is None")
    if isinstance(knots, Tensor):
        if knots.dim() != 1:
            raise KnotError(
                f"Knot vector must be 1-D, got shape {tuple(knots.shape)}"
            )
        values = [float(k) for k in knots.tolist()]
    else:
        values = [float(k) for k in knots]

    for k in values:
        if not math.isfinite(k):
            raise KnotError("Knots must be finite")
    for left, right in zip(values, values[1:]):
        if right < left:
            raise KnotError("Knots must be non-decreasing")

    return values
