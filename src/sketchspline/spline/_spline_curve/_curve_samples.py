import math

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from sketchspline._exceptions import InvalidInputError

from ._spline_curve import SplineCurve


@tensorclass
class CurveSamples:
    """Polyline obtained by evaluating a curve at evenly spaced parameters.

    Attributes
    ----------
    parameters : Tensor
        Curve parameters, shape (n_samples,). Increasing.
    points : Tensor
        Evaluated ``(x, y)`` coordinates, shape (n_samples, 2).
    """

    parameters: Tensor
    points: Tensor


def sample(
    curve: SplineCurve,
    step: float = 0.01,
    include_end: bool = False,
) -> CurveSamples:
    """
    Evaluate a curve in fixed parameter steps across its range.

    Parameters
    ----------
    curve : SplineCurve
        Curve to sample.
    step : float, optional
        Parameter increment. Default is 0.01.
    include_end : bool, optional
        Append the point at ``curve.range.end``. By default sampling stops
        at the last step below the end.

    Returns
    -------
    CurveSamples
        Samples with ``batch_size == [n_samples]``, suitable for drawing as
        a polyline.

    Raises
    ------
    InvalidInputError
        If ``step`` is not positive and finite.

    Examples
    --------
    >>> samples = sample(curve, step=0.1)
    >>> samples.points.shape
    torch.Size([20, 2])
    """
    if not math.isfinite(step) or step <= 0.0:
        raise InvalidInputError(f"step must be positive and finite, got {step}")

    start, end = curve.range

    parameters = []
    t = start
    while t < end:
        parameters.append(t)
        t += step
    if include_end:
        parameters.append(end)

    coordinates = []
    for t in parameters:
        point = curve.evaluate(t)
        coordinates.append((point.x, point.y))

    n_samples = len(parameters)

    return CurveSamples(
        parameters=torch.tensor(parameters, dtype=torch.float64),
        points=torch.tensor(coordinates, dtype=torch.float64).reshape(
            n_samples, 2
        ),
        batch_size=[n_samples],
    )
