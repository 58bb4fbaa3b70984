from ._curve_samples import CurveSamples, sample
from ._interpolate import interpolate
from ._knots import create_knots
from ._spline_curve import SplineCurve
from ._weight_matrix import weight_matrix

__all__ = [
    "CurveSamples",
    "SplineCurve",
    "create_knots",
    "interpolate",
    "sample",
    "weight_matrix",
]
