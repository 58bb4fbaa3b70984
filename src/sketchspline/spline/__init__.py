"""B-spline curves fitted to time-stamped planar samples.

Convenience Functions
---------------------
interpolate
    Fit a spline curve through points by least squares, from a knot
    interval or an explicit knot vector.
sample
    Evaluate a curve in fixed parameter steps for drawing.

Building Blocks
---------------
create_knots
    Uniform knot vector covering a parameter range.
weight_matrix
    Cox-de Boor basis values of every control point at every sample time.

Data Types
----------
SplineCurve
    Immutable B-spline curve evaluated by de Boor's algorithm.
CurveSamples
    Sampled polyline (parameters and points).

Exceptions
----------
DegreeError
    Degree below one.
KnotError
    Invalid knot vector.
"""

from ._degree_error import DegreeError
from ._knot_error import KnotError
from ._spline_curve import (
    CurveSamples,
    SplineCurve,
    create_knots,
    interpolate,
    sample,
    weight_matrix,
)

__all__ = [
    "CurveSamples",
    "DegreeError",
    "KnotError",
    "SplineCurve",
    "create_knots",
    "interpolate",
    "sample",
    "weight_matrix",
]
