"""sketchspline: B-spline fitting of sketched strokes with PyTorch.

Subpackages
-----------
geometry
    Time-stamped points and parameter ranges.
linear_algebra
    Immutable dense matrices and the pivoted LU solver.
optimization
    Plain and equality-constrained linear least squares.
spline
    Knot vectors, basis weights, curve fitting and evaluation.
"""

from . import geometry, linear_algebra, optimization, spline
from ._exceptions import (
    IndexOutOfRangeError,
    InvalidInputError,
    InvalidRangeError,
    InvalidShapeError,
    ShapeMismatchError,
    SingularMatrixWarning,
    SketchSplineError,
)

__all__ = [
    "IndexOutOfRangeError",
    "InvalidInputError",
    "InvalidRangeError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "SingularMatrixWarning",
    "SketchSplineError",
    "geometry",
    "linear_algebra",
    "optimization",
    "spline",
]

__version__ = "0.1.0"
