"""Linear least squares on :class:`~sketchspline.linear_algebra.Matrix`.

Functions
---------
least_squares
    Minimise ||Ax - b||^2 through the normal equations.
constrained_least_squares
    Minimise ||Ax - b||^2 subject to Cx = d through the KKT system.

Both return ``None`` instead of raising when the system to solve is
singular.
"""

from ._constrained_least_squares import constrained_least_squares
from ._least_squares import least_squares

__all__ = [
    "constrained_least_squares",
    "least_squares",
]
