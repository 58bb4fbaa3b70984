"""Dense linear algebra on immutable float64 matrices.

Data Types
----------
Matrix
    Immutable dense matrix with arithmetic, concatenation and a pivoted LU
    linear solver.

Functions
---------
pivoted_lu
    Computes the pivoted LU decomposition PA = LU of a square tensor by
    Gaussian elimination with partial pivoting.

Result Types
------------
PivotedLUResult
    Named tuple with lu, permutation.
"""

from ._matrix import Matrix
from ._pivoted_lu import pivoted_lu
from ._result_types import PivotedLUResult

__all__ = [
    "Matrix",
    "PivotedLUResult",
    "pivoted_lu",
]
