from typing import NamedTuple

from torch import Tensor


class PivotedLUResult(NamedTuple):
    """Result of pivoted LU decomposition PA = LU.

    L and U share one tensor: U is the upper triangle including the diagonal,
    and the strictly lower triangle holds the multipliers of L (whose unit
    diagonal is implicit). The permutation is stored as row indices rather
    than a full matrix: row ``i`` of ``PA`` is row ``permutation[i]`` of
    ``A``.
    """

    lu: Tensor
    permutation: Tensor
