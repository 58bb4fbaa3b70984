"""Pivoted LU decomposition."""

import warnings
from typing import Optional

import torch
from torch import Tensor

from sketchspline._exceptions import ShapeMismatchError, SingularMatrixWarning

from ._result_types import PivotedLUResult


def pivoted_lu(a: Tensor) -> Optional[PivotedLUResult]:
    r"""
    Pivoted LU decomposition by Gaussian elimination.

    Computes

    .. math::

        PA = LU

    where :math:`P` is a permutation matrix, :math:`L` is unit lower
    triangular and :math:`U` is upper triangular.

    Parameters
    ----------
    a : Tensor
        Square matrix of shape (n, n). Not modified.

    Returns
    -------
    PivotedLUResult or None
        Named tuple with the packed factors and the row permutation, or
        ``None`` if an elimination multiplier is NaN or infinite (the matrix
        is singular or nearly so). A :class:`SingularMatrixWarning` is
        emitted in that case.

    Raises
    ------
    ShapeMismatchError
        If ``a`` is not a square 2-D tensor.

    Notes
    -----
    Partial pivoting: at step ``i`` the row at or below ``i`` with the
    largest absolute value in column ``i`` becomes the pivot row. Ties go to
    the lowest row index, and a column that is zero from ``i`` down is left
    in place; the zero pivot then surfaces during back substitution.

    Rows whose entry under the pivot is exactly zero are skipped, so a zero
    pivot only fails the decomposition when something has to be eliminated
    beneath it.
    """
    if a.dim() != 2 or a.shape[0] != a.shape[1]:
        raise ShapeMismatchError(
            f"pivoted_lu: a must be a square matrix, got shape {tuple(a.shape)}"
        )

    n = a.shape[0]
    lu = a.clone()
    permutation = torch.arange(n)

    for i in range(n):
        # torch.argmax returns the first maximal index
        pivot = i + int(torch.argmax(lu[i:, i].abs()))
        if pivot > i:
            lu[[i, pivot]] = lu[[pivot, i]]
            permutation[[i, pivot]] = permutation[[pivot, i]]

        column = lu[i + 1 :, i]
        nonzero = column != 0.0
        if not bool(nonzero.any()):
            continue

        multipliers = torch.where(
            nonzero, column / lu[i, i], torch.zeros_like(column)
        )
        if not bool(torch.isfinite(multipliers).all()):
            warnings.warn(
                f"pivoted_lu: elimination failed at column {i}; "
                "the matrix is singular or nearly singular",
                SingularMatrixWarning,
                stacklevel=2,
            )
            return None

        lu[i + 1 :, i] = multipliers
        lu[i + 1 :, i + 1 :] -= torch.outer(multipliers, lu[i, i + 1 :])

    return PivotedLUResult(lu=lu, permutation=permutation)
