from typing import Optional

from sketchspline._exceptions import ShapeMismatchError
from sketchspline.linear_algebra import Matrix


def least_squares(a: Matrix, b: Matrix) -> Optional[Matrix]:
    r"""Solve a linear least squares problem.

    Finds :math:`x` minimising

    .. math::

        \|Ax - b\|^2

    by solving the normal equations :math:`A^T A x = A^T b`.

    Parameters
    ----------
    a : Matrix
        Design matrix of shape ``(m, n)``, usually with ``m >= n``.
    b : Matrix
        Right-hand side of shape ``(m, k)``; each column is fitted
        independently.

    Returns
    -------
    Matrix or None
        Solution of shape ``(n, k)``, or ``None`` if :math:`A^T A` is
        singular (see :meth:`Matrix.solve`).

    Raises
    ------
    ShapeMismatchError
        If ``a`` and ``b`` have different row counts.

    Examples
    --------
    Fit a line through three collinear points:

    >>> a = Matrix.create([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0]])
    >>> b = Matrix.create([[1.0], [3.0], [5.0]])
    >>> least_squares(a, b).elements()
    [[1.0], [2.0]]
    """
    if a.row_count != b.row_count:
        raise ShapeMismatchError(
            f"least_squares: a has {a.row_count} rows but b has {b.row_count}"
        )

    a_t = a.transpose()
    return a_t.product(a).solve(a_t.product(b))
