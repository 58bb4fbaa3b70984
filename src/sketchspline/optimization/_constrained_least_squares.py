from typing import Optional

from sketchspline._exceptions import ShapeMismatchError
from sketchspline.linear_algebra import Matrix


def constrained_least_squares(
    a: Matrix,
    b: Matrix,
    c: Matrix,
    d: Matrix,
) -> Optional[Matrix]:
    r"""Solve a linear least squares problem under equality constraints.

    Minimises :math:`\|Ax - b\|^2` subject to :math:`Cx = d` by solving the
    Lagrange (KKT) system

    .. math::

        \begin{bmatrix} 2 A^T A & C^T \\ C & 0 \end{bmatrix}
        \begin{bmatrix} x \\ \lambda \end{bmatrix}
        =
        \begin{bmatrix} 2 A^T b \\ d \end{bmatrix}

    Parameters
    ----------
    a : Matrix
        Design matrix of shape ``(m, n)``.
    b : Matrix
        Right-hand side of shape ``(m, k)``.
    c : Matrix
        Constraint matrix of shape ``(p, n)``.
    d : Matrix
        Constraint values of shape ``(p, k)``.

    Returns
    -------
    Matrix or None
        Stacked solution of shape ``(n + p, k)``: the first ``n`` rows are
        :math:`x`, the remaining ``p`` rows the Lagrange multipliers.
        ``None`` if the KKT matrix is singular.

    Raises
    ------
    ShapeMismatchError
        If the shapes of ``a``, ``b``, ``c`` and ``d`` are inconsistent.
    """
    if a.row_count != b.row_count:
        raise ShapeMismatchError(
            f"constrained_least_squares: a has {a.row_count} rows but b has {b.row_count}"
        )
    if c.column_count != a.column_count:
        raise ShapeMismatchError(
            f"constrained_least_squares: c has {c.column_count} columns but a has {a.column_count}"
        )
    if c.row_count != d.row_count or d.column_count != b.column_count:
        raise ShapeMismatchError(
            f"constrained_least_squares: d must have shape ({c.row_count}, {b.column_count})"
        )

    a_t = a.transpose()

    lhs = Matrix.concat_vertical(
        Matrix.concat_horizontal(a_t.product(a).magnify(2.0), c.transpose()),
        Matrix.concat_horizontal(c, Matrix.zeros(c.row_count, c.row_count)),
    )
    rhs = Matrix.concat_vertical(a_t.product(b).magnify(2.0), d)

    return lhs.solve(rhs)
