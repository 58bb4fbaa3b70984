import math
import warnings
from collections import abc
from typing import List, Optional, Sequence, Union

import torch
from torch import Tensor

from sketchspline._exceptions import (
    IndexOutOfRangeError,
    InvalidInputError,
    InvalidShapeError,
    ShapeMismatchError,
    SingularMatrixWarning,
)

from ._pivoted_lu import pivoted_lu


class Matrix:
    """Immutable dense matrix of finite float64 values.

    Every operation returns a new matrix; accessors hand out copies, so no
    two matrices ever share a buffer with a caller.

    Use :meth:`Matrix.create` (or :meth:`Matrix.identity` /
    :meth:`Matrix.zeros`) to build instances.

    Examples
    --------
    >>> a = Matrix.create([[2.0, 0.0], [0.0, 4.0]])
    >>> b = Matrix.create([[2.0], [8.0]])
    >>> a.solve(b).elements()
    [[1.0], [2.0]]
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: Tensor):
        # Unchecked; callers own ``elements`` exclusively.
        self._elements = elements

    @classmethod
    def create(cls, rows: Union[Sequence[Sequence[float]], Tensor]) -> "Matrix":
        """Create a matrix from rows of finite numbers.

        Parameters
        ----------
        rows : sequence of sequences of float, or Tensor
            Row-major elements. A tensor must be 2-D.

        Raises
        ------
        InvalidShapeError
            If there are no rows, a row is empty, missing or not a sequence,
            rows differ in length, or an element is NaN or infinite.
        """
        if isinstance(rows, Tensor):
            if rows.dim() != 2 or rows.shape[0] == 0 or rows.shape[1] == 0:
                raise InvalidShapeError(
                    f"Matrix needs a non-empty 2-D tensor, got shape {tuple(rows.shape)}"
                )
            elements = rows.detach().to(dtype=torch.float64).clone()
        else:
            if rows is None:
                raise InvalidShapeError("rows is None")
            rows = list(rows)
            if len(rows) == 0:
                raise InvalidShapeError("Matrix needs at least one row")
            for row in rows:
                if row is None:
                    raise InvalidShapeError("rows contains None")
                if not isinstance(row, (abc.Sequence, Tensor)) or isinstance(row, str):
                    raise InvalidShapeError(
                        f"Each row must be a sequence, got {type(row).__name__}"
                    )
            if len(rows[0]) == 0:
                raise InvalidShapeError("Matrix needs at least one column")

            column_count = len(rows[0])
            for row in rows:
                if len(row) != column_count:
                    raise InvalidShapeError(
                        f"All rows must have {column_count} elements, got {len(row)}"
                    )

            elements = torch.tensor(
                [[float(value) for value in row] for row in rows],
                dtype=torch.float64,
            )

        if not bool(torch.isfinite(elements).all()):
            raise InvalidShapeError("Matrix elements contain NaN or infinity")

        return cls(elements)

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        """The ``size`` x ``size`` identity matrix."""
        if size < 1:
            raise InvalidShapeError(f"size must be positive, got {size}")
        return cls(torch.eye(size, dtype=torch.float64))

    @classmethod
    def zeros(cls, row_count: int, column_count: int) -> "Matrix":
        """The all-zero matrix of the given shape."""
        if row_count < 1 or column_count < 1:
            raise InvalidShapeError(
                f"Shape must be positive, got ({row_count}, {column_count})"
            )
        return cls(torch.zeros(row_count, column_count, dtype=torch.float64))

    @property
    def row_count(self) -> int:
        return self._elements.shape[0]

    @property
    def column_count(self) -> int:
        return self._elements.shape[1]

    def get(self, i: int, j: int) -> float:
        """Element at row ``i``, column ``j``."""
        if not (0 <= i < self.row_count and 0 <= j < self.column_count):
            raise IndexOutOfRangeError(
                f"Index ({i}, {j}) outside matrix of shape "
                f"({self.row_count}, {self.column_count})"
            )
        return self._elements[i, j].item()

    def elements(self) -> List[List[float]]:
        """Fresh nested list of the elements, row-major."""
        return self._elements.tolist()

    def to_tensor(self) -> Tensor:
        """Fresh float64 tensor of shape (row_count, column_count)."""
        return self._elements.clone()

    def magnify(self, ratio: float) -> "Matrix":
        """Scale every element by ``ratio``."""
        if not math.isfinite(ratio):
            raise InvalidInputError(f"ratio must be finite, got {ratio}")
        return Matrix(self._elements * ratio)

    def transpose(self) -> "Matrix":
        return Matrix(self._elements.t().clone())

    def plus(self, other: "Matrix") -> "Matrix":
        self._check_same_shape(other)
        return Matrix(self._elements + other._elements)

    def minus(self, other: "Matrix") -> "Matrix":
        """Element-wise ``self - other``."""
        self._check_same_shape(other)
        return Matrix(self._elements - other._elements)

    def product(self, other: "Matrix") -> "Matrix":
        """Matrix product ``self @ other``."""
        if self.column_count != other.row_count:
            raise ShapeMismatchError(
                f"Cannot multiply ({self.row_count}, {self.column_count}) "
                f"by ({other.row_count}, {other.column_count})"
            )
        return Matrix(torch.mm(self._elements, other._elements))

    def solve(self, right: "Matrix") -> Optional["Matrix"]:
        r"""
        Solve :math:`AX = B` for :math:`X`, with this matrix as :math:`A`.

        Parameters
        ----------
        right : Matrix
            Right-hand side :math:`B`; one column per system.

        Returns
        -------
        Matrix or None
            The solution, or ``None`` when the system is singular or nearly
            so (an elimination or substitution step produced a NaN or
            infinite value). A :class:`SingularMatrixWarning` accompanies
            ``None``.

        Raises
        ------
        ShapeMismatchError
            If this matrix is not square or the row counts differ.

        Notes
        -----
        Uses :func:`pivoted_lu`, applies the recorded row permutation to
        :math:`B`, then performs forward substitution with the unit lower
        factor and back substitution with the upper factor.
        """
        if self.row_count != right.row_count:
            raise ShapeMismatchError(
                f"Row counts differ: {self.row_count} and {right.row_count}"
            )
        if self.row_count != self.column_count:
            raise ShapeMismatchError(
                f"solve needs a square matrix, got ({self.row_count}, {self.column_count})"
            )

        factorization = pivoted_lu(self._elements)
        if factorization is None:
            return None

        lu, permutation = factorization
        n = self.row_count

        # Forward substitution, L has an implicit unit diagonal
        forward = right._elements[permutation]
        for i in range(1, n):
            forward[i] = forward[i] - lu[i, :i] @ forward[:i]

        # Back substitution
        solution = torch.zeros_like(forward)
        for i in range(n - 1, -1, -1):
            row = (forward[i] - lu[i, i + 1 :] @ solution[i + 1 :]) / lu[i, i]
            if not bool(torch.isfinite(row).all()):
                warnings.warn(
                    f"Matrix.solve: back substitution failed at row {i}; "
                    "the matrix is singular or nearly singular",
                    SingularMatrixWarning,
                    stacklevel=2,
                )
                return None
            solution[i] = row

        return Matrix(solution)

    @staticmethod
    def concat_vertical(top: "Matrix", bottom: "Matrix") -> "Matrix":
        """Stack ``top`` above ``bottom``."""
        if top.column_count != bottom.column_count:
            raise ShapeMismatchError(
                f"Column counts differ: {top.column_count} and {bottom.column_count}"
            )
        return Matrix(torch.cat([top._elements, bottom._elements], dim=0))

    @staticmethod
    def concat_horizontal(left: "Matrix", right: "Matrix") -> "Matrix":
        """Place ``right`` beside ``left``."""
        if left.row_count != right.row_count:
            raise ShapeMismatchError(
                f"Row counts differ: {left.row_count} and {right.row_count}"
            )
        return Matrix(torch.cat([left._elements, right._elements], dim=1))

    def _check_same_shape(self, other: "Matrix") -> None:
        if self._elements.shape != other._elements.shape:
            raise ShapeMismatchError(
                f"Shapes differ: ({self.row_count}, {self.column_count}) "
                f"and ({other.row_count}, {other.column_count})"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._elements.shape == other._elements.shape and torch.equal(
            self._elements, other._elements
        )

    def __hash__(self) -> int:
        return hash(
            (tuple(self._elements.shape), tuple(self._elements.flatten().tolist()))
        )

    def __repr__(self) -> str:
        lines = [f"Matrix(size=[{self.row_count}, {self.column_count}],"]
        for row in self._elements.tolist():
            lines.append("| " + " ".join(f"{value:.12f}" for value in row) + " |")
        return "\n".join(lines) + ")"
