import math
from typing import Sequence, Tuple, Union

import torch
from torch import Tensor

from sketchspline._exceptions import (
    IndexOutOfRangeError,
    InvalidInputError,
    InvalidRangeError,
)
from sketchspline.geometry import Point, Range

from .._degree_error import DegreeError
from .._knot_error import KnotError
from ._knots import knot_values


class SplineCurve:
    """Planar B-spline curve.

    Attributes
    ----------
    degree : int
        Polynomial degree, at least 1.
    control_points : tuple of Point
        Control points; their ``time`` is unused and zero.
    knots : Tensor
        Knot vector, shape ``(len(control_points) + degree - 1,)``.
        Non-decreasing. Each access returns a fresh copy.
    range : Range
        Parameter range the curve is defined on. It lies within
        ``[knots[degree - 1], knots[-degree]]``, where every basis function
        is fully supported.

    Instances are immutable; build them with :meth:`SplineCurve.create` or
    :func:`interpolate`.
    """

    __slots__ = ("_degree", "_control_points", "_knots", "_range")

    def __init__(
        self,
        degree: int,
        control_points: Tuple[Point, ...],
        knots: Tuple[float, ...],
        domain: Range,
    ):
        self._degree = degree
        self._control_points = control_points
        self._knots = knots
        self._range = domain

    @classmethod
    def create(
        cls,
        degree: int,
        control_points: Sequence[Point],
        knots: Union[Sequence[float], Tensor],
        domain: Range,
    ) -> "SplineCurve":
        """
        Create a validated spline curve.

        Parameters
        ----------
        degree : int
            Polynomial degree, at least 1.
        control_points : sequence of Point
            Control points.
        knots : sequence of float or Tensor
            Non-decreasing finite knot vector of length
            ``len(control_points) + degree - 1``.
        domain : Range
            Parameter range of the curve.

        Raises
        ------
        DegreeError
            If ``degree < 1``.
        KnotError
            If the knots are invalid, their count does not match the control
            points, or they do not cover ``domain``.
        InvalidInputError
            If a control point is missing.
        """
        if degree < 1:
            raise DegreeError(f"Degree must be at least 1, got {degree}")

        values = knot_values(knots)

        if control_points is None or any(p is None for p in control_points):
            raise InvalidInputError("control_points must not contain None")
        control_points = tuple(control_points)

        if len(values) != len(control_points) + degree - 1:
            raise KnotError(
                f"Need {len(control_points) + degree - 1} knots for "
                f"{len(control_points)} control points of degree {degree}, "
                f"got {len(values)}"
            )
        if len(values) <= 2 * degree - 1:
            raise KnotError(
                f"Need more than {2 * degree - 1} knots for degree {degree}, got {len(values)}"
            )
        if domain.start < values[degree - 1] or values[-degree] < domain.end:
            raise KnotError(
                f"Range {domain} is not inside "
                f"[{values[degree - 1]}, {values[-degree]}]"
            )

        return cls(degree, control_points, tuple(values), domain)

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def control_points(self) -> Tuple[Point, ...]:
        return self._control_points

    @property
    def knots(self) -> Tensor:
        return torch.tensor(self._knots, dtype=torch.float64)

    @property
    def range(self) -> Range:
        return self._range

    def evaluate(self, t: float) -> Point:
        r"""
        Point on the curve at parameter ``t`` by de Boor's algorithm.

        ``t`` is expected to lie within :attr:`range`; it is not checked
        against it.

        Parameters
        ----------
        t : float
            Curve parameter.

        Returns
        -------
        Point
            Curve point whose ``time`` is ``t``.

        Raises
        ------
        InvalidInputError
            If ``t`` is NaN or infinite.

        Notes
        -----
        The ``degree + 1`` control points that influence the knot span
        holding ``t`` are blended pairwise ``degree`` times. In round ``i``
        each blend uses

        .. math::

            w = \frac{t - k_m}{k_{m + p - i} - k_m}

        and keeps the point ``(1 - w) * left + w * right``. A zero-width
        span leaves the point unchanged.
        """
        if not math.isfinite(t):
            raise InvalidInputError(f"t must be finite, got {t}")

        degree = self._degree
        knots = self._knots

        knot_number = self.search_knot_number(t, degree - 1, len(knots) - degree)
        part = list(self._control_points[knot_number - degree : knot_number + 1])

        for i in range(degree):
            for j in range(degree - i):
                k = knot_number - j - 1
                denominator = knots[k + degree - i] - knots[k]
                if denominator == 0.0:
                    continue
                w = (t - knots[k]) / denominator
                part[degree - j] = part[degree - j].internal_division(
                    part[degree - j - 1], 1.0 - w, w
                )

        point = part[degree]
        return Point.create(point.x, point.y, t)

    def search_knot_number(self, t: float, min_index: int, max_index: int) -> int:
        """
        Binary search for the knot span holding ``t``.

        Parameters
        ----------
        t : float
            Curve parameter.
        min_index, max_index : int
            Inclusive bounds of the knot indices to search.

        Returns
        -------
        int
            ``max_index`` if ``knots[max_index] <= t``; otherwise the index
            ``k`` with ``knots[k - 1] <= t < knots[k]``. Parameters below
            ``knots[min_index]`` give ``min_index + 1``.

        Raises
        ------
        IndexOutOfRangeError
            If ``min_index < 0`` or ``max_index >= len(knots)``.
        InvalidRangeError
            If ``min_index > max_index``.
        """
        knots = self._knots
        if min_index < 0 or max_index >= len(knots):
            raise IndexOutOfRangeError(
                f"Search bounds [{min_index}, {max_index}] outside "
                f"[0, {len(knots) - 1}]"
            )
        if min_index > max_index:
            raise InvalidRangeError(
                f"min_index {min_index} exceeds max_index {max_index}"
            )

        if knots[max_index] <= t:
            return max_index

        while min_index <= max_index:
            i = (min_index + max_index) // 2
            if knots[i] <= t and t < knots[i + 1]:
                return i + 1
            if t < knots[i]:
                max_index = i - 1
            else:
                min_index = i + 1

        return min_index + 1

    def copy(self) -> "SplineCurve":
        return SplineCurve(
            self._degree,
            tuple(Point(*p) for p in self._control_points),
            tuple(self._knots),
            Range(*self._range),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SplineCurve):
            return NotImplemented
        return (
            self._degree == other._degree
            and self._control_points == other._control_points
            and self._knots == other._knots
            and self._range == other._range
        )

    def __hash__(self) -> int:
        return hash((self._degree, self._control_points, self._knots, self._range))

    def __repr__(self) -> str:
        return (
            f"SplineCurve(degree={self._degree}, "
            f"control_points={list(self._control_points)}, "
            f"knots={list(self._knots)}, range={self._range})"
        )
