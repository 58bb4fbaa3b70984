import math
from typing import Iterable, List, NamedTuple

from sketchspline._exceptions import InvalidInputError


class Point(NamedTuple):
    """Planar sample with a time stamp.

    Use :meth:`Point.create` to build a validated instance; the plain
    constructor performs no checks.

    Parameters
    ----------
    x : float
        X coordinate.
    y : float
        Y coordinate.
    time : float
        Time (curve parameter) at which the sample was taken.
    """

    x: float
    y: float
    time: float = 0.0

    @classmethod
    def create(cls, x: float, y: float, time: float = 0.0) -> "Point":
        """Create a validated point.

        Raises
        ------
        InvalidInputError
            If any component is NaN or infinite.
        """
        for name, value in (("x", x), ("y", y), ("time", time)):
            if math.isnan(value):
                raise InvalidInputError(f"{name} is NaN")
            if math.isinf(value):
                raise InvalidInputError(f"{name} is infinite")
        return cls(float(x), float(y), float(time))

    def internal_division(
        self, other: "Point", ratio_a: float, ratio_b: float
    ) -> "Point":
        r"""Point dividing the segment from this point to ``other``.

        The segment is divided internally in the ratio
        ``ratio_a : ratio_b``, so the result is

        .. math::

            \frac{b P + a Q}{a + b}

        applied to ``x``, ``y`` and ``time`` alike. Ratios are normalised,
        so ``1 : 4`` and ``0.2 : 0.8`` give the same point.

        Parameters
        ----------
        other : Point
            The other end of the segment.
        ratio_a : float
            Share of the segment measured from this point.
        ratio_b : float
            Share of the segment measured from ``other``.

        Returns
        -------
        Point
            The division point, or this point unchanged when the result is
            not finite (for instance when the ratios sum to zero).

        Raises
        ------
        InvalidInputError
            If either ratio is NaN or infinite.
        """
        if math.isnan(ratio_a) or math.isnan(ratio_b):
            raise InvalidInputError("Internal division ratio is NaN")
        if math.isinf(ratio_a) or math.isinf(ratio_b):
            raise InvalidInputError("Internal division ratio is infinite")

        total = ratio_a + ratio_b
        if total == 0.0:
            return self

        x = (ratio_b * self.x + ratio_a * other.x) / total
        y = (ratio_b * self.y + ratio_a * other.y) / total
        time = (ratio_b * self.time + ratio_a * other.time) / total

        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(time)):
            return self

        return Point(x, y, time)

    def __repr__(self) -> str:
        return f"Point(x={self.x:.3f}, y={self.y:.3f}, time={self.time:.3f})"


def shift_time_to_zero(points: Iterable[Point]) -> List[Point]:
    """Shift the time stamps of a sequence so that it starts at zero.

    Capture front ends stamp samples with wall-clock seconds; fitting works on
    times relative to the first sample.

    Raises
    ------
    InvalidInputError
        If ``points`` is empty.
    """
    points = list(points)
    if not points:
        raise InvalidInputError("Need at least one point to shift")

    start = points[0].time
    return [Point.create(p.x, p.y, p.time - start) for p in points]
