import math
from typing import NamedTuple, Union

from sketchspline._exceptions import InvalidRangeError


class Range(NamedTuple):
    """Closed interval ``[start, end]`` of finite real numbers.

    Use :meth:`Range.create` to build a validated instance; the plain
    constructor performs no checks.

    Parameters
    ----------
    start : float
        Lower bound.
    end : float
        Upper bound, ``end >= start``.
    """

    start: float
    end: float

    @classmethod
    def create(cls, start: float, end: float) -> "Range":
        """Create a validated interval.

        Raises
        ------
        InvalidRangeError
            If either bound is NaN or infinite, or if ``start > end``.
        """
        if not math.isfinite(start):
            raise InvalidRangeError(
                f"start must be a finite number, got {start}"
            )
        if not math.isfinite(end):
            raise InvalidRangeError(f"end must be a finite number, got {end}")
        if start > end:
            raise InvalidRangeError(
                f"start must not exceed end, got start={start}, end={end}"
            )
        return cls(float(start), float(end))

    @classmethod
    def zero_to_one(cls) -> "Range":
        """The unit interval ``[0, 1]``."""
        return cls(0.0, 1.0)

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def middle(self) -> float:
        return self.length / 2 + self.start

    def is_inner(self, value: Union[float, "Range"]) -> bool:
        """Whether a value (or every bound of another range) lies inside.

        NaN is never inside.
        """
        if isinstance(value, Range):
            return self.is_inner(value.start) and self.is_inner(value.end)
        return not math.isnan(value) and self.start <= value <= self.end

    def __repr__(self) -> str:
        return f"Range(start={self.start:.3f}, end={self.end:.3f})"
