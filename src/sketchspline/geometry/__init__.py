"""Planar value objects.

Data Types
----------
Point
    Time-stamped planar sample with affine internal division.
Range
    Closed interval of finite real numbers.

Functions
---------
shift_time_to_zero
    Re-base the time stamps of a point sequence to start at zero.
"""

from ._point import Point, shift_time_to_zero
from ._range import Range

__all__ = [
    "Point",
    "Range",
    "shift_time_to_zero",
]
