"""Exceptions and warnings shared by every sketchspline module."""

__all__ = [
    "IndexOutOfRangeError",
    "InvalidInputError",
    "InvalidRangeError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "SingularMatrixWarning",
    "SketchSplineError",
]


class SketchSplineError(ValueError):
    """Base exception for sketchspline errors."""

    pass


class InvalidInputError(SketchSplineError):
    """Raised when an argument violates a precondition."""

    pass


class InvalidShapeError(InvalidInputError):
    """Raised when matrix elements are empty, ragged, or not finite."""

    pass


class ShapeMismatchError(InvalidInputError):
    """Raised when two matrices have incompatible dimensions."""

    pass


class InvalidRangeError(InvalidInputError):
    """Raised when an interval has its lower bound above its upper bound."""

    pass


class IndexOutOfRangeError(InvalidInputError, IndexError):
    """Raised when an index lies outside the addressed container."""

    pass


class SingularMatrixWarning(RuntimeWarning):
    """Warning for linear systems that could not be solved.

    Emitted alongside a ``None`` result when elimination or substitution
    produces a NaN or infinite value.
    """

    pass
