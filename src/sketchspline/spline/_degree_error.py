from sketchspline._exceptions import InvalidInputError


class DegreeError(InvalidInputError):
    """Raised when a spline degree is below one."""

    pass
