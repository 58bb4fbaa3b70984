from sketchspline._exceptions import InvalidInputError


class KnotError(InvalidInputError):
    """Raised for invalid knot vectors (non-finite, decreasing, wrong length,
    or not covering the curve's range)."""

    pass
