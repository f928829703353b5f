"""Exceptions raised by the basis evaluators.

All of them derive from :class:`ValueError`, so callers that only guard
against ``ValueError`` keep working.
"""


class BasisError(ValueError):
    """Base class for errors raised while evaluating B-spline bases."""


class InvalidInputError(BasisError):
    """Raised for inconsistent order, number of points, knots or parameter."""


class CapacityExceededError(BasisError):
    """Raised when ``n_points + order`` exceeds the working-row capacity."""


class DegenerateKnotSpanError(BasisError):
    """Raised when a non-vanishing recursion term falls on a zero-length knot span."""


__all__ = [
    "BasisError",
    "CapacityExceededError",
    "DegenerateKnotSpanError",
    "InvalidInputError",
]
