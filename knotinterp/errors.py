"""Exceptions raised by knotinterp.

Every exception derives from `InterpolationError`, itself a `ValueError`, so
callers catching `ValueError` for bad arguments keep working.  The classes
take a single message and have no custom `__init__`, so they can be raised
from inside `numba.njit` functions.
"""


class InterpolationError(ValueError):
    """Base exception for all knotinterp errors."""


class DimensionMismatch(InterpolationError):
    """Input arrays that must be the same length are not."""


class TooFewPoints(InterpolationError):
    """Fewer points than the algorithm needs."""


class InvalidSequence(InterpolationError):
    """A non-finite value, or an ordering violation, in an input sequence."""


class InvalidComparison(InterpolationError):
    """A NaN was met while comparing values in a binary search."""


class UnknownMethod(InterpolationError):
    """Unrecognized interpolation method name."""


class InsufficientPoints(InterpolationError):
    """Fewer than 2 points carry non-zero weight in a LOESS regression pass."""
