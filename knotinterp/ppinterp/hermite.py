"""Piecewise Cubic Hermite Interpolating Polynomials with given derivatives"""
import numpy as np
import numba as nb

from ..errors import DimensionMismatch, TooFewPoints
from ..lib import as_float_array, check_strictly_increasing, ppc_list
from .ppval import PPFunction


def hermite_coeffs(X, Y, dYdX):
    """
    Piecewise Polynomial Coefficients for a cubic Hermite interpolant

    Parameters
    ----------
    X : array-like
        Independent variable, strictly increasing.  At least 2 points.

    Y : array-like
        Dependent variable, with the same length as `X`.

    dYdX : array-like
        First derivative of `Y` with respect to `X` at each of the knots `X`.

    Returns
    -------
    Yppc : list of ndarray
        `Yppc[i]` holds the coefficients, in ascending order, of the cubic
        on `X[i] <= x <= X[i+1]` that matches `Y` and `dYdX` at both ends,
        in terms of `x - X[i]`.  Zero high order terms are trimmed.
    """
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    dYdX = as_float_array(dYdX, "dYdX")
    if not (X.size == Y.size == dYdX.size):
        raise DimensionMismatch(
            f"Dimension mismatch: len(X) == {X.size}, len(Y) == {Y.size}, "
            f"len(dYdX) == {dYdX.size}"
        )
    if X.size < 2:
        raise TooFewPoints(f"Hermite interpolation needs 2 points; got {X.size}")
    check_strictly_increasing(X, "X")
    return ppc_list(_hermite_coeffs(X, Y, dYdX))


@nb.njit
def _hermite_coeffs(X, Y, dYdX):
    n = X.size - 1  # number of segments
    C = np.empty((n, 4), dtype=np.float64)
    for i in range(n):
        w = X[i + 1] - X[i]
        w2 = w * w

        yv = Y[i]
        yvP = Y[i + 1]

        fd = dYdX[i]
        fdP = dYdX[i + 1]

        C[i, 0] = yv
        C[i, 1] = fd
        C[i, 2] = (3 * (yvP - yv) / w - 2 * fd - fdP) / w
        C[i, 3] = (2 * (yv - yvP) / w + fd + fdP) / w2
    return C


def hermite_interpolator(X, Y, dYdX):
    """Cubic Hermite interpolant, as a `PPFunction`.  Inputs as for `hermite_coeffs`."""
    return PPFunction(X, hermite_coeffs(X, Y, dYdX))
