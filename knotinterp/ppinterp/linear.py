import numpy as np
import numba as nb

from ..errors import TooFewPoints
from ..lib import as_float_array, check_same_size, check_strictly_increasing, ppc_list
from .ppval import PPFunction


def linear_coeffs(X, Y):
    """
    Piecewise Polynomial Coefficients for a linear interpolant

    Parameters
    ----------
    X : array-like
        Independent variable, strictly increasing.  At least 2 points.

    Y : array-like
        Dependent variable, with the same length as `X`.

    Returns
    -------
    Yppc : list of ndarray

        `Yppc[i]` holds the coefficients `[C0, C1]` of the line through
        `(X[i], Y[i])` and `(X[i+1], Y[i+1])`, trimmed of a zero slope.

    Notes
    -----
    Evaluate the piecewise polynomial at `x` with `X[i] <= x <= X[i+1]` as

    >>> y = pval(x - X[i], Yppc[i])

    """
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    check_same_size(X, Y)
    if X.size < 2:
        raise TooFewPoints(f"Linear interpolation needs 2 points; got {X.size}")
    check_strictly_increasing(X, "X")
    return ppc_list(_linear_coeffs(X, Y))


@nb.njit
def _linear_coeffs(X, Y):
    n = X.size - 1  # number of segments
    C = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        dx = X[i + 1] - X[i]
        dy = Y[i + 1] - Y[i]
        C[i, 0] = Y[i]  # coeff of 0th degree term, x^0
        C[i, 1] = dy / dx  # coeff of 1st degree term, x^1
    return C


def linear_interpolator(X, Y):
    """
    Linear interpolant of a dataset.

    Inputs are as for `linear_coeffs`.  Returns a `PPFunction`, which holds
    a private copy of `X`.
    """
    return PPFunction(X, linear_coeffs(X, Y))
