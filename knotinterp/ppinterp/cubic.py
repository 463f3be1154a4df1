"""
Natural (also known as "free", "unclamped") cubic spline interpolation.

The interpolating polynomials satisfy:
 1. The spline equals `Y[i]` at each knot `X[i]`.
 2. Adjacent polynomials match in value, first and second derivative at
    the knots.
 3. The second derivative is zero at the first and last knot.

The algorithm is as described in R.L. Burden, J.D. Faires, Numerical
Analysis, 4th Ed., 1989, PWS-Kent, ISBN 0-53491-585-X, pp 126-131.
"""

import numpy as np
import numba as nb

from ..errors import TooFewPoints
from ..lib import as_float_array, check_same_size, check_strictly_increasing, ppc_list
from .ppval import PPFunction


def cubic_coeffs(X, Y):
    """
    Piecewise Polynomial Coefficients for a natural cubic spline

    Parameters
    ----------
    X : array-like
        Independent variable, strictly increasing.  At least 3 points.

    Y : array-like
        Dependent variable, with the same length as `X`.

    Returns
    -------
    Yppc : list of ndarray
        `Yppc[i]` holds the coefficients `[Y[i], b[i], c[i], d[i]]` of the
        cubic on `X[i] <= x <= X[i+1]` in terms of `x - X[i]`, with zero high
        order terms trimmed.
    """
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    check_same_size(X, Y)
    if X.size < 3:
        raise TooFewPoints(f"Cubic spline interpolation needs 3 points; got {X.size}")
    check_strictly_increasing(X, "X")
    return ppc_list(_cubic_coeffs(X, Y))


@nb.njit
def _cubic_coeffs(X, Y):
    # The order of operations below matters in floating point; keep it.
    n = X.size - 1  # number of segments

    h = np.empty(n, dtype=np.float64)  # distance between knots
    for i in range(n):
        h[i] = X[i + 1] - X[i]

    # Forward sweep of the tridiagonal system
    mu = np.zeros(n, dtype=np.float64)
    z = np.zeros(n + 1, dtype=np.float64)
    for i in range(1, n):
        g = 2 * (X[i + 1] - X[i - 1]) - h[i - 1] * mu[i - 1]
        mu[i] = h[i] / g
        z[i] = (
            3
            * (Y[i + 1] * h[i - 1] - Y[i] * (X[i + 1] - X[i - 1]) + Y[i - 1] * h[i])
            / (h[i - 1] * h[i])
            - h[i - 1] * z[i - 1]
        ) / g

    # Back substitution.  b is linear, c quadratic, d cubic.
    # z[n] = c[n] = 0 are the natural boundary conditions.
    b = np.empty(n, dtype=np.float64)
    c = np.zeros(n + 1, dtype=np.float64)
    d = np.empty(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        dx = h[i]
        dy = Y[i + 1] - Y[i]
        c[i] = z[i] - mu[i] * c[i + 1]
        b[i] = dy / dx - dx * (c[i + 1] + 2 * c[i]) / 3
        d[i] = (c[i + 1] - c[i]) / (3 * dx)

    C = np.empty((n, 4), dtype=np.float64)
    for i in range(n):
        C[i, 0] = Y[i]
        C[i, 1] = b[i]
        C[i, 2] = c[i]
        C[i, 3] = d[i]
    return C


def cubic_interpolator(X, Y):
    """
    Natural cubic spline interpolant of a dataset.

    Inputs are as for `cubic_coeffs`.  Returns a `PPFunction`.
    """
    return PPFunction(X, cubic_coeffs(X, Y))
