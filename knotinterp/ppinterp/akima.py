"""
Akima cubic spline interpolation.

As formulated by Hiroshi Akima, "A New Method of Interpolation and Smooth
Curve Fitting Based on Local Procedures", J. ACM 17, 4 (October 1970),
589-602, https://doi.org/10.1145/321607.321609, with the end derivatives
taken from three-point quadratic fits as in Math.NET Numerics
(`CubicSpline.InterpolateAkimaSorted`).
"""

import numpy as np
import numba as nb

from ..errors import TooFewPoints
from ..lib import as_float_array, check_same_size, check_strictly_increasing, ppc_list
from .hermite import _hermite_coeffs
from .ppval import PPFunction

EPSILON = np.finfo(np.float64).eps


def akima_coeffs(X, Y):
    """
    Piecewise Polynomial Coefficients for an Akima cubic spline

    Parameters
    ----------
    X : array-like
        Independent variable, strictly increasing.  At least 5 points.

    Y : array-like
        Dependent variable, with the same length as `X`.

    Returns
    -------
    Yppc : list of ndarray
        As for `hermite_coeffs`, with the derivatives given by `akima_derivs`.
    """
    X, Y = _process_args(X, Y)
    return ppc_list(_hermite_coeffs(X, Y, _akima_derivs(X, Y)))


def akima_derivs(X, Y):
    """
    First derivatives at the knots of an Akima cubic spline

    Inputs are as for `akima_coeffs`.  Returns an ndarray the same size as `X`.
    """
    X, Y = _process_args(X, Y)
    return _akima_derivs(X, Y)


def _process_args(X, Y):
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    check_same_size(X, Y)
    if X.size < 5:
        raise TooFewPoints(f"Akima interpolation needs 5 points; got {X.size}")
    check_strictly_increasing(X, "X")
    return X, Y


@nb.njit
def _akima_derivs(X, Y):
    n = X.size - 1  # number of segments

    δ = np.empty(n, dtype=np.float64)  # linear slope between knots
    for i in range(n):
        δ[i] = (Y[i + 1] - Y[i]) / (X[i + 1] - X[i])

    w = np.zeros(n, dtype=np.float64)  # change in slope, at each interior knot
    for i in range(1, n):
        w[i] = abs(δ[i] - δ[i - 1])

    dYdX = np.zeros(n + 1, dtype=np.float64)

    # Interior knots: weighted average of the slopes on either side, each
    # weighted by the slope change on the far side.
    for i in range(2, n - 1):
        wP = w[i + 1]
        wM = w[i - 1]
        if abs(wP) < EPSILON and abs(wM) < EPSILON:
            # Both weights vanish: weight by distance instead, avoiding 0 / 0.
            xv = X[i]
            xvP = X[i + 1]
            xvM = X[i - 1]
            dYdX[i] = ((xvP - xv) * δ[i - 1] + (xv - xvM) * δ[i]) / (xvP - xvM)
        else:
            dYdX[i] = (wP * δ[i - 1] + wM * δ[i]) / (wP + wM)

    # The two knots at each end lack the neighbours needed above.
    dYdX[0] = _three_point(X, Y, 0, 0, 1, 2)
    dYdX[1] = _three_point(X, Y, 1, 0, 1, 2)
    dYdX[n - 1] = _three_point(X, Y, n - 1, n - 2, n - 1, n)
    dYdX[n] = _three_point(X, Y, n, n - 2, n - 1, n)

    return dYdX


@nb.njit
def _three_point(X, Y, i, i0, i1, i2):
    """
    Derivative at `X[i]` of the quadratic through the knots `i0`, `i1`, `i2`.
    """
    y0 = Y[i0]
    y1 = Y[i1]
    y2 = Y[i2]

    t = X[i] - X[i0]
    t1 = X[i1] - X[i0]
    t2 = X[i2] - X[i0]

    a = (y2 - y0 - (t2 / t1 * (y1 - y0))) / (t2 * t2 - t1 * t2)
    b = (y1 - y0 - a * t1 * t1) / t1

    return (2 * a * t) + b


def akima_interpolator(X, Y):
    """
    Akima cubic spline interpolant of a dataset.

    Inputs are as for `akima_coeffs`.  Returns a `PPFunction`.
    """
    return PPFunction(X, akima_coeffs(X, Y))
