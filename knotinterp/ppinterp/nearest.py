"""Nearest neighbour interpolation"""
import numpy as np
import numba as nb

from ..lib import _binary_search, as_float_array, check_same_size, check_strictly_increasing
from .ppval import ConstantFunction, UnivariateFunction


def nearest_interpolator(X, Y):
    """
    Nearest neighbour interpolant of a dataset.

    Parameters
    ----------
    X : array-like
        Independent variable, strictly increasing.  Any length.

    Y : array-like
        Dependent variable, with the same length as `X`.

    Returns
    -------
    f : UnivariateFunction
        With no data, `f` is NaN everywhere.  With one data point, `f` is
        `Y[0]` everywhere.  Otherwise `f(x)` is the `Y` value of the knot
        closest to `x`; halfway between two knots, the right knot wins.
        Outside `[X[0], X[-1]]`, `f` is the value at the nearer end.
    """
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    check_same_size(X, Y)
    if X.size == 0:
        return ConstantFunction(np.nan)
    if X.size == 1:
        return ConstantFunction(Y[0])
    check_strictly_increasing(X, "X")
    return NearestFunction(X, Y)


class NearestFunction(UnivariateFunction):
    """Nearest neighbour interpolant of 2 or more knots.  Build with
    `nearest_interpolator`.  Derivatives (`d > 0`) are 0."""

    def __init__(self, X, Y):
        X = as_float_array(X, "X")
        Y = as_float_array(Y, "Y")
        X.flags.writeable = False
        Y.flags.writeable = False
        self._X = X
        self._Y = Y

    @property
    def knots(self):
        return self._X

    def _eval_1(self, x, d):
        y = nearest_1(x, self._X, self._Y)
        return y if d == 0 else 0.0

    def _eval_n(self, x, d):
        y = np.empty(x.size, dtype=np.float64)
        for j in range(x.size):
            y[j] = self._eval_1(x[j], d)
        return y


@nb.njit
def nearest_1(x, X, Y):
    """
    Value of `Y` at the knot of `X` nearest to `x`.

    `X` must be strictly increasing with at least 2 elements; this is not
    checked.
    """
    n = X.size
    i = _binary_search(X, x)
    if i >= 0:  # x is a knot
        return Y[i]
    i = -i - 1  # X[i-1] < x < X[i]
    if i == 0:
        return Y[0]
    if i >= n:
        return Y[n - 1]
    dx = x - X[i - 1]  # distance from the left knot
    w = X[i] - X[i - 1]  # width of the interval
    return Y[i - 1] if dx + dx < w else Y[i]
