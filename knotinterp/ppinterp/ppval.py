"""
Functions and callables to evaluate piecewise polynomials, given their
coefficients, in one dimension.
"""

import numpy as np
import numba as nb

from ..errors import DimensionMismatch
from ..lib import _binary_search, _pval, as_float_array


class UnivariateFunction:
    """
    A function of one real variable, built by one of the interpolator factories.

    Call as `f(x)` or `f(x, d)`:

    x : float or array-like
        Evaluation site(s).
    d : int, Default 0
        Number of derivatives to take.  If 0, simply evaluate the function.

    Returns a float when `x` is a scalar, otherwise an ndarray shaped like `x`.

    Instances are immutable and own private copies of their data, so they are
    unaffected by later changes to the arrays they were built from.
    """

    def __call__(self, x, d=0):
        if np.ndim(x) == 0:
            return float(self._eval_1(float(x), d))
        x = np.asarray(x, dtype=np.float64)
        return self._eval_n(x.ravel(), d).reshape(x.shape)

    def _eval_1(self, x, d):
        raise NotImplementedError

    def _eval_n(self, x, d):
        return np.array([self._eval_1(xi, d) for xi in x], dtype=np.float64)


class ConstantFunction(UnivariateFunction):
    """A function with the same value `c` everywhere."""

    def __init__(self, c):
        self._c = float(c)

    @property
    def value(self):
        return self._c

    def _eval_1(self, x, d):
        return self._c if d == 0 else 0.0

    def _eval_n(self, x, d):
        return np.full(x.size, self._c if d == 0 else 0.0)

    def __repr__(self):
        return f"ConstantFunction({self._c!r})"


class PPFunction(UnivariateFunction):
    """
    A Piecewise Polynomial (PP) function.

    Parameters
    ----------
    X : array-like
        Knots.  Must be strictly increasing; this is not checked here.
    C : sequence of array-like
        Piecewise Polynomial Coefficients.  `C[i]` holds the coefficients, in
        ascending order, of the polynomial for the segment starting at `X[i]`,
        in the local coordinate `x - X[i]`.  Requires `len(C) == len(X) - 1`.

    Notes
    -----
    Evaluation sites below `X[0]` or above `X[-1]` are handled by the first or
    last segment polynomial, respectively.  There is no special
    extrapolation rule.

    A binary search is performed to find the segment containing `x`, so a NaN
    evaluation site raises `InvalidComparison`.
    """

    def __init__(self, X, C):
        X = as_float_array(X)
        nseg = len(C)
        if nseg < 1 or nseg != X.size - 1:
            raise DimensionMismatch(
                f"Expected {X.size - 1} segments for {X.size} knots; got {nseg}"
            )

        # Pack the ragged coefficient lists into a zero-padded 2D array, with
        # L[i] the number of coefficients for segment i.
        L = np.array([len(c) for c in C], dtype=np.int64)
        Yppc = np.zeros((nseg, max(1, L.max())), dtype=np.float64)
        for i, c in enumerate(C):
            Yppc[i, : L[i]] = c

        for a in (X, Yppc, L):
            a.flags.writeable = False
        self._X = X
        self._Yppc = Yppc
        self._L = L

    @property
    def knots(self):
        return self._X

    @property
    def coeffs(self):
        """Piecewise polynomial coefficients, as a list of 1D arrays."""
        return [self._Yppc[i, : self._L[i]] for i in range(self._L.size)]

    def _eval_1(self, x, d):
        return ppval_1(x, self._X, self._Yppc, self._L, d)

    def _eval_n(self, x, d):
        return ppval_n(x, self._X, self._Yppc, self._L, d)

    def __repr__(self):
        return f"PPFunction(knots={self._X.size}, order={self._Yppc.shape[1]})"


@nb.njit
def ppval_1(x, X, Yppc, L, d=0):
    """
    Evaluate a single Piecewise Polynomial (PP).

    Parameters
    ----------
    x : float
        Evaluation site
    X : ndarray, 1d
        Knots. Must be strictly increasing.
    Yppc : ndarray, 2d
        Piecewise Polynomial Coefficients, in ascending order, zero padded.
        First dimension must be `len(X) - 1`.
    L : ndarray of int, 1d
        Number of valid coefficients in each row of `Yppc`.
    d : int, Default 0
        Number of derivatives to take.  If 0, simply evaluate the PP.

    Returns
    -------
    y : float
        The value of the PP (or its `d`'th derivative) at `X = x`.
    """

    # i = binary_search(X, x) is such that
    #   i >= 0                      if X[i] == x
    #   -i - 1 == insertion point   otherwise
    # so after the next step, X[i] <= x < X[i+1] when X[0] <= x < X[-1].
    i = _binary_search(X, x)
    if i < 0:
        i = -i - 2

    # Clamp to a valid segment: the first one when x < X[0], and the last one
    # when X[-1] <= x.
    i = max(0, min(i, Yppc.shape[0] - 1))

    return _pval(x - X[i], Yppc[i, : L[i]], d)


@nb.njit
def ppval_n(x, X, Yppc, L, d=0):
    """As `ppval_1` but evaluates at each element of the 1D array `x`."""
    y = np.empty(x.size, dtype=np.float64)
    for j in range(x.size):
        y[j] = ppval_1(x[j], X, Yppc, L, d)
    return y
