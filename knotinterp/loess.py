"""
LOESS / LOWESS: robust locally weighted linear regression.

`smooth` fits, at each data site, a straight line by weighted least squares to
the nearest `bandwidth_fraction` of the data, weighting each point by its
distance from the site (tri-cube kernel).  It then repeats the fit up to
`robustness_iters` more times, down-weighting points with large residuals
(bisquare kernel).

`loess_interpolator` thins the smoothed points to a set of knots that are at
least `min_x_distance` apart, then interpolates between them.

See https://en.wikipedia.org/wiki/Local_regression and
W.S. Cleveland (1979) "Robust Locally Weighted Regression and Smoothing
Scatterplots", Journal of the American Statistical Association 74(368).
"""

import math
import warnings

import numpy as np
import numba as nb

from .errors import DimensionMismatch, InsufficientPoints
from .lib import as_float_array, check_finite, check_monotonic, median
from .ppinterp.tools import as_method, make_interpolator_fallback

# Total weight of a local regression below which there is no usable data
MIN_WEIGHT = 1e-12

# Stretch of the bandwidth window, so the outermost points get non-zero weight
MAX_DISTANCE_FACTOR = 1.001


def smooth(
    X,
    Y,
    W=None,
    bandwidth_fraction=0.3,
    robustness_iters=2,
    accuracy=1e-12,
    outlier_distance_factor=6.0,
    diags=False,
):
    """
    Robust LOESS linear fit of a sequence of points.

    Parameters
    ----------
    X : array-like
        Independent data, monotonically increasing.  Repeated values allowed.

    Y : array-like
        Dependent data, same length as `X`.

    W : array-like, Default None
        Weight of each point.  If None, every point has weight 1.  Points of
        zero weight are ignored.

    bandwidth_fraction : float, Default 0.3
        Fraction of the (non-zero weight) points used for each local
        regression.  At least 2 points are always used.

    robustness_iters : int, Default 2
        Maximum number of robustness iterations after the initial fit.
        0 for just the initial fit.

    accuracy : float, Default 1e-12
        If the median residual of a fit is below this, the fit is final.
        Also, the local regression slope is taken as 0 when the weighted
        variance of `X` in the window is below `accuracy ** 2`.

    outlier_distance_factor : float, Default 6.0
        Points whose residual exceeds this multiple of the median residual
        get zero weight in the next robustness iteration.

    diags : bool, Default False
        If True, also return a dict of diagnostics.

    Returns
    -------
    fit : ndarray
        Smoothed `Y` value at each `X`.  NaN where the local regression had
        no weight to work with.

    d : dict
        Only returned if `diags` is True.  Has keys

        - "robustness_iters" : number of robustness iterations done,
        - "second_last_median_residual" : median residual that started the
          last robustness iteration, or None,
        - "last_median_residual" : median residual that ended the iterations
          early, or None if all `robustness_iters` were done,
        - "robustness_weights" : robustness weights of the last iteration, or
          None.

    Raises
    ------
    InvalidSequence
        If `X` is not monotonically increasing or any input is not finite.
    DimensionMismatch
        If `X`, `Y` and `W` differ in length.
    InsufficientPoints
        If fewer than 2 points have non-zero weight in some iteration.
    """
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    check_monotonic(X, "X")
    check_finite(Y, "Y")
    if W is not None:
        W = as_float_array(W, "W")
        check_finite(W, "W")
    n = X.size
    if Y.size != n or (W is not None and W.size != n):
        raise DimensionMismatch(
            f"Dimension mismatch: len(X) == {n}, len(Y) == {Y.size}"
            + ("" if W is None else f", len(W) == {W.size}")
        )
    if robustness_iters < 0:
        raise ValueError(f"Expected `robustness_iters` >= 0; got {robustness_iters}")

    d = {
        "robustness_iters": 0,
        "second_last_median_residual": None,
        "last_median_residual": None,
        "robustness_weights": None,
    }

    if n <= 2:
        # Too few points to regress; the data is its own fit.
        return (Y, d) if diags else Y

    fit = None
    for iter_ in range(robustness_iters + 1):
        R = None  # robustness weights
        if iter_ > 0:
            residuals = np.abs(fit - Y)
            median_residual = median(residuals)
            if median_residual < accuracy:
                d["last_median_residual"] = median_residual
                break
            outlier_distance = median_residual * outlier_distance_factor
            R = robustness_weights(residuals, outlier_distance)
            d["robustness_iters"] = iter_
            d["second_last_median_residual"] = median_residual
            d["robustness_weights"] = R
        fit = sequence_regression(
            X, Y, _combine_weights(W, R), bandwidth_fraction, accuracy, iter_
        )

    return (fit, d) if diags else fit


def sequence_regression(X, Y, W, bandwidth_fraction, accuracy, iter_=0):
    """
    One pass of local linear regression at every data site.

    Inputs are as for `smooth`, and must already be validated.  `iter_` is
    only used in the error message.

    Returns
    -------
    fit : ndarray
        The local regression at each `X`.
    """
    n = X.size
    n2 = n if W is None else int(np.count_nonzero(W))
    if n2 < 2:
        raise InsufficientPoints(
            f"Not enough relevant points in iteration {iter_}: "
            f"{n2} point(s) with non-zero weight"
        )
    bandwidth = max(2, min(n2, _round_half_up(n2 * bandwidth_fraction)))
    if W is None:
        W = np.ones(n, dtype=np.float64)
    return _sequence_regression(X, Y, W, bandwidth, accuracy)


def _round_half_up(v):
    return int(math.floor(v + 0.5))


def _combine_weights(W, R):
    if W is None or R is None:
        return R if W is None else W
    return W * R


@nb.njit
def _sequence_regression(X, Y, W, bandwidth, accuracy):
    n = X.size

    # Initial window: the first `bandwidth` points with non-zero weight
    iL = _find_nonzero(W, 0)
    iR = iL
    for _ in range(bandwidth - 1):
        iR = _find_nonzero(W, iR + 1)

    fit = np.empty(n, dtype=np.float64)
    for i in range(n):
        x = X[i]

        # Slide the window right while the next point on the right is closer
        # to x than the leftmost point.  As X is sorted, the window only ever
        # moves right, so the total movement over all i is O(n).
        while True:
            nextR = _find_nonzero(W, iR + 1)
            if nextR >= n or X[nextR] - x >= x - X[iL]:
                break
            iL = _find_nonzero(W, iL + 1)
            iR = nextR

        fit[i] = _local_linear_regression(X, Y, W, x, iL, iR, accuracy)
    return fit


@nb.njit
def _find_nonzero(W, i):
    """The first index `j >= i` with `W[j] != 0`, or `len(W)` if none."""
    n = W.size
    while i < n and W[i] == 0:
        i += 1
    return i


def local_linear_regression(X, Y, W, x, iL, iR, accuracy=1e-12):
    """
    Weighted least squares linear fit, evaluated at `x`.

    Parameters
    ----------
    X, Y : array-like
        Data, with `X` sorted.

    W : array-like or None
        Weights of the data points.  None for all ones.

    x : float
        Evaluation site.

    iL, iR : int
        Indices of the first and last data point in the window.

    accuracy : float, Default 1e-12
        The slope is 0 when the weighted variance of `X[iL:iR+1]` is below
        `accuracy ** 2`.

    Returns
    -------
    y : float
        The fitted line at `x`, where each point `k` in the window is weighted
        by `W[k] * tricube(|X[k] - x| / D)` with `D` slightly more than the
        furthest distance from `x` to an end of the window.  NaN if the total
        weight is below `MIN_WEIGHT`.
    """
    X = as_float_array(X, "X")
    Y = as_float_array(Y, "Y")
    W = np.ones(X.size) if W is None else as_float_array(W, "W")
    return _local_linear_regression(X, Y, W, float(x), int(iL), int(iR), accuracy)


@nb.njit(error_model="numpy")
def _local_linear_regression(X, Y, W, x, iL, iR, accuracy):
    max_dist = max(x - X[iL], X[iR] - x) * MAX_DISTANCE_FACTOR
    if max_dist == 0:
        # All points in the window are at x
        max_dist = 1.0

    sum_w = 0.0
    sum_x = 0.0
    sum_xx = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    for k in range(iL, iR + 1):
        xk = X[k]
        yk = Y[k]
        w = W[k] * tricube(abs(xk - x) / max_dist)
        xkw = xk * w
        sum_w += w
        sum_x += xkw
        sum_xx += xk * xkw
        sum_y += yk * w
        sum_xy += yk * xkw

    if sum_w < MIN_WEIGHT:
        return np.nan

    mean_x = sum_x / sum_w
    mean_y = sum_y / sum_w
    mean_xy = sum_xy / sum_w
    mean_xx = sum_xx / sum_w

    var_x = mean_xx - mean_x * mean_x
    if abs(var_x) < accuracy**2:
        beta = 0.0
    else:
        beta = (mean_xy - mean_x * mean_y) / var_x
    return mean_y + beta * x - beta * mean_x


@nb.njit
def tricube(u):
    """Tri-cube weight function: `(1 - |u|^3)^3` for `|u| < 1`, else 0."""
    a = abs(u)
    if a >= 1:
        return 0.0
    t = 1 - a * a * a
    return t * t * t


@nb.njit
def biweight(u):
    """Bisquare weight function: `(1 - u^2)^2` for `|u| < 1`, else 0."""
    a = abs(u)
    if a >= 1:
        return 0.0
    t = 1 - a * a
    return t * t


@nb.njit(error_model="numpy")
def robustness_weights(residuals, outlier_distance):
    """Bisquare weight of each residual relative to `outlier_distance`."""
    R = np.empty(residuals.size, dtype=np.float64)
    for i in range(residuals.size):
        R[i] = biweight(residuals[i] / outlier_distance)
    return R


def default_min_x_distance(X):
    """One hundredth of the range of `X`; 1 if that is 0; NaN if `X` is empty."""
    X = np.asarray(X, dtype=np.float64)
    if X.size == 0:
        return np.nan
    x_range = X[-1] - X[0]
    if x_range == 0:
        return 1.0
    return float(x_range / 100)


def knot_filter(X, fit, min_x_distance):
    """
    Select the smoothed points to use as interpolation knots.

    Walking through `X` in order, a point is kept if its `fit` is not NaN and
    it lies at least `min_x_distance` beyond the previously kept point.

    Returns
    -------
    keep : ndarray of bool
        True for points to use as knots.  The kept `X` are strictly increasing
        when `min_x_distance > 0`.
    """
    X = as_float_array(X, "X")
    fit = as_float_array(fit, "fit")
    return _knot_filter(X, fit, float(min_x_distance))


@nb.njit
def _knot_filter(X, fit, min_x_distance):
    keep = np.zeros(X.size, dtype=np.bool_)
    prev = -np.inf
    for i in range(X.size):
        if X[i] - prev >= min_x_distance and not np.isnan(fit[i]):
            keep[i] = True
            prev = X[i]
    return keep


def loess_interpolator(
    X,
    Y,
    W=None,
    bandwidth_fraction=0.3,
    robustness_iters=2,
    accuracy=1e-12,
    outlier_distance_factor=6.0,
    interpolation_method="akima",
    min_x_distance=None,
    diags=False,
):
    """
    Interpolant through LOESS-smoothed data.

    Parameters
    ----------
    X, Y, W, bandwidth_fraction, robustness_iters, accuracy,
    outlier_distance_factor :
        As in `smooth`.

    interpolation_method : str or Method, Default "akima"
        How to connect the knots.  Degrades as per `make_interpolator_fallback`
        when there are too few knots.

    min_x_distance : float, Default None
        Minimum distance in `X` between knots.  If None, uses
        `default_min_x_distance(X)`.

    diags : bool, Default False
        If True, also return a dict of diagnostics.

    Returns
    -------
    f : UnivariateFunction
        The interpolant.

    d : dict
        Only returned if `diags` is True.  As in `smooth`, with further keys

        - "fit_y" : smoothed `Y` values,
        - "knot_filter" : bool array, True for points used as knots,
        - "knot_x", "knot_y" : the knots.
    """
    method = as_method(interpolation_method)
    X = as_float_array(X, "X")
    if min_x_distance is None:
        min_x_distance = default_min_x_distance(X)

    fit, d = smooth(
        X,
        Y,
        W,
        bandwidth_fraction=bandwidth_fraction,
        robustness_iters=robustness_iters,
        accuracy=accuracy,
        outlier_distance_factor=outlier_distance_factor,
        diags=True,
    )

    keep = knot_filter(X, fit, min_x_distance)
    knot_x = X[keep]
    knot_y = fit[keep]
    if X.size > 0 and knot_x.size == 0:
        warnings.warn(
            "No smoothed point is usable as a knot; the interpolant is 0 everywhere.",
            RuntimeWarning,
            stacklevel=2,
        )

    f = make_interpolator_fallback(method, knot_x, knot_y)

    if diags:
        d["fit_y"] = fit
        d["knot_filter"] = keep
        d["knot_x"] = knot_x
        d["knot_y"] = knot_y
        return f, d
    return f
