import numpy as np
import pytest

from knotinterp.errors import (
    DimensionMismatch,
    InvalidComparison,
    InvalidSequence,
    TooFewPoints,
)
from knotinterp.lib import pval
from knotinterp.ppinterp import (
    PPFunction,
    akima_coeffs,
    akima_derivs,
    akima_interpolator,
    cubic_coeffs,
    cubic_interpolator,
    hermite_coeffs,
    linear_coeffs,
    linear_interpolator,
    nearest_interpolator,
)
from scipy.interpolate import CubicSpline

K = 10  # number of knots

X = np.linspace(0, 10, K) ** 1.2  # Monotonic but non-uniform independent data
Y = np.sin(X / X[-1] * 2 * np.pi)  # smooth wave

# Interpolate between each knot
x_midpts = X[0:-1] + np.diff(X) / 2

# Interpolate to each knot point and each midpoint
x_targets = np.sort(np.concatenate((X, x_midpts)))

# ... and beyond both ends
x_extrap = np.array([X[0] - 1.0, X[-1] + 1.0])


def segment(x):
    """Index of the knot starting the segment used to evaluate at `x`."""
    return np.clip(np.searchsorted(X, x, side="right") - 1, 0, K - 2)


@pytest.mark.parametrize(
    "make",
    [linear_interpolator, cubic_interpolator, akima_interpolator, nearest_interpolator],
)
def test_reproduces_knots(make):
    f = make(X, Y)
    y = np.array([f(x) for x in X])
    assert np.allclose(y, Y, rtol=0, atol=1e-9)


def test_linear():
    f = linear_interpolator(X, Y)

    assert np.allclose(f(x_targets), np.interp(x_targets, X, Y))

    # Exactly the straight line formula
    for x in x_midpts:
        i = segment(x)
        slope = (Y[i + 1] - Y[i]) / (X[i + 1] - X[i])
        assert f(x) == (x - X[i]) * slope + Y[i]


def test_linear_coeffs_roundtrip():
    Yppc = linear_coeffs(X, Y)
    assert len(Yppc) == K - 1
    f = linear_interpolator(X, Y)
    for x in np.concatenate((x_targets, x_extrap)):
        i = segment(x)
        assert pval(x - X[i], Yppc[i]) == f(x)


def test_linear_extrapolates_with_end_segments():
    f = linear_interpolator([0.0, 1.0, 2.0], [0.0, 1.0, 3.0])
    assert f(-1.0) == -1.0
    assert f(3.0) == 5.0


def test_linear_trims_flat_segments():
    Yppc = linear_coeffs([0.0, 1.0, 2.0], [1.0, 1.0, 3.0])
    assert np.array_equal(Yppc[0], [1.0])
    assert np.array_equal(Yppc[1], [1.0, 2.0])


def test_cubic_matches_scipy():
    f = cubic_interpolator(X, Y)
    fn = CubicSpline(X, Y, bc_type="natural")
    x = np.concatenate((x_targets, x_extrap))
    assert np.allclose(f(x), fn(x))
    assert np.allclose(f(x_targets, 1), fn(x_targets, 1))


def burden_faires(X, Y):
    """Natural cubic spline coefficients, computed one float at a time."""
    X = [float(v) for v in X]
    Y = [float(v) for v in Y]
    n = len(X) - 1
    h = [X[i + 1] - X[i] for i in range(n)]
    mu = [0.0] * n
    z = [0.0] * (n + 1)
    for i in range(1, n):
        g = 2 * (X[i + 1] - X[i - 1]) - h[i - 1] * mu[i - 1]
        mu[i] = h[i] / g
        z[i] = (
            3
            * (Y[i + 1] * h[i - 1] - Y[i] * (X[i + 1] - X[i - 1]) + Y[i - 1] * h[i])
            / (h[i - 1] * h[i])
            - h[i - 1] * z[i - 1]
        ) / g
    b = [0.0] * n
    c = [0.0] * (n + 1)
    d = [0.0] * n
    for i in range(n - 1, -1, -1):
        c[i] = z[i] - mu[i] * c[i + 1]
        b[i] = (Y[i + 1] - Y[i]) / h[i] - h[i] * (c[i + 1] + 2 * c[i]) / 3
        d[i] = (c[i + 1] - c[i]) / (3 * h[i])
    return [[Y[i], b[i], c[i], d[i]] for i in range(n)]


def test_cubic_exact():
    rng = np.random.default_rng(0)
    Xr = np.cumsum(rng.uniform(0.1, 2.0, 30))
    Yr = rng.normal(size=30)
    Yppc = cubic_coeffs(Xr, Yr)
    for c, ref in zip(Yppc, burden_faires(Xr, Yr)):
        k = len(c)
        assert list(c) == ref[:k]
        assert all(r == 0 for r in ref[k:])


def test_cubic_natural_boundary():
    f = cubic_interpolator(X, Y)
    assert abs(f(X[0], 2)) < 1e-9
    assert abs(f(X[-1], 2)) < 1e-9


@pytest.mark.parametrize("coeffs", [cubic_coeffs, akima_coeffs])
def test_smooth_at_knots(coeffs):
    Yppc = coeffs(X, Y)
    derivs = (0, 1, 2) if coeffs is cubic_coeffs else (0, 1)
    for i in range(1, K - 1):
        h = X[i] - X[i - 1]
        for d in derivs:
            left = pval(h, Yppc[i - 1], d)
            right = pval(0.0, Yppc[i], d)
            assert abs(left - right) < 1e-9


def test_akima_linear_data():
    # Slope changes vanish (to rounding), so the derivative is the slope
    Yl = 2.0 * X + 1.0
    f = akima_interpolator(X, Yl)
    x = np.concatenate((x_targets, x_extrap))
    assert np.allclose(f(x), 2.0 * x + 1.0)
    assert np.allclose(akima_derivs(X, Yl), 2.0)


def test_akima_derivs():
    Xa = np.arange(7.0)
    Ya = np.array([0.0, 1.0, 2.0, 2.0, 1.0, 3.0, 3.0])
    δ = np.diff(Ya)  # slopes: 1, 1, 0, -1, 2, 0
    w = np.abs(np.diff(δ))  # weights at knots 1..5: 0, 1, 1, 3, 2
    d = akima_derivs(Xa, Ya)

    # Interior: weight each slope by the change in slope on the far side
    assert d[2] == (w[2] * δ[1] + w[0] * δ[2]) / (w[2] + w[0])
    assert d[3] == (w[3] * δ[2] + w[1] * δ[3]) / (w[3] + w[1])
    assert d[4] == (w[4] * δ[3] + w[2] * δ[4]) / (w[4] + w[2])

    # Ends: derivative of the quadratic through the three end points
    assert np.isclose(d[0], 1.0)
    assert np.isclose(d[1], 1.0)
    assert np.isclose(d[5], 1.0)  # y = 1 + 3t - t^2 through 1, 3, 3
    assert np.isclose(d[6], -1.0)


def three_point(X, Y, i, i0, i1, i2):
    """Derivative at X[i] of the quadratic through three knots."""
    y0, y1, y2 = float(Y[i0]), float(Y[i1]), float(Y[i2])
    t = float(X[i]) - float(X[i0])
    t1 = float(X[i1]) - float(X[i0])
    t2 = float(X[i2]) - float(X[i0])
    a = (y2 - y0 - (t2 / t1 * (y1 - y0))) / (t2 * t2 - t1 * t2)
    b = (y1 - y0 - a * t1 * t1) / t1
    return (2 * a * t) + b


def test_akima_end_derivs_exact():
    rng = np.random.default_rng(1)
    Xr = np.cumsum(rng.uniform(0.1, 2.0, 12))
    Yr = rng.normal(size=12)
    d = akima_derivs(Xr, Yr)
    n = Xr.size - 1
    assert d[0] == three_point(Xr, Yr, 0, 0, 1, 2)
    assert d[1] == three_point(Xr, Yr, 1, 0, 1, 2)
    assert d[n - 1] == three_point(Xr, Yr, n - 1, n - 2, n - 1, n)
    assert d[n] == three_point(Xr, Yr, n, n - 2, n - 1, n)


def test_hermite():
    dYdX = np.cos(X / X[-1] * 2 * np.pi) * 2 * np.pi / X[-1]
    Yppc = hermite_coeffs(X, Y, dYdX)
    for i in range(K - 1):
        h = X[i + 1] - X[i]
        assert pval(0.0, Yppc[i]) == Y[i]
        assert pval(0.0, Yppc[i], 1) == dYdX[i]
        assert np.isclose(pval(h, Yppc[i]), Y[i + 1])
        assert np.isclose(pval(h, Yppc[i], 1), dYdX[i + 1])


@pytest.mark.parametrize(
    "coeffs,n",
    [(linear_coeffs, 2), (cubic_coeffs, 3), (akima_coeffs, 5)],
)
def test_too_few_points(coeffs, n):
    coeffs(X[:n], Y[:n])  # just enough
    with pytest.raises(TooFewPoints):
        coeffs(X[: n - 1], Y[: n - 1])


def test_hermite_errors():
    with pytest.raises(TooFewPoints):
        hermite_coeffs([0.0], [1.0], [0.0])
    with pytest.raises(DimensionMismatch):
        hermite_coeffs([0.0, 1.0], [1.0, 2.0], [0.0])


@pytest.mark.parametrize(
    "make",
    [linear_interpolator, cubic_interpolator, akima_interpolator, nearest_interpolator],
)
def test_invalid_input(make):
    with pytest.raises(DimensionMismatch):
        make(X, Y[:-1])

    Xbad = X.copy()
    Xbad[3] = Xbad[2]
    with pytest.raises(InvalidSequence):
        make(Xbad, Y)

    Xbad[3] = np.nan
    with pytest.raises(InvalidSequence):
        make(Xbad, Y)


def test_private_copy():
    Xc, Yc = X.copy(), Y.copy()
    f = cubic_interpolator(Xc, Yc)
    g = nearest_interpolator(Xc, Yc)
    before_f, before_g = f(x_targets), g(x_targets)
    Xc[:] = 0.0
    Yc[:] = 0.0
    assert np.array_equal(f(x_targets), before_f)
    assert np.array_equal(g(x_targets), before_g)


def test_ppfunction():
    f = PPFunction([0.0, 1.0, 3.0], [[1.0, 1.0], [2.0]])
    assert f(0.5) == 1.5
    assert f(2.0) == 2.0
    assert f(-1.0) == 0.0  # first segment extended
    assert f(5.0) == 2.0  # last segment extended
    assert f(np.array([[0.5], [2.0]])).shape == (2, 1)
    assert len(f.coeffs) == 2
    with pytest.raises(InvalidComparison):
        f(np.nan)
    with pytest.raises(DimensionMismatch):
        PPFunction([0.0, 1.0, 3.0], [[1.0, 1.0]])


def test_nearest():
    f = nearest_interpolator([0.0, 10.0], [0.0, 1.0])
    assert f(4.0) == 0.0
    assert f(5.0) == 1.0  # midpoint goes to the right knot
    assert f(6.0) == 1.0
    assert f(0.0) == 0.0
    assert f(10.0) == 1.0
    assert f(-5.0) == 0.0
    assert f(15.0) == 1.0


def test_nearest_degenerate():
    f = nearest_interpolator([], [])
    assert np.isnan(f(0.0))
    assert np.all(np.isnan(f(x_targets)))

    f = nearest_interpolator([2.0], [7.0])
    assert f(-100.0) == f(2.0) == f(100.0) == 7.0

    with pytest.raises(DimensionMismatch):
        nearest_interpolator([2.0], [])
