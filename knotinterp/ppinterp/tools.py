import enum
from importlib import import_module

from ..errors import UnknownMethod
from ..lib import check_same_size
from .ppval import ConstantFunction


class Method(str, enum.Enum):
    """Interpolation methods understood by `make_interpolator`."""

    LINEAR = "linear"
    CUBIC = "cubic"
    AKIMA = "akima"
    NEAREST_NEIGHBOR = "nearestNeighbor"
    LOESS = "loess"


# Fewest points each method can handle.  Methods not listed handle any number.
MIN_POINTS = {Method.LINEAR: 2, Method.CUBIC: 3, Method.AKIMA: 5}


def as_method(method):
    """Convert a method name (or a `Method`) to a `Method`, raising
    `UnknownMethod` if it is not recognized."""
    try:
        return Method(method)
    except ValueError:
        names = ", ".join(repr(m.value) for m in Method)
        raise UnknownMethod(
            f'Unknown interpolation method "{method}"; expected one of {names}'
        ) from None


def make_interpolator(method, X, Y):
    """
    Build an interpolating function for a dataset.

    Parameters
    ----------
    method : str or Method
        - "linear" : piecewise linear, via `linear_interpolator`
        - "cubic" : natural cubic spline, via `cubic_interpolator`
        - "akima" : Akima cubic spline, via `akima_interpolator`
        - "nearestNeighbor" : nearest neighbour, via `nearest_interpolator`
        - "loess" : LOESS smoothing then Akima interpolation, via
          `knotinterp.loess.loess_interpolator` with default parameters

    X : array-like
        Independent data.  Strictly increasing, except for "loess" which
        allows repeated values.

    Y : array-like
        Dependent data, with the same length as `X`.

    Returns
    -------
    f : UnivariateFunction
        The interpolant.

    Raises
    ------
    UnknownMethod
        If `method` is not recognized.
    TooFewPoints
        If `X` has fewer points than `method` needs.  See
        `make_interpolator_fallback` to avoid this.
    """
    method = as_method(method)

    if method == Method.LOESS:
        from ..loess import loess_interpolator

        return loess_interpolator(X, Y)

    name = "nearest" if method == Method.NEAREST_NEIGHBOR else method.value
    mod = import_module("knotinterp.ppinterp." + name)
    return mod.__getattribute__(name + "_interpolator")(X, Y)


def fallback_method(method, n):
    """
    The method to use in place of `method` for a dataset of `n` points.

    Akima needs 5 points, so falls back to a cubic spline; a cubic spline needs
    3 points, so falls back to linear interpolation.  Other methods are
    returned unchanged.
    """
    method = as_method(method)
    if method == Method.AKIMA and n < MIN_POINTS[Method.AKIMA]:
        method = Method.CUBIC
    if method == Method.CUBIC and n < MIN_POINTS[Method.CUBIC]:
        method = Method.LINEAR
    return method


def make_interpolator_fallback(method, X, Y):
    """
    As `make_interpolator`, but never fails for lack of points.

    The requested method degrades as per `fallback_method`.  With fewer than 2
    points, a constant function is returned: `Y[0]` with one point, `0` with
    none.
    """
    method = as_method(method)
    check_same_size(X, Y)
    n = len(X)
    if n < 2:
        return ConstantFunction(Y[0] if n == 1 else 0.0)
    return make_interpolator(fallback_method(method, n), X, Y)


def coeffs_fn(method):
    """
    The function computing Piecewise Polynomial Coefficients for `method`.

    Parameters
    ----------
    method : str or Method
        One of "linear", "cubic", or "akima".

    Returns
    -------
    f : function
        `linear_coeffs`, `cubic_coeffs`, or `akima_coeffs`, each taking
        `(X, Y)` and returning a list of 1D coefficient arrays.
    """
    method = as_method(method)
    if method not in MIN_POINTS:
        raise UnknownMethod(
            f'"{method.value}" is not a piecewise polynomial method; '
            "expected one of 'linear', 'cubic', 'akima'"
        )

    # Below is equivalent to
    # from knotinterp.ppinterp.`method` import `method`_coeffs
    return import_module("knotinterp.ppinterp." + method.value).__getattribute__(
        method.value + "_coeffs"
    )
