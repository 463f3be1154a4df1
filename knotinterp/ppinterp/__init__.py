"""
Piecewise polynomial interpolation in one dimension.

This package separates 1D interpolation into two steps:
    1. Compute coefficients for a piecewise polynomial interpolant,
    2. Evaluate the interpolant.

Step 1 is done by the `*_coeffs` functions, such as `linear_coeffs`,
`cubic_coeffs` and `akima_coeffs`, which validate the data and return a list
with one array of polynomial coefficients per segment between two knots.
The coefficients are in ascending order, for a polynomial in `x - X[i]` where
`X[i]` is the knot at the start of the segment.

Step 2 is done by a `PPFunction`, which keeps a private copy of the knots and
coefficients and can be called any number of times.  The `*_interpolator`
functions do both steps at once.

Nearest neighbour interpolation is not polynomial; `nearest_interpolator`
builds its own callable.

The `make_interpolator` factory selects a method by name, and
`make_interpolator_fallback` swaps in a simpler method when there are too few
points for the one requested.
"""

import importlib as _importlib
from .ppval import UnivariateFunction, ConstantFunction, PPFunction, ppval_1, ppval_n
from .linear import linear_coeffs, linear_interpolator
from .cubic import cubic_coeffs, cubic_interpolator
from .akima import akima_coeffs, akima_derivs, akima_interpolator
from .hermite import hermite_coeffs, hermite_interpolator
from .nearest import nearest_interpolator
from .tools import (
    Method,
    make_interpolator,
    make_interpolator_fallback,
    fallback_method,
    coeffs_fn,
)

modules = ["akima", "cubic", "hermite", "linear", "nearest", "ppval", "tools"]

__all__ = modules + [
    k for (k, v) in locals().items() if callable(v) and not k.startswith("_")
]  # all local, public functions and classes


def __dir__():
    return __all__


# Lazy load of submodules
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"knotinterp.ppinterp.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'knotinterp.ppinterp' has no attribute '{name}'"
            )
