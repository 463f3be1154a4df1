__version__ = "1.0.0"

import importlib as _importlib

# Import from subpackages
from .ppinterp import (
    Method,
    UnivariateFunction,
    PPFunction,
    ConstantFunction,
    linear_coeffs,
    linear_interpolator,
    cubic_coeffs,
    cubic_interpolator,
    akima_coeffs,
    akima_interpolator,
    hermite_coeffs,
    hermite_interpolator,
    nearest_interpolator,
    make_interpolator,
    make_interpolator_fallback,
    fallback_method,
    coeffs_fn,
)

# Import from modules
from .errors import *
from .lib import (
    binary_search,
    check_finite,
    check_monotonic,
    check_strictly_increasing,
    median,
    pval,
    trim_poly,
)
from .loess import smooth, loess_interpolator

# List of modules not explicitly imported above
modules = ["errors", "lib", "loess", "ppinterp"]

__all__ = modules + [
    k for (k, v) in locals().items() if not k.startswith("_")
]  # all local, public functions


def __dir__():
    return __all__


# Lazy load of modules.
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"knotinterp.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(f"Module 'knotinterp' has no attribute '{name}'")
