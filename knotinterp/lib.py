"""Library of simple functions for validating data and handling polynomials"""

import numpy as np
import numba as nb

from .errors import DimensionMismatch, InvalidComparison, InvalidSequence


def as_float_array(a, name="X"):
    """
    Copy an array-like into a new 1D float64 numpy array.

    Parameters
    ----------
    a : array-like
        Input data.
    name : str, Default "X"
        Name of the input, for error messages.

    Returns
    -------
    b : ndarray(float, 1d)
        A contiguous copy of `a`, owned by the caller.
    """
    b = np.array(a, dtype=np.float64)
    if b.ndim != 1:
        raise DimensionMismatch(f"Expected `{name}` to be 1D; got {b.ndim} dimensions")
    return b


def check_same_size(X, Y, names=("X", "Y")):
    """Raise `DimensionMismatch` unless `X` and `Y` have the same length."""
    if len(X) != len(Y):
        raise DimensionMismatch(
            f"Dimension mismatch: len({names[0]}) == {len(X)}, "
            f"len({names[1]}) == {len(Y)}"
        )


def check_finite(a, name="Y"):
    """Raise `InvalidSequence` if any element of `a` is NaN or infinite."""
    a = np.asarray(a, dtype=np.float64)
    bad = ~np.isfinite(a)
    if bad.any():
        i = int(np.argmax(bad))
        raise InvalidSequence(f"Non-finite number detected: {name}[{i}] == {a[i]}")


def check_strictly_increasing(a, name="X"):
    """Raise `InvalidSequence` unless `a` is finite and strictly increasing."""
    check_finite(a, name)
    a = np.asarray(a, dtype=np.float64)
    bad = np.diff(a) <= 0
    if bad.any():
        i = int(np.argmax(bad)) + 1
        raise InvalidSequence(
            f"`{name}` is not strictly increasing: "
            f"{name}[{i}] == {a[i]} <= {name}[{i - 1}] == {a[i - 1]}"
        )


def check_monotonic(a, name="X"):
    """Raise `InvalidSequence` unless `a` is finite and non-decreasing.

    Unlike `check_strictly_increasing`, consecutive equal values are allowed.
    """
    check_finite(a, name)
    a = np.asarray(a, dtype=np.float64)
    bad = np.diff(a) < 0
    if bad.any():
        i = int(np.argmax(bad)) + 1
        raise InvalidSequence(
            f"`{name}` is not monotonically increasing: "
            f"{name}[{i}] == {a[i]} < {name}[{i - 1}] == {a[i - 1]}"
        )


def binary_search(a, key):
    """
    Search a sorted array for a value.

    Parameters
    ----------
    a : array-like
        Data sorted in increasing order.
    key : float
        The value to search for.

    Returns
    -------
    i : int
        The index of `key` in `a` if it is there.  Otherwise
        `-(insertion_point + 1)`, where the insertion point is the index of
        the first element of `a` greater than `key`, or `len(a)` if there is
        no such element.

    Raises
    ------
    InvalidComparison
        If `key`, or an element of `a` that is compared to it, is NaN.

    Example
    -------
    >>> binary_search([1.0, 3.0, 5.0, 7.0], 4.0)
    -3
    """
    return _binary_search(np.asarray(a, dtype=np.float64), float(key))


@nb.njit
def _binary_search(a, key):
    lo = 0
    hi = len(a) - 1
    while lo <= hi:
        mid = (lo + hi) >> 1
        v = a[mid]
        if v < key:
            lo = mid + 1
        elif v > key:
            hi = mid - 1
        elif v == key:
            return mid
        else:
            # Neither <, > nor ==: one of them is NaN
            raise InvalidComparison("Invalid number encountered in binary search.")
    return -(lo + 1)


def pval(x, C, d=0):
    """
    Evaluate a (derivative of a) single polynomial.

    Parameters
    ----------
    x : float
        Evaluation site
    C : array of float
        Polynomial coefficients in ascending order: starting with the constant
        term and ending with the highest order coefficient.
    d : int, Default 0
        Order of the derivative to evaluate. When `0`, just evaluate the
        polynomial.

    Returns
    -------
    y : float
        The polynomial (or its `d`'th derivative) evaluated at `x`.
        `0.0` if `C` is empty.

    Example
    -------
    If `C == (C0, C1, C2)`, and `d == 0`, then
    `y == x * (x * C2 + C1) + C0`.
    """
    return _pval(float(x), np.asarray(C, dtype=np.float64), d)


@nb.njit
def _pval(x, C, d=0):
    n = len(C)
    if n <= d:
        return 0.0

    # Nested multiplication from the highest order coefficient down.
    # E.g. the cubic case is:
    # y = C[0] + x * C[1] + x^2 * C[2] + x^3 * C[3]
    #   = x * (x * (x * C[3] + C[2]) + C[1]) + C[0]
    if d == 0:
        y = C[n - 1]
        for j in range(n - 2, -1, -1):
            y = x * y + C[j]
        return y

    # E.g. the second derivative of the cubic case is:
    # y = 2 * C[2] + 6 * x * C[3]
    y = C[n - 1] * _falling(n - 1, d)
    for j in range(n - 2, d - 1, -1):
        y = x * y + C[j] * _falling(j, d)
    return y


@nb.njit
def _falling(j, d):
    """The falling factorial j * (j - 1) * ... * (j - d + 1)"""
    p = 1.0
    for a in range(j - d + 1, j + 1):
        p *= a
    return p


def trim_poly(C):
    """
    Drop high order polynomial coefficients which are zero.

    At least one coefficient is always kept.  Returns `C` itself if nothing is
    trimmed, otherwise a view of its leading part.
    """
    n = len(C)
    while n > 1 and C[n - 1] == 0:
        n -= 1
    return C if n == len(C) else C[:n]


def ppc_list(C):
    """Split a 2D array of piecewise polynomial coefficients into a list of
    trimmed, read-only 1D arrays, one per segment."""
    C.flags.writeable = False
    return [trim_poly(c) for c in C]


def median(a):
    """
    The median of some numbers.

    Parameters
    ----------
    a : array-like
        Input data.  Not modified.

    Returns
    -------
    m : float
        The middle value of sorted `a`, or the mean of the two middle values
        when `a` has even length.  NaN if `a` is empty.
    """
    a = np.sort(np.asarray(a, dtype=np.float64).ravel())  # sorted copy
    n = a.size
    if n < 1:
        return np.nan
    m = n // 2
    if n % 2 == 0:
        return float((a[m - 1] + a[m]) / 2)
    return float(a[m])
