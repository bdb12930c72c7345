from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.special import gammaln, ndtr, ndtri
from scipy.stats import norm

from ..config import get_config
from ..custom_types import PRNG
from ..exceptions import ShapeMismatchError


def _as_float_vector(x: Any) -> NDArray[np.floating]:
    """Converts input to a flat 1-D float array.

    Scalars become length-1 vectors and matrices are flattened in row-major
    order, so every value takes part in recycling.

    Args:
        x (Any): Scalar, sequence or array.

    Returns:
        NDArray[np.floating]: Array of shape (n,).

    Raises:
        TypeError: If the input cannot be converted to floats.
    """
    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as e:
        raise TypeError(
            f"Could not convert input to a float array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Original error: {e}"
        ) from e
    return arr.reshape(-1)


def _as_float_matrix(x: Any, name: str = "x") -> NDArray[np.floating]:
    """Converts input to a 2-D float array with one parameter set per row.

    A scalar becomes (1, 1) and a 1-D array of length k becomes (1, k).

    Args:
        x (Any): Scalar, vector or matrix.
        name (str): Argument name used in error messages.

    Returns:
        NDArray[np.floating]: Array of shape (n, k).

    Raises:
        ShapeMismatchError: If the input has more than two dimensions.
    """
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1, 1)
    if arr.ndim == 1:
        return arr.reshape(1, -1)
    if arr.ndim == 2:
        return arr
    raise ShapeMismatchError(f"'{name}' must be a vector or a matrix. Got shape {arr.shape}.")


def missing_mask(*arrays: NDArray) -> NDArray[np.bool_]:
    """Marks slots where any input is NaN."""
    mask = np.zeros(np.shape(arrays[0]), dtype=bool)
    for a in arrays:
        mask |= np.isnan(a)
    return mask


def tol_equal(x, y, eps: float | None = None):
    """Equality within the configured absolute tolerance."""
    if eps is None:
        eps = get_config().min_diff_eps
    return np.abs(np.asarray(x) - np.asarray(y)) <= eps


def is_whole(x) -> NDArray[np.bool_]:
    """Elementwise check that values are integers.

    Infinite values count as whole, NaN does not.
    """
    x = np.asarray(x, dtype=float)
    return np.floor(x) == x


def finite_max(x: NDArray[np.floating]) -> float:
    """Largest finite value in `x`, or -inf when there is none."""
    x = np.asarray(x, dtype=float)
    finite = x[np.isfinite(x)]
    return float(finite.max()) if finite.size else -np.inf


def factorial(x):
    return np.exp(gammaln(np.asarray(x, dtype=float) + 1.0))


def lfactorial(x):
    return gammaln(np.asarray(x, dtype=float) + 1.0)


# Standard normal

def phi(x):
    return norm.pdf(x)


def Phi(x):
    return ndtr(x)


def inv_Phi(p):
    return ndtri(p)


# Random generation

def rng_bernoulli(rng: PRNG, p, size=None) -> NDArray[np.floating]:
    """Bernoulli draws as floats; NaN where `p` lies outside [0, 1].

    Args:
        rng (PRNG): Random generator.
        p: Success probability, scalar or array.
        size: Output shape, defaults to the shape of `p`.

    Returns:
        NDArray[np.floating]: Zeros and ones, NaN for invalid `p`.
    """
    p = np.asarray(p, dtype=float)
    shape = p.shape if size is None else size
    u = rng.uniform(0.0, 1.0, size=shape)
    out = np.where(u <= 1.0 - p, 0.0, 1.0)
    return np.where((p < 0.0) | (p > 1.0) | np.isnan(p), np.nan, out)

