"""
Multinomial distribution.

x_j counts draws of category j out of size = sum(x) draws, category j having
probability p_j:

    f(x) = size! / prod(x_j!) prod(p_j^x_j)

`x` and `prob` are matrices with one category per column; their rows are
recycled together with `size`.
"""
from __future__ import annotations

import math

import numpy as np
from scipy.special import xlogy

from ..core._utils import _as_float_matrix, _as_float_vector, is_whole, lfactorial, tol_equal
from ..core.dispatch import NA_MESSAGE, Diagnostics, sample_size
from ..core.distributions import RecycledDistribution
from ..core.recycling import recycle_rows
from ..custom_types import PRNG
from ..exceptions import ShapeMismatchError

__all__ = ["dmnom", "rmnom", "Multinomial"]


def _bad_prob(prob):
    sums = np.array([math.fsum(row) for row in prob])
    return (prob < 0.0).any(axis=1) | ~tol_equal(sums, 1.0)


def _bad_size(size):
    return (size < 0.0) | ~is_whole(size) | ~np.isfinite(size)


def dmnom(x, size, prob, log=False):
    """Multinomial probability mass function.

    Args:
        x: Count matrix, one row per observation and one column per category.
            A 1-D input is a single row.
        size: Number of draws, a non-negative integer.
        prob: Probability matrix with the same number of columns as `x`.
        log: Return log probabilities.

    Returns:
        Probabilities, one per recycled row. Rows of `x` that are not
        non-negative integers summing to `size` have probability zero.

    Raises:
        ShapeMismatchError: If `x` and `prob` differ in column count.
    """
    x = _as_float_matrix(x, "x")
    size = _as_float_vector(size)
    prob = _as_float_matrix(prob, "prob")
    if x.shape[1] != prob.shape[1]:
        raise ShapeMismatchError("Number of columns in 'x' does not equal number of columns in 'prob'.")

    lengths = (x.shape[0], size.size, prob.shape[0])
    n = 0 if min(lengths) == 0 else max(lengths)
    diag = Diagnostics()
    rows = np.arange(n)

    bad_prob = _bad_prob(prob)[rows % prob.shape[0]] if n else np.zeros(0, dtype=bool)
    x, prob = recycle_rows(n, x, prob)
    size = size[rows % size.size] if n else np.empty(0)

    missing = np.isnan(x).any(axis=1) | np.isnan(prob).any(axis=1) | np.isnan(size)
    bad = diag.invalid(~missing & (_bad_size(size) | bad_prob))
    ok = ~missing & ~bad

    nonint = diag.non_integer(x, ok[:, None]).any(axis=1)
    outside = (x < 0.0).any(axis=1) | ~np.isfinite(x).all(axis=1)
    with np.errstate(all="ignore"):
        total = x.sum(axis=1)
        inside = ok & ~nonint & ~outside & (total == size)
        out = np.full(n, -np.inf)
        xi, pi = x[inside], prob[inside]
        out[inside] = (lfactorial(size[inside]) - lfactorial(xi).sum(axis=1)
                       + xlogy(xi, pi).sum(axis=1))
        out[missing | bad] = np.nan
        if not log:
            out = np.exp(out)
    diag.emit(stacklevel=3)
    return out


def rmnom(n, size, prob, rng: PRNG | None = None):
    """Draw multinomial count vectors.

    Counts are drawn category by category as conditional binomials: category
    j gets Binomial(remaining draws, p_j / remaining mass) and the last
    category receives whatever is left, so every valid row sums to `size`.

    Returns:
        Array of shape (n, k); invalid rows are NaN.
    """
    n = sample_size(n)
    rng = rng or np.random.default_rng()
    size = _as_float_vector(size)
    prob = _as_float_matrix(prob, "prob")
    k = prob.shape[1]
    diag = Diagnostics(NA_MESSAGE)
    if n == 0:
        return np.empty((0, k))
    if size.size == 0 or prob.shape[0] == 0 or k == 0:
        diag.invalid(np.ones(1, dtype=bool))
        diag.emit(stacklevel=3)
        return np.full((n, k), np.nan)

    rows = np.arange(n)
    bad_prob = _bad_prob(prob)[rows % prob.shape[0]]
    (prob,) = recycle_rows(n, prob)
    size = size[rows % size.size]
    missing = np.isnan(prob).any(axis=1) | np.isnan(size)
    skip = diag.invalid(missing | _bad_size(size) | bad_prob)

    out = np.empty((n, k))
    left = np.where(skip, 0, size).astype(np.int64)
    mass = np.ones(n)
    with np.errstate(all="ignore"):
        for j in range(k - 1):
            pj = np.where(skip, 0.0, prob[:, j])
            ratio = np.clip(np.where(mass > 0.0, pj / mass, 0.0), 0.0, 1.0)
            draws = rng.binomial(left, ratio)
            out[:, j] = draws
            left -= draws
            mass -= pj
    out[:, k - 1] = left
    out[skip] = np.nan
    diag.emit(stacklevel=3)
    return out


class Multinomial(RecycledDistribution):
    """Multinomial(size, prob) distribution over count vectors.

    `density` takes a count matrix and `sample` returns one row per draw.
    """
    param_names = ("size", "prob")
    _density = staticmethod(dmnom)
    _sampler = staticmethod(rmnom)
