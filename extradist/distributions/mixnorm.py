"""
Mixture of normal distributions.

    f(x) = sum_j alpha_j N(x; mu_j, sigma_j)

`mu`, `sigma` and `alpha` are matrices with one mixture per row and one
component per column. Rows are recycled together with `x`, so each output
slot may use a different mixture. A row is valid when every sigma is
positive and the weights lie in [0, 1] and sum to one within
``Config.min_diff_eps``.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from ..core._utils import Phi, _as_float_matrix, _as_float_vector, phi, tol_equal
from ..core.dispatch import NA_MESSAGE, Diagnostics, finish_cdf, sample_size
from ..core.distributions import RecycledDistribution
from ..core.recycling import recycle_rows
from ..custom_types import PRNG
from ..exceptions import ShapeMismatchError

__all__ = ["dmixnorm", "pmixnorm", "rmixnorm", "NormalMixture"]


def _components(mu, sigma, alpha) -> Tuple[NDArray[np.floating], ...]:
    mu = _as_float_matrix(mu, "mu")
    sigma = _as_float_matrix(sigma, "sigma")
    alpha = _as_float_matrix(alpha, "alpha")
    k = alpha.shape[1]
    if mu.shape[1] != k or sigma.shape[1] != k:
        raise ShapeMismatchError("sizes of 'mu', 'sigma', and 'alpha' do not match")
    return mu, sigma, alpha


def _bad_weights(alpha: NDArray[np.floating]) -> NDArray[np.bool_]:
    sums = np.array([math.fsum(row) for row in alpha])
    return (alpha < 0.0).any(axis=1) | (alpha > 1.0).any(axis=1) | ~tol_equal(sums, 1.0)


def _row_status(n: int, mu, sigma, alpha) -> Tuple[NDArray[np.bool_], NDArray[np.bool_]]:
    """Missing and invalid masks for `n` recycled rows.

    Each matrix is checked once per distinct row and the row masks are then
    recycled, so the weight sums are not recomputed per output slot.
    """
    rows = np.arange(n)

    def spread(mask, m):
        return mask[rows % m.shape[0]]

    missing = (spread(np.isnan(mu).any(axis=1), mu)
               | spread(np.isnan(sigma).any(axis=1), sigma)
               | spread(np.isnan(alpha).any(axis=1), alpha))
    invalid = (spread((sigma <= 0.0).any(axis=1), sigma)
               | spread(_bad_weights(alpha), alpha))
    return missing, ~missing & invalid


def _mixture(values_fn, diag: Diagnostics, x, mu, sigma, alpha) -> NDArray[np.floating]:
    x = _as_float_vector(x)
    mu, sigma, alpha = _components(mu, sigma, alpha)
    lengths = (x.size, mu.shape[0], sigma.shape[0], alpha.shape[0])
    n = 0 if min(lengths) == 0 else max(lengths)
    if n == 0:
        return np.empty(0)

    missing, bad = _row_status(n, mu, sigma, alpha)
    diag.invalid(bad)
    x = x[np.arange(n) % x.size]
    mu, sigma, alpha = recycle_rows(n, mu, sigma, alpha)
    with np.errstate(all="ignore"):
        out = (alpha * values_fn(x[:, None], mu, sigma)).sum(axis=1)
    out[missing | bad | np.isnan(x)] = np.nan
    return out


def _pdf(x, mu, sigma):
    return phi((x - mu) / sigma) / sigma


def _cdf(x, mu, sigma):
    return Phi((x - mu) / sigma)


def dmixnorm(x, mu, sigma, alpha, log=False):
    """Density of a mixture of normal distributions.

    Args:
        x: Evaluation points.
        mu: Component means, shape (m, k) or a single row of length k.
        sigma: Component standard deviations, same number of columns.
        alpha: Mixing weights, same number of columns.
        log: Return log densities.

    Returns:
        Densities, one per recycled row.

    Raises:
        ShapeMismatchError: If the matrices differ in column count.
    """
    diag = Diagnostics()
    out = _mixture(_pdf, diag, x, mu, sigma, alpha)
    if log:
        with np.errstate(all="ignore"):
            out = np.log(out)
    diag.emit(stacklevel=3)
    return out


def pmixnorm(x, mu, sigma, alpha, lower_tail=True, log=False):
    """Cdf of a mixture of normal distributions, the weighted sum of component cdfs."""
    diag = Diagnostics()
    # weights sum to one only within tolerance
    p = np.clip(_mixture(_cdf, diag, x, mu, sigma, alpha), 0.0, 1.0)
    out = finish_cdf(p, lower_tail, log)
    diag.emit(stacklevel=3)
    return out


def rmixnorm(n, mu, sigma, alpha, rng: PRNG | None = None):
    """Draw from a mixture of normal distributions.

    A uniform selector picks the component by walking the weights from the
    last component backward: component j is chosen when the selector exceeds
    the total weight of the components before it. Rows of the parameter
    matrices are recycled over the draws.
    """
    n = sample_size(n)
    rng = rng or np.random.default_rng()
    mu, sigma, alpha = _components(mu, sigma, alpha)
    diag = Diagnostics(NA_MESSAGE)
    if n == 0:
        return np.empty(0)
    if min(mu.shape[0], sigma.shape[0], alpha.shape[0], alpha.shape[1]) == 0:
        diag.invalid(np.ones(1, dtype=bool))
        diag.emit(stacklevel=3)
        return np.full(n, np.nan)

    missing, bad = _row_status(n, mu, sigma, alpha)
    skip = diag.invalid(missing | bad)
    mu, sigma, alpha = recycle_rows(n, mu, sigma, alpha)

    u = rng.uniform(0.0, 1.0, size=n)
    before = np.cumsum(alpha, axis=1) - alpha
    component = (before[:, 1:] < u[:, None]).sum(axis=1)
    rows = np.arange(n)
    loc = np.where(skip, 0.0, mu[rows, component])
    scale = np.where(skip, 1.0, sigma[rows, component])
    out = rng.normal(loc, scale)
    out[skip] = np.nan
    diag.emit(stacklevel=3)
    return out


class NormalMixture(RecycledDistribution):
    """Mixture of normals with component matrices `mu`, `sigma` and `alpha`.

    Each row of the matrices is one mixture.
    """
    param_names = ("mu", "sigma", "alpha")
    _density = staticmethod(dmixnorm)
    _cdf = staticmethod(pmixnorm)
    _sampler = staticmethod(rmixnorm)
