"""
Beta-binomial distribution.

A Binomial(size, p) count whose success probability is Beta(alpha, beta)
distributed:

    f(k) = C(size, k) B(k + alpha, size - k + beta) / B(alpha, beta)

for k = 0..size. The cdf is answered from cumulative tables.
"""
from __future__ import annotations

import numpy as np
from scipy.special import betaln, gammaln

from ..core._utils import is_whole, missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_sample
from ..core.distributions import RecycledDistribution
from ..core.tables import CDFTable, chunked_log_pmf, table_cdf

__all__ = ["dbbinom", "pbbinom", "rbbinom", "BetaBinomial"]


def _invalid(size, alpha, beta):
    return ((alpha <= 0.0) | (beta <= 0.0) | (size < 0.0)
            | ~is_whole(size) | ~np.isfinite(size))


def _lchoose(n, k):
    return gammaln(n + 1.0) - gammaln(k + 1.0) - gammaln(n - k + 1.0)


def _log_pmf_values(k, size, alpha, beta):
    return _lchoose(size, k) + betaln(k + alpha, size - k + beta) - betaln(alpha, beta)


def _logpmf(diag, x, size, alpha, beta):
    missing = missing_mask(x, size, alpha, beta)
    bad = diag.invalid(~missing & _invalid(size, alpha, beta))
    ok = ~missing & ~bad
    nonint = diag.non_integer(x, ok)
    inside = ok & ~nonint & (x >= 0.0) & (x <= size)
    out = np.full(x.shape, -np.inf)
    out[inside] = _log_pmf_values(x[inside], size[inside], alpha[inside], beta[inside])
    out[missing | bad] = np.nan
    return out


def _table(size: float, alpha: float, beta: float, upto: int) -> CDFTable:
    upto = min(upto, int(size))
    terms = chunked_log_pmf(lambda k: _log_pmf_values(k, size, alpha, beta), upto)
    return CDFTable(terms, upto)


def _support_max(size, alpha, beta):
    return size


def _cdf(diag, view):
    return table_cdf(diag, view, _table, _invalid, support_max=_support_max)


def _rng(diag, rng, size, alpha, beta):
    missing = missing_mask(size, alpha, beta)
    bad = diag.invalid(missing | _invalid(size, alpha, beta))
    prob = rng.beta(np.where(bad, 1.0, alpha), np.where(bad, 1.0, beta))
    n = np.where(bad, 0, size).astype(np.int64)
    out = rng.binomial(n, prob).astype(float)
    out[bad] = np.nan
    return out


def dbbinom(x, size, alpha=1.0, beta=1.0, log=False):
    """Beta-binomial probability mass function.

    Computed in log space and exponentiated, which keeps extreme parameters
    from underflowing intermediate terms.

    Args:
        x: Evaluation points. Non-integer points have zero mass.
        size: Number of trials, a non-negative integer.
        alpha: First Beta shape, alpha > 0.
        beta: Second Beta shape, beta > 0.
        log: Return log probabilities.

    Returns:
        Probabilities, recycled to the longest input.
    """
    return evaluate_density(_logpmf, x, size, alpha, beta, log=log, log_kernel=True)


def pbbinom(x, size, alpha=1.0, beta=1.0, lower_tail=True, log=False, checkpoint=None):
    """Beta-binomial cdf.

    One cumulative table is built per distinct (size, alpha, beta) and reused
    for every point of the call. ``checkpoint`` behaves as in `pgpois`.
    """
    return evaluate_cdf(_cdf, x, size, alpha, beta, lower_tail=lower_tail, log=log,
                        checkpoint=checkpoint, per_element=True)


def rbbinom(n, size, alpha=1.0, beta=1.0, rng=None):
    """Draw p from Beta(alpha, beta), then a Binomial(size, p) count."""
    return evaluate_sample(_rng, n, size, alpha, beta, rng=rng)


class BetaBinomial(RecycledDistribution):
    """Beta-binomial(size, alpha, beta) distribution."""
    param_names = ("size", "alpha", "beta")
    _density = staticmethod(dbbinom)
    _cdf = staticmethod(pbbinom)
    _sampler = staticmethod(rbbinom)
