"""
Gamma-Poisson distribution.

A Poisson count whose rate is Gamma(shape=alpha, scale=beta) distributed,
i.e. a negative binomial with p = beta / (1 + beta):

    f(x) = Gamma(alpha + x) / (x! Gamma(alpha)) p^x (1-p)^alpha

The cdf has no closed form. It is answered from cumulative tables built with
the ratio f(j) / f(j-1) = (alpha + j - 1) / j * p.
"""
from __future__ import annotations

from typing import Iterator

import numpy as np
from numpy.typing import NDArray
from scipy.special import gammaln

from ..core._utils import lfactorial, missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_sample
from ..core.distributions import RecycledDistribution
from ..core.tables import DEFAULT_CHUNK_SIZE, CDFTable, table_cdf

__all__ = ["dgpois", "pgpois", "rgpois", "GammaPoisson"]


def _invalid(alpha, beta):
    return (alpha <= 0.0) | (beta <= 0.0)


def _logpmf(diag, x, alpha, beta):
    missing = missing_mask(x, alpha, beta)
    bad = diag.invalid(~missing & _invalid(alpha, beta))
    ok = ~missing & ~bad
    nonint = diag.non_integer(x, ok)
    inside = ok & ~nonint & (x >= 0.0) & np.isfinite(x)
    out = np.full(x.shape, -np.inf)
    xi, a, b = x[inside], alpha[inside], beta[inside]
    log_p = np.log(b) - np.log1p(b)
    log_q = -np.log1p(b)
    out[inside] = gammaln(a + xi) - (lfactorial(xi) + gammaln(a)) + log_p * xi + log_q * a
    out[missing | bad] = np.nan
    return out


def _log_terms(alpha: float, beta: float, upto: int,
               chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[NDArray[np.floating]]:
    log_p = np.log(beta) - np.log1p(beta)
    log_term = -alpha * np.log1p(beta)
    yield np.array([log_term])
    start = 1
    while start <= upto:
        j = np.arange(start, min(start + chunk_size, upto + 1), dtype=float)
        logs = log_term + np.cumsum(np.log(j + alpha - 1.0) - np.log(j) + log_p)
        yield logs
        log_term = logs[-1]
        start += j.size


def _table(alpha: float, beta: float, upto: int) -> CDFTable:
    return CDFTable(_log_terms(alpha, beta, upto), upto)


def _cdf(diag, view):
    return table_cdf(diag, view, _table, _invalid)


def _rng(diag, rng, alpha, beta):
    missing = missing_mask(alpha, beta)
    bad = diag.invalid(missing | _invalid(alpha, beta))
    lam = rng.gamma(np.where(bad, 1.0, alpha), np.where(bad, 1.0, beta))
    out = rng.poisson(lam).astype(float)
    out[bad] = np.nan
    return out


def dgpois(x, alpha, beta, log=False):
    """Gamma-Poisson probability mass function.

    Args:
        x: Evaluation points. Non-integer points have zero mass.
        alpha: Gamma shape, alpha > 0.
        beta: Gamma scale, beta > 0.
        log: Return log probabilities.

    Returns:
        Probabilities, recycled to the longest input.
    """
    return evaluate_density(_logpmf, x, alpha, beta, log=log, log_kernel=True)


def pgpois(x, alpha, beta, lower_tail=True, log=False, checkpoint=None):
    """Gamma-Poisson cdf.

    One cumulative table is built per distinct (alpha, beta) pair, up to the
    largest finite point, and reused for every point of the call.

    Args:
        x: Evaluation points; non-integers are floored.
        alpha: Gamma shape, alpha > 0.
        beta: Gamma scale, beta > 0.
        lower_tail: If False, return P(X > x).
        log: Return log probabilities.
        checkpoint: Optional callable run every ``Config.check_interval``
            points; raising from it aborts the call.

    Returns:
        Probabilities, recycled to the longest input.
    """
    return evaluate_cdf(_cdf, x, alpha, beta, lower_tail=lower_tail, log=log,
                        checkpoint=checkpoint, per_element=True)


def rgpois(n, alpha, beta, rng=None):
    """Draw a Gamma(alpha, scale=beta) rate, then a Poisson count with that rate."""
    return evaluate_sample(_rng, n, alpha, beta, rng=rng)


class GammaPoisson(RecycledDistribution):
    """Gamma-Poisson(alpha, beta) distribution."""
    param_names = ("alpha", "beta")
    _density = staticmethod(dgpois)
    _cdf = staticmethod(pgpois)
    _sampler = staticmethod(rgpois)
