"""
Power distribution.

Support 0 < x < alpha, parameters alpha > 0 and beta > 0:

    f(x)    = beta x^(beta-1) / alpha^beta
    F(x)    = x^beta / alpha^beta
    F^-1(p) = alpha p^(1/beta)
"""
from __future__ import annotations

import numpy as np

from ..core._utils import missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["dpower", "ppower", "qpower", "rpower", "Power"]


def _invalid(diag, missing, alpha, beta):
    return diag.invalid(~missing & ((alpha <= 0.0) | (beta <= 0.0)))


def _logpdf(diag, x, alpha, beta):
    missing = missing_mask(x, alpha, beta)
    bad = _invalid(diag, missing, alpha, beta)
    inside = ~missing & ~bad & (x > 0.0) & (x < alpha)
    out = np.full(x.shape, -np.inf)
    xi, a, b = x[inside], alpha[inside], beta[inside]
    out[inside] = np.log(b) + np.log(xi) * (b - 1.0) - np.log(a) * b
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, alpha, beta):
    missing = missing_mask(x, alpha, beta)
    bad = _invalid(diag, missing, alpha, beta)
    ok = ~missing & ~bad
    inside = ok & (x > 0.0) & (x < alpha)
    out = np.zeros(x.shape)
    out[ok & (x >= alpha)] = 1.0
    out[inside] = np.exp((np.log(x[inside]) - np.log(alpha[inside])) * beta[inside])
    out[missing | bad] = np.nan
    return out


def _invcdf(diag, p, alpha, beta):
    missing = missing_mask(p, alpha, beta)
    bad = diag.invalid(~missing & ((alpha <= 0.0) | (beta <= 0.0) | (p < 0.0) | (p > 1.0)))
    ok = ~missing & ~bad
    out = np.full(p.shape, np.nan)
    out[ok] = alpha[ok] * p[ok] ** (1.0 / beta[ok])
    return out


def _rng(diag, rng, alpha, beta):
    bad = diag.invalid(missing_mask(alpha, beta) | (alpha <= 0.0) | (beta <= 0.0))
    u = rng.uniform(0.0, 1.0, size=alpha.shape)
    out = np.full(alpha.shape, np.nan)
    ok = ~bad
    out[ok] = alpha[ok] * u[ok] ** (1.0 / beta[ok])
    return out


def dpower(x, alpha, beta, log=False):
    """Power distribution density.

    Empty inputs give an empty result.
    """
    return evaluate_density(_logpdf, x, alpha, beta, log=log, log_kernel=True)


def ppower(x, alpha, beta, lower_tail=True, log=False):
    """Power distribution cdf."""
    return evaluate_cdf(_cdf, x, alpha, beta, lower_tail=lower_tail, log=log)


def qpower(p, alpha, beta, lower_tail=True, log=False):
    """Power distribution quantile function."""
    return evaluate_quantile(_invcdf, p, alpha, beta, lower_tail=lower_tail, log=log)


def rpower(n, alpha, beta, rng=None):
    """Draw from the power distribution by inverse transform.

    With an empty parameter vector every draw is NaN and a warning is issued.
    """
    return evaluate_sample(_rng, n, alpha, beta, rng=rng)


class Power(RecycledDistribution):
    """Power(alpha, beta) distribution on (0, alpha)."""
    param_names = ("alpha", "beta")
    _density = staticmethod(dpower)
    _cdf = staticmethod(ppower)
    _quantile = staticmethod(qpower)
    _sampler = staticmethod(rpower)
