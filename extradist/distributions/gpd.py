"""
Generalized Pareto distribution.

Parameters mu (location), sigma > 0 (scale) and xi (shape). With
z = (x - mu) / sigma the support is z >= 0, further bounded by
z <= -1/xi when xi < 0:

    f(x)    = (1 + xi z)^(-(xi+1)/xi) / sigma     xi != 0
              exp(-z) / sigma                     xi == 0
    F(x)    = 1 - (1 + xi z)^(-1/xi)              xi != 0
              1 - exp(-z)                         xi == 0
    F^-1(p) = mu + sigma ((1-p)^(-xi) - 1) / xi   xi != 0
              mu - sigma log(1-p)                 xi == 0
"""
from __future__ import annotations

import numpy as np

from ..core._utils import missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["dgpd", "pgpd", "qgpd", "rgpd", "GeneralizedPareto"]


def _support(x, mu, sigma, xi):
    """Standardized points and the masks below and inside the support."""
    z = (x - mu) / sigma
    below = z < 0.0
    above = (xi < 0.0) & (z > -1.0 / xi)
    return z, below, above


def _pdf(diag, x, mu, sigma, xi):
    missing = missing_mask(x, mu, sigma, xi)
    bad = diag.invalid(~missing & (sigma <= 0.0))
    ok = ~missing & ~bad
    z, below, above = _support(x, mu, sigma, xi)
    inside = ok & ~below & ~above & np.isfinite(z)
    out = np.zeros(x.shape)
    expo = inside & (xi == 0.0)
    gen = inside & (xi != 0.0)
    out[expo] = np.exp(-z[expo]) / sigma[expo]
    out[gen] = (1.0 + xi[gen] * z[gen]) ** (-(xi[gen] + 1.0) / xi[gen]) / sigma[gen]
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, mu, sigma, xi):
    missing = missing_mask(x, mu, sigma, xi)
    bad = diag.invalid(~missing & (sigma <= 0.0))
    ok = ~missing & ~bad
    z, below, above = _support(x, mu, sigma, xi)
    inside = ok & ~below & ~above
    out = np.zeros(x.shape)
    out[ok & above] = 1.0
    expo = inside & (xi == 0.0)
    gen = inside & (xi != 0.0)
    out[expo] = -np.expm1(-z[expo])
    out[gen] = 1.0 - (1.0 + xi[gen] * z[gen]) ** (-1.0 / xi[gen])
    out[missing | bad] = np.nan
    return out


def _invcdf(diag, p, mu, sigma, xi):
    missing = missing_mask(p, mu, sigma, xi)
    bad = diag.invalid(~missing & ((sigma <= 0.0) | (p < 0.0) | (p > 1.0)))
    ok = ~missing & ~bad
    out = np.full(p.shape, np.nan)
    expo = ok & (xi == 0.0)
    gen = ok & (xi != 0.0)
    out[expo] = mu[expo] - sigma[expo] * np.log1p(-p[expo])
    out[gen] = mu[gen] + sigma[gen] * ((1.0 - p[gen]) ** (-xi[gen]) - 1.0) / xi[gen]
    return out


def _rng(diag, rng, mu, sigma, xi):
    missing = missing_mask(mu, sigma, xi)
    bad = diag.invalid(missing | (sigma <= 0.0))
    u = 1.0 - rng.uniform(0.0, 1.0, size=mu.shape)
    out = np.full(mu.shape, np.nan)
    expo = ~bad & (xi == 0.0)
    gen = ~bad & (xi != 0.0)
    out[expo] = mu[expo] - sigma[expo] * np.log(u[expo])
    out[gen] = mu[gen] + sigma[gen] * (u[gen] ** (-xi[gen]) - 1.0) / xi[gen]
    return out


def dgpd(x, mu=0.0, sigma=1.0, xi=0.0, log=False):
    """Generalized Pareto density.

    Args:
        x: Evaluation points.
        mu: Location.
        sigma: Scale, sigma > 0.
        xi: Shape. Negative values bound the support from above.
        log: Return log densities.

    Returns:
        Densities, recycled to the longest input.
    """
    return evaluate_density(_pdf, x, mu, sigma, xi, log=log)


def pgpd(x, mu=0.0, sigma=1.0, xi=0.0, lower_tail=True, log=False):
    """Generalized Pareto cdf."""
    return evaluate_cdf(_cdf, x, mu, sigma, xi, lower_tail=lower_tail, log=log)


def qgpd(p, mu=0.0, sigma=1.0, xi=0.0, lower_tail=True, log=False):
    """Generalized Pareto quantile function."""
    return evaluate_quantile(_invcdf, p, mu, sigma, xi, lower_tail=lower_tail, log=log)


def rgpd(n, mu=0.0, sigma=1.0, xi=0.0, rng=None):
    """Draw from the generalized Pareto distribution.

    Missing parameters give NaN draws and count as invalid.
    """
    return evaluate_sample(_rng, n, mu, sigma, xi, rng=rng)


class GeneralizedPareto(RecycledDistribution):
    """GPD(mu, sigma, xi) distribution."""
    param_names = ("mu", "sigma", "xi")
    _density = staticmethod(dgpd)
    _cdf = staticmethod(pgpd)
    _quantile = staticmethod(qgpd)
    _sampler = staticmethod(rgpd)
