"""
Birnbaum-Saunders (fatigue life) distribution.

Support x > mu, parameters alpha > 0 (shape), beta > 0 (scale) and mu
(location). With z = x - mu:

    f(x)    = (sqrt(z/beta) + sqrt(beta/z)) / (2 alpha z)
              * phi((sqrt(z/beta) - sqrt(beta/z)) / alpha)
    F(x)    = Phi((sqrt(z/beta) - sqrt(beta/z)) / alpha)
    F^-1(p) = beta (alpha/2 Zp + sqrt((alpha/2 Zp)^2 + 1))^2 + mu,
              where Zp = Phi^-1(p)
"""
from __future__ import annotations

import numpy as np

from ..core._utils import Phi, inv_Phi, missing_mask, phi
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["dfatigue", "pfatigue", "qfatigue", "rfatigue", "FatigueLife"]


def _invalid(diag, missing, alpha, beta):
    return diag.invalid(~missing & ((alpha <= 0.0) | (beta <= 0.0)))


def _standardize(z, alpha, beta):
    zb = np.sqrt(z / beta)
    bz = np.sqrt(beta / z)
    return zb, bz, (zb - bz) / alpha


def _from_normal(zp, alpha, beta, mu):
    half = alpha / 2.0 * zp
    return (half + np.sqrt(half * half + 1.0)) ** 2 * beta + mu


def _pdf(diag, x, alpha, beta, mu):
    missing = missing_mask(x, alpha, beta, mu)
    bad = _invalid(diag, missing, alpha, beta)
    inside = ~missing & ~bad & (x > mu) & np.isfinite(x)
    out = np.zeros(x.shape)
    a, b, z = alpha[inside], beta[inside], x[inside] - mu[inside]
    zb, bz, s = _standardize(z, a, b)
    out[inside] = (zb + bz) / (2.0 * a * z) * phi(s)
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, alpha, beta, mu):
    missing = missing_mask(x, alpha, beta, mu)
    bad = _invalid(diag, missing, alpha, beta)
    ok = ~missing & ~bad
    inside = ok & (x > mu)
    out = np.zeros(x.shape)
    out[ok & (x == np.inf)] = 1.0
    inside &= np.isfinite(x)
    _, _, s = _standardize(x[inside] - mu[inside], alpha[inside], beta[inside])
    out[inside] = Phi(s)
    out[missing | bad] = np.nan
    return out


def _invcdf(diag, p, alpha, beta, mu):
    missing = missing_mask(p, alpha, beta, mu)
    bad = diag.invalid(~missing & ((alpha <= 0.0) | (beta <= 0.0) | (p < 0.0) | (p > 1.0)))
    ok = ~missing & ~bad
    out = np.full(p.shape, np.nan)
    zero = ok & (p == 0.0)
    rest = ok & ~zero
    out[zero] = mu[zero]
    out[rest] = _from_normal(inv_Phi(p[rest]), alpha[rest], beta[rest], mu[rest])
    return out


def _rng(diag, rng, alpha, beta, mu):
    missing = missing_mask(alpha, beta, mu)
    bad = diag.invalid(missing | (alpha <= 0.0) | (beta <= 0.0))
    z = rng.standard_normal(size=alpha.shape)
    out = _from_normal(z, alpha, beta, mu)
    out[bad] = np.nan
    return out


def dfatigue(x, alpha, beta=1.0, mu=0.0, log=False):
    """Birnbaum-Saunders density.

    Args:
        x: Evaluation points.
        alpha: Shape, alpha > 0.
        beta: Scale, beta > 0.
        mu: Location; the density is zero for x <= mu.
        log: Return log densities.

    Returns:
        Densities, recycled to the longest input.
    """
    return evaluate_density(_pdf, x, alpha, beta, mu, log=log)


def pfatigue(x, alpha, beta=1.0, mu=0.0, lower_tail=True, log=False):
    """Birnbaum-Saunders cdf."""
    return evaluate_cdf(_cdf, x, alpha, beta, mu, lower_tail=lower_tail, log=log)


def qfatigue(p, alpha, beta=1.0, mu=0.0, lower_tail=True, log=False):
    """Birnbaum-Saunders quantile function. ``p == 0`` maps to ``mu``."""
    return evaluate_quantile(_invcdf, p, alpha, beta, mu, lower_tail=lower_tail, log=log)


def rfatigue(n, alpha, beta=1.0, mu=0.0, rng=None):
    """Draw from the Birnbaum-Saunders distribution via a standard normal draw."""
    return evaluate_sample(_rng, n, alpha, beta, mu, rng=rng)


class FatigueLife(RecycledDistribution):
    """Birnbaum-Saunders (fatigue life) distribution."""
    param_names = ("alpha", "beta", "mu")
    _density = staticmethod(dfatigue)
    _cdf = staticmethod(pfatigue)
    _quantile = staticmethod(qfatigue)
    _sampler = staticmethod(rfatigue)
