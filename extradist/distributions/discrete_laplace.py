"""
Discrete Laplace distribution.

Integer support, parameters scale 0 < p < 1 and integer location mu:

    f(x) = (1-p)/(1+p) p^|x-mu|
    F(x) = p^(-floor(x-mu)) / (1+p)           x < mu
           1 - p^(floor(x-mu)+1) / (1+p)      x >= mu

It is the law of the difference of two independent geometric variables
with success probability 1-p, shifted by mu.
"""
from __future__ import annotations

import numpy as np

from ..core._utils import missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["ddlaplace", "pdlaplace", "qdlaplace", "rdlaplace", "DiscreteLaplace"]


def _invalid(diag, missing, scale):
    return diag.invalid(~missing & ((scale <= 0.0) | (scale >= 1.0)))


def _pmf(diag, x, scale, location):
    missing = missing_mask(x, scale, location)
    bad = _invalid(diag, missing, scale)
    ok = ~missing & ~bad
    nonint = diag.non_integer(x, ok)
    inside = ok & ~nonint & np.isfinite(x)
    out = np.zeros(x.shape)
    p = scale[inside]
    out[inside] = (1.0 - p) / (1.0 + p) * p ** np.abs(x[inside] - location[inside])
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, scale, location):
    missing = missing_mask(x, scale, location)
    bad = _invalid(diag, missing, scale)
    ok = ~missing & ~bad
    k = np.floor(x - location)
    lower = ok & (x < location)
    upper = ok & ~lower
    out = np.zeros(x.shape)
    out[lower] = scale[lower] ** (-k[lower]) / (1.0 + scale[lower])
    out[upper] = 1.0 - scale[upper] ** (k[upper] + 1.0) / (1.0 + scale[upper])
    out[missing | bad] = np.nan
    return out


def _invcdf(diag, q, scale, location):
    missing = missing_mask(q, scale, location)
    bad = diag.invalid(~missing & ((scale <= 0.0) | (scale >= 1.0) | (q < 0.0) | (q > 1.0)))
    ok = ~missing & ~bad
    out = np.full(q.shape, np.nan)
    out[ok & (q == 0.0)] = -np.inf
    out[ok & (q == 1.0)] = np.inf
    interior = ok & (q > 0.0) & (q < 1.0)
    p, mu, qi = scale[interior], location[interior], q[interior]
    logp = np.log(p)
    left = qi <= p / (1.0 + p)
    below = mu - np.floor(np.log(qi * (1.0 + p)) / logp)
    above = mu + np.maximum(np.ceil(np.log((1.0 - qi) * (1.0 + p)) / logp) - 1.0, 0.0)
    out[interior] = np.where(left, below, above)
    return out


def _rng(diag, rng, scale, location):
    missing = missing_mask(scale, location)
    bad = _invalid(diag, missing, scale) | missing
    q = np.where(bad, 0.5, 1.0 - scale)
    u = rng.geometric(q)
    v = rng.geometric(q)
    out = (u - v) + location
    out[bad] = np.nan
    return out.astype(float)


def ddlaplace(x, scale, location=0.0, log=False):
    """Discrete Laplace probability mass function.

    Args:
        x: Evaluation points. Non-integer points have zero mass.
        scale: Scale p, 0 < p < 1.
        location: Integer location mu.
        log: Return log probabilities.

    Returns:
        Probabilities, recycled to the longest input.
    """
    return evaluate_density(_pmf, x, scale, location, log=log)


def pdlaplace(x, scale, location=0.0, lower_tail=True, log=False):
    """Discrete Laplace cdf."""
    return evaluate_cdf(_cdf, x, scale, location, lower_tail=lower_tail, log=log)


def qdlaplace(p, scale, location=0.0, lower_tail=True, log=False):
    """Discrete Laplace quantile function, the smallest x with F(x) >= p.

    The support is unbounded on both sides, so ``p == 0`` gives ``-inf``
    and ``p == 1`` gives ``inf``.
    """
    return evaluate_quantile(_invcdf, p, scale, location, lower_tail=lower_tail, log=log)


def rdlaplace(n, scale, location=0.0, rng=None):
    """Draw from the discrete Laplace distribution."""
    return evaluate_sample(_rng, n, scale, location, rng=rng)


class DiscreteLaplace(RecycledDistribution):
    """Discrete Laplace(scale, location) distribution."""
    param_names = ("scale", "location")
    _density = staticmethod(ddlaplace)
    _cdf = staticmethod(pdlaplace)
    _quantile = staticmethod(qdlaplace)
    _sampler = staticmethod(rdlaplace)
