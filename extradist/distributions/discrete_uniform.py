"""
Discrete uniform distribution on the integers min..max.

    f(x)    = 1 / (max - min + 1)
    F(x)    = (floor(x) - min + 1) / (max - min + 1)
    F^-1(p) = ceil(p (max - min + 1) + min - 1)
"""
from __future__ import annotations

import numpy as np

from ..config import get_config
from ..core._utils import missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["ddunif", "pdunif", "qdunif", "rdunif", "DiscreteUniform"]


def _invalid(diag, missing, lo, hi):
    return diag.invalid(~missing & ((lo > hi) | ~np.isfinite(lo) | ~np.isfinite(hi)))


def _pmf(diag, x, lo, hi):
    missing = missing_mask(x, lo, hi)
    bad = _invalid(diag, missing, lo, hi)
    ok = ~missing & ~bad
    in_range = ok & (x >= lo) & (x <= hi)
    inside = in_range & ~diag.non_integer(x, in_range)
    out = np.zeros(x.shape)
    out[inside] = 1.0 / (hi[inside] - lo[inside] + 1.0)
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, lo, hi):
    missing = missing_mask(x, lo, hi)
    bad = _invalid(diag, missing, lo, hi)
    ok = ~missing & ~bad
    inside = ok & (x >= lo) & (x < hi)
    out = np.zeros(x.shape)
    out[ok & (x >= hi)] = 1.0
    out[inside] = (np.floor(x[inside]) - lo[inside] + 1.0) / (hi[inside] - lo[inside] + 1.0)
    out[missing | bad] = np.nan
    return out


def _position(p, lo, hi):
    # p = k / n may round to just above k after scaling by n
    k = np.ceil(p * (hi - lo + 1.0) - get_config().min_diff_eps)
    return np.maximum(k, 1.0) + lo - 1.0


def _invcdf(diag, p, lo, hi):
    missing = missing_mask(p, lo, hi)
    bad = diag.invalid(~missing & ((lo > hi) | ~np.isfinite(lo) | ~np.isfinite(hi)
                                   | (p < 0.0) | (p > 1.0)))
    ok = ~missing & ~bad
    out = np.full(p.shape, np.nan)
    out[ok] = _position(p[ok], lo[ok], hi[ok])
    return out


def _rng(diag, rng, lo, hi):
    bad = diag.invalid(missing_mask(lo, hi) | (lo > hi) | ~np.isfinite(lo) | ~np.isfinite(hi))
    u = 1.0 - rng.uniform(0.0, 1.0, size=lo.shape)
    out = np.full(lo.shape, np.nan)
    ok = ~bad
    out[ok] = _position(u[ok], lo[ok], hi[ok])
    return out


def ddunif(x, min, max, log=False):
    """Discrete uniform probability mass function.

    Args:
        x: Evaluation points. Non-integer points have zero mass.
        min: Lower bound, finite.
        max: Upper bound, finite and >= min.
        log: Return log probabilities.

    Returns:
        Probabilities, recycled to the longest input.
    """
    return evaluate_density(_pmf, x, min, max, log=log)


def pdunif(x, min, max, lower_tail=True, log=False):
    """Discrete uniform cdf."""
    return evaluate_cdf(_cdf, x, min, max, lower_tail=lower_tail, log=log)


def qdunif(p, min, max, lower_tail=True, log=False):
    """Discrete uniform quantile function. ``p == 0`` maps to ``min``."""
    return evaluate_quantile(_invcdf, p, min, max, lower_tail=lower_tail, log=log)


def rdunif(n, min, max, rng=None):
    """Draw from the discrete uniform distribution."""
    return evaluate_sample(_rng, n, min, max, rng=rng)


class DiscreteUniform(RecycledDistribution):
    """Discrete uniform distribution on min..max."""
    param_names = ("min", "max")
    _density = staticmethod(ddunif)
    _cdf = staticmethod(pdunif)
    _quantile = staticmethod(qdunif)
    _sampler = staticmethod(rdunif)
