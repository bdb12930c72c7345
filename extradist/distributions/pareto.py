"""
Pareto distribution.

Support x >= b, parameters a > 0 (shape) and b > 0 (scale):

    f(x)    = a b^a / x^(a+1)
    F(x)    = 1 - (b/x)^a
    F^-1(p) = b / (1-p)^(1/a)
"""
from __future__ import annotations

import numpy as np

from ..core._utils import missing_mask
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["dpareto", "ppareto", "qpareto", "rpareto", "Pareto"]


def _invalid(diag, missing, a, b):
    return diag.invalid(~missing & ((a <= 0.0) | (b <= 0.0)))


def _logpdf(diag, x, a, b):
    missing = missing_mask(x, a, b)
    bad = _invalid(diag, missing, a, b)
    inside = ~missing & ~bad & (x >= b)
    out = np.full(x.shape, -np.inf)
    out[inside] = np.log(a[inside]) + np.log(b[inside]) * a[inside] - np.log(x[inside]) * (a[inside] + 1.0)
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, a, b):
    missing = missing_mask(x, a, b)
    bad = _invalid(diag, missing, a, b)
    inside = ~missing & ~bad & (x >= b)
    out = np.zeros(x.shape)
    out[inside] = 1.0 - (b[inside] / x[inside]) ** a[inside]
    out[missing | bad] = np.nan
    return out


def _invcdf(diag, p, a, b):
    missing = missing_mask(p, a, b)
    bad = diag.invalid(~missing & ((a <= 0.0) | (b <= 0.0) | (p < 0.0) | (p > 1.0)))
    ok = ~missing & ~bad
    out = np.full(p.shape, np.nan)
    out[ok] = b[ok] / (1.0 - p[ok]) ** (1.0 / a[ok])
    return out


def _rng(diag, rng, a, b):
    bad = diag.invalid(missing_mask(a, b) | (a <= 0.0) | (b <= 0.0))
    u = rng.uniform(0.0, 1.0, size=a.shape)
    out = np.full(a.shape, np.nan)
    ok = ~bad
    out[ok] = b[ok] / (1.0 - u[ok]) ** (1.0 / a[ok])
    return out


def dpareto(x, a=1.0, b=1.0, log=False):
    """Pareto density.

    Args:
        x: Evaluation points.
        a: Shape parameter, a > 0.
        b: Scale parameter (lower bound of the support), b > 0.
        log: Return log densities.

    Returns:
        Densities, recycled to the longest input.
    """
    return evaluate_density(_logpdf, x, a, b, log=log, log_kernel=True)


def ppareto(x, a=1.0, b=1.0, lower_tail=True, log=False):
    """Pareto cumulative distribution function."""
    return evaluate_cdf(_cdf, x, a, b, lower_tail=lower_tail, log=log)


def qpareto(p, a=1.0, b=1.0, lower_tail=True, log=False):
    """Pareto quantile function."""
    return evaluate_quantile(_invcdf, p, a, b, lower_tail=lower_tail, log=log)


def rpareto(n, a=1.0, b=1.0, rng=None):
    """Draw from the Pareto distribution by inverse transform."""
    return evaluate_sample(_rng, n, a, b, rng=rng)


class Pareto(RecycledDistribution):
    """Pareto(a, b) distribution."""
    param_names = ("a", "b")
    _density = staticmethod(dpareto)
    _cdf = staticmethod(ppareto)
    _quantile = staticmethod(qpareto)
    _sampler = staticmethod(rpareto)
