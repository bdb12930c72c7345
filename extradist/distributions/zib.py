"""
Zero-inflated binomial distribution.

With probability pi the outcome is a structural zero, otherwise it is drawn
from Binomial(size, prob):

    f(0) = pi + (1-pi) (1-prob)^size
    f(x) = (1-pi) Binom(x; size, prob)           x > 0
    F(x) = pi + (1-pi) BinomCdf(x; size, prob)
"""
from __future__ import annotations

import numpy as np
from scipy.stats import binom as _sbinom

from ..core._utils import is_whole, missing_mask, rng_bernoulli
from ..core.dispatch import evaluate_cdf, evaluate_density, evaluate_quantile, evaluate_sample
from ..core.distributions import RecycledDistribution

__all__ = ["dzib", "pzib", "qzib", "rzib", "ZeroInflatedBinomial"]


def _invalid_params(size, prob, pi):
    return ((size < 0.0) | ~is_whole(size) | ~np.isfinite(size)
            | (prob < 0.0) | (prob > 1.0) | (pi < 0.0) | (pi > 1.0))


def _pmf(diag, x, size, prob, pi):
    missing = missing_mask(x, size, prob, pi)
    bad = diag.invalid(~missing & _invalid_params(size, prob, pi))
    ok = ~missing & ~bad
    nonint = diag.non_integer(x, ok)
    inside = ok & ~nonint & (x >= 0.0) & np.isfinite(x)
    zero = inside & (x == 0.0)
    pos = inside & (x > 0.0)
    out = np.zeros(x.shape)
    out[zero] = pi[zero] + (1.0 - pi[zero]) * (1.0 - prob[zero]) ** size[zero]
    out[pos] = (1.0 - pi[pos]) * _sbinom.pmf(x[pos], size[pos], prob[pos])
    out[missing | bad] = np.nan
    return out


def _cdf(diag, x, size, prob, pi):
    missing = missing_mask(x, size, prob, pi)
    bad = diag.invalid(~missing & _invalid_params(size, prob, pi))
    ok = ~missing & ~bad
    out = np.zeros(x.shape)
    out[ok & (x == np.inf)] = 1.0
    inside = ok & (x >= 0.0) & np.isfinite(x)
    out[inside] = pi[inside] + (1.0 - pi[inside]) * _sbinom.cdf(np.floor(x[inside]), size[inside], prob[inside])
    out[missing | bad] = np.nan
    return out


def _invcdf(diag, p, size, prob, pi):
    missing = missing_mask(p, size, prob, pi)
    bad = diag.invalid(~missing & (_invalid_params(size, prob, pi) | (p < 0.0) | (p > 1.0)))
    ok = ~missing & ~bad
    out = np.full(p.shape, np.nan)
    out[ok] = 0.0
    rest = ok & (p >= pi) & (pi < 1.0)
    u = (p[rest] - pi[rest]) / (1.0 - pi[rest])
    # binom.ppf(0) is -1, one below the support
    out[rest] = np.maximum(_sbinom.ppf(u, size[rest], prob[rest]), 0.0)
    return out


def _rng(diag, rng, size, prob, pi):
    missing = missing_mask(size, prob, pi)
    bad = diag.invalid(missing | _invalid_params(size, prob, pi))
    n = np.where(bad, 0, size).astype(np.int64)
    p = np.where(bad, 0.0, prob)
    structural = rng_bernoulli(rng, np.where(bad, 0.0, pi)) == 1.0
    out = np.where(structural, 0.0, rng.binomial(n, p).astype(float))
    out[bad] = np.nan
    return out


def dzib(x, size, prob, pi, log=False):
    """Zero-inflated binomial probability mass function.

    Args:
        x: Evaluation points.
        size: Number of trials, a non-negative integer.
        prob: Success probability in [0, 1].
        pi: Probability of a structural zero, in [0, 1].
        log: Return log probabilities.

    Returns:
        Probabilities, recycled to the longest input.
    """
    return evaluate_density(_pmf, x, size, prob, pi, log=log)


def pzib(x, size, prob, pi, lower_tail=True, log=False):
    """Zero-inflated binomial cdf."""
    return evaluate_cdf(_cdf, x, size, prob, pi, lower_tail=lower_tail, log=log)


def qzib(p, size, prob, pi, lower_tail=True, log=False):
    """Zero-inflated binomial quantile function."""
    return evaluate_quantile(_invcdf, p, size, prob, pi, lower_tail=lower_tail, log=log)


def rzib(n, size, prob, pi, rng=None):
    """Draw from the zero-inflated binomial distribution."""
    return evaluate_sample(_rng, n, size, prob, pi, rng=rng)


class ZeroInflatedBinomial(RecycledDistribution):
    """Zero-inflated Binomial(size, prob) with zero-inflation pi."""
    param_names = ("size", "prob", "pi")
    _density = staticmethod(dzib)
    _cdf = staticmethod(pzib)
    _quantile = staticmethod(qzib)
    _sampler = staticmethod(rzib)
