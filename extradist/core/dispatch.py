"""
Vectorized evaluation of per-distribution kernels.

A kernel is a plain function over already recycled, equal-length arrays. It
validates its own parameters and reports problems to a `Diagnostics`
instance instead of warning directly. The `evaluate_*` functions below
recycle the raw inputs, run the kernel once over the whole batch, apply the
log and tail transforms once per array, and turn the collected diagnostics
into at most one warning of each kind.

Kernel signatures:

- density / cdf:  ``kernel(diag, x, *params) -> values``
- table cdf:      ``kernel(diag, view) -> values`` where ``view`` is a
  `RecycledArrays` over ``(x, *params)``
- quantile:       ``kernel(diag, p, *params) -> values``
- sampler:        ``kernel(diag, rng, *params) -> values``
"""
from __future__ import annotations

import logging
import warnings
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from ..custom_types import Array, ArrayLike, Checkpoint, PRNG
from ..exceptions import CoercionWarning, DomainWarning, NonIntegerWarning
from ._utils import _as_float_vector, is_whole
from .recycling import RecycledArrays, recycle_to

__all__ = [
    "Diagnostics",
    "evaluate_density",
    "evaluate_cdf",
    "evaluate_quantile",
    "evaluate_sample",
    "sample_size",
]

logger = logging.getLogger(__name__)

NAN_MESSAGE = "NaNs produced"
NA_MESSAGE = "NAs produced"


class Diagnostics:
    """Collects the per-element problems of one vectorized call.

    Missing inputs are not recorded here: they propagate as NaN silently.
    Everything recorded is reported by :meth:`emit`, once per kind.

    Args:
        message: Text of the domain warning.
    """

    def __init__(self, message: str = NAN_MESSAGE):
        self.message = message
        self.domain_error = False
        self.coercion = False
        self.non_integer_value: float | None = None

    def invalid(self, mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
        """Record parameter-domain violations and return the mask unchanged."""
        mask = np.asarray(mask, dtype=bool)
        if mask.any():
            self.domain_error = True
        return mask

    def non_integer(self, x: NDArray[np.floating], where: NDArray[np.bool_]) -> NDArray[np.bool_]:
        """Mask of finite non-integer `x` among `where`, recording the first one."""
        mask = np.asarray(where, dtype=bool) & np.isfinite(x) & ~is_whole(x)
        if mask.any() and self.non_integer_value is None:
            self.non_integer_value = float(x[mask][0])
        return mask

    def coerced(self, mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
        """Record points that could not be converted to a table index."""
        mask = np.asarray(mask, dtype=bool)
        if mask.any():
            self.coercion = True
        return mask

    def __bool__(self) -> bool:
        return self.domain_error or self.coercion or self.non_integer_value is not None

    def emit(self, stacklevel: int = 4) -> None:
        """Issue the collected warnings, each at most once."""
        if self.non_integer_value is not None:
            warnings.warn(f"non-integer x = {self.non_integer_value:f}",
                          NonIntegerWarning, stacklevel=stacklevel)
        if self.coercion:
            warnings.warn("NAs introduced by coercion to integer range",
                          CoercionWarning, stacklevel=stacklevel)
        if self.domain_error:
            logger.debug("domain error in vectorized call: %s", self.message)
            warnings.warn(self.message, DomainWarning, stacklevel=stacklevel)


def evaluate_density(kernel: Callable[..., Array], x: ArrayLike, *params: ArrayLike,
                     log: bool = False, log_kernel: bool = False) -> Array:
    """Evaluate a density or mass kernel over recycled inputs.

    Args:
        kernel: Density kernel. Returns log values if ``log_kernel``.
        x: Evaluation points.
        *params: Parameter vectors, in the order the kernel expects.
        log: Return log densities.
        log_kernel: Whether the kernel natively returns log densities.

    Returns:
        Array of shape (n,) with n the longest input length.
    """
    cols = RecycledArrays(x, *params).columns()
    diag = Diagnostics()
    with np.errstate(all="ignore"):
        out = kernel(diag, *cols)
        if log_kernel and not log:
            out = np.exp(out)
        elif log and not log_kernel:
            out = np.log(out)
    diag.emit()
    return out


def finish_cdf(p: Array, lower_tail: bool, log: bool) -> Array:
    """Apply the tail flip, then the log transform, to lower-tail probabilities."""
    with np.errstate(all="ignore"):
        if not lower_tail:
            p = 1.0 - p
        if log:
            p = np.log(p)
    return p


def evaluate_cdf(kernel: Callable[..., Array], x: ArrayLike, *params: ArrayLike,
                 lower_tail: bool = True, log: bool = False,
                 checkpoint: Checkpoint = None, per_element: bool = False) -> Array:
    """Evaluate a lower-tail cdf kernel and transform the result.

    Args:
        kernel: Cdf kernel returning lower-tail probabilities.
        x: Evaluation points.
        *params: Parameter vectors.
        lower_tail: If False, return P(X > x).
        log: Return log probabilities.
        checkpoint: Called periodically by per-element kernels.
        per_element: Pass the kernel a `RecycledArrays` view instead of
            materialized columns.

    Returns:
        Array of shape (n,).
    """
    view = RecycledArrays(x, *params, checkpoint=checkpoint)
    diag = Diagnostics()
    with np.errstate(all="ignore"):
        if per_element:
            out = kernel(diag, view)
        else:
            out = kernel(diag, *view.columns())
    out = finish_cdf(np.asarray(out, dtype=float), lower_tail, log)
    diag.emit()
    return out


def evaluate_quantile(kernel: Callable[..., Array], p: ArrayLike, *params: ArrayLike,
                      lower_tail: bool = True, log: bool = False) -> Array:
    """Evaluate a quantile kernel on lower-tail, linear-scale probabilities.

    Probabilities are exponentiated first (if ``log``) and then flipped (if
    not ``lower_tail``).
    """
    p = _as_float_vector(p)
    with np.errstate(all="ignore"):
        if log:
            p = np.exp(p)
        if not lower_tail:
            p = 1.0 - p
    cols = RecycledArrays(p, *params).columns()
    diag = Diagnostics()
    with np.errstate(all="ignore"):
        out = kernel(diag, *cols)
    diag.emit()
    return out


def sample_size(n: Any) -> int:
    """Number of draws requested by `n`; a sequence means its length."""
    if np.ndim(n) > 0:
        return int(np.size(n))
    if not np.isfinite(n) or n < 0:
        raise ValueError("n must be a finite number >= 0.")
    return int(n)


def evaluate_sample(kernel: Callable[..., Array], n: Any, *params: ArrayLike,
                    rng: PRNG | None = None) -> Array:
    """Draw `n` variates with parameters recycled over the draws.

    Args:
        kernel: Sampler kernel.
        n: Number of draws, or a sequence whose length is used.
        *params: Parameter vectors.
        rng: Random generator. A fresh default generator if None.

    Returns:
        Array of shape (n,).
    """
    n = sample_size(n)
    rng = rng or np.random.default_rng()
    diag = Diagnostics(NA_MESSAGE)
    cols = recycle_to(n, *params)
    if cols is None:
        diag.invalid(np.ones(1, dtype=bool))
        out = np.full(n, np.nan)
    else:
        with np.errstate(all="ignore"):
            out = kernel(diag, rng, *cols)
    diag.emit()
    return out
