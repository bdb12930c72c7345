"""
Cumulative tables for count distributions without a closed-form cdf.

A `CDFTable` holds F(0), F(1), ..., F(upto) for one parameter set. It is
built once from log-scale pmf terms, as ``F(j) = F(j-1) + exp(log f(j))``,
and then answers any number of lookups. A `TableCache` keeps the tables of
one vectorized call, keyed by the parameter tuple, so that many points
sharing a parameterization cost one linear build instead of one summation
each. Caches are never shared between calls.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Hashable, Iterable, Iterator, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import get_config
from ._utils import finite_max, missing_mask
from .recycling import RecycledArrays

__all__ = ["CDFTable", "TableCache", "chunked_log_pmf", "table_cdf", "DEFAULT_CHUNK_SIZE"]

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1 << 16


def chunked_log_pmf(log_pmf: Callable[[NDArray[np.floating]], NDArray[np.floating]],
                    upto: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[NDArray[np.floating]]:
    """Yield ``log_pmf(j)`` for ``j = 0..upto`` in consecutive chunks."""
    start = 0
    while start <= upto:
        stop = min(start + chunk_size, upto + 1)
        yield log_pmf(np.arange(start, stop, dtype=float))
        start = stop


class CDFTable:
    """Cumulative probabilities over the integer support 0..upto.

    The table consumes log pmf terms chunk by chunk. Once the running sum
    reaches 1.0 no later term can change it in double precision, so the
    remaining chunks are skipped and lookups past the end return 1.0.

    Args:
        log_terms: Iterable of 1-D arrays with consecutive log pmf values,
            starting at 0.
        upto: Largest support point the table must answer for.

    Attributes:
        upto: Requested table depth.
    """

    def __init__(self, log_terms: Iterable[NDArray[np.floating]], upto: int):
        self.upto = int(upto)
        parts = []
        total = 0.0
        size = 0
        for chunk in log_terms:
            terms = np.exp(np.asarray(chunk, dtype=float))
            if terms.size == 0:
                continue
            terms[0] += total
            cum = np.cumsum(terms)
            parts.append(cum)
            total = cum[-1]
            size += cum.size
            if size > self.upto or total >= 1.0:
                break
        values = np.concatenate(parts) if parts else np.zeros(1)
        # rounding can push the running sum a few ulps past one
        self._values = np.minimum(values[: self.upto + 1], 1.0)

    def __len__(self) -> int:
        return int(self._values.size)

    @property
    def values(self) -> NDArray[np.floating]:
        return self._values

    def __getitem__(self, j):
        """F(j) for non-negative integer `j` (scalar or array)."""
        idx = np.minimum(np.asarray(j, dtype=np.int64), self._values.size - 1)
        return self._values[idx]


class TableCache:
    """Call-scoped memo of `CDFTable` objects keyed by parameter tuple.

    Args:
        builder: ``builder(*key, upto)`` returning a `CDFTable`.
        upto: Depth every table in this call is built to.
    """

    def __init__(self, builder: Callable[..., CDFTable], upto: int):
        self._builder = builder
        self.upto = int(upto)
        self._tables: Dict[Tuple[Hashable, ...], CDFTable] = {}

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, key) -> bool:
        return tuple(key) in self._tables

    def get(self, key: Tuple[Hashable, ...]) -> CDFTable:
        key = tuple(key)
        table = self._tables.get(key)
        if table is None:
            table = self._builder(*key, self.upto)
            self._tables[key] = table
            logger.debug("built cdf table for %s up to %d (%d entries)", key, self.upto, len(table))
        return table


def table_cdf(diag, view: RecycledArrays,
              builder: Callable[..., CDFTable],
              invalid: Callable[..., NDArray[np.bool_]],
              support_max: Callable[..., NDArray[np.floating]] | None = None) -> NDArray[np.floating]:
    """Lower-tail cdf of a count distribution answered from cumulative tables.

    Args:
        diag: `Diagnostics` of the current call.
        view: Recycled ``(x, *params)``. Its checkpoint runs between blocks.
        builder: ``builder(*params, upto)`` returning a `CDFTable`.
        invalid: Mask of parameter-domain violations, ``invalid(*params)``.
        support_max: Optional upper end of the support, ``support_max(*params)``.
            Points at or above it get probability one without a lookup.

    Returns:
        Lower-tail probabilities of shape (len(view),).
    """
    cfg = get_config()
    x_all = view.arrays[0]
    tabulable = x_all[np.isfinite(x_all) & (x_all >= 0.0) & (x_all <= cfg.max_table_index)]
    upto = int(np.floor(finite_max(tabulable))) if tabulable.size else -1
    cache = TableCache(builder, upto)

    out = np.full(len(view), np.nan)
    for start, stop, cols in view.blocks():
        x, params = cols[0], cols[1:]
        missing = missing_mask(*cols)
        bad = diag.invalid(~missing & invalid(*params))
        ok = ~missing & ~bad

        res = np.full(x.shape, np.nan)
        res[ok & (x < 0.0)] = 0.0
        top = ok & (x == np.inf)
        if support_max is not None:
            top |= ok & (x >= support_max(*params))
        res[top] = 1.0

        pending = ok & (x >= 0.0) & ~top
        pending &= ~diag.coerced(pending & (x > cfg.max_table_index))
        if pending.any():
            idx = np.floor(x[pending]).astype(np.int64)
            keys = np.column_stack([p[pending] for p in params])
            uniq, inverse = np.unique(keys, axis=0, return_inverse=True)
            inverse = inverse.reshape(-1)
            vals = np.empty(idx.size)
            for k, key in enumerate(uniq):
                sel = inverse == k
                vals[sel] = cache.get(tuple(float(v) for v in key))[idx[sel]]
            res[pending] = vals
        out[start:stop] = res
    return out
