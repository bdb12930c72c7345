"""
Cyclic recycling of inputs to a common length.

Every vectorized function in extradist reads its inputs through this module.
Output slot `i` takes input `j` at position `i mod n_j`, where `n_j` is the
length of input `j`, and the output length is the largest `n_j`. If any input
is empty the output is empty.
"""
from __future__ import annotations

from typing import Any, Iterator, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import get_config
from ..custom_types import Checkpoint
from ._utils import _as_float_vector, _as_float_matrix

__all__ = ["RecycledArrays", "recycle", "recycle_rows", "recycle_to"]


class RecycledArrays:
    """Read-only view over several vectors recycled to a common length.

    Args:
        *arrays: Scalars, sequences or arrays. Each is flattened to 1-D.
        checkpoint: Optional callable invoked before each block of ``interval``
            slots. Raising from it aborts the iteration.
        interval: Elements between two checkpoints. Defaults to
            ``Config.check_interval``.
    """

    def __init__(self, *arrays: Any, checkpoint: Checkpoint = None, interval: int | None = None):
        self._arrays = tuple(_as_float_vector(a) for a in arrays)
        lengths = [a.size for a in self._arrays]
        if not lengths or min(lengths) == 0:
            self._n = 0
        else:
            self._n = max(lengths)
        self._checkpoint = checkpoint
        self._interval = int(interval or get_config().check_interval)

    def __len__(self) -> int:
        return self._n

    @property
    def arrays(self) -> Tuple[NDArray[np.floating], ...]:
        """The inputs as given, before recycling."""
        return self._arrays

    @property
    def lengths(self) -> Tuple[int, ...]:
        """Original length of each input."""
        return tuple(a.size for a in self._arrays)

    def columns(self) -> Tuple[NDArray[np.floating], ...]:
        """All inputs materialized at the common length."""
        if self._n == 0:
            return tuple(np.empty(0, dtype=float) for _ in self._arrays)
        idx = np.arange(self._n)
        return tuple(a[idx % a.size] for a in self._arrays)

    def blocks(self) -> Iterator[Tuple[int, int, Tuple[NDArray[np.floating], ...]]]:
        """Yield ``(start, stop, columns)`` for consecutive slices of the output.

        Each slice holds at most ``interval`` slots and the checkpoint runs
        before each one, so a caller can abort a long batch between slices.
        """
        cols = self.columns()
        for start in range(0, self._n, self._interval):
            if self._checkpoint is not None:
                self._checkpoint()
            stop = min(start + self._interval, self._n)
            yield start, stop, tuple(c[start:stop] for c in cols)


def recycle(*arrays: Any) -> Tuple[NDArray[np.floating], ...]:
    """Recycle inputs to their common length and return them as arrays."""
    return RecycledArrays(*arrays).columns()


def recycle_rows(n: int, *matrices: NDArray) -> Tuple[NDArray[np.floating], ...]:
    """Recycle the rows of 2-D inputs to `n` rows."""
    out = []
    for m in matrices:
        m = _as_float_matrix(m)
        if n == 0 or m.shape[0] == 0:
            out.append(np.empty((0, m.shape[1]), dtype=float))
        else:
            out.append(m[np.arange(n) % m.shape[0]])
    return tuple(out)


def recycle_to(n: int, *arrays: Any) -> Tuple[NDArray[np.floating], ...] | None:
    """Recycle inputs to exactly `n` slots.

    Returns None when some input is empty and `n > 0`, since no value can be
    read for those slots.
    """
    vectors = [_as_float_vector(a) for a in arrays]
    if n == 0:
        return tuple(np.empty(0, dtype=float) for _ in vectors)
    if any(v.size == 0 for v in vectors):
        return None
    idx = np.arange(n)
    return tuple(v[idx % v.size] for v in vectors)
