# core/distributions.py
from __future__ import annotations

from abc import ABC
from typing import Any, Callable, ClassVar, Dict, Generic, Optional, Tuple, TypeVar

import numpy as np
from numpy.typing import NDArray

from ..custom_types import ArrayLike, PRNG

__all__ = [
    "Distribution",
    "RecycledDistribution",
]

T = TypeVar("T", bound=np.number)


# -------------------------- Abstract Classes ----------------------------


class Distribution(Generic[T], ABC):
    """
    Abstract base class for any distribution class.
    """

    def sample(self, n_samples: int = 1) -> NDArray[T]:
        """
        Optional. If a subclass can't sample, it may leave this unimplemented.

        Sample n_samples items from the distribution.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def density(self, data: ArrayLike) -> NDArray[np.floating]:
        """
        Optional. Compute p(data) under this distribution.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def log_density(self, data: ArrayLike) -> NDArray[np.floating]:
        """
        Optional. Compute log p(data) under this distribution.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def cdf(self, x: ArrayLike, *, lower_tail: bool = True, log: bool = False) -> NDArray[np.floating]:
        """
        Optional. Compute P(X <= x), or P(X > x) when ``lower_tail`` is False.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def inv_cdf(self, u: ArrayLike, *, lower_tail: bool = True, log: bool = False) -> NDArray[T]:
        """
        Optional. Compute the quantile function at probabilities ``u``.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")


class RecycledDistribution(Distribution[np.floating]):
    """A distribution with a bound parameter set.

    Subclasses list their parameters in ``param_names`` and point the
    ``_density``, ``_cdf``, ``_quantile`` and ``_sampler`` class attributes at
    the module-level functions. Operations left as None raise
    ``NotImplementedError``.

    Parameters may be scalars or vectors. Vectors are recycled against the
    evaluation points exactly like the functional API does.

    Args:
        *args: Parameter values in ``param_names`` order.
        rng: Random generator for :meth:`sample`.
        **kwargs: Parameter values by name.

    Raises:
        TypeError: If parameters are missing, repeated or unknown.
    """

    param_names: ClassVar[Tuple[str, ...]] = ()
    _density: ClassVar[Optional[Callable[..., NDArray]]] = None
    _cdf: ClassVar[Optional[Callable[..., NDArray]]] = None
    _quantile: ClassVar[Optional[Callable[..., NDArray]]] = None
    _sampler: ClassVar[Optional[Callable[..., NDArray]]] = None

    def __init__(self, *args: Any, rng: PRNG | None = None, **kwargs: Any):
        names = self.param_names
        if len(args) > len(names):
            raise TypeError(f"{type(self).__name__} takes {len(names)} parameters, got {len(args)}.")
        params = dict(zip(names, args))
        for k, v in kwargs.items():
            if k not in names:
                raise TypeError(f"Unknown parameter {k!r} for {type(self).__name__}.")
            if k in params:
                raise TypeError(f"Parameter {k!r} given twice.")
            params[k] = v
        missing = [k for k in names if k not in params]
        if missing:
            raise TypeError(f"Missing parameters for {type(self).__name__}: {', '.join(missing)}.")
        self._params = tuple(params[k] for k in names)
        self._rng = rng or np.random.default_rng()

    @property
    def params(self) -> Dict[str, Any]:
        return dict(zip(self.param_names, self._params))

    def __getattr__(self, name: str) -> Any:
        names = type(self).param_names
        if name in names and "_params" in self.__dict__:
            return self._params[names.index(name)]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{type(self).__name__}({args})"

    def _require(self, attr: str, what: str) -> Callable[..., NDArray]:
        fn = getattr(type(self), attr)
        if fn is None:
            raise NotImplementedError(f"{what} not implemented for {type(self).__name__}.")
        return fn

    def density(self, data: ArrayLike) -> NDArray[np.floating]:
        return self._require("_density", "Density")(data, *self._params)

    def log_density(self, data: ArrayLike) -> NDArray[np.floating]:
        return self._require("_density", "Log density")(data, *self._params, log=True)

    def cdf(self, x: ArrayLike, *, lower_tail: bool = True, log: bool = False) -> NDArray[np.floating]:
        return self._require("_cdf", "Cdf")(x, *self._params, lower_tail=lower_tail, log=log)

    def inv_cdf(self, u: ArrayLike, *, lower_tail: bool = True, log: bool = False) -> NDArray[np.floating]:
        return self._require("_quantile", "Inverse cdf")(u, *self._params, lower_tail=lower_tail, log=log)

    def sample(self, n_samples: int = 1) -> NDArray[np.floating]:
        return self._require("_sampler", "Sampling")(n_samples, *self._params, rng=self._rng)

    rvs = sample
