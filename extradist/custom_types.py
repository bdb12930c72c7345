# custom_types.py
"""
Type aliases shared across extradist.

We generally follow the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
- Random generation takes a `PRNG` (a numpy Generator)
"""
from __future__ import annotations
from typing import Callable, Optional, TypeAlias

from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)

Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
PRNG: TypeAlias = NumpyRNG
Checkpoint: TypeAlias = Optional[Callable[[], None]]
