"""Process-wide numeric constants."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields

__all__ = ["Config", "get_config"]


@dataclass(frozen=True)
class Config:
    """Numeric tolerances and limits used by every distribution.

    Args:
        min_diff_eps: Absolute tolerance for equality checks, e.g. mixture
            weights or multinomial probabilities summing to one.
        check_interval: Number of elements between two cancellation
            checkpoints in the table-based cumulative distribution functions.
        max_table_index: Largest evaluation point a cumulative table may be
            indexed with. Larger finite points yield NaN with a
            CoercionWarning.
    """
    min_diff_eps: float = 1e-8
    check_interval: int = 1000
    max_table_index: int = 2**31 - 1

    @classmethod
    def from_env(cls, prefix: str = "EXTRADIST_") -> Config:
        """Build a Config, overriding defaults with `<prefix><FIELD>` variables."""
        kwargs = {}
        for f in fields(cls):
            raw = os.environ.get(prefix + f.name.upper())
            if raw is None:
                continue
            caster = float if f.type in (float, "float") else int
            try:
                kwargs[f.name] = caster(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {prefix + f.name.upper()}: {raw!r}") from e
        return cls(**kwargs)


_CONFIG: Config | None = None


def get_config() -> Config:
    """Return the process-wide Config, creating it on first use."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = Config.from_env()
    return _CONFIG
