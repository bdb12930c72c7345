"""Errors and warnings raised by extradist.

Per-element problems never stop a call. They turn the affected slot into
NaN and are reported once per call through one of the warning classes
below. Only structurally inconsistent input raises.
"""

__all__ = [
    "ShapeMismatchError",
    "DomainWarning",
    "NonIntegerWarning",
    "CoercionWarning",
]


class ShapeMismatchError(ValueError):
    """Matrix-valued parameters whose shapes cannot be recycled together."""


class DomainWarning(RuntimeWarning):
    """At least one element had a parameter outside its domain."""


class NonIntegerWarning(RuntimeWarning):
    """A discrete law was evaluated at a non-integer point."""


class CoercionWarning(RuntimeWarning):
    """A point was too large to index a cumulative table."""
