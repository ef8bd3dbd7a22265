"""Numeric helpers shared by the scoring and ranking stages.

Scores are reported as integers rounded half-up (2.5 -> 3), which differs
from Python's built-in ``round`` (banker's rounding). Rounding therefore goes
through ``decimal.Decimal`` so every stage rounds the same way.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

__all__ = [
    "round_half_up",
    "safe_div",
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    ``Decimal(str(value))`` rounds the shortest repr of the float, so a value
    printed as ``62.5`` goes up to 63. For the non-negative scores used here
    this matches JavaScript's ``Math.round``.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(72.2)
        72
        >>> round_half_up(62.5)
        63
    """
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is zero.

    Example:
        >>> safe_div(10, 4)
        2.5
        >>> safe_div(10, 0)
        0.0
    """
    if denominator == 0:
        return default
    return numerator / denominator
