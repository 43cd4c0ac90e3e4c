"""
Strength Index Service
Estimates a one-rep max from a single (weight, reps) set

The estimate is only used as a ranking key for the history view, so it is
kept to one formula (Epley) rounded to whole kilograms.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float]

# Epley: 1RM = weight * (1 + reps / 30)
EPLEY_DIVISOR = 30


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)"""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def strength_index(weight: Number, reps: int) -> Number:
    """
    Calculate the strength index (estimated 1RM) for a set.

    Args:
        weight: Weight lifted in kg (>= 0)
        reps: Number of reps completed (>= 0)

    Returns:
        `weight` unchanged for a single, 0 for a set with no completed
        reps, otherwise the Epley estimate rounded to the nearest integer.
    """
    if reps == 1:
        return weight
    if reps < 1:
        return 0

    return round_half_away(weight * (1 + reps / EPLEY_DIVISOR))
