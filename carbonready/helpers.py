"""
Shared numeric helpers for the scoring engines.
"""

import math
from fractions import Fraction
from typing import Union

Number = Union[int, float]


def round_half_up(value: Union[float, Fraction]) -> int:
    """
    Round to the nearest integer with .5 going up.

    87.5 -> 88 and 86.5 -> 87, unlike round() which rounds halves to even.
    Fractions are rounded exactly.
    """
    return int(math.floor(value + Fraction(1, 2)))


def clamp(value: Number, lower: Number = 0, upper: Number = 100) -> Number:
    """Clamp a value into [lower, upper]."""
    return max(lower, min(upper, value))


def is_finite_number(value) -> bool:
    """True for int/float (not bool) values that are neither NaN nor inf."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
