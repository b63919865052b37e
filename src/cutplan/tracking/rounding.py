"""Half-up rounding for reported figures.

Python's built-in `round()` sends exact .5 ties to the even neighbour
(`round(62.5) == 62`). Calorie and weight figures are reported with ties
rounded up instead (62.5 -> 63, 9.25 -> 9.3), so the same inputs always
produce the same whole-calorie numbers.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity.

    Example:
        >>> round_half_up(62.5), round_half_up(-2.5)
        (63, -2)
    """
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    """Round to one decimal place, ties toward +infinity."""
    return math.floor(value * 10 + 0.5) / 10
