"""
Numeric tolerance and guard helpers shared by the DC and AC solvers.

A single relative/absolute epsilon comparison decides whether a freshly
computed value "changes" an existing one:

    |a - b| <= tol · max(1, |a|, |b|)

Below magnitude 1 the bound is absolute, above it relative.
"""

import math
from numbers import Real

EPSILON = 1e-9


def is_finite_number(value) -> bool:
    """True only for finite real numbers. None, bools, NaN and ±inf are unknown."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def nearly_equal(a, b, tolerance: float = EPSILON) -> bool:
    """Compare two values within a magnitude-scaled tolerance.

    Returns False if either side is not a finite number.
    """
    if not is_finite_number(a) or not is_finite_number(b):
        return False
    return abs(a - b) <= tolerance * max(1.0, abs(a), abs(b))


def clamp(value: float, lo: float, hi: float) -> float:
    """Bound value to [lo, hi]. NaN clamps to lo."""
    if math.isnan(value):
        return lo
    return min(max(value, lo), hi)


def round_to(value: float, digits: int = 3) -> float:
    """Round to a fixed number of decimals, normalising -0.0 to 0.0."""
    rounded = round(value, digits)
    return rounded + 0.0 if rounded == 0 else rounded
