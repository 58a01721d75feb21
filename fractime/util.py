"""Utility constants and helpers for fractime.

The high unit of every fractured time is one millisecond. Rounding is half
away from zero everywhere a real component is read back as an integer.
"""

import math

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60000


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (like C ``round``)."""
    fraction, whole = math.modf(value)
    if abs(fraction) >= 0.5:
        whole += math.copysign(1.0, value)
    return int(whole)


def split_ms(value: float) -> tuple[float, float]:
    """Split milliseconds into (whole, fraction); both carry the sign of value."""
    fraction, whole = math.modf(value)
    return whole, fraction
