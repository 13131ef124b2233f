"""Rounding and ratio helpers shared by the maturity calculators.

All rounding is half-up on the decimal representation of the value, so
73.335 rounds to 73.34 rather than to the nearest binary float.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float | int | Decimal, places: int = 2) -> float:
    """Round value to the given number of decimal places, halves away from zero.

    Args:
        value: Number to round.
        places: Decimal places to keep (0 rounds to a whole number).

    Returns:
        The rounded value as a float.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int, places: int = 2) -> float:
    """Return part / whole as a percentage rounded half-up; 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return round_half_up(Decimal(part) * 100 / Decimal(whole), places)


def whole_percentage(part: int, whole: int) -> int:
    """Return part / whole as a whole-number percentage; 0 when whole is 0."""
    return int(percentage(part, whole, places=0))
