import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity (2.5 -> 3)."""
    return math.floor(value + 0.5)


def round_half_up_places(value: float, places: int = 2) -> float:
    """
    Round to `places` decimals, exact ties upward (2.125 -> 2.13).

    Works on the exact binary value of `value`, so 2.675 (stored just below) gives 2.67.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
