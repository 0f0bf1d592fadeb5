"""Two-decimal rounding for monetary report fields."""

import math
from decimal import ROUND_HALF_UP, Decimal

MONEY_PLACES = 2


def round_money(value: float, places: int = MONEY_PLACES) -> float:
    """Round half away from zero on the exact binary value of ``value``.

    ``Decimal(value)`` keeps every bit of the float, so 1.005 (stored as
    1.00499999...) rounds down to 1.0 while 0.125 rounds up to 0.13. Rounding
    an already-rounded value returns it unchanged.
    """
    value = float(value)
    if not math.isfinite(value):
        return value

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
