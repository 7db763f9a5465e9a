"""Rounding helpers shared by the display-facing engine steps.

Python's round() is banker's rounding; the overlays round halves up.
"""

from decimal import Decimal, ROUND_HALF_UP

WHOLE = Decimal("1")
ONE_PLACE = Decimal("0.1")


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(WHOLE, ROUND_HALF_UP))


def format_one_place(value: float) -> str:
    return str(Decimal(str(value)).quantize(ONE_PLACE, ROUND_HALF_UP))
