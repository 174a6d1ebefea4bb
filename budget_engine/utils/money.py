"""Currency rounding helpers"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round_currency(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
