"""Billing frequency normalization"""

from decimal import Decimal
from typing import Optional

from budget_engine.domain.models import ZERO, Frequency

# Charges are tagged in English, incomes and savings with the French labels
_ALIASES = {
    "monthly": Frequency.MONTHLY,
    "mensuel": Frequency.MONTHLY,
    "quarterly": Frequency.QUARTERLY,
    "trimestriel": Frequency.QUARTERLY,
    "annually": Frequency.ANNUALLY,
    "annual": Frequency.ANNUALLY,
    "annuel": Frequency.ANNUALLY,
}

_MONTHS_PER_PERIOD = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.ANNUALLY: 12,
}


def canonical_frequency(tag: object) -> Optional[Frequency]:
    """Map a stored frequency tag to a Frequency, or None if unrecognized"""
    if isinstance(tag, Frequency):
        return tag
    if not isinstance(tag, str):
        return None
    return _ALIASES.get(tag.strip().lower())


def step_months(frequency: object) -> Optional[int]:
    """Months between two payments of the given frequency"""
    canonical = canonical_frequency(frequency)
    if canonical is None:
        return None
    return _MONTHS_PER_PERIOD[canonical]


def to_monthly_equivalent(amount: Decimal, frequency: object) -> Decimal:
    """
    Normalize an amount to its per-month rate.

    Unknown frequencies contribute 0 so malformed category data never breaks
    an aggregate.
    """
    months = step_months(frequency)
    if months is None:
        return ZERO
    return amount / Decimal(months)


def to_annual_equivalent(amount: Decimal, frequency: object) -> Decimal:
    """Yearly total of a recurring amount; unknown frequencies contribute 0"""
    months = step_months(frequency)
    if months is None:
        return ZERO
    return amount * Decimal(12 // months)
