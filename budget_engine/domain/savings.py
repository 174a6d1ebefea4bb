"""Savings accumulation and goal tracking"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Iterator, Optional

from budget_engine.config import settings
from budget_engine.domain.frequency import step_months, to_monthly_equivalent
from budget_engine.domain.models import ZERO, SavingsContribution
from budget_engine.utils.date_utils import add_months


def iter_disbursement_dates(start_date: date, months_per_step: int, as_of: date) -> Iterator[date]:
    """
    Yield start_date + k * months_per_step for k = 0, 1, ... while <= as_of.

    Dates are computed from the anchor rather than the previous date so a
    start on the 31st keeps landing on month ends instead of drifting.
    """
    if months_per_step <= 0:
        raise ValueError(f"Disbursement step must be positive, got {months_per_step}")
    k = 0
    current = start_date
    while current <= as_of:
        yield current
        k += 1
        current = add_months(start_date, k * months_per_step)


def cumulative_to_date(
    start_date: Optional[date],
    frequency: object,
    amount: Decimal,
    as_of: date,
) -> Decimal:
    """
    Sum every contribution disbursed between start_date and as_of inclusive.

    Missing or future start dates and unknown frequencies yield 0.
    """
    if start_date is None or start_date > as_of:
        return ZERO
    months = step_months(frequency)
    if months is None:
        return ZERO
    disbursed = sum(1 for _ in iter_disbursement_dates(start_date, months, as_of))
    return amount * disbursed


def total_saved(contributions: Iterable[SavingsContribution], as_of: date) -> Decimal:
    return sum(
        (cumulative_to_date(c.start_date, c.frequency, c.amount, as_of) for c in contributions),
        ZERO,
    )


def is_running(contribution: SavingsContribution, as_of: date) -> bool:
    """A contribution counts toward monthly totals once its start date has passed"""
    return contribution.start_date is not None and contribution.start_date <= as_of


def monthly_contribution_total(contributions: Iterable[SavingsContribution], as_of: date) -> Decimal:
    return sum(
        (to_monthly_equivalent(c.amount, c.frequency) for c in contributions if is_running(c, as_of)),
        ZERO,
    )


def savings_target(total_monthly_income: Decimal, goal_percentage: Optional[Decimal] = None) -> Decimal:
    """Monthly amount the household aims to save"""
    if goal_percentage is None:
        goal_percentage = settings.default_savings_goal_percentage
    return total_monthly_income * goal_percentage / Decimal(100)


def savings_progress(monthly_contributions: Decimal, target: Decimal) -> int:
    """Progress toward the monthly target as a whole percentage capped at 100"""
    if target <= 0:
        return 0
    percentage = (monthly_contributions / target * Decimal(100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return min(int(percentage), 100)
