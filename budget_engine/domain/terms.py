"""Loan terms resolution: derive installment count, end date and payment"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from budget_engine.config import settings
from budget_engine.domain.exceptions import InconsistentTermsError, InvalidTermsError
from budget_engine.domain.models import ResolvedTerms
from budget_engine.utils.date_utils import add_months, months_between
from budget_engine.utils.money import round_currency


def annuity_payment(principal: Decimal, monthly_rate: Decimal, installment_count: int) -> Decimal:
    """
    Unrounded periodic payment of an amortizing annuity.

        payment = P * r / (1 - (1 + r)^-n)

    With a zero rate the payment is simply P / n.
    """
    if installment_count <= 0:
        raise InvalidTermsError("Installment count must be positive")
    with localcontext() as ctx:
        ctx.prec = 28
        if monthly_rate == 0:
            return principal / Decimal(installment_count)
        return principal * monthly_rate / (1 - (1 + monthly_rate) ** -installment_count)


def resolve_terms(
    principal: Decimal,
    annual_rate: Decimal,
    start_date: date,
    installment_count: Optional[int] = None,
    end_date: Optional[date] = None,
) -> ResolvedTerms:
    """
    Derive the missing loan terms and the monthly payment.

    An end date on or after the start date is authoritative and yields an
    installment count inclusive of both boundary months. Otherwise the
    installment count is used and the end date is placed count - 1 months
    after the start.

    Raises:
        InvalidTermsError: principal not positive, rate outside [0, 1], no
            start date, neither a usable end date nor a positive count, or a
            count whose end date falls outside the calendar.
    """
    if principal is None or principal <= 0:
        raise InvalidTermsError(f"Principal must be positive, got {principal}")
    if annual_rate is None or not (0 <= annual_rate <= 1):
        raise InvalidTermsError(f"Annual rate must be between 0 and 1, got {annual_rate}")
    if start_date is None:
        raise InvalidTermsError("Start date is required")

    if end_date is not None and end_date >= start_date:
        count = months_between(start_date, end_date) + 1
        resolved_end = end_date
    elif installment_count is not None and installment_count > 0:
        count = int(Decimal(installment_count).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        try:
            resolved_end = add_months(start_date, count - 1)
        except (ValueError, OverflowError) as e:
            raise InvalidTermsError(f"{count} installments end beyond the supported calendar") from e
    else:
        raise InvalidTermsError("Either an end date after the start date or a positive installment count is required")

    payment = annuity_payment(principal, annual_rate / Decimal(12), count)

    return ResolvedTerms(
        periodic_payment=round_currency(payment),
        installment_count=count,
        end_date=resolved_end,
    )


def check_payment_consistency(
    principal: Decimal,
    periodic_payment: Decimal,
    installment_count: int,
    tolerance: Optional[Decimal] = None,
) -> None:
    """
    Reject an explicit payment that cannot repay the principal.

    Raises:
        InconsistentTermsError: payment * count falls short of the principal
            by more than the tolerance (one cent by default).
    """
    if tolerance is None:
        tolerance = settings.payment_tolerance
    shortfall = principal - periodic_payment * installment_count
    if shortfall > tolerance:
        raise InconsistentTermsError(
            f"{installment_count} payments of {periodic_payment} fall short of principal {principal} by {shortfall}"
        )
