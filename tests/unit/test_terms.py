"""Unit tests for loan terms resolution"""

import importlib
from datetime import date
from decimal import Decimal, getcontext, localcontext

import pytest

from budget_engine.domain import terms as terms_module
from budget_engine.domain.exceptions import InconsistentTermsError, InvalidTermsError
from budget_engine.domain.terms import annuity_payment, check_payment_consistency, resolve_terms


def test_resolve_zero_rate_loan():
    """Test 0 % loan pays principal / count exactly"""
    terms = resolve_terms(Decimal("1200"), Decimal("0"), date(2024, 1, 1), installment_count=12)

    assert terms.periodic_payment == Decimal("100.00")
    assert terms.installment_count == 12
    assert terms.end_date == date(2024, 12, 1)


def test_resolve_interest_bearing_loan():
    """Test 10000 at 6 % over 12 months"""
    terms = resolve_terms(Decimal("10000"), Decimal("0.06"), date(2024, 1, 1), installment_count=12)

    assert terms.periodic_payment == Decimal("860.66")
    # 12 payments exceed the principal by the interest portion
    assert terms.periodic_payment * 12 == Decimal("10327.92")


def test_end_date_counts_both_boundary_months():
    """Test end date yields an inclusive month count"""
    terms = resolve_terms(Decimal("2400"), Decimal("0"), date(2024, 1, 15), end_date=date(2025, 12, 1))

    assert terms.installment_count == 24
    assert terms.end_date == date(2025, 12, 1)
    assert terms.periodic_payment == Decimal("100.00")


def test_end_date_is_authoritative_over_count():
    """Test a valid end date overrides a conflicting installment count"""
    terms = resolve_terms(
        Decimal("2400"), Decimal("0"), date(2024, 1, 1), installment_count=5, end_date=date(2025, 12, 31)
    )

    assert terms.installment_count == 24


def test_end_date_before_start_falls_back_to_count():
    """Test count wins when the end date precedes the start"""
    terms = resolve_terms(
        Decimal("600"), Decimal("0"), date(2024, 6, 15), installment_count=6, end_date=date(2023, 1, 1)
    )

    assert terms.installment_count == 6
    assert terms.end_date == date(2024, 11, 15)


def test_end_date_day_is_clamped_to_month_end():
    """Test Jan 31 + 1 month lands on Feb 29 in a leap year"""
    terms = resolve_terms(Decimal("200"), Decimal("0"), date(2024, 1, 31), installment_count=2)

    assert terms.end_date == date(2024, 2, 29)


def test_same_month_end_date_is_single_installment():
    """Test start and end in the same month give one installment"""
    terms = resolve_terms(Decimal("500"), Decimal("0.12"), date(2024, 3, 1), end_date=date(2024, 3, 28))

    assert terms.installment_count == 1
    # One period of interest at 1 %
    assert terms.periodic_payment == Decimal("505.00")


@pytest.mark.parametrize(
    "principal,rate,kwargs",
    [
        (Decimal("0"), Decimal("0.05"), {"installment_count": 12}),
        (Decimal("-100"), Decimal("0.05"), {"installment_count": 12}),
        (Decimal("1000"), Decimal("-0.01"), {"installment_count": 12}),
        (Decimal("1000"), Decimal("1.5"), {"installment_count": 12}),
        (Decimal("1000"), Decimal("0.05"), {}),
        (Decimal("1000"), Decimal("0.05"), {"installment_count": 0}),
        (Decimal("1000"), Decimal("0.05"), {"end_date": date(2023, 12, 1)}),
    ],
)
def test_invalid_terms_rejected(principal, rate, kwargs):
    """Test precondition violations raise InvalidTermsError"""
    with pytest.raises(InvalidTermsError):
        resolve_terms(principal, rate, date(2024, 1, 1), **kwargs)


def test_missing_start_date_rejected():
    """Test a start date is mandatory"""
    with pytest.raises(InvalidTermsError):
        resolve_terms(Decimal("1000"), Decimal("0.05"), None, installment_count=12)


def test_count_beyond_calendar_rejected():
    """Test an end date past year 9999 is reported as invalid terms"""
    with pytest.raises(InvalidTermsError):
        resolve_terms(Decimal("1000"), Decimal("0"), date(2024, 1, 1), installment_count=10**6)


def test_import_leaves_host_decimal_context_alone():
    """Test loading the module keeps the caller's decimal precision"""
    with localcontext() as ctx:
        ctx.prec = 40
        importlib.reload(terms_module)

        assert getcontext().prec == 40


def test_low_host_precision_does_not_truncate_payment():
    """Test the payment is computed at full precision whatever the caller uses"""
    with localcontext() as ctx:
        ctx.prec = 6
        terms = resolve_terms(Decimal("10000"), Decimal("0.06"), date(2024, 1, 1), installment_count=12)

        assert getcontext().prec == 6
    assert terms.periodic_payment == Decimal("860.66")


def test_full_rate_is_accepted():
    """Test rate boundaries are inclusive"""
    terms = resolve_terms(Decimal("1000"), Decimal("1"), date(2024, 1, 1), installment_count=12)

    assert terms.periodic_payment > Decimal("1000") / 12


def test_annuity_payment_rejects_non_positive_count():
    """Test payment formula guards its divisor"""
    with pytest.raises(InvalidTermsError):
        annuity_payment(Decimal("1000"), Decimal("0.01"), 0)


@pytest.mark.parametrize(
    "principal,rate,count",
    [
        (Decimal("1000"), Decimal("0.05"), 36),
        (Decimal("250000"), Decimal("0.035"), 300),
        (Decimal("5000"), Decimal("0.99"), 12),
        (Decimal("1"), Decimal("0.2"), 1),
        (Decimal("999.99"), Decimal("0"), 7),
    ],
)
def test_payment_stream_repays_principal(principal, rate, count):
    """Test present value of the rounded payments matches the principal within a cent per installment"""
    terms = resolve_terms(principal, rate, date(2024, 1, 1), installment_count=count)
    monthly_rate = rate / 12

    if monthly_rate == 0:
        present_value = terms.periodic_payment * count
    else:
        present_value = sum(terms.periodic_payment / (1 + monthly_rate) ** k for k in range(1, count + 1))

    assert abs(present_value - principal) <= Decimal("0.01") * count


def test_payment_consistency_accepts_exact_and_one_cent_short():
    """Test cross-check tolerates one cent of rounding"""
    check_payment_consistency(Decimal("1200"), Decimal("100"), 12)
    check_payment_consistency(Decimal("1200.01"), Decimal("100"), 12)


def test_payment_consistency_rejects_undershoot():
    """Test payments that cannot repay the principal are rejected"""
    with pytest.raises(InconsistentTermsError):
        check_payment_consistency(Decimal("1200"), Decimal("99.99"), 12)


def test_inconsistent_terms_is_invalid_terms():
    """Test callers catching InvalidTermsError also catch the cross-check"""
    assert issubclass(InconsistentTermsError, InvalidTermsError)
