"""Pytest fixtures for testing"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Generator

import pytest

from budget_engine.domain.models import Credit


@pytest.fixture
def today() -> date:
    """Fixed evaluation date so lifecycle results are deterministic"""
    return date(2024, 6, 15)


@pytest.fixture
def make_credit() -> Callable[..., Credit]:
    """Factory for credits with sensible defaults"""

    def _make(**overrides: Any) -> Credit:
        values: Dict[str, Any] = dict(
            credit_id="credit_1",
            owner_id="alice",
            principal=Decimal("1200"),
            annual_interest_rate=Decimal("0"),
            start_date=date(2024, 1, 1),
            installment_count=12,
            periodic_payment=Decimal("100.00"),
        )
        values.update(overrides)
        return Credit(**values)

    return _make


@pytest.fixture
def household_payload() -> Dict[str, Any]:
    """
    Storage rows for a two-person household.

    alice and bob collaborate (accepted); carol's invitation is pending so
    her shared records must never leak into alice's figures. Two rows are
    structurally invalid and must be dropped.
    """
    return {
        "collaborations": [
            {"id": "col_1", "inviter_id": "alice", "invitee_id": "bob", "status": "accepted"},
            {"id": "col_2", "inviter_id": "carol", "invitee_id": "alice", "status": "pending"},
        ],
        "incomes": [
            {"id": "inc_1", "user_id": "alice", "contributor_user_id": "alice", "amount": 2100,
             "frequency": "Mensuel", "is_shared": True, "source_name": "Salary"},
            {"id": "inc_2", "user_id": "bob", "contributor_user_id": "bob", "amount": "900.00",
             "frequency": "Mensuel", "is_shared": True, "source_name": "Salary"},
            {"id": "inc_3", "user_id": "alice", "contributor_user_id": "alice", "amount": 1200,
             "frequency": "Annuel", "is_shared": True, "source_name": "Bonus"},
            {"id": "inc_4", "user_id": "carol", "contributor_user_id": "carol", "amount": 5000,
             "frequency": "Mensuel", "is_shared": True},
            {"id": "inc_bad", "user_id": "alice", "amount": "abc", "frequency": "Mensuel"},
        ],
        "credits": [
            # Shared 0 % loan, 5 installments paid by mid-June
            {"id": "c1", "user_id": "alice", "loan_name": "Kitchen", "total_amount": 1200, "interest_rate": 0,
             "total_installments": 12, "monthly_payment": 100, "start_date": "2024-01-10",
             "is_shared": True, "is_settled_early": False,
             "remaining_installments": 99, "current_amount_due": 9900},
            # bob's private car loan
            {"id": "c2", "user_id": "bob", "loan_name": "Car", "total_amount": 6000, "interest_rate": 0,
             "total_installments": 24, "monthly_payment": 250, "start_date": "2024-01-01",
             "is_shared": False, "is_settled_early": False},
            # Naturally amortized
            {"id": "c3", "user_id": "alice", "loan_name": "Phone", "total_amount": 600, "interest_rate": 0,
             "total_installments": 12, "monthly_payment": 50, "start_date": "2022-01-01",
             "is_shared": False, "is_settled_early": None},
            # Settled early
            {"id": "c4", "user_id": "alice", "loan_name": "Sofa", "total_amount": 2400, "interest_rate": 0.05,
             "total_installments": 5, "monthly_payment": 105.29, "start_date": "2024-01-01",
             "end_date": "2024-05-20", "is_shared": False, "is_settled_early": True},
            # Missing owner
            {"id": "c5", "total_amount": 1000, "total_installments": 10, "monthly_payment": 100},
            # Corrupt start date
            {"id": "c6", "user_id": "alice", "loan_name": "Legacy", "total_amount": 300,
             "total_installments": 10, "monthly_payment": 30, "start_date": "not-a-date"},
            # carol is only invited: her shared credit stays out of alice's figures
            {"id": "c7", "user_id": "carol", "loan_name": "Boat", "total_amount": 9000, "interest_rate": 0,
             "total_installments": 36, "monthly_payment": 250, "start_date": "2024-01-01", "is_shared": True},
            # bob's private credit, already amortized
            {"id": "c8", "user_id": "bob", "loan_name": "Laptop", "total_amount": 600, "interest_rate": 0,
             "total_installments": 12, "monthly_payment": 50, "start_date": "2022-01-01", "is_shared": False},
        ],
        "recurring_charges": [
            {"id": "rc_1", "user_id": "bob", "title": "Rent", "amount": 1000, "frequency": "monthly",
             "category": "housing", "is_shared": True},
            {"id": "rc_2", "user_id": "alice", "title": "Insurance", "amount": 240, "frequency": "annually",
             "category": "insurance", "beneficiary_id": "kid_1", "is_shared": False},
            {"id": "rc_3", "user_id": "alice", "title": "Streaming", "amount": 45, "frequency": "quarterly",
             "category": None, "beneficiary_id": "kid_1", "is_shared": True},
            {"id": "rc_4", "user_id": "alice", "title": "Mystery", "amount": 30, "frequency": "weekly",
             "is_shared": False},
            {"id": "rc_5", "user_id": "bob", "title": "Gym", "amount": 40, "frequency": "monthly",
             "is_shared": False},
        ],
        "savings_contributions": [
            {"id": "sv_1", "user_id": "alice", "type": "Livret A", "amount": 100, "frequency": "Mensuel",
             "start_date": "2024-01-15", "is_shared": False},
            {"id": "sv_2", "user_id": "bob", "type": "PEL", "amount": 300, "frequency": "Trimestriel",
             "start_date": "2023-12-01T00:00:00Z", "is_shared": True},
            {"id": "sv_3", "user_id": "alice", "type": "Holiday", "amount": 50, "frequency": "Mensuel",
             "start_date": "2024-07-01", "is_shared": False},
        ],
        "groups": [
            {"id": "grp_1", "user_id": "alice", "name": "Kids",
             "group_beneficiaries": [{"beneficiary_id": "kid_1"}]},
        ],
    }


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Put the root logger back the way it was after setup_logging tests"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
