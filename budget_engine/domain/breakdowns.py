"""Monthly charge totals grouped by beneficiary, group and category"""

from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from budget_engine.domain.frequency import to_monthly_equivalent
from budget_engine.domain.models import ZERO, AmountBreakdown, Group, RecurringCharge

UNCATEGORIZED = "other"


def _sorted(totals: Dict[str, Decimal], labels: Mapping[str, str]) -> List[AmountBreakdown]:
    rows = [AmountBreakdown(key=key, label=labels.get(key, key), total=total) for key, total in totals.items()]
    return sorted(rows, key=lambda row: row.total, reverse=True)


def charges_by_beneficiary(
    charges: Iterable[RecurringCharge],
    user_id: str,
    labels: Optional[Mapping[str, str]] = None,
) -> List[AmountBreakdown]:
    """Monthly totals per beneficiary; charges without one count for the user"""
    totals: Dict[str, Decimal] = {}
    for charge in charges:
        beneficiary = charge.beneficiary_id or user_id
        totals[beneficiary] = totals.get(beneficiary, ZERO) + to_monthly_equivalent(charge.amount, charge.frequency)
    return _sorted(totals, labels or {})


def charges_by_group(
    charges: Iterable[RecurringCharge],
    groups: Iterable[Group],
    user_id: str,
) -> List[AmountBreakdown]:
    """Monthly totals per group; a charge counts for every group holding its beneficiary"""
    groups = list(groups)
    totals: Dict[str, Decimal] = {}
    for charge in charges:
        beneficiary = charge.beneficiary_id or user_id
        monthly = to_monthly_equivalent(charge.amount, charge.frequency)
        for group in groups:
            if beneficiary in group.beneficiary_ids:
                totals[group.group_id] = totals.get(group.group_id, ZERO) + monthly
    return _sorted(totals, {g.group_id: g.name for g in groups})


def charges_by_category(charges: Iterable[RecurringCharge]) -> List[AmountBreakdown]:
    totals: Dict[str, Decimal] = {}
    for charge in charges:
        category = charge.category or UNCATEGORIZED
        totals[category] = totals.get(category, ZERO) + to_monthly_equivalent(charge.amount, charge.frequency)
    return _sorted(totals, {})
