"""
Shared obligation aggregation.

Collaborating users pool their monthly incomes; each shared obligation is
split between them in proportion to their contribution to that pool.
Unshared obligations stay entirely with their owner.
"""

from datetime import date
from decimal import Decimal
from typing import AbstractSet, Dict, Iterable, List, Set

from budget_engine.config import settings
from budget_engine.domain.frequency import canonical_frequency, to_monthly_equivalent
from budget_engine.domain.lifecycle import evaluate_credit
from budget_engine.domain.models import (
    ZERO,
    Collaboration,
    ContributorIncome,
    Credit,
    CreditStatus,
    DisposableIncome,
    Income,
    Obligation,
    ObligationKind,
    ObligationShare,
    RecurringCharge,
    SavingsContribution,
    ShareSummary,
)
from budget_engine.domain.savings import is_running
from budget_engine.domain.visibility import participates

HUNDRED = Decimal(100)
ACCEPTED = "accepted"


def collaborator_ids(collaborations: Iterable[Collaboration], user_id: str) -> Set[str]:
    """Counterparts of every accepted collaboration involving user_id"""
    ids: Set[str] = set()
    for collab in collaborations:
        if collab.status != ACCEPTED:
            continue
        if collab.inviter_id == user_id:
            ids.add(collab.invitee_id)
        elif collab.invitee_id == user_id:
            ids.add(collab.inviter_id)
    ids.discard(user_id)
    return ids


def _pooled_incomes(user_id: str, collaborators: AbstractSet[str], incomes: Iterable[Income]) -> List[Income]:
    pooled_frequency = canonical_frequency(settings.pooled_income_frequency)
    return [
        income
        for income in incomes
        if participates(income.owner_id, income.is_shared, user_id, collaborators)
        and canonical_frequency(income.frequency) == pooled_frequency
    ]


def _monthly_by_earner(pooled: Iterable[Income], user_id: str, collaborators: AbstractSet[str]) -> Dict[str, Decimal]:
    """
    Monthly pooled income per household member.

    An income whose contributor is outside the household counts for its
    owner, so the members' totals always add up to the pool.
    """
    totals: Dict[str, Decimal] = {}
    for income in pooled:
        earner = income.contributor_user_id
        if earner != user_id and earner not in collaborators:
            earner = income.owner_id
        totals[earner] = totals.get(earner, ZERO) + to_monthly_equivalent(income.amount, income.frequency)
    return totals


def _percentage(part: Decimal, total: Decimal) -> Decimal:
    if total <= 0:
        return ZERO
    return HUNDRED * part / total


def compute_shares(
    current_user_id: str,
    collaborator_ids: AbstractSet[str],
    incomes: Iterable[Income],
    obligations: Iterable[Obligation],
) -> ShareSummary:
    """
    Compute the pooled monthly income and the user's share of each obligation.

    Only monthly incomes join the pool. A shared obligation costs the user
    their income percentage of it (0 if the pool or their part is empty);
    an unshared one of their own costs its full amount; anything else costs
    nothing. Sums are kept unrounded.
    """
    pooled = _pooled_incomes(current_user_id, collaborator_ids, incomes)
    total_income = sum((to_monthly_equivalent(i.amount, i.frequency) for i in pooled), ZERO)
    your_income = _monthly_by_earner(pooled, current_user_id, collaborator_ids).get(current_user_id, ZERO)
    your_percentage = _percentage(your_income, total_income)

    shares: List[ObligationShare] = []
    for obligation in obligations:
        involved = participates(obligation.owner_id, obligation.is_shared, current_user_id, collaborator_ids)
        if not involved:
            user_share = ZERO
        elif obligation.is_shared:
            if total_income > 0 and your_percentage > 0:
                user_share = obligation.monthly_amount * your_percentage / HUNDRED
            else:
                user_share = ZERO
        else:
            user_share = obligation.monthly_amount
        shares.append(ObligationShare(obligation=obligation, user_share=user_share, participating=involved))

    return ShareSummary(
        total_monthly_income=total_income,
        your_monthly_income=your_income,
        your_percentage=your_percentage,
        shares=shares,
    )


def disposable_income(summary: ShareSummary) -> DisposableIncome:
    """Pooled income minus the full amount of every obligation the user takes part in"""
    totals = {kind: ZERO for kind in ObligationKind}
    for share in summary.shares:
        if share.participating:
            totals[share.obligation.kind] += share.obligation.monthly_amount

    return DisposableIncome(
        total_monthly_income=summary.total_monthly_income,
        credits=totals[ObligationKind.CREDIT],
        recurring_charges=totals[ObligationKind.RECURRING_CHARGE],
        savings=totals[ObligationKind.SAVINGS],
    )


def income_breakdown(
    current_user_id: str,
    collaborator_ids: AbstractSet[str],
    incomes: Iterable[Income],
) -> List[ContributorIncome]:
    """Monthly income and pool percentage per contributor, current user first"""
    pooled = _pooled_incomes(current_user_id, collaborator_ids, incomes)
    total = sum((to_monthly_equivalent(i.amount, i.frequency) for i in pooled), ZERO)
    by_earner = _monthly_by_earner(pooled, current_user_id, collaborator_ids)

    breakdown = []
    for user_id in [current_user_id, *sorted(collaborator_ids)]:
        contributed = by_earner.get(user_id, ZERO)
        breakdown.append(
            ContributorIncome(user_id=user_id, monthly_total=contributed, percentage=_percentage(contributed, total))
        )
    return breakdown


def obligations_from_credits(credits: Iterable[Credit], as_of: date) -> List[Obligation]:
    """Monthly payments of credits still running at as_of"""
    return [
        Obligation(
            obligation_id=credit.credit_id,
            kind=ObligationKind.CREDIT,
            owner_id=credit.owner_id,
            monthly_amount=credit.periodic_payment,
            is_shared=credit.is_shared,
            label=credit.name,
        )
        for credit in credits
        if evaluate_credit(credit, as_of).status == CreditStatus.ACTIVE
    ]


def obligations_from_charges(charges: Iterable[RecurringCharge]) -> List[Obligation]:
    return [
        Obligation(
            obligation_id=charge.charge_id,
            kind=ObligationKind.RECURRING_CHARGE,
            owner_id=charge.owner_id,
            monthly_amount=to_monthly_equivalent(charge.amount, charge.frequency),
            is_shared=charge.is_shared,
            label=charge.title,
        )
        for charge in charges
    ]


def obligations_from_savings(contributions: Iterable[SavingsContribution], as_of: date) -> List[Obligation]:
    return [
        Obligation(
            obligation_id=c.contribution_id,
            kind=ObligationKind.SAVINGS,
            owner_id=c.owner_id,
            monthly_amount=to_monthly_equivalent(c.amount, c.frequency),
            is_shared=c.is_shared,
            label=c.label,
        )
        for c in contributions
        if is_running(c, as_of)
    ]
