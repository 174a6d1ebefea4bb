"""Credit lifecycle: remaining installments, amount due and status at a date"""

import logging
from dataclasses import replace
from datetime import date
from typing import AbstractSet, Iterable, List

from budget_engine.domain.models import (
    ZERO,
    Credit,
    CreditEvaluation,
    CreditStatus,
    CreditSummary,
    EvaluatedCredit,
)
from budget_engine.domain.visibility import participates
from budget_engine.utils.date_utils import months_between

logger = logging.getLogger(__name__)


def evaluate_credit(credit: Credit, as_of: date) -> CreditEvaluation:
    """
    Derive the amortization state of a credit at as_of.

    Elapsed months exclude the current month: a credit starting this month
    still has every installment remaining. Early settlement is terminal and
    ignores as_of entirely. A missing start date is treated as exhausted
    terms rather than an error.
    """
    if credit.is_settled_early:
        return CreditEvaluation(remaining_installments=0, current_amount_due=ZERO, status=CreditStatus.SETTLED)

    if credit.start_date is None:
        logger.debug("Credit without usable start date", extra={"credit_id": credit.credit_id})
        return CreditEvaluation(remaining_installments=0, current_amount_due=ZERO, status=CreditStatus.ARCHIVED)

    count = max(credit.installment_count, 0)
    elapsed = months_between(credit.start_date, as_of)
    paid = min(max(elapsed, 0), count)
    remaining = count - paid

    return CreditEvaluation(
        remaining_installments=remaining,
        current_amount_due=credit.periodic_payment * remaining,
        status=CreditStatus.ARCHIVED if remaining == 0 else CreditStatus.ACTIVE,
    )


def settle_credit(credit: Credit, settled_on: date) -> Credit:
    """
    Mark a credit as repaid early.

    The installment count is frozen at the periods elapsed at settlement,
    counting the settlement month as paid, and clamped to the original
    count. Settling twice returns the credit unchanged.
    """
    if credit.is_settled_early:
        return credit

    frozen_count = 0
    if credit.start_date is not None:
        elapsed = months_between(credit.start_date, settled_on) + 1
        frozen_count = min(max(elapsed, 0), max(credit.installment_count, 0))

    logger.info(
        "Credit settled early",
        extra={"credit_id": credit.credit_id, "installments_paid": frozen_count},
    )
    return replace(credit, is_settled_early=True, installment_count=frozen_count, end_date=settled_on)


def summarize_credits(
    credits: Iterable[Credit],
    user_id: str,
    as_of: date,
    collaborators: AbstractSet[str] = frozenset(),
    can_share: bool = False,
) -> CreditSummary:
    """
    Split the credits user_id takes part in into active and archived.

    Only the user's own credits and credits shared by accepted
    collaborators are listed. Active ones still have installments to pay;
    archived ones have nothing left, settled ones included.
    """
    active: List[EvaluatedCredit] = []
    archived: List[EvaluatedCredit] = []

    for credit in credits:
        if not participates(credit.owner_id, credit.is_shared, user_id, collaborators):
            continue
        evaluated = EvaluatedCredit(credit=credit, evaluation=evaluate_credit(credit, as_of))
        if evaluated.evaluation.remaining_installments <= 0:
            archived.append(evaluated)
        else:
            active.append(evaluated)

    total_due = sum((e.evaluation.current_amount_due for e in active), ZERO)
    total_monthly = sum((e.credit.periodic_payment for e in active), ZERO)

    return CreditSummary(
        active=active,
        archived=archived,
        total_amount_due=total_due,
        total_monthly_payment=total_monthly,
        can_share=can_share,
    )
