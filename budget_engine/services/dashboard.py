"""Dashboard figures for one user, recomputed from a storage snapshot"""

import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Set

from budget_engine.domain.breakdowns import charges_by_beneficiary, charges_by_category, charges_by_group
from budget_engine.domain.frequency import to_annual_equivalent
from budget_engine.domain.lifecycle import evaluate_credit, summarize_credits
from budget_engine.domain.models import (
    ZERO,
    AmountBreakdown,
    ContributorIncome,
    CreditEvaluation,
    CreditSummary,
    DisposableIncome,
    ShareSummary,
)
from budget_engine.domain.savings import (
    monthly_contribution_total,
    savings_progress,
    savings_target,
    total_saved,
)
from budget_engine.domain.sharing import (
    collaborator_ids,
    compute_shares,
    disposable_income,
    income_breakdown,
    obligations_from_charges,
    obligations_from_credits,
    obligations_from_savings,
)
from budget_engine.domain.visibility import participates
from budget_engine.infrastructure.observability.logging import log_dashboard_computed
from budget_engine.infrastructure.observability.metrics import dashboard_duration_histogram, record_credit_status
from budget_engine.infrastructure.storage.loader import Snapshot


@dataclass
class Dashboard:
    """Unrounded dashboard figures; see DashboardView for presentation"""

    user_id: str
    as_of: date
    collaborator_ids: Set[str]
    credit_evaluations: Dict[str, CreditEvaluation]
    credit_summary: CreditSummary
    shares: ShareSummary
    income_breakdown: List[ContributorIncome]
    disposable: DisposableIncome
    annual_recurring_charges: Decimal
    total_saved: Decimal
    monthly_savings: Decimal
    savings_target: Decimal
    savings_progress: int
    charges_by_beneficiary: List[AmountBreakdown]
    charges_by_group: List[AmountBreakdown]
    charges_by_category: List[AmountBreakdown]


def build_dashboard(
    user_id: str,
    snapshot: Snapshot,
    today: Optional[date] = None,
    savings_goal_percentage: Optional[Decimal] = None,
) -> Dashboard:
    """
    Compute every dashboard figure for user_id.

    Flow:
    1. Resolve the collaborator set from accepted collaborations
    2. Keep the records the user takes part in and evaluate credits at today
    3. Normalize credits, charges and savings into monthly obligations
    4. Split obligations by income share and derive disposable income
    5. Savings totals, goal progress and charge breakdowns
    """
    start_time = time.time()
    as_of = today or date.today()

    collaborators = collaborator_ids(snapshot.collaborations, user_id)

    credits = [c for c in snapshot.credits if participates(c.owner_id, c.is_shared, user_id, collaborators)]

    evaluations: Dict[str, CreditEvaluation] = {}
    for credit in credits:
        evaluation = evaluate_credit(credit, as_of)
        evaluations[credit.credit_id] = evaluation
        record_credit_status(evaluation.status)
    credit_summary = summarize_credits(credits, user_id, as_of, collaborators, can_share=bool(collaborators))

    charges = [
        c for c in snapshot.recurring_charges if participates(c.owner_id, c.is_shared, user_id, collaborators)
    ]
    contributions = [
        c for c in snapshot.savings_contributions if participates(c.owner_id, c.is_shared, user_id, collaborators)
    ]

    obligations = [
        *obligations_from_credits(credits, as_of),
        *obligations_from_charges(charges),
        *obligations_from_savings(contributions, as_of),
    ]
    shares = compute_shares(user_id, collaborators, snapshot.incomes, obligations)

    monthly_savings = monthly_contribution_total(contributions, as_of)
    target = savings_target(shares.total_monthly_income, savings_goal_percentage)

    dashboard = Dashboard(
        user_id=user_id,
        as_of=as_of,
        collaborator_ids=collaborators,
        credit_evaluations=evaluations,
        credit_summary=credit_summary,
        shares=shares,
        income_breakdown=income_breakdown(user_id, collaborators, snapshot.incomes),
        disposable=disposable_income(shares),
        annual_recurring_charges=sum((to_annual_equivalent(c.amount, c.frequency) for c in charges), ZERO),
        total_saved=total_saved(contributions, as_of),
        monthly_savings=monthly_savings,
        savings_target=target,
        savings_progress=savings_progress(monthly_savings, target),
        charges_by_beneficiary=charges_by_beneficiary(charges, user_id),
        charges_by_group=charges_by_group(charges, snapshot.groups, user_id),
        charges_by_category=charges_by_category(charges),
    )

    duration = time.time() - start_time
    dashboard_duration_histogram.observe(duration)
    log_dashboard_computed(
        user_id=user_id,
        collaborator_count=len(collaborators),
        active_credit_count=len(credit_summary.active),
        obligation_count=len(obligations),
        dropped_rows=snapshot.dropped_rows,
        duration_ms=duration * 1000,
    )
    return dashboard
