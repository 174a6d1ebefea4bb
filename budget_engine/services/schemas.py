"""Pydantic presentation models; amounts are rounded to cents only here"""

from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel

from budget_engine.domain.models import AmountBreakdown, EvaluatedCredit
from budget_engine.services.dashboard import Dashboard
from budget_engine.utils.money import round_currency


class CreditView(BaseModel):
    credit_id: str
    name: str
    monthly_payment: Decimal
    remaining_installments: int
    current_amount_due: Decimal
    status: str
    is_shared: bool

    @classmethod
    def from_evaluated(cls, item: EvaluatedCredit) -> "CreditView":
        return cls(
            credit_id=item.credit.credit_id,
            name=item.credit.name,
            monthly_payment=round_currency(item.credit.periodic_payment),
            remaining_installments=item.evaluation.remaining_installments,
            current_amount_due=round_currency(item.evaluation.current_amount_due),
            status=item.evaluation.status.value,
            is_shared=item.credit.is_shared,
        )


class ObligationShareView(BaseModel):
    obligation_id: str
    kind: str
    label: str
    monthly_amount: Decimal
    your_share: Decimal
    is_shared: bool


class ContributorView(BaseModel):
    user_id: str
    monthly_total: Decimal
    percentage: Decimal


class BreakdownView(BaseModel):
    key: str
    label: str
    total: Decimal

    @classmethod
    def from_breakdowns(cls, rows: List[AmountBreakdown]) -> List["BreakdownView"]:
        return [cls(key=r.key, label=r.label, total=round_currency(r.total)) for r in rows]


class DashboardView(BaseModel):
    """Figures rendered on summary cards and detail dialogs"""

    user_id: str
    as_of: date
    total_monthly_income: Decimal
    your_monthly_income: Decimal
    your_percentage: Decimal
    total_amount_due: Decimal
    total_monthly_credit_payment: Decimal
    estimated_disposable_income: Decimal
    your_disposable_income: Decimal
    annual_recurring_charges: Decimal
    total_saved: Decimal
    monthly_savings: Decimal
    savings_target: Decimal
    savings_progress: int
    can_share: bool
    active_credits: List[CreditView]
    archived_credits: List[CreditView]
    shares: List[ObligationShareView]
    income_breakdown: List[ContributorView]
    charges_by_beneficiary: List[BreakdownView]
    charges_by_group: List[BreakdownView]
    charges_by_category: List[BreakdownView]

    @classmethod
    def from_dashboard(cls, dashboard: Dashboard) -> "DashboardView":
        shares = dashboard.shares
        return cls(
            user_id=dashboard.user_id,
            as_of=dashboard.as_of,
            total_monthly_income=round_currency(shares.total_monthly_income),
            your_monthly_income=round_currency(shares.your_monthly_income),
            your_percentage=round_currency(shares.your_percentage),
            total_amount_due=round_currency(dashboard.credit_summary.total_amount_due),
            total_monthly_credit_payment=round_currency(dashboard.credit_summary.total_monthly_payment),
            estimated_disposable_income=round_currency(dashboard.disposable.estimated),
            your_disposable_income=round_currency(shares.your_disposable_income),
            annual_recurring_charges=round_currency(dashboard.annual_recurring_charges),
            total_saved=round_currency(dashboard.total_saved),
            monthly_savings=round_currency(dashboard.monthly_savings),
            savings_target=round_currency(dashboard.savings_target),
            savings_progress=dashboard.savings_progress,
            can_share=dashboard.credit_summary.can_share,
            active_credits=[CreditView.from_evaluated(c) for c in dashboard.credit_summary.active],
            archived_credits=[CreditView.from_evaluated(c) for c in dashboard.credit_summary.archived],
            shares=[
                ObligationShareView(
                    obligation_id=s.obligation.obligation_id,
                    kind=s.obligation.kind.value,
                    label=s.obligation.label,
                    monthly_amount=round_currency(s.obligation.monthly_amount),
                    your_share=round_currency(s.user_share),
                    is_shared=s.obligation.is_shared,
                )
                for s in shares.shares
                if s.participating
            ],
            income_breakdown=[
                ContributorView(
                    user_id=c.user_id,
                    monthly_total=round_currency(c.monthly_total),
                    percentage=round_currency(c.percentage),
                )
                for c in dashboard.income_breakdown
            ],
            charges_by_beneficiary=BreakdownView.from_breakdowns(dashboard.charges_by_beneficiary),
            charges_by_group=BreakdownView.from_breakdowns(dashboard.charges_by_group),
            charges_by_category=BreakdownView.from_breakdowns(dashboard.charges_by_category),
        )
