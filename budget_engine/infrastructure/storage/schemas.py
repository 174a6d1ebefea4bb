"""
Pydantic schemas for rows fetched from the storage layer.

Field names follow the storage columns. Every default the aggregation code
relies on is applied here, so domain functions receive complete records.
Persisted derived columns (remaining_installments, current_amount_due,
user_amount) are deliberately not declared and therefore never trusted.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from budget_engine.domain.models import (
    Collaboration,
    Credit,
    Group,
    Income,
    RecurringCharge,
    SavingsContribution,
)
from budget_engine.utils.date_utils import parse_date


class StorageRow(BaseModel):
    """Common row behaviour: unknown columns ignored, ids coerced to str"""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> str:
        return "" if value is None else str(value)


def _false_if_null(value: Any) -> Any:
    return False if value is None else value


def _zero_if_null(value: Any) -> Any:
    return 0 if value is None else value


def _empty_if_null(value: Any) -> Any:
    return "" if value is None else value


LenientDate = Annotated[Optional[date], BeforeValidator(parse_date)]
Flag = Annotated[bool, BeforeValidator(_false_if_null)]
ZeroDecimal = Annotated[Decimal, BeforeValidator(_zero_if_null)]
ZeroInt = Annotated[int, BeforeValidator(_zero_if_null)]
Text = Annotated[str, BeforeValidator(_empty_if_null)]


class CreditRow(StorageRow):
    user_id: str = Field(..., min_length=1)
    loan_name: Text = ""
    total_amount: Decimal = Field(..., gt=0)
    interest_rate: ZeroDecimal = Field(default=Decimal("0"), ge=0, le=1)
    total_installments: ZeroInt = Field(default=0, ge=0)
    monthly_payment: ZeroDecimal = Field(default=Decimal("0"), ge=0)
    start_date: LenientDate = None
    end_date: LenientDate = None
    is_shared: Flag = False
    is_settled_early: Flag = False

    def to_domain(self) -> Credit:
        return Credit(
            credit_id=self.id,
            owner_id=self.user_id,
            principal=self.total_amount,
            annual_interest_rate=self.interest_rate,
            start_date=self.start_date,
            installment_count=self.total_installments,
            periodic_payment=self.monthly_payment,
            end_date=self.end_date,
            is_shared=self.is_shared,
            is_settled_early=self.is_settled_early,
            name=self.loan_name or "",
        )


class RecurringChargeRow(StorageRow):
    user_id: str = Field(..., min_length=1)
    title: Text = ""
    amount: Decimal = Field(..., gt=0)
    frequency: Text = ""
    category: Optional[str] = None
    beneficiary_id: Optional[str] = None
    is_shared: Flag = False

    def to_domain(self) -> RecurringCharge:
        return RecurringCharge(
            charge_id=self.id,
            owner_id=self.user_id,
            amount=self.amount,
            frequency=self.frequency,
            category=self.category or None,
            beneficiary_id=self.beneficiary_id or None,
            is_shared=self.is_shared,
            title=self.title or "",
        )


class SavingsContributionRow(StorageRow):
    user_id: str = Field(..., min_length=1)
    type: Text = ""
    amount: Decimal = Field(..., gt=0)
    frequency: Text = ""
    start_date: LenientDate = None
    beneficiary_id: Optional[str] = None
    is_shared: Flag = False

    def to_domain(self) -> SavingsContribution:
        return SavingsContribution(
            contribution_id=self.id,
            owner_id=self.user_id,
            amount=self.amount,
            frequency=self.frequency,
            start_date=self.start_date,
            beneficiary_id=self.beneficiary_id or None,
            is_shared=self.is_shared,
            label=self.type or "",
        )


class IncomeRow(StorageRow):
    user_id: str = Field(..., min_length=1)
    source_name: Text = ""
    amount: Decimal = Field(..., gt=0)
    frequency: Text = ""
    contributor_user_id: Optional[str] = None
    is_shared: Flag = False

    def to_domain(self) -> Income:
        return Income(
            income_id=self.id,
            owner_id=self.user_id,
            contributor_user_id=self.contributor_user_id or self.user_id,
            amount=self.amount,
            frequency=self.frequency,
            is_shared=self.is_shared,
            source_name=self.source_name or "",
        )


class CollaborationRow(StorageRow):
    inviter_id: str = Field(..., min_length=1)
    invitee_id: str = Field(..., min_length=1)
    status: Text = "pending"

    def to_domain(self) -> Collaboration:
        return Collaboration(inviter_id=self.inviter_id, invitee_id=self.invitee_id, status=self.status.lower())


class GroupBeneficiaryRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    beneficiary_id: str


class GroupRow(StorageRow):
    user_id: str = Field(..., min_length=1)
    name: Text = ""
    group_beneficiaries: List[GroupBeneficiaryRow] = Field(default_factory=list)

    @field_validator("group_beneficiaries", mode="before")
    @classmethod
    def _list_if_null(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_domain(self) -> Group:
        return Group(
            group_id=self.id,
            owner_id=self.user_id,
            name=self.name,
            beneficiary_ids=frozenset(gb.beneficiary_id for gb in self.group_beneficiaries),
        )
