"""Domain models - pure Python dataclasses representing budgeting entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, List, Optional

ZERO = Decimal("0")


class Frequency(str, Enum):
    """Canonical billing frequencies"""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


class CreditStatus(str, Enum):
    """Lifecycle classification of a credit at a given date"""

    ACTIVE = "active"
    SETTLED = "settled"  # manually repaid early, terminal
    ARCHIVED = "archived"  # naturally amortized


class ObligationKind(str, Enum):
    CREDIT = "credit"
    RECURRING_CHARGE = "recurring_charge"
    SAVINGS = "savings"


@dataclass
class ResolvedTerms:
    """Output of loan terms resolution"""

    periodic_payment: Decimal
    installment_count: int
    end_date: date


@dataclass
class Credit:
    """Loan with fixed terms owned by a single user"""

    credit_id: str
    owner_id: str
    principal: Decimal
    annual_interest_rate: Decimal  # decimal, 0.05 means 5 %
    start_date: Optional[date]  # None when storage held an unparsable value
    installment_count: int
    periodic_payment: Decimal
    end_date: Optional[date] = None
    is_shared: bool = False
    is_settled_early: bool = False
    name: str = ""


@dataclass
class CreditEvaluation:
    """Derived amortization state, recomputed on every read"""

    remaining_installments: int
    current_amount_due: Decimal
    status: CreditStatus


@dataclass
class EvaluatedCredit:
    credit: Credit
    evaluation: CreditEvaluation


@dataclass
class CreditSummary:
    """Active/archived split of the credits visible to a user"""

    active: List[EvaluatedCredit]
    archived: List[EvaluatedCredit]
    total_amount_due: Decimal
    total_monthly_payment: Decimal
    can_share: bool = False


@dataclass
class RecurringCharge:
    """Recurring bill such as rent, insurance or a subscription"""

    charge_id: str
    owner_id: str
    amount: Decimal
    frequency: str  # raw tag, see frequency.canonical_frequency
    category: Optional[str] = None
    beneficiary_id: Optional[str] = None
    is_shared: bool = False
    title: str = ""


@dataclass
class SavingsContribution:
    """Recurring transfer into a savings account"""

    contribution_id: str
    owner_id: str
    amount: Decimal
    frequency: str
    start_date: Optional[date]
    beneficiary_id: Optional[str] = None
    is_shared: bool = False
    label: str = ""


@dataclass
class Income:
    """Income stream attributed to a contributing user"""

    income_id: str
    owner_id: str
    contributor_user_id: str
    amount: Decimal
    frequency: str
    is_shared: bool = False
    source_name: str = ""


@dataclass
class Collaboration:
    """Partnership edge between two users"""

    inviter_id: str
    invitee_id: str
    status: str  # "pending" | "accepted" | "rejected"


@dataclass
class Group:
    """Named set of beneficiaries used for charge breakdowns"""

    group_id: str
    owner_id: str
    name: str
    beneficiary_ids: FrozenSet[str] = field(default_factory=frozenset)


@dataclass
class Obligation:
    """A monthly cost normalized from a credit, charge or savings contribution"""

    obligation_id: str
    kind: ObligationKind
    owner_id: str
    monthly_amount: Decimal
    is_shared: bool
    label: str = ""


@dataclass
class ObligationShare:
    obligation: Obligation
    user_share: Decimal
    participating: bool = True  # owned by the user or shared by a collaborator


@dataclass
class ShareSummary:
    """Pooled income figures and the user's share of each visible obligation"""

    total_monthly_income: Decimal
    your_monthly_income: Decimal
    your_percentage: Decimal
    shares: List[ObligationShare]

    @property
    def total_user_share(self) -> Decimal:
        return sum((s.user_share for s in self.shares), ZERO)

    @property
    def your_disposable_income(self) -> Decimal:
        return self.your_monthly_income - self.total_user_share

    def share_of(self, kind: ObligationKind) -> Decimal:
        return sum((s.user_share for s in self.shares if s.obligation.kind == kind), ZERO)


@dataclass
class ContributorIncome:
    user_id: str
    monthly_total: Decimal
    percentage: Decimal


@dataclass
class DisposableIncome:
    """Pooled income minus the monthly obligations the user participates in"""

    total_monthly_income: Decimal
    credits: Decimal
    recurring_charges: Decimal
    savings: Decimal

    @property
    def estimated(self) -> Decimal:
        return self.total_monthly_income - self.credits - self.recurring_charges - self.savings


@dataclass
class AmountBreakdown:
    key: str
    label: str
    total: Decimal
