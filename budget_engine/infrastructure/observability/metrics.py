"""Prometheus metrics for data quality and aggregation activity"""

from prometheus_client import Counter, Histogram

from budget_engine.domain.models import CreditStatus

# Storage boundary
dropped_rows_counter = Counter(
    "budget_dropped_rows_total",
    "Storage rows discarded as structurally invalid",
    ["entity"],  # credit | recurring_charge | savings | income | collaboration | group
)

# Loan form
rejected_terms_counter = Counter(
    "budget_rejected_terms_total",
    "Loan term submissions rejected",
    ["reason"],  # invalid | inconsistent
)

# Aggregation
credit_status_counter = Counter(
    "budget_credit_evaluations_total",
    "Credit evaluations by resulting status",
    ["status"],
)

dashboard_duration_histogram = Histogram(
    "budget_dashboard_duration_seconds",
    "Time spent building a dashboard snapshot",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)


def record_credit_status(status: CreditStatus) -> None:
    credit_status_counter.labels(status=status.value).inc()


def record_dropped_row(entity: str) -> None:
    dropped_rows_counter.labels(entity=entity).inc()
