"""Conversion of fetched storage rows into a typed in-memory snapshot"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError

from budget_engine.domain.exceptions import InvalidRecordError
from budget_engine.domain.models import (
    Collaboration,
    Credit,
    Group,
    Income,
    RecurringCharge,
    SavingsContribution,
)
from budget_engine.infrastructure.observability.metrics import record_dropped_row
from budget_engine.infrastructure.storage.schemas import (
    CollaborationRow,
    CreditRow,
    GroupRow,
    IncomeRow,
    RecurringChargeRow,
    SavingsContributionRow,
    StorageRow,
)

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Everything the engine needs for one user, as fetched from storage"""

    credits: List[Credit] = field(default_factory=list)
    recurring_charges: List[RecurringCharge] = field(default_factory=list)
    savings_contributions: List[SavingsContribution] = field(default_factory=list)
    incomes: List[Income] = field(default_factory=list)
    collaborations: List[Collaboration] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    dropped_rows: int = 0


def parse_row(schema: Type[StorageRow], row: Any) -> Any:
    """
    Validate one row and convert it to its domain model.

    Raises:
        InvalidRecordError: row is not a mapping or misses mandatory fields
    """
    try:
        return schema.model_validate(row).to_domain()
    except ValidationError as e:
        raise InvalidRecordError(f"Invalid {schema.__name__}: {e.error_count()} error(s)") from e


def load_rows(entity: str, schema: Type[StorageRow], rows: Optional[Iterable[Any]]) -> Tuple[List[Any], int]:
    """Convert rows, dropping the invalid ones. Returns (records, dropped_count)."""
    records: List[Any] = []
    dropped = 0
    for row in rows or []:
        try:
            records.append(parse_row(schema, row))
        except InvalidRecordError as e:
            dropped += 1
            record_dropped_row(entity)
            row_id = row.get("id") if isinstance(row, Mapping) else None
            logger.warning(f"Dropping storage row: {e}", extra={"entity": entity, "row_id": row_id})
    return records, dropped


def load_snapshot(payload: Mapping[str, Any]) -> Snapshot:
    """
    Build a Snapshot from a mapping of entity name to row list.

    Expected keys: credits, recurring_charges, savings_contributions,
    incomes, collaborations, groups. Missing keys mean no rows.
    """
    credits, d1 = load_rows("credit", CreditRow, payload.get("credits"))
    charges, d2 = load_rows("recurring_charge", RecurringChargeRow, payload.get("recurring_charges"))
    savings, d3 = load_rows("savings", SavingsContributionRow, payload.get("savings_contributions"))
    incomes, d4 = load_rows("income", IncomeRow, payload.get("incomes"))
    collaborations, d5 = load_rows("collaboration", CollaborationRow, payload.get("collaborations"))
    groups, d6 = load_rows("group", GroupRow, payload.get("groups"))

    return Snapshot(
        credits=credits,
        recurring_charges=charges,
        savings_contributions=savings,
        incomes=incomes,
        collaborations=collaborations,
        groups=groups,
        dropped_rows=d1 + d2 + d3 + d4 + d5 + d6,
    )
