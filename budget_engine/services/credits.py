"""Credit creation from user-submitted loan terms"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from budget_engine.domain.exceptions import InconsistentTermsError, InvalidTermsError
from budget_engine.domain.models import Credit
from budget_engine.domain.terms import check_payment_consistency, resolve_terms
from budget_engine.infrastructure.observability.metrics import rejected_terms_counter

logger = logging.getLogger(__name__)


def prepare_credit(
    credit_id: str,
    owner_id: str,
    principal: Decimal,
    annual_rate: Decimal,
    start_date: date,
    installment_count: Optional[int] = None,
    end_date: Optional[date] = None,
    periodic_payment: Optional[Decimal] = None,
    is_shared: bool = False,
    name: str = "",
) -> Credit:
    """
    Resolve submitted loan terms into a Credit ready to be stored.

    An explicit periodic payment replaces the computed one, provided it
    repays the principal over the resolved installment count.

    Raises:
        InvalidTermsError: terms cannot be resolved
        InconsistentTermsError: explicit payment falls short of the principal
    """
    try:
        terms = resolve_terms(principal, annual_rate, start_date, installment_count, end_date)
        payment = terms.periodic_payment
        if periodic_payment is not None:
            check_payment_consistency(principal, periodic_payment, terms.installment_count)
            payment = periodic_payment
    except InconsistentTermsError as e:
        rejected_terms_counter.labels(reason="inconsistent").inc()
        logger.warning(f"Inconsistent loan terms: {e}", extra={"owner_id": owner_id})
        raise
    except InvalidTermsError as e:
        rejected_terms_counter.labels(reason="invalid").inc()
        logger.warning(f"Invalid loan terms: {e}", extra={"owner_id": owner_id})
        raise

    return Credit(
        credit_id=credit_id,
        owner_id=owner_id,
        principal=principal,
        annual_interest_rate=annual_rate,
        start_date=start_date,
        installment_count=terms.installment_count,
        periodic_payment=payment,
        end_date=terms.end_date,
        is_shared=is_shared,
        name=name,
    )
