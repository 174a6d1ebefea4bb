"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from budget_engine.config import settings


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter adding timestamp, level and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structured JSON logging on the root logger, at settings.log_level by default"""
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_dashboard_computed(
    user_id: str,
    collaborator_count: int,
    active_credit_count: int,
    obligation_count: int,
    dropped_rows: int,
    duration_ms: float,
) -> None:
    """Log a structured summary of one dashboard computation"""
    logging.getLogger("budget_engine.dashboard").info(
        "Dashboard computed",
        extra={
            "user_id": user_id,
            "step": "dashboard_complete",
            "collaborator_count": collaborator_count,
            "active_credit_count": active_credit_count,
            "obligation_count": obligation_count,
            "dropped_rows": dropped_rows,
            "duration_ms": duration_ms,
        },
    )
