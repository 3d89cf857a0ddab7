"""Structured JSON logging for batch runs"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from roommates.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_estimate(
    usage_period: str,
    outcome: str,
    r_squared: Optional[float] = None,
    mape: Optional[float] = None,
    shared_minor: Optional[int] = None,
) -> None:
    """Log structured shared-cost estimation outcome"""
    logging.getLogger("roommates.estimation").info(
        "Shared cost estimation completed",
        extra={
            "step": "estimate_shared_cost",
            "usage_period": usage_period,
            "outcome": outcome,
            "r_squared": r_squared,
            "mape": mape,
            "shared_minor": shared_minor,
        },
    )


def log_invoice_run(
    bill_count: int,
    roommate_count: int,
    currency: Optional[str],
    total_minor: int,
    duration_ms: float,
) -> None:
    """Log structured invoice run outcome"""
    logging.getLogger("roommates.invoices").info(
        "Invoices generated",
        extra={
            "step": "invoice_run_complete",
            "bill_count": bill_count,
            "roommate_count": roommate_count,
            "currency": currency,
            "total_minor": total_minor,
            "duration_ms": duration_ms,
        },
    )
