"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from invoice_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with time, level and service"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_payment_outcome(
    request_id: str,
    reference: str,
    amount: Decimal,
    message: str,
    applied: bool,
    duration_ms: float,
) -> None:
    """Log one processed payment"""
    logging.info(
        "Payment processed",
        extra={
            "request_id": request_id,
            "reference": reference,
            "step": "payment_complete",
            "amount": str(amount),
            "outcome": message,
            "applied": applied,
            "duration_ms": duration_ms,
        },
    )
