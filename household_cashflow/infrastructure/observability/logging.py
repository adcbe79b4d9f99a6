"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from household_cashflow.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_strategy_comparison(
    request_id: str,
    price_cents: int,
    available_count: int,
    best_strategy: str | None,
    duration_ms: float,
) -> None:
    """Log structured purchase comparison outcome for analysis"""
    logging.info(
        "Strategy comparison completed",
        extra={
            "request_id": request_id,
            "step": "strategies_complete",
            "price_cents": price_cents,
            "available_strategies": available_count,
            "best_strategy": best_strategy,
            "duration_ms": duration_ms,
        },
    )


def log_safe_to_spend(request_id: str, safe_to_spend_cents: int, days_until_pay: int) -> None:
    """Log pay-cycle outcome, flagging overcommitted cycles"""
    level = logging.WARNING if safe_to_spend_cents < 0 else logging.INFO
    logging.log(
        level,
        "Safe to spend computed",
        extra={
            "request_id": request_id,
            "step": "safe_to_spend_complete",
            "safe_to_spend_cents": safe_to_spend_cents,
            "days_until_pay": days_until_pay,
        },
    )
