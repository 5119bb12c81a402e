"""Structured JSON logging for the insights service"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from revelation_gateway.config import settings

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Adds UTC timestamp, level and service name to every record"""

    def __init__(self, *args, service: str = settings.service_name, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service


def setup_logging(level: str = "INFO") -> None:
    """Route all records through one JSON handler on stdout"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_insights_pass(
    request_id: str,
    user_id: str,
    step: str,
    insight_count: int,
    overall_score: Optional[int],
    duration_ms: float,
) -> None:
    """One structured line per served insights/score/complete request"""
    logging.getLogger("revelation_gateway.insights").info(
        "Insights pass completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": step,
            "insight_count": insight_count,
            "overall_score": overall_score,
            "duration_ms": round(duration_ms, 2),
        },
    )
