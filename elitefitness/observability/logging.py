"""JSON logging for the site.

Every record carries the request correlation id. Form payload fields are
scrubbed from ``extra`` so visitor details never reach the log stream.
"""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any

from asgi_correlation_id.context import correlation_id
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "elitefitness-site"
REDACTED = "[redacted]"
# ``name`` and ``message`` are reserved LogRecord attributes and cannot be passed
PERSONAL_FIELDS = frozenset({"email", "phone", "payload"})

# Loggers that would otherwise print with their own handlers
ROUTED_LOGGERS = ("uvicorn.error", "uvicorn.access", "httpx")


class CorrelationIdFilter(logging.Filter):
    """Attach the current request correlation ID to each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or "unknown"
        return True


class PersonalDataFilter(logging.Filter):
    """Mask contact details passed to a logger through ``extra``."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in record.__dict__.keys() & PERSONAL_FIELDS:
            setattr(record, field, REDACTED)
        return True


def build_logging_config(level: str = "INFO") -> dict[str, Any]:
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "with_correlation": {"()": CorrelationIdFilter},
            "redact_personal": {"()": PersonalDataFilter},
        },
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                "rename_fields": {"levelname": "level", "name": "logger"},
                "static_fields": {"service": SERVICE_NAME},
            }
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "json",
                "filters": ["with_correlation", "redact_personal"],
            }
        },
        "root": {"handlers": ["stdout"], "level": level},
        "loggers": {
            name: {"handlers": ["stdout"], "level": level, "propagate": False}
            for name in ROUTED_LOGGERS
        },
    }


def configure_logging(level: str = "INFO") -> None:
    dictConfig(build_logging_config(level))
