"""Logging, metrics and tracing setup."""

from __future__ import annotations

from elitefitness.observability.logging import SERVICE_NAME, configure_logging
from elitefitness.observability.metrics import (
    MetricsMiddleware,
    metrics_response,
    record_submission,
)
from elitefitness.observability.tracing import configure_tracing

__all__ = [
    "SERVICE_NAME",
    "MetricsMiddleware",
    "configure_logging",
    "configure_tracing",
    "metrics_response",
    "record_submission",
]
