"""Prometheus metrics for page traffic and relayed form submissions."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Literal

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

SubmissionResult = Literal["success", "rejected", "error"]

# Requests that match no route share one label to keep cardinality bounded
UNMATCHED_PATH = "<unmatched>"
UNTRACKED_PREFIXES = ("/static/", "/metrics")

REQUEST_COUNTER = Counter(
    "elitefitness_request_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "elitefitness_request_duration_seconds",
    "HTTP request latency",
    ["method", "path"],
)
FORM_SUBMISSIONS = Counter(
    "elitefitness_form_submissions_total",
    "Form submissions relayed to the backend API",
    ["resource", "outcome"],
)
SUBMISSION_LATENCY = Histogram(
    "elitefitness_backend_request_duration_seconds",
    "Time spent waiting on the backend API",
    ["resource"],
)
DEPLOY_TIMESTAMP = Gauge(
    "elitefitness_deploy_timestamp_seconds",
    "Unix timestamp of current deployment (set on startup)",
)

DEPLOY_TIMESTAMP.set_to_current_time()


def record_submission(
    resource: str, outcome: SubmissionResult, duration: float
) -> None:
    FORM_SUBMISSIONS.labels(resource, outcome).inc()
    SUBMISSION_LATENCY.labels(resource).observe(duration)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count and time page and form requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith(UNTRACKED_PREFIXES):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start
        route = request.scope.get("route")
        path_template = getattr(route, "path", UNMATCHED_PATH)
        REQUEST_COUNTER.labels(
            request.method, path_template, response.status_code
        ).inc()
        REQUEST_LATENCY.labels(request.method, path_template).observe(duration)
        return response


def metrics_response() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
