"""Liveness, readiness and Prometheus endpoints."""

from __future__ import annotations

import secrets

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from elitefitness.config import settings
from elitefitness.observability import metrics_response

router = APIRouter(tags=["system"])

basic_auth = HTTPBasic(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Basic"},
    )


def require_metrics_auth(
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
) -> None:
    """Guard /metrics with HTTP Basic once METRICS_PASSWORD is set."""
    if not settings.metrics_password:
        return
    if credentials is None:
        raise _unauthorized("Not authenticated")
    # Compare both fields so timing does not reveal which one was wrong
    username_ok = secrets.compare_digest(
        credentials.username.encode(), settings.metrics_username.encode()
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode(), settings.metrics_password.encode()
    )
    if not (username_ok and password_ok):
        raise _unauthorized("Invalid credentials")


@router.get("/healthz", summary="Health check")
async def health_check(request: Request) -> dict[str, str]:
    body = {"status": "healthy"}
    if not settings.is_production:
        body["version"] = request.app.version
    return body


@router.get("/readyz", summary="Readiness check")
async def readiness_check() -> dict[str, str]:
    """Ready once there is a backend to relay form submissions to."""
    if not settings.backend_url:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="backend URL not configured",
        )
    body = {"status": "ready"}
    if not settings.is_production:
        body["backend"] = settings.backend_url
    return body


@router.get(
    "/metrics",
    include_in_schema=False,
    dependencies=[Depends(require_metrics_auth)],
)
def metrics():
    return metrics_response()
