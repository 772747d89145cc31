"""
FastAPI Application - Elite Fitness landing site
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from elitefitness.config import settings
from elitefitness.middleware.security import SecurityHeadersMiddleware
from elitefitness.observability import (
    SERVICE_NAME,
    MetricsMiddleware,
    configure_logging,
    configure_tracing,
)
from elitefitness.routers.forms import router as forms_router
from elitefitness.routers.landing import router as landing_router
from elitefitness.routers.system import router as system_router
from elitefitness.security import limiter
from elitefitness.services.page_state import PageStateStore
from elitefitness.services.submissions import SubmissionGateway
from elitefitness.staticfiles import CachedStaticFiles, templates
from elitefitness.utils.assets import STATIC_PREFIX

logger = logging.getLogger(__name__)

configure_logging(settings.log_level)


# ==========================================
# Application Lifespan
# ==========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.backend_url:
        logger.warning("BACKEND_URL is not set; form submissions will fail")
    app.state.gateway = SubmissionGateway()
    app.state.page_states = PageStateStore()
    logger.info(
        "Site started",
        extra={
            "environment": settings.environment,
            "submission_policy": settings.submission_policy,
        },
    )
    try:
        yield
    finally:
        await app.state.gateway.aclose()
        logger.info("Site stopped")


# ==========================================
# Error pages
# ==========================================
def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "").lower()


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    logger.warning("Rate limit hit", extra={"path": request.url.path})
    if _wants_html(request):
        return HTMLResponse(
            "<h2>Slow down</h2><p>Too many requests. Please retry shortly.</p>",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
    return JSONResponse(
        {"detail": "Rate limit exceeded. Please retry shortly."},
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Branded 404 page for browsers, JSON for everything else."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and _wants_html(request):
        return templates.TemplateResponse(
            request, "404.html", {}, status_code=status.HTTP_404_NOT_FOUND
        )
    return JSONResponse(
        {"detail": exc.detail},
        status_code=exc.status_code,
        headers=exc.headers,
    )


# ==========================================
# FastAPI Application
# ==========================================
app = FastAPI(
    title=settings.site_name,
    description="Gym landing page and form relay",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None,
    openapi_url=None if settings.is_production else "/openapi.json",
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)

# Last added is outermost
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Accept", "Content-Type"],
    )

if settings.enable_tracing:
    configure_tracing(
        app,
        SERVICE_NAME,
        settings.otlp_endpoint,
        settings.otlp_headers,
        environment=settings.environment,
    )

app.mount(STATIC_PREFIX, CachedStaticFiles(), name="static")
app.include_router(system_router)
app.include_router(landing_router)
app.include_router(forms_router)
