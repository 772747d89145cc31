from __future__ import annotations

from collections.abc import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Trainer and program photos are hot-linked from Unsplash
DEFAULT_CSP = [
    "default-src 'self'",
    "base-uri 'none'",
    "frame-ancestors 'none'",
    "img-src 'self' data: https://images.unsplash.com",
    "font-src 'self'",
    "connect-src 'self'",
    "script-src 'self'",
    "style-src 'self'",
    "form-action 'self'",
    "upgrade-insecure-requests",
]


def _is_secure_request(request: Request) -> bool:
    # Honor reverse proxy headers if present
    xf_proto = request.headers.get("x-forwarded-proto")
    if xf_proto:
        return "https" in xf_proto
    return request.url.scheme == "https"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Sets a hardened set of security headers on every response.
    - HTTPS-aware HSTS
    - Strict CSP (scripts and styles served from /static only)
    - Cross-origin protections
    - No caching of rendered HTML pages
    """

    def __init__(
        self,
        app,
        *,
        csp_directives: Iterable[str] | None = None,
        report_only: bool = False,
        hsts: str = "max-age=63072000; includeSubDomains",
        referrer_policy: str = "strict-origin-when-cross-origin",
        permissions_policy: str = "geolocation=(), microphone=(), camera=()",
        skip_hsts_hosts: set[str] | None = None,
        frame_options: str = "DENY",
        no_store_html: bool = True,
    ) -> None:
        super().__init__(app)
        self.csp_directives = list(csp_directives or DEFAULT_CSP)
        self.report_only = report_only
        self.hsts = hsts
        self.referrer_policy = referrer_policy
        self.permissions_policy = permissions_policy
        self.skip_hsts_hosts = skip_hsts_hosts or {"localhost", "127.0.0.1"}
        self.frame_options = frame_options
        self.no_store_html = no_store_html

    def build_csp(self) -> str:
        return "; ".join(self.csp_directives)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        csp_header = (
            "Content-Security-Policy-Report-Only"
            if self.report_only
            else "Content-Security-Policy"
        )
        response.headers.setdefault(csp_header, self.build_csp())

        if _is_secure_request(request):
            if request.url.hostname not in self.skip_hsts_hosts:
                response.headers.setdefault("Strict-Transport-Security", self.hsts)

        response.headers.setdefault("Referrer-Policy", self.referrer_policy)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", self.frame_options)
        response.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        response.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        if self.permissions_policy:
            response.headers.setdefault("Permissions-Policy", self.permissions_policy)

        # Rendered pages hold the visitor's form drafts and CSRF token
        content_type = response.headers.get("content-type", "")
        if self.no_store_html and content_type.startswith("text/html"):
            response.headers.setdefault("Cache-Control", "no-store")
        return response
