"""Security façade for CSRF and rate limiting."""

from .csrf import (  # noqa: F401
    CSRF_COOKIE_NAME,
    issue_csrf_token,
    make_csrf_token,
    set_csrf_cookie,
    validate_csrf,
)
from .rate_limit import limiter  # noqa: F401

__all__ = [
    "CSRF_COOKIE_NAME",
    "issue_csrf_token",
    "make_csrf_token",
    "set_csrf_cookie",
    "validate_csrf",
    "limiter",
]
