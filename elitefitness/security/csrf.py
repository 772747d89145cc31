"""Double-submit cookie CSRF protection for the landing page forms.

Tokens look like ``<nonce>.<signature>``; the signature is an HMAC-SHA256 of
the nonce keyed with ``settings.csrf_secret``. A form post is accepted when the
hidden ``csrf_token`` field (or the ``X-CSRF-Token`` header) equals the cookie
and carries a valid signature, so a cookie planted from elsewhere is rejected.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

from fastapi import HTTPException, Request, Response, status

from elitefitness.config import settings

CSRF_COOKIE_NAME = "ef_csrf"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_COOKIE_MAX_AGE = 60 * 60 * 12


def _signature(nonce: str) -> str:
    return hmac.new(
        settings.csrf_secret.encode(), nonce.encode(), hashlib.sha256
    ).hexdigest()


def make_csrf_token(nonce: str | None = None) -> str:
    nonce = nonce or secrets.token_urlsafe(24)
    return f"{nonce}.{_signature(nonce)}"


def is_signed(token: str) -> bool:
    nonce, separator, signature = token.partition(".")
    if not (nonce and separator):
        return False
    return hmac.compare_digest(signature, _signature(nonce))


def issue_csrf_token(request: Request) -> str:
    """Token for the page being rendered; reuses a valid cookie token."""
    token: str | None = getattr(request.state, "csrf_token", None)
    if token:
        return token
    incoming = request.cookies.get(CSRF_COOKIE_NAME)
    token = incoming if incoming and is_signed(incoming) else make_csrf_token()
    request.state.csrf_token = token
    return token


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        secure=not settings.debug,
        httponly=True,
        samesite="strict",
        max_age=CSRF_COOKIE_MAX_AGE,
    )


def validate_csrf(request: Request, token: str | None) -> bool:
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    candidate = token or request.headers.get(CSRF_HEADER_NAME)
    if (
        not cookie_token
        or not candidate
        or not hmac.compare_digest(cookie_token, candidate)
        or not is_signed(candidate)
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Invalid CSRF token."
        )
    return True
