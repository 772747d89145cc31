"""Request-scoped accessors for objects created in the app lifespan."""

from __future__ import annotations

from fastapi import Request, Response

from elitefitness.config import settings
from elitefitness.services.page_state import (
    PAGE_COOKIE_NAME,
    PageState,
    PageStateStore,
)
from elitefitness.services.submissions import SubmissionGateway


def get_gateway(request: Request) -> SubmissionGateway:
    return request.app.state.gateway


def get_page_store(request: Request) -> PageStateStore:
    return request.app.state.page_states


def load_page_state(request: Request) -> tuple[str, PageState]:
    store = get_page_store(request)
    return store.get_or_create(request.cookies.get(PAGE_COOKIE_NAME))


def set_page_cookie(response: Response, key: str) -> None:
    # Session cookie: the state goes away with the browser session
    response.set_cookie(
        PAGE_COOKIE_NAME,
        key,
        secure=not settings.debug,
        httponly=True,
        samesite="lax",
    )
