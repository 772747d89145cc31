from __future__ import annotations

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import ValidationError

from elitefitness import content
from elitefitness.dependencies import get_gateway, load_page_state, set_page_cookie
from elitefitness.routers.landing import render_landing
from elitefitness.schemas.forms import (
    ContactRequest,
    MembershipPlan,
    NewsletterRequest,
)
from elitefitness.security import (
    issue_csrf_token,
    limiter,
    set_csrf_cookie,
    validate_csrf,
)
from elitefitness.services import page_state as flows
from elitefitness.staticfiles import templates

router = APIRouter(tags=["forms"])


def _errors_text(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        messages.append(f"{field}: {error['msg']}")
    return "; ".join(messages)


def _back_to(anchor: str, page_key: str) -> RedirectResponse:
    # POST-Redirect-GET; notifications render on the next page load
    response = RedirectResponse(
        url=f"/#{anchor}", status_code=status.HTTP_303_SEE_OTHER
    )
    set_page_cookie(response, page_key)
    return response


def _resolve_plan(plan: str) -> MembershipPlan:
    match = content.get_plan(plan)
    if match is None:
        raise HTTPException(status_code=404, detail="Unknown membership plan")
    return MembershipPlan(match["name"])


@router.post("/contact", response_class=HTMLResponse)
@limiter.limit("5/minute")
async def submit_contact(
    request: Request,
    name: str = Form(default=""),
    email: str = Form(default=""),
    phone: str = Form(default=""),
    message: str = Form(default=""),
    csrf_token: str = Form(default=""),
) -> Response:
    validate_csrf(request, csrf_token)
    page_key, page = load_page_state(request)
    # A submit while busy must leave the saved draft alone
    if page.guard.is_busy("contact"):
        return _back_to("contact", page_key)
    page.contact_draft = {
        "name": name,
        "email": email,
        "phone": phone,
        "message": message,
    }

    try:
        contact = ContactRequest(name=name, email=email, phone=phone, message=message)
    except ValidationError as exc:
        return render_landing(
            request,
            page_key,
            page,
            status_code=422,
            form_errors={"contact": _errors_text(exc)},
        )

    await flows.submit_contact(page, get_gateway(request), contact)
    return _back_to("contact", page_key)


@router.post("/newsletter", response_class=HTMLResponse)
@limiter.limit("5/minute")
async def submit_newsletter(
    request: Request,
    email: str = Form(default=""),
    csrf_token: str = Form(default=""),
) -> Response:
    validate_csrf(request, csrf_token)
    page_key, page = load_page_state(request)
    if page.guard.is_busy("newsletter"):
        return _back_to("newsletter", page_key)
    page.newsletter_draft = email

    try:
        subscription = NewsletterRequest(email=email.strip())
    except ValidationError as exc:
        return render_landing(
            request,
            page_key,
            page,
            status_code=422,
            form_errors={"newsletter": _errors_text(exc)},
        )

    await flows.subscribe_newsletter(page, get_gateway(request), subscription)
    return _back_to("newsletter", page_key)


@router.get("/membership/{plan}", response_class=HTMLResponse)
@limiter.limit("30/minute")
async def membership_dialog(request: Request, plan: str) -> Response:
    """Collect name, email and phone for a plan inquiry."""
    selected = _resolve_plan(plan)
    page_key, page = load_page_state(request)
    token = issue_csrf_token(request)
    response = templates.TemplateResponse(
        request,
        "membership.html",
        {
            "plan": content.get_plan(selected.value),
            "csrf_token": token,
            "busy": page.guard.is_busy("membership"),
        },
    )
    set_csrf_cookie(response, token)
    set_page_cookie(response, page_key)
    return response


@router.post("/membership", response_class=HTMLResponse)
@limiter.limit("5/minute")
async def submit_membership(
    request: Request,
    plan: str = Form(default=""),
    name: str = Form(default=""),
    email: str = Form(default=""),
    phone: str = Form(default=""),
    csrf_token: str = Form(default=""),
) -> Response:
    validate_csrf(request, csrf_token)
    selected = _resolve_plan(plan)
    page_key, page = load_page_state(request)
    await flows.request_membership(
        page, get_gateway(request), selected, name, email, phone
    )
    return _back_to("pricing", page_key)
