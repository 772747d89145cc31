from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from elitefitness import content
from elitefitness.config import settings
from elitefitness.dependencies import load_page_state, set_page_cookie
from elitefitness.security import issue_csrf_token, limiter, set_csrf_cookie
from elitefitness.services.page_state import PageState
from elitefitness.services.reveal import RevealController
from elitefitness.services.submissions import FORM_KINDS
from elitefitness.staticfiles import templates

router = APIRouter(tags=["landing"])

BUTTON_LABELS = {
    "contact": ("Send Message", "Sending..."),
    "newsletter": ("Subscribe", "Subscribing..."),
}


def build_reveal_controller() -> RevealController:
    """Fresh visibility state for one rendered page."""
    controller = RevealController()
    controller.observe_all(content.animated_section_ids())
    if not settings.reveal_enabled:
        controller.reveal_all()
    return controller


def render_landing(
    request: Request,
    page_key: str,
    page: PageState,
    *,
    status_code: int = 200,
    form_errors: dict[str, str] | None = None,
    mobile_menu_open: bool = False,
) -> HTMLResponse:
    token = issue_csrf_token(request)
    busy = {
        kind: page.guard.is_busy(kind)
        for kind in FORM_KINDS
    }
    button_labels = {
        kind: labels[1] if busy[kind] else labels[0]
        for kind, labels in BUTTON_LABELS.items()
    }
    response = templates.TemplateResponse(
        request,
        "landing.html",
        {
            "csrf_token": token,
            "reveal": build_reveal_controller(),
            "notifications": page.pop_notifications(),
            "contact_draft": page.contact_draft,
            "newsletter_draft": page.newsletter_draft,
            "busy": busy,
            "button_labels": button_labels,
            "form_errors": form_errors or {},
            "mobile_menu_open": mobile_menu_open,
        },
        status_code=status_code,
    )
    set_csrf_cookie(response, token)
    set_page_cookie(response, page_key)
    return response


@router.get("/", response_class=HTMLResponse)
@limiter.limit("60/minute")
async def home(request: Request, menu: str | None = None) -> Response:
    accept_header = request.headers.get("accept", "")
    if "text/html" not in accept_header.lower():
        return JSONResponse(
            {
                "name": settings.site_name,
                "sections": [section_id for section_id, _ in content.NAV_LINKS],
                "plans": [
                    {"name": plan["name"], "price": plan["price"]}
                    for plan in content.PLANS
                ],
            }
        )

    page_key, page = load_page_state(request)
    return render_landing(
        request, page_key, page, mobile_menu_open=(menu == "open")
    )
