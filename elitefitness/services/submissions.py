"""Outbound form submissions to the backend API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from elitefitness.config import settings
from elitefitness.observability.metrics import record_submission
from elitefitness.schemas.forms import (
    ContactRequest,
    MembershipRequest,
    NewsletterRequest,
)

logger = logging.getLogger(__name__)

FormKind = Literal["contact", "newsletter", "membership"]
FORM_KINDS: tuple[FormKind, ...] = ("contact", "newsletter", "membership")

SUCCESS_MESSAGES: dict[str, str] = {
    "contact": "Message sent successfully! We'll get back to you soon.",
    "newsletter": "Successfully subscribed to newsletter!",
    "membership": "Membership inquiry submitted! We'll contact you soon.",
}
FAILURE_MESSAGES: dict[str, str] = {
    "contact": "Failed to send message. Please try again.",
    "newsletter": "Failed to subscribe. Please try again.",
    "membership": "Failed to submit inquiry. Please try again.",
}


# ==========================================
# Outcomes
# ==========================================
@dataclass(frozen=True)
class Success:
    kind: FormKind
    message: str

    ok = True


@dataclass(frozen=True)
class Failure:
    kind: FormKind
    reason: str
    status_code: int | None = None

    ok = False

    @property
    def message(self) -> str:
        return self.reason


SubmissionOutcome = Success | Failure


# ==========================================
# In-flight guard
# ==========================================
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Submitting:
    kind: FormKind


SubmissionState = Idle | Submitting

IDLE = Idle()


class SubmissionGuard:
    """Tracks in-flight submissions for one page.

    With the ``shared`` policy a single slot covers all three forms, so while
    any request is outstanding every other submit is a no-op. ``per_form``
    gives each form its own slot.

    ``try_begin`` never awaits, so check-and-set is atomic on the event loop.
    """

    def __init__(self, policy: Literal["shared", "per_form"] = "shared") -> None:
        if policy not in ("shared", "per_form"):
            raise ValueError(f"unknown submission policy: {policy!r}")
        self.policy = policy
        self._slots: dict[str, SubmissionState] = {}

    def _slot(self, kind: FormKind) -> str:
        return "*" if self.policy == "shared" else kind

    def state(self, kind: FormKind) -> SubmissionState:
        return self._slots.get(self._slot(kind), IDLE)

    def is_busy(self, kind: FormKind) -> bool:
        return isinstance(self.state(kind), Submitting)

    @property
    def any_busy(self) -> bool:
        return any(isinstance(state, Submitting) for state in self._slots.values())

    def try_begin(self, kind: FormKind) -> bool:
        if self.is_busy(kind):
            return False
        self._slots[self._slot(kind)] = Submitting(kind)
        return True

    def finish(self, kind: FormKind) -> None:
        self._slots[self._slot(kind)] = IDLE


# ==========================================
# Gateway
# ==========================================
def _failure_detail(response: httpx.Response) -> str | None:
    try:
        body: Any = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
    return None


class SubmissionGateway:
    """POST form payloads to ``{base_url}/api/{resource}``.

    Every failure is final: nothing is retried or queued.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        base = settings.backend_url if base_url is None else base_url
        self.base_url = base.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.backend_timeout,
            follow_redirects=True,
        )

    def endpoint(self, resource: FormKind) -> str:
        return f"{self.base_url}/api/{resource}"

    async def submit_contact(self, request: ContactRequest) -> SubmissionOutcome:
        payload = {
            "name": request.name,
            "email": str(request.email),
            "phone": request.phone,
            "message": request.message,
        }
        return await self._post("contact", payload)

    async def subscribe_newsletter(
        self, request: NewsletterRequest
    ) -> SubmissionOutcome:
        return await self._post(
            "newsletter", {"email": str(request.email)}, use_detail=True
        )

    async def request_membership(
        self, request: MembershipRequest
    ) -> SubmissionOutcome:
        return await self._post("membership", request.payload())

    async def _post(
        self, kind: FormKind, payload: dict[str, str], use_detail: bool = False
    ) -> SubmissionOutcome:
        url = self.endpoint(kind)
        start = time.perf_counter()
        try:
            response = await self.client.post(url, json=payload)
        except httpx.HTTPError as exc:
            elapsed = time.perf_counter() - start
            logger.warning(
                "Form submission failed",
                extra={"resource": kind, "error": type(exc).__name__},
            )
            record_submission(kind, "error", elapsed)
            return Failure(kind, FAILURE_MESSAGES[kind])

        elapsed = time.perf_counter() - start
        if response.is_success:
            logger.info(
                "Form submitted",
                extra={"resource": kind, "status_code": response.status_code},
            )
            record_submission(kind, "success", elapsed)
            return Success(kind, SUCCESS_MESSAGES[kind])

        logger.warning(
            "Backend rejected form submission",
            extra={"resource": kind, "status_code": response.status_code},
        )
        record_submission(kind, "rejected", elapsed)
        reason = FAILURE_MESSAGES[kind]
        if use_detail:
            reason = _failure_detail(response) or reason
        return Failure(kind, reason, response.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
