"""Per-visitor page state and the three submission flows.

A ``PageState`` stands in for one mounted landing page: it keeps what the
visitor typed into the forms, the notifications waiting to be shown and the
guard that stops overlapping submissions. Nothing here is persisted; states
live in a bounded in-memory store keyed by an opaque cookie.
"""

from __future__ import annotations

import logging
import secrets
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Literal

from elitefitness.config import settings
from elitefitness.schemas.forms import (
    ContactRequest,
    MembershipPlan,
    MembershipRequest,
    NewsletterRequest,
)
from elitefitness.services.submissions import (
    FormKind,
    SubmissionGateway,
    SubmissionGuard,
    SubmissionOutcome,
)

logger = logging.getLogger(__name__)

PAGE_COOKIE_NAME = "ef_page"

CONTACT_FIELDS = ("name", "email", "phone", "message")


def empty_contact_draft() -> dict[str, str]:
    return {name: "" for name in CONTACT_FIELDS}


@dataclass(frozen=True)
class Notification:
    level: Literal["success", "error"]
    message: str

    @classmethod
    def from_outcome(cls, outcome: SubmissionOutcome) -> Notification:
        return cls("success" if outcome.ok else "error", outcome.message)


@dataclass
class PageState:
    guard: SubmissionGuard
    contact_draft: dict[str, str] = field(default_factory=empty_contact_draft)
    newsletter_draft: str = ""
    notifications: list[Notification] = field(default_factory=list)

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def pop_notifications(self) -> list[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def reset_contact(self) -> None:
        self.contact_draft = empty_contact_draft()

    def reset_newsletter(self) -> None:
        self.newsletter_draft = ""


class PageStateStore:
    """LRU-bounded mapping of visitor cookie -> ``PageState``."""

    def __init__(
        self,
        capacity: int | None = None,
        policy: Literal["shared", "per_form"] | None = None,
    ) -> None:
        self.capacity = capacity or settings.page_state_capacity
        self.policy = policy or settings.submission_policy
        self._states: OrderedDict[str, PageState] = OrderedDict()

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, key: object) -> bool:
        return key in self._states

    def get_or_create(self, key: str | None) -> tuple[str, PageState]:
        if key and key in self._states:
            self._states.move_to_end(key)
            return key, self._states[key]
        key = secrets.token_urlsafe(24)
        state = PageState(guard=SubmissionGuard(self.policy))
        self._states[key] = state
        while len(self._states) > self.capacity:
            if not self._evict_oldest_idle(keep=key):
                break
        return key, state

    def _evict_oldest_idle(self, keep: str) -> bool:
        # States with a request in flight are never evicted
        for candidate_key, candidate in self._states.items():
            if candidate_key != keep and not candidate.guard.any_busy:
                del self._states[candidate_key]
                return True
        return False

    def discard(self, key: str) -> None:
        self._states.pop(key, None)


# ==========================================
# Flows
# ==========================================
async def _run(
    page: PageState,
    kind: FormKind,
    send: Callable[[], Awaitable[SubmissionOutcome]],
) -> SubmissionOutcome | None:
    if not page.guard.try_begin(kind):
        logger.info("Submission ignored while busy", extra={"resource": kind})
        return None
    try:
        outcome = await send()
    finally:
        page.guard.finish(kind)
    page.notify(Notification.from_outcome(outcome))
    return outcome


async def submit_contact(
    page: PageState, gateway: SubmissionGateway, request: ContactRequest
) -> SubmissionOutcome | None:
    """Send the contact form. Clears the draft only on success."""
    outcome = await _run(page, "contact", lambda: gateway.submit_contact(request))
    if outcome is not None and outcome.ok:
        page.reset_contact()
    return outcome


async def subscribe_newsletter(
    page: PageState, gateway: SubmissionGateway, request: NewsletterRequest
) -> SubmissionOutcome | None:
    outcome = await _run(
        page, "newsletter", lambda: gateway.subscribe_newsletter(request)
    )
    if outcome is not None and outcome.ok:
        page.reset_newsletter()
    return outcome


async def request_membership(
    page: PageState,
    gateway: SubmissionGateway,
    plan: MembershipPlan,
    name: str | None,
    email: str | None,
    phone: str | None,
) -> SubmissionOutcome | None:
    """Send a membership inquiry from dialog answers.

    Any missing answer aborts silently: no request and no notification.
    """
    request = MembershipRequest.from_dialog(plan, name, email, phone)
    if request is None:
        return None
    return await _run(
        page, "membership", lambda: gateway.request_membership(request)
    )
