from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, EmailStr, ValidationInfo, field_validator

MAX_NAME_LENGTH = 120
MAX_PHONE_LENGTH = 40
MAX_MESSAGE_LENGTH = 4000

_FIELD_LIMITS: dict[str, int] = {
    "name": MAX_NAME_LENGTH,
    "phone": MAX_PHONE_LENGTH,
    "message": MAX_MESSAGE_LENGTH,
}


def _validate_text_field(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be empty")
    value = value.strip()
    limit = _FIELD_LIMITS[field_name]
    if len(value) > limit:
        raise ValueError(f"{field_name} too long")
    return value


class MembershipPlan(str, Enum):
    BASIC = "Basic"
    PRO = "Pro"
    ELITE = "Elite"


class ContactRequest(BaseModel):
    name: str
    email: EmailStr
    phone: str = ""
    message: str

    @field_validator("name", "message")
    @classmethod
    def validate_text_fields(cls, value: str, info: ValidationInfo) -> str:
        return _validate_text_field(value, info.field_name)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str:
        value = (value or "").strip()
        if len(value) > MAX_PHONE_LENGTH:
            raise ValueError("phone too long")
        return value


class NewsletterRequest(BaseModel):
    email: EmailStr


class MembershipRequest(BaseModel):
    """Inquiry for a plan; contact fields are only checked for presence."""

    name: str
    email: str
    phone: str
    plan: MembershipPlan

    @field_validator("name", "email", "phone")
    @classmethod
    def require_value(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @classmethod
    def from_dialog(
        cls,
        plan: MembershipPlan,
        name: str | None,
        email: str | None,
        phone: str | None,
    ) -> MembershipRequest | None:
        """Build a request from dialog answers, or None if any is missing."""
        answers = [(value or "").strip() for value in (name, email, phone)]
        if not all(answers):
            return None
        name, email, phone = answers
        return cls(name=name, email=email, phone=phone, plan=plan)

    def payload(self) -> dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "plan": self.plan.value,
        }
