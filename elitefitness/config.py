"""Application settings."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration entrypoint for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    site_name: str = "Elite Fitness"

    # Server
    base_url: str = "http://127.0.0.1:8000"
    allowed_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Observability
    log_level: str = "INFO"
    enable_tracing: bool = False
    otlp_endpoint: str | None = None
    otlp_headers: str | None = None

    # Metrics endpoint authentication
    metrics_username: str = "prometheus"
    metrics_password: str | None = None

    # Backend API receiving form submissions
    backend_url: str = Field(
        default="",
        validation_alias=AliasChoices("BACKEND_URL", "REACT_APP_BACKEND_URL"),
    )
    # None means no timeout: a sent request runs to completion or failure
    backend_timeout: float | None = None

    # Form submissions
    submission_policy: Literal["shared", "per_form"] = "shared"
    page_state_capacity: int = 1024

    # Presentation
    reveal_enabled: bool = True

    # CSRF Protection
    csrf_secret: str = Field(
        default="dev-csrf-secret-change-me",
        validation_alias=AliasChoices("CSRF_SECRET", "CSRF_SECRET_KEY"),
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize ALLOWED_ORIGINS env input into a list."""
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in raw.split(",") if item.strip()]
        return []

    @field_validator("backend_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def is_production(self) -> bool:
        """Return True when running in production."""
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Expose allowed CORS origins for middleware wiring."""
        return self.allowed_origins


settings = Settings()
