"""Client configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

MutationFailurePolicy = Literal["keep-optimistic", "rollback"]


class Settings(BaseSettings):
    """Client configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    api_base_url: str = Field(
        default="http://localhost:5001",
        description="Base URL of the SkillSwap API server",
        min_length=1,
    )
    notifications_path: str = Field(
        default="/notifications",
        description="Path of the notification service relative to the API base URL",
    )
    push_url: str | None = Field(
        default=None,
        description="Socket.IO endpoint for realtime pushes; defaults to the API base URL",
    )
    push_transports: list[str] = Field(
        default_factory=lambda: ["websocket", "polling"],
        description="Transports offered to the Socket.IO server, in order of preference",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every REST request",
        gt=0,
    )
    push_connect_timeout_seconds: float = Field(
        default=5.0,
        description="How long to wait for the push channel handshake",
        gt=0,
    )
    default_page_size: int = Field(
        default=20,
        description="Page size used when fetching notifications without an explicit limit",
        ge=1,
        le=100,
    )
    mutation_failure_policy: MutationFailurePolicy = Field(
        default="keep-optimistic",
        description=(
            "What to do with optimistic local changes when the server rejects a "
            "mark-read, mark-all-read or delete request"
        ),
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to group notifications by calendar day",
    )

    @field_validator("notifications_path")
    @classmethod
    def _validate_notifications_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("NOTIFICATIONS_PATH must start with '/'")
        return value.rstrip("/") or "/"

    @property
    def resolved_push_url(self) -> str:
        """Return the push endpoint, falling back to the API base URL."""

        return self.push_url or self.api_base_url


@lru_cache
def get_settings() -> Settings:
    """Return cached client settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["MutationFailurePolicy", "Settings", "get_settings", "reset_settings_cache"]
