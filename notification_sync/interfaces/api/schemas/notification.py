"""Pydantic models describing notification service payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from notification_sync.domain.entities import (
    ChannelPreferences,
    DeliveryFrequency,
    NotificationPage,
    NotificationPreferences,
    NotificationRecord,
    NotificationType,
)
from notification_sync.utils import parse_timestamp


def _coerce_identifier(value: Any) -> Any:
    """Reduce populated references (``{"_id": ...}``) and numbers to strings."""

    if isinstance(value, dict):
        value = value.get("_id", value.get("id"))
    if isinstance(value, (int, str)) and not isinstance(value, bool):
        text = str(value).strip()
        if text:
            return text
    raise ValueError("identifier must be a non-empty string")


class NotificationRead(BaseModel):
    """Representation of a notification as delivered by REST or push."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    recipient_id: str = Field(
        validation_alias=AliasChoices("recipient", "recipientId", "recipient_id")
    )
    type: NotificationType = NotificationType.OTHER
    title: str = ""
    message: str = ""
    link: str | None = None
    read: bool = False
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )

    @field_validator("id", "recipient_id", mode="before")
    @classmethod
    def _normalize_identifier(cls, value: Any) -> str:
        return _coerce_identifier(value)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> NotificationType:
        return NotificationType.parse(value)

    @field_validator("title", "message", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    def to_entity(self) -> NotificationRecord:
        return NotificationRecord(
            id=self.id,
            recipient_id=self.recipient_id,
            type=self.type,
            title=self.title,
            message=self.message,
            link=self.link,
            read=self.read,
            created_at=self.created_at,
        )


class NotificationPageRead(BaseModel):
    """Response of ``GET /notifications``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    notifications: list[NotificationRead]
    total_pages: int = Field(default=1, validation_alias=AliasChoices("totalPages", "total_pages"))
    current_page: int = Field(
        default=1, validation_alias=AliasChoices("currentPage", "current_page")
    )
    total: int = 0

    @field_validator("total_pages", "current_page", mode="before")
    @classmethod
    def _default_page_number(cls, value: Any) -> Any:
        return value or 1

    @field_validator("total", mode="before")
    @classmethod
    def _default_total(cls, value: Any) -> Any:
        return value or 0

    def to_entity(self) -> NotificationPage:
        return NotificationPage(
            notifications=tuple(item.to_entity() for item in self.notifications),
            total_pages=self.total_pages,
            current_page=self.current_page,
            total=self.total,
        )


class UnreadCountRead(BaseModel):
    """Response of ``GET /notifications/unread-count``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    unread_count: int = Field(
        ge=0, validation_alias=AliasChoices("unreadCount", "unread_count")
    )


class ChannelPreferencesRead(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    types: dict[str, bool] = Field(default_factory=dict)
    frequency: DeliveryFrequency | None = None

    def to_entity(self) -> ChannelPreferences:
        return ChannelPreferences(
            enabled=self.enabled, types=dict(self.types), frequency=self.frequency
        )


class NotificationPreferencesRead(BaseModel):
    """Preferences echoed by ``PUT /notifications/preferences``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: ChannelPreferencesRead | None = None
    sms: ChannelPreferencesRead | None = None
    in_app: ChannelPreferencesRead | None = Field(
        default=None, validation_alias=AliasChoices("inApp", "in_app")
    )

    def to_entity(self) -> NotificationPreferences:
        """Return domain preferences, keeping defaults for missing channels."""

        preferences = NotificationPreferences()
        if self.email is not None:
            preferences.email = self.email.to_entity()
        if self.sms is not None:
            preferences.sms = self.sms.to_entity()
        if self.in_app is not None:
            preferences.in_app = self.in_app.to_entity()
        return preferences


class EmailNotificationRequest(BaseModel):
    """Payload used to ask the service to email a user."""

    model_config = ConfigDict(populate_by_name=True)

    recipient_id: str = Field(alias="recipientId", min_length=1)
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class SmsNotificationRequest(BaseModel):
    """Payload used to ask the service to text a user."""

    model_config = ConfigDict(populate_by_name=True)

    recipient_id: str = Field(alias="recipientId", min_length=1)
    message: str = Field(min_length=1)


__all__ = [
    "ChannelPreferencesRead",
    "EmailNotificationRequest",
    "NotificationPageRead",
    "NotificationPreferencesRead",
    "NotificationRead",
    "SmsNotificationRequest",
    "UnreadCountRead",
]
