"""Domain entities describing notification delivery preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeliveryFrequency(str, Enum):
    IMMEDIATE = "immediate"
    DAILY = "daily"
    WEEKLY = "weekly"


def _email_types() -> dict[str, bool]:
    return {
        "projectUpdates": True,
        "bidUpdates": True,
        "messages": True,
        "reviews": True,
        "verification": True,
        "payments": True,
        "marketing": False,
        "systemUpdates": True,
        "disputes": True,
    }


def _sms_types() -> dict[str, bool]:
    return {
        "projectUpdates": False,
        "bidUpdates": False,
        "messages": False,
        "verification": True,
        "payments": False,
        "systemUpdates": False,
        "disputes": True,
    }


def _in_app_types() -> dict[str, bool]:
    return {
        "projectUpdates": True,
        "bidUpdates": True,
        "messages": True,
        "reviews": True,
        "verification": True,
        "payments": True,
        "systemUpdates": True,
        "disputes": True,
    }


@dataclass
class ChannelPreferences:
    """Delivery settings for one channel (email, SMS or in-app)."""

    enabled: bool
    types: dict[str, bool] = field(default_factory=dict)
    frequency: DeliveryFrequency | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"enabled": self.enabled, "types": dict(self.types)}
        if self.frequency is not None:
            payload["frequency"] = self.frequency.value
        return payload


@dataclass
class NotificationPreferences:
    """Per-channel notification preferences of a user."""

    email: ChannelPreferences = field(
        default_factory=lambda: ChannelPreferences(
            enabled=True, types=_email_types(), frequency=DeliveryFrequency.IMMEDIATE
        )
    )
    sms: ChannelPreferences = field(
        default_factory=lambda: ChannelPreferences(
            enabled=False, types=_sms_types(), frequency=DeliveryFrequency.IMMEDIATE
        )
    )
    in_app: ChannelPreferences = field(
        default_factory=lambda: ChannelPreferences(enabled=True, types=_in_app_types())
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation expected by the service."""

        return {
            "email": self.email.to_payload(),
            "sms": self.sms.to_payload(),
            "inApp": self.in_app.to_payload(),
        }


__all__ = ["ChannelPreferences", "DeliveryFrequency", "NotificationPreferences"]
