"""Domain entities representing user notifications."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Closed set of notification categories."""

    PROJECT = "project"
    BID = "bid"
    MESSAGE = "message"
    REVIEW = "review"
    VERIFICATION = "verification"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> "NotificationType":
        """Return the category for ``value``, mapping unknown tags to ``OTHER``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class NotificationRecord:
    """Information message delivered to a specific user."""

    id: str
    recipient_id: str
    type: NotificationType
    title: str
    message: str
    link: str | None = None
    read: bool = False
    created_at: datetime | None = None

    def as_read(self) -> "NotificationRecord":
        """Return a copy of the record flagged as read."""

        if self.read:
            return self
        return replace(self, read=True)


@dataclass(frozen=True)
class NotificationPage:
    """One page of notifications as reported by the service."""

    notifications: tuple[NotificationRecord, ...]
    total_pages: int = 1
    current_page: int = 1
    total: int = 0


__all__ = ["NotificationPage", "NotificationRecord", "NotificationType"]
