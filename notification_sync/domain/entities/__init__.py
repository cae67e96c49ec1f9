"""Domain entities exposed by the client."""

from .notification import NotificationPage, NotificationRecord, NotificationType
from .preferences import (
    ChannelPreferences,
    DeliveryFrequency,
    NotificationPreferences,
)
from .session import UserRole, UserSession

__all__ = [
    "ChannelPreferences",
    "DeliveryFrequency",
    "NotificationPage",
    "NotificationPreferences",
    "NotificationRecord",
    "NotificationType",
    "UserRole",
    "UserSession",
]
