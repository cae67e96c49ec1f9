from .notification import (
    ChannelPreferencesRead,
    EmailNotificationRequest,
    NotificationPageRead,
    NotificationPreferencesRead,
    NotificationRead,
    SmsNotificationRequest,
    UnreadCountRead,
)

__all__ = [
    "ChannelPreferencesRead",
    "EmailNotificationRequest",
    "NotificationPageRead",
    "NotificationPreferencesRead",
    "NotificationRead",
    "SmsNotificationRequest",
    "UnreadCountRead",
]
