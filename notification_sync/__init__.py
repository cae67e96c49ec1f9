"""Realtime notification synchronization client for SkillSwap.

The public entry point is :class:`NotificationSession`, which owns the push
channel, the REST client and the notification store for one signed-in user.
"""

from notification_sync.application.notifications import (
    FetchResult,
    NotificationReconciler,
    NotificationSession,
    NotificationStore,
    OperationResult,
    SessionState,
)
from notification_sync.domain.entities import (
    NotificationPreferences,
    NotificationRecord,
    NotificationType,
    UserSession,
)

__all__ = [
    "FetchResult",
    "NotificationPreferences",
    "NotificationReconciler",
    "NotificationRecord",
    "NotificationSession",
    "NotificationStore",
    "NotificationType",
    "OperationResult",
    "SessionState",
    "UserSession",
]
