"""Notification store, reconciliation and session lifecycle."""

from .display import (
    NOTIFICATION_ICONS,
    filter_notifications,
    group_by_day,
    icon_for,
    is_navigable,
    open_notification,
    resolve_link,
)
from .outbound import NotificationOutbox
from .reconciler import NotificationReconciler
from .results import FetchResult, OperationResult
from .session import NotificationSession, SessionState
from .store import NotificationStore

__all__ = [
    "FetchResult",
    "NOTIFICATION_ICONS",
    "NotificationOutbox",
    "NotificationReconciler",
    "NotificationSession",
    "NotificationStore",
    "OperationResult",
    "SessionState",
    "filter_notifications",
    "group_by_day",
    "icon_for",
    "is_navigable",
    "open_notification",
    "resolve_link",
]
