"""Service and realtime transports for notifications."""

from .api_client import NotificationApiClient
from .errors import (
    MalformedResponseError,
    NotificationResponseError,
    NotificationServiceError,
    NotificationTransportError,
)
from .push_channel import NOTIFICATION_EVENT, PushChannel, default_client_factory

__all__ = [
    "MalformedResponseError",
    "NOTIFICATION_EVENT",
    "NotificationApiClient",
    "NotificationResponseError",
    "NotificationServiceError",
    "NotificationTransportError",
    "PushChannel",
    "default_client_factory",
]
