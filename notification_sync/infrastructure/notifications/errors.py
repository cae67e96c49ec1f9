"""Errors raised while talking to the notification service."""

from __future__ import annotations

from typing import Literal

ErrorKind = Literal["network", "server", "malformed", "inactive"]

NO_RESPONSE_MESSAGE = "No response from server"


class NotificationServiceError(Exception):
    """Base error for failed notification service calls."""

    kind: ErrorKind = "server"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotificationTransportError(NotificationServiceError):
    """The request never produced a response (refused, timed out, reset)."""

    kind: ErrorKind = "network"

    def __init__(self, message: str = NO_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class NotificationResponseError(NotificationServiceError):
    """The service answered with a non-2xx status."""

    kind: ErrorKind = "server"

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(NotificationServiceError):
    """The service answered 2xx with a body we cannot interpret."""

    kind: ErrorKind = "malformed"


__all__ = [
    "ErrorKind",
    "MalformedResponseError",
    "NO_RESPONSE_MESSAGE",
    "NotificationResponseError",
    "NotificationServiceError",
    "NotificationTransportError",
]
