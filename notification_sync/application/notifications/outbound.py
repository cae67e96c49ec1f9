"""Requests that ask the service to notify users or change preferences."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from notification_sync.domain.entities import NotificationPreferences
from notification_sync.infrastructure.notifications import (
    NotificationApiClient,
    NotificationServiceError,
)
from notification_sync.interfaces.api.schemas import (
    EmailNotificationRequest,
    SmsNotificationRequest,
)

from .results import OperationResult

logger = logging.getLogger(__name__)


class NotificationOutbox:
    """Send email/SMS notification requests on behalf of the active session."""

    def __init__(self, api_client: NotificationApiClient) -> None:
        self._api = api_client
        self._active = True

    def deactivate(self) -> None:
        self._active = False

    async def send_email(self, recipient_id: str, subject: str, message: str) -> OperationResult:
        if not self._active:
            return OperationResult.inactive()
        try:
            request = EmailNotificationRequest(
                recipient_id=recipient_id, subject=subject, message=message
            )
        except ValidationError as exc:
            raise ValueError("recipient_id, subject and message are required") from exc

        try:
            ack = await self._api.send_email(request)
        except NotificationServiceError as exc:
            logger.warning("Error sending email notification to %s: %s", recipient_id, exc.message)
            return OperationResult.failed(exc)
        return OperationResult.ok(ack)

    async def send_sms(self, recipient_id: str, message: str) -> OperationResult:
        if not self._active:
            return OperationResult.inactive()
        try:
            request = SmsNotificationRequest(recipient_id=recipient_id, message=message)
        except ValidationError as exc:
            raise ValueError("recipient_id and message are required") from exc

        try:
            ack = await self._api.send_sms(request)
        except NotificationServiceError as exc:
            logger.warning("Error sending SMS notification to %s: %s", recipient_id, exc.message)
            return OperationResult.failed(exc)
        return OperationResult.ok(ack)

    async def update_preferences(self, preferences: NotificationPreferences) -> OperationResult:
        """Save ``preferences``; ``data`` holds the server's copy when echoed."""

        if not self._active:
            return OperationResult.inactive()
        try:
            saved = await self._api.update_preferences(preferences)
        except NotificationServiceError as exc:
            logger.warning("Error updating notification preferences: %s", exc.message)
            return OperationResult.failed(exc)
        return OperationResult.ok(saved)


__all__ = ["NotificationOutbox"]
