"""REST client for the SkillSwap notification service."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from notification_sync.config import Settings
from notification_sync.domain.entities import NotificationPage, NotificationPreferences
from notification_sync.interfaces.api.schemas import (
    EmailNotificationRequest,
    NotificationPageRead,
    NotificationPreferencesRead,
    SmsNotificationRequest,
    UnreadCountRead,
)

from .errors import (
    MalformedResponseError,
    NotificationResponseError,
    NotificationTransportError,
)

logger = logging.getLogger(__name__)


def _extract_error_message(response: httpx.Response) -> str:
    """Return a human readable description for an unsuccessful response."""

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

    if response.reason_phrase:
        return response.reason_phrase
    return f"Request failed with status {response.status_code}"


class NotificationApiClient:
    """Thin async wrapper over the notification endpoints.

    Every method raises a :class:`~.errors.NotificationServiceError` subclass on
    failure; callers decide how to surface it.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        notifications_path: str = "/notifications",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._prefix = notifications_path.rstrip("/")
        self._clock = clock
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        token: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "NotificationApiClient":
        return cls(
            settings.api_base_url,
            token,
            notifications_path=settings.notifications_path,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    async def list_notifications(self, page: int, limit: int) -> NotificationPage:
        params = {"page": page, "limit": limit, "_": int(self._clock() * 1000)}
        data = await self._request("GET", "", params=params)
        page_read = self._parse(NotificationPageRead, data)
        return page_read.to_entity()

    async def get_unread_count(self) -> int:
        data = await self._request("GET", "/unread-count")
        return self._parse(UnreadCountRead, data).unread_count

    async def mark_as_read(self, notification_id: str) -> Any:
        return await self._request("PUT", f"/{quote(notification_id, safe='')}/read")

    async def mark_all_as_read(self) -> Any:
        return await self._request("PUT", "/read-all", json={})

    async def delete_notification(self, notification_id: str) -> Any:
        return await self._request("DELETE", f"/{quote(notification_id, safe='')}")

    async def update_preferences(
        self, preferences: NotificationPreferences
    ) -> NotificationPreferences | None:
        data = await self._request("PUT", "/preferences", json=preferences.to_payload())
        if not isinstance(data, dict) or not data.get("preferences"):
            return None
        return self._parse(NotificationPreferencesRead, data["preferences"]).to_entity()

    async def send_email(self, request: EmailNotificationRequest) -> Any:
        return await self._request("POST", "/email", json=request.model_dump(by_alias=True))

    async def send_sms(self, request: SmsNotificationRequest) -> Any:
        return await self._request("POST", "/sms", json=request.model_dump(by_alias=True))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._prefix}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed without a response: %s", method, url, exc)
            raise NotificationTransportError() from exc

        if not response.is_success:
            message = _extract_error_message(response)
            logger.warning(
                "%s %s responded with status %s: %s",
                method,
                url,
                response.status_code,
                message,
            )
            raise NotificationResponseError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"{method} {url} returned a non-JSON body") from exc

    @staticmethod
    def _parse(model: type[BaseModel], data: Any) -> Any:
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object for {model.__name__}, got {type(data).__name__}"
            )
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Unexpected {model.__name__} payload: {exc.error_count()} invalid field(s)"
            ) from exc


__all__ = ["NotificationApiClient"]
