"""Lifecycle of the notification client for one signed-in user."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

import anyio

from notification_sync.config import Settings, get_settings
from notification_sync.domain.entities import UserSession
from notification_sync.infrastructure.notifications import NotificationApiClient, PushChannel
from notification_sync.infrastructure.security import session_from_token

from .outbound import NotificationOutbox
from .reconciler import NotificationReconciler
from .store import NotificationStore

logger = logging.getLogger(__name__)

ApiClientFactory = Callable[[Settings, UserSession], NotificationApiClient]
ChannelFactory = Callable[[Settings, UserSession], PushChannel]


class SessionState(str, Enum):
    INACTIVE = "inactive"
    ACTIVATING = "activating"
    ACTIVE = "active"


def default_api_client_factory(settings: Settings, user_session: UserSession) -> NotificationApiClient:
    return NotificationApiClient.from_settings(settings, user_session.token)


def default_channel_factory(settings: Settings, user_session: UserSession) -> PushChannel:
    return PushChannel(
        settings.resolved_push_url,
        user_session.token,
        transports=settings.push_transports,
        connect_timeout=settings.push_connect_timeout_seconds,
    )


class NotificationSession:
    """Own the store, REST client and push channel of the active user.

    ``start`` moves the session through ``ACTIVATING`` to ``ACTIVE``: it opens
    the push channel and performs the initial pull (first page plus unread
    count) concurrently. ``stop`` tears everything down and returns to
    ``INACTIVE``. Starting a new user session first stops the previous one, so
    at most one push channel is ever open.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        api_client_factory: ApiClientFactory = default_api_client_factory,
        channel_factory: ChannelFactory = default_channel_factory,
    ) -> None:
        self._settings = settings or get_settings()
        self._api_client_factory = api_client_factory
        self._channel_factory = channel_factory
        self._state = SessionState.INACTIVE
        self._user_session: UserSession | None = None
        self._store: NotificationStore | None = None
        self._api_client: NotificationApiClient | None = None
        self._reconciler: NotificationReconciler | None = None
        self._outbox: NotificationOutbox | None = None
        self._channel: PushChannel | None = None

    async def __aenter__(self) -> "NotificationSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user_session(self) -> UserSession | None:
        return self._user_session

    @property
    def store(self) -> NotificationStore:
        if self._store is None:
            raise RuntimeError("Notification session is not active")
        return self._store

    @property
    def reconciler(self) -> NotificationReconciler:
        if self._reconciler is None:
            raise RuntimeError("Notification session is not active")
        return self._reconciler

    @property
    def outbox(self) -> NotificationOutbox:
        if self._outbox is None:
            raise RuntimeError("Notification session is not active")
        return self._outbox

    async def start(self, user_session: UserSession) -> None:
        """Activate the client for ``user_session``."""

        if not user_session.is_ready():
            raise ValueError("A user id and a token are required to start a session")
        if self._state is not SessionState.INACTIVE:
            await self.stop()

        self._state = SessionState.ACTIVATING
        self._user_session = user_session
        store = NotificationStore()
        api_client = self._api_client_factory(self._settings, user_session)
        reconciler = NotificationReconciler(
            store,
            api_client,
            user_session,
            default_page_size=self._settings.default_page_size,
            failure_policy=self._settings.mutation_failure_policy,
        )
        channel = self._channel_factory(self._settings, user_session)
        channel.on_notification(reconciler.apply_push)

        self._store = store
        self._api_client = api_client
        self._reconciler = reconciler
        self._outbox = NotificationOutbox(api_client)
        self._channel = channel
        logger.info("Starting notification session for user %s", user_session.user_id)

        try:
            async with anyio.create_task_group() as task_group:
                task_group.start_soon(channel.open)
                task_group.start_soon(
                    reconciler.fetch_notifications, 1, self._settings.default_page_size
                )
                task_group.start_soon(reconciler.fetch_unread_count)
        except BaseException:
            await self.stop()
            raise

        if self._reconciler is reconciler:
            self._state = SessionState.ACTIVE

    async def start_with_token(self, token: str, *, role: str | None = None) -> None:
        """Activate the client for the user identified by ``token``."""

        await self.start(session_from_token(token, role=role))

    async def stop(self) -> None:
        """Close the push channel and discard the session state. Idempotent."""

        if self._state is SessionState.INACTIVE and self._reconciler is None:
            return

        reconciler, self._reconciler = self._reconciler, None
        outbox, self._outbox = self._outbox, None
        channel, self._channel = self._channel, None
        api_client, self._api_client = self._api_client, None
        store = self._store
        user_session, self._user_session = self._user_session, None
        self._state = SessionState.INACTIVE

        if reconciler is not None:
            reconciler.deactivate()
        if outbox is not None:
            outbox.deactivate()
        if channel is not None:
            await channel.close()
        if api_client is not None:
            await api_client.aclose()
        if store is not None:
            store.clear()
        logger.info(
            "Stopped notification session for user %s",
            user_session.user_id if user_session else None,
        )


__all__ = [
    "ApiClientFactory",
    "ChannelFactory",
    "NotificationSession",
    "SessionState",
    "default_api_client_factory",
    "default_channel_factory",
]
