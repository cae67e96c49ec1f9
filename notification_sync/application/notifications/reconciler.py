"""Merge pulled pages and pushed events into the notification store."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from notification_sync.config import MutationFailurePolicy
from notification_sync.domain.entities import NotificationRecord, UserSession
from notification_sync.infrastructure.notifications import (
    NotificationApiClient,
    NotificationServiceError,
)
from notification_sync.interfaces.api.schemas import NotificationRead

from .results import INACTIVE_SESSION_MESSAGE, FetchResult, OperationResult
from .store import NotificationStore

logger = logging.getLogger(__name__)


class NotificationReconciler:
    """Single writer of a :class:`NotificationStore`.

    Every public coroutine resolves to a result object instead of raising for
    service failures. User actions apply their local change before the first
    network round trip. What happens to that change when the service rejects
    the request depends on ``failure_policy``: ``keep-optimistic`` leaves it in
    place, ``rollback`` restores the previous state.

    Page fetches are tagged with a generation number so that a slow response
    never overwrites the result of a fetch issued after it.
    """

    def __init__(
        self,
        store: NotificationStore,
        api_client: NotificationApiClient,
        user_session: UserSession,
        *,
        default_page_size: int = 20,
        failure_policy: MutationFailurePolicy = "keep-optimistic",
    ) -> None:
        self._store = store
        self._api = api_client
        self._user_id = user_session.user_id
        self._default_page_size = default_page_size
        self._failure_policy = failure_policy
        self._active = True
        self._fetch_generation = 0
        self._count_generation = 0
        self._pushed_unread = 0
        self._last_page = 1
        self._last_page_size = default_page_size

    @property
    def store(self) -> NotificationStore:
        return self._store

    @property
    def active(self) -> bool:
        return self._active

    @property
    def failure_policy(self) -> MutationFailurePolicy:
        return self._failure_policy

    def deactivate(self) -> None:
        """Stop applying results; in-flight responses are discarded."""

        self._active = False

    async def fetch_notifications(
        self, page: int = 1, page_size: int | None = None
    ) -> FetchResult:
        """Load ``page`` and replace the stored list with it.

        A failed fetch empties the list and resets pagination to page 1.
        ``unread_count`` is left untouched either way.
        """

        if not self._active:
            return FetchResult(error=INACTIVE_SESSION_MESSAGE, error_kind="inactive")

        limit = page_size or self._default_page_size
        if page < 1 or limit < 1:
            raise ValueError("page and page_size must be positive")

        self._fetch_generation += 1
        generation = self._fetch_generation
        self._last_page, self._last_page_size = page, limit
        self._store.set_loading(True)
        logger.debug("Fetching notifications for user %s page=%s limit=%s", self._user_id, page, limit)

        try:
            result = await self._api.list_notifications(page, limit)
        except NotificationServiceError as exc:
            if not self._is_latest_fetch(generation):
                logger.debug("Ignoring failure of superseded fetch #%s", generation)
                return FetchResult(error=exc.message, error_kind=exc.kind, stale=True)
            logger.warning("Error fetching notifications: %s", exc.message)
            self._store.reset_page()
            self._store.set_loading(False)
            return FetchResult(error=exc.message, error_kind=exc.kind)

        if not self._is_latest_fetch(generation):
            logger.debug("Discarding response of superseded fetch #%s", generation)
            return FetchResult(
                notifications=result.notifications,
                total_pages=result.total_pages,
                current_page=result.current_page,
                total=result.total,
                stale=True,
            )

        self._store.replace_page(
            result.notifications,
            current_page=result.current_page,
            total_pages=result.total_pages,
            total=result.total,
        )
        self._store.set_loading(False)
        logger.debug(
            "Loaded %s notifications (page %s of %s, %s total)",
            len(self._store),
            result.current_page,
            result.total_pages,
            result.total,
        )
        return FetchResult(
            notifications=self._store.items,
            total_pages=result.total_pages,
            current_page=result.current_page,
            total=result.total,
        )

    async def fetch_unread_count(self) -> OperationResult:
        """Replace ``unread_count`` with the service's cross-page total."""

        if not self._active:
            return OperationResult.inactive()

        self._count_generation += 1
        generation = self._count_generation
        try:
            count = await self._api.get_unread_count()
        except NotificationServiceError as exc:
            logger.warning("Error fetching unread count: %s", exc.message)
            return OperationResult.failed(exc)

        if not self._active:
            return OperationResult.inactive()
        if generation == self._count_generation:
            self._store.set_unread_count(count)
        return OperationResult.ok(count)

    async def mark_as_read(self, notification_id: str) -> OperationResult:
        if not self._active:
            return OperationResult.inactive()

        previous = self._store.get(notification_id)
        if previous is not None and not previous.read:
            self._store.replace(previous.as_read())

        try:
            ack = await self._api.mark_as_read(notification_id)
        except NotificationServiceError as exc:
            logger.warning("Error marking notification %s as read: %s", notification_id, exc.message)
            if self._should_rollback() and previous is not None and not previous.read:
                current = self._store.get(notification_id)
                if current is not None and current.read:
                    self._store.replace(previous)
            return OperationResult.failed(exc)

        await self.fetch_unread_count()
        return OperationResult.ok(ack)

    async def mark_all_as_read(self) -> OperationResult:
        if not self._active:
            return OperationResult.inactive()

        snapshot = {record.id: record for record in self._store.items if not record.read}
        snapshot_count = self._store.unread_count
        pushed_before = self._pushed_unread
        self._store.mark_all_read()
        self._store.set_unread_count(0)

        try:
            ack = await self._api.mark_all_as_read()
        except NotificationServiceError as exc:
            logger.warning("Error marking all notifications as read: %s", exc.message)
            if self._should_rollback():
                for record in snapshot.values():
                    current = self._store.get(record.id)
                    if current is not None and current.read:
                        self._store.replace(record)
                self._store.set_unread_count(
                    snapshot_count + self._pushed_unread - pushed_before
                )
            return OperationResult.failed(exc)

        await self.fetch_notifications(self._last_page, self._last_page_size)
        return OperationResult.ok(ack)

    async def delete_notification(self, notification_id: str) -> OperationResult:
        if not self._active:
            return OperationResult.inactive()

        removed = self._store.remove(notification_id)
        decremented = False
        if removed is not None and not removed[1].read:
            decremented = self._store.unread_count > 0
            self._store.decrement_unread()

        try:
            ack = await self._api.delete_notification(notification_id)
        except NotificationServiceError as exc:
            logger.warning("Error deleting notification %s: %s", notification_id, exc.message)
            if self._should_rollback() and removed is not None:
                index, record = removed
                self._store.insert(index, record)
                if decremented:
                    self._store.increment_unread()
            return OperationResult.failed(exc)

        return OperationResult.ok(ack)

    def apply_push(self, payload: Any) -> NotificationRecord | None:
        """Apply a pushed notification; return the stored record or ``None``.

        Payloads addressed to another user and payloads that do not describe a
        notification are dropped.
        """

        if not self._active:
            return None

        try:
            record = NotificationRead.model_validate(payload).to_entity()
        except ValidationError:
            logger.warning("Dropping malformed notification push: %r", payload)
            return None

        if record.recipient_id != self._user_id:
            logger.debug("Dropping push %s addressed to %s", record.id, record.recipient_id)
            return None

        if self._store.prepend(record) and not record.read:
            self._store.increment_unread()
            self._pushed_unread += 1
        return record

    def _is_latest_fetch(self, generation: int) -> bool:
        return self._active and generation == self._fetch_generation

    def _should_rollback(self) -> bool:
        return self._active and self._failure_policy == "rollback"


__all__ = ["NotificationReconciler"]
