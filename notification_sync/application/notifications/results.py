"""Result objects returned by notification operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from notification_sync.domain.entities import NotificationRecord
from notification_sync.infrastructure.notifications.errors import (
    ErrorKind,
    NotificationServiceError,
)

INACTIVE_SESSION_MESSAGE = "No active session"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a mutation or count request."""

    success: bool
    data: Any = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, exc: NotificationServiceError) -> "OperationResult":
        return cls(success=False, error=exc.message, error_kind=exc.kind)

    @classmethod
    def inactive(cls) -> "OperationResult":
        return cls(success=False, error=INACTIVE_SESSION_MESSAGE, error_kind="inactive")


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a page fetch.

    ``stale`` is set when a newer fetch was issued while this one was in flight;
    stale results were not applied to the store.
    """

    notifications: tuple[NotificationRecord, ...] = ()
    total_pages: int = 1
    current_page: int = 1
    total: int = 0
    error: str | None = None
    error_kind: ErrorKind | None = None
    stale: bool = False

    @property
    def success(self) -> bool:
        return self.error is None


__all__ = ["FetchResult", "INACTIVE_SESSION_MESSAGE", "OperationResult"]
