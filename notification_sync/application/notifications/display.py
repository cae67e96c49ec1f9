"""Read-only helpers for presenting the notification list."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from notification_sync.domain.entities import NotificationRecord, NotificationType, UserRole
from notification_sync.utils import local_day

from .reconciler import NotificationReconciler

NOTIFICATION_ICONS: Mapping[NotificationType, str] = {
    NotificationType.PROJECT: "clipboard",
    NotificationType.BID: "currency-dollar",
    NotificationType.MESSAGE: "chat-bubble",
    NotificationType.REVIEW: "star",
    NotificationType.VERIFICATION: "shield-check",
    NotificationType.OTHER: "bell",
}

NOTIFICATIONS_ROUTE = "/notifications"

_FILTER_ALL = "all"
_FILTER_UNREAD = "unread"
_FILTER_READ = "read"


def icon_for(notification_type: NotificationType) -> str:
    return NOTIFICATION_ICONS[notification_type]


def is_navigable(link: str | None) -> bool:
    """``None``, blank and ``"#"`` links do not lead anywhere."""

    if link is None:
        return False
    link = link.strip()
    return bool(link) and link != "#"


def resolve_link(record: NotificationRecord, role: UserRole | None) -> str:
    """Rewrite the service's generic link into the route for ``role``.

    Reviews open the user's own profile, project and bid links open the
    role-scoped project pages, and ``/profile`` / ``/dashboard`` map to the
    role's home pages. Anything else is returned unchanged.
    """

    link = (record.link or "").strip()
    if not link:
        return NOTIFICATIONS_ROUTE

    if link.startswith("/reviews/"):
        if role in (UserRole.CLIENT, UserRole.FREELANCER):
            return f"/{role.value}/profile"
        return NOTIFICATIONS_ROUTE

    if link.startswith("/projects/"):
        parts = link.split("/")
        project_id = parts[2]
        if len(parts) > 3 and parts[3] == "bids":
            if role is UserRole.CLIENT:
                return f"/client/projects/{project_id}/bids"
            return f"/freelancer/projects/{project_id}"
        if role is not None:
            return f"/{role.value}/projects/{project_id}"
        return link

    if link.startswith("/messages/"):
        return link

    if link in ("/profile", "/dashboard"):
        if role in (UserRole.CLIENT, UserRole.FREELANCER):
            return f"/{role.value}{link}"
        return "/admin/dashboard"

    return link


def group_by_day(
    records: Iterable[NotificationRecord],
) -> list[tuple[date | None, list[NotificationRecord]]]:
    """Group records by local calendar day, newest day first.

    Order inside a day is preserved. Records without a timestamp are
    collected in a final ``None`` group.
    """

    groups: dict[date | None, list[NotificationRecord]] = {}
    for record in records:
        groups.setdefault(local_day(record.created_at), []).append(record)

    dated = sorted((day for day in groups if day is not None), reverse=True)
    ordered: list[tuple[date | None, list[NotificationRecord]]] = [
        (day, groups[day]) for day in dated
    ]
    if None in groups:
        ordered.append((None, groups[None]))
    return ordered


def filter_notifications(
    records: Iterable[NotificationRecord], selection: str = _FILTER_ALL
) -> list[NotificationRecord]:
    """Apply the list filter: ``all``, ``unread``, ``read`` or a category."""

    if selection == _FILTER_ALL:
        return list(records)
    if selection == _FILTER_UNREAD:
        return [record for record in records if not record.read]
    if selection == _FILTER_READ:
        return [record for record in records if record.read]
    try:
        category = NotificationType(selection)
    except ValueError:
        return []
    return [record for record in records if record.type is category]


async def open_notification(
    reconciler: NotificationReconciler,
    record: NotificationRecord,
    role: UserRole | None,
) -> str | None:
    """Return the route to open for ``record``, marking it read on the way.

    Non-navigable records return ``None`` and leave the store untouched.
    """

    if not is_navigable(record.link):
        return None
    if not record.read:
        await reconciler.mark_as_read(record.id)
    return resolve_link(record, role)


__all__ = [
    "NOTIFICATION_ICONS",
    "NOTIFICATIONS_ROUTE",
    "filter_notifications",
    "group_by_day",
    "icon_for",
    "is_navigable",
    "open_notification",
    "resolve_link",
]
