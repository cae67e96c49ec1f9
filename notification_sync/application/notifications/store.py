"""In-memory notification list and unread counter for one session."""

from __future__ import annotations

from typing import Iterable

from notification_sync.domain.entities import NotificationRecord


class NotificationStore:
    """Ordered (newest first) notification list plus the unread counter.

    ``unread_count`` is the server's cross-page total while each record's
    ``read`` flag only describes the loaded page, so the two may disagree.

    Readers use the properties. Only :class:`NotificationReconciler` calls the
    mutators.
    """

    def __init__(self) -> None:
        self._items: list[NotificationRecord] = []
        self._unread_count = 0
        self._current_page = 1
        self._total_pages = 1
        self._total = 0
        self._loading = False

    @property
    def items(self) -> tuple[NotificationRecord, ...]:
        return tuple(self._items)

    @property
    def unread_count(self) -> int:
        return self._unread_count

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def total(self) -> int:
        return self._total

    @property
    def loading(self) -> bool:
        return self._loading

    def get(self, notification_id: str) -> NotificationRecord | None:
        for record in self._items:
            if record.id == notification_id:
                return record
        return None

    def index_of(self, notification_id: str) -> int | None:
        for index, record in enumerate(self._items):
            if record.id == notification_id:
                return index
        return None

    def __len__(self) -> int:
        return len(self._items)

    # Mutators

    def replace_page(
        self,
        records: Iterable[NotificationRecord],
        *,
        current_page: int,
        total_pages: int,
        total: int,
    ) -> None:
        """Replace the loaded page, keeping the first record for each id."""

        unique: list[NotificationRecord] = []
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                continue
            seen.add(record.id)
            unique.append(record)
        self._items = unique
        self._current_page = current_page
        self._total_pages = total_pages
        self._total = total

    def reset_page(self) -> None:
        self.replace_page((), current_page=1, total_pages=1, total=0)

    def prepend(self, record: NotificationRecord) -> bool:
        """Insert ``record`` at the top.

        Returns ``False`` when a record with the same id was already loaded, in
        which case it is replaced in place.
        """

        index = self.index_of(record.id)
        if index is not None:
            self._items[index] = record
            return False
        self._items.insert(0, record)
        return True

    def insert(self, index: int, record: NotificationRecord) -> None:
        if self.index_of(record.id) is not None:
            return
        self._items.insert(min(index, len(self._items)), record)

    def replace(self, record: NotificationRecord) -> NotificationRecord | None:
        """Swap the stored record with the same id; return the previous one."""

        index = self.index_of(record.id)
        if index is None:
            return None
        previous = self._items[index]
        self._items[index] = record
        return previous

    def remove(self, notification_id: str) -> tuple[int, NotificationRecord] | None:
        index = self.index_of(notification_id)
        if index is None:
            return None
        return index, self._items.pop(index)

    def mark_all_read(self) -> None:
        self._items = [record.as_read() for record in self._items]

    def set_unread_count(self, count: int) -> None:
        self._unread_count = max(0, count)

    def increment_unread(self) -> None:
        self._unread_count += 1

    def decrement_unread(self) -> None:
        self._unread_count = max(0, self._unread_count - 1)

    def set_loading(self, loading: bool) -> None:
        self._loading = loading

    def clear(self) -> None:
        self.reset_page()
        self._unread_count = 0
        self._loading = False


__all__ = ["NotificationStore"]
