from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from notification_sync.domain.entities import DeliveryFrequency, NotificationType
from notification_sync.interfaces.api.schemas import (
    NotificationPageRead,
    NotificationPreferencesRead,
    NotificationRead,
    SmsNotificationRequest,
)


def test_notification_read_accepts_service_field_names():
    payload = {
        "_id": "n1",
        "recipient": {"_id": "u1", "name": "Ana"},
        "type": "BID",
        "title": None,
        "message": "New bid",
        "link": "/projects/p1/bids",
        "read": False,
        "createdAt": "2024-05-02T10:00:00.000Z",
        "__v": 0,
    }

    record = NotificationRead.model_validate(payload).to_entity()

    assert record.id == "n1"
    assert record.recipient_id == "u1"
    assert record.type is NotificationType.BID
    assert record.title == ""
    assert record.created_at == datetime(2024, 5, 2, 10, 0, tzinfo=timezone.utc)


def test_unknown_type_and_bad_timestamp_are_tolerated():
    record = NotificationRead.model_validate(
        {"id": 7, "recipientId": "u1", "type": "payment", "createdAt": "yesterday"}
    ).to_entity()

    assert record.id == "7"
    assert record.type is NotificationType.OTHER
    assert record.created_at is None


@pytest.mark.parametrize(
    "payload",
    [
        {"recipient": "u1"},
        {"_id": "", "recipient": "u1"},
        {"_id": "n1"},
        {"_id": "n1", "recipient": {"name": "no id"}},
    ],
)
def test_notification_read_requires_identifiers(payload):
    with pytest.raises(ValidationError):
        NotificationRead.model_validate(payload)


def test_page_defaults_for_missing_or_zero_counters():
    page = NotificationPageRead.model_validate(
        {"notifications": [], "totalPages": 0, "currentPage": None}
    ).to_entity()

    assert (page.total_pages, page.current_page, page.total) == (1, 1, 0)


def test_page_requires_notification_list():
    with pytest.raises(ValidationError):
        NotificationPageRead.model_validate({"totalPages": 2})


def test_preferences_keep_defaults_for_missing_channels():
    preferences = NotificationPreferencesRead.model_validate(
        {"inApp": {"enabled": False, "types": {"messages": True}}, "email": {"frequency": "weekly"}}
    ).to_entity()

    assert preferences.in_app.enabled is False
    assert preferences.email.frequency is DeliveryFrequency.WEEKLY
    assert preferences.sms.types["verification"] is True


def test_sms_request_serializes_with_wire_names():
    request = SmsNotificationRequest(recipientId="u2", message="hello")

    assert request.model_dump(by_alias=True) == {"recipientId": "u2", "message": "hello"}
