from datetime import datetime, timedelta, timezone

import pytest

from notification_sync.utils import ensure_app_timezone, parse_timestamp


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-05-02T10:00:00Z", datetime(2024, 5, 2, 10, tzinfo=timezone.utc)),
        ("2024-05-02T10:00:00.250Z", datetime(2024, 5, 2, 10, 0, 0, 250000, tzinfo=timezone.utc)),
        ("2024-05-02T12:00:00+02:00", datetime(2024, 5, 2, 10, tzinfo=timezone.utc)),
        ("2024-05-02T10:00:00", datetime(2024, 5, 2, 10, tzinfo=timezone.utc)),
        ("", None),
        ("not a date", None),
        (1714644000, None),
        (None, None),
    ],
)
def test_parse_timestamp(value, expected):
    assert parse_timestamp(value) == expected


def test_naive_values_are_treated_as_utc():
    localized = ensure_app_timezone(datetime(2024, 5, 2, 10))

    assert localized.utcoffset() == timedelta(0)
    assert localized.hour == 10
    assert ensure_app_timezone(None) is None
