from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from course_attendance.common.datetime_utils import normalize_lecture_date, normalize_optional_date
from course_attendance.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-01",
        "2024-01-01T00:00:00",
        "2024-01-01T23:59:59.123",
        "2024-01-01T10:00:00Z",
        "2024-01-01T10:00:00+05:30",
        "2024-01-01 08:30:00",
        date(2024, 1, 1),
        datetime(2024, 1, 1, 18, 0),
        datetime(2024, 1, 1, 18, 0, tzinfo=timezone(timedelta(hours=-3))),
    ],
)
def test_normalizes_to_calendar_date(value):
    assert normalize_lecture_date(value) == date(2024, 1, 1)


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2024-02-30", "2024/01/01", 123, None])
def test_rejects_malformed_dates(value):
    with pytest.raises(ValidationError):
        normalize_lecture_date(value)


def test_optional_date_allows_missing():
    assert normalize_optional_date(None, "fromDate") is None
    assert normalize_optional_date("", "fromDate") is None
    assert normalize_optional_date("2024-03-04", "fromDate") == date(2024, 3, 4)
