from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def normalize_lecture_date(value: DateLike, field_name: str = "date") -> date:
    """Reduce a date, datetime or ISO string to a date-only value.

    A lecture is identified by its calendar date, so any time-of-day part
    (including a trailing ``Z`` or UTC offset) is dropped.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is not a valid date")

    text = value.strip()
    try:
        return parse_iso_date(text) if len(text) == 10 else _parse_iso_datetime(text).date()
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date: {value!r}")


def normalize_optional_date(value: Optional[DateLike], field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return normalize_lecture_date(value, field_name)


def _parse_iso_datetime(text: str) -> datetime:
    # fromisoformat() only accepts a trailing "Z" from 3.11 on.
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
