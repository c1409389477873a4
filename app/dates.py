"""
Calendar-day helpers.

Every value that stands for a calendar day (subscription bounds, pause days,
diet days, follow-up dates) goes through ``normalize_date`` so that all of them
are read in the single canonical timezone from settings.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from app.config import settings

DateInput = Union[date, datetime, str, None]


def canonical_tz() -> ZoneInfo:
    return ZoneInfo(settings.canonical_timezone)


def utcnow() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_date(value: DateInput = None) -> date:
    """
    Reduce a date-like value to its calendar day in the canonical timezone.

    - ``None`` means now.
    - Naive datetimes are taken to already be in the canonical timezone.
    - Aware datetimes are converted to the canonical timezone first.
    - Strings are parsed (ISO dates and datetimes) and then treated as above.
    """
    if value is None:
        value = utcnow()
    if isinstance(value, str):
        try:
            value = date_parser.isoparse(value.strip())
        except ValueError as e:
            raise ValueError(f"Invalid date: {value!r}") from e
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(canonical_tz())
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Cannot normalize {type(value).__name__} to a date")


def today(now: Optional[datetime] = None) -> date:
    return normalize_date(now)


def add_months(day: date, months: int) -> date:
    """Calendar-month arithmetic; day-of-month is clamped to the target month's end."""
    return day + relativedelta(months=months)


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def whole_days_between(start: DateInput, end: DateInput) -> int:
    """Number of whole calendar days from ``start`` to ``end``; never negative."""
    delta = (normalize_date(end) - normalize_date(start)).days
    return max(delta, 0)
