"""Date range filtering and selection helpers."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Protocol, TypeVar

from kbju_dashboard.domain.stats import DateRange


class Dated(Protocol):
    """Anything carrying a calendar date."""

    @property
    def date(self) -> date: ...


RecordT = TypeVar("RecordT", bound=Dated)


class RangePreset(str, Enum):
    """Quick date range choices."""

    LAST_7_DAYS = "last-7-days"
    LAST_14_DAYS = "last-14-days"
    CURRENT_WEEK = "current-week"
    LAST_WEEK = "last-week"
    ALL = "all"


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def filter_by_date_range(
    records: Sequence[RecordT],
    start: date | datetime | None = None,
    end: date | datetime | None = None,
) -> list[RecordT]:
    """Return records whose date lies within the inclusive range."""
    start_day = _as_date(start)
    end_day = _as_date(end)
    return [
        record
        for record in records
        if (start_day is None or record.date >= start_day)
        and (end_day is None or record.date <= end_day)
    ]


def get_date_range(records: Sequence[Dated], today: date) -> DateRange:
    """Return the first and last record dates, or today for no records."""
    if not records:
        return DateRange(start=today, end=today)
    dates = [record.date for record in records]
    return DateRange(start=min(dates), end=max(dates))


def clamp_date_range(
    start: date, end: date, min_allowed: date, today: date
) -> DateRange:
    """Clamp a requested range into ``[min_allowed, today]``."""
    clamped_start = min(max(start, min_allowed), today)
    clamped_end = min(max(end, min_allowed), today)
    if clamped_start > clamped_end:
        clamped_start = clamped_end
    return DateRange(start=clamped_start, end=clamped_end)


def preset_range(preset: RangePreset, today: date, full_range: DateRange) -> DateRange:
    """Resolve a quick range preset relative to today."""
    monday = today - timedelta(days=today.weekday())
    if preset is RangePreset.LAST_7_DAYS:
        return DateRange(start=today - timedelta(days=6), end=today)
    if preset is RangePreset.LAST_14_DAYS:
        return DateRange(start=today - timedelta(days=13), end=today)
    if preset is RangePreset.CURRENT_WEEK:
        return DateRange(start=monday, end=today)
    if preset is RangePreset.LAST_WEEK:
        previous_monday = monday - timedelta(days=7)
        return DateRange(start=previous_monday, end=previous_monday + timedelta(days=6))
    return full_range
