"""Tests for date range helpers."""

from datetime import date, datetime

from kbju_dashboard.domain.stats import DateRange
from kbju_dashboard.services.date_range import (
    RangePreset,
    clamp_date_range,
    filter_by_date_range,
    get_date_range,
    preset_range,
)
from kbju_dashboard.services.normalizer import normalize_weight_rows

TODAY = date(2026, 1, 14)


def _records():
    return normalize_weight_rows(
        [
            {"date": "2026-01-09", "weight": 80},
            {"date": "2026-01-05", "weight": 81},
            {"date": "2026-01-12", "weight": 79},
        ]
    )


def test_filter_is_inclusive_and_preserves_order() -> None:
    records = _records()

    filtered = filter_by_date_range(records, date(2026, 1, 5), date(2026, 1, 9))

    assert [record.date for record in filtered] == [date(2026, 1, 9), date(2026, 1, 5)]


def test_filter_missing_bounds_are_unbounded() -> None:
    records = _records()

    assert filter_by_date_range(records) == records
    assert len(filter_by_date_range(records, start=date(2026, 1, 10))) == 1
    assert len(filter_by_date_range(records, end=date(2026, 1, 8))) == 1


def test_filter_ignores_time_of_day() -> None:
    records = _records()

    filtered = filter_by_date_range(
        records, datetime(2026, 1, 12, 18, 30), datetime(2026, 1, 12, 1, 0)
    )

    assert [record.date for record in filtered] == [date(2026, 1, 12)]


def test_filter_by_full_range_returns_input() -> None:
    records = _records()
    bounds = get_date_range(records, TODAY)

    assert bounds == DateRange(start=date(2026, 1, 5), end=date(2026, 1, 12))
    assert filter_by_date_range(records, bounds.start, bounds.end) == records


def test_get_date_range_empty_is_today() -> None:
    assert get_date_range([], TODAY) == DateRange(start=TODAY, end=TODAY)


def test_clamp_date_range() -> None:
    minimum = date(2025, 12, 22)

    clamped = clamp_date_range(date(2025, 1, 1), date(2026, 3, 1), minimum, TODAY)
    assert clamped == DateRange(start=minimum, end=TODAY)

    inverted = clamp_date_range(date(2026, 2, 1), date(2026, 1, 10), minimum, TODAY)
    assert inverted == DateRange(start=date(2026, 1, 10), end=date(2026, 1, 10))


def test_preset_ranges() -> None:
    full = DateRange(start=date(2025, 12, 22), end=TODAY)

    assert preset_range(RangePreset.LAST_7_DAYS, TODAY, full) == DateRange(
        start=date(2026, 1, 8), end=TODAY
    )
    assert preset_range(RangePreset.LAST_14_DAYS, TODAY, full) == DateRange(
        start=date(2026, 1, 1), end=TODAY
    )
    assert preset_range(RangePreset.CURRENT_WEEK, TODAY, full) == DateRange(
        start=date(2026, 1, 12), end=TODAY
    )
    assert preset_range(RangePreset.LAST_WEEK, TODAY, full) == DateRange(
        start=date(2026, 1, 5), end=date(2026, 1, 11)
    )
    assert preset_range(RangePreset.ALL, TODAY, full) == full


def test_current_week_on_sunday_starts_previous_monday() -> None:
    sunday = date(2026, 1, 18)
    full = DateRange(start=sunday, end=sunday)

    assert preset_range(RangePreset.CURRENT_WEEK, sunday, full).start == date(
        2026, 1, 12
    )
