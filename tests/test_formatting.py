"""Tests for label formatting."""

from datetime import date

import pytest

from kbju_dashboard.domain.stats import DateRange
from kbju_dashboard.services.formatting import (
    ALL_PERIOD_LABEL,
    count_days,
    describe_range,
    format_week_label,
    pluralize_days,
)


@pytest.mark.parametrize(
    ("count", "expected"),
    [
        (1, "1 день"),
        (2, "2 дня"),
        (5, "5 дней"),
        (11, "11 дней"),
        (12, "12 дней"),
        (21, "21 день"),
        (24, "24 дня"),
    ],
)
def test_pluralize_days(count: int, expected: str) -> None:
    assert pluralize_days(count) == expected


def test_week_label_and_day_count() -> None:
    assert format_week_label(date(2026, 1, 11)) == "11.01"
    assert count_days(DateRange(start=date(2026, 1, 5), end=date(2026, 1, 11))) == 7


def test_describe_range() -> None:
    date_range = DateRange(start=date(2026, 1, 1), end=date(2026, 1, 2))

    assert describe_range(date_range) == {
        "text": "01.01.2026 — 02.01.2026",
        "count": "2 дня",
    }
    assert describe_range(date_range, ALL_PERIOD_LABEL)["count"] == (
        "весь период: 2 дня"
    )
    last_week = describe_range(date_range, "прошлая неделя")
    assert last_week["count"] == "прошлая неделя"
