"""Label formatting for dashboard output."""

from datetime import date

from kbju_dashboard.domain.stats import DateRange
from kbju_dashboard.services.date_range import RangePreset

ALL_PERIOD_LABEL = "весь период"

PRESET_LABELS = {
    RangePreset.LAST_7_DAYS: "последние 7 дней",
    RangePreset.LAST_14_DAYS: "последние 14 дней",
    RangePreset.CURRENT_WEEK: "текущая неделя",
    RangePreset.LAST_WEEK: "прошлая неделя",
    RangePreset.ALL: ALL_PERIOD_LABEL,
}


def format_week_label(day: date) -> str:
    """Format a date as ``DD.MM``."""
    return day.strftime("%d.%m")


def format_display_date(day: date) -> str:
    """Format a date as ``DD.MM.YYYY``."""
    return day.strftime("%d.%m.%Y")


def count_days(date_range: DateRange) -> int:
    """Number of calendar days in an inclusive range."""
    return abs((date_range.end - date_range.start).days) + 1


def pluralize_days(count: int) -> str:
    """Return ``count`` with the Russian plural form of "day"."""
    last_digit = count % 10
    last_two_digits = count % 100
    if last_digit == 1 and last_two_digits != 11:
        suffix = "день"
    elif last_digit in {2, 3, 4} and last_two_digits not in {12, 13, 14}:
        suffix = "дня"
    else:
        suffix = "дней"
    return f"{count} {suffix}"


def describe_range(
    date_range: DateRange, preset_label: str | None = None
) -> dict[str, str]:
    """Build the range caption and day counter shown above a chart."""
    days_text = pluralize_days(count_days(date_range))
    if preset_label == ALL_PERIOD_LABEL:
        count_text = f"{preset_label}: {days_text}"
    elif preset_label:
        count_text = preset_label
    else:
        count_text = days_text
    return {
        "text": (
            f"{format_display_date(date_range.start)} — "
            f"{format_display_date(date_range.end)}"
        ),
        "count": count_text,
    }
