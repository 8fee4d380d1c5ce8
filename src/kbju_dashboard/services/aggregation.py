"""Weekly rollups and category tallies."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from kbju_dashboard.domain.records import CalorieZone, NutritionRecord, WeightRecord
from kbju_dashboard.domain.stats import WeeklyAverage, WeeklyPoint
from kbju_dashboard.domain.targets import TargetConfiguration
from kbju_dashboard.services.normalizer import (
    classify_calories,
    format_one_decimal,
    week_key_of,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _one_decimal(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return float(format_one_decimal(_mean(values)))


@dataclass
class _WeekBucket:
    is_incomplete: bool
    avg_calories: int | None
    calorie_category: CalorieZone | None
    weights: list[float] = field(default_factory=list)
    bmis: list[float] = field(default_factory=list)


def weekly_nutrition(
    week_key: date,
    nutrition: Sequence[NutritionRecord],
    targets: TargetConfiguration,
) -> tuple[int | None, CalorieZone | None]:
    """Return the average calories of a week and its zone under ``targets``."""
    calories = [record.calories for record in nutrition if record.week_key == week_key]
    if not calories:
        return None, None
    avg = round_half_up(_mean(calories))
    return avg, classify_calories(avg, targets.calorie_zones)


def get_weekly_averages(
    records: Sequence[WeightRecord | NutritionRecord],
    nutrition: Sequence[NutritionRecord],
    targets: TargetConfiguration,
    today: date,
) -> list[WeeklyAverage]:
    """Group records by week, with calorie context from the nutrition stream.

    Weeks starting after ``today`` are skipped; the week containing ``today``
    is returned flagged as incomplete.
    """
    weeks: dict[date, _WeekBucket] = {}
    for record in records:
        week_key = record.week_key
        if week_key - timedelta(days=6) > today:
            continue
        bucket = weeks.get(week_key)
        if bucket is None:
            avg_calories, category = weekly_nutrition(week_key, nutrition, targets)
            bucket = _WeekBucket(
                is_incomplete=week_key > today,
                avg_calories=avg_calories,
                calorie_category=category,
            )
            weeks[week_key] = bucket
        if isinstance(record, WeightRecord):
            if record.weight > 0:
                bucket.weights.append(record.weight)
            if record.bmi > 0:
                bucket.bmis.append(record.bmi)

    return [
        WeeklyAverage(
            week_key=week_key,
            avg_weight=_one_decimal(bucket.weights),
            avg_bmi=_one_decimal(bucket.bmis),
            is_incomplete=bucket.is_incomplete,
            avg_calories=bucket.avg_calories,
            calorie_category=bucket.calorie_category,
        )
        for week_key, bucket in sorted(weeks.items())
    ]


def aggregate_data_by_week(
    full: Sequence[WeightRecord | NutritionRecord],
    visible: Sequence[WeightRecord | NutritionRecord],
    field_name: str,
    today: date,
) -> list[WeeklyPoint]:
    """Average ``field_name`` per week over ``full`` for weeks seen in ``visible``.

    Keeps a weekly point stable when the visible range covers only part of
    its week.
    """
    visible_weeks = {week_key_of(record.date) for record in visible}
    sums: dict[date, list[float]] = {}
    for record in full:
        value = getattr(record, field_name, None)
        if value is None:
            continue
        week_key = week_key_of(record.date)
        if week_key not in visible_weeks:
            continue
        sums.setdefault(week_key, []).append(value)

    return [
        WeeklyPoint(date=week_key, value=_mean(values), is_incomplete=week_key > today)
        for week_key, values in sorted(sums.items())
    ]


def get_category_distribution(
    records: Sequence[NutritionRecord],
) -> dict[CalorieZone, int]:
    """Count days per calorie zone; zones without days are absent."""
    counts: dict[CalorieZone, int] = {}
    for record in records:
        counts[record.category] = counts.get(record.category, 0) + 1
    return counts
