"""Normalization of raw spreadsheet rows into typed daily records."""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from kbju_dashboard.domain.records import CalorieZone, NutritionRecord, WeightRecord
from kbju_dashboard.domain.targets import CalorieZones, TargetConfiguration

DEFAULT_HEIGHT_CM = 175.0

_ABSENT = {"", "-"}
_MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_logger = logging.getLogger(__name__)


def parse_number(value: object) -> float | None:
    """Parse a numeric cell, returning ``None`` for absent or invalid values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text in _ABSENT:
            return None
        try:
            number = float(text.replace(",", "."))
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_date(value: object) -> date | None:
    """Parse ``YYYY-MM-DD``, ISO datetimes or ``DD.MM.YYYY`` into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.strptime(text, "%d.%m.%Y").date()
    except ValueError:
        return None


def format_one_decimal(value: float) -> str:
    """Format with one decimal, rounding exact ties away from zero."""
    # Decimal(value) is the exact binary value, so only true ties round up.
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def week_key_of(day: date) -> date:
    """Return the Sunday ending the Monday-Sunday week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday + timedelta(days=6)


def calculate_bmi(weight: float, height_cm: float = DEFAULT_HEIGHT_CM) -> float | None:
    """Compute BMI rounded to one decimal, ``None`` for non-positive weight."""
    if weight <= 0:
        return None
    height_m = height_cm / 100
    return float(format_one_decimal(weight / (height_m * height_m)))


def classify_calories(calories: float, zones: CalorieZones) -> CalorieZone:
    """Classify a calorie value; a boundary value falls into the next zone."""
    for zone, upper in zones.boundaries():
        if calories < upper:
            return zone
    return CalorieZone.SURPLUS


def month_label(day: date) -> str:
    return _MONTH_LABELS[day.month - 1]


def _lower_keys(row: Mapping[str, object]) -> dict[str, object]:
    return {str(key).strip().lower(): value for key, value in row.items()}


def normalize_weight_rows(
    rows: Iterable[Mapping[str, object]], height_cm: float = DEFAULT_HEIGHT_CM
) -> list[WeightRecord]:
    """Convert raw weight rows, dropping rows without a usable date or weight."""
    records: list[WeightRecord] = []
    dropped = 0
    for raw in rows:
        row = _lower_keys(raw)
        day = parse_date(row.get("date"))
        weight = parse_number(row.get("weight"))
        if day is None or weight is None or weight <= 0:
            dropped += 1
            continue
        bmi = calculate_bmi(weight, height_cm)
        if bmi is None:
            dropped += 1
            continue
        records.append(
            WeightRecord(
                date=day,
                weight=weight,
                bmi=bmi,
                week_key=week_key_of(day),
                year=day.year,
            )
        )
    if dropped:
        _logger.debug("Dropped %s weight rows without usable values", dropped)
    return records


def normalize_nutrition_rows(
    rows: Iterable[Mapping[str, object]], targets: TargetConfiguration
) -> list[NutritionRecord]:
    """Convert raw KBJU rows, classifying calories with the given targets."""
    records: list[NutritionRecord] = []
    dropped = 0
    for raw in rows:
        row = _lower_keys(raw)
        day = parse_date(row.get("date"))
        calories = parse_number(row.get("calories"))
        if day is None or calories is None or calories <= 0:
            dropped += 1
            continue
        records.append(
            NutritionRecord(
                date=day,
                calories=calories,
                proteins=parse_number(row.get("proteins")),
                fats=parse_number(row.get("fats")),
                carbs=parse_number(row.get("carbs")),
                category=classify_calories(calories, targets.calorie_zones),
                week_key=week_key_of(day),
                month_label=month_label(day),
            )
        )
    if dropped:
        _logger.debug("Dropped %s nutrition rows without usable calories", dropped)
    return records
