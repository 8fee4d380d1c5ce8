"""Domain models for aggregated statistics."""

from dataclasses import dataclass, field
from datetime import date

from kbju_dashboard.domain.records import CalorieZone


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start: date
    end: date


@dataclass(frozen=True)
class WeeklyAverage:
    """Averages for a Monday-Sunday week keyed by its Sunday."""

    week_key: date
    avg_weight: float | None
    avg_bmi: float | None
    is_incomplete: bool
    avg_calories: int | None
    calorie_category: CalorieZone | None


@dataclass(frozen=True)
class WeeklyPoint:
    """Weekly mean of a single field for chart series."""

    date: date
    value: float
    is_incomplete: bool


@dataclass
class MacroDistribution:
    """Day counts below, at and above a macro target."""

    below: int = 0
    within: int = 0
    above: int = 0


@dataclass
class MacroStats:
    """Summary statistics for one macro over a set of days."""

    avg: str | int = 0
    distribution: MacroDistribution = field(default_factory=MacroDistribution)
    total: int = 0
    success_count: int = 0
    success_rate: int = 0
