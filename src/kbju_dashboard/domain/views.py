"""Dashboard state and view models."""

from dataclasses import dataclass
from datetime import datetime

from kbju_dashboard.domain.records import (
    CalorieZone,
    Macro,
    NutritionRecord,
    WeightRecord,
)
from kbju_dashboard.domain.stats import (
    DateRange,
    MacroStats,
    WeeklyAverage,
    WeeklyPoint,
)
from kbju_dashboard.domain.targets import TargetConfiguration


@dataclass(frozen=True)
class DashboardState:
    """Snapshot of loaded records and the targets they were classified with."""

    targets: TargetConfiguration
    weight: tuple[WeightRecord, ...]
    nutrition: tuple[NutritionRecord, ...]
    loaded_at: datetime

    @property
    def is_empty(self) -> bool:
        return not self.weight and not self.nutrition


@dataclass(frozen=True)
class NutritionView:
    """Calorie and macro data for a selected date range."""

    date_range: DateRange
    days: list[NutritionRecord]
    avg_calories: int
    distribution: dict[CalorieZone, int]
    macro_stats: dict[Macro, MacroStats]
    weekly_calories: list[WeeklyPoint]
    targets: TargetConfiguration


@dataclass(frozen=True)
class MetricsView:
    """Weight and BMI data for a selected date range."""

    date_range: DateRange
    days: list[WeightRecord]
    weekly: list[WeeklyAverage]
    bmi_target: float
