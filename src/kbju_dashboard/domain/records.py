"""Domain models for normalized daily records."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Literal

Macro = Literal["proteins", "fats", "carbs"]
MACROS: tuple[Macro, ...] = ("proteins", "fats", "carbs")


class CalorieZone(str, Enum):
    """Calorie intake zones ordered by ascending calorie boundary."""

    UNHEALTHY_DEFICIT = "unhealthyDeficit"
    FAST_LOSS = "fastLoss"
    HEALTHY_LOSS = "healthyLoss"
    SLOW_LOSS = "slowLoss"
    MAINTENANCE = "maintenance"
    SURPLUS = "surplus"

    @classmethod
    def ordered(cls) -> list["CalorieZone"]:
        """Return zones from the lowest to the open-ended top bucket."""
        return list(cls)

    @property
    def rank(self) -> int:
        """Position of the zone in the ascending order."""
        return CalorieZone.ordered().index(self)


@dataclass(frozen=True)
class WeightRecord:
    """Single day weight measurement with derived BMI."""

    date: date
    weight: float
    bmi: float
    week_key: date
    year: int


@dataclass(frozen=True)
class NutritionRecord:
    """Single day calorie and macro intake."""

    date: date
    calories: float
    proteins: float | None
    fats: float | None
    carbs: float | None
    category: CalorieZone
    week_key: date
    month_label: str

    def macro(self, name: Macro) -> float | None:
        """Return the value of a macro by name."""
        return getattr(self, name)

    @property
    def has_macros(self) -> bool:
        return any(self.macro(name) is not None for name in MACROS)
