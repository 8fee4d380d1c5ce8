"""Macro nutrient adherence statistics."""

from collections.abc import Callable, Sequence

from kbju_dashboard.domain.records import MACROS, Macro, NutritionRecord
from kbju_dashboard.domain.stats import MacroDistribution, MacroStats
from kbju_dashboard.domain.targets import TargetConfiguration
from kbju_dashboard.services.aggregation import round_half_up
from kbju_dashboard.services.normalizer import format_one_decimal

CARBS_TOLERANCE = 0.10

_SUCCESS_RULES: dict[Macro, Callable[[float, float], bool]] = {
    # Protein is a floor, fat is a ceiling, carbs should stay close to target.
    "proteins": lambda value, target: value >= target,
    "fats": lambda value, target: value <= target,
    "carbs": lambda value, target: abs(value - target) / target <= CARBS_TOLERANCE,
}


def is_success(macro: Macro, value: float, target: float) -> bool:
    """Return True when a day's value meets the macro-specific rule."""
    return _SUCCESS_RULES[macro](value, target)


def get_macro_stats(
    records: Sequence[NutritionRecord],
    macro: Macro,
    targets: TargetConfiguration,
) -> MacroStats:
    """Summarize one macro over the days that recorded it."""
    if macro not in MACROS:
        raise ValueError(f"Unknown macro: {macro}")
    values = [
        value for record in records if (value := record.macro(macro)) is not None
    ]
    if not values:
        return MacroStats()

    target = targets.target_for(macro)
    distribution = MacroDistribution()
    success_count = 0
    for value in values:
        if target is None:
            distribution.within += 1
            continue
        if value < target:
            distribution.below += 1
        elif value > target:
            distribution.above += 1
        else:
            distribution.within += 1
        if is_success(macro, value, target):
            success_count += 1

    total = len(values)
    return MacroStats(
        avg=format_one_decimal(sum(values) / total),
        distribution=distribution,
        total=total,
        success_count=success_count,
        success_rate=round_half_up(success_count / total * 100),
    )
