"""Target configuration models."""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from kbju_dashboard.domain.records import CalorieZone, Macro

SURPLUS_UPPER_BOUND = 10000

# Zone names used by documents saved before the rename.
_LEGACY_ZONE_KEYS = {"severeDeficit": "unhealthyDeficit"}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalorieZones(_CamelModel):
    """Upper calorie boundaries of each zone, strictly ascending."""

    unhealthy_deficit: int = 1700
    fast_loss: int = 1900
    healthy_loss: int = 2200
    slow_loss: int = 2400
    maintenance: int = 2600
    surplus: int = SURPLUS_UPPER_BOUND

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_keys(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        migrated = dict(data)
        for old, new in _LEGACY_ZONE_KEYS.items():
            if old in migrated:
                migrated[new] = migrated.pop(old)
        return migrated

    @model_validator(mode="after")
    def check_ascending(self) -> "CalorieZones":
        values = [bound for _, bound in self.boundaries()]
        if any(low >= high for low, high in zip(values, values[1:])):
            raise ValueError("calorie zone boundaries must be strictly ascending")
        return self

    def boundaries(self) -> list[tuple[CalorieZone, int]]:
        """Return (zone, exclusive upper bound) for the five bounded zones."""
        return [
            (CalorieZone.UNHEALTHY_DEFICIT, self.unhealthy_deficit),
            (CalorieZone.FAST_LOSS, self.fast_loss),
            (CalorieZone.HEALTHY_LOSS, self.healthy_loss),
            (CalorieZone.SLOW_LOSS, self.slow_loss),
            (CalorieZone.MAINTENANCE, self.maintenance),
        ]


class TargetConfiguration(_CamelModel):
    """User-editable dashboard targets."""

    model_config = ConfigDict(frozen=True)

    bmi: float = 25
    proteins: int | None = 150
    fats: int | None = 80
    carbs: int | None = 220
    calorie_zones: CalorieZones = Field(default_factory=CalorieZones)

    @field_validator("proteins", "fats", "carbs")
    @classmethod
    def positive_or_unset(cls, value: int | None) -> int | None:
        return value if value is not None and value > 0 else None

    def target_for(self, macro: Macro) -> int | None:
        """Return the daily target for a macro."""
        return getattr(self, macro)

    def to_document(self) -> dict[str, object]:
        """Serialize using the persisted camelCase keys."""
        return self.model_dump(by_alias=True)


def _parse_int(value: object) -> int | None:
    """Parse a leading integer like a form field, ``None`` when absent."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    text = str(value).strip()
    digits = ""
    for index, char in enumerate(text):
        if char.isdigit() or (index == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


class SettingsUpdate(_CamelModel):
    """Settings form submission."""

    sheet_url: str = ""
    bmi: float
    proteins: int | None = None
    fats: int | None = None
    carbs: int | None = None
    unhealthy_deficit: int
    fast_loss: int
    healthy_loss: int
    slow_loss: int
    maintenance: int

    @field_validator("sheet_url", mode="before")
    @classmethod
    def strip_url(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("proteins", "fats", "carbs", mode="before")
    @classmethod
    def optional_target(cls, value: object) -> int | None:
        # Empty and zero both mean "no target".
        return _parse_int(value) or None

    @field_validator(
        "unhealthy_deficit",
        "fast_loss",
        "healthy_loss",
        "slow_loss",
        "maintenance",
        mode="before",
    )
    @classmethod
    def zone_bound(cls, value: object) -> object:
        parsed = _parse_int(value)
        return value if parsed is None else parsed

    @model_validator(mode="after")
    def check_ascending(self) -> "SettingsUpdate":
        values = [
            self.unhealthy_deficit,
            self.fast_loss,
            self.healthy_loss,
            self.slow_loss,
            self.maintenance,
        ]
        if any(low >= high for low, high in zip(values, values[1:])):
            raise ValueError("calorie zone boundaries must be strictly ascending")
        return self

    def to_targets(self) -> TargetConfiguration:
        """Build the replacement target configuration."""
        return TargetConfiguration(
            bmi=self.bmi,
            proteins=self.proteins,
            fats=self.fats,
            carbs=self.carbs,
            calorie_zones=CalorieZones(
                unhealthy_deficit=self.unhealthy_deficit,
                fast_loss=self.fast_loss,
                healthy_loss=self.healthy_loss,
                slow_loss=self.slow_loss,
                maintenance=self.maintenance,
                surplus=SURPLUS_UPPER_BOUND,
            ),
        )
