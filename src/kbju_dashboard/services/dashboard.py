"""Dashboard load cycle and per-view computations."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import httpx
from pydantic import ValidationError

from kbju_dashboard.adapters.sheets_client import SheetsClient
from kbju_dashboard.domain.errors import (
    ConfigurationMissing,
    EmptyDataset,
    RemoteError,
    TransportError,
)
from kbju_dashboard.domain.records import MACROS
from kbju_dashboard.domain.sheets import SheetPayload
from kbju_dashboard.domain.stats import DateRange
from kbju_dashboard.domain.targets import SettingsUpdate
from kbju_dashboard.domain.views import DashboardState, MetricsView, NutritionView
from kbju_dashboard.services.aggregation import (
    aggregate_data_by_week,
    get_category_distribution,
    get_weekly_averages,
    round_half_up,
)
from kbju_dashboard.services.date_range import (
    Dated,
    RangePreset,
    clamp_date_range,
    filter_by_date_range,
    get_date_range,
    preset_range,
)
from kbju_dashboard.services.macro_stats import get_macro_stats
from kbju_dashboard.services.normalizer import (
    DEFAULT_HEIGHT_CM,
    normalize_nutrition_rows,
    normalize_weight_rows,
)
from kbju_dashboard.services.targets import TargetsService

DEFAULT_MIN_ALLOWED_DATE = date(2025, 12, 22)

_logger = logging.getLogger(__name__)


@dataclass
class DashboardService:
    """Loads spreadsheet data and serves filtered dashboard views.

    The loaded state is an immutable snapshot replaced only after a
    successful fetch, so views never see a partially loaded dataset.
    """

    sheets_client: SheetsClient
    targets_service: TargetsService
    height_cm: float = DEFAULT_HEIGHT_CM
    min_allowed_date: date = DEFAULT_MIN_ALLOWED_DATE
    timezone_name: str = "UTC"
    state: DashboardState | None = None

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    async def reload(self) -> DashboardState:
        """Fetch and normalize both record streams from scratch."""
        url = self.targets_service.sheet_url()
        if not url:
            raise ConfigurationMissing(
                "Google Sheets URL is not configured. Add it in the settings."
            )
        targets = self.targets_service.current()
        payload = await self._fetch(url)
        if not payload.success:
            raise RemoteError(payload.error or "Unknown error from Sheets")

        state = DashboardState(
            targets=targets,
            weight=tuple(normalize_weight_rows(payload.weight, self.height_cm)),
            nutrition=tuple(normalize_nutrition_rows(payload.kbju, targets)),
            loaded_at=datetime.now(tz=UTC),
        )
        self.state = state
        _logger.info(
            "Loaded dashboard data: weight=%s kbju=%s",
            len(state.weight),
            len(state.nutrition),
        )
        if state.is_empty:
            raise EmptyDataset("No data in the sheet. Add rows and refresh the page.")
        return state

    async def ensure_loaded(self) -> DashboardState:
        """Return the current state, loading it on first use."""
        if self.state is not None:
            return self.state
        try:
            return await self.reload()
        except EmptyDataset:
            _logger.info("Dashboard data source is empty")
            if self.state is None:
                raise
            return self.state

    async def save_settings(self, update: SettingsUpdate) -> bool:
        """Persist new targets and reload so records are reclassified."""
        saved = self.targets_service.save(update)
        if not saved:
            _logger.warning("Settings were not persisted")
        try:
            await self.reload()
        except EmptyDataset:
            _logger.info("Dashboard data source is empty")
        return saved

    async def nutrition_view(
        self,
        start: date | None = None,
        end: date | None = None,
        preset: RangePreset | None = None,
    ) -> NutritionView:
        """Return calorie and macro statistics for a date range."""
        state = await self.ensure_loaded()
        today = self.today()
        date_range = self.resolve_range(state.nutrition, start, end, preset, today)
        return build_nutrition_view(state, date_range, today)

    async def metrics_view(
        self,
        start: date | None = None,
        end: date | None = None,
        preset: RangePreset | None = None,
    ) -> MetricsView:
        """Return weight and BMI data for a date range."""
        state = await self.ensure_loaded()
        today = self.today()
        date_range = self.resolve_range(state.weight, start, end, preset, today)
        return build_metrics_view(state, date_range, today)

    def resolve_range(
        self,
        records: Sequence[Dated],
        start: date | None,
        end: date | None,
        preset: RangePreset | None,
        today: date,
    ) -> DateRange:
        """Resolve a requested range, defaulting to the data bounds."""
        full = get_date_range(records, today)
        full = DateRange(start=max(full.start, self.min_allowed_date), end=full.end)
        if preset is not None:
            requested = preset_range(preset, today, full)
        else:
            requested = DateRange(start=start or full.start, end=end or full.end)
        return clamp_date_range(
            requested.start, requested.end, self.min_allowed_date, today
        )

    async def _fetch(self, url: str) -> SheetPayload:
        try:
            raw = await self.sheets_client.fetch(url)
        except httpx.HTTPStatusError as exc:
            _logger.warning("Sheets request failed: %s", exc)
            raise TransportError(
                f"Failed to load data: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            _logger.warning("Sheets request failed: %s", exc)
            raise TransportError(f"Failed to load data: {exc}") from exc
        except ValueError as exc:
            raise TransportError("Failed to load data: invalid JSON response") from exc
        try:
            return SheetPayload.model_validate(raw)
        except ValidationError as exc:
            raise TransportError("Failed to load data: unexpected response") from exc


def build_nutrition_view(
    state: DashboardState, date_range: DateRange, today: date
) -> NutritionView:
    """Compute the nutrition view over the records inside ``date_range``."""
    days = filter_by_date_range(state.nutrition, date_range.start, date_range.end)
    with_macros = [record for record in days if record.has_macros]
    avg_calories = (
        round_half_up(sum(record.calories for record in days) / len(days))
        if days
        else 0
    )
    return NutritionView(
        date_range=date_range,
        days=days,
        avg_calories=avg_calories,
        distribution=get_category_distribution(days),
        macro_stats={
            macro: get_macro_stats(with_macros, macro, state.targets)
            for macro in MACROS
        },
        weekly_calories=aggregate_data_by_week(
            state.nutrition, days, "calories", today
        ),
        targets=state.targets,
    )


def build_metrics_view(
    state: DashboardState, date_range: DateRange, today: date
) -> MetricsView:
    """Compute the weight/BMI view over the records inside ``date_range``."""
    days = filter_by_date_range(state.weight, date_range.start, date_range.end)
    return MetricsView(
        date_range=date_range,
        days=days,
        weekly=get_weekly_averages(days, state.nutrition, state.targets, today),
        bmi_target=state.targets.bmi,
    )
