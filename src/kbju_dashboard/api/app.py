"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status

from kbju_dashboard.app_logging import configure_logging
from kbju_dashboard.containers import AppContainer
from kbju_dashboard.domain.errors import (
    ConfigurationMissing,
    DashboardError,
    EmptyDataset,
)
from kbju_dashboard.domain.records import NutritionRecord, WeightRecord
from kbju_dashboard.domain.stats import MacroStats, WeeklyAverage, WeeklyPoint
from kbju_dashboard.domain.targets import SettingsUpdate
from kbju_dashboard.domain.views import MetricsView, NutritionView
from kbju_dashboard.services.date_range import RangePreset
from kbju_dashboard.services.formatting import (
    PRESET_LABELS,
    describe_range,
    format_week_label,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/reload")
    async def reload(request: Request) -> dict[str, object]:
        """Fetch the spreadsheet again and rebuild all records."""
        state_container: AppContainer = request.app.state.container
        try:
            state = await state_container.dashboard_service.reload()
        except EmptyDataset as exc:
            return {"status": "empty", "detail": exc.message}
        except DashboardError as exc:
            logger.warning("Dashboard reload failed: %s", exc.message)
            raise _http_error(exc) from exc
        return {
            "status": "ok",
            "weight": len(state.weight),
            "kbju": len(state.nutrition),
        }

    @app.get("/api/nutrition")
    async def nutrition(
        request: Request,
        start: date | None = None,
        end: date | None = None,
        preset: RangePreset | None = None,
    ) -> dict[str, object]:
        """Return calorie and macro statistics for a date range."""
        state_container: AppContainer = request.app.state.container
        try:
            view = await state_container.dashboard_service.nutrition_view(
                start, end, preset
            )
        except DashboardError as exc:
            raise _http_error(exc) from exc
        return _serialize_nutrition_view(view, preset)

    @app.get("/api/metrics")
    async def metrics(
        request: Request,
        start: date | None = None,
        end: date | None = None,
        preset: RangePreset | None = None,
    ) -> dict[str, object]:
        """Return weight and BMI data for a date range."""
        state_container: AppContainer = request.app.state.container
        try:
            view = await state_container.dashboard_service.metrics_view(
                start, end, preset
            )
        except DashboardError as exc:
            raise _http_error(exc) from exc
        return _serialize_metrics_view(view, preset)

    @app.get("/api/settings")
    async def get_settings(request: Request) -> dict[str, object]:
        """Return the current targets and endpoint URL."""
        state_container: AppContainer = request.app.state.container
        targets_service = state_container.targets_service
        return {
            "sheetUrl": targets_service.sheet_url() or "",
            "targets": targets_service.current().to_document(),
        }

    @app.put("/api/settings")
    async def save_settings(
        update: SettingsUpdate, request: Request
    ) -> dict[str, object]:
        """Replace targets and reload the dashboard with them."""
        dashboard_service = request.app.state.container.dashboard_service
        try:
            saved = await dashboard_service.save_settings(update)
        except DashboardError as exc:
            logger.warning("Reload after settings save failed: %s", exc.message)
            raise _http_error(exc) from exc
        state = dashboard_service.state
        return {
            "status": "empty" if state is None or state.is_empty else "ok",
            "saved": saved,
        }

    return app


def _http_error(exc: DashboardError) -> HTTPException:
    if isinstance(exc, ConfigurationMissing):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)


def _serialize_range(
    view: NutritionView | MetricsView, preset: RangePreset | None
) -> dict[str, object]:
    label = PRESET_LABELS.get(preset) if preset is not None else None
    return {
        "start": view.date_range.start.isoformat(),
        "end": view.date_range.end.isoformat(),
        **describe_range(view.date_range, label),
    }


def _serialize_macro_stats(stats: MacroStats) -> dict[str, object]:
    return {
        "avg": stats.avg,
        "distribution": {
            "below": stats.distribution.below,
            "within": stats.distribution.within,
            "above": stats.distribution.above,
        },
        "total": stats.total,
        "successCount": stats.success_count,
        "successRate": stats.success_rate,
    }


def _serialize_nutrition_day(record: NutritionRecord) -> dict[str, object]:
    return {
        "date": record.date.isoformat(),
        "calories": record.calories,
        "proteins": record.proteins,
        "fats": record.fats,
        "carbs": record.carbs,
        "category": record.category.value,
        "week": record.week_key.isoformat(),
        "month": record.month_label,
    }


def _serialize_weekly_point(point: WeeklyPoint, field_name: str) -> dict[str, object]:
    return {
        "date": point.date.isoformat(),
        field_name: point.value,
        "isWeekly": True,
        "isIncomplete": point.is_incomplete,
    }


def _serialize_nutrition_view(
    view: NutritionView, preset: RangePreset | None
) -> dict[str, object]:
    return {
        "range": _serialize_range(view, preset),
        "days": [_serialize_nutrition_day(record) for record in view.days],
        "avgCalories": view.avg_calories,
        "distribution": {
            zone.value: count for zone, count in view.distribution.items()
        },
        "macros": {
            macro: {
                "target": view.targets.target_for(macro),
                **_serialize_macro_stats(stats),
            }
            for macro, stats in view.macro_stats.items()
        },
        "weeklyCalories": [
            _serialize_weekly_point(point, "calories")
            for point in view.weekly_calories
        ],
        "calorieZones": view.targets.calorie_zones.model_dump(by_alias=True),
    }


def _serialize_weight_day(record: WeightRecord) -> dict[str, object]:
    return {
        "date": record.date.isoformat(),
        "weight": record.weight,
        "bmi": record.bmi,
        "week": record.week_key.isoformat(),
        "year": record.year,
    }


def _serialize_weekly_average(week: WeeklyAverage) -> dict[str, object]:
    return {
        "week": format_week_label(week.week_key),
        "fullDate": week.week_key.isoformat(),
        "avgWeight": week.avg_weight,
        "avgBmi": week.avg_bmi,
        "isIncomplete": week.is_incomplete,
        "avgCalories": week.avg_calories,
        "calorieCategory": (
            week.calorie_category.value if week.calorie_category else None
        ),
    }


def _serialize_metrics_view(
    view: MetricsView, preset: RangePreset | None
) -> dict[str, object]:
    return {
        "range": _serialize_range(view, preset),
        "days": [_serialize_weight_day(record) for record in view.days],
        "weekly": [_serialize_weekly_average(week) for week in view.weekly],
        "bmiTarget": view.bmi_target,
    }
