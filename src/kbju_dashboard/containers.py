"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from kbju_dashboard.adapters.json_targets_repository import JsonFileTargetsRepository
from kbju_dashboard.adapters.sheets_client import HttpxSheetsClient
from kbju_dashboard.adapters.supabase_targets_repository import (
    SupabaseTargetsRepository,
)
from kbju_dashboard.config import Settings
from kbju_dashboard.services.dashboard import DashboardService
from kbju_dashboard.services.targets import TargetsRepository, TargetsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    targets_service: TargetsService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_targets_repository(settings: Settings) -> TargetsRepository:
    """Pick the settings store for the configured environment."""
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseTargetsRepository(client)
    return JsonFileTargetsRepository(settings.settings_path)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    targets_service = TargetsService(
        repository=build_targets_repository(resolved_settings),
        default_sheet_url=resolved_settings.sheet_url,
    )
    sheets_client = HttpxSheetsClient.create(
        timeout_seconds=resolved_settings.request_timeout_seconds
    )
    dashboard_service = DashboardService(
        sheets_client=sheets_client,
        targets_service=targets_service,
        height_cm=resolved_settings.height_cm,
        min_allowed_date=resolved_settings.min_allowed_date,
        timezone_name=resolved_settings.timezone,
    )

    async def close_resources() -> None:
        await sheets_client.close()

    return AppContainer(
        settings=resolved_settings,
        targets_service=targets_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
