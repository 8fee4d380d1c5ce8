"""Tests for container wiring."""

import asyncio

from kbju_dashboard.adapters.json_targets_repository import JsonFileTargetsRepository
from kbju_dashboard.containers import build_container


def test_build_container_uses_file_store_by_default(settings) -> None:
    container = build_container(settings)

    assert isinstance(
        container.targets_service.repository, JsonFileTargetsRepository
    )
    assert container.targets_service.sheet_url() == settings.sheet_url
    assert container.dashboard_service.min_allowed_date == settings.min_allowed_date
    asyncio.run(container.close_resources())
