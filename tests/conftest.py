"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from kbju_dashboard.adapters.sheets_client import SheetsClient
from kbju_dashboard.config import Settings
from kbju_dashboard.containers import AppContainer
from kbju_dashboard.services.dashboard import DashboardService
from kbju_dashboard.services.targets import TargetsRepository, TargetsService

FIXED_TODAY = date(2026, 1, 14)
SHEET_URL = "https://sheets.test/exec"


def sample_payload() -> dict[str, object]:
    """Two Monday-Sunday weeks of data around FIXED_TODAY (a Wednesday)."""
    return {
        "success": True,
        "weight": [
            {"Date": "2026-01-05", "Weight": "80"},
            {"date": "2026-01-07", "weight": 79.0},
            {"date": "06.01.2026", "weight": "-"},
            {"date": "2026-01-12", "weight": "78,5"},
            {"date": "2026-01-19", "weight": "78"},
        ],
        "kbju": [
            {
                "date": "2026-01-05",
                "calories": "1800",
                "proteins": "160",
                "fats": "70",
                "carbs": "242",
            },
            {
                "date": "2026-01-06",
                "calories": 2000,
                "proteins": "",
                "fats": "90",
                "carbs": "200",
            },
            {"date": "2026-01-07", "calories": "abc"},
            {
                "DATE": "2026-01-13",
                "CALORIES": "2600",
                "PROTEINS": "140",
                "FATS": "80",
                "CARBS": "220",
            },
            {"date": "2026-01-14", "calories": "1500"},
        ],
    }


@dataclass
class InMemoryTargetsRepository(TargetsRepository):
    """In-memory settings store for tests."""

    document: dict[str, object] | None = None
    url: str | None = None
    save_ok: bool = True

    def load_targets(self) -> dict[str, object] | None:
        return self.document

    def save_targets(self, document: dict[str, object]) -> bool:
        if self.save_ok:
            self.document = document
        return self.save_ok

    def get_sheet_url(self) -> str | None:
        return self.url

    def set_sheet_url(self, url: str) -> bool:
        self.url = url
        return True


@dataclass
class FakeSheetsClient(SheetsClient):
    """Fake spreadsheet client returning a canned payload or raising."""

    payload: object = field(default_factory=sample_payload)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def fetch(self, url: str) -> dict[str, object]:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload  # type: ignore[return-value]


@dataclass
class FixedDayDashboardService(DashboardService):
    """Dashboard service pinned to a fixed "today"."""

    fixed_today: date = FIXED_TODAY

    def today(self) -> date:
        return self.fixed_today


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        sheet_url=SHEET_URL,
        settings_path=tmp_path / "settings.json",
    )


@pytest.fixture
def targets_repository() -> InMemoryTargetsRepository:
    return InMemoryTargetsRepository()


@pytest.fixture
def sheets_client() -> FakeSheetsClient:
    return FakeSheetsClient()


@pytest.fixture
def targets_service(
    targets_repository: InMemoryTargetsRepository,
) -> TargetsService:
    return TargetsService(targets_repository, default_sheet_url=SHEET_URL)


@pytest.fixture
def dashboard_service(
    sheets_client: FakeSheetsClient, targets_service: TargetsService
) -> FixedDayDashboardService:
    return FixedDayDashboardService(
        sheets_client=sheets_client,
        targets_service=targets_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    targets_service: TargetsService,
    dashboard_service: FixedDayDashboardService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        targets_service=targets_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
