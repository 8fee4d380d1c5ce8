"""Tests for settings repository implementations."""

from dataclasses import dataclass, field

from kbju_dashboard.adapters.json_targets_repository import JsonFileTargetsRepository
from kbju_dashboard.adapters.supabase_targets_repository import (
    SupabaseTargetsRepository,
)
from kbju_dashboard.domain.targets import TargetConfiguration


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    _pending: dict[str, object] | None = None

    def select(self, *_args) -> "FakeTable":
        self._pending = None
        return self

    def upsert(self, payload: dict[str, object]) -> "FakeTable":
        self._pending = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self._pending is not None:
            row = self._pending
            self.rows[str(row["key"])] = row
            self._pending = None
            return FakeResponse(data=[row])
        _, key = self.last_filters[-1]
        row = self.rows.get(str(key))
        return FakeResponse(data=[row] if row else [])


@dataclass
class FakeSupabase:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable(name))


def test_json_repository_round_trip(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    repo = JsonFileTargetsRepository(path)

    assert repo.load_targets() is None
    assert repo.get_sheet_url() is None

    document = TargetConfiguration(bmi=23).to_document()
    assert repo.save_targets(document) is True
    assert repo.set_sheet_url("https://sheets.test/exec") is True

    reopened = JsonFileTargetsRepository(path)
    assert reopened.load_targets() == document
    assert reopened.get_sheet_url() == "https://sheets.test/exec"


def test_json_repository_ignores_corrupt_file(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonFileTargetsRepository(path).load_targets() is None


def test_supabase_repository_round_trip() -> None:
    client = FakeSupabase()
    repo = SupabaseTargetsRepository(client)  # type: ignore[arg-type]

    assert repo.load_targets() is None
    assert repo.save_targets({"bmi": 22}) is True
    assert repo.set_sheet_url("https://sheets.test/exec") is True

    assert repo.load_targets() == {"bmi": 22}
    assert repo.get_sheet_url() == "https://sheets.test/exec"
    table = client.tables["dashboard_settings"]
    assert table.rows["targets"]["updated_at"]


def test_json_repository_reports_unwritable_path(tmp_path) -> None:
    repo = JsonFileTargetsRepository(tmp_path)

    assert repo.save_targets(TargetConfiguration().to_document()) is False
    assert repo.set_sheet_url("https://sheets.test/exec") is False
