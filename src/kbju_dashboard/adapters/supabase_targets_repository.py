"""Supabase repository for dashboard settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from kbju_dashboard.services.targets import TargetsRepository

_TABLE = "dashboard_settings"
_TARGETS_KEY = "targets"
_SHEET_URL_KEY = "sheet_url"


@dataclass
class SupabaseTargetsRepository(TargetsRepository):
    """Supabase implementation storing settings as key/value rows."""

    client: Client

    def load_targets(self) -> dict[str, object] | None:
        """Return the stored targets document."""
        value = self._get(_TARGETS_KEY)
        return value if isinstance(value, dict) else None

    def save_targets(self, document: dict[str, object]) -> bool:
        """Upsert the targets document."""
        return self._put(_TARGETS_KEY, document)

    def get_sheet_url(self) -> str | None:
        """Return the stored endpoint URL."""
        value = self._get(_SHEET_URL_KEY)
        return value if isinstance(value, str) else None

    def set_sheet_url(self, url: str) -> bool:
        """Upsert the endpoint URL."""
        return self._put(_SHEET_URL_KEY, url)

    def _get(self, key: str) -> object | None:
        response = (
            self.client.table(_TABLE)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def _put(self, key: str, value: object) -> bool:
        response = (
            self.client.table(_TABLE)
            .upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        return bool(response.data)
