"""JSON file repository for dashboard settings."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from kbju_dashboard.services.targets import TargetsRepository

_TARGETS_KEY = "kbju_dashboard_settings"
_SHEET_URL_KEY = "kbju_dashboard_sheet_url"

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileTargetsRepository(TargetsRepository):
    """Stores settings as a small JSON document on disk."""

    path: Path

    def load_targets(self) -> dict[str, object] | None:
        """Return the stored targets document."""
        value = self._read().get(_TARGETS_KEY)
        return value if isinstance(value, dict) else None

    def save_targets(self, document: dict[str, object]) -> bool:
        """Store the targets document."""
        data = self._read()
        data[_TARGETS_KEY] = document
        try:
            self._write(data)
        except OSError:
            _logger.exception("Failed to write settings to %s", self.path)
            return False
        return True

    def get_sheet_url(self) -> str | None:
        """Return the stored endpoint URL."""
        value = self._read().get(_SHEET_URL_KEY)
        return value if isinstance(value, str) else None

    def set_sheet_url(self, url: str) -> bool:
        """Store the endpoint URL."""
        data = self._read()
        data[_SHEET_URL_KEY] = url
        try:
            self._write(data)
        except OSError:
            _logger.exception("Failed to write settings to %s", self.path)
            return False
        return True

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            _logger.warning("Failed to read settings from %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
        )
