"""Target configuration service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from kbju_dashboard.domain.targets import SettingsUpdate, TargetConfiguration

_logger = logging.getLogger(__name__)


class TargetsRepository(Protocol):
    """Key-value persistence for targets and the endpoint URL."""

    def load_targets(self) -> dict[str, object] | None:
        """Return the stored targets document, if any."""

    def save_targets(self, document: dict[str, object]) -> bool:
        """Store the targets document and report success."""

    def get_sheet_url(self) -> str | None:
        """Return the stored endpoint URL, if any."""

    def set_sheet_url(self, url: str) -> bool:
        """Store the endpoint URL and report success."""


@dataclass
class TargetsService:
    """Service for reading and replacing dashboard targets."""

    repository: TargetsRepository
    default_sheet_url: str | None = None

    def current(self) -> TargetConfiguration:
        """Return defaults overlaid with the persisted overrides."""
        defaults = TargetConfiguration()
        try:
            stored = self.repository.load_targets()
        except Exception:
            _logger.warning("Failed to load settings", exc_info=True)
            return defaults
        if not stored:
            return defaults
        merged = {**defaults.to_document(), **stored}
        try:
            return TargetConfiguration.model_validate(merged)
        except ValidationError as exc:
            _logger.warning("Ignoring invalid stored settings: %s", exc)
            return defaults

    def save(self, update: SettingsUpdate) -> bool:
        """Replace the targets wholesale and store the endpoint URL."""
        targets = update.to_targets()
        try:
            saved = self.repository.save_targets(targets.to_document())
            return saved and self.repository.set_sheet_url(update.sheet_url)
        except Exception:
            _logger.exception("Failed to save settings")
            return False

    def sheet_url(self) -> str | None:
        """Return the stored endpoint URL, falling back to the default."""
        return self.repository.get_sheet_url() or self.default_sheet_url or None
