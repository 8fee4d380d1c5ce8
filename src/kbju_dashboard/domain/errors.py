"""Errors raised while loading dashboard data."""


class DashboardError(Exception):
    """Base error for a failed load cycle with a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationMissing(DashboardError):
    """No endpoint URL is configured."""


class TransportError(DashboardError):
    """The endpoint answered with a non-OK status or could not be reached."""


class RemoteError(DashboardError):
    """The endpoint reported ``success: false``."""


class EmptyDataset(DashboardError):
    """The fetch succeeded but both record streams are empty."""
