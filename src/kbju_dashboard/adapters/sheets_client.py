"""Spreadsheet web app client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class SheetsClient(Protocol):
    """Interface for fetching the raw spreadsheet payload."""

    async def fetch(self, url: str) -> dict[str, object]:
        """Fetch the endpoint and return the decoded JSON body."""


@dataclass
class HttpxSheetsClient(SheetsClient):
    """HTTPX-backed spreadsheet client."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 30

    @classmethod
    def create(cls, timeout_seconds: float = 30) -> "HttpxSheetsClient":
        """Create a client with a managed httpx session."""
        return cls(
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout_seconds=timeout_seconds,
        )

    async def fetch(self, url: str) -> dict[str, object]:
        """GET the endpoint; raises on non-2xx status or invalid JSON."""
        response = await self.http_client.get(url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
