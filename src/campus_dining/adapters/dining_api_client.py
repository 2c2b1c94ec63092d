"""Third-party dining API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class DiningApiClient(Protocol):
    """Interface for the dining eateries API."""

    async def fetch_eateries(self) -> dict[str, object]:
        """Return the raw eateries document."""


@dataclass
class HttpxDiningApiClient(DiningApiClient):
    """HTTPX-backed dining API client."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxDiningApiClient":
        """Create a dining API client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def fetch_eateries(self) -> dict[str, object]:
        """Fetch the eateries document."""
        response = await self.http_client.get(self.url, timeout=30)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
