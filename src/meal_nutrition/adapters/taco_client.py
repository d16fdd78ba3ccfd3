"""HTTP client for the TACO composition table and lookup service."""

from dataclasses import dataclass

import httpx

from meal_nutrition.services.composition import CompositionSource

NOT_FOUND = 404


@dataclass
class HttpxTacoClient(CompositionSource):
    """HTTPX-backed composition source.

    The full table is a JSON array of raw TACO rows; search and single-record
    lookups go through a proxy that accepts ``action=search&q=`` and
    ``action=get&id=``.
    """

    table_url: str
    lookup_url: str | None
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0
    name: str = "taco"

    @classmethod
    def create(
        cls, table_url: str, lookup_url: str | None, timeout_seconds: float = 15.0
    ) -> "HttpxTacoClient":
        """Create a TACO client with a managed httpx session."""
        return cls(
            table_url=table_url,
            lookup_url=lookup_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_table(self) -> list[dict[str, object]]:
        """Download every raw TACO row."""
        response = await self.http_client.get(
            self.table_url, timeout=self.timeout_seconds
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError("TACO table payload is not a list")
        return data

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        """Search the lookup service by free text."""
        if not self.lookup_url:
            return []
        response = await self.http_client.get(
            self.lookup_url,
            params={"action": "search", "q": query},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        data = response.json()
        if isinstance(data, dict):
            data = data.get("foods", [])
        return data if isinstance(data, list) else []

    async def get_food(self, record_id: int) -> dict[str, object] | None:
        """Fetch one record by id from the lookup service."""
        if not self.lookup_url:
            return None
        response = await self.http_client.get(
            self.lookup_url,
            params={"action": "get", "id": record_id},
            timeout=self.timeout_seconds,
        )
        if response.status_code == NOT_FOUND:
            return None
        response.raise_for_status()
        data = response.json()
        return data if isinstance(data, dict) else None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
