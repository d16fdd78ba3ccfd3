"""Supabase-backed composition source with raw TACO columns."""

import asyncio
from dataclasses import dataclass

from supabase import Client

from meal_nutrition.services.composition import CompositionSource

PAGE_SIZE = 1000


@dataclass
class SupabaseCompositionRepository(CompositionSource):
    """Reads the composition table from a Supabase table."""

    client: Client
    table_name: str = "taco_foods"
    name: str = "supabase"

    async def fetch_table(self) -> list[dict[str, object]]:
        """Return every row, paging through the table."""
        return await asyncio.to_thread(self._fetch_all)

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        """Return rows whose description contains the query."""
        return await asyncio.to_thread(self._search, query)

    async def get_food(self, record_id: int) -> dict[str, object] | None:
        """Return one row by id, if present."""
        return await asyncio.to_thread(self._get, record_id)

    def _fetch_all(self) -> list[dict[str, object]]:
        rows: list[dict[str, object]] = []
        start = 0
        while True:
            response = (
                self.client.table(self.table_name)
                .select("*")
                .order("id")
                .range(start, start + PAGE_SIZE - 1)
                .execute()
            )
            page = response.data or []
            rows.extend(page)
            if len(page) < PAGE_SIZE:
                return rows
            start += PAGE_SIZE

    def _search(self, query: str) -> list[dict[str, object]]:
        response = (
            self.client.table(self.table_name)
            .select("*")
            .ilike("description", f"%{query}%")
            .limit(20)
            .execute()
        )
        return response.data or []

    def _get(self, record_id: int) -> dict[str, object] | None:
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]
