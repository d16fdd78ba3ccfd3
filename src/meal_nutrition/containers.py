"""Dependency container wiring for the engine."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_nutrition.adapters.openai_extraction_client import OpenAIExtractionClient
from meal_nutrition.adapters.supabase_composition_repository import (
    SupabaseCompositionRepository,
)
from meal_nutrition.adapters.taco_client import HttpxTacoClient
from meal_nutrition.config import Settings
from meal_nutrition.services.cache import InMemoryCache
from meal_nutrition.services.composition import CompositionService, CompositionSource
from meal_nutrition.services.extraction import IngredientExtractor
from meal_nutrition.services.resolution import NutritionResolver


@dataclass
class AppContainer:
    """Holds process-wide dependencies."""

    settings: Settings
    composition_service: CompositionService
    extractor: IngredientExtractor
    close_resources: Callable[[], Awaitable[None]]

    def new_resolver(self) -> NutritionResolver:
        """Create a resolver with its own result cache for one session."""
        return NutritionResolver(
            extractor=self.extractor,
            composition=self.composition_service,
            search_limit=self.settings.search_limit,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    closers: list[Callable[[], Awaitable[None]]] = []

    source: CompositionSource
    if resolved_settings.composition_source == "supabase":
        supabase_url = resolved_settings.supabase_url
        supabase_key = resolved_settings.supabase_service_key
        if not supabase_url or not supabase_key:
            raise ValueError("Supabase composition source requires URL and service key")
        source = SupabaseCompositionRepository(
            client=create_client(supabase_url, supabase_key),
            table_name=resolved_settings.supabase_composition_table,
        )
    else:
        taco_client = HttpxTacoClient.create(
            table_url=resolved_settings.taco_json_url,
            lookup_url=resolved_settings.taco_lookup_url,
            timeout_seconds=resolved_settings.composition_timeout_seconds,
        )
        closers.append(taco_client.close)
        source = taco_client

    composition_service = CompositionService(
        source=source,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.composition_ttl_seconds,
        timeout_seconds=resolved_settings.composition_timeout_seconds,
        include_extra_foods=resolved_settings.include_extra_foods,
    )

    extraction_client = None
    if resolved_settings.openai_api_key:
        extraction_client = OpenAIExtractionClient.create(
            resolved_settings.openai_api_key,
            timeout_seconds=resolved_settings.extraction_timeout_seconds,
        )
        closers.append(extraction_client.close)
    extractor = IngredientExtractor(
        client=extraction_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.extraction_timeout_seconds,
        retry_attempts=resolved_settings.extraction_retry_attempts,
        retry_delay_seconds=resolved_settings.extraction_retry_delay_seconds,
    )

    async def close_resources() -> None:
        for close in closers:
            await close()

    return AppContainer(
        settings=resolved_settings,
        composition_service=composition_service,
        extractor=extractor,
        close_resources=close_resources,
    )
