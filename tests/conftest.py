"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from meal_nutrition.config import Settings
from meal_nutrition.containers import AppContainer
from meal_nutrition.services.cache import InMemoryCache
from meal_nutrition.services.composition import CompositionService, CompositionSource
from meal_nutrition.services.extraction import ExtractionClient, IngredientExtractor
from meal_nutrition.services.resolution import NutritionResolver

TACO_ROWS: list[dict[str, object]] = [
    {
        "id": 1,
        "description": "Arroz, integral, cozido",
        "category": "Cereais e derivados",
        "energy_kcal": 124,
        "protein_g": 2.6,
        "lipid_g": 1.0,
        "carbohydrate_g": 25.8,
        "fiber_g": 2.7,
        "calcium_mg": 5,
        "iron_mg": 0.3,
        "sodium_mg": 1,
        "retinol_mcg": "NA",
    },
    {
        "id": 3,
        "description": "Arroz, tipo 1, cozido",
        "category": "Cereais e derivados",
        "energy_kcal": 128,
        "protein_g": 2.5,
        "lipid_g": 0.2,
        "carbohydrate_g": 28.1,
        "fiber_g": 1.6,
        "iron_mg": "0.1",
        "sodium_mg": 1,
    },
    {
        "id": 561,
        "description": "Feijão, carioca, cozido",
        "category": "Leguminosas e derivados",
        "energy_kcal": 76,
        "protein_g": 4.8,
        "lipid_g": 0.5,
        "carbohydrate_g": 13.6,
        "fiber_g": 8.5,
        "calcium_mg": 27,
        "iron_mg": 1.3,
        "sodium_mg": 2,
    },
    {
        "id": 409,
        "description": "Frango, peito, sem pele, grelhado",
        "category": "Carnes e derivados",
        "energy_kcal": 159,
        "protein_g": 32.0,
        "lipid_g": 2.5,
        "carbohydrate_g": 0,
        "cholesterol_mg": 89,
        "sodium_mg": 50,
        "iron_mg": "0,3",
    },
    {
        "id": 182,
        "description": "Banana, prata, crua",
        "category": "Frutas e derivados",
        "energy_kcal": 98,
        "protein_g": 1.3,
        "lipid_g": "0.1",
        "carbohydrate_g": 26.0,
        "fiber_g": 2.0,
        "potassium_mg": 358,
        "vitaminC_mg": 21.6,
        "sodium_mg": "Tr",
    },
    {
        "id": 250,
        "description": "Leite, de vaca, integral",
        "category": "Leite e derivados",
        "energy_kcal": 61,
        "protein_g": 2.9,
        "lipid_g": 3.2,
        "carbohydrate_g": 4.3,
        "calcium_mg": 123,
        "sodium_mg": 64,
    },
]


@dataclass
class FakeCompositionSource(CompositionSource):
    """In-memory composition source that counts fetches."""

    rows: list[dict[str, object]] = field(default_factory=lambda: list(TACO_ROWS))
    search_rows: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False
    name: str = "fake"
    fetch_calls: int = 0
    search_calls: list[str] = field(default_factory=list)

    async def fetch_table(self) -> list[dict[str, object]]:
        self.fetch_calls += 1
        if self.fail:
            raise ConnectionError("composition source down")
        return self.rows

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        self.search_calls.append(query)
        if self.fail:
            raise ConnectionError("composition source down")
        return self.search_rows

    async def get_food(self, record_id: int) -> dict[str, object] | None:
        if self.fail:
            raise ConnectionError("composition source down")
        for row in self.rows:
            if row["id"] == record_id:
                return row
        return None


@dataclass
class FakeExtractionClient(ExtractionClient):
    """Fake extraction client replaying queued outcomes.

    Each call consumes the next outcome; the last one is repeated. Exceptions
    are raised instead of returned.
    """

    outcomes: list[str | Exception] = field(
        default_factory=lambda: ['{"foods": []}']
    )
    calls: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        system_prompt: str,
        meal_description: str,
        schema: dict[str, object],
    ) -> str:
        self.calls.append(meal_description)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@dataclass
class GatedExtractionClient(ExtractionClient):
    """Fake client that blocks on gated descriptions until released."""

    responses: dict[str, str]
    gated: set[str] = field(default_factory=set)
    release: asyncio.Event | None = None
    calls: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        system_prompt: str,
        meal_description: str,
        schema: dict[str, object],
    ) -> str:
        self.calls.append(meal_description)
        if meal_description in self.gated:
            if self.release is None:
                self.release = asyncio.Event()
            await self.release.wait()
        return self.responses[meal_description]


def foods_json(*foods: tuple[str, float, str]) -> str:
    """Build an extraction response body."""
    items = ",".join(
        f'{{"name": "{name}", "quantity": {quantity}, "unit": "{unit}"}}'
        for name, quantity, unit in foods
    )
    return f'{{"foods": [{items}]}}'


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        taco_json_url="https://taco.example/tabela.json",
        taco_lookup_url="https://taco.example/lookup",
    )


@pytest.fixture
def composition_source() -> FakeCompositionSource:
    return FakeCompositionSource()


@pytest.fixture
def composition_service(
    composition_source: FakeCompositionSource,
) -> CompositionService:
    return CompositionService(
        source=composition_source,
        cache=InMemoryCache(),
        include_extra_foods=False,
    )


@pytest.fixture
def extraction_client() -> FakeExtractionClient:
    return FakeExtractionClient()


@pytest.fixture
def extractor(extraction_client: FakeExtractionClient) -> IngredientExtractor:
    return IngredientExtractor(
        client=extraction_client,
        model="test-model",
        retry_delay_seconds=0,
    )


@pytest.fixture
def resolver(
    extractor: IngredientExtractor, composition_service: CompositionService
) -> NutritionResolver:
    return NutritionResolver(extractor=extractor, composition=composition_service)


@pytest.fixture
def container(
    settings: Settings,
    composition_service: CompositionService,
    extractor: IngredientExtractor,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        composition_service=composition_service,
        extractor=extractor,
        close_resources=close_resources,
    )
