"""Meal resolution with per-session memoization and request supersession."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from meal_nutrition.domain.composition import CompositionRecord
from meal_nutrition.domain.extraction import ParsedIngredient
from meal_nutrition.domain.meals import (
    DailyAggregate,
    MealNutritionResult,
    ResolvedIngredient,
)
from meal_nutrition.domain.nutrients import NutritionTotals
from meal_nutrition.services import matching
from meal_nutrition.services.aggregation import SlotResults, aggregate, aggregate_day
from meal_nutrition.services.composition import (
    CompositionService,
    CompositionUnavailableError,
)
from meal_nutrition.services.extraction import (
    MIN_DESCRIPTION_LENGTH,
    CancellationToken,
    IngredientExtractor,
)
from meal_nutrition.services.scaling import scale

TABLE_UNAVAILABLE_WARNING = "composition_table_unavailable"

_logger = logging.getLogger(__name__)


@dataclass
class NutritionResolver:
    """Resolves meal descriptions for one session.

    Results are cached by trimmed text (case-sensitive). At most one resolution
    is in flight: a miss for the same text joins it, a miss for different text
    supersedes it, and the superseded result is discarded instead of cached.
    """

    extractor: IngredientExtractor
    composition: CompositionService
    search_limit: int = matching.DEFAULT_LIMIT
    _results: dict[str, MealNutritionResult] = field(default_factory=dict, init=False)
    _token: CancellationToken | None = field(default=None, init=False)
    _inflight: "asyncio.Task[MealNutritionResult] | None" = field(
        default=None, init=False
    )
    _inflight_key: str | None = field(default=None, init=False)

    async def resolve(self, meal_description: str) -> MealNutritionResult:
        """Return the nutrient breakdown of a meal description."""
        key = meal_description.strip()
        cached = self._results.get(key)
        if cached is not None:
            return cached

        if len(key) < MIN_DESCRIPTION_LENGTH:
            return MealNutritionResult.empty()

        pending = self._inflight
        if pending is not None and not pending.done() and self._inflight_key == key:
            return await self._join(key, pending)

        token = self._supersede()
        task = asyncio.ensure_future(self._resolve_uncached(key, token))
        self._inflight = task
        self._inflight_key = key
        return await self._join(key, task)

    async def _join(
        self, key: str, task: "asyncio.Task[MealNutritionResult]"
    ) -> MealNutritionResult:
        await asyncio.wait({task})
        if task is self._inflight:
            self._inflight = None
            self._inflight_key = None
        if task.cancelled():
            _logger.debug("Discarding superseded resolution for %r", key)
            return MealNutritionResult.empty()
        return task.result()

    async def _resolve_uncached(
        self, key: str, token: CancellationToken
    ) -> MealNutritionResult:
        extraction = await self.extractor.extract(key, token=token)
        token.raise_if_cancelled()

        if not extraction.ingredients:
            result = MealNutritionResult.empty(
                source=extraction.source, warnings=extraction.warnings
            )
            self._results[key] = result
            return result

        try:
            table = await self.composition.load()
        except CompositionUnavailableError:
            _logger.exception("Composition table unavailable while resolving %r", key)
            return MealNutritionResult.empty(
                parsed=extraction.ingredients,
                source=extraction.source,
                warnings=(*extraction.warnings, TABLE_UNAVAILABLE_WARNING),
            )
        token.raise_if_cancelled()

        foods = tuple(
            resolve_ingredient(ingredient, table) for ingredient in extraction.ingredients
        )
        result = MealNutritionResult(
            foods=foods,
            totals=aggregate(food.nutrients for food in foods if food.matched),
            parsed=extraction.ingredients,
            source=extraction.source,
            warnings=extraction.warnings,
        )
        self._results[key] = result
        return result

    def search(self, query: str) -> list[CompositionRecord]:
        """Rank the loaded table against a query for interactive lookup."""
        return matching.match(query, self.composition.snapshot(), self.search_limit)

    async def lookup(self, query: str) -> list[CompositionRecord]:
        """Query the remote lookup service."""
        if len(query.strip()) < matching.MIN_QUERY_LENGTH:
            return []
        return await self.composition.lookup(query)

    async def get_food(self, record_id: int) -> CompositionRecord | None:
        """Return a composition record by id."""
        return await self.composition.get(record_id)

    def aggregate_day(
        self, day_index: int, slot_results: SlotResults
    ) -> DailyAggregate | None:
        """Fold previously resolved meal-slot totals for one day."""
        return aggregate_day(day_index, slot_results)

    def clear_cache(self) -> None:
        """Forget every memoized result."""
        self._results.clear()

    def cached_keys(self) -> Sequence[str]:
        """Return the descriptions currently memoized."""
        return list(self._results)

    def _supersede(self) -> CancellationToken:
        if self._token is not None:
            self._token.cancel()
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._token = CancellationToken()
        return self._token


def resolve_ingredient(
    ingredient: ParsedIngredient, table: Sequence[CompositionRecord]
) -> ResolvedIngredient:
    """Match an ingredient and scale its nutrients, or mark it as not found."""
    record = matching.best_match(ingredient.name, table)
    if record is None:
        return ResolvedIngredient(
            ingredient=ingredient, record=None, nutrients=NutritionTotals.zero()
        )
    return ResolvedIngredient(
        ingredient=ingredient,
        record=record,
        nutrients=scale(record, ingredient.quantity),
    )
