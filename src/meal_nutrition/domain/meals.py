"""Domain models for meal resolution and aggregation."""

from dataclasses import dataclass
from enum import StrEnum

from meal_nutrition.domain.composition import NOT_FOUND_CATEGORY, CompositionRecord
from meal_nutrition.domain.extraction import ParsedIngredient
from meal_nutrition.domain.nutrients import NutritionTotals


class MealSlot(StrEnum):
    """Meal times of a day, in serving order."""

    BREAKFAST = "breakfast"
    MORNING_SNACK = "morning_snack"
    LUNCH = "lunch"
    BOTTLE = "bottle"
    SNACK = "snack"
    PRE_DINNER = "pre_dinner"
    DINNER = "dinner"


class ExtractionSource(StrEnum):
    """Which path produced the parsed ingredients."""

    AI = "ai"
    LEGACY = "legacy"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedIngredient:
    """Parsed ingredient with its matched record and scaled nutrients."""

    ingredient: ParsedIngredient
    record: CompositionRecord | None
    nutrients: NutritionTotals

    @property
    def name(self) -> str:
        return self.ingredient.name

    @property
    def quantity(self) -> float:
        return self.ingredient.quantity

    @property
    def unit(self) -> str:
        return self.ingredient.unit

    @property
    def matched(self) -> bool:
        return self.record is not None

    @property
    def description(self) -> str:
        if self.record is None:
            return self.ingredient.name
        return self.record.description

    @property
    def category(self) -> str:
        if self.record is None:
            return NOT_FOUND_CATEGORY
        return self.record.category


@dataclass(frozen=True)
class MealNutritionResult:
    """Resolved ingredients and totals for one meal description."""

    foods: tuple[ResolvedIngredient, ...]
    totals: NutritionTotals | None
    parsed: tuple[ParsedIngredient, ...] = ()
    source: ExtractionSource = ExtractionSource.NONE
    warnings: tuple[str, ...] = ()

    @classmethod
    def empty(cls, **kwargs: object) -> "MealNutritionResult":
        """Return a result with no foods and no totals."""
        return cls(foods=(), totals=None, **kwargs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class DailyAggregate:
    """Totals for one day folded over its meal slots."""

    day_index: int
    totals: NutritionTotals
    slots: tuple[MealSlot, ...]


@dataclass(frozen=True)
class WeeklySummary:
    """Per-day aggregates with the average over days that have data."""

    days: tuple[DailyAggregate | None, ...]
    average: NutritionTotals
    days_with_data: int
