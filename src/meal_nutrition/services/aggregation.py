"""Summation of nutrient vectors across ingredients, meal slots and days."""

from collections.abc import Iterable, Mapping, Sequence
from functools import reduce
from operator import add

from meal_nutrition.domain.meals import DailyAggregate, MealSlot, WeeklySummary
from meal_nutrition.domain.nutrients import NutritionTotals

SlotResults = Mapping[tuple[int, MealSlot], NutritionTotals | None]


def aggregate(vectors: Iterable[NutritionTotals]) -> NutritionTotals | None:
    """Sum vectors element-wise; None when there is nothing to sum."""
    items = list(vectors)
    if not items:
        return None
    return reduce(add, items, NutritionTotals.zero())


def aggregate_day(day_index: int, slot_results: SlotResults) -> DailyAggregate | None:
    """Fold the meal-slot totals of one day in serving order."""
    slots: list[MealSlot] = []
    vectors: list[NutritionTotals] = []
    for slot in MealSlot:
        totals = slot_results.get((day_index, slot))
        if totals is None:
            continue
        slots.append(slot)
        vectors.append(totals)

    totals = aggregate(vectors)
    if totals is None:
        return None
    return DailyAggregate(day_index=day_index, totals=totals, slots=tuple(slots))


def summarize_week(days: Sequence[DailyAggregate | None]) -> WeeklySummary | None:
    """Average daily totals over the days that have data."""
    with_data = [day.totals for day in days if day is not None]
    total = aggregate(with_data)
    if total is None:
        return None
    return WeeklySummary(
        days=tuple(days),
        average=total.scaled(1 / len(with_data)),
        days_with_data=len(with_data),
    )
