"""Tests for nutrient aggregation across meals and days."""

import pytest

from meal_nutrition.domain.meals import MealSlot
from meal_nutrition.domain.nutrients import NutritionTotals
from meal_nutrition.services.aggregation import aggregate, aggregate_day, summarize_week

A = NutritionTotals(energy=100, protein=2.5, iron=0.3)
B = NutritionTotals(energy=50.5, calcium=20)
C = NutritionTotals(energy=10, protein=1, fiber=3)


def test_aggregate_of_nothing_is_none() -> None:
    assert aggregate([]) is None


def test_aggregate_sums_element_wise() -> None:
    totals = aggregate([A, B])

    assert totals == NutritionTotals(energy=150.5, protein=2.5, iron=0.3, calcium=20)


def test_aggregate_is_order_independent() -> None:
    left = aggregate([A, B, C])
    right = aggregate([C, A, B])

    assert left is not None
    assert right is not None
    for key, value in left.as_dict().items():
        assert right.as_dict()[key] == pytest.approx(value)


def test_aggregate_is_associative() -> None:
    nested = aggregate([aggregate([A, B]), C])  # type: ignore[list-item]
    flat = aggregate([A, B, C])

    assert nested is not None
    assert flat is not None
    assert nested.energy == pytest.approx(flat.energy)


def test_aggregate_day_skips_missing_slots() -> None:
    results = {
        (0, MealSlot.LUNCH): A,
        (0, MealSlot.BREAKFAST): B,
        (0, MealSlot.DINNER): None,
        (1, MealSlot.LUNCH): C,
    }

    day = aggregate_day(0, results)

    assert day is not None
    assert day.slots == (MealSlot.BREAKFAST, MealSlot.LUNCH)
    assert day.totals.energy == pytest.approx(150.5)


def test_aggregate_day_without_data_is_none() -> None:
    assert aggregate_day(3, {(3, MealSlot.SNACK): None}) is None


def test_summarize_week_averages_days_with_data() -> None:
    day_one = aggregate_day(0, {(0, MealSlot.LUNCH): A})
    day_two = aggregate_day(1, {(1, MealSlot.LUNCH): NutritionTotals(energy=300)})

    summary = summarize_week([day_one, None, day_two])

    assert summary is not None
    assert summary.days_with_data == 2
    assert summary.average.energy == pytest.approx(200)
    assert summary.days[1] is None


def test_summarize_week_without_data_is_none() -> None:
    assert summarize_week([None, None]) is None
