"""Scaling of per-base-quantity nutrient values to a requested quantity."""

from meal_nutrition.domain.composition import CompositionRecord
from meal_nutrition.domain.nutrients import Nutrient, NutritionTotals


def scale(record: CompositionRecord, quantity: float) -> NutritionTotals:
    """Return the record's nutrients for ``quantity`` units of the food."""
    if quantity <= 0:
        raise ValueError(f"quantity must be positive, got {quantity}")
    if record.base_quantity <= 0:
        raise ValueError(f"record {record.id} has a non-positive base quantity")
    multiplier = quantity / record.base_quantity
    return NutritionTotals(
        **{nutrient.value: record.amount(nutrient) * multiplier for nutrient in Nutrient}
    )
