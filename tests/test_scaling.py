"""Tests for nutrient scaling."""

import pytest

from meal_nutrition.domain.composition import CompositionRecord
from meal_nutrition.domain.nutrients import Nutrient, NutrientAmount
from meal_nutrition.services.scaling import scale


def _record(base_quantity: float = 100.0) -> CompositionRecord:
    return CompositionRecord(
        id=1,
        description="Arroz, integral, cozido",
        category="Cereais e derivados",
        base_quantity=base_quantity,
        attributes={
            Nutrient.ENERGY: NutrientAmount(quantity=124, unit="kcal"),
            Nutrient.PROTEIN: NutrientAmount(quantity=2.6, unit="g"),
        },
    )


def test_scales_linearly() -> None:
    totals = scale(_record(), 60)

    assert totals.energy == pytest.approx(74.4)
    assert totals.protein == pytest.approx(1.56)


def test_missing_attributes_scale_to_zero() -> None:
    totals = scale(_record(), 250)

    assert totals.iron == 0.0
    assert totals.vitamin_c == 0.0


def test_respects_base_quantity() -> None:
    totals = scale(_record(base_quantity=50), 50)

    assert totals.energy == pytest.approx(124)


def test_doubling_quantity_doubles_values() -> None:
    single = scale(_record(), 40)
    double = scale(_record(), 80)

    assert double.energy == pytest.approx(single.energy * 2)


def test_rejects_non_positive_quantities() -> None:
    with pytest.raises(ValueError):
        scale(_record(), 0)
    with pytest.raises(ValueError):
        scale(_record(base_quantity=0), 10)
