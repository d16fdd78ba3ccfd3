"""Reference nutrient targets for school menus by age group."""

from dataclasses import dataclass
from enum import StrEnum

from meal_nutrition.domain.nutrients import Nutrient, NutritionTotals

ADEQUATE_LOW = 0.9
ADEQUATE_HIGH = 1.1
ATTENTION_LOW = 0.7


class MenuType(StrEnum):
    """Age groups with their own menu and targets."""

    BERCARIO_0_6 = "bercario_0_6"
    BERCARIO_6_12 = "bercario_6_12"
    BERCARIO_12_24 = "bercario_12_24"
    MATERNAL = "maternal"


class AdequacyStatus(StrEnum):
    """How close a nutrient value is to its reference target."""

    ADEQUATE = "adequate"
    ATTENTION = "attention"
    LOW = "low"


AGE_RANGES: dict[MenuType, str] = {
    MenuType.BERCARIO_0_6: "0 a 6 meses",
    MenuType.BERCARIO_6_12: "6 a 12 meses",
    MenuType.BERCARIO_12_24: "1 a 2 anos",
    MenuType.MATERNAL: "3 a 5 anos",
}


@dataclass(frozen=True)
class NutritionTargets:
    """Daily reference targets for the nutrients tracked on menus."""

    energy: float
    protein: float
    lipid: float
    carbohydrate: float
    fiber: float
    calcium: float
    iron: float
    sodium: float
    potassium: float
    magnesium: float
    phosphorus: float
    zinc: float
    vitamin_a: float
    vitamin_c: float

    def get(self, nutrient: Nutrient | str) -> float | None:
        """Return the target for a nutrient, or None when no target is defined."""
        return getattr(self, Nutrient(nutrient).value, None)


# PNAE guidelines, roughly 70% of daily needs for full-time attendance.
PNAE_TARGETS_BY_AGE: dict[MenuType, NutritionTargets] = {
    MenuType.BERCARIO_0_6: NutritionTargets(
        energy=500,
        protein=9,
        lipid=30,
        carbohydrate=60,
        fiber=0,
        calcium=210,
        iron=0.27,
        sodium=100,
        potassium=400,
        magnesium=30,
        phosphorus=100,
        zinc=2,
        vitamin_a=400,
        vitamin_c=40,
    ),
    MenuType.BERCARIO_6_12: NutritionTargets(
        energy=700,
        protein=11,
        lipid=30,
        carbohydrate=95,
        fiber=5,
        calcium=260,
        iron=11,
        sodium=300,
        potassium=700,
        magnesium=75,
        phosphorus=275,
        zinc=3,
        vitamin_a=500,
        vitamin_c=50,
    ),
    MenuType.BERCARIO_12_24: NutritionTargets(
        energy=900,
        protein=13,
        lipid=35,
        carbohydrate=130,
        fiber=19,
        calcium=500,
        iron=7,
        sodium=800,
        potassium=3000,
        magnesium=80,
        phosphorus=460,
        zinc=3,
        vitamin_a=300,
        vitamin_c=15,
    ),
    MenuType.MATERNAL: NutritionTargets(
        energy=1200,
        protein=19,
        lipid=40,
        carbohydrate=180,
        fiber=25,
        calcium=800,
        iron=10,
        sodium=1200,
        potassium=3800,
        magnesium=130,
        phosphorus=500,
        zinc=5,
        vitamin_a=400,
        vitamin_c=25,
    ),
}


def evaluate_adequacy(value: float, target: float) -> AdequacyStatus | None:
    """Classify a value against its target; None when the target is zero."""
    if target <= 0:
        return None
    ratio = value / target
    if ADEQUATE_LOW <= ratio <= ADEQUATE_HIGH:
        return AdequacyStatus.ADEQUATE
    if ratio >= ATTENTION_LOW:
        return AdequacyStatus.ATTENTION
    return AdequacyStatus.LOW


def assess_totals(
    totals: NutritionTotals, targets: NutritionTargets
) -> dict[Nutrient, AdequacyStatus | None]:
    """Return the adequacy status of every nutrient that has a target."""
    report: dict[Nutrient, AdequacyStatus | None] = {}
    for nutrient in Nutrient:
        target = targets.get(nutrient)
        if target is None:
            continue
        report[nutrient] = evaluate_adequacy(totals.get(nutrient), target)
    return report
