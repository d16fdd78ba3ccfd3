"""Domain models for the food-composition table."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from meal_nutrition.domain.nutrients import Nutrient, NutrientAmount

NOT_FOUND_CATEGORY = "Não encontrado"


@dataclass(frozen=True)
class CompositionRecord:
    """Reference food with nutrient amounts per base quantity."""

    id: int
    description: str
    category: str
    base_quantity: float = 100.0
    base_unit: str = "g"
    attributes: Mapping[Nutrient, NutrientAmount] = field(default_factory=dict)
    source: str = "taco"

    def amount(self, nutrient: Nutrient) -> float:
        """Return the amount of a nutrient per base quantity, zero if missing."""
        value = self.attributes.get(nutrient)
        if value is None:
            return 0.0
        return value.quantity
