"""Nutrient keys and fixed-schema nutrient vectors."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from enum import StrEnum


class Nutrient(StrEnum):
    """Nutrients tracked for every composition record."""

    ENERGY = "energy"
    PROTEIN = "protein"
    LIPID = "lipid"
    CARBOHYDRATE = "carbohydrate"
    FIBER = "fiber"
    CALCIUM = "calcium"
    IRON = "iron"
    SODIUM = "sodium"
    POTASSIUM = "potassium"
    MAGNESIUM = "magnesium"
    PHOSPHORUS = "phosphorus"
    ZINC = "zinc"
    COPPER = "copper"
    MANGANESE = "manganese"
    VITAMIN_C = "vitamin_c"
    VITAMIN_A = "vitamin_a"
    RETINOL = "retinol"
    THIAMINE = "thiamine"
    RIBOFLAVIN = "riboflavin"
    PYRIDOXINE = "pyridoxine"
    NIACIN = "niacin"
    CHOLESTEROL = "cholesterol"
    SATURATED = "saturated"
    MONOUNSATURATED = "monounsaturated"
    POLYUNSATURATED = "polyunsaturated"


NUTRIENT_UNITS: dict[Nutrient, str] = {
    Nutrient.ENERGY: "kcal",
    Nutrient.PROTEIN: "g",
    Nutrient.LIPID: "g",
    Nutrient.CARBOHYDRATE: "g",
    Nutrient.FIBER: "g",
    Nutrient.CALCIUM: "mg",
    Nutrient.IRON: "mg",
    Nutrient.SODIUM: "mg",
    Nutrient.POTASSIUM: "mg",
    Nutrient.MAGNESIUM: "mg",
    Nutrient.PHOSPHORUS: "mg",
    Nutrient.ZINC: "mg",
    Nutrient.COPPER: "mg",
    Nutrient.MANGANESE: "mg",
    Nutrient.VITAMIN_C: "mg",
    Nutrient.VITAMIN_A: "µg",
    Nutrient.RETINOL: "µg",
    Nutrient.THIAMINE: "mg",
    Nutrient.RIBOFLAVIN: "mg",
    Nutrient.PYRIDOXINE: "mg",
    Nutrient.NIACIN: "mg",
    Nutrient.CHOLESTEROL: "mg",
    Nutrient.SATURATED: "g",
    Nutrient.MONOUNSATURATED: "g",
    Nutrient.POLYUNSATURATED: "g",
}


@dataclass(frozen=True)
class NutrientAmount:
    """Amount of a single nutrient with its unit."""

    quantity: float
    unit: str


@dataclass(frozen=True)
class NutritionTotals:
    """Nutrient vector with one field per tracked nutrient."""

    energy: float = 0.0
    protein: float = 0.0
    lipid: float = 0.0
    carbohydrate: float = 0.0
    fiber: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    sodium: float = 0.0
    potassium: float = 0.0
    magnesium: float = 0.0
    phosphorus: float = 0.0
    zinc: float = 0.0
    copper: float = 0.0
    manganese: float = 0.0
    vitamin_c: float = 0.0
    vitamin_a: float = 0.0
    retinol: float = 0.0
    thiamine: float = 0.0
    riboflavin: float = 0.0
    pyridoxine: float = 0.0
    niacin: float = 0.0
    cholesterol: float = 0.0
    saturated: float = 0.0
    monounsaturated: float = 0.0
    polyunsaturated: float = 0.0

    @classmethod
    def zero(cls) -> "NutritionTotals":
        """Return the all-zero vector."""
        return cls()

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "NutritionTotals":
        """Build a vector from a nutrient-keyed mapping; unknown keys are ignored."""
        known = {nutrient.value for nutrient in Nutrient}
        return cls(
            **{
                str(key): float(value)
                for key, value in values.items()
                if str(key) in known
            }
        )

    def get(self, nutrient: Nutrient | str) -> float:
        """Return the value for a nutrient key."""
        return getattr(self, Nutrient(nutrient).value)

    def scaled(self, factor: float) -> "NutritionTotals":
        """Return a copy with every value multiplied by ``factor``."""
        return NutritionTotals(
            **{nutrient.value: self.get(nutrient) * factor for nutrient in Nutrient}
        )

    def as_dict(self) -> dict[str, float]:
        """Return the vector as a plain dictionary."""
        return asdict(self)

    def __add__(self, other: "NutritionTotals") -> "NutritionTotals":
        if not isinstance(other, NutritionTotals):
            return NotImplemented
        return NutritionTotals(
            **{
                nutrient.value: self.get(nutrient) + other.get(nutrient)
                for nutrient in Nutrient
            }
        )


if {field.name for field in fields(NutritionTotals)} != {n.value for n in Nutrient}:
    raise RuntimeError("NutritionTotals fields must match the Nutrient enum")
