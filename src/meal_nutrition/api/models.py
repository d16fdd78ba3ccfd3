"""Pydantic models for nutrition API payloads."""

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat

from meal_nutrition.domain.meals import MealSlot
from meal_nutrition.domain.nutrients import Nutrient
from meal_nutrition.domain.targets import MenuType


class ResolveRequest(BaseModel):
    """Meal description to resolve."""

    model_config = ConfigDict(populate_by_name=True)

    meal_description: str = Field(alias="mealDescription")


class DayRequest(BaseModel):
    """Per-slot totals of one day, as returned by earlier resolutions."""

    model_config = ConfigDict(populate_by_name=True)

    day_index: int = Field(alias="dayIndex", ge=0)
    slots: dict[MealSlot, dict[Nutrient, NonNegativeFloat] | None]


class WeekRequest(BaseModel):
    """Days of a week with an optional age group for adequacy checks."""

    model_config = ConfigDict(populate_by_name=True)

    days: list[DayRequest]
    menu_type: MenuType | None = Field(default=None, alias="menuType")
