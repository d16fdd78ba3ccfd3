"""Models for ingredient extraction results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ParsedIngredient(BaseModel):
    """Ingredient name with an estimated quantity."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: Literal["g", "ml", "un"] = "g"

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("unit", mode="before")
    @classmethod
    def _normalize_unit(cls, value: object) -> object:
        if value is None or value == "":
            return "g"
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ExtractionPayload(BaseModel):
    """Structured output of the extraction service."""

    foods: list[ParsedIngredient]
