"""Offline parser for "Name: 100g, Name2: 50ml" quantity strings."""

import re

from pydantic import ValidationError

from meal_nutrition.domain.extraction import ParsedIngredient
from meal_nutrition.services.text import collapse_whitespace

GENERIC_PORTION_NAME = "Porção"
MIN_INPUT_LENGTH = 3

_NAMED_PATTERN = re.compile(r"^(.+?):\s*(\d+(?:\.\d+)?)\s*(g|ml|un)?$", re.IGNORECASE)
_BARE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*(g|ml|un)?$", re.IGNORECASE)


def parse(text: str) -> list[ParsedIngredient]:
    """Parse comma-separated ingredient quantities, dropping unrecognized segments."""
    if len(text.strip()) < MIN_INPUT_LENGTH:
        return []

    ingredients: list[ParsedIngredient] = []
    for segment in text.split(","):
        ingredient = _parse_segment(segment.strip())
        if ingredient is not None:
            ingredients.append(ingredient)
    return ingredients


def _parse_segment(segment: str) -> ParsedIngredient | None:
    named = _NAMED_PATTERN.match(segment)
    if named:
        name, quantity, unit = named.groups()
        return _build(collapse_whitespace(name), quantity, unit)
    bare = _BARE_PATTERN.match(segment)
    if bare:
        quantity, unit = bare.groups()
        return _build(GENERIC_PORTION_NAME, quantity, unit)
    return None


def _build(name: str, quantity: str, unit: str | None) -> ParsedIngredient | None:
    try:
        return ParsedIngredient(name=name, quantity=float(quantity), unit=unit or "g")
    except ValidationError:
        return None
