"""Composition table loading, caching and lookup."""

import asyncio
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from meal_nutrition.data.extra_foods import EXTRA_FOODS
from meal_nutrition.domain.composition import CompositionRecord
from meal_nutrition.domain.nutrients import NUTRIENT_UNITS, Nutrient, NutrientAmount
from meal_nutrition.services.cache import Cache
from meal_nutrition.services.text import normalize, normalize_text

TABLE_CACHE_KEY = "composition:table"

_RAW_COLUMNS: dict[Nutrient, str] = {
    Nutrient.ENERGY: "energy_kcal",
    Nutrient.PROTEIN: "protein_g",
    Nutrient.LIPID: "lipid_g",
    Nutrient.CARBOHYDRATE: "carbohydrate_g",
    Nutrient.FIBER: "fiber_g",
    Nutrient.CALCIUM: "calcium_mg",
    Nutrient.IRON: "iron_mg",
    Nutrient.SODIUM: "sodium_mg",
    Nutrient.POTASSIUM: "potassium_mg",
    Nutrient.MAGNESIUM: "magnesium_mg",
    Nutrient.PHOSPHORUS: "phosphorus_mg",
    Nutrient.ZINC: "zinc_mg",
    Nutrient.COPPER: "copper_mg",
    Nutrient.MANGANESE: "manganese_mg",
    Nutrient.VITAMIN_C: "vitaminC_mg",
    Nutrient.VITAMIN_A: "rae_mcg",
    Nutrient.RETINOL: "retinol_mcg",
    Nutrient.THIAMINE: "thiamine_mg",
    Nutrient.RIBOFLAVIN: "riboflavin_mg",
    Nutrient.PYRIDOXINE: "pyridoxine_mg",
    Nutrient.NIACIN: "niacin_mg",
    Nutrient.CHOLESTEROL: "cholesterol_mg",
    Nutrient.SATURATED: "saturated_g",
    Nutrient.MONOUNSATURATED: "monounsaturated_g",
    Nutrient.POLYUNSATURATED: "polyunsaturated_g",
}

_MISSING_MARKERS = {"", "NA", "Tr", "*", "-"}

_logger = logging.getLogger(__name__)


class CompositionUnavailableError(RuntimeError):
    """Raised when no composition table can be obtained."""


class CompositionSource(Protocol):
    """Interface for remote composition data."""

    name: str

    async def fetch_table(self) -> list[dict[str, object]]:
        """Return every composition row."""

    async def search_foods(self, query: str) -> list[dict[str, object]]:
        """Return composition rows matching a free-text query."""

    async def get_food(self, record_id: int) -> dict[str, object] | None:
        """Return one composition row by id, if it exists."""


@dataclass
class CompositionService:
    """Shared, time-cached access to the composition table."""

    source: CompositionSource
    cache: Cache
    ttl_seconds: int = 3600
    timeout_seconds: float = 15.0
    include_extra_foods: bool = True
    _extras: list[CompositionRecord] = field(default_factory=list, init=False)
    _last_good: list[CompositionRecord] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.include_extra_foods:
            self._extras = [_extra_record(food) for food in EXTRA_FOODS]

    async def load(self) -> list[CompositionRecord]:
        """Return the full table, fetching it when the cached copy has expired."""
        cached = self.cache.get(TABLE_CACHE_KEY)
        if isinstance(cached, list):
            return cached

        try:
            rows = await asyncio.wait_for(
                self.source.fetch_table(), timeout=self.timeout_seconds
            )
        except Exception as exc:
            if self._last_good is not None:
                _logger.warning(
                    "Composition refresh from %s failed, reusing previous table: %r",
                    self.source.name,
                    exc,
                )
                return self._last_good
            raise CompositionUnavailableError(
                f"Composition table unavailable from {self.source.name}"
            ) from exc

        records = parse_records(rows, source=self.source.name)
        if not records:
            if self._last_good is not None:
                return self._last_good
            raise CompositionUnavailableError(
                f"Composition source {self.source.name} returned no records"
            )

        table = _merge(self._extras, records)
        self.cache.set(TABLE_CACHE_KEY, table, ttl_seconds=self.ttl_seconds)
        self._last_good = table
        _logger.info(
            "Loaded %s composition records from %s", len(table), self.source.name
        )
        return table

    def snapshot(self) -> list[CompositionRecord]:
        """Return the most recently loaded table without any I/O."""
        if self._last_good is None:
            return list(self._extras)
        return self._last_good

    def invalidate(self) -> None:
        """Force the next load to refetch the table."""
        self.cache.delete(TABLE_CACHE_KEY)

    async def get(self, record_id: int) -> CompositionRecord | None:
        """Return a record by id from the loaded table or the remote source."""
        for record in self.snapshot():
            if record.id == record_id:
                return record
        try:
            row = await asyncio.wait_for(
                self.source.get_food(record_id), timeout=self.timeout_seconds
            )
        except Exception as exc:
            raise CompositionUnavailableError(
                f"Could not fetch record {record_id} from {self.source.name}"
            ) from exc
        if not row:
            return None
        return parse_record(row, source=self.source.name)

    async def lookup(self, query: str) -> list[CompositionRecord]:
        """Query the remote lookup service, extra foods first, without duplicates."""
        words = normalize(query)
        extras = [
            record
            for record in self._extras
            if any(word in normalize_text(record.description) for word in words)
        ]
        remote: list[CompositionRecord] = []
        try:
            rows = await asyncio.wait_for(
                self.source.search_foods(query), timeout=self.timeout_seconds
            )
            remote = parse_records(rows, source=self.source.name)
        except Exception as exc:
            _logger.warning("Composition lookup failed for %r: %r", query, exc)
        return _merge(extras, remote)


def parse_records(
    rows: Iterable[dict[str, object]], *, source: str
) -> list[CompositionRecord]:
    """Parse rows, skipping the ones without a usable id or description."""
    records = []
    skipped = 0
    for row in rows:
        try:
            records.append(parse_record(row, source=source))
        except (KeyError, TypeError, ValueError):
            skipped += 1
    if skipped:
        _logger.warning("Skipped %s malformed composition rows from %s", skipped, source)
    return records


def parse_record(row: dict[str, object], *, source: str) -> CompositionRecord:
    """Parse a raw TACO row or an already normalized record payload."""
    description = str(row["description"]).strip()
    if not description:
        raise ValueError("composition row without description")
    attributes_raw = row.get("attributes")
    if isinstance(attributes_raw, dict):
        attributes = _parse_attributes(attributes_raw)
    else:
        attributes = {
            nutrient: NutrientAmount(
                quantity=parse_number(row.get(column)),
                unit=NUTRIENT_UNITS[nutrient],
            )
            for nutrient, column in _RAW_COLUMNS.items()
        }
    base_quantity = parse_number(row.get("base_qty", 100)) or 100.0
    return CompositionRecord(
        id=int(row["id"]),  # type: ignore[arg-type]
        description=description,
        category=_parse_category(row.get("category")),
        base_quantity=base_quantity,
        base_unit=str(row.get("base_unit") or "g"),
        attributes=attributes,
        source=str(row.get("source") or source),
    )


def parse_number(value: object) -> float:
    """Parse a TACO cell; missing, trace and invalid values count as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        cleaned = value.strip()
        if cleaned in _MISSING_MARKERS:
            return 0.0
        try:
            number = float(cleaned.replace(",", "."))
        except ValueError:
            return 0.0
    elif isinstance(value, int | float):
        number = float(value)
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def _parse_attributes(raw: dict[str, object]) -> dict[Nutrient, NutrientAmount]:
    attributes: dict[Nutrient, NutrientAmount] = {}
    for key, value in raw.items():
        try:
            nutrient = Nutrient(key)
        except ValueError:
            continue
        if isinstance(value, dict):
            quantity = parse_number(value.get("qty", value.get("quantity")))
            unit = str(value.get("unit") or NUTRIENT_UNITS[nutrient])
        else:
            quantity = parse_number(value)
            unit = NUTRIENT_UNITS[nutrient]
        attributes[nutrient] = NutrientAmount(quantity=quantity, unit=unit)
    return attributes


def _parse_category(value: object) -> str:
    if isinstance(value, dict):
        return str(value.get("description") or "")
    if value is None:
        return ""
    return str(value)


def _extra_record(food: dict[str, object]) -> CompositionRecord:
    values: dict[str, float] = food["values"]  # type: ignore[assignment]
    return CompositionRecord(
        id=int(food["id"]),  # type: ignore[arg-type]
        description=str(food["description"]),
        category=str(food["category"]),
        attributes={
            Nutrient(key): NutrientAmount(
                quantity=float(amount), unit=NUTRIENT_UNITS[Nutrient(key)]
            )
            for key, amount in values.items()
        },
        source="extra",
    )


def _merge(*groups: list[CompositionRecord]) -> list[CompositionRecord]:
    seen: set[str] = set()
    merged = []
    for group in groups:
        for record in group:
            key = normalize_text(record.description)
            if key in seen:
                continue
            seen.add(key)
            merged.append(record)
    return merged
