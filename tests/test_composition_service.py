"""Tests for composition table loading and lookup."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from meal_nutrition.domain.nutrients import Nutrient
from meal_nutrition.services.cache import InMemoryCache
from meal_nutrition.services.composition import (
    CompositionService,
    CompositionUnavailableError,
    parse_number,
    parse_record,
    parse_records,
)
from tests.conftest import TACO_ROWS, FakeCompositionSource


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12.5, 12.5),
        ("3.4", 3.4),
        ("1,5", 1.5),
        ("NA", 0.0),
        ("Tr", 0.0),
        ("*", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (-2, 0.0),
        (True, 0.0),
    ],
)
def test_parse_number(value: object, expected: float) -> None:
    assert parse_number(value) == expected


def test_parse_raw_taco_row() -> None:
    record = parse_record(TACO_ROWS[4], source="taco")

    assert record.id == 182
    assert record.category == "Frutas e derivados"
    assert record.amount(Nutrient.VITAMIN_C) == 21.6
    assert record.amount(Nutrient.SODIUM) == 0.0
    assert record.attributes[Nutrient.ENERGY].unit == "kcal"
    assert record.base_quantity == 100.0
    assert record.source == "taco"


def test_parse_normalized_record() -> None:
    record = parse_record(
        {
            "id": 7,
            "description": "Leite, de vaca, desnatado",
            "category": {"id": 11, "description": "Leite e derivados"},
            "base_qty": 100,
            "base_unit": "ml",
            "attributes": {
                "energy": {"qty": 35, "unit": "kcal"},
                "calcium": "134",
                "unknown": 1,
            },
        },
        source="lookup",
    )

    assert record.category == "Leite e derivados"
    assert record.base_unit == "ml"
    assert record.amount(Nutrient.ENERGY) == 35
    assert record.amount(Nutrient.CALCIUM) == 134
    assert record.amount(Nutrient.IRON) == 0.0


def test_parse_records_skips_malformed_rows() -> None:
    rows = [TACO_ROWS[0], {"id": 2}, {"id": "x", "description": "Pão"}, TACO_ROWS[2]]

    records = parse_records(rows, source="taco")

    assert [record.id for record in records] == [1, 561]


def test_load_is_cached_until_ttl_expires() -> None:
    now = [datetime(2024, 3, 1, tzinfo=UTC)]
    source = FakeCompositionSource()
    service = CompositionService(
        source=source,
        cache=InMemoryCache(clock=lambda: now[0]),
        ttl_seconds=60,
        include_extra_foods=False,
    )

    first = asyncio.run(service.load())
    second = asyncio.run(service.load())
    now[0] += timedelta(seconds=61)
    asyncio.run(service.load())

    assert first is second
    assert len(first) == len(TACO_ROWS)
    assert source.fetch_calls == 2


def test_extra_foods_come_first_without_duplicates() -> None:
    source = FakeCompositionSource(
        rows=[*TACO_ROWS, {"id": 999, "description": "Chia, semente"}]
    )
    service = CompositionService(source=source, cache=InMemoryCache())

    table = asyncio.run(service.load())
    chia = [record for record in table if record.description == "Chia, semente"]

    assert table[0].id == 90001
    assert [record.id for record in chia] == [90001]
    assert table[-1].id == TACO_ROWS[-1]["id"]


def test_failed_refresh_reuses_previous_table() -> None:
    source = FakeCompositionSource()
    service = CompositionService(
        source=source, cache=InMemoryCache(), include_extra_foods=False
    )
    loaded = asyncio.run(service.load())

    service.invalidate()
    source.fail = True
    reloaded = asyncio.run(service.load())

    assert reloaded is loaded
    assert source.fetch_calls == 2


def test_unavailable_without_previous_table() -> None:
    service = CompositionService(
        source=FakeCompositionSource(fail=True), cache=InMemoryCache()
    )

    with pytest.raises(CompositionUnavailableError):
        asyncio.run(service.load())


def test_empty_table_is_unavailable() -> None:
    service = CompositionService(
        source=FakeCompositionSource(rows=[]), cache=InMemoryCache()
    )

    with pytest.raises(CompositionUnavailableError):
        asyncio.run(service.load())


def test_snapshot_before_load_holds_extra_foods() -> None:
    service = CompositionService(source=FakeCompositionSource(), cache=InMemoryCache())

    snapshot = service.snapshot()

    assert snapshot
    assert all(record.source == "extra" for record in snapshot)


def test_lookup_puts_matching_extras_first() -> None:
    source = FakeCompositionSource(
        search_rows=[
            {"id": 5, "description": "Quinoa, grão cozido"},
            {"id": 6, "description": "Quinoa, flocos"},
        ]
    )
    service = CompositionService(source=source, cache=InMemoryCache())

    results = asyncio.run(service.lookup("quinoa"))

    assert source.search_calls == ["quinoa"]
    assert results[0].source == "extra"
    assert "Quinoa, flocos" in [record.description for record in results]
    assert [record.description for record in results].count("Quinoa, grão cozido") == 1


def test_lookup_tolerates_remote_failure() -> None:
    service = CompositionService(
        source=FakeCompositionSource(fail=True), cache=InMemoryCache()
    )

    results = asyncio.run(service.lookup("chia"))

    assert [record.id for record in results] == [90001]


def test_get_prefers_loaded_table(composition_service: CompositionService) -> None:
    asyncio.run(composition_service.load())

    record = asyncio.run(composition_service.get(561))

    assert record is not None
    assert record.description == "Feijão, carioca, cozido"


def test_get_falls_back_to_source(composition_service: CompositionService) -> None:
    assert asyncio.run(composition_service.get(409)) is not None
    assert asyncio.run(composition_service.get(123456)) is None


def test_get_raises_when_source_fails() -> None:
    service = CompositionService(
        source=FakeCompositionSource(fail=True),
        cache=InMemoryCache(),
        include_extra_foods=False,
    )

    with pytest.raises(CompositionUnavailableError):
        asyncio.run(service.get(1))
