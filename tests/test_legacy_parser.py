"""Tests for the offline quantity parser."""

from meal_nutrition.services import legacy_parser


def test_parses_named_segments() -> None:
    parsed = legacy_parser.parse("Arroz: 100g, Feijão: 50g")

    assert [(item.name, item.quantity, item.unit) for item in parsed] == [
        ("Arroz", 100.0, "g"),
        ("Feijão", 50.0, "g"),
    ]


def test_parses_units_and_decimals() -> None:
    parsed = legacy_parser.parse("Leite: 200 ml, Banana: 2un, Aveia:12.5G")

    assert [(item.name, item.quantity, item.unit) for item in parsed] == [
        ("Leite", 200.0, "ml"),
        ("Banana", 2.0, "un"),
        ("Aveia", 12.5, "g"),
    ]


def test_unit_defaults_to_grams() -> None:
    parsed = legacy_parser.parse("Cenoura: 40")

    assert parsed[0].unit == "g"


def test_bare_quantity_uses_generic_name() -> None:
    parsed = legacy_parser.parse("100g")

    assert len(parsed) == 1
    assert parsed[0].name == legacy_parser.GENERIC_PORTION_NAME
    assert parsed[0].quantity == 100.0


def test_unrecognized_segments_are_dropped() -> None:
    parsed = legacy_parser.parse("arroz com feijão, Carne: 50g, Suco: 0ml")

    assert [item.name for item in parsed] == ["Carne"]


def test_short_or_free_text_yields_nothing() -> None:
    assert legacy_parser.parse("ab") == []
    assert legacy_parser.parse("texto qualquer") == []


def test_bare_millilitres() -> None:
    parsed = legacy_parser.parse("200ml")

    assert [(item.name, item.quantity, item.unit) for item in parsed] == [
        (legacy_parser.GENERIC_PORTION_NAME, 200.0, "ml")
    ]
