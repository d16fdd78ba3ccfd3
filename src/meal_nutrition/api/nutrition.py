"""Nutrition resolution and aggregation endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from meal_nutrition.api.models import DayRequest, ResolveRequest, WeekRequest
from meal_nutrition.domain.nutrients import NutritionTotals
from meal_nutrition.domain.targets import (
    AGE_RANGES,
    PNAE_TARGETS_BY_AGE,
    MenuType,
    assess_totals,
)
from meal_nutrition.services.aggregation import SlotResults, summarize_week
from meal_nutrition.services.composition import CompositionUnavailableError
from meal_nutrition.services.resolution import NutritionResolver  # noqa: TC001

if TYPE_CHECKING:
    from meal_nutrition.domain.composition import CompositionRecord
    from meal_nutrition.domain.meals import (
        DailyAggregate,
        MealNutritionResult,
        ResolvedIngredient,
    )
    from meal_nutrition.services.sessions import ResolverSessions

router = APIRouter(prefix="/nutrition", tags=["nutrition"])

SESSION_HEADER = "X-Session-Id"

_logger = logging.getLogger(__name__)


def get_resolver(
    request: Request,
    response: Response,
    x_session_id: str | None = Header(default=None),
) -> NutritionResolver:
    """Return the caller's session resolver and echo its session id."""
    sessions: ResolverSessions = request.app.state.sessions
    session_id, resolver = sessions.get(x_session_id)
    response.headers[SESSION_HEADER] = session_id
    return resolver


@router.get("/search")
async def search(
    q: str, resolver: NutritionResolver = Depends(get_resolver)
) -> dict[str, object]:
    """Rank the composition table against a query."""
    try:
        await resolver.composition.load()
    except CompositionUnavailableError as exc:
        _logger.exception("Composition table unavailable for search")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Composition table unavailable",
        ) from exc
    return {"foods": [_serialize_record(food) for food in resolver.search(q)]}


@router.get("/lookup")
async def lookup(
    q: str, resolver: NutritionResolver = Depends(get_resolver)
) -> dict[str, object]:
    """Search the remote composition lookup service."""
    foods = await resolver.lookup(q)
    return {"foods": [_serialize_record(food) for food in foods]}


@router.get("/foods/{record_id}")
async def get_food(
    record_id: int, resolver: NutritionResolver = Depends(get_resolver)
) -> dict[str, object]:
    """Return one composition record."""
    try:
        record = await resolver.get_food(record_id)
    except CompositionUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Composition lookup unavailable",
        ) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _serialize_record(record)


@router.post("/resolve")
async def resolve(
    payload: ResolveRequest, resolver: NutritionResolver = Depends(get_resolver)
) -> dict[str, object]:
    """Resolve a meal description into ingredients and totals."""
    result = await resolver.resolve(payload.meal_description)
    return _serialize_result(result)


@router.post("/days")
async def day_totals(
    payload: DayRequest, resolver: NutritionResolver = Depends(get_resolver)
) -> dict[str, object]:
    """Fold the meal-slot totals of one day."""
    day = resolver.aggregate_day(payload.day_index, _slot_results(payload))
    return {"day": _serialize_day(day)}


@router.post("/weeks")
async def week_summary(
    payload: WeekRequest, resolver: NutritionResolver = Depends(get_resolver)
) -> dict[str, object]:
    """Summarize several days and compare the average with reference targets."""
    days = [
        resolver.aggregate_day(day.day_index, _slot_results(day))
        for day in payload.days
    ]
    summary = summarize_week(days)
    if summary is None:
        return {"days": [None] * len(days), "average": None, "adequacy": None}

    adequacy = None
    if payload.menu_type is not None:
        report = assess_totals(summary.average, PNAE_TARGETS_BY_AGE[payload.menu_type])
        adequacy = {
            nutrient.value: result.value if result else None
            for nutrient, result in report.items()
        }
    return {
        "days": [_serialize_day(day) for day in summary.days],
        "average": summary.average.as_dict(),
        "days_with_data": summary.days_with_data,
        "adequacy": adequacy,
    }


@router.get("/targets/{menu_type}")
async def targets(menu_type: MenuType) -> dict[str, object]:
    """Return the reference targets for an age group."""
    return {
        "menu_type": menu_type.value,
        "age_range": AGE_RANGES[menu_type],
        "targets": asdict(PNAE_TARGETS_BY_AGE[menu_type]),
    }


def _slot_results(day: DayRequest) -> SlotResults:
    return {
        (day.day_index, slot): (
            None if values is None else NutritionTotals.from_mapping(values)
        )
        for slot, values in day.slots.items()
    }


def _serialize_record(record: CompositionRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "description": record.description,
        "category": record.category,
        "base_qty": record.base_quantity,
        "base_unit": record.base_unit,
        "source": record.source,
        "attributes": {
            nutrient.value: {"qty": amount.quantity, "unit": amount.unit}
            for nutrient, amount in record.attributes.items()
        },
    }


def _serialize_ingredient(food: ResolvedIngredient) -> dict[str, object]:
    return {
        "id": food.record.id if food.record else None,
        "name": food.name,
        "description": food.description,
        "category": food.category,
        "quantity": food.quantity,
        "unit": food.unit,
        "matched": food.matched,
        "nutrients": food.nutrients.as_dict(),
    }


def _serialize_result(result: MealNutritionResult) -> dict[str, object]:
    return {
        "foods": [_serialize_ingredient(food) for food in result.foods],
        "totals": result.totals.as_dict() if result.totals else None,
        "parsed": [ingredient.model_dump() for ingredient in result.parsed],
        "source": result.source.value,
        "warnings": list(result.warnings),
    }


def _serialize_day(day: DailyAggregate | None) -> dict[str, object] | None:
    if day is None:
        return None
    return {
        "day_index": day.day_index,
        "totals": day.totals.as_dict(),
        "slots": [slot.value for slot in day.slots],
    }
