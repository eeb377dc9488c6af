"""Diary day and meal endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from nutrition_diary.api.schemas import AddMealRequest, EditMealRequest  # noqa: TC001
from nutrition_diary.api.serializers import (
    serialize_day_detail,
    serialize_day_overview,
    serialize_meal_result,
)

if TYPE_CHECKING:
    from nutrition_diary.containers import AppContainer

router = APIRouter(tags=["days"])


@router.get("/days")
async def list_days(request: Request) -> list[dict[str, object]]:
    """Return the latest 30 days, newest first."""
    container: AppContainer = request.app.state.container
    days = container.day_service.list_days(container.profile_id, limit=30)
    return [serialize_day_overview(day) for day in days]


@router.get("/days/{day}")
async def get_day(day: date, request: Request) -> dict[str, object]:
    """Return a day with its meals."""
    container: AppContainer = request.app.state.container
    detail = container.day_service.get_day_detail(container.profile_id, day)
    return serialize_day_detail(detail)


@router.post("/days/{day}/meals", status_code=status.HTTP_201_CREATED)
async def add_meal(
    day: date, payload: AddMealRequest, request: Request
) -> dict[str, object]:
    """Log a meal for a date."""
    container: AppContainer = request.app.state.container
    result = await container.meal_service.add_meal(
        container.profile_id,
        day,
        time=payload.time,
        raw_text=payload.raw_text,
        image_url=payload.image_url,
    )
    return serialize_meal_result(result)


@router.put("/meals/{meal_id}")
async def edit_meal(
    meal_id: UUID, payload: EditMealRequest, request: Request
) -> dict[str, object]:
    """Re-analyse and replace a meal."""
    container: AppContainer = request.app.state.container
    result = await container.meal_service.edit_meal(
        meal_id, time=payload.time, raw_text=payload.raw_text
    )
    return serialize_meal_result(result)


@router.delete("/meals/{meal_id}")
async def delete_meal(meal_id: UUID, request: Request) -> dict[str, str]:
    """Delete a meal and recompute its day."""
    container: AppContainer = request.app.state.container
    await container.meal_service.delete_meal(meal_id)
    return {"message": "Meal deleted"}
