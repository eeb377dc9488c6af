"""Body measurement and gamification endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from nutrition_diary.api.schemas import MeasurementRequest  # noqa: TC001
from nutrition_diary.api.serializers import (
    serialize_gamification,
    serialize_measurement,
)

if TYPE_CHECKING:
    from nutrition_diary.containers import AppContainer

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/measurements")
async def list_measurements(request: Request) -> list[dict[str, object]]:
    """Return all measurements ordered by date."""
    container: AppContainer = request.app.state.container
    measurements = container.measurement_service.list_measurements(
        container.profile_id
    )
    return [serialize_measurement(measurement) for measurement in measurements]


@router.post("/measurements")
async def record_measurement(
    payload: MeasurementRequest, request: Request, response: Response
) -> dict[str, object]:
    """Record a measurement, overwriting one already stored for the date."""
    container: AppContainer = request.app.state.container
    measurement, created = container.measurement_service.record(
        container.profile_id, payload.to_draft()
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return serialize_measurement(measurement)


@router.delete("/measurements/{measurement_id}")
async def delete_measurement(measurement_id: UUID, request: Request) -> dict[str, str]:
    """Delete a measurement."""
    container: AppContainer = request.app.state.container
    container.measurement_service.delete(measurement_id)
    return {"message": "Measurement deleted"}


@router.get("/gamification")
async def get_gamification(request: Request) -> dict[str, object]:
    """Return streaks, XP, level and achievements."""
    container: AppContainer = request.app.state.container
    overview = container.gamification_service.get_overview(container.profile_id)
    return serialize_gamification(overview)
