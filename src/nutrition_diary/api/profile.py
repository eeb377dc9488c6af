"""Profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from nutrition_diary.api.schemas import ProfileRequest  # noqa: TC001
from nutrition_diary.api.serializers import serialize_profile

if TYPE_CHECKING:
    from nutrition_diary.containers import AppContainer

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(request: Request) -> dict[str, object]:
    """Return the profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(container.profile_id)
    return serialize_profile(profile)


@router.post("")
async def save_profile(
    payload: ProfileRequest, request: Request, response: Response
) -> dict[str, object]:
    """Create the profile on first submission, update it afterwards."""
    container: AppContainer = request.app.state.container
    profile, created = container.profile_service.save_profile(
        container.profile_id, payload.to_draft()
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return serialize_profile(profile)
