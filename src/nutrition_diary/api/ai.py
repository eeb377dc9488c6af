"""Progress narrative and daily quest endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutrition_diary.api.serializers import serialize_progress_summary

if TYPE_CHECKING:
    from nutrition_diary.containers import AppContainer

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/progress/summary")
async def get_progress_summary(request: Request) -> dict[str, object]:
    """Return the last computed progress summary."""
    container: AppContainer = request.app.state.container
    summary = container.progress_service.get_summary(container.profile_id)
    return serialize_progress_summary(summary)


@router.post("/recompute-progress")
async def recompute_progress(request: Request) -> dict[str, object]:
    """Recompute statistics and regenerate the progress narrative."""
    container: AppContainer = request.app.state.container
    summary = await container.progress_service.recompute(container.profile_id)
    return serialize_progress_summary(summary)


@router.get("/daily-quest")
async def daily_quest(request: Request) -> dict[str, str]:
    """Return a small healthy habit to try today."""
    container: AppContainer = request.app.state.container
    quest = await container.progress_service.daily_quest()
    return {"quest": quest.quest, "generatedAt": quest.generated_at.isoformat()}
