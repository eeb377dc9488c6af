"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

from supabase import create_client

from nutrition_diary.adapters.openai_text_client import OpenAITextClient
from nutrition_diary.adapters.supabase_day_repository import SupabaseDayRepository
from nutrition_diary.adapters.supabase_gamification_repository import (
    SupabaseGamificationRepository,
)
from nutrition_diary.adapters.supabase_measurement_repository import (
    SupabaseMeasurementRepository,
)
from nutrition_diary.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_diary.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from nutrition_diary.config import Settings, use_llm
from nutrition_diary.domain.profile import DEFAULT_PROFILE_ID
from nutrition_diary.services.ai import AIGateway, FallbackAIGateway, LLMAIGateway
from nutrition_diary.services.clock import today_provider, utc_now
from nutrition_diary.services.days import DayService
from nutrition_diary.services.gamification import GamificationService
from nutrition_diary.services.meals import MealService
from nutrition_diary.services.measurements import MeasurementService
from nutrition_diary.services.profiles import ProfileService
from nutrition_diary.services.progress import ProgressService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_id: UUID
    ai_gateway: AIGateway
    profile_service: ProfileService
    day_service: DayService
    meal_service: MealService
    measurement_service: MeasurementService
    gamification_service: GamificationService
    progress_service: ProgressService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    day_repository = SupabaseDayRepository(supabase_client)
    measurement_repository = SupabaseMeasurementRepository(supabase_client)
    gamification_repository = SupabaseGamificationRepository(supabase_client)
    progress_repository = SupabaseProgressRepository(supabase_client)

    text_client: OpenAITextClient | None = None
    ai_gateway: AIGateway
    if use_llm(resolved_settings):
        text_client = OpenAITextClient.create(
            api_key=str(resolved_settings.openai_api_key),
            timeout_seconds=resolved_settings.ai_timeout_seconds,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
        )
        ai_gateway = LLMAIGateway(
            client=text_client, model=resolved_settings.openai_model
        )
    else:
        if resolved_settings.ai_provider.strip().lower() != "stub":
            _logger.warning("OPENAI_API_KEY is not set; AI features use fallbacks")
        ai_gateway = FallbackAIGateway()

    today = today_provider(resolved_settings.timezone)
    profile_service = ProfileService(
        repository=profile_repository,
        gamification_repository=gamification_repository,
        progress_repository=progress_repository,
        now=utc_now,
    )
    gamification_service = GamificationService(
        repository=gamification_repository,
        day_repository=day_repository,
        measurement_repository=measurement_repository,
        today=today,
    )
    meal_service = MealService(
        repository=day_repository,
        profile_repository=profile_repository,
        ai_gateway=ai_gateway,
        gamification_service=gamification_service,
    )
    measurement_service = MeasurementService(
        repository=measurement_repository,
        profile_repository=profile_repository,
    )
    progress_service = ProgressService(
        repository=progress_repository,
        profile_repository=profile_repository,
        day_repository=day_repository,
        measurement_repository=measurement_repository,
        gamification_repository=gamification_repository,
        ai_gateway=ai_gateway,
        now=utc_now,
    )

    async def close_resources() -> None:
        if text_client is not None:
            await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_id=DEFAULT_PROFILE_ID,
        ai_gateway=ai_gateway,
        profile_service=profile_service,
        day_service=DayService(day_repository),
        meal_service=meal_service,
        measurement_service=measurement_service,
        gamification_service=gamification_service,
        progress_service=progress_service,
        close_resources=close_resources,
    )
