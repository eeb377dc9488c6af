"""Progress summary and daily quest service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from nutrition_diary.domain.ai import ProgressNarrative
from nutrition_diary.domain.progress import ProgressStats, ProgressSummaryRecord
from nutrition_diary.services.ai import AIGateway
from nutrition_diary.services.calories import (
    calculate_weight_progress,
    is_within_target,
    round_half_up,
)
from nutrition_diary.services.clock import Now
from nutrition_diary.services.days import DayRepository
from nutrition_diary.services.errors import InvalidRequestError, NotFoundError
from nutrition_diary.services.gamification import GamificationRepository
from nutrition_diary.services.measurements import MeasurementRepository
from nutrition_diary.services.profiles import ProfileRepository


class ProgressRepository(Protocol):
    """Persistence interface for the cached progress summary."""

    def get_summary(self, profile_id: UUID) -> ProgressSummaryRecord | None:
        """Return the cached summary for a profile."""

    def save_summary(
        self,
        profile_id: UUID,
        *,
        computed_at: datetime,
        summary_text: str,
        overall_score: str,
        details: dict[str, object],
    ) -> ProgressSummaryRecord:
        """Create or overwrite the cached summary."""


@dataclass(frozen=True)
class DailyQuest:
    """A small habit suggestion for today."""

    quest: str
    generated_at: datetime


@dataclass
class ProgressService:
    """Computes progress statistics and caches the AI narrative."""

    repository: ProgressRepository
    profile_repository: ProfileRepository
    day_repository: DayRepository
    measurement_repository: MeasurementRepository
    gamification_repository: GamificationRepository
    ai_gateway: AIGateway
    now: Now

    def get_summary(self, profile_id: UUID) -> ProgressSummaryRecord:
        """Return the last computed summary."""
        if self.profile_repository.get_profile(profile_id) is None:
            raise NotFoundError("Profile not found")
        summary = self.repository.get_summary(profile_id)
        if summary is None:
            raise NotFoundError("Progress summary has not been computed")
        return summary

    async def recompute(self, profile_id: UUID) -> ProgressSummaryRecord:
        """Rebuild statistics, ask for a fresh narrative and overwrite the cache."""
        profile = self.profile_repository.get_profile(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        days = self.day_repository.list_days(profile_id)
        if not days:
            raise InvalidRequestError("No diary data to analyse yet")

        measurements = self.measurement_repository.list_measurements(profile_id)
        if measurements:
            start_weight = measurements[0].weight_kg
            current_weight = measurements[-1].weight_kg
        else:
            start_weight = current_weight = profile.weight_kg

        state = self.gamification_repository.get_state(profile_id)
        stats = ProgressStats(
            start_date=days[0].day,
            start_weight=start_weight,
            current_weight=current_weight,
            target_weight=profile.target_weight_kg,
            average_calories=sum(day.total_calories for day in days) / len(days),
            days_within_target=sum(
                1
                for day in days
                if is_within_target(day.total_calories, day.calorie_target)
            ),
            total_days=len(days),
            streak=state.current_streak_days if state else 0,
            level=state.level if state else 1,
            xp=state.xp if state else 0,
            achievements=sorted(state.achievements) if state else [],
        )
        narrative = await self.ai_gateway.generate_progress_summary(stats)
        return self.repository.save_summary(
            profile_id,
            computed_at=self.now(),
            summary_text=narrative.summary_text,
            overall_score=narrative.overall_score,
            details=_build_details(stats, narrative),
        )

    async def daily_quest(self) -> DailyQuest:
        """Return today's suggested habit."""
        quest = await self.ai_gateway.generate_daily_quest()
        return DailyQuest(quest=quest, generated_at=self.now())


def _build_details(
    stats: ProgressStats, narrative: ProgressNarrative
) -> dict[str, object]:
    progress = calculate_weight_progress(
        stats.start_weight, stats.current_weight, stats.target_weight
    )
    return {
        "averageDailyCalories": round_half_up(stats.average_calories),
        "daysWithinTarget": stats.days_within_target,
        "totalDays": stats.total_days,
        "weightProgress": {
            "startWeight": stats.start_weight,
            "currentWeight": stats.current_weight,
            "targetWeight": stats.target_weight,
            "progressPercent": round(progress, 1),
        },
        "strengths": narrative.strengths,
        "areasToImprove": narrative.areas_to_improve,
    }
