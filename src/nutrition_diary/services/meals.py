"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from nutrition_diary.domain.ai import MealAnalysis
from nutrition_diary.domain.days import DayRecord, MealEntryDraft, MealEntryRecord
from nutrition_diary.services.ai import AIGateway
from nutrition_diary.services.calories import determine_day_score
from nutrition_diary.services.days import DayRepository, sum_meal_totals
from nutrition_diary.services.errors import NotFoundError
from nutrition_diary.services.gamification import GamificationService
from nutrition_diary.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MealResult:
    """A written meal entry with the AI analysis behind it."""

    entry: MealEntryRecord
    analysis: MealAnalysis
    day: DayRecord


@dataclass
class MealService:
    """Adds, edits and deletes meals and keeps day totals in sync."""

    repository: DayRepository
    profile_repository: ProfileRepository
    ai_gateway: AIGateway
    gamification_service: GamificationService

    async def add_meal(  # noqa: PLR0913
        self,
        profile_id: UUID,
        day: date,
        time: str,
        raw_text: str,
        image_url: str | None = None,
    ) -> MealResult:
        """Analyse a meal, store it under its day and refresh the day."""
        profile = self.profile_repository.get_profile(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found. Complete onboarding first.")

        record = self.repository.get_day_by_date(profile_id, day)
        if record is None:
            record = self.repository.create_day(
                profile_id, day, profile.daily_calorie_target
            )

        analysis = await self.ai_gateway.analyze_meal(raw_text, image_url)
        entry = self.repository.create_meal_entry(
            record.id, _draft_from_analysis(time, raw_text, image_url, analysis)
        )
        refreshed = await self._refresh_day(record)
        self.gamification_service.update_after_meal(profile_id)
        _logger.info("Meal added for %s: %s kcal", day.isoformat(), entry.calories)
        return MealResult(entry=entry, analysis=analysis, day=refreshed)

    async def edit_meal(
        self, meal_id: UUID, time: str | None = None, raw_text: str | None = None
    ) -> MealResult:
        """Re-analyse a meal and replace its content.

        Omitted fields keep their previous values; the food breakdown is
        always replaced.
        """
        current = self.repository.get_meal_entry(meal_id)
        if current is None:
            raise NotFoundError("Meal not found")
        record = self._require_day(current.day_id)

        text = raw_text or current.raw_text
        analysis = await self.ai_gateway.analyze_meal(text, current.image_url)
        entry = self.repository.replace_meal_entry(
            meal_id,
            _draft_from_analysis(
                time or current.time, text, current.image_url, analysis
            ),
        )
        refreshed = await self._refresh_day(record)
        return MealResult(entry=entry, analysis=analysis, day=refreshed)

    async def delete_meal(self, meal_id: UUID) -> DayRecord:
        """Delete a meal and recompute its day; the day itself is kept."""
        current = self.repository.get_meal_entry(meal_id)
        if current is None:
            raise NotFoundError("Meal not found")
        record = self._require_day(current.day_id)
        self.repository.delete_meal_entry(meal_id)
        return await self._refresh_day(record)

    async def _refresh_day(self, record: DayRecord) -> DayRecord:
        meals = self.repository.list_meal_entries(record.id)
        totals = sum_meal_totals(meals)
        evaluation = await self.ai_gateway.evaluate_day(
            totals, record.calorie_target, [meal.raw_text for meal in meals]
        )
        score = determine_day_score(totals.calories, record.calorie_target)
        return self.repository.update_day_totals(
            record.id, totals, score, evaluation.comment
        )

    def _require_day(self, day_id: UUID) -> DayRecord:
        record = self.repository.get_day(day_id)
        if record is None:
            raise NotFoundError("Day not found")
        return record


def _draft_from_analysis(
    time: str, raw_text: str, image_url: str | None, analysis: MealAnalysis
) -> MealEntryDraft:
    return MealEntryDraft(
        time=time,
        raw_text=raw_text,
        image_url=image_url,
        calories=analysis.total_calories,
        protein=analysis.total_protein,
        fat=analysis.total_fat,
        carbs=analysis.total_carbs,
        foods=list(analysis.foods),
    )
