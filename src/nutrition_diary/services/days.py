"""Diary day persistence interface and read models."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_diary.domain.days import (
    DayDetail,
    DayOverview,
    DayRecord,
    MacroTotals,
    MealEntryDraft,
    MealEntryRecord,
)
from nutrition_diary.services.errors import NotFoundError


class DayRepository(Protocol):
    """Persistence interface for days and their meal entries."""

    def get_day_by_date(self, profile_id: UUID, day: date) -> DayRecord | None:
        """Return the day row for a calendar date, if present."""

    def get_day(self, day_id: UUID) -> DayRecord | None:
        """Return a day by id."""

    def create_day(
        self, profile_id: UUID, day: date, calorie_target: int
    ) -> DayRecord:
        """Create an empty day with a snapshot of the calorie target."""

    def update_day_totals(
        self, day_id: UUID, totals: MacroTotals, score: str, summary: str
    ) -> DayRecord:
        """Overwrite aggregate totals and the evaluation of a day."""

    def list_days(self, profile_id: UUID) -> list[DayRecord]:
        """Return all days for a profile ordered by date ascending."""

    def list_recent_days(self, profile_id: UUID, limit: int) -> list[DayRecord]:
        """Return the most recent days, newest first."""

    def list_meal_entries(self, day_id: UUID) -> list[MealEntryRecord]:
        """Return meal entries of a day ordered by time."""

    def get_meal_entry(self, meal_id: UUID) -> MealEntryRecord | None:
        """Return a meal entry by id."""

    def create_meal_entry(
        self, day_id: UUID, draft: MealEntryDraft
    ) -> MealEntryRecord:
        """Create a meal entry for a day."""

    def replace_meal_entry(
        self, meal_id: UUID, draft: MealEntryDraft
    ) -> MealEntryRecord:
        """Replace all content of a meal entry."""

    def delete_meal_entry(self, meal_id: UUID) -> None:
        """Delete a meal entry."""


@dataclass
class DayService:
    """Read access to diary days."""

    repository: DayRepository

    def list_days(self, profile_id: UUID, limit: int = 30) -> list[DayOverview]:
        """Return recent days with their meal counts."""
        days = self.repository.list_recent_days(profile_id, limit)
        overviews = []
        for day in days:
            meals = self.repository.list_meal_entries(day.id)
            overviews.append(DayOverview(day=day, meal_count=len(meals)))
        return overviews

    def get_day_detail(self, profile_id: UUID, day: date) -> DayDetail:
        """Return a day with its meals or raise if it was never recorded."""
        record = self.repository.get_day_by_date(profile_id, day)
        if record is None:
            raise NotFoundError(f"Day {day.isoformat()} not found")
        meals = self.repository.list_meal_entries(record.id)
        return DayDetail(day=record, meals=meals)


def sum_meal_totals(meals: list[MealEntryRecord]) -> MacroTotals:
    """Sum calories and macros over the given meals."""
    return MacroTotals(
        calories=sum(meal.calories for meal in meals),
        protein=sum(meal.protein for meal in meals),
        fat=sum(meal.fat for meal in meals),
        carbs=sum(meal.carbs for meal in meals),
    )


def calories_remaining(day: DayRecord) -> float:
    return max(0.0, day.calorie_target - day.total_calories)
