"""Domain models for diary days and meal entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from nutrition_diary.domain.ai import ParsedFood


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macronutrients summed over a set of meals."""

    calories: float
    protein: float
    fat: float
    carbs: float


@dataclass(frozen=True)
class DayRecord:
    """A calendar day of the diary with aggregate totals."""

    id: UUID
    profile_id: UUID
    day: date
    calorie_target: int
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_fat: float = 0.0
    total_carbs: float = 0.0
    day_score: str | None = None
    ai_summary: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MealEntryDraft:
    """Meal content ready to be written for a day."""

    time: str
    raw_text: str
    calories: float
    protein: float
    fat: float
    carbs: float
    foods: list[ParsedFood] = field(default_factory=list)
    image_url: str | None = None


@dataclass(frozen=True)
class MealEntryRecord:
    """Persisted meal entry."""

    id: UUID
    day_id: UUID
    time: str
    raw_text: str
    calories: float
    protein: float
    fat: float
    carbs: float
    foods: list[ParsedFood]
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DayDetail:
    """A day together with its meal entries."""

    day: DayRecord
    meals: list[MealEntryRecord]


@dataclass(frozen=True)
class DayOverview:
    """A day with the number of meals recorded for it."""

    day: DayRecord
    meal_count: int
