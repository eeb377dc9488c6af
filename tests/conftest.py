"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutrition_diary.config import Settings
from nutrition_diary.containers import AppContainer
from nutrition_diary.domain.days import (
    DayRecord,
    MacroTotals,
    MealEntryDraft,
    MealEntryRecord,
)
from nutrition_diary.domain.gamification import GamificationRecord
from nutrition_diary.domain.measurements import MeasurementDraft, MeasurementRecord
from nutrition_diary.domain.profile import (
    DEFAULT_PROFILE_ID,
    ProfileDraft,
    ProfileRecord,
)
from nutrition_diary.domain.progress import ProgressSummaryRecord
from nutrition_diary.services.ai import AIGateway, FallbackAIGateway, TextClient
from nutrition_diary.services.days import DayRepository, DayService
from nutrition_diary.services.gamification import (
    GamificationRepository,
    GamificationService,
)
from nutrition_diary.services.meals import MealService
from nutrition_diary.services.measurements import (
    MeasurementRepository,
    MeasurementService,
)
from nutrition_diary.services.profiles import ProfileRepository, ProfileService
from nutrition_diary.services.progress import ProgressRepository, ProgressService

TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)

SAMPLE_PROFILE = ProfileDraft(
    age=30,
    sex="male",
    height_cm=180,
    weight_kg=80,
    target_weight_kg=75,
    activity_level="medium",
)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, ProfileRecord] = field(default_factory=dict)

    def get_profile(self, profile_id: UUID) -> ProfileRecord | None:
        return self.profiles.get(profile_id)

    def create_profile(
        self, profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
    ) -> ProfileRecord:
        profile = _profile_record(profile_id, draft, daily_calorie_target)
        self.profiles[profile_id] = profile
        return profile

    def update_profile(
        self, profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
    ) -> ProfileRecord:
        profile = _profile_record(profile_id, draft, daily_calorie_target)
        self.profiles[profile_id] = profile
        return profile


@dataclass
class InMemoryDayRepository(DayRepository):
    """In-memory day and meal entry repository for tests."""

    days: dict[UUID, DayRecord] = field(default_factory=dict)
    meals: dict[UUID, MealEntryRecord] = field(default_factory=dict)

    def get_day_by_date(self, profile_id: UUID, day: date) -> DayRecord | None:
        for record in self.days.values():
            if record.profile_id == profile_id and record.day == day:
                return record
        return None

    def get_day(self, day_id: UUID) -> DayRecord | None:
        return self.days.get(day_id)

    def create_day(
        self, profile_id: UUID, day: date, calorie_target: int
    ) -> DayRecord:
        record = DayRecord(
            id=uuid4(), profile_id=profile_id, day=day, calorie_target=calorie_target
        )
        self.days[record.id] = record
        return record

    def update_day_totals(
        self, day_id: UUID, totals: MacroTotals, score: str, summary: str
    ) -> DayRecord:
        record = replace(
            self.days[day_id],
            total_calories=totals.calories,
            total_protein=totals.protein,
            total_fat=totals.fat,
            total_carbs=totals.carbs,
            day_score=score,
            ai_summary=summary,
        )
        self.days[day_id] = record
        return record

    def list_days(self, profile_id: UUID) -> list[DayRecord]:
        return sorted(
            (day for day in self.days.values() if day.profile_id == profile_id),
            key=lambda day: day.day,
        )

    def list_recent_days(self, profile_id: UUID, limit: int) -> list[DayRecord]:
        return list(reversed(self.list_days(profile_id)))[:limit]

    def list_meal_entries(self, day_id: UUID) -> list[MealEntryRecord]:
        return sorted(
            (meal for meal in self.meals.values() if meal.day_id == day_id),
            key=lambda meal: meal.time,
        )

    def get_meal_entry(self, meal_id: UUID) -> MealEntryRecord | None:
        return self.meals.get(meal_id)

    def create_meal_entry(
        self, day_id: UUID, draft: MealEntryDraft
    ) -> MealEntryRecord:
        meal = _meal_record(uuid4(), day_id, draft)
        self.meals[meal.id] = meal
        return meal

    def replace_meal_entry(
        self, meal_id: UUID, draft: MealEntryDraft
    ) -> MealEntryRecord:
        meal = _meal_record(meal_id, self.meals[meal_id].day_id, draft)
        self.meals[meal_id] = meal
        return meal

    def delete_meal_entry(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def add_day(  # noqa: PLR0913
        self,
        profile_id: UUID,
        day: date,
        total_calories: float,
        calorie_target: int = 2000,
        meal_count: int = 1,
    ) -> DayRecord:
        """Seed a day with evenly split meals, bypassing the services."""
        record = DayRecord(
            id=uuid4(),
            profile_id=profile_id,
            day=day,
            calorie_target=calorie_target,
            total_calories=total_calories,
        )
        self.days[record.id] = record
        for index in range(meal_count):
            self.create_meal_entry(
                record.id,
                MealEntryDraft(
                    time=f"{8 + index:02d}:00",
                    raw_text=f"meal {index + 1}",
                    calories=total_calories / meal_count,
                    protein=0,
                    fat=0,
                    carbs=0,
                ),
            )
        return record


@dataclass
class InMemoryMeasurementRepository(MeasurementRepository):
    """In-memory measurement repository for tests."""

    measurements: dict[UUID, MeasurementRecord] = field(default_factory=dict)

    def list_measurements(self, profile_id: UUID) -> list[MeasurementRecord]:
        return sorted(
            (
                measurement
                for measurement in self.measurements.values()
                if measurement.profile_id == profile_id
            ),
            key=lambda measurement: measurement.day,
        )

    def get_measurement(self, measurement_id: UUID) -> MeasurementRecord | None:
        return self.measurements.get(measurement_id)

    def get_measurement_by_date(
        self, profile_id: UUID, day: date
    ) -> MeasurementRecord | None:
        for measurement in self.measurements.values():
            if measurement.profile_id == profile_id and measurement.day == day:
                return measurement
        return None

    def create_measurement(
        self, profile_id: UUID, draft: MeasurementDraft
    ) -> MeasurementRecord:
        measurement = _measurement_record(uuid4(), profile_id, draft)
        self.measurements[measurement.id] = measurement
        return measurement

    def update_measurement(
        self, measurement_id: UUID, draft: MeasurementDraft
    ) -> MeasurementRecord:
        current = self.measurements[measurement_id]
        measurement = _measurement_record(measurement_id, current.profile_id, draft)
        self.measurements[measurement_id] = measurement
        return measurement

    def delete_measurement(self, measurement_id: UUID) -> None:
        self.measurements.pop(measurement_id, None)


@dataclass
class InMemoryGamificationRepository(GamificationRepository):
    """In-memory gamification repository that counts writes."""

    states: dict[UUID, GamificationRecord] = field(default_factory=dict)
    saves: int = 0

    def get_state(self, profile_id: UUID) -> GamificationRecord | None:
        return self.states.get(profile_id)

    def create_state(self, profile_id: UUID) -> GamificationRecord:
        state = GamificationRecord(id=uuid4(), profile_id=profile_id)
        self.states[profile_id] = state
        return state

    def save_state(self, state: GamificationRecord) -> None:
        self.saves += 1
        self.states[state.profile_id] = state


@dataclass
class InMemoryProgressRepository(ProgressRepository):
    """In-memory progress summary repository for tests."""

    summaries: dict[UUID, ProgressSummaryRecord] = field(default_factory=dict)

    def get_summary(self, profile_id: UUID) -> ProgressSummaryRecord | None:
        return self.summaries.get(profile_id)

    def save_summary(
        self,
        profile_id: UUID,
        *,
        computed_at: datetime,
        summary_text: str,
        overall_score: str,
        details: dict[str, object],
    ) -> ProgressSummaryRecord:
        current = self.summaries.get(profile_id)
        summary = ProgressSummaryRecord(
            id=current.id if current else uuid4(),
            profile_id=profile_id,
            last_computed_at=computed_at,
            summary_text=summary_text,
            overall_score=overall_score,
            details=details,
        )
        self.summaries[profile_id] = summary
        return summary


@dataclass
class FakeTextClient(TextClient):
    """Fake text client returning queued replies and recording prompts."""

    replies: list[str] = field(default_factory=list)
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(self, *, model: str, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


@dataclass
class Repositories:
    """Bundle of in-memory repositories shared by services under test."""

    profiles: InMemoryProfileRepository = field(
        default_factory=InMemoryProfileRepository
    )
    days: InMemoryDayRepository = field(default_factory=InMemoryDayRepository)
    measurements: InMemoryMeasurementRepository = field(
        default_factory=InMemoryMeasurementRepository
    )
    gamification: InMemoryGamificationRepository = field(
        default_factory=InMemoryGamificationRepository
    )
    progress: InMemoryProgressRepository = field(
        default_factory=InMemoryProgressRepository
    )


@dataclass
class Services:
    """Services wired over in-memory repositories."""

    profile_service: ProfileService
    day_service: DayService
    meal_service: MealService
    measurement_service: MeasurementService
    gamification_service: GamificationService
    progress_service: ProgressService


def _profile_record(
    profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
) -> ProfileRecord:
    return ProfileRecord(
        id=profile_id,
        age=draft.age,
        sex=draft.sex,
        height_cm=draft.height_cm,
        weight_kg=draft.weight_kg,
        target_weight_kg=draft.target_weight_kg,
        activity_level=draft.activity_level,
        daily_calorie_target=daily_calorie_target,
    )


def _meal_record(
    meal_id: UUID, day_id: UUID, draft: MealEntryDraft
) -> MealEntryRecord:
    return MealEntryRecord(
        id=meal_id,
        day_id=day_id,
        time=draft.time,
        raw_text=draft.raw_text,
        calories=draft.calories,
        protein=draft.protein,
        fat=draft.fat,
        carbs=draft.carbs,
        foods=list(draft.foods),
        image_url=draft.image_url,
    )


def _measurement_record(
    measurement_id: UUID, profile_id: UUID, draft: MeasurementDraft
) -> MeasurementRecord:
    return MeasurementRecord(
        id=measurement_id,
        profile_id=profile_id,
        day=draft.day,
        weight_kg=draft.weight_kg,
        waist_cm=draft.waist_cm,
        chest_cm=draft.chest_cm,
        hip_cm=draft.hip_cm,
        notes=draft.notes,
    )


def build_services(
    repositories: Repositories,
    ai_gateway: AIGateway | None = None,
    today: date = TODAY,
) -> Services:
    """Wire services over in-memory repositories with a fixed clock."""
    gateway = ai_gateway or FallbackAIGateway()
    gamification_service = GamificationService(
        repository=repositories.gamification,
        day_repository=repositories.days,
        measurement_repository=repositories.measurements,
        today=lambda: today,
    )
    return Services(
        profile_service=ProfileService(
            repository=repositories.profiles,
            gamification_repository=repositories.gamification,
            progress_repository=repositories.progress,
            now=lambda: NOW,
        ),
        day_service=DayService(repositories.days),
        meal_service=MealService(
            repository=repositories.days,
            profile_repository=repositories.profiles,
            ai_gateway=gateway,
            gamification_service=gamification_service,
        ),
        measurement_service=MeasurementService(
            repository=repositories.measurements,
            profile_repository=repositories.profiles,
        ),
        gamification_service=gamification_service,
        progress_service=ProgressService(
            repository=repositories.progress,
            profile_repository=repositories.profiles,
            day_repository=repositories.days,
            measurement_repository=repositories.measurements,
            gamification_repository=repositories.gamification,
            ai_gateway=gateway,
            now=lambda: NOW,
        ),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def repositories() -> Repositories:
    return Repositories()


@pytest.fixture
def container(settings: Settings, repositories: Repositories) -> AppContainer:
    ai_gateway = FallbackAIGateway()
    services = build_services(repositories, ai_gateway)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_id=DEFAULT_PROFILE_ID,
        ai_gateway=ai_gateway,
        profile_service=services.profile_service,
        day_service=services.day_service,
        meal_service=services.meal_service,
        measurement_service=services.measurement_service,
        gamification_service=services.gamification_service,
        progress_service=services.progress_service,
        close_resources=close_resources,
    )
