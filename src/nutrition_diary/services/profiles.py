"""Profile lifecycle: onboarding and settings updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID  # noqa: TC003

from nutrition_diary.domain.profile import ProfileDraft, ProfileRecord
from nutrition_diary.services.calories import calculate_daily_calories
from nutrition_diary.services.errors import NotFoundError

if TYPE_CHECKING:
    from nutrition_diary.services.clock import Now
    from nutrition_diary.services.gamification import GamificationRepository
    from nutrition_diary.services.progress import ProgressRepository

WELCOME_SUMMARY = "Welcome! Start keeping your food diary."
WELCOME_SCORE = "starting"


class ProfileRepository(Protocol):
    """Persistence interface for the profile."""

    def get_profile(self, profile_id: UUID) -> ProfileRecord | None:
        """Return the profile, if it was created."""

    def create_profile(
        self, profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
    ) -> ProfileRecord:
        """Create the profile row."""

    def update_profile(
        self, profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
    ) -> ProfileRecord:
        """Update the profile row in place."""


@dataclass
class ProfileService:
    """Creates and updates the single user profile."""

    repository: ProfileRepository
    gamification_repository: GamificationRepository
    progress_repository: ProgressRepository
    now: Now

    def get_profile(self, profile_id: UUID) -> ProfileRecord:
        """Return the profile or raise if onboarding never happened."""
        profile = self.repository.get_profile(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def save_profile(
        self, profile_id: UUID, draft: ProfileDraft
    ) -> tuple[ProfileRecord, bool]:
        """Create or update the profile and recompute its calorie target.

        A new profile is seeded with empty gamification state and a welcome
        progress summary. Returns the profile and whether it was created.
        """
        target = calculate_daily_calories(
            draft.sex,
            draft.age,
            draft.height_cm,
            draft.weight_kg,
            draft.activity_level,
        )
        if self.repository.get_profile(profile_id):
            return self.repository.update_profile(profile_id, draft, target), False

        profile = self.repository.create_profile(profile_id, draft, target)
        self.gamification_repository.create_state(profile_id)
        self.progress_repository.save_summary(
            profile_id,
            computed_at=self.now(),
            summary_text=WELCOME_SUMMARY,
            overall_score=WELCOME_SCORE,
            details={},
        )
        return profile, True
