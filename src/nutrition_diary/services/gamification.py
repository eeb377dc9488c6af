"""Streaks, XP, levels and achievements."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_diary.domain.gamification import Achievement, GamificationRecord
from nutrition_diary.services.calories import is_within_target
from nutrition_diary.services.clock import Today
from nutrition_diary.services.days import DayRepository
from nutrition_diary.services.errors import NotFoundError
from nutrition_diary.services.measurements import MeasurementRepository, weight_lost

_logger = logging.getLogger(__name__)

MEAL_RECORDED = "meal_recorded"
DAY_COMPLETED = "day_completed"
WITHIN_TARGET = "within_target"
ACHIEVEMENT_UNLOCKED = "achievement_unlocked"

XP_REWARDS = {
    MEAL_RECORDED: 5,
    DAY_COMPLETED: 15,
    WITHIN_TARGET: 25,
    ACHIEVEMENT_UNLOCKED: 50,
}
XP_PER_LEVEL = 100

_DAY_COUNT_THRESHOLDS = (
    (1, "first_day"),
    (7, "week_champion"),
    (30, "month_marathon"),
    (100, "hundred_days"),
)
_STREAK_THRESHOLDS = ((7, "streak_7"), (30, "streak_30"))
_WITHIN_TARGET_THRESHOLDS = ((7, "week_within_target"), (30, "month_within_target"))
_WEIGHT_LOST_THRESHOLDS = ((1, "first_kilogram"), (5, "five_kilograms"))
_XP_THRESHOLDS = ((100, "xp_100"), (500, "xp_500"), (1000, "xp_1000"))

ACHIEVEMENTS = {
    achievement.id: achievement
    for achievement in (
        Achievement("first_day", "First day", "Logged food for the first time"),
        Achievement("week_champion", "Week champion", "7 days with logged meals"),
        Achievement("month_marathon", "Month marathon", "30 days with logged meals"),
        Achievement("hundred_days", "Hundred days", "100 days with logged meals"),
        Achievement("streak_7", "7 days in a row", "A 7 day logging streak"),
        Achievement("streak_30", "Monthly streak", "A 30 day logging streak"),
        Achievement(
            "week_within_target", "Week on target", "7 days within calorie target"
        ),
        Achievement(
            "month_within_target", "Month on target", "30 days within calorie target"
        ),
        Achievement("first_kilogram", "First kilogram", "Lost the first kilogram"),
        Achievement("five_kilograms", "Five kilograms down", "Lost 5 kilograms"),
        Achievement("xp_100", "Warming up", "Earned 100 XP"),
        Achievement("xp_500", "The journey begins", "Earned 500 XP"),
        Achievement("xp_1000", "Thousand milestone", "Earned 1000 XP"),
    )
}


def award_xp(current_xp: int, action: str) -> int:
    """Return XP after the reward for an action; unknown actions add nothing."""
    return current_xp + XP_REWARDS.get(action, 0)


def calculate_level(xp: int) -> int:
    return xp // XP_PER_LEVEL + 1


def xp_in_level(xp: int) -> int:
    return xp % XP_PER_LEVEL


def determine_achievements(
    day_count: int,
    streak: int,
    days_within_target: int,
    weight_lost_kg: float,
    xp: int,
) -> frozenset[str]:
    """Return every achievement the given cumulative stats qualify for."""
    achieved: set[str] = set()
    for value, thresholds in (
        (day_count, _DAY_COUNT_THRESHOLDS),
        (streak, _STREAK_THRESHOLDS),
        (days_within_target, _WITHIN_TARGET_THRESHOLDS),
        (max(0.0, weight_lost_kg), _WEIGHT_LOST_THRESHOLDS),
        (xp, _XP_THRESHOLDS),
    ):
        achieved.update(name for threshold, name in thresholds if value >= threshold)
    return frozenset(achieved)


def find_new_achievements(
    previous: Iterable[str], current: Iterable[str]
) -> frozenset[str]:
    """Return achievements present in ``current`` but not in ``previous``."""
    return frozenset(current) - frozenset(previous)


def next_streak(current: int, last_active: date | None, today: date) -> int:
    """Continue the streak only from yesterday or from no activity at all."""
    if last_active is None or last_active == today - timedelta(days=1):
        return current + 1
    return 1


class GamificationRepository(Protocol):
    """Persistence interface for gamification state."""

    def get_state(self, profile_id: UUID) -> GamificationRecord | None:
        """Return gamification state for a profile."""

    def create_state(self, profile_id: UUID) -> GamificationRecord:
        """Create zeroed gamification state for a profile."""

    def save_state(self, state: GamificationRecord) -> None:
        """Persist every field of the state in one update."""


@dataclass(frozen=True)
class GamificationOverview:
    """Gamification state with level progress and achievement details."""

    state: GamificationRecord
    xp_in_level: int
    xp_for_next_level: int
    achievements: list[Achievement]


@dataclass
class GamificationService:
    """Applies gamification rules after diary changes."""

    repository: GamificationRepository
    day_repository: DayRepository
    measurement_repository: MeasurementRepository
    today: Today

    def get_overview(self, profile_id: UUID) -> GamificationOverview:
        """Return the current gamification state for display."""
        state = self.repository.get_state(profile_id)
        if state is None:
            raise NotFoundError("Gamification state not found")
        achievements = [
            ACHIEVEMENTS.get(name, Achievement(name, name, ""))
            for name in sorted(state.achievements)
        ]
        return GamificationOverview(
            state=state,
            xp_in_level=xp_in_level(state.xp),
            xp_for_next_level=XP_PER_LEVEL,
            achievements=achievements,
        )

    def update_after_meal(self, profile_id: UUID) -> GamificationRecord | None:
        """Recompute streak, XP, level and achievements after a meal write.

        Failures are logged and swallowed; the meal write stays authoritative.
        """
        try:
            return self._update(profile_id)
        except Exception:
            _logger.exception("Failed to update gamification for %s", profile_id)
            return None

    def _update(self, profile_id: UUID) -> GamificationRecord | None:
        state = self.repository.get_state(profile_id)
        if state is None:
            _logger.warning("No gamification state for profile %s", profile_id)
            return None

        today = self.today()
        days = self.day_repository.list_days(profile_id)
        today_record = next((day for day in days if day.day == today), None)
        today_active = today_record is not None and today_record.total_calories > 0

        streak = state.current_streak_days
        if today_active:
            streak = next_streak(
                state.current_streak_days, state.last_active_date, today
            )

        xp = award_xp(state.xp, MEAL_RECORDED)
        if today_record and self.day_repository.list_meal_entries(today_record.id):
            xp = award_xp(xp, DAY_COMPLETED)
        if today_record and is_within_target(
            today_record.total_calories, today_record.calorie_target
        ):
            xp = award_xp(xp, WITHIN_TARGET)

        active_days = sum(1 for day in days if day.total_calories > 0)
        days_within_target = sum(
            1
            for day in days
            if is_within_target(day.total_calories, day.calorie_target)
        )
        measurements = self.measurement_repository.list_measurements(profile_id)
        qualified = determine_achievements(
            active_days, streak, days_within_target, weight_lost(measurements), xp
        )
        unlocked = find_new_achievements(state.achievements, qualified)
        # One bonus per update that unlocked something, however many unlocked.
        if unlocked:
            xp = award_xp(xp, ACHIEVEMENT_UNLOCKED)
            _logger.info("Unlocked achievements: %s", ", ".join(sorted(unlocked)))

        updated = replace(
            state,
            current_streak_days=streak,
            longest_streak_days=max(state.longest_streak_days, streak),
            xp=xp,
            level=calculate_level(xp),
            achievements=state.achievements | qualified,
            last_active_date=today if today_active else state.last_active_date,
        )
        self.repository.save_state(updated)
        return updated
