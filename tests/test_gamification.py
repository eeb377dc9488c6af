"""Tests for the gamification rules and updater."""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from nutrition_diary.domain.measurements import MeasurementDraft
from nutrition_diary.domain.profile import DEFAULT_PROFILE_ID
from nutrition_diary.services.errors import NotFoundError
from nutrition_diary.services.gamification import (
    ACHIEVEMENT_UNLOCKED,
    DAY_COMPLETED,
    MEAL_RECORDED,
    WITHIN_TARGET,
    GamificationService,
    award_xp,
    calculate_level,
    determine_achievements,
    find_new_achievements,
    next_streak,
    xp_in_level,
)
from tests.conftest import TODAY, InMemoryDayRepository, Repositories

YESTERDAY = TODAY - timedelta(days=1)


def _service(repositories: Repositories) -> GamificationService:
    return GamificationService(
        repository=repositories.gamification,
        day_repository=repositories.days,
        measurement_repository=repositories.measurements,
        today=lambda: TODAY,
    )


def _seed_state(repositories: Repositories, **values):  # type: ignore[no-untyped-def]
    state = repositories.gamification.create_state(DEFAULT_PROFILE_ID)
    state = replace(state, **values)
    repositories.gamification.states[DEFAULT_PROFILE_ID] = state
    return state


def test_award_xp_rewards() -> None:
    assert award_xp(0, MEAL_RECORDED) == 5
    assert award_xp(0, DAY_COMPLETED) == 15
    assert award_xp(0, WITHIN_TARGET) == 25
    assert award_xp(0, ACHIEVEMENT_UNLOCKED) == 50
    assert award_xp(40, "unknown") == 40


@pytest.mark.parametrize(
    ("xp", "level", "in_level"),
    [(0, 1, 0), (99, 1, 99), (100, 2, 0), (250, 3, 50), (1000, 11, 0)],
)
def test_level_derivation(xp: int, level: int, in_level: int) -> None:
    assert calculate_level(xp) == level
    assert xp_in_level(xp) == in_level


def test_determine_achievements_thresholds() -> None:
    assert determine_achievements(0, 0, 0, 0.0, 0) == frozenset()
    assert determine_achievements(1, 1, 0, 0.0, 0) == {"first_day"}
    assert determine_achievements(7, 7, 7, 1.0, 100) == {
        "first_day",
        "week_champion",
        "streak_7",
        "week_within_target",
        "first_kilogram",
        "xp_100",
    }
    assert determine_achievements(100, 30, 30, 5.0, 1000) == {
        "first_day",
        "week_champion",
        "month_marathon",
        "hundred_days",
        "streak_7",
        "streak_30",
        "week_within_target",
        "month_within_target",
        "first_kilogram",
        "five_kilograms",
        "xp_100",
        "xp_500",
        "xp_1000",
    }


def test_determine_achievements_ignores_weight_gain() -> None:
    assert determine_achievements(0, 0, 0, -3.0, 0) == frozenset()


def test_determine_achievements_is_monotonic() -> None:
    smaller = determine_achievements(6, 5, 3, 0.5, 90)
    larger = determine_achievements(8, 9, 7, 1.5, 150)
    assert smaller <= larger


def test_find_new_achievements_is_set_difference() -> None:
    assert find_new_achievements({"first_day"}, {"first_day", "xp_100"}) == {
        "xp_100"
    }
    assert find_new_achievements({"first_day", "streak_7"}, {"first_day"}) == set()


def test_find_new_achievements_of_identical_sets_is_empty() -> None:
    unlocked = frozenset({"first_day", "streak_3", "xp_100"})

    assert find_new_achievements(unlocked, unlocked) == frozenset()


def test_find_new_achievements_from_nothing_returns_everything() -> None:
    current = frozenset({"first_day", "week_within_target"})

    assert find_new_achievements(frozenset(), current) == current


def test_next_streak_rules() -> None:
    assert next_streak(0, None, TODAY) == 1
    assert next_streak(4, YESTERDAY, TODAY) == 5
    assert next_streak(4, TODAY, TODAY) == 1
    assert next_streak(4, TODAY - timedelta(days=3), TODAY) == 1


def test_first_meal_of_the_day_awards_xp_and_first_day() -> None:
    repositories = Repositories()
    _seed_state(repositories)
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 2000, calorie_target=2000)

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert updated.current_streak_days == 1
    assert updated.longest_streak_days == 1
    # 5 meal + 15 day + 25 within target, then one 50 bonus for first_day
    assert updated.xp == 95
    assert updated.level == 1
    assert updated.achievements == {"first_day"}
    assert updated.last_active_date == TODAY
    assert repositories.gamification.saves == 1


def test_streak_continues_from_yesterday() -> None:
    repositories = Repositories()
    _seed_state(
        repositories,
        current_streak_days=3,
        longest_streak_days=5,
        last_active_date=YESTERDAY,
        achievements=frozenset({"first_day"}),
    )
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 2600, calorie_target=2000)

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert updated.current_streak_days == 4
    assert updated.longest_streak_days == 5
    assert updated.xp == 20


def test_streak_resets_after_gap_and_longest_is_kept() -> None:
    repositories = Repositories()
    _seed_state(
        repositories,
        current_streak_days=6,
        longest_streak_days=6,
        last_active_date=TODAY - timedelta(days=3),
        achievements=frozenset({"first_day"}),
    )
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 500, calorie_target=2000)

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert updated.current_streak_days == 1
    assert updated.longest_streak_days == 6


def test_second_update_on_the_same_day_restarts_streak() -> None:
    repositories = Repositories()
    _seed_state(
        repositories,
        current_streak_days=4,
        longest_streak_days=4,
        last_active_date=TODAY,
        achievements=frozenset({"first_day"}),
    )
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 900, calorie_target=2000)

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert updated.current_streak_days == 1
    assert updated.longest_streak_days == 4


def test_meal_on_past_date_keeps_streak_and_last_active() -> None:
    repositories = Repositories()
    _seed_state(
        repositories,
        current_streak_days=2,
        longest_streak_days=2,
        last_active_date=YESTERDAY,
        achievements=frozenset({"first_day"}),
    )
    repositories.days.add_day(DEFAULT_PROFILE_ID, date(2026, 3, 1), 2000)

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert updated.current_streak_days == 2
    assert updated.last_active_date == YESTERDAY
    assert updated.xp == 5


def test_several_unlocks_in_one_update_award_a_single_bonus() -> None:
    repositories = Repositories()
    _seed_state(
        repositories,
        current_streak_days=6,
        longest_streak_days=6,
        xp=95,
        last_active_date=YESTERDAY,
    )
    for offset in range(7):
        repositories.days.add_day(
            DEFAULT_PROFILE_ID,
            TODAY - timedelta(days=offset),
            2000,
            calorie_target=2000,
        )

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert updated.current_streak_days == 7
    assert updated.achievements == {
        "first_day",
        "week_champion",
        "streak_7",
        "week_within_target",
        "xp_100",
    }
    assert updated.xp == 95 + 45 + 50
    assert updated.level == 2


def test_achievements_are_never_removed() -> None:
    repositories = Repositories()
    _seed_state(repositories, achievements=frozenset({"hundred_days", "first_day"}))
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 700, calorie_target=2000)

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert "hundred_days" in updated.achievements
    assert updated.xp == 20


def test_weight_lost_unlocks_first_kilogram() -> None:
    repositories = Repositories()
    _seed_state(repositories, achievements=frozenset({"first_day"}))
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 700, calorie_target=2000)
    for day, weight in ((date(2026, 3, 1), 80.0), (date(2026, 3, 8), 78.5)):
        repositories.measurements.create_measurement(
            DEFAULT_PROFILE_ID, MeasurementDraft(day=day, weight_kg=weight)
        )

    updated = _service(repositories).update_after_meal(DEFAULT_PROFILE_ID)

    assert updated is not None
    assert "first_kilogram" in updated.achievements
    assert updated.xp == 20 + 50


def test_missing_state_is_skipped() -> None:
    repositories = Repositories()
    repositories.days.add_day(DEFAULT_PROFILE_ID, TODAY, 700)

    assert _service(repositories).update_after_meal(DEFAULT_PROFILE_ID) is None
    assert repositories.gamification.saves == 0


class _BrokenDayRepository(InMemoryDayRepository):
    def list_days(self, profile_id):  # type: ignore[no-untyped-def]
        raise RuntimeError("database unavailable")


def test_update_failures_are_swallowed() -> None:
    repositories = Repositories(days=_BrokenDayRepository())
    state = _seed_state(repositories)

    assert _service(repositories).update_after_meal(DEFAULT_PROFILE_ID) is None
    assert repositories.gamification.states[DEFAULT_PROFILE_ID] == state
    assert repositories.gamification.saves == 0


def test_overview_includes_level_progress_and_catalogue() -> None:
    repositories = Repositories()
    _seed_state(
        repositories, xp=250, level=3, achievements=frozenset({"xp_100", "first_day"})
    )

    overview = _service(repositories).get_overview(DEFAULT_PROFILE_ID)

    assert overview.xp_in_level == 50
    assert overview.xp_for_next_level == 100
    assert [achievement.id for achievement in overview.achievements] == [
        "first_day",
        "xp_100",
    ]
    assert overview.achievements[0].title == "First day"


def test_overview_without_state_raises() -> None:
    with pytest.raises(NotFoundError):
        _service(Repositories()).get_overview(DEFAULT_PROFILE_ID)
