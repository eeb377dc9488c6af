"""Calorie target and day scoring rules."""

import math

from nutrition_diary.domain.ai import DayScore

EXCELLENT: DayScore = "excellent"
OK: DayScore = "ok"
OVERBUDGET: DayScore = "overbudget"

ACTIVITY_MULTIPLIERS = {
    "low": 1.375,
    "medium": 1.55,
    "high": 1.725,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS["medium"]

ADULT_AGE = 18
ADOLESCENT_ADJUSTMENT = 1.1
DAY_SCORE_TOLERANCE = 200
MALE_BMR_OFFSET = 5
FEMALE_BMR_OFFSET = -161


def calculate_bmr(sex: str, age: int, height_cm: float, weight_kg: float) -> float:
    """Mifflin-St Jeor basal metabolic rate in kcal per day."""
    sex_offset = MALE_BMR_OFFSET if sex == "male" else FEMALE_BMR_OFFSET
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + sex_offset


def calculate_daily_calories(
    sex: str,
    age: int,
    height_cm: float,
    weight_kg: float,
    activity_level: str,
) -> int:
    """Return the daily calorie target using the Mifflin-St Jeor BMR.

    The BMR is scaled by the activity multiplier and rounded; users under 18
    get a fixed +10% on top of that.
    """
    bmr = calculate_bmr(sex, age, height_cm, weight_kg)
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    tdee = round_half_up(bmr * multiplier)
    if age < ADULT_AGE:
        return round_half_up(tdee * ADOLESCENT_ADJUSTMENT)
    return tdee


def determine_day_score(total_calories: float, target_calories: float) -> DayScore:
    """Classify a day's calories against its target."""
    diff = total_calories - target_calories
    if abs(diff) <= DAY_SCORE_TOLERANCE:
        return EXCELLENT
    if diff > DAY_SCORE_TOLERANCE:
        return OVERBUDGET
    return OK


def is_within_target(total_calories: float, target_calories: float) -> bool:
    """Return True when the day scores as excellent."""
    return determine_day_score(total_calories, target_calories) == EXCELLENT


def calculate_weight_progress(
    start_weight: float, current_weight: float, target_weight: float
) -> float:
    """Return the percentage of the way from start weight to target weight."""
    if start_weight == target_weight:
        return 0.0
    return (start_weight - current_weight) / (start_weight - target_weight) * 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
