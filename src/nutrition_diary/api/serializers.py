"""JSON shapes returned by the HTTP API."""

from datetime import datetime

from nutrition_diary.domain.days import (
    DayDetail,
    DayOverview,
    DayRecord,
    MealEntryRecord,
)
from nutrition_diary.domain.measurements import MeasurementRecord
from nutrition_diary.domain.profile import ProfileRecord
from nutrition_diary.domain.progress import ProgressSummaryRecord
from nutrition_diary.services.days import calories_remaining
from nutrition_diary.services.gamification import GamificationOverview
from nutrition_diary.services.meals import MealResult


def serialize_profile(profile: ProfileRecord) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "age": profile.age,
        "sex": profile.sex,
        "heightCm": profile.height_cm,
        "weightKg": profile.weight_kg,
        "targetWeightKg": profile.target_weight_kg,
        "activityLevel": profile.activity_level,
        "dailyCalorieTarget": profile.daily_calorie_target,
        "createdAt": _isoformat(profile.created_at),
        "updatedAt": _isoformat(profile.updated_at),
    }


def serialize_meal(meal: MealEntryRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "dayId": str(meal.day_id),
        "time": meal.time,
        "rawText": meal.raw_text,
        "imageUrl": meal.image_url,
        "calories": meal.calories,
        "protein": meal.protein,
        "fat": meal.fat,
        "carbs": meal.carbs,
        "parsedFood": [food.model_dump() for food in meal.foods],
        "createdAt": _isoformat(meal.created_at),
        "updatedAt": _isoformat(meal.updated_at),
    }


def serialize_meal_result(result: MealResult) -> dict[str, object]:
    """Meal entry plus the AI note and the refreshed day evaluation."""
    payload = serialize_meal(result.entry)
    payload["aiMessage"] = result.analysis.message
    payload["dayScore"] = result.day.day_score
    payload["dayTotalCalories"] = result.day.total_calories
    return payload


def serialize_day_overview(overview: DayOverview) -> dict[str, object]:
    payload = _serialize_day(overview.day)
    payload["mealCount"] = overview.meal_count
    return payload


def serialize_day_detail(detail: DayDetail) -> dict[str, object]:
    payload = _serialize_day(detail.day)
    payload["totalProtein"] = detail.day.total_protein
    payload["totalFat"] = detail.day.total_fat
    payload["totalCarbs"] = detail.day.total_carbs
    payload["mealEntries"] = [serialize_meal(meal) for meal in detail.meals]
    return payload


def serialize_measurement(measurement: MeasurementRecord) -> dict[str, object]:
    return {
        "id": str(measurement.id),
        "date": measurement.day.isoformat(),
        "weightKg": measurement.weight_kg,
        "waistCm": measurement.waist_cm,
        "chestCm": measurement.chest_cm,
        "hipsCm": measurement.hip_cm,
        "notes": measurement.notes,
        "createdAt": _isoformat(measurement.created_at),
    }


def serialize_gamification(overview: GamificationOverview) -> dict[str, object]:
    state = overview.state
    return {
        "id": str(state.id),
        "currentStreakDays": state.current_streak_days,
        "longestStreakDays": state.longest_streak_days,
        "xp": state.xp,
        "level": state.level,
        "xpInLevel": overview.xp_in_level,
        "xpForNextLevel": overview.xp_for_next_level,
        "achievements": [
            {
                "id": achievement.id,
                "title": achievement.title,
                "description": achievement.description,
            }
            for achievement in overview.achievements
        ],
        "lastActiveDate": (
            state.last_active_date.isoformat() if state.last_active_date else None
        ),
    }


def serialize_progress_summary(summary: ProgressSummaryRecord) -> dict[str, object]:
    return {
        "id": str(summary.id),
        "lastComputedAt": summary.last_computed_at.isoformat(),
        "summaryText": summary.summary_text,
        "overallScore": summary.overall_score,
        "details": summary.details,
    }


def _serialize_day(day: DayRecord) -> dict[str, object]:
    return {
        "id": str(day.id),
        "date": day.day.isoformat(),
        "totalCalories": day.total_calories,
        "dayScore": day.day_score,
        "aiDaySummary": day.ai_summary,
        "calorieTargetForDay": day.calorie_target,
        "caloriesRemaining": calories_remaining(day),
        "createdAt": _isoformat(day.created_at),
    }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
