"""Supabase repository for diary days and meal entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_diary.domain.ai import ParsedFood
from nutrition_diary.domain.days import (
    DayRecord,
    MacroTotals,
    MealEntryDraft,
    MealEntryRecord,
)
from nutrition_diary.services.days import DayRepository

_DAY_COLUMNS = (
    "id, profile_id, date, calorie_target, total_calories, total_protein, "
    "total_fat, total_carbs, day_score, ai_summary, created_at"
)
_MEAL_COLUMNS = (
    "id, day_id, time, raw_text, image_url, calories, protein, fat, carbs, "
    "parsed_foods, created_at, updated_at"
)


@dataclass
class SupabaseDayRepository(DayRepository):
    """Supabase implementation for days and meal entries."""

    client: Client

    def get_day_by_date(self, profile_id: UUID, day: date) -> DayRecord | None:
        """Return the day row for a calendar date."""
        response = (
            self.client.table("days")
            .select(_DAY_COLUMNS)
            .eq("profile_id", str(profile_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_day(response.data[0])

    def get_day(self, day_id: UUID) -> DayRecord | None:
        """Return a day row by id."""
        response = (
            self.client.table("days")
            .select(_DAY_COLUMNS)
            .eq("id", str(day_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_day(response.data[0])

    def create_day(
        self, profile_id: UUID, day: date, calorie_target: int
    ) -> DayRecord:
        """Insert an empty day row."""
        response = (
            self.client.table("days")
            .insert(
                {
                    "profile_id": str(profile_id),
                    "date": day.isoformat(),
                    "calorie_target": calorie_target,
                    "total_calories": 0,
                    "total_protein": 0,
                    "total_fat": 0,
                    "total_carbs": 0,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create day")
        return _parse_day(response.data[0])

    def update_day_totals(
        self, day_id: UUID, totals: MacroTotals, score: str, summary: str
    ) -> DayRecord:
        """Overwrite totals and evaluation of a day."""
        response = (
            self.client.table("days")
            .update(
                {
                    "total_calories": totals.calories,
                    "total_protein": totals.protein,
                    "total_fat": totals.fat,
                    "total_carbs": totals.carbs,
                    "day_score": score,
                    "ai_summary": summary,
                }
            )
            .eq("id", str(day_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update day totals")
        return _parse_day(response.data[0])

    def list_days(self, profile_id: UUID) -> list[DayRecord]:
        """Return all days ordered by date."""
        response = (
            self.client.table("days")
            .select(_DAY_COLUMNS)
            .eq("profile_id", str(profile_id))
            .order("date", desc=False)
            .execute()
        )
        return [_parse_day(row) for row in response.data or []]

    def list_recent_days(self, profile_id: UUID, limit: int) -> list[DayRecord]:
        """Return the latest days, newest first."""
        response = (
            self.client.table("days")
            .select(_DAY_COLUMNS)
            .eq("profile_id", str(profile_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_day(row) for row in response.data or []]

    def list_meal_entries(self, day_id: UUID) -> list[MealEntryRecord]:
        """Return meal entries of a day ordered by time."""
        response = (
            self.client.table("meal_entries")
            .select(_MEAL_COLUMNS)
            .eq("day_id", str(day_id))
            .order("time", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal_entry(self, meal_id: UUID) -> MealEntryRecord | None:
        """Return a meal entry by id."""
        response = (
            self.client.table("meal_entries")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal_entry(
        self, day_id: UUID, draft: MealEntryDraft
    ) -> MealEntryRecord:
        """Insert a meal entry row."""
        payload = _meal_payload(draft)
        payload["day_id"] = str(day_id)
        response = self.client.table("meal_entries").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal entry")
        return _parse_meal(response.data[0])

    def replace_meal_entry(
        self, meal_id: UUID, draft: MealEntryDraft
    ) -> MealEntryRecord:
        """Overwrite every content column of a meal entry."""
        payload = _meal_payload(draft)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("meal_entries")
            .update(payload)
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal entry")
        return _parse_meal(response.data[0])

    def delete_meal_entry(self, meal_id: UUID) -> None:
        """Delete a meal entry row."""
        self.client.table("meal_entries").delete().eq("id", str(meal_id)).execute()


def _meal_payload(draft: MealEntryDraft) -> dict[str, object]:
    return {
        "time": draft.time,
        "raw_text": draft.raw_text,
        "image_url": draft.image_url,
        "calories": draft.calories,
        "protein": draft.protein,
        "fat": draft.fat,
        "carbs": draft.carbs,
        "parsed_foods": [food.model_dump() for food in draft.foods],
    }


def _parse_day(row: dict[str, object]) -> DayRecord:
    return DayRecord(
        id=UUID(str(row["id"])),
        profile_id=UUID(str(row["profile_id"])),
        day=date.fromisoformat(str(row["date"])),
        calorie_target=int(row.get("calorie_target") or 0),
        total_calories=float(row.get("total_calories") or 0.0),
        total_protein=float(row.get("total_protein") or 0.0),
        total_fat=float(row.get("total_fat") or 0.0),
        total_carbs=float(row.get("total_carbs") or 0.0),
        day_score=row.get("day_score"),
        ai_summary=row.get("ai_summary"),
        created_at=_parse_datetime(row.get("created_at")),
    )


def _parse_meal(row: dict[str, object]) -> MealEntryRecord:
    raw_foods = row.get("parsed_foods") or []
    return MealEntryRecord(
        id=UUID(str(row["id"])),
        day_id=UUID(str(row["day_id"])),
        time=str(row.get("time", "")),
        raw_text=str(row.get("raw_text", "")),
        image_url=row.get("image_url"),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        fat=float(row.get("fat") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        foods=[ParsedFood.model_validate(food) for food in raw_foods],
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
