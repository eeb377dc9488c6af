"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_diary.domain.profile import ProfileDraft, ProfileRecord
from nutrition_diary.services.profiles import ProfileRepository

_COLUMNS = (
    "id, age, sex, height_cm, weight_kg, target_weight_kg, activity_level, "
    "daily_calorie_target, created_at, updated_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, profile_id: UUID) -> ProfileRecord | None:
        """Return the profile row, if present."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("id", str(profile_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def create_profile(
        self, profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
    ) -> ProfileRecord:
        """Insert the profile row and return it."""
        payload = _payload(draft, daily_calorie_target)
        payload["id"] = str(profile_id)
        response = self.client.table("profiles").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create profile in Supabase")
        return _parse_row(response.data[0])

    def update_profile(
        self, profile_id: UUID, draft: ProfileDraft, daily_calorie_target: int
    ) -> ProfileRecord:
        """Update the profile row in place and return it."""
        payload = _payload(draft, daily_calorie_target)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("profiles")
            .update(payload)
            .eq("id", str(profile_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update profile in Supabase")
        return _parse_row(response.data[0])


def _payload(draft: ProfileDraft, daily_calorie_target: int) -> dict[str, object]:
    return {
        "age": draft.age,
        "sex": draft.sex,
        "height_cm": draft.height_cm,
        "weight_kg": draft.weight_kg,
        "target_weight_kg": draft.target_weight_kg,
        "activity_level": draft.activity_level,
        "daily_calorie_target": daily_calorie_target,
    }


def _parse_row(row: dict[str, object]) -> ProfileRecord:
    return ProfileRecord(
        id=UUID(str(row["id"])),
        age=int(row["age"]),
        sex=str(row["sex"]),
        height_cm=float(row["height_cm"]),
        weight_kg=float(row["weight_kg"]),
        target_weight_kg=float(row["target_weight_kg"]),
        activity_level=str(row["activity_level"]),
        daily_calorie_target=int(row["daily_calorie_target"]),
        created_at=_parse_datetime(row.get("created_at")),
        updated_at=_parse_datetime(row.get("updated_at")),
    )


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
