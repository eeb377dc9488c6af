"""Supabase repository for body measurements."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutrition_diary.domain.measurements import MeasurementDraft, MeasurementRecord
from nutrition_diary.services.measurements import MeasurementRepository

_COLUMNS = (
    "id, profile_id, date, weight_kg, waist_cm, chest_cm, hip_cm, notes, created_at"
)


@dataclass
class SupabaseMeasurementRepository(MeasurementRepository):
    """Supabase implementation for body measurements."""

    client: Client

    def list_measurements(self, profile_id: UUID) -> list[MeasurementRecord]:
        """Return measurements ordered by date."""
        response = (
            self.client.table("body_measurements")
            .select(_COLUMNS)
            .eq("profile_id", str(profile_id))
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_measurement(self, measurement_id: UUID) -> MeasurementRecord | None:
        """Return a measurement by id."""
        response = (
            self.client.table("body_measurements")
            .select(_COLUMNS)
            .eq("id", str(measurement_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def get_measurement_by_date(
        self, profile_id: UUID, day: date
    ) -> MeasurementRecord | None:
        """Return the measurement for a date."""
        response = (
            self.client.table("body_measurements")
            .select(_COLUMNS)
            .eq("profile_id", str(profile_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_measurement(
        self, profile_id: UUID, draft: MeasurementDraft
    ) -> MeasurementRecord:
        """Insert a measurement row."""
        payload = _payload(draft)
        payload["profile_id"] = str(profile_id)
        response = self.client.table("body_measurements").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create measurement")
        return _parse_row(response.data[0])

    def update_measurement(
        self, measurement_id: UUID, draft: MeasurementDraft
    ) -> MeasurementRecord:
        """Overwrite measurement values."""
        response = (
            self.client.table("body_measurements")
            .update(_payload(draft))
            .eq("id", str(measurement_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update measurement")
        return _parse_row(response.data[0])

    def delete_measurement(self, measurement_id: UUID) -> None:
        """Delete a measurement row."""
        self.client.table("body_measurements").delete().eq(
            "id", str(measurement_id)
        ).execute()


def _payload(draft: MeasurementDraft) -> dict[str, object]:
    return {
        "date": draft.day.isoformat(),
        "weight_kg": draft.weight_kg,
        "waist_cm": draft.waist_cm,
        "chest_cm": draft.chest_cm,
        "hip_cm": draft.hip_cm,
        "notes": draft.notes,
    }


def _parse_row(row: dict[str, object]) -> MeasurementRecord:
    created_at_raw = row.get("created_at")
    return MeasurementRecord(
        id=UUID(str(row["id"])),
        profile_id=UUID(str(row["profile_id"])),
        day=date.fromisoformat(str(row["date"])),
        weight_kg=float(row["weight_kg"]),
        waist_cm=_optional_float(row.get("waist_cm")),
        chest_cm=_optional_float(row.get("chest_cm")),
        hip_cm=_optional_float(row.get("hip_cm")),
        notes=row.get("notes"),
        created_at=(
            datetime.fromisoformat(created_at_raw)
            if isinstance(created_at_raw, str) and created_at_raw
            else None
        ),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
