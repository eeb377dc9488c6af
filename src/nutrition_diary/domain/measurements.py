"""Body measurement domain models."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class MeasurementDraft:
    """Measurement values submitted for a date."""

    day: date
    weight_kg: float
    waist_cm: float | None = None
    chest_cm: float | None = None
    hip_cm: float | None = None
    notes: str | None = None


@dataclass(frozen=True)
class MeasurementRecord:
    """Persisted body measurement, at most one per profile and date."""

    id: UUID
    profile_id: UUID
    day: date
    weight_kg: float
    waist_cm: float | None = None
    chest_cm: float | None = None
    hip_cm: float | None = None
    notes: str | None = None
    created_at: datetime | None = None
