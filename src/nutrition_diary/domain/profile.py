"""Domain models for the user profile."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

# Single-user deployment: the one profile lives under a well-known key.
DEFAULT_PROFILE_ID = UUID("00000000-0000-0000-0000-000000000001")


@dataclass(frozen=True)
class ProfileDraft:
    """Biometric inputs submitted during onboarding or settings."""

    age: int
    sex: str
    height_cm: float
    weight_kg: float
    target_weight_kg: float
    activity_level: str


@dataclass(frozen=True)
class ProfileRecord:
    """Persisted profile with its computed calorie target."""

    id: UUID
    age: int
    sex: str
    height_cm: float
    weight_kg: float
    target_weight_kg: float
    activity_level: str
    daily_calorie_target: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
