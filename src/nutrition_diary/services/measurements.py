"""Body measurement service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_diary.domain.measurements import MeasurementDraft, MeasurementRecord
from nutrition_diary.services.errors import NotFoundError
from nutrition_diary.services.profiles import ProfileRepository


class MeasurementRepository(Protocol):
    """Persistence interface for body measurements."""

    def list_measurements(self, profile_id: UUID) -> list[MeasurementRecord]:
        """Return all measurements ordered by date ascending."""

    def get_measurement(self, measurement_id: UUID) -> MeasurementRecord | None:
        """Return a measurement by id."""

    def get_measurement_by_date(
        self, profile_id: UUID, day: date
    ) -> MeasurementRecord | None:
        """Return the measurement recorded for a date, if any."""

    def create_measurement(
        self, profile_id: UUID, draft: MeasurementDraft
    ) -> MeasurementRecord:
        """Create a measurement row."""

    def update_measurement(
        self, measurement_id: UUID, draft: MeasurementDraft
    ) -> MeasurementRecord:
        """Overwrite the values of a measurement."""

    def delete_measurement(self, measurement_id: UUID) -> None:
        """Delete a measurement."""


@dataclass
class MeasurementService:
    """Records and lists body measurements for the profile."""

    repository: MeasurementRepository
    profile_repository: ProfileRepository

    def list_measurements(self, profile_id: UUID) -> list[MeasurementRecord]:
        """Return the measurement history of the profile."""
        self._require_profile(profile_id)
        return self.repository.list_measurements(profile_id)

    def record(
        self, profile_id: UUID, draft: MeasurementDraft
    ) -> tuple[MeasurementRecord, bool]:
        """Store a measurement; a second one for the same date overwrites it.

        Returns the stored record and whether it was newly created.
        """
        self._require_profile(profile_id)
        existing = self.repository.get_measurement_by_date(profile_id, draft.day)
        if existing:
            return self.repository.update_measurement(existing.id, draft), False
        return self.repository.create_measurement(profile_id, draft), True

    def delete(self, measurement_id: UUID) -> None:
        """Delete a measurement by id."""
        if self.repository.get_measurement(measurement_id) is None:
            raise NotFoundError("Measurement not found")
        self.repository.delete_measurement(measurement_id)

    def _require_profile(self, profile_id: UUID) -> None:
        if self.profile_repository.get_profile(profile_id) is None:
            raise NotFoundError("Profile not found")


def weight_lost(measurements: list[MeasurementRecord]) -> float:
    """Return kilograms lost between the first and latest measurement."""
    if not measurements:
        return 0.0
    return max(0.0, measurements[0].weight_kg - measurements[-1].weight_kg)
