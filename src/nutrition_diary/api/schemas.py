"""Request models for the HTTP API."""

from datetime import date
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from nutrition_diary.domain.measurements import MeasurementDraft
from nutrition_diary.domain.profile import ProfileDraft

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

MIN_AGE = 10
MAX_AGE = 100
MIN_HEIGHT_CM = 130
MAX_HEIGHT_CM = 220
MIN_WEIGHT_KG = 30
MAX_WEIGHT_KG = 200


class ProfileRequest(BaseModel):
    """Onboarding or settings submission."""

    age: int = Field(ge=MIN_AGE, le=MAX_AGE)
    sex: Literal["male", "female"] = Field(
        validation_alias=AliasChoices("sex", "gender")
    )
    height_cm: float = Field(
        ge=MIN_HEIGHT_CM,
        le=MAX_HEIGHT_CM,
        validation_alias=AliasChoices("heightCm", "height_cm"),
    )
    weight_kg: float = Field(
        ge=MIN_WEIGHT_KG,
        le=MAX_WEIGHT_KG,
        validation_alias=AliasChoices("weightKg", "weight_kg"),
    )
    target_weight_kg: float = Field(
        ge=MIN_WEIGHT_KG,
        le=MAX_WEIGHT_KG,
        validation_alias=AliasChoices("targetWeightKg", "target_weight_kg"),
    )
    activity_level: str = Field(
        min_length=1, validation_alias=AliasChoices("activityLevel", "activity_level")
    )

    def to_draft(self) -> ProfileDraft:
        return ProfileDraft(
            age=self.age,
            sex=self.sex,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            target_weight_kg=self.target_weight_kg,
            activity_level=self.activity_level,
        )


class AddMealRequest(BaseModel):
    """A meal described in free text."""

    time: str = Field(pattern=_TIME_PATTERN)
    raw_text: str = Field(
        min_length=1, validation_alias=AliasChoices("rawText", "raw_text")
    )
    image_url: str | None = Field(
        default=None, validation_alias=AliasChoices("imageUrl", "image_url")
    )


class EditMealRequest(BaseModel):
    """Partial meal update; omitted fields keep their values."""

    time: str | None = Field(default=None, pattern=_TIME_PATTERN)
    raw_text: str | None = Field(
        default=None,
        min_length=1,
        validation_alias=AliasChoices("rawText", "raw_text"),
    )


class MeasurementRequest(BaseModel):
    """Body measurement for a date."""

    model_config = ConfigDict(populate_by_name=True)

    day: date = Field(alias="date")
    weight_kg: float = Field(
        gt=0, validation_alias=AliasChoices("weightKg", "weight_kg")
    )
    waist_cm: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("waistCm", "waist_cm")
    )
    chest_cm: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("chestCm", "chest_cm")
    )
    hip_cm: float | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("hipsCm", "hipCm", "hip_cm"),
    )
    notes: str | None = None

    def to_draft(self) -> MeasurementDraft:
        return MeasurementDraft(
            day=self.day,
            weight_kg=self.weight_kg,
            waist_cm=self.waist_cm,
            chest_cm=self.chest_cm,
            hip_cm=self.hip_cm,
            notes=self.notes or None,
        )
