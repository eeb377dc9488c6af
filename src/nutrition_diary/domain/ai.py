"""Structured results returned by the AI gateway."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Confidence = Literal["low", "medium", "high"]
DayScore = Literal["excellent", "ok", "overbudget"]


class ParsedFood(BaseModel):
    """Single food item recognised in a meal description."""

    name: str
    grams: float = Field(ge=0)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)
    confidence: Confidence = "medium"


class MealAnalysis(BaseModel):
    """Nutrition breakdown for a free-text meal."""

    foods: list[ParsedFood]
    total_calories: float = Field(alias="totalCalories", ge=0)
    total_protein: float = Field(alias="totalProtein", ge=0)
    total_fat: float = Field(alias="totalFat", ge=0)
    total_carbs: float = Field(alias="totalCarbs", ge=0)
    message: str = ""

    model_config = ConfigDict(populate_by_name=True)


class DayEvaluation(BaseModel):
    """Qualitative score and comment for a day."""

    score: DayScore
    comment: str


class ProgressNarrative(BaseModel):
    """AI narrative about overall progress."""

    overall_score: str = Field(alias="overallScore")
    summary_text: str = Field(alias="summaryText")
    strengths: list[str] = Field(default_factory=list)
    areas_to_improve: list[str] = Field(default_factory=list, alias="areasToImprove")

    model_config = ConfigDict(populate_by_name=True)
