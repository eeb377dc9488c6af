"""AI gateway for meal parsing and progress narratives."""

import json
import logging
import random
import re
from dataclasses import dataclass, field
from typing import Protocol

from nutrition_diary.domain.ai import (
    DayEvaluation,
    MealAnalysis,
    ParsedFood,
    ProgressNarrative,
)
from nutrition_diary.domain.days import MacroTotals
from nutrition_diary.domain.progress import ProgressStats
from nutrition_diary.services.calories import (
    EXCELLENT,
    OVERBUDGET,
    determine_day_score,
)

_logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_QUEST_LINE = re.compile(r"QUEST:\s*(.+)")

FALLBACK_NAME_LENGTH = 50

DAILY_QUESTS = (
    "Drink 8 glasses of water today",
    "Add vegetables to one of your meals",
    "Have a piece of fruit as a snack",
    "Try a new healthy food",
    "Eat breakfast within an hour of waking up",
    "Add protein to every meal",
    "Swap a sweet snack for fruit",
    "Eat slowly and without your phone",
)

_DAY_COMMENTS = {
    EXCELLENT: "Great day! You are within your calorie target. Keep it up!",
    OVERBUDGET: "A few calories over today. No worries, tomorrow is a new day!",
}
_DEFAULT_DAY_COMMENT = "Good day! Remember to eat regularly."

DISCLAIMER = (
    "You are a friendly nutrition assistant, not a doctor, and you never give "
    "medical advice."
)


class AIGateway(Protocol):
    """Capability interface for AI-backed enrichment."""

    async def analyze_meal(
        self, text: str, image_url: str | None = None
    ) -> MealAnalysis:
        """Turn a free-text meal into a nutrition breakdown."""

    async def evaluate_day(
        self, totals: MacroTotals, target: int, meal_texts: list[str]
    ) -> DayEvaluation:
        """Score a day and comment on it."""

    async def generate_progress_summary(
        self, stats: ProgressStats
    ) -> ProgressNarrative:
        """Write a narrative about overall progress."""

    async def generate_daily_quest(self) -> str:
        """Suggest one small healthy habit for today."""


class TextClient(Protocol):
    """Interface for an LLM returning free text for a prompt."""

    async def complete(self, *, model: str, prompt: str) -> str:
        """Return the model's reply to a prompt."""


@dataclass
class FallbackAIGateway(AIGateway):
    """Deterministic gateway used when no AI provider is available."""

    rng: random.Random = field(default_factory=random.Random)

    async def analyze_meal(
        self, text: str, image_url: str | None = None
    ) -> MealAnalysis:
        """Return a fixed low-confidence estimate for any meal."""
        return fallback_meal_analysis(text)

    async def evaluate_day(
        self, totals: MacroTotals, target: int, meal_texts: list[str]
    ) -> DayEvaluation:
        """Score the day arithmetically with a templated comment."""
        return fallback_day_evaluation(totals.calories, target)

    async def generate_progress_summary(
        self, stats: ProgressStats
    ) -> ProgressNarrative:
        """Return a fixed encouraging summary."""
        return fallback_progress_summary()

    async def generate_daily_quest(self) -> str:
        """Pick a random quest from the fixed list."""
        return self.rng.choice(DAILY_QUESTS)


@dataclass
class LLMAIGateway(AIGateway):
    """Gateway prompting an LLM and falling back on any failure."""

    client: TextClient
    model: str
    fallback: FallbackAIGateway = field(default_factory=FallbackAIGateway)

    async def analyze_meal(
        self, text: str, image_url: str | None = None
    ) -> MealAnalysis:
        """Ask the model for foods, grams and macros in the meal."""
        prompt = _meal_prompt(text, image_url)
        try:
            reply = await self.client.complete(model=self.model, prompt=prompt)
            return MealAnalysis.model_validate(extract_json_object(reply))
        except Exception as exc:
            _logger.warning("Meal analysis failed, using fallback: %s", exc)
            return await self.fallback.analyze_meal(text, image_url)

    async def evaluate_day(
        self, totals: MacroTotals, target: int, meal_texts: list[str]
    ) -> DayEvaluation:
        """Ask the model to comment on the day; the score is always computed."""
        prompt = _day_prompt(totals, target, meal_texts)
        try:
            reply = await self.client.complete(model=self.model, prompt=prompt)
            evaluation = DayEvaluation.model_validate(extract_json_object(reply))
            return evaluation.model_copy(
                update={"score": determine_day_score(totals.calories, target)}
            )
        except Exception as exc:
            _logger.warning("Day evaluation failed, using fallback: %s", exc)
            return await self.fallback.evaluate_day(totals, target, meal_texts)

    async def generate_progress_summary(
        self, stats: ProgressStats
    ) -> ProgressNarrative:
        """Ask the model for an overall progress narrative."""
        prompt = _progress_prompt(stats)
        try:
            reply = await self.client.complete(model=self.model, prompt=prompt)
            return ProgressNarrative.model_validate(extract_json_object(reply))
        except Exception as exc:
            _logger.warning("Progress summary failed, using fallback: %s", exc)
            return await self.fallback.generate_progress_summary(stats)

    async def generate_daily_quest(self) -> str:
        """Ask the model for one small, safe habit to try today."""
        try:
            reply = await self.client.complete(model=self.model, prompt=_QUEST_PROMPT)
        except Exception as exc:
            _logger.warning("Daily quest failed, using fallback: %s", exc)
            return await self.fallback.generate_daily_quest()
        match = _QUEST_LINE.search(reply)
        if match is None:
            _logger.warning("Daily quest reply had no QUEST line, using fallback")
            return await self.fallback.generate_daily_quest()
        return match.group(1).strip()


def extract_json_object(text: str) -> dict[str, object]:
    """Return the JSON object embedded in a reply, ignoring surrounding text."""
    match = _JSON_OBJECT.search(text)
    if match is None:
        raise ValueError("No JSON object in AI reply")
    parsed = json.loads(match.group(0))
    if not isinstance(parsed, dict):
        raise ValueError("AI reply is not a JSON object")
    return parsed


def fallback_meal_analysis(text: str) -> MealAnalysis:
    food = ParsedFood(
        name=text[:FALLBACK_NAME_LENGTH],
        grams=100,
        calories=200,
        protein=10,
        fat=8,
        carbs=20,
        confidence="low",
    )
    return MealAnalysis(
        foods=[food],
        total_calories=200,
        total_protein=10,
        total_fat=8,
        total_carbs=20,
        message="Logged! (AI analysis is temporarily unavailable)",
    )


def fallback_day_evaluation(total_calories: float, target: int) -> DayEvaluation:
    score = determine_day_score(total_calories, target)
    return DayEvaluation(
        score=score, comment=_DAY_COMMENTS.get(score, _DEFAULT_DAY_COMMENT)
    )


def fallback_progress_summary() -> ProgressNarrative:
    return ProgressNarrative(
        overall_score="good",
        summary_text=(
            "You are doing a great job tracking your nutrition! Every day is a "
            "step towards your goal. Keep logging meals and tracking progress."
        ),
        strengths=["Tracks nutrition regularly", "Sets goals"],
        areas_to_improve=["Keep tracking consistently", "Add more detail to meals"],
    )


def _meal_prompt(text: str, image_url: str | None) -> str:
    image_line = f"Photo of the meal: {image_url}\n" if image_url else ""
    return (
        f"{DISCLAIMER}\n\n"
        "Analyse the meal description below and list each food with an "
        "estimated weight in grams, calories, protein, fat and carbs, plus your "
        "confidence (low, medium or high). Estimate the weight from context "
        "when it is not given.\n\n"
        f'Meal: "{text}"\n'
        f"{image_line}\n"
        "Reply with JSON only:\n"
        '{"foods": [{"name": str, "grams": number, "calories": number, '
        '"protein": number, "fat": number, "carbs": number, '
        '"confidence": "low|medium|high"}], "totalCalories": number, '
        '"totalProtein": number, "totalFat": number, "totalCarbs": number, '
        '"message": "short friendly note about what was logged"}'
    )


def _day_prompt(totals: MacroTotals, target: int, meal_texts: list[str]) -> str:
    return (
        f"{DISCLAIMER}\n\n"
        "Rate the user's day and give a friendly comment:\n"
        f"- Calories eaten: {round(totals.calories)}\n"
        f"- Daily target: {target}\n"
        f"- Protein {round(totals.protein)} g, fat {round(totals.fat)} g, "
        f"carbs {round(totals.carbs)} g\n"
        f"- Meals: {', '.join(meal_texts)}\n\n"
        "Reply with JSON only:\n"
        '{"score": "excellent|ok|overbudget", '
        '"comment": "2-4 friendly sentences with one tip"}'
    )


def _progress_prompt(stats: ProgressStats) -> str:
    within_share = (
        round(stats.days_within_target / stats.total_days * 100)
        if stats.total_days
        else 0
    )
    return (
        f"{DISCLAIMER}\n\n"
        "Assess the user's overall progress:\n"
        f"- Tracking since: {stats.start_date.isoformat()}\n"
        f"- Start weight: {stats.start_weight} kg\n"
        f"- Current weight: {stats.current_weight} kg\n"
        f"- Target weight: {stats.target_weight} kg\n"
        f"- Average daily calories: {round(stats.average_calories)}\n"
        f"- Days within target: {stats.days_within_target}/{stats.total_days} "
        f"({within_share}%)\n"
        f"- Current streak: {stats.streak} days\n"
        f"- Level: {stats.level} ({stats.xp} XP)\n"
        f"- Achievements: {', '.join(stats.achievements) or 'none yet'}\n\n"
        "Reply with JSON only:\n"
        '{"overallScore": "excellent|good|fair|room to grow", '
        '"summaryText": "3-4 friendly paragraphs", '
        '"strengths": [str], "areasToImprove": [str]}'
    )


_QUEST_PROMPT = (
    "You help people build healthy eating habits. Suggest ONE simple, "
    "non-extreme task for today. No fasting and no restrictive diets, only "
    "positive habits that are easy to do.\n\n"
    "Reply in plain text in this format:\n"
    "QUEST: <task>"
)
