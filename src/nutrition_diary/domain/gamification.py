"""Gamification domain models."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class GamificationRecord:
    """Streak, XP and achievement state for a profile."""

    id: UUID
    profile_id: UUID
    current_streak_days: int = 0
    longest_streak_days: int = 0
    xp: int = 0
    level: int = 1
    achievements: frozenset[str] = field(default_factory=frozenset)
    last_active_date: date | None = None


@dataclass(frozen=True)
class Achievement:
    """Catalogue entry describing an achievement."""

    id: str
    title: str
    description: str
