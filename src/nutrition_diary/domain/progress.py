"""Progress summary domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class ProgressStats:
    """Aggregate statistics the progress narrative is generated from."""

    start_date: date
    start_weight: float
    current_weight: float
    target_weight: float
    average_calories: float
    days_within_target: int
    total_days: int
    streak: int
    level: int
    xp: int
    achievements: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ProgressSummaryRecord:
    """Cached progress narrative, overwritten on each recompute."""

    id: UUID
    profile_id: UUID
    last_computed_at: datetime
    summary_text: str
    overall_score: str
    details: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None
