"""Supabase repository for gamification state."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutrition_diary.domain.gamification import GamificationRecord
from nutrition_diary.services.gamification import GamificationRepository

_COLUMNS = (
    "id, profile_id, current_streak_days, longest_streak_days, xp, level, "
    "achievements, last_active_date"
)


@dataclass
class SupabaseGamificationRepository(GamificationRepository):
    """Supabase implementation for gamification state."""

    client: Client

    def get_state(self, profile_id: UUID) -> GamificationRecord | None:
        """Return the state row for a profile."""
        response = (
            self.client.table("gamification_states")
            .select(_COLUMNS)
            .eq("profile_id", str(profile_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_state(self, profile_id: UUID) -> GamificationRecord:
        """Insert a zeroed state row."""
        response = (
            self.client.table("gamification_states")
            .insert(
                {
                    "profile_id": str(profile_id),
                    "current_streak_days": 0,
                    "longest_streak_days": 0,
                    "xp": 0,
                    "level": 1,
                    "achievements": [],
                    "last_active_date": None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gamification state")
        return _parse_row(response.data[0])

    def save_state(self, state: GamificationRecord) -> None:
        """Write every gamification field in a single update."""
        self.client.table("gamification_states").update(
            {
                "current_streak_days": state.current_streak_days,
                "longest_streak_days": state.longest_streak_days,
                "xp": state.xp,
                "level": state.level,
                "achievements": sorted(state.achievements),
                "last_active_date": (
                    state.last_active_date.isoformat()
                    if state.last_active_date
                    else None
                ),
            }
        ).eq("id", str(state.id)).execute()


def _parse_row(row: dict[str, object]) -> GamificationRecord:
    last_active_raw = row.get("last_active_date")
    return GamificationRecord(
        id=UUID(str(row["id"])),
        profile_id=UUID(str(row["profile_id"])),
        current_streak_days=int(row.get("current_streak_days") or 0),
        longest_streak_days=int(row.get("longest_streak_days") or 0),
        xp=int(row.get("xp") or 0),
        level=int(row.get("level") or 1),
        achievements=frozenset(row.get("achievements") or []),
        last_active_date=(
            date.fromisoformat(last_active_raw)
            if isinstance(last_active_raw, str) and last_active_raw
            else None
        ),
    )
