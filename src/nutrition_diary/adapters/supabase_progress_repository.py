"""Supabase repository for the cached progress summary."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_diary.domain.progress import ProgressSummaryRecord
from nutrition_diary.services.progress import ProgressRepository

_COLUMNS = (
    "id, profile_id, last_computed_at, summary_text, overall_score, details, "
    "created_at"
)


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    """Supabase implementation for progress summaries."""

    client: Client

    def get_summary(self, profile_id: UUID) -> ProgressSummaryRecord | None:
        """Return the cached summary for a profile."""
        response = (
            self.client.table("progress_summaries")
            .select(_COLUMNS)
            .eq("profile_id", str(profile_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_summary(
        self,
        profile_id: UUID,
        *,
        computed_at: datetime,
        summary_text: str,
        overall_score: str,
        details: dict[str, object],
    ) -> ProgressSummaryRecord:
        """Insert or overwrite the summary row for a profile."""
        response = (
            self.client.table("progress_summaries")
            .upsert(
                {
                    "profile_id": str(profile_id),
                    "last_computed_at": computed_at.isoformat(),
                    "summary_text": summary_text,
                    "overall_score": overall_score,
                    "details": details,
                },
                on_conflict="profile_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save progress summary")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> ProgressSummaryRecord:
    created_at_raw = row.get("created_at")
    details = row.get("details")
    return ProgressSummaryRecord(
        id=UUID(str(row["id"])),
        profile_id=UUID(str(row["profile_id"])),
        last_computed_at=datetime.fromisoformat(str(row["last_computed_at"])),
        summary_text=str(row.get("summary_text", "")),
        overall_score=str(row.get("overall_score", "")),
        details=details if isinstance(details, dict) else {},
        created_at=(
            datetime.fromisoformat(created_at_raw)
            if isinstance(created_at_raw, str) and created_at_raw
            else None
        ),
    )
