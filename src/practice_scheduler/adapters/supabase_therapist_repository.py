"""Supabase-backed therapist repository."""

from dataclasses import dataclass

from supabase import Client

from practice_scheduler.domain.models import Role, TherapistRecord
from practice_scheduler.services.records import TherapistRepository


@dataclass
class SupabaseTherapistRepository(TherapistRepository):
    """Supabase implementation for therapist accounts."""

    client: Client

    def get_therapist(self, therapist_id: str) -> TherapistRecord | None:
        """Return a therapist by id, if present."""
        response = (
            self.client.table("therapists")
            .select("id, username, name, role")
            .eq("id", therapist_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _therapist_from_row(response.data[0])


def _therapist_from_row(row: dict) -> TherapistRecord:
    return TherapistRecord(
        id=row["id"],
        username=row["username"],
        name=row.get("name"),
        role=Role.parse(row.get("role")),
    )
